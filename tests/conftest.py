# viewservice — Jinja2 view rendering service for server-side HTML
# Copyright (C) 2026 The viewservice contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Shared fixtures for viewservice tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from viewservice.config import CACHE_PATH_ENV_VAR
from viewservice.service import ViewService, reset_view_service

VIEWS = Path(__file__).parent / "fixtures" / "views"


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    monkeypatch.delenv(CACHE_PATH_ENV_VAR, raising=False)
    reset_view_service()
    yield
    reset_view_service()


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def service(cache_dir):
    return ViewService([str(VIEWS)], str(cache_dir))
