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

"""viewservice — a small facade over Jinja2 for server-side HTML views."""

from viewservice.error import CodeSnippet, ViewError
from viewservice.exceptions import (
    ConfigurationError,
    ErrorContextError,
    FileAccessError,
    ViewServiceError,
)
from viewservice.service import (
    ComposerBinding,
    View,
    ViewFinder,
    ViewService,
    get_view_service,
    reset_view_service,
)

__all__ = [
    "CodeSnippet",
    "ComposerBinding",
    "ConfigurationError",
    "ErrorContextError",
    "FileAccessError",
    "View",
    "ViewError",
    "ViewFinder",
    "ViewService",
    "ViewServiceError",
    "get_view_service",
    "reset_view_service",
]
