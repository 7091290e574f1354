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

"""On-disk cache of compiled views.

Compiled bytecode is keyed on the view source after directive expansion,
which is the text Jinja2 actually compiles.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from jinja2 import FileSystemBytecodeCache

from viewservice.service.directives import DirectiveHandler, compile_directives

CACHE_FILE_PATTERN = "__view_%s.cache"


class CompiledViewCache(FileSystemBytecodeCache):
    """Jinja2 bytecode cache in the view service's cache directory."""

    def __init__(self, directory: str | Path, directives: Mapping[str, DirectiveHandler]) -> None:
        super().__init__(str(directory), CACHE_FILE_PATTERN)
        self._directives = directives

    def get_source_checksum(self, source: str) -> str:
        return super().get_source_checksum(compile_directives(source, self._directives))
