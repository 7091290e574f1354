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

"""Jinja2 loader that resolves dotted view names against ordered search paths.

Resolution of ``finder.find("alias.source")`` with paths ``[a, b]`` and
extensions ``["html.j2", "j2"]`` tries, in order::

    a/alias/source.html.j2
    a/alias/source.j2
    b/alias/source.html.j2
    b/alias/source.j2

A name of the form ``"mail::welcome"`` is looked up only in the hint paths
registered for the ``mail`` namespace.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from jinja2 import BaseLoader, Environment, TemplateNotFound

logger = logging.getLogger(__name__)

HINT_DELIMITER = "::"


class ViewFinder(BaseLoader):
    """Jinja2 loader over an ordered list of view directories.

    Args:
        paths: Search paths, earliest first.
        extensions: File suffixes recognised for a view, without the dot.
    """

    def __init__(self, paths: Iterable[str], extensions: Iterable[str]) -> None:
        self.paths = [str(p) for p in paths]
        self.extensions = list(extensions)
        self.hints: dict[str, list[str]] = {}
        self._views: dict[str, Path] = {}

    def copy(self) -> ViewFinder:
        finder = ViewFinder(self.paths, self.extensions)
        finder.hints = {ns: list(hints) for ns, hints in self.hints.items()}
        return finder

    def add_location(self, path: str) -> None:
        self.paths.append(str(path))
        self.flush()

    def prepend_location(self, path: str) -> None:
        self.paths.insert(0, str(path))
        self.flush()

    def add_extension(self, extension: str) -> None:
        if extension not in self.extensions:
            self.extensions.append(extension)
            self.flush()

    def add_namespace(
        self, namespace: str, hints: str | Iterable[str], prepend: bool = False,
    ) -> None:
        hints = [str(hints)] if isinstance(hints, (str, Path)) else [str(h) for h in hints]
        existing = self.hints.get(namespace, [])
        self.hints[namespace] = hints + existing if prepend else existing + hints
        self.flush()

    def flush(self) -> None:
        """Forget previously resolved view files."""
        self._views.clear()

    def find(self, name: str) -> Path:
        """Return the file for view *name*.

        Raises ``jinja2.TemplateNotFound`` when no search path has it.
        """
        cached = self._views.get(name)
        if cached is not None and cached.is_file():
            return cached

        if HINT_DELIMITER in name:
            namespace, _, view = name.partition(HINT_DELIMITER)
            if namespace not in self.hints:
                raise TemplateNotFound(name, f"No hint path defined for [{namespace}].")
            path = self._find_in_paths(name, view, self.hints[namespace])
        else:
            path = self._find_in_paths(name, name, self.paths)

        self._views[name] = path
        return path

    def _find_in_paths(self, name: str, view: str, paths: list[str]) -> Path:
        relative = view.replace(".", "/")
        for directory in paths:
            for extension in self.extensions:
                candidate = Path(directory) / f"{relative}.{extension}"
                if candidate.is_file():
                    return candidate
        raise TemplateNotFound(name, f"View [{name}] not found.")

    def get_source(
        self, environment: Environment, template: str,
    ) -> tuple[str, str, callable]:
        path = self.find(template)
        source = path.read_text(encoding="utf-8")
        mtime = path.stat().st_mtime
        return source, str(path), lambda: path.is_file() and path.stat().st_mtime == mtime
