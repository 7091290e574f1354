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

"""Custom ``@directive`` syntax for views.

A directive is written ``@name`` or ``@name(expression)`` anywhere in a view.
Before Jinja2 lexes the source, every directive whose name is registered is
replaced by whatever its handler returns for the raw expression text, so a
handler emits ordinary Jinja2 source::

    service.register_directive(
        "datetime",
        lambda expr: "{{ (%s).strftime('%%B %%d, %%Y') }}" % expr,
    )

``@@name`` renders a literal ``@name``.  Unregistered names and ``@`` signs
inside words (e-mail addresses) are left alone.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping

from jinja2 import Environment
from jinja2.ext import Extension

DirectiveHandler = Callable[[str | None], str]

_DIRECTIVE_PATTERN = re.compile(r"\B@(@?\w+)([ \t]*)(\()?")


def _find_closing_paren(source: str, start: int) -> int | None:
    """Return the index of the ``)`` matching the ``(`` at *start*."""
    depth = 0
    quote = None
    i = start
    while i < len(source):
        char = source[i]
        if quote:
            if char == "\\":
                i += 1
            elif char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return None


def compile_directives(source: str, directives: Mapping[str, DirectiveHandler]) -> str:
    """Expand registered directives in *source*."""
    if "@" not in source:
        return source

    parts: list[str] = []
    pos = 0
    while True:
        match = _DIRECTIVE_PATTERN.search(source, pos)
        if match is None:
            break
        name = match.group(1)

        if name.startswith("@"):
            parts.append(source[pos:match.start()])
            parts.append(name)
            pos = match.end(1)
            continue

        handler = directives.get(name)
        if handler is None:
            parts.append(source[pos:match.end(1)])
            pos = match.end(1)
            continue

        expression = None
        end = match.end(1)
        if match.group(3):
            close = _find_closing_paren(source, match.start(3))
            if close is not None:
                expression = source[match.end(3):close]
                end = close + 1

        parts.append(source[pos:match.start()])
        parts.append(handler(expression))
        pos = end

    parts.append(source[pos:])
    return "".join(parts)


class DirectiveExtension(Extension):
    """Jinja2 extension that expands ``@directives`` before lexing.

    Handlers are looked up on the owning view service at compile time, so
    directives registered after the environment was built still apply.
    """

    def __init__(self, environment: Environment) -> None:
        super().__init__(environment)
        environment.extend(view_factory=None)

    def preprocess(self, source: str, name: str | None, filename: str | None = None) -> str:
        factory = self.environment.view_factory
        if factory is None:
            return source
        return compile_directives(source, factory.get_directives())
