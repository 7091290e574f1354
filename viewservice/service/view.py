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

"""Renderable views and view composer bindings."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pkgutil import resolve_name
from typing import TYPE_CHECKING, Any

from jinja2 import Template

if TYPE_CHECKING:
    from viewservice.service.engine import ViewService

Composer = Callable[..., Any] | str


@dataclass(frozen=True)
class ComposerBinding:
    """A composer callback bound to a view name or wildcard pattern.

    Attributes:
        pattern: View name, or shell-style pattern such as ``"alias.*"``.
        callback: Callable receiving the :class:`View`, or a
            ``"module:attr"`` string naming one.  A named class is
            instantiated and its ``compose(view)`` method called.
    """

    pattern: str
    callback: Composer

    def matches(self, view_name: str) -> bool:
        return fnmatchcase(view_name, self.pattern)

    def compose(self, view: View) -> None:
        callback = self.callback
        if isinstance(callback, str):
            callback = resolve_name(callback)
            if isinstance(callback, type):
                callback = callback().compose
        callback(view)


class View:
    """A resolved view plus its data, ready to render.

    Composers bound to the view's name run at render time and may add data
    through :meth:`with_data`.
    """

    def __init__(
        self,
        factory: ViewService,
        name: str,
        template: Template,
        data: Mapping[str, Any] | None = None,
    ) -> None:
        self.factory = factory
        self.name = name
        self.template = template
        self.data: dict[str, Any] = dict(data or {})

    @property
    def path(self) -> str | None:
        return self.template.filename

    def with_data(self, key: str | Mapping[str, Any], value: Any = None) -> View:
        """Add one key, or every key of a mapping, to the view data."""
        if isinstance(key, Mapping):
            self.data.update(key)
        else:
            self.data[key] = value
        return self

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def render(self) -> str:
        self.factory.call_composers(self)
        return self.template.render({**self.factory.get_shared(), **self.data})

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"View(name={self.name!r}, path={self.path!r})"
