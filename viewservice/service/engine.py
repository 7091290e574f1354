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

"""View service wrapping a Jinja2 environment.

The service owns the ordered list of view paths and the compiled-view cache
directory, and keeps the Jinja2 loader in step with the stored path list.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from jinja2 import Environment

from viewservice.config import DEFAULT_FILE_EXTENSIONS, resolve_cache_path
from viewservice.error.presenter import ViewError
from viewservice.exceptions import ConfigurationError
from viewservice.service.cache import CompiledViewCache
from viewservice.service.components import ComponentExtension
from viewservice.service.directives import DirectiveExtension, DirectiveHandler
from viewservice.service.finder import ViewFinder
from viewservice.service.view import Composer, ComposerBinding, View

logger = logging.getLogger(__name__)


class ViewService:
    """Compile and render views from an ordered list of directories.

    Args:
        view_paths: Directories searched for views, earliest first.  Must not
            be empty.
        cache_path: Directory for compiled views.  See
            :func:`viewservice.config.resolve_cache_path` for the fallback
            order.
        file_extensions: Recognised view file suffixes, without the dot.

    Raises:
        ConfigurationError: if *view_paths* is empty or the cache directory
            cannot be used.
    """

    def __init__(
        self,
        view_paths: Sequence[str | os.PathLike],
        cache_path: str | os.PathLike | None = None,
        file_extensions: Sequence[str] = DEFAULT_FILE_EXTENSIONS,
    ) -> None:
        if isinstance(view_paths, (str, os.PathLike)) or not view_paths:
            raise ConfigurationError("view_paths must be a sequence containing at least one view path")

        self._view_paths = [str(p) for p in view_paths]
        self._file_extensions = list(file_extensions)
        self._cache_path: str | None = resolve_cache_path(cache_path)
        self._directives: dict[str, DirectiveHandler] = {}
        self._composers: list[ComposerBinding] = []
        self._shared: dict[str, Any] = {}

        self._bytecode_cache = CompiledViewCache(self._cache_path, self._directives)
        self._finder = ViewFinder(self._view_paths, self._file_extensions)
        self._environment = self._create_environment(self._finder)

        logger.debug(
            "View service initialised: paths=%s, cache=%s", self._view_paths, self._cache_path,
        )

    def _create_environment(self, finder: ViewFinder) -> Environment:
        environment = Environment(
            loader=finder,
            bytecode_cache=self._bytecode_cache,
            extensions=[DirectiveExtension, ComponentExtension],
            autoescape=True,
            keep_trailing_newline=True,
            auto_reload=True,
        )
        environment.view_factory = self
        return environment

    def _flush_loaded_views(self) -> None:
        if self._environment.cache is not None:
            self._environment.cache.clear()

    # --- Rendering ----------------------------------------------------------

    def make_view(
        self,
        view: str,
        data: Mapping[str, Any] | None = None,
        merge_data: Mapping[str, Any] | None = None,
        view_path: str | os.PathLike | Iterable[str | os.PathLike] | None = None,
        *,
        file_extensions: Iterable[str] | None = None,
    ) -> View:
        """Resolve *view* and bind its data.

        *view_path* adds one or more directories in front of the view paths
        for this call only; *file_extensions* likewise adds suffixes for this
        call only.  Neither is remembered.

        Raises ``jinja2.TemplateNotFound`` if the view cannot be found.
        """
        environment = self._environment
        if view_path is not None or file_extensions is not None:
            finder = self._finder.copy()
            if view_path is not None:
                if isinstance(view_path, (str, os.PathLike)):
                    view_path = [view_path]
                for path in reversed(list(view_path)):
                    finder.prepend_location(path)
            for extension in file_extensions or ():
                finder.add_extension(extension)
            environment = self._create_environment(finder)

        return self._make(environment, view, {**(merge_data or {}), **(data or {})})

    def render(
        self,
        view: str,
        data: Mapping[str, Any] | None = None,
        merge_data: Mapping[str, Any] | None = None,
        view_path: str | os.PathLike | Iterable[str | os.PathLike] | None = None,
    ) -> str:
        """Shortcut for ``make_view(...).render()``."""
        return self.make_view(view, data, merge_data, view_path).render()

    def make_component(
        self, environment: Environment, view: str, data: Mapping[str, Any],
    ) -> View:
        """Resolve a component view within the environment rendering its caller."""
        return self._make(environment, view, data)

    def _make(self, environment: Environment, view: str, data: Mapping[str, Any]) -> View:
        template = environment.get_template(view)
        return View(self, view, template, data)

    # --- Directives and components ------------------------------------------

    def register_directive(self, name: str, handler: DirectiveHandler) -> None:
        """Register a custom ``@name`` directive, replacing any previous one."""
        self._directives[name] = handler
        self._flush_loaded_views()
        logger.debug("Registered directive @%s", name)

    def register_component_directive(self, component: str, alias: str) -> None:
        """Register ``@alias`` / ``@endalias`` as a wrapper for *component*.

        ``@alias(expr)`` passes the mapping *expr* as component data.
        """
        def opening_tag(expression: str | None) -> str:
            data = expression if expression else "{}"
            return f"{{% component {component!r}, {data} %}}"

        def closing_tag(expression: str | None) -> str:
            return "{% endcomponent %}"

        self.register_directive(alias, opening_tag)
        self.register_directive(f"end{alias}", closing_tag)

    def register_component(
        self, views: str | Iterable[str], callback: Composer,
    ) -> list[ComposerBinding]:
        """Register a view composer for one or more view names or patterns."""
        patterns = [views] if isinstance(views, str) else list(views)
        bindings = [ComposerBinding(pattern, callback) for pattern in patterns]
        self._composers.extend(bindings)
        logger.debug("Registered composer for %s", patterns)
        return bindings

    def call_composers(self, view: View) -> None:
        for binding in self._composers:
            if binding.matches(view.name):
                binding.compose(view)

    def get_directives(self) -> dict[str, DirectiveHandler]:
        return dict(self._directives)

    # --- Shared data --------------------------------------------------------

    def share(self, key: str | Mapping[str, Any], value: Any = None) -> None:
        """Make data available to every view rendered by this service."""
        if isinstance(key, Mapping):
            self._shared.update(key)
        else:
            self._shared[key] = value

    def get_shared(self) -> dict[str, Any]:
        return dict(self._shared)

    # --- View paths ---------------------------------------------------------

    def add_view_path(self, path: str | os.PathLike, prepend: bool = False) -> None:
        """Add a directory to the view paths, last (default) or first."""
        path = str(path)
        if prepend:
            self._view_paths.insert(0, path)
            self._finder.prepend_location(path)
        else:
            self._view_paths.append(path)
            self._finder.add_location(path)
        self._flush_loaded_views()
        logger.debug("Added view path %s (prepend=%s)", path, prepend)

    def add_view_paths(
        self, paths: Iterable[str | os.PathLike], prepend: bool = False,
    ) -> None:
        """Add several directories, keeping their order relative to each other."""
        paths = list(paths)
        for path in reversed(paths) if prepend else paths:
            self.add_view_path(path, prepend)

    def add_namespace(
        self, namespace: str, hints: str | os.PathLike | Iterable[str | os.PathLike],
        prepend: bool = False,
    ) -> None:
        """Register directories for views named ``"namespace::view"``."""
        if isinstance(hints, os.PathLike):
            hints = str(hints)
        elif not isinstance(hints, str):
            hints = [str(h) for h in hints]
        self._finder.add_namespace(namespace, hints, prepend)
        self._flush_loaded_views()

    def get_view_paths(self) -> list[str]:
        return list(self._view_paths)

    def get_cache_path(self) -> str | None:
        return self._cache_path

    def get_file_extensions(self) -> list[str]:
        return list(self._file_extensions)

    # --- Errors -------------------------------------------------------------

    def error_handler(self, error: BaseException) -> ViewError:
        """Return a presenter for *error* that renders through this service."""
        presenter = ViewError(self)
        presenter.set_error(error)
        return presenter
