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

"""``{% component %}`` tag: render another view around captured markup.

::

    {% component "alerts.box", {"level": "warning"} %}
      Disk almost full
    {% endcomponent %}

renders the ``alerts.box`` view with ``level`` and ``slot`` (the captured
body) in its context.  Component-alias directives expand to this tag.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from jinja2 import Environment, nodes
from jinja2.ext import Extension
from jinja2.parser import Parser
from markupsafe import Markup


class ComponentExtension(Extension):
    """Jinja2 extension providing the ``component`` block tag."""

    tags = {"component"}

    def __init__(self, environment: Environment) -> None:
        super().__init__(environment)
        environment.extend(view_factory=None)

    def parse(self, parser: Parser) -> nodes.Node:
        lineno = next(parser.stream).lineno
        args = [parser.parse_expression()]
        if parser.stream.skip_if("comma"):
            args.append(parser.parse_expression())
        else:
            args.append(nodes.Const(None))
        body = parser.parse_statements(("name:endcomponent",), drop_needle=True)
        return nodes.CallBlock(
            self.call_method("_render_component", args), [], [], body,
        ).set_lineno(lineno)

    def _render_component(
        self,
        name: str,
        data: Mapping[str, Any] | None,
        caller: Callable[[], str],
    ) -> Markup:
        slot = Markup(caller())
        view = self.environment.view_factory.make_component(
            self.environment, name, {**(data or {}), "slot": slot},
        )
        return Markup(view.render())
