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

"""Jinja2 view service: view paths, directives, components, composers.

Usage::

    from viewservice.service import ViewService

    service = ViewService(["/srv/app/views"], cache_path="/var/cache/app/views")
    service.register_directive("upper", lambda expr: "{{ (%s)|upper }}" % expr)
    html = service.make_view("pages.home", {"title": "Welcome"}).render()
"""

from viewservice.service.engine import ViewService
from viewservice.service.finder import ViewFinder
from viewservice.service.global_service import get_view_service, reset_view_service
from viewservice.service.view import ComposerBinding, View

__all__ = [
    "ComposerBinding",
    "View",
    "ViewFinder",
    "ViewService",
    "get_view_service",
    "reset_view_service",
]
