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

"""Exceptions raised by viewservice.

A view that cannot be resolved raises :class:`jinja2.TemplateNotFound`
directly; everything else derives from :class:`ViewServiceError`.
"""

from __future__ import annotations


class ViewServiceError(Exception):
    """Base class for viewservice errors."""


class ConfigurationError(ViewServiceError, ValueError):
    """Invalid construction arguments (view paths, cache directory)."""


class ErrorContextError(ViewServiceError):
    """An error object lacks the information needed to present it."""


class FileAccessError(ViewServiceError):
    """The source file of a presented error could not be read."""
