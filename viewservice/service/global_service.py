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

"""Process-wide :class:`ViewService` singleton.

Applications that cannot pass a service around can reach a shared one::

    from viewservice import get_view_service

    service = get_view_service(["/srv/app/views"], "/var/cache/app/views")
    ...
    get_view_service().render("home", {"user": user})

The first call builds the service and needs at least one view path.  Later
calls ignore ``cache_path`` and append any given view paths.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Sequence

from viewservice.exceptions import ConfigurationError
from viewservice.service.engine import ViewService

logger = logging.getLogger(__name__)

_global_service: ViewService | None = None
_service_lock = threading.Lock()


def get_view_service(
    view_paths: Sequence[str | os.PathLike] = (),
    cache_path: str | os.PathLike | None = None,
) -> ViewService:
    """Return the global :class:`ViewService` (created on first call)."""
    global _global_service
    if isinstance(view_paths, (str, os.PathLike)):
        raise ConfigurationError("view_paths must be a sequence of view paths, not a single path")
    with _service_lock:
        if _global_service is None:
            if not view_paths:
                raise ConfigurationError(
                    "view_paths must contain at least one view path "
                    "when calling get_view_service the first time"
                )
            _global_service = ViewService(view_paths, cache_path)
            logger.debug("Created global view service")
        else:
            for view_path in view_paths:
                _global_service.add_view_path(view_path)
        return _global_service


def reset_view_service() -> None:
    """Drop the global :class:`ViewService`; the next call builds a new one."""
    global _global_service
    with _service_lock:
        _global_service = None
