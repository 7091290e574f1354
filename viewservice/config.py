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

"""Configuration defaults and cache directory resolution.

The compiled-view cache directory is chosen in this order:

1. ``$VIEWSERVICE_CACHE_PATH`` — process-wide override, if set and non-empty
2. the ``cache_path`` passed by the caller, if non-empty
3. ``<system temp dir>/view-cache``
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from viewservice.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CACHE_PATH_ENV_VAR = "VIEWSERVICE_CACHE_PATH"
DEFAULT_CACHE_DIRNAME = "view-cache"
CACHE_DIR_MODE = 0o775
DEFAULT_FILE_EXTENSIONS = ("html.j2",)


def _default_cache_dir() -> Path:
    return Path(tempfile.gettempdir()) / DEFAULT_CACHE_DIRNAME


def resolve_cache_path(cache_path: str | os.PathLike | None = None) -> str:
    """Pick the cache directory, creating it if needed.

    Raises :class:`ConfigurationError` if the directory does not exist and
    cannot be created, or exists but is not a writable directory.
    """
    override = os.environ.get(CACHE_PATH_ENV_VAR, "")
    if override:
        path = Path(override)
    elif cache_path:
        path = Path(cache_path)
    else:
        path = _default_cache_dir()
    path = path.expanduser()

    if not path.exists():
        try:
            path.mkdir(mode=CACHE_DIR_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigurationError(
                f"Cache path [{path}] does not exist and could not be created"
            ) from exc
        logger.info("Created view cache directory: %s", path)

    if not path.is_dir() or not os.access(path, os.W_OK):
        raise ConfigurationError(
            f"Cache path [{path}] is not a directory or is not writable"
        )

    return str(path)
