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

"""HTML presentation of view rendering errors.

The error is shown as a self-contained table: message, source file and line,
the line with its neighbours, the traceback, and the view service's paths.
The table is the bundled ``error`` view, rendered through the same service
that raised the error.
"""

from __future__ import annotations

import logging
import sys
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from viewservice.exceptions import ErrorContextError, FileAccessError

if TYPE_CHECKING:
    from viewservice.service.engine import ViewService

logger = logging.getLogger(__name__)

ERROR_VIEW = "error"
ERROR_VIEW_DIR = Path(__file__).resolve().parent.parent / "views"
ERROR_VIEW_EXTENSION = "html.j2"


@dataclass(frozen=True)
class CodeSnippet:
    """The error line with one line of context on each side.

    Lines outside the source file are empty strings.
    """

    before: str
    current: str
    after: str


class ViewError:
    """Render an exception as an HTML diagnostic table."""

    def __init__(self, service: ViewService) -> None:
        self.service = service
        self._error: BaseException | None = None

    def set_error(self, error: BaseException) -> None:
        self._error = error

    def get_error(self) -> BaseException:
        if self._error is None:
            raise ErrorContextError("No error has been set.")
        return self._error

    # --- Error fields -------------------------------------------------------

    def _location(self) -> tuple[str | None, int | None]:
        """Source file and line: explicit attributes first, then traceback."""
        error = self.get_error()
        filename = getattr(error, "filename", None)
        lineno = getattr(error, "lineno", None)
        if filename and lineno is not None:
            return str(filename), lineno
        if error.__traceback__ is not None:
            frame = traceback.extract_tb(error.__traceback__)[-1]
            return frame.filename, frame.lineno
        return None, None

    def get_message(self) -> str:
        message = str(self.get_error())
        if not message:
            raise ErrorContextError("No message found in error object.")
        return message

    def get_source(self) -> str:
        source, _ = self._location()
        if not source:
            raise ErrorContextError("No file found in error object.")
        return source

    def get_line(self) -> int:
        _, line = self._location()
        if line is None:
            raise ErrorContextError("No line found in error object.")
        if line < 1:
            raise ErrorContextError("Line number must be greater or equal than 1.")
        return line

    def get_stack_trace(self) -> str:
        error = self.get_error()
        if error.__traceback__ is None:
            raise ErrorContextError("No stack trace found in error object.")
        return "".join(traceback.format_exception(type(error), error, error.__traceback__))

    def get_code_snippet(self) -> CodeSnippet:
        """Read the source file and cut out the error line and its neighbours.

        Raises :class:`FileAccessError` if the file cannot be read.
        """
        source = self.get_source()
        index = self.get_line() - 1
        try:
            lines = Path(source).read_text(encoding="utf-8", errors="replace").splitlines()
        except OSError as exc:
            raise FileAccessError(f"Could not read source file [{source}]") from exc

        def line_at(i: int) -> str:
            return lines[i].strip() if 0 <= i < len(lines) else ""

        return CodeSnippet(
            before=line_at(index - 1),
            current=line_at(index),
            after=line_at(index + 1),
        )

    # --- Output -------------------------------------------------------------

    def render(self) -> str:
        """Render the diagnostic table as an HTML string."""
        message = self.get_message()
        line = self.get_line()
        source = self.get_source()
        stacktrace = self.get_stack_trace()
        code = self.get_code_snippet()

        logger.debug("Rendering error view for %s at %s:%d", type(self._error).__name__, source, line)
        view = self.service.make_view(
            ERROR_VIEW,
            {
                "message": message,
                "line": line,
                "source": source,
                "code": code,
                "stacktrace": stacktrace,
                "view_paths": "\n".join(self.service.get_view_paths()),
                "cache_path": self.service.get_cache_path(),
            },
            view_path=ERROR_VIEW_DIR,
            file_extensions=[ERROR_VIEW_EXTENSION],
        )
        return view.render()

    def print(self, file: TextIO | None = None) -> None:
        """Write the rendered table to *file* (standard output by default)."""
        stream = file if file is not None else sys.stdout
        stream.write(self.render())
