# Copyright 2026 Cisco Systems, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0


"""
Document text viewer with line wrapping, a 2-D cursor and markup stripping.

The viewer owns two line buffers for its whole session: ``lines`` (what is
shown, possibly stripped) and ``original`` (a separate pristine copy used to
undo the strip). Toggling always returns cursor and scroll to the origin.

``top_line`` and ``cursor_row`` count display rows, i.e. wrapped segments of
``cols`` characters. ``cursor_row`` is relative to the top of the viewport.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..config.constants import DocScopeConstants
from .base import DEFAULT_COLS, DEFAULT_ROWS, BaseView, Frame, printable_text
from .keys import Key, KeyEvent

logger = logging.getLogger(__name__)


def strip_markup(line: str) -> str:
    """Drop the text following each ``>`` up to the next ``<`` on the same line.

    ``<a>text</a>tail`` becomes ``<a></a>``. Text before the first tag is kept.
    """
    out = []
    pos = 0
    n = len(line)
    while pos < n:
        close = line.find(">", pos)
        if close == -1:
            out.append(line[pos:])
            break
        out.append(line[pos : close + 1])
        nxt = line.find("<", close + 1)
        if nxt == -1:
            break
        pos = nxt
    return "".join(out)


def split_lines(text: str, max_lines: int) -> tuple[list[str], bool]:
    """Split *text* on line feeds, keeping at most *max_lines* lines.

    A trailing line feed does not produce an extra empty line. Returns the
    lines and whether anything was cut off.
    """
    if not text:
        return [], False
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    parts = [p[:-1] if p.endswith("\r") else p for p in parts]
    if len(parts) > max_lines:
        return parts[:max_lines], True
    return parts, False


class TextViewer(BaseView):
    """Scrollable view over a capped list of text lines."""

    def __init__(
        self,
        lines: Iterable[str],
        title: str = "",
        truncated: bool = False,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
    ):
        super().__init__(rows, cols)
        self.title = title
        self.lines = list(lines)
        self.original = list(self.lines)
        self.truncated = truncated
        self.stripped = False
        self.top_line = 0
        self.cursor_row = 0
        self.cursor_col = 0
        self._rows_cache: list[tuple[int, int, str]] | None = None

    @classmethod
    def from_text(
        cls, text: str, title: str = "", max_lines: int = DocScopeConstants.MAX_LINES, **kwargs
    ) -> TextViewer:
        lines, truncated = split_lines(text, max_lines)
        if truncated:
            logger.debug("%s: truncated to %d lines", title, max_lines)
        return cls(lines, title=title, truncated=truncated, **kwargs)

    @classmethod
    def from_bytes(
        cls, data: bytes, title: str = "", max_lines: int = DocScopeConstants.MAX_LINES, **kwargs
    ) -> TextViewer:
        """Decode *data* as UTF-8, replacing undecodable sequences."""
        return cls.from_text(data.decode("utf-8", errors="replace"), title=title, max_lines=max_lines, **kwargs)

    # -- layout ------------------------------------------------------------

    def display_rows(self) -> list[tuple[int, int, str]]:
        """``(line_index, start_col, segment)`` for every wrapped row."""
        if self._rows_cache is None:
            rows = []
            width = self.cols
            for index, line in enumerate(self.lines):
                if not line:
                    rows.append((index, 0, ""))
                    continue
                for start in range(0, len(line), width):
                    rows.append((index, start, line[start : start + width]))
            self._rows_cache = rows
        return self._rows_cache

    def resize(self, rows: int, cols: int) -> None:
        if cols != self.cols:
            self._rows_cache = None
        super().resize(rows, cols)
        self._clamp()

    def _max_top(self) -> int:
        return max(0, len(self.display_rows()) - self.rows)

    def _clamp(self) -> None:
        total = len(self.display_rows())
        self.top_line = min(max(0, self.top_line), self._max_top())
        last = max(0, min(self.rows, total - self.top_line) - 1)
        self.cursor_row = min(max(0, self.cursor_row), last)

    # -- state changes -----------------------------------------------------

    def toggle_strip(self) -> None:
        if self.stripped:
            self.lines = list(self.original)
        else:
            self.lines = [strip_markup(line) for line in self.lines]
        self.stripped = not self.stripped
        self._rows_cache = None
        self.top_line = self.cursor_row = self.cursor_col = 0

    def move_down(self) -> None:
        if self.top_line + self.cursor_row + 1 >= len(self.display_rows()):
            return
        if self.cursor_row + 1 >= self.rows:
            self.top_line += 1
        else:
            self.cursor_row += 1

    def move_up(self) -> None:
        if self.cursor_row > 0:
            self.cursor_row -= 1
        elif self.top_line > 0:
            self.top_line -= 1

    def handle(self, event: KeyEvent) -> None:
        if self.closed:
            return
        key = event.key
        if key in (Key.ESCAPE, Key.QUIT):
            self.close()
        elif key is Key.DOWN:
            self.move_down()
        elif key is Key.UP:
            self.move_up()
        elif key is Key.RIGHT:
            # No clamp: the column may run past the end of the line.
            self.cursor_col += 1
        elif key is Key.LEFT:
            self.cursor_col = max(0, self.cursor_col - 1)
        elif key is Key.PAGE_DOWN:
            self.top_line += self.rows
            self._clamp()
        elif key is Key.PAGE_UP:
            self.top_line -= self.rows
            self._clamp()
        elif key is Key.TOGGLE_STRIP:
            self.toggle_strip()

    # -- rendering ---------------------------------------------------------

    def render(self) -> Frame:
        self._clamp()
        rows = self.display_rows()
        window = rows[self.top_line : self.top_line + self.rows]
        frame = Frame(
            title=f"File: {self.title} (ESC/q to return, Ctrl-T to strip markup)",
            lines=[printable_text(segment) for _, _, segment in window],
            cursor=(self.cursor_row, self.cursor_col % self.cols),
        )
        if self.cursor_row < len(window):
            _, start, segment = window[self.cursor_row]
            col = self.cursor_col - start
            if 0 <= col < len(segment):
                frame.reverse_spans.append((self.cursor_row, col, col + 1))

        line_no = window[self.cursor_row][0] + 1 if self.cursor_row < len(window) else 0
        status = f"Line {line_no}/{len(self.lines)}  Col {self.cursor_col + 1}"
        if self.stripped:
            status += "  [markup stripped]"
        if self.truncated:
            status += "  (truncated)"
        frame.status = status
        return frame
