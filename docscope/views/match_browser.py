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
Match browser: a filterable, scrollable list of findings.

Two modes. In LISTING, up/down scroll over the *filtered* findings and
escape/q closes the browser. The filter-start key enters EDITING_FILTER,
where typed characters build a new filter; enter replaces the active filter
and scrolls back to the top, escape abandons the edit.

Filtering is recomputed from scratch on every render: a finding is shown iff
``filter_substring in finding.format()`` (case-sensitive).
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from ..core.models import Finding
from .base import DEFAULT_COLS, DEFAULT_ROWS, BaseView, Frame, printable_text
from .keys import Key, KeyEvent

MAX_FILTER_LENGTH = 255


class BrowserMode(str, Enum):
    LISTING = "listing"
    EDITING_FILTER = "editing_filter"


class MatchBrowser(BaseView):
    """Browse an ordered finding sequence."""

    def __init__(
        self,
        findings: Sequence[Finding],
        title: str = "Suspicious indicators",
        truncated: bool = False,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
    ):
        super().__init__(rows, cols)
        self.findings = tuple(findings)
        self.title = title
        self.truncated = truncated
        self.mode = BrowserMode.LISTING
        self.filter_substring = ""
        self.filter_buffer = ""
        self.top_line = 0

    def visible(self) -> list[Finding]:
        """Findings matching the active filter, in extraction order."""
        if not self.filter_substring:
            return list(self.findings)
        needle = self.filter_substring
        return [f for f in self.findings if needle in f.format()]

    def _max_top(self) -> int:
        return max(0, len(self.visible()) - 1)

    def scroll(self, delta: int) -> None:
        self.top_line = min(max(0, self.top_line + delta), self._max_top())

    def set_filter(self, text: str) -> None:
        """Replace the active filter and return to the top of the list."""
        self.filter_substring = text[:MAX_FILTER_LENGTH]
        self.top_line = 0

    def handle(self, event: KeyEvent) -> None:
        if self.closed:
            return
        if self.mode is BrowserMode.EDITING_FILTER:
            self._handle_editing(event)
        else:
            self._handle_listing(event)

    def _handle_listing(self, event: KeyEvent) -> None:
        key = event.key
        if key in (Key.ESCAPE, Key.QUIT):
            self.close()
        elif key is Key.DOWN:
            self.scroll(1)
        elif key is Key.UP:
            self.scroll(-1)
        elif key is Key.PAGE_DOWN:
            self.scroll(self.rows)
        elif key is Key.PAGE_UP:
            self.scroll(-self.rows)
        elif key is Key.FILTER_START:
            self.mode = BrowserMode.EDITING_FILTER
            self.filter_buffer = ""

    def _handle_editing(self, event: KeyEvent) -> None:
        key = event.key
        if key is Key.ENTER:
            self.set_filter(self.filter_buffer)
            self.mode = BrowserMode.LISTING
        elif key is Key.ESCAPE:
            self.mode = BrowserMode.LISTING
        elif key is Key.BACKSPACE:
            self.filter_buffer = self.filter_buffer[:-1]
        elif event.typed and len(self.filter_buffer) < MAX_FILTER_LENGTH:
            self.filter_buffer += event.typed

    def render(self) -> Frame:
        shown = self.visible()
        self.top_line = min(self.top_line, max(0, len(shown) - 1))
        window = shown[self.top_line : self.top_line + self.rows]
        lines = [printable_text(f.format())[: self.cols] for f in window]
        if not self.findings:
            lines = ["No suspicious indicators found."]

        title = f"{self.title} (ESC/q to return, Ctrl-F to filter)"
        frame = Frame(title=title, lines=lines)
        if self.mode is BrowserMode.EDITING_FILTER:
            frame.status = f"Filter: {self.filter_buffer}_"
        else:
            parts = []
            if self.filter_substring:
                parts.append(f"Filter: {self.filter_substring}")
            parts.append(f"{len(shown)}/{len(self.findings)} findings")
            if self.truncated:
                parts.append("(truncated)")
            frame.status = "  ".join(parts)
        return frame
