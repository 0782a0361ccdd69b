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
Paged document viewer used for PDF pages and salvaged legacy text blocks.

Page-down / page-up switch pages, ``i`` asks the caller for the indicator
report, everything else goes to the text viewer of the current page.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..config.constants import DocScopeConstants
from .base import DEFAULT_COLS, DEFAULT_ROWS, BaseView, Frame
from .keys import Key, KeyEvent
from .member_list import MenuAction
from .text_viewer import TextViewer

EMPTY_PAGE_TEXT = "(no extractable text on this page)"


class DocumentPager(BaseView):
    def __init__(
        self,
        pages: Sequence[str],
        title: str = "",
        page_label: str = "Page",
        report_lines: list[str] | None = None,
        max_lines: int = DocScopeConstants.MAX_LINES,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
    ):
        super().__init__(rows, cols)
        self.pages = list(pages)
        self.title = title
        self.page_label = page_label
        self.report_lines = report_lines
        self.max_lines = max_lines
        self.page_index = 0
        self._viewers: dict[int, TextViewer] = {}

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def current_viewer(self) -> TextViewer:
        """The viewer of the current page, built on first visit."""
        viewer = self._viewers.get(self.page_index)
        if viewer is None:
            text = self.pages[self.page_index] if self.pages else ""
            if not text.strip():
                text = EMPTY_PAGE_TEXT
            viewer = TextViewer.from_text(
                text, title=self.title, max_lines=self.max_lines, rows=self.rows, cols=self.cols
            )
            self._viewers[self.page_index] = viewer
        return viewer

    def resize(self, rows: int, cols: int) -> None:
        super().resize(rows, cols)
        for viewer in self._viewers.values():
            viewer.resize(rows, cols)

    def handle(self, event: KeyEvent) -> MenuAction | None:
        if self.closed:
            return None
        key = event.key
        if key is Key.PAGE_DOWN:
            self.page_index = min(self.page_index + 1, max(0, self.page_count - 1))
        elif key is Key.PAGE_UP:
            self.page_index = max(self.page_index - 1, 0)
        elif event.is_char("i") and self.report_lines is not None:
            return MenuAction.REPORT
        else:
            viewer = self.current_viewer()
            viewer.handle(event)
            if viewer.closed:
                self.close()
                return MenuAction.CLOSE
        return None

    def render(self) -> Frame:
        frame = self.current_viewer().render()
        hint = "PgUp/PgDn: page"
        if self.report_lines is not None:
            hint += ", i: indicators"
        frame.title = f"{self.title} ({hint}, ESC/q to return)"
        page = f"{self.page_label} {self.page_index + 1}/{max(1, self.page_count)}"
        frame.status = f"{page}  {frame.status}"
        return frame
