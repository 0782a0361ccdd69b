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
Member list: the root menu of a container session.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from ..core.models import Member
from .base import DEFAULT_COLS, DEFAULT_ROWS, BaseView, Frame, printable_text
from .keys import Key, KeyEvent


class MenuAction(str, Enum):
    """Requests a view hands back to the session driving it."""

    VIEW_MEMBER = "view_member"
    SCAN = "scan"
    REPORT = "report"
    CLOSE = "close"


class MemberList(BaseView):
    """Cursor-driven list of container members."""

    def __init__(
        self,
        members: Sequence[Member],
        title: str = "",
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
    ):
        super().__init__(rows, cols)
        self.members = list(members)
        self.title = title
        self.cursor = 0
        self.offset = 0

    @property
    def selected(self) -> Member | None:
        if not self.members:
            return None
        return self.members[self.cursor]

    def resize(self, rows: int, cols: int) -> None:
        super().resize(rows, cols)
        self._follow_cursor()

    def _follow_cursor(self) -> None:
        if self.cursor < self.offset:
            self.offset = self.cursor
        elif self.cursor >= self.offset + self.rows:
            self.offset = self.cursor - self.rows + 1

    def handle(self, event: KeyEvent) -> MenuAction | None:
        if self.closed:
            return None
        key = event.key
        if key in (Key.ESCAPE, Key.QUIT):
            self.close()
            return MenuAction.CLOSE
        if not self.members:
            return None

        last = len(self.members) - 1
        if key is Key.DOWN:
            self.cursor = min(self.cursor + 1, last)
            self._follow_cursor()
        elif key is Key.UP:
            self.cursor = max(self.cursor - 1, 0)
            self._follow_cursor()
        elif key is Key.PAGE_DOWN:
            self.cursor = min(self.cursor + self.rows, last)
            self.offset = max(0, self.cursor - self.rows + 1)
        elif key is Key.PAGE_UP:
            self.cursor = max(self.cursor - self.rows, 0)
            self.offset = self.cursor
        elif key in (Key.RIGHT, Key.ENTER):
            return MenuAction.VIEW_MEMBER
        elif event.is_char("s"):
            return MenuAction.SCAN
        elif event.is_char("i"):
            return MenuAction.REPORT
        return None

    def render(self) -> Frame:
        frame = Frame(
            title=f"{self.title} ({len(self.members)} members; right: view, s: scan, i: structure, ESC/q: quit)",
        )
        if not self.members:
            frame.lines = ["Container has no members."]
            return frame

        width = self.cols
        window = self.members[self.offset : self.offset + self.rows]
        for row, member in enumerate(window):
            label = printable_text(member.name)
            if not member.is_dir:
                label = f"{label}  ({member.size} bytes)"
            frame.lines.append(label[:width])
            if self.offset + row == self.cursor:
                frame.reverse_spans.append((row, 0, max(1, len(frame.lines[-1]))))
        frame.status = f"{self.cursor + 1}/{len(self.members)}"
        return frame
