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
Base class and render output shared by all views.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from .keys import KeyEvent

DEFAULT_ROWS = 24
DEFAULT_COLS = 80


def printable_text(text: str) -> str:
    """Replace control characters so one character maps to one terminal cell."""
    return "".join(" " if ch == "\t" else "." if ch < " " or ch == "\x7f" else ch for ch in text)


@dataclass
class Frame:
    """Everything needed to draw one view.

    ``lines`` are body rows (the title and status lines are separate).
    ``reverse_spans`` are ``(row, start, end)`` column ranges drawn in reverse
    video. ``cursor`` is the body position of the terminal cursor, if shown.
    """

    title: str
    lines: list[str] = field(default_factory=list)
    cursor: tuple[int, int] | None = None
    reverse_spans: list[tuple[int, int, int]] = field(default_factory=list)
    status: str = ""


class BaseView(ABC):
    """A view is a small state machine: ``Open -> (render, key, handle)* -> Closed``."""

    def __init__(self, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS):
        self.closed = False
        self.rows = max(1, rows)
        self.cols = max(1, cols)

    def resize(self, rows: int, cols: int) -> None:
        """Set the body viewport size."""
        self.rows = max(1, rows)
        self.cols = max(1, cols)

    def close(self) -> None:
        self.closed = True

    @abstractmethod
    def handle(self, event: KeyEvent) -> Any:
        """Dispatch one key. Returns an optional request for the caller."""

    @abstractmethod
    def render(self) -> Frame:
        """Build the frame for the current state."""
