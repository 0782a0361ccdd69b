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
Terminal-independent key events consumed by the views.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Key(str, Enum):
    """The small set of keys the views react to."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    ESCAPE = "escape"
    QUIT = "quit"
    FILTER_START = "filter_start"
    TOGGLE_STRIP = "toggle_strip"
    ENTER = "enter"
    BACKSPACE = "backspace"
    CHAR = "char"


@dataclass(frozen=True)
class KeyEvent:
    """One key press.

    ``char`` carries the typed character for :attr:`Key.CHAR` and for
    :attr:`Key.QUIT` (so a text field can still accept ``q``).
    """

    key: Key
    char: str = ""

    @classmethod
    def printable(cls, char: str) -> KeyEvent:
        if char == "q":
            return cls(Key.QUIT, char)
        return cls(Key.CHAR, char)

    @property
    def typed(self) -> str:
        """Character to insert into a text field, or ``""`` if the key is not printable."""
        if self.key in (Key.CHAR, Key.QUIT):
            return self.char
        return ""

    def is_char(self, char: str) -> bool:
        return self.typed == char
