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
Interactive view state machines.

Each view consumes :class:`~docscope.views.keys.KeyEvent` values and produces a
:class:`~docscope.views.base.Frame` to draw. None of them know about a concrete
terminal library; ``docscope.cli.review_tui`` adapts them to textual.
"""

from .base import BaseView, Frame
from .keys import Key, KeyEvent
from .match_browser import BrowserMode, MatchBrowser
from .member_list import MemberList, MenuAction
from .pager import DocumentPager
from .text_viewer import TextViewer, strip_markup

__all__ = [
    "BaseView",
    "Frame",
    "Key",
    "KeyEvent",
    "BrowserMode",
    "MatchBrowser",
    "MemberList",
    "MenuAction",
    "DocumentPager",
    "TextViewer",
    "strip_markup",
]
