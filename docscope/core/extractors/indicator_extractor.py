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
Heuristic indicator extraction over raw member bytes.

Three independent passes run over the same buffer, results concatenated in
pass order:

1. key/value attributes (``Target="..."``, ``uri="..."``, ...)
2. namespaced-attribute declarations (``xmlns:w="..."``)
3. metadata tag bodies (``<dc:creator>ACME Corp``)

Metadata tag names must match the local name exactly, not as a prefix, so
``<w:titlePg>`` is not reported as ``title``.

No XML parser is involved: documents under inspection are often malformed or
deliberately obfuscated, so every pass is a linear, offset-bounded scan that
never raises on broken markup and never decodes the buffer. Offsets are byte
offsets into the member's raw content.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from ..models import IndicatorFamily, RawMatch

if TYPE_CHECKING:
    from ..scan_policy import ScanPolicy

logger = logging.getLogger(__name__)

_QUOTE = ord('"')
_EQUALS = ord("=")
_SLASH = ord("/")

_XMLNS = b"xmlns:"

_WS_RUN = re.compile(rb"[ \t\n\r]*")
# Prefix of an xmlns declaration ends at the first of: = space tab LF CR > /
_PREFIX_RUN = re.compile(rb"[^= \t\n\r>/]*")
# Qualified name of an opening tag
_TAG_NAME_RUN = re.compile(rb"[^ \t\n\r/><]*")


def _skip_ws(buf: bytes, pos: int) -> int:
    """Return the first offset at or after *pos* that is not whitespace."""
    m = _WS_RUN.match(buf, pos)
    return m.end() if m else pos


def _encode_all(words: Iterable[str]) -> tuple[bytes, ...]:
    encoded = (w.encode("utf-8") for w in words if w)
    return tuple(dict.fromkeys(encoded))


class IndicatorExtractor:
    """Scans one member's raw bytes for candidate indicators.

    Matches are returned *before* trust filtering; the aggregator applies the
    trust filter.
    """

    DEFAULT_ATTRIBUTE_KEYS = ("name=", "Target=", "Type=", "creator", "http://", "uri=")
    DEFAULT_METADATA_TAGS = (
        "creator",
        "title",
        "subject",
        "keywords",
        "description",
        "lastModifiedBy",
        "revision",
        "created",
        "modified",
    )

    def __init__(
        self,
        attribute_keys: Iterable[str] | None = None,
        metadata_tags: Iterable[str] | None = None,
    ):
        self.attribute_keys = _encode_all(self.DEFAULT_ATTRIBUTE_KEYS if attribute_keys is None else attribute_keys)
        self.metadata_tags = _encode_all(self.DEFAULT_METADATA_TAGS if metadata_tags is None else metadata_tags)

    @classmethod
    def from_policy(cls, policy: ScanPolicy) -> IndicatorExtractor:
        return cls(
            attribute_keys=policy.extraction.attribute_keys,
            metadata_tags=policy.extraction.metadata_tags,
        )

    def extract(self, data: bytes) -> list[RawMatch]:
        """Run all three passes and return their matches in pass order."""
        return list(self.iter_matches(data))

    def iter_matches(self, data: bytes) -> Iterator[RawMatch]:
        buf = bytes(data)
        if not buf:
            return
        yield from self.scan_attributes(buf)
        yield from self.scan_namespaces(buf)
        yield from self.scan_metadata(buf)

    # ------------------------------------------------------------------
    # Pass 1: key/value attributes
    # ------------------------------------------------------------------

    def scan_attributes(self, buf: bytes) -> Iterator[RawMatch]:
        """Find ``<key> [=] "<value>"`` for every configured key.

        After a key occurrence fails the quote requirement, scanning resumes
        right after the key text, never after the skipped whitespace or ``=``.
        """
        n = len(buf)
        for key in self.attribute_keys:
            pos = 0
            while True:
                start = buf.find(key, pos)
                if start < 0:
                    break
                key_end = start + len(key)

                v = _skip_ws(buf, key_end)
                if v < n and buf[v] == _EQUALS:
                    v = _skip_ws(buf, v + 1)

                if v < n and buf[v] == _QUOTE:
                    close = buf.find(b'"', v + 1)
                    if close < 0:
                        # No closing quote anywhere after this point, so no
                        # later occurrence of this key can match either.
                        break
                    yield RawMatch(start, buf[start : close + 1], IndicatorFamily.ATTRIBUTE)
                    pos = close + 1
                else:
                    pos = key_end

    # ------------------------------------------------------------------
    # Pass 2: xmlns:<prefix>="<uri>"
    # ------------------------------------------------------------------

    def scan_namespaces(self, buf: bytes) -> Iterator[RawMatch]:
        """Find namespaced-attribute declarations.

        Each structural failure moves the scan pointer past the token just
        inspected, so no position is examined twice.
        """
        n = len(buf)
        pos = 0
        while True:
            start = buf.find(_XMLNS, pos)
            if start < 0:
                break
            prefix_start = start + len(_XMLNS)
            prefix_end = _PREFIX_RUN.match(buf, prefix_start).end()
            if prefix_end == prefix_start:
                pos = prefix_start
                continue

            eq = _skip_ws(buf, prefix_end)
            if eq >= n or buf[eq] != _EQUALS:
                pos = prefix_end
                continue

            value_start = _skip_ws(buf, eq + 1)
            if value_start >= n or buf[value_start] != _QUOTE:
                pos = eq + 1
                continue

            close = buf.find(b'"', value_start + 1)
            if close < 0:
                break
            yield RawMatch(start, buf[start : close + 1], IndicatorFamily.NAMESPACE)
            pos = close + 1

    # ------------------------------------------------------------------
    # Pass 3: metadata tag bodies
    # ------------------------------------------------------------------

    def scan_metadata(self, buf: bytes) -> Iterator[RawMatch]:
        """Capture ``<[ns:]tag ...>text`` for every configured tag name.

        The capture runs from ``<`` up to (not including) the next ``<``, so
        the closing tag is never part of the match.
        """
        n = len(buf)
        for tag in self.metadata_tags:
            pos = 0
            while pos < n:
                start = buf.find(b"<", pos)
                if start < 0:
                    break
                name_start = start + 1
                if name_start < n and buf[name_start] == _SLASH:
                    pos = name_start
                    continue

                name_end = _TAG_NAME_RUN.match(buf, name_start).end()
                qualified = buf[name_start:name_end]
                _, colon, local = qualified.partition(b":")
                if not colon:
                    local = qualified
                if local != tag:
                    pos = name_start
                    continue

                gt = buf.find(b">", name_end)
                if gt < 0:
                    # Unterminated tag; no '>' remains for any later tag either.
                    break

                content_end = buf.find(b"<", gt + 1)
                if content_end < 0:
                    content_end = n

                if content_end > start:
                    yield RawMatch(start, buf[start:content_end], IndicatorFamily.METADATA)
                pos = content_end
