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
Data models for containers, members and findings.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class IndicatorFamily(str, Enum):
    """The extractor pass that produced a match."""

    ATTRIBUTE = "attribute"
    NAMESPACE = "namespace"
    METADATA = "metadata"


class Severity(str, Enum):
    """Severity levels for structural indicators."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    INFO = "INFO"


@dataclass(frozen=True)
class Member:
    """A named entry inside a container.

    Content is not held here; it is fetched on demand from the container
    that enumerated the member.
    """

    name: str
    size: int = 0

    @property
    def is_dir(self) -> bool:
        return self.name.endswith("/")


@dataclass(frozen=True)
class RawMatch:
    """A match produced by the extractor, before trust filtering."""

    offset: int
    text: bytes
    family: IndicatorFamily


@dataclass(frozen=True)
class Finding:
    """A candidate suspicious indicator extracted from a member."""

    source_member: str
    byte_offset: int  # start of the delimiter-enclosing match
    matched_text: str
    family: IndicatorFamily = IndicatorFamily.ATTRIBUTE

    def __post_init__(self):
        if not self.matched_text:
            raise ValueError("Finding.matched_text must not be empty")

    def format(self) -> str:
        """Render as ``member:offset:text``, the line the browser filters on."""
        return f"{self.source_member}:{self.byte_offset}:{self.matched_text}"

    def to_dict(self) -> dict[str, Any]:
        """Convert finding to a structured record."""
        return {
            "source_member": self.source_member,
            "byte_offset": self.byte_offset,
            "matched_text": self.matched_text,
            "family": self.family.value,
        }


@dataclass(frozen=True)
class StructuralFinding:
    """A container- or document-level indicator (macro, OLE object, PDF action...)."""

    location: str  # member name or PDF object reference
    title: str
    severity: Severity = Severity.MEDIUM

    def format(self) -> str:
        return f"[{self.severity.value}] {self.location}: {self.title}"


@dataclass
class ScanResult:
    """Results of scanning one container."""

    container_path: str
    findings: list[Finding] = field(default_factory=list)
    members_scanned: int = 0
    skipped_members: list[str] = field(default_factory=list)
    truncated: bool = False
    scan_duration_seconds: float = 0.0

    @property
    def finding_count(self) -> int:
        return len(self.findings)
