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
Container-level structural checks.

Independent of the indicator passes: flags macro payloads and embedded OLE
objects by member name, and external relationships or script/HTML injection
by member body.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import DocScopeError
from .models import Severity, StructuralFinding
from .scan_policy import ScanPolicy

if TYPE_CHECKING:
    from .readers.archive_reader import ZipContainer

logger = logging.getLogger(__name__)


class StructuralChecker:
    """Runs the structural checks configured in a :class:`ScanPolicy`."""

    def __init__(self, policy: ScanPolicy | None = None):
        self.policy = policy or ScanPolicy.default()

    def check_name(self, name: str) -> list[StructuralFinding]:
        sp = self.policy.structural
        findings: list[StructuralFinding] = []
        if any(marker in name for marker in sp.macro_name_markers):
            findings.append(StructuralFinding(name, "Macro payload", Severity.HIGH))
        if any(marker in name for marker in sp.ole_name_markers):
            findings.append(StructuralFinding(name, "Embedded OLE object", Severity.MEDIUM))
        return findings

    def check_body(self, name: str, data: bytes) -> list[StructuralFinding]:
        sp = self.policy.structural
        if not any(name.endswith(suffix) for suffix in sp.markup_suffixes):
            return []
        findings: list[StructuralFinding] = []
        if any(marker.encode("utf-8") in data for marker in sp.external_link_markers):
            findings.append(StructuralFinding(name, "External relationship target", Severity.MEDIUM))
        if any(marker.encode("utf-8") in data for marker in sp.script_markers):
            findings.append(StructuralFinding(name, "Possible HTML/JS injection", Severity.HIGH))
        return findings

    def check_container(self, container: ZipContainer) -> list[StructuralFinding]:
        findings: list[StructuralFinding] = []
        for member in container.members:
            if member.is_dir:
                continue
            findings.extend(self.check_name(member.name))
            if not any(member.name.endswith(s) for s in self.policy.structural.markup_suffixes):
                continue
            try:
                data = container.read_member(member.name)
            except DocScopeError as e:
                logger.warning("Skipping structural body check of %s: %s", member.name, e)
                continue
            findings.extend(self.check_body(member.name, data))
        return findings


def format_report(findings: list[StructuralFinding], heading: str) -> list[str]:
    """Render structural findings as report lines for the text viewer."""
    lines = [heading, "=" * len(heading), ""]
    if not findings:
        lines.append("No suspicious structural indicators found.")
        return lines
    lines.append(f"Found {len(findings)} suspicious entries:")
    lines.extend(f"  {i}. {f.format()}" for i, f in enumerate(findings, 1))
    return lines
