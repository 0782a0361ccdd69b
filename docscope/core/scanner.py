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
Core scanner engine: runs the indicator extractor over every member of a
container and aggregates trust-filtered findings.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from .exceptions import DocScopeError
from .extractors.indicator_extractor import IndicatorExtractor
from .models import Finding, ScanResult
from .readers.archive_reader import ZipContainer
from .scan_policy import ScanPolicy
from .trust import TrustFilter

logger = logging.getLogger(__name__)


class FindingAggregator:
    """Aggregates extractor output across members into one ordered finding list.

    Findings keep extraction order. Once ``max_findings`` is reached further
    matches are dropped and the result is flagged as truncated.
    """

    def __init__(
        self,
        policy: ScanPolicy | None = None,
        extractor: IndicatorExtractor | None = None,
        trust_filter: TrustFilter | None = None,
    ):
        """
        Initialize aggregator.

        Args:
            policy: Scan policy supplying vocabularies, trusted prefixes and limits.
                If None, loads built-in defaults.
            extractor: Extractor override (defaults to one built from *policy*)
            trust_filter: Trust filter override (defaults to one built from *policy*)
        """
        self.policy = policy or ScanPolicy.default()
        self.extractor = extractor or IndicatorExtractor.from_policy(self.policy)
        self.trust_filter = trust_filter or TrustFilter.from_policy(self.policy)
        self.max_findings = self.policy.limits.max_findings

    def collect(self, member_name: str, data: bytes, result: ScanResult) -> None:
        """Append the untrusted matches of one member to *result*."""
        for match in self.extractor.iter_matches(data):
            text = match.text.decode("utf-8", errors="replace")
            if self.trust_filter.is_trusted(text):
                continue
            if len(result.findings) >= self.max_findings:
                result.truncated = True
                return
            result.findings.append(
                Finding(
                    source_member=member_name,
                    byte_offset=match.offset,
                    matched_text=text,
                    family=match.family,
                )
            )

    def scan_container(self, container: ZipContainer) -> ScanResult:
        """Scan every member of an open container."""
        start = time.time()
        result = ScanResult(container_path=str(container.path))

        for member in container.members:
            if result.truncated:
                break
            if member.is_dir:
                continue
            try:
                data = container.read_member(member.name)
            except DocScopeError as e:
                logger.warning("Skipping member %s: %s", member.name, e)
                result.skipped_members.append(member.name)
                continue
            self.collect(member.name, data, result)
            result.members_scanned += 1

        result.scan_duration_seconds = time.time() - start
        logger.info(
            "Scanned %d members of %s in %.2fs: %d findings%s",
            result.members_scanned,
            result.container_path,
            result.scan_duration_seconds,
            result.finding_count,
            " (truncated)" if result.truncated else "",
        )
        return result


def scan_container(path: str | Path, policy: ScanPolicy | None = None) -> ScanResult:
    """
    Convenience function to scan the container at *path*.

    Raises:
        ContainerNotFoundError: If *path* does not exist
        ContainerReadError: If *path* is not a readable container
    """
    with ZipContainer.open(path) as container:
        return FindingAggregator(policy=policy).scan_container(container)
