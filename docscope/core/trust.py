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
Trust filter: allow-list of known-benign URI prefixes.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .scan_policy import ScanPolicy


class TrustFilter:
    """Answers whether a candidate string references a trusted schema or namespace.

    The prefix set is fixed at construction and never mutated.
    """

    def __init__(self, prefixes: Iterable[str]):
        # Empty prefixes would trust everything
        self._prefixes: tuple[str, ...] = tuple(dict.fromkeys(p for p in prefixes if p))

    @classmethod
    def from_policy(cls, policy: ScanPolicy) -> TrustFilter:
        return cls(policy.trust.trusted_prefixes)

    def is_trusted(self, candidate: str | None) -> bool:
        """Return True iff *candidate* contains any trusted prefix as a substring."""
        if not candidate:
            return False
        return any(prefix in candidate for prefix in self._prefixes)
