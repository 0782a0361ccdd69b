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
Scan policy: trusted prefixes, extractor vocabularies and hard limits.

A ``ScanPolicy`` captures everything an analyst may want to tune without
touching code: which URI prefixes are known-benign, which attribute keys and
metadata tags the extractor looks for, which member names count as macro or
OLE payloads, and how far the scanner and viewers go before capping.

Usage
-----
    from docscope.core.scan_policy import ScanPolicy

    # Load built-in defaults
    policy = ScanPolicy.default()

    # Load an analyst policy (merges on top of defaults)
    policy = ScanPolicy.from_yaml("my_policy.yaml")

    # Dump the current (including default) policy for editing
    policy.to_yaml("generated_policy.yaml")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..config.constants import DocScopeConstants

logger = logging.getLogger(__name__)

_DEFAULT_POLICY_PATH = DocScopeConstants.DEFAULT_POLICY_PATH


# ---------------------------------------------------------------------------
# Data classes for each policy section
# ---------------------------------------------------------------------------


@dataclass
class TrustPolicy:
    """URI prefixes whose presence marks a match as benign."""

    trusted_prefixes: list[str] = field(
        default_factory=lambda: [
            "http://schemas.microsoft.com",
            "http://schemas.openxmlformats.org",
            "http://ns.adobe.com",
            "http://www.w3.org",
            "http://purl.org",
            "http://www.iec.ch",
            "http://dublincore.org",
        ]
    )


@dataclass
class ExtractionPolicy:
    """Vocabularies for the key/value and metadata-tag passes."""

    attribute_keys: list[str] = field(
        default_factory=lambda: ["name=", "Target=", "Type=", "creator", "http://", "uri="]
    )
    metadata_tags: list[str] = field(
        default_factory=lambda: [
            "creator",
            "title",
            "subject",
            "keywords",
            "description",
            "lastModifiedBy",
            "revision",
            "created",
            "modified",
        ]
    )


@dataclass
class StructuralPolicy:
    """Markers for container-level structural checks."""

    # Member-name substrings
    macro_name_markers: list[str] = field(default_factory=lambda: ["vbaProject.bin", "macros"])
    ole_name_markers: list[str] = field(default_factory=lambda: ["embeddings/", ".bin"])
    # Body substrings, checked only in members with these suffixes
    markup_suffixes: list[str] = field(default_factory=lambda: [".xml", ".rels"])
    external_link_markers: list[str] = field(default_factory=lambda: ['TargetMode="External"'])
    script_markers: list[str] = field(default_factory=lambda: ["<script", "<html", "<form"])


@dataclass
class LimitsPolicy:
    """Hard caps; exceeding any of them truncates silently."""

    max_findings: int = DocScopeConstants.MAX_FINDINGS
    max_lines: int = DocScopeConstants.MAX_LINES
    legacy_block_size: int = DocScopeConstants.LEGACY_BLOCK_SIZE

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise ``ValueError`` if any limit is not a positive integer."""
        for name in ("max_findings", "max_lines", "legacy_block_size"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"limits.{name} must be positive, got {value}")


# ---------------------------------------------------------------------------
# The top-level policy object
# ---------------------------------------------------------------------------


@dataclass
class ScanPolicy:
    """Analyst scan policy – everything that should be customisable."""

    policy_name: str = "default"
    policy_version: str = "1.0"

    trust: TrustPolicy = field(default_factory=TrustPolicy)
    extraction: ExtractionPolicy = field(default_factory=ExtractionPolicy)
    structural: StructuralPolicy = field(default_factory=StructuralPolicy)
    limits: LimitsPolicy = field(default_factory=LimitsPolicy)

    # -----------------------------------------------------------------------
    # Construction helpers
    # -----------------------------------------------------------------------

    @classmethod
    def default(cls) -> ScanPolicy:
        """Load the built-in default policy that ships with the package."""
        if _DEFAULT_POLICY_PATH.exists():
            return cls.from_yaml(_DEFAULT_POLICY_PATH)
        logger.debug("Default policy file missing, using dataclass defaults")
        return cls()

    @classmethod
    def from_yaml(cls, path: str | Path) -> ScanPolicy:
        """
        Load a policy from a YAML file.

        The YAML is first merged on top of the built-in defaults so that
        users only need to specify the sections they want to override.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Policy file not found: {path}")

        with open(path) as fh:
            raw = yaml.safe_load(fh) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Policy file {path} must contain a YAML mapping")

        is_default = path.resolve() == _DEFAULT_POLICY_PATH.resolve()
        if is_default:
            policy = cls._from_dict(raw)
        else:
            merged = cls._deep_merge(cls._load_default_raw(), raw)
            policy = cls._from_dict(merged)
            logger.info("Loaded scan policy %s (%s)", path, policy.policy_name)

        return policy

    def to_yaml(self, path: str | Path) -> None:
        """Dump the full policy to a YAML file for editing."""
        data = self._to_dict()
        with open(path, "w") as fh:
            fh.write("# docscope – Scan Policy\n")
            fh.write("# Only include sections you want to override; omitted sections\n")
            fh.write("# will use the built-in defaults.\n\n")
            yaml.dump(data, fh, default_flow_style=False, sort_keys=False, width=120)

    def with_limits(self, max_findings: int | None = None, max_lines: int | None = None) -> ScanPolicy:
        """Return this policy with the given limits overridden (``None`` keeps the current value)."""
        if max_findings is not None:
            self.limits.max_findings = max_findings
        if max_lines is not None:
            self.limits.max_lines = max_lines
        self.limits.validate()
        return self

    # -----------------------------------------------------------------------
    # Internal parsing
    # -----------------------------------------------------------------------

    @classmethod
    def _load_default_raw(cls) -> dict[str, Any]:
        if _DEFAULT_POLICY_PATH.exists():
            with open(_DEFAULT_POLICY_PATH) as fh:
                return yaml.safe_load(fh) or {}
        return cls()._to_dict()

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Recursively merge *override* into *base*.

        Lists in the override **replace** the base list so an analyst can
        narrow a vocabulary without repeating every entry.
        """
        result = dict(base)
        for key, val in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(val, dict):
                result[key] = ScanPolicy._deep_merge(result[key], val)
            else:
                result[key] = val
        return result

    @classmethod
    def _from_dict(cls, d: dict[str, Any]) -> ScanPolicy:
        tr = d.get("trust", {})
        ex = d.get("extraction", {})
        st = d.get("structural", {})
        li = d.get("limits", {})

        defaults = cls()

        return cls(
            policy_name=d.get("policy_name", "default"),
            policy_version=str(d.get("policy_version", "1.0")),
            trust=TrustPolicy(
                trusted_prefixes=list(tr.get("trusted_prefixes", defaults.trust.trusted_prefixes)),
            ),
            extraction=ExtractionPolicy(
                attribute_keys=list(ex.get("attribute_keys", defaults.extraction.attribute_keys)),
                metadata_tags=list(ex.get("metadata_tags", defaults.extraction.metadata_tags)),
            ),
            structural=StructuralPolicy(
                macro_name_markers=list(st.get("macro_name_markers", defaults.structural.macro_name_markers)),
                ole_name_markers=list(st.get("ole_name_markers", defaults.structural.ole_name_markers)),
                markup_suffixes=list(st.get("markup_suffixes", defaults.structural.markup_suffixes)),
                external_link_markers=list(
                    st.get("external_link_markers", defaults.structural.external_link_markers)
                ),
                script_markers=list(st.get("script_markers", defaults.structural.script_markers)),
            ),
            limits=LimitsPolicy(
                max_findings=int(li.get("max_findings", defaults.limits.max_findings)),
                max_lines=int(li.get("max_lines", defaults.limits.max_lines)),
                legacy_block_size=int(li.get("legacy_block_size", defaults.limits.legacy_block_size)),
            ),
        )

    def _to_dict(self) -> dict[str, Any]:
        return {
            "policy_name": self.policy_name,
            "policy_version": self.policy_version,
            "trust": {
                "trusted_prefixes": list(self.trust.trusted_prefixes),
            },
            "extraction": {
                "attribute_keys": list(self.extraction.attribute_keys),
                "metadata_tags": list(self.extraction.metadata_tags),
            },
            "structural": {
                "macro_name_markers": list(self.structural.macro_name_markers),
                "ole_name_markers": list(self.structural.ole_name_markers),
                "markup_suffixes": list(self.structural.markup_suffixes),
                "external_link_markers": list(self.structural.external_link_markers),
                "script_markers": list(self.structural.script_markers),
            },
            "limits": {
                "max_findings": self.limits.max_findings,
                "max_lines": self.limits.max_lines,
                "legacy_block_size": self.limits.legacy_block_size,
            },
        }
