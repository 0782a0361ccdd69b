# Copyright 2026 Cisco Systems, Inc. and its affiliates
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
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest before running tests.
All fixtures defined here are available to every test module without
explicit imports.
"""

from __future__ import annotations

import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest
from dotenv import load_dotenv

from docscope.core.models import Finding, IndicatorFamily
from docscope.core.scan_policy import ScanPolicy

# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

project_root = Path(__file__).parent.parent
env_file = project_root / ".env"

if env_file.exists():
    load_dotenv(env_file)


# ---------------------------------------------------------------------------
# Sample member content
# ---------------------------------------------------------------------------

RELS_XML = (
    b'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    b'<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    b'<Relationship Id="rId1" Target="http://evil.example/x" TargetMode="External"/>'
    b"</Relationships>"
)

DOCUMENT_XML = (
    b'<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main" '
    b'xmlns:x="http://attacker.example/ns">\n'
    b"<w:body><w:p><w:r><w:t>Hello</w:t></w:r></w:p></w:body>\n"
    b"</w:document>\n"
)

CORE_XML = (
    b'<cp:coreProperties xmlns:dc="http://purl.org/dc/elements/1.1/">'
    b"<dc:creator>ACME Corp</dc:creator>"
    b"<dc:title>Quarterly report</dc:title>"
    b"</cp:coreProperties>"
)


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_container(tmp_path: Path) -> Callable[..., Path]:
    """Factory that writes a zip container from a ``{name: bytes}`` mapping.

    Usage::

        def test_something(make_container):
            path = make_container({"word/document.xml": b"<w:document/>"})
    """

    def _factory(members: dict[str, bytes], name: str = "sample.docx") -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as zf:
            for member_name, data in members.items():
                zf.writestr(member_name, data)
        return path

    return _factory


@pytest.fixture
def sample_docx(make_container) -> Path:
    """A small .docx-like container with one suspicious relationship."""
    return make_container(
        {
            "[Content_Types].xml": b'<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types"/>',
            "_rels/.rels": RELS_XML,
            "word/document.xml": DOCUMENT_XML,
            "docProps/core.xml": CORE_XML,
        }
    )


@pytest.fixture
def default_policy() -> ScanPolicy:
    return ScanPolicy.default()


@pytest.fixture
def make_findings() -> Callable[..., list[Finding]]:
    """Factory producing ``count`` findings spread over a few members."""

    def _factory(count: int, member: str = "word/document.xml") -> list[Finding]:
        return [
            Finding(
                source_member=member if i % 2 == 0 else "_rels/.rels",
                byte_offset=i * 10,
                matched_text=f'Target="http://host{i}.example/"',
                family=IndicatorFamily.ATTRIBUTE,
            )
            for i in range(count)
        ]

    return _factory
