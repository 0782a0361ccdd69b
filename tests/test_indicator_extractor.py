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

"""Tests for the three indicator extraction passes."""

import pytest

from docscope.core.extractors.indicator_extractor import IndicatorExtractor
from docscope.core.models import IndicatorFamily
from docscope.core.scan_policy import ScanPolicy


@pytest.fixture
def extractor():
    return IndicatorExtractor()


class TestKeyValuePass:
    """Key/value attribute extraction."""

    def test_external_relationship_target(self, extractor):
        data = b'<Relationship Target="http://evil.example/x" TargetMode="External"/>'
        matches = extractor.extract(data)

        assert len(matches) == 1
        assert matches[0].family == IndicatorFamily.ATTRIBUTE
        assert matches[0].text == b'Target="http://evil.example/x"'
        assert matches[0].offset == data.index(b"Target=")

    def test_whitespace_before_quote(self, extractor):
        data = b'<a name=   "payload" />'
        (match,) = extractor.scan_attributes(data)
        assert match.text == b'name=   "payload"'

    def test_optional_equals_after_key(self):
        extractor = IndicatorExtractor(attribute_keys=["creator"], metadata_tags=[])
        data = b'<meta creator = "Mallory">'
        (match,) = extractor.extract(data)
        assert match.text == b'creator = "Mallory"'
        assert match.offset == 6

    def test_key_without_quote_is_skipped(self, extractor):
        assert extractor.extract(b"<dc:x>name=unquoted</dc:x>") == []

    def test_unterminated_quote_is_abandoned(self, extractor):
        assert list(extractor.scan_attributes(b'<r Target="http://never-closed')) == []

    def test_resume_right_after_failed_key(self):
        """A failed occurrence must not hide a key that starts inside its lookahead."""
        extractor = IndicatorExtractor(attribute_keys=["k"], metadata_tags=[])
        data = b'k =k"v"'
        matches = extractor.extract(data)
        assert [(m.offset, m.text) for m in matches] == [(3, b'k"v"')]

    def test_scan_resumes_after_consumed_match(self):
        extractor = IndicatorExtractor(attribute_keys=["uri="], metadata_tags=[])
        data = b'uri="a" uri="b" uri="c"'
        assert [m.text for m in extractor.extract(data)] == [b'uri="a"', b'uri="b"', b'uri="c"']

    def test_keys_scanned_in_configured_order(self):
        extractor = IndicatorExtractor(attribute_keys=["Type=", "Target="], metadata_tags=[])
        data = b'<r Target="t" Type="y"/>'
        assert [m.text for m in extractor.extract(data)] == [b'Type="y"', b'Target="t"']

    def test_binary_content_does_not_crash(self, extractor):
        data = b'\xff\xfe\x00Target="\xc3(\x80"\x00\x01'
        (match,) = extractor.scan_attributes(data)
        assert match.text == b'Target="\xc3(\x80"'


class TestNamespacePass:
    """Namespaced-attribute declarations."""

    def test_declaration_captured_whole(self, extractor):
        data = b'<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessing">'
        matches = extractor.extract(data)

        assert len(matches) == 1
        assert matches[0].family == IndicatorFamily.NAMESPACE
        assert matches[0].text == b'xmlns:w="http://schemas.openxmlformats.org/wordprocessing"'
        assert matches[0].offset == data.index(b"xmlns:")

    def test_whitespace_around_equals(self, extractor):
        (match,) = extractor.scan_namespaces(b'<a xmlns:p = "urn:x">')
        assert match.text == b'xmlns:p = "urn:x"'

    def test_empty_prefix_skipped(self, extractor):
        assert list(extractor.scan_namespaces(b'<a xmlns:="urn:x">')) == []

    def test_missing_equals_skipped(self, extractor):
        data = b'<a xmlns:p "urn:x" xmlns:q="urn:y">'
        assert [m.text for m in extractor.scan_namespaces(data)] == [b'xmlns:q="urn:y"']

    def test_unquoted_value_skipped(self, extractor):
        data = b'<a xmlns:p=urn:x xmlns:q="urn:y">'
        assert [m.text for m in extractor.scan_namespaces(data)] == [b'xmlns:q="urn:y"']

    def test_default_namespace_not_captured(self, extractor):
        assert list(extractor.scan_namespaces(b'<a xmlns="urn:x">')) == []

    @pytest.mark.parametrize(
        "data",
        [
            b"xmlns:",
            b"xmlns:a",
            b"xmlns:a=",
            b'xmlns:a="',
            b'xmlns:a="' + b"x" * 10_000,
            b"xmlns:" * 5_000,
        ],
    )
    def test_dangling_declaration_terminates(self, extractor, data):
        assert list(extractor.scan_namespaces(data)) == []


class TestMetadataPass:
    """Metadata tag bodies."""

    def test_opening_tag_plus_body(self, extractor):
        data = b"<dc:creator>ACME Corp</dc:creator>"
        matches = extractor.extract(data)

        assert len(matches) == 1
        assert matches[0].family == IndicatorFamily.METADATA
        assert matches[0].text == b"<dc:creator>ACME Corp"
        assert matches[0].offset == 0

    def test_unprefixed_tag(self, extractor):
        (match,) = extractor.scan_metadata(b"<x><title>Plan</title></x>")
        assert match.text == b"<title>Plan"
        assert match.offset == 3

    def test_tag_with_attributes(self, extractor):
        (match,) = extractor.scan_metadata(b'<dc:title xml:lang="en">Report</dc:title>')
        assert match.text == b'<dc:title xml:lang="en">Report'

    def test_longer_local_name_does_not_match(self, extractor):
        assert list(extractor.scan_metadata(b"<w:titlePg/><w:createdBy>x</w:createdBy>")) == []

    def test_local_name_is_case_sensitive(self, extractor):
        assert list(extractor.scan_metadata(b"<dc:Creator>x</dc:Creator>")) == []

    def test_closing_tags_skipped(self, extractor):
        assert list(extractor.scan_metadata(b"</dc:title></cp:keywords>")) == []

    def test_body_runs_to_end_of_buffer(self, extractor):
        (match,) = extractor.scan_metadata(b"<cp:keywords>invoice, urgent")
        assert match.text == b"<cp:keywords>invoice, urgent"

    def test_empty_element_keeps_opening_tag(self, extractor):
        (match,) = extractor.scan_metadata(b"<dc:subject></dc:subject>")
        assert match.text == b"<dc:subject>"

    def test_tags_scanned_in_configured_order(self):
        extractor = IndicatorExtractor(attribute_keys=[], metadata_tags=["title", "creator"])
        data = b"<dc:creator>A</dc:creator><dc:title>B</dc:title>"
        assert [m.text for m in extractor.extract(data)] == [b"<dc:title>B", b"<dc:creator>A"]

    @pytest.mark.parametrize("data", [b"<", b"<dc:title", b"<dc:title attr='x'", b"<" * 20_000])
    def test_unterminated_tag_terminates(self, extractor, data):
        assert list(extractor.scan_metadata(data)) == []


class TestExtractor:
    """Whole-extractor behaviour."""

    def test_empty_member_yields_nothing(self, extractor):
        assert extractor.extract(b"") == []
        assert list(extractor.scan_attributes(b"")) == []
        assert list(extractor.scan_namespaces(b"")) == []
        assert list(extractor.scan_metadata(b"")) == []

    def test_results_concatenated_in_pass_order(self, extractor):
        data = b'<dc:creator>X</dc:creator><r Target="t"/><a xmlns:p="u"/>'
        families = [m.family for m in extractor.extract(data)]
        assert families == [IndicatorFamily.ATTRIBUTE, IndicatorFamily.NAMESPACE, IndicatorFamily.METADATA]

    def test_same_location_in_two_families(self, extractor):
        """Families are not deduplicated against each other."""
        data = b'<dc:creator creator="Eve">Eve</dc:creator>'
        families = {m.family for m in extractor.extract(data)}
        assert families == {IndicatorFamily.ATTRIBUTE, IndicatorFamily.METADATA}

    def test_accepts_bytearray(self, extractor):
        assert len(extractor.extract(bytearray(b'uri="x"'))) == 1

    def test_from_policy_uses_policy_vocabulary(self):
        policy = ScanPolicy()
        policy.extraction.attribute_keys = ["href="]
        policy.extraction.metadata_tags = ["company"]
        extractor = IndicatorExtractor.from_policy(policy)

        data = b'<a href="http://x.example"/><ep:company>Initech</ep:company><dc:title>t</dc:title>'
        assert [m.text for m in extractor.extract(data)] == [b'href="http://x.example"', b"<ep:company>Initech"]

    def test_matched_text_never_empty(self, extractor, sample_docx):
        import zipfile

        with zipfile.ZipFile(sample_docx) as zf:
            for name in zf.namelist():
                for match in extractor.extract(zf.read(name)):
                    assert match.text
