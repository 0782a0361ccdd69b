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

"""Tests for document readers: zip containers, PDF and legacy .doc salvage."""

from unittest.mock import patch

import pytest
from pypdf import PdfWriter
from pypdf.generic import DictionaryObject, NameObject, TextStringObject

from docscope.core.exceptions import ContainerNotFoundError, ContainerReadError, MemberNotFoundError
from docscope.core.models import Severity
from docscope.core.readers.archive_reader import ZipContainer, list_members
from docscope.core.readers.legacy_reader import read_legacy_blocks, salvage_text, split_blocks
from docscope.core.readers.pdf_reader import PdfDocument, inspect_dictionary, scan_pdf_objects


def _write_pdf(path, pages=1, js=None, attachment=None):
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=200, height=200)
    if js:
        writer.add_js(js)
    if attachment:
        writer.add_attachment(*attachment)
    with open(path, "wb") as fh:
        writer.write(fh)
    return path


class TestZipContainer:
    """Zip container enumeration and member access."""

    def test_members_in_archive_order(self, make_container):
        path = make_container({"z.xml": b"1", "a.xml": b"22", "m/": b""})
        with ZipContainer.open(path) as container:
            assert container.list_members() == ["z.xml", "a.xml", "m/"]
            assert [m.size for m in container.members] == [1, 2, 0]
            assert container.members[2].is_dir
            assert len(container.members) == 3

    def test_read_member(self, make_container):
        with ZipContainer.open(make_container({"a.xml": b"<a/>"})) as container:
            assert container.read_member("a.xml") == b"<a/>"

    def test_missing_member(self, make_container):
        with ZipContainer.open(make_container({"a.xml": b"<a/>"})) as container:
            with pytest.raises(MemberNotFoundError):
                container.read_member("b.xml")

    def test_missing_path(self, tmp_path):
        with pytest.raises(ContainerNotFoundError):
            ZipContainer.open(tmp_path / "nope.xlsx")

    def test_directory_path(self, tmp_path):
        with pytest.raises(ContainerReadError):
            ZipContainer.open(tmp_path)

    def test_list_members_function(self, make_container):
        assert list_members(make_container({"a": b"", "b": b""})) == ["a", "b"]


class TestPdfDocument:
    """pypdf-backed page access."""

    def test_page_count_and_empty_text(self, tmp_path):
        doc = PdfDocument.open(_write_pdf(tmp_path / "blank.pdf", pages=3))
        assert doc.page_count == 3
        assert doc.page_text(0) == ""

    def test_page_out_of_range(self, tmp_path):
        doc = PdfDocument.open(_write_pdf(tmp_path / "blank.pdf"))
        with pytest.raises(IndexError):
            doc.page_text(1)
        with pytest.raises(IndexError):
            doc.page_text(-1)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ContainerNotFoundError):
            PdfDocument.open(tmp_path / "missing.pdf")

    def test_garbage_file(self, tmp_path):
        path = tmp_path / "garbage.pdf"
        path.write_bytes(b"this is not a pdf at all")
        with pytest.raises(ContainerReadError):
            PdfDocument.open(path)

    def test_object_graph_visits_catalog(self, tmp_path):
        doc = PdfDocument.open(_write_pdf(tmp_path / "blank.pdf"))
        types = {node.get("/Type") for _, node in doc.object_graph()}
        assert "/Catalog" in types
        assert "/Page" in types


class TestPdfIndicators:
    """Structural indicators found in the PDF object graph."""

    def test_clean_document(self, tmp_path):
        doc = PdfDocument.open(_write_pdf(tmp_path / "clean.pdf"))
        assert scan_pdf_objects(doc) == []

    def test_javascript_detected(self, tmp_path):
        doc = PdfDocument.open(_write_pdf(tmp_path / "js.pdf", js="app.alert('hi');"))
        findings = scan_pdf_objects(doc)
        js = [f for f in findings if "JavaScript" in f.title]
        assert js
        assert all(f.severity == Severity.HIGH for f in js)

    def test_embedded_files_detected(self, tmp_path):
        doc = PdfDocument.open(_write_pdf(tmp_path / "att.pdf", attachment=("payload.exe", b"MZ")))
        assert any("EmbeddedFiles" in f.title for f in scan_pdf_objects(doc))

    def test_raw_marker_fallback(self, tmp_path):
        doc = PdfDocument.open(_write_pdf(tmp_path / "clean.pdf"))
        raw = b"1 0 obj << /S /JavaScript /JS (x) >> endobj"
        with patch.object(doc, "object_graph", return_value=iter([])), patch.object(doc, "read_bytes", return_value=raw):
            findings = scan_pdf_objects(doc)
        assert [f.location for f in findings] == ["raw bytes"]

    def test_launch_action(self):
        node = DictionaryObject()
        node[NameObject("/S")] = NameObject("/Launch")
        node[NameObject("/F")] = TextStringObject("cmd.exe")
        (finding,) = inspect_dictionary("7 0 R", node)
        assert finding.title == "Launch action detected"
        assert finding.location == "7 0 R"

    def test_open_action_and_additional_actions(self):
        node = DictionaryObject()
        node[NameObject("/OpenAction")] = DictionaryObject()
        assert [f.title for f in inspect_dictionary("1 0 R", node)] == ["OpenAction or AA entry detected"]

        node = DictionaryObject()
        node[NameObject("/AA")] = DictionaryObject()
        assert len(inspect_dictionary("1 0 R", node)) == 1

    def test_plain_dictionary(self):
        node = DictionaryObject()
        node[NameObject("/Type")] = NameObject("/Page")
        assert inspect_dictionary("3 0 R", node) == []


class TestLegacySalvage:
    """Printable-character salvage of legacy .doc files."""

    def test_salvage_keeps_printable(self):
        assert salvage_text(b"Hello\x00\x01World\r\n\tX\xff") == "HelloWorld\n\tX"

    def test_split_blocks(self):
        assert split_blocks("abcdefg", 3) == ["abc", "def", "g"]
        assert split_blocks("", 3) == []

    def test_split_blocks_rejects_bad_size(self):
        with pytest.raises(ValueError):
            split_blocks("abc", 0)

    def test_read_blocks(self, tmp_path):
        path = tmp_path / "old.doc"
        path.write_bytes(b"\xd0\xcf\x11\xe0" + b"A" * 2000 + b"\x00" * 64)
        blocks = read_legacy_blocks(path)
        assert [len(b) for b in blocks] == [800, 800, 400]

    def test_read_blocks_custom_size(self, tmp_path):
        path = tmp_path / "old.doc"
        path.write_bytes(b"0123456789")
        assert read_legacy_blocks(path, block_size=4) == ["0123", "4567", "89"]

    def test_no_text(self, tmp_path):
        path = tmp_path / "binary.doc"
        path.write_bytes(bytes(range(0, 9)) * 50)
        with pytest.raises(ContainerReadError):
            read_legacy_blocks(path)

    def test_missing(self, tmp_path):
        with pytest.raises(ContainerNotFoundError):
            read_legacy_blocks(tmp_path / "missing.doc")
