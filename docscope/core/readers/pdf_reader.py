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
PDF reader: page text for the pager and an object-graph walk for
structural indicators (JavaScript, automatic actions, launch actions,
embedded files).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pypdf import PdfReader
from pypdf.errors import PyPdfError
from pypdf.generic import ArrayObject, DictionaryObject, IndirectObject

from ..exceptions import ContainerNotFoundError, ContainerReadError
from ..models import Severity, StructuralFinding

logger = logging.getLogger(__name__)

# Upper bound on dictionaries visited by one object-graph walk
MAX_GRAPH_NODES = 100_000

_RAW_SCRIPT_MARKERS = (b"/JavaScript", b"/JS")


class PdfDocument:
    """An open PDF document backed by :class:`pypdf.PdfReader`."""

    def __init__(self, path: Path, reader: PdfReader):
        self.path = path
        self._reader = reader

    @classmethod
    def open(cls, path: str | Path) -> PdfDocument:
        """
        Open a PDF document.

        Raises:
            ContainerNotFoundError: If *path* does not exist
            ContainerReadError: If the file cannot be parsed as PDF
        """
        path = Path(path)
        if not path.exists():
            raise ContainerNotFoundError(f"File does not exist: {path}")
        try:
            reader = PdfReader(str(path))
            if reader.is_encrypted:
                # Many malicious samples use an empty user password
                try:
                    reader.decrypt("")
                except (PyPdfError, NotImplementedError) as e:
                    logger.info("PDF %s is encrypted and could not be opened with an empty password: %s", path, e)
        except (PyPdfError, OSError, ValueError) as e:
            raise ContainerReadError(f"Cannot parse PDF {path}: {e}") from e
        return cls(path, reader)

    @property
    def page_count(self) -> int:
        try:
            return len(self._reader.pages)
        except (PyPdfError, KeyError, ValueError, TypeError) as e:
            raise ContainerReadError(f"Cannot read page tree of {self.path}: {e}") from e

    def page_text(self, index: int) -> str:
        """Extracted text of page *index* (0-based); empty for empty or encrypted pages.

        Raises:
            IndexError: If *index* is out of range
            ContainerReadError: If the page content cannot be decoded
        """
        if index < 0 or index >= self.page_count:
            raise IndexError(f"Page {index + 1} out of range (1-{self.page_count})")
        try:
            return self._reader.pages[index].extract_text() or ""
        except (PyPdfError, KeyError, ValueError, TypeError, AttributeError) as e:
            raise ContainerReadError(f"Cannot extract text of page {index + 1}: {e}") from e

    def object_graph(self) -> Iterator[tuple[str, DictionaryObject]]:
        """Yield ``(location, dictionary)`` for every dictionary reachable from the trailer.

        *location* is the indirect reference (``"12 0 R"``) of the object that
        holds the dictionary, or ``"trailer"``.
        """
        visited: set[tuple[int, int]] = set()
        stack: list[tuple[str, Any]] = [("trailer", self._reader.trailer)]
        yielded = 0

        while stack and yielded < MAX_GRAPH_NODES:
            location, obj = stack.pop()
            if isinstance(obj, IndirectObject):
                ref = (obj.idnum, obj.generation)
                if ref in visited:
                    continue
                visited.add(ref)
                location = f"{obj.idnum} {obj.generation} R"
                try:
                    obj = obj.get_object()
                except (PyPdfError, KeyError, ValueError, TypeError) as e:
                    logger.debug("Cannot resolve %s in %s: %s", location, self.path, e)
                    continue

            if isinstance(obj, DictionaryObject):
                yielded += 1
                yield location, obj
                children = list(obj.values())
            elif isinstance(obj, ArrayObject):
                children = list(obj)
            else:
                continue

            for child in reversed(children):
                if isinstance(child, (IndirectObject, DictionaryObject, ArrayObject)):
                    stack.append((location, child))

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


def _resolve(value: Any) -> Any:
    return value.get_object() if isinstance(value, IndirectObject) else value


def inspect_dictionary(location: str, node: DictionaryObject) -> list[StructuralFinding]:
    """Structural indicators carried by a single PDF dictionary."""
    findings: list[StructuralFinding] = []
    keys = set(node.keys())

    if "/JS" in keys or "/JavaScript" in keys:
        findings.append(StructuralFinding(location, "JavaScript action detected", Severity.HIGH))
    if "/OpenAction" in keys or "/AA" in keys:
        findings.append(StructuralFinding(location, "OpenAction or AA entry detected", Severity.MEDIUM))
    if "/Launch" in keys or node.get("/S") == "/Launch":
        findings.append(StructuralFinding(location, "Launch action detected", Severity.HIGH))
    if "/Names" in keys:
        try:
            names = _resolve(node["/Names"])
        except (PyPdfError, KeyError, ValueError, TypeError):
            names = None
        if isinstance(names, DictionaryObject) and "/EmbeddedFiles" in names:
            findings.append(StructuralFinding(location, "EmbeddedFiles entry detected", Severity.MEDIUM))
    return findings


def scan_pdf_objects(document: PdfDocument) -> list[StructuralFinding]:
    """Walk the object graph and collect structural indicators.

    Falls back to a raw byte search for script markers when the graph walk
    fails or finds no JavaScript.
    """
    findings: list[StructuralFinding] = []
    try:
        for location, node in document.object_graph():
            findings.extend(inspect_dictionary(location, node))
    except (PyPdfError, KeyError, ValueError, TypeError) as e:
        logger.warning("Object graph walk of %s stopped early: %s", document.path, e)

    if not any("JavaScript" in f.title for f in findings):
        try:
            raw = document.read_bytes()
        except OSError as e:
            logger.warning("Cannot re-read %s for raw marker scan: %s", document.path, e)
            return findings
        if any(marker in raw for marker in _RAW_SCRIPT_MARKERS):
            findings.append(StructuralFinding("raw bytes", "JavaScript marker present in file body", Severity.MEDIUM))

    logger.info("PDF %s: %d structural indicators", document.path, len(findings))
    return findings
