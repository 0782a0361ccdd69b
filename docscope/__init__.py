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
docscope - suspicious-content scanner and interactive reviewer for office documents.
"""

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0+unknown"


def __getattr__(name: str):
    """Lazy-load public API symbols on first access.

    Keeps ``python -m docscope.cli.cli`` from importing textual and pypdf
    before they are needed.
    """
    _lazy_map = {
        "Config": (".config.config", "Config"),
        "DocScopeConstants": (".config.constants", "DocScopeConstants"),
        "ScanPolicy": (".core.scan_policy", "ScanPolicy"),
        "TrustFilter": (".core.trust", "TrustFilter"),
        "Finding": (".core.models", "Finding"),
        "Member": (".core.models", "Member"),
        "ScanResult": (".core.models", "ScanResult"),
        "StructuralFinding": (".core.models", "StructuralFinding"),
        "IndicatorExtractor": (".core.extractors.indicator_extractor", "IndicatorExtractor"),
        "FindingAggregator": (".core.scanner", "FindingAggregator"),
        "scan_container": (".core.scanner", "scan_container"),
        "ZipContainer": (".core.readers.archive_reader", "ZipContainer"),
        "PdfDocument": (".core.readers.pdf_reader", "PdfDocument"),
    }
    if name in _lazy_map:
        module_path, attr = _lazy_map[name]
        import importlib

        mod = importlib.import_module(module_path, __package__)
        val = getattr(mod, attr)
        # Cache on the module so __getattr__ is only called once per symbol
        globals()[name] = val
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Config",
    "DocScopeConstants",
    "ScanPolicy",
    "TrustFilter",
    "Finding",
    "Member",
    "ScanResult",
    "StructuralFinding",
    "IndicatorExtractor",
    "FindingAggregator",
    "scan_container",
    "ZipContainer",
    "PdfDocument",
]
