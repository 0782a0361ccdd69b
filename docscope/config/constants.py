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
Constants for docscope.
"""

from pathlib import Path

try:
    from .._version import __version__ as PACKAGE_VERSION
except Exception:  # pragma: no cover
    PACKAGE_VERSION = "0.0.0-dev"


class DocScopeConstants:
    """Constants used throughout the scanner and viewers."""

    VERSION = PACKAGE_VERSION

    # Project paths
    PACKAGE_ROOT = Path(__file__).parent.parent
    DATA_DIR = PACKAGE_ROOT / "data"
    DEFAULT_POLICY_PATH = DATA_DIR / "default_policy.yaml"

    # Hard caps (always-terminate policy for adversarial input)
    MAX_FINDINGS = 50_000
    MAX_LINES = 10_000
    LEGACY_BLOCK_SIZE = 800

    # Formatted finding line: "<member>:<offset>:<text>"
    FINDING_SEPARATOR = ":"

    # File extensions routed by the CLI
    CONTAINER_EXTENSIONS = frozenset(
        {".docx", ".docm", ".dotx", ".dotm", ".xlsx", ".xlsm", ".pptx", ".pptm", ".odt", ".ods", ".odp", ".zip"}
    )
    PDF_EXTENSIONS = frozenset({".pdf"})
    LEGACY_EXTENSIONS = frozenset({".doc"})

    # Environment variable names
    ENV_POLICY = "DOCSCOPE_POLICY"
    ENV_LOG_LEVEL = "DOCSCOPE_LOG_LEVEL"
    ENV_LOG_FILE = "DOCSCOPE_LOG_FILE"
    ENV_MAX_FINDINGS = "DOCSCOPE_MAX_FINDINGS"
    ENV_MAX_LINES = "DOCSCOPE_MAX_LINES"

    @classmethod
    def supported_extensions(cls) -> frozenset[str]:
        """Every extension the CLI accepts."""
        return cls.CONTAINER_EXTENSIONS | cls.PDF_EXTENSIONS | cls.LEGACY_EXTENSIONS

    @classmethod
    def get_data_path(cls) -> Path:
        """Get path to data directory."""
        return cls.DATA_DIR
