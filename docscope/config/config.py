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
Configuration class for docscope.

Values come from keyword arguments first, then from ``DOCSCOPE_*``
environment variables.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from .constants import DocScopeConstants


def _env_int(name: str) -> int | None:
    """Read a positive integer from the environment; anything else is ignored."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


@dataclass
class Config:
    """
    Runtime configuration for docscope.

    ``policy_path`` points at a YAML scan policy merged over the built-in
    defaults. ``max_findings`` / ``max_lines`` override the policy limits
    when set.
    """

    policy_path: str | None = None

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    # Limit overrides
    max_findings: int | None = None
    max_lines: int | None = None

    def __post_init__(self):
        """Load configuration from environment variables if not provided."""

        if self.policy_path is None:
            self.policy_path = os.getenv(DocScopeConstants.ENV_POLICY) or None

        # Only if still at default
        if self.log_level == "WARNING":
            if env_level := os.getenv(DocScopeConstants.ENV_LOG_LEVEL):
                self.log_level = env_level.upper()

        if self.log_file is None:
            self.log_file = os.getenv(DocScopeConstants.ENV_LOG_FILE) or None

        if self.max_findings is None:
            self.max_findings = _env_int(DocScopeConstants.ENV_MAX_FINDINGS)

        if self.max_lines is None:
            self.max_lines = _env_int(DocScopeConstants.ENV_MAX_LINES)

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create configuration from environment variables.

        Returns:
            Config instance with values from environment
        """
        return cls()

    @classmethod
    def from_file(cls, config_file: Path) -> "Config":
        """
        Load configuration from a .env file.

        Args:
            config_file: Path to .env file

        Returns:
            Config instance
        """
        if config_file.exists():
            with open(config_file) as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#") and "=" in line:
                        key, value = line.split("=", 1)
                        os.environ[key.strip()] = value.strip()

        return cls.from_env()
