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
Plain-text salvage for legacy binary documents (.doc).

Keeps printable ASCII bytes plus space, tab and newline, then slices the
result into fixed-size blocks for paging.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ...config.constants import DocScopeConstants
from ..exceptions import ContainerNotFoundError, ContainerReadError

logger = logging.getLogger(__name__)

_KEEP = frozenset(range(0x20, 0x7F)) | {ord("\t"), ord("\n")}
_DROP = bytes(b for b in range(256) if b not in _KEEP)


def salvage_text(data: bytes) -> str:
    """Filter *data* down to printable characters."""
    return data.translate(None, _DROP).decode("ascii")


def split_blocks(text: str, block_size: int = DocScopeConstants.LEGACY_BLOCK_SIZE) -> list[str]:
    if block_size <= 0:
        raise ValueError("block_size must be positive")
    return [text[i : i + block_size] for i in range(0, len(text), block_size)]


def read_legacy_blocks(path: str | Path, block_size: int = DocScopeConstants.LEGACY_BLOCK_SIZE) -> list[str]:
    """
    Salvage the text of a legacy document into blocks.

    Raises:
        ContainerNotFoundError: If *path* does not exist
        ContainerReadError: If the file cannot be read or holds no printable text
    """
    path = Path(path)
    if not path.exists():
        raise ContainerNotFoundError(f"File does not exist: {path}")
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ContainerReadError(f"Cannot read {path}: {e}") from e

    text = salvage_text(data)
    if not text:
        raise ContainerReadError(f"No text could be extracted from {path}")

    blocks = split_blocks(text, block_size)
    logger.info("Salvaged %d characters (%d blocks) from %s", len(text), len(blocks), path)
    return blocks
