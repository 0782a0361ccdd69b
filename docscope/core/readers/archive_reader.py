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
Reader for zip-based document containers (DOCX, XLSX, PPTX, ODF, plain ZIP).

Members are enumerated when the container is opened; member content is read
on demand and never cached by the container.
"""

from __future__ import annotations

import logging
import zipfile
import zlib
from pathlib import Path
from types import TracebackType

from ..exceptions import ContainerNotFoundError, ContainerReadError, MemberNotFoundError
from ..models import Member

logger = logging.getLogger(__name__)


class ZipContainer:
    """An open zip container.

    Use as a context manager so the underlying archive handle is closed::

        with ZipContainer.open("report.docx") as container:
            for member in container.members:
                data = container.read_member(member.name)
    """

    def __init__(self, path: Path, archive: zipfile.ZipFile):
        self.path = path
        self._archive = archive
        self._members = [Member(name=info.filename, size=info.file_size) for info in archive.infolist()]

    @classmethod
    def open(cls, path: str | Path) -> ZipContainer:
        """
        Open a container.

        Raises:
            ContainerNotFoundError: If *path* does not exist
            ContainerReadError: If *path* is not a readable zip archive
        """
        path = Path(path)
        if not path.exists():
            raise ContainerNotFoundError(f"File does not exist: {path}")
        if not path.is_file():
            raise ContainerReadError(f"Not a regular file: {path}")

        try:
            archive = zipfile.ZipFile(path, "r")
        except zipfile.BadZipFile as e:
            raise ContainerReadError(f"Not a valid zip container: {path} ({e})") from e
        except OSError as e:
            raise ContainerReadError(f"Cannot open {path}: {e}") from e

        container = cls(path, archive)
        logger.info("Opened container %s with %d members", path, len(container.members))
        return container

    @property
    def members(self) -> list[Member]:
        return list(self._members)

    def list_members(self) -> list[str]:
        """Member names in archive order."""
        return [m.name for m in self._members]

    def read_member(self, name: str) -> bytes:
        """
        Return the raw bytes of a member.

        Raises:
            MemberNotFoundError: If no member has that name
            ContainerReadError: If the member cannot be decompressed
        """
        try:
            return self._archive.read(name)
        except KeyError as e:
            raise MemberNotFoundError(f"Member not found in container: {name}") from e
        except (zipfile.BadZipFile, zlib.error, NotImplementedError, RuntimeError, OSError, EOFError) as e:
            # RuntimeError: encrypted member; NotImplementedError: unsupported compression
            raise ContainerReadError(f"Cannot read member {name}: {e}") from e

    def close(self) -> None:
        self._archive.close()

    def __enter__(self) -> ZipContainer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def list_members(path: str | Path) -> list[str]:
    """Enumerate member names of the container at *path*."""
    with ZipContainer.open(path) as container:
        return container.list_members()
