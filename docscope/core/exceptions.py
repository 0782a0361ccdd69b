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


"""docscope exceptions.

All exceptions inherit from DocScopeError for easy catching.

Example:
    >>> from docscope.core.readers.archive_reader import ZipContainer
    >>> from docscope.core.exceptions import ContainerNotFoundError, ContainerReadError
    >>>
    >>> try:
    ...     container = ZipContainer.open("report.docx")
    ... except ContainerNotFoundError as e:
    ...     print(f"No such file: {e}")
    ... except ContainerReadError as e:
    ...     print(f"Corrupt container: {e}")
"""


class DocScopeError(Exception):
    """Base exception for all docscope errors."""

    pass


class ContainerNotFoundError(DocScopeError):
    """Raised when the path of a container or document does not exist."""

    pass


class MemberNotFoundError(DocScopeError):
    """Raised when a named member is not present in the container."""

    pass


class ContainerReadError(DocScopeError):
    """Raised when a container, member or document cannot be read.

    This can indicate:
    - Corrupted or truncated zip archive
    - Damaged PDF cross-reference table
    - Encrypted members
    - File system errors
    """

    pass


class UnsupportedFormatError(DocScopeError):
    """Raised when a path has an extension docscope does not handle."""

    pass
