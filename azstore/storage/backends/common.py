# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""
Backend protocols consumed by the pattern resolvers.

A backend only needs to list its top-level groupings, list the entries of one grouping,
and hand out a client for a single entry by exact name. Listing and lookup errors are
raised as-is by implementations.
"""

from typing import Any, Iterable, Protocol

import pydantic


#########################
#     Item schemas      #
#########################

@pydantic.dataclasses.dataclass(
    config=pydantic.ConfigDict(
        frozen=True,
    ),
)
class ContainerInfo:
    """
    A blob container as listed by the backend.
    """

    name: str = pydantic.Field(
        ...,
        description='The name of the container.',
    )


@pydantic.dataclasses.dataclass(
    config=pydantic.ConfigDict(
        frozen=True,
    ),
)
class ObjectInfo:
    """
    A blob as listed by the backend.
    """

    name: str = pydantic.Field(
        ...,
        description='The name of the blob.',
    )

    size: int | None = pydantic.Field(
        default=None,
        description='The size in bytes of the blob.',
    )


@pydantic.dataclasses.dataclass(
    config=pydantic.ConfigDict(
        frozen=True,
    ),
)
class ShareInfo:
    """
    A file share as listed by the backend.
    """

    name: str = pydantic.Field(
        ...,
        description='The name of the share.',
    )


@pydantic.dataclasses.dataclass(
    config=pydantic.ConfigDict(
        frozen=True,
    ),
)
class EntryInfo:
    """
    A file or directory directly under the root directory of a share.
    """

    name: str = pydantic.Field(
        ...,
        description='The name of the entry.',
    )

    is_directory: bool = pydantic.Field(
        default=False,
        description='Whether the entry is a directory.',
    )

    size: int | None = pydantic.Field(
        default=None,
        description='The size in bytes of the file.',
    )


###########################
#     Backend schemas     #
###########################


class BlobBackend(Protocol):
    """
    Protocol for a blob storage backend.
    """

    def list_containers(self) -> Iterable[ContainerInfo]:
        """
        Lists every container of the storage account.
        """
        ...

    def list_objects(self, container: str) -> Iterable[ObjectInfo]:
        """
        Lists every blob of a container.
        """
        ...

    def get_object(self, container: str, name: str) -> Any:
        """
        Returns a client for a single blob.
        """
        ...


class FileShareBackend(Protocol):
    """
    Protocol for a file share backend.
    """

    def list_shares(self) -> Iterable[ShareInfo]:
        """
        Lists every share of the storage account.
        """
        ...

    def list_files_and_directories(self, share: str) -> Iterable[EntryInfo]:
        """
        Lists the entries of the root directory of a share.
        """
        ...

    def get_file(self, share: str, name: str) -> Any:
        """
        Returns a client for a single file in the root directory of a share.
        """
        ...
