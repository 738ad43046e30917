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
Azure Blob Storage and Azure Files backends.

The two backends list at different depths. Blob containers have a flat namespace, so
:py:meth:`AzureBlobBackend.list_objects` returns every blob of a container, including names
such as ``dir/file.txt``. :py:meth:`AzureFileShareBackend.list_files_and_directories` only
returns the entries of the share's root directory.
"""

import logging
from typing import Generator

from azure.storage import blob, fileshare

from . import common
from ...utils import errors

logger = logging.getLogger(__name__)


class AzureBlobBackend(common.BlobBackend):
    """
    Blob backend backed by a :py:class:`azure.storage.blob.BlobServiceClient`.
    """

    _service_client: blob.BlobServiceClient

    def __init__(self, service_client: blob.BlobServiceClient):
        self._service_client = service_client

    @classmethod
    def create(
        cls,
        account_url: str | None = None,
        connection_string: str | None = None,
        credential: str | None = None,
    ) -> 'AzureBlobBackend':
        """
        Creates a backend from a connection string or an account URL.
        """
        if connection_string:
            return cls(blob.BlobServiceClient.from_connection_string(connection_string))
        if account_url:
            return cls(blob.BlobServiceClient(account_url=account_url, credential=credential))
        raise errors.AzstoreConfigError(
            'Azure blob backend requires an account URL or a connection string')

    def list_containers(self) -> Generator[common.ContainerInfo, None, None]:
        logger.debug('Listing containers of %s', self._service_client.account_name)
        for container in self._service_client.list_containers():
            yield common.ContainerInfo(name=container.name)

    def list_objects(self, container: str) -> Generator[common.ObjectInfo, None, None]:
        logger.debug('Listing blobs of container %s', container)
        container_client = self._service_client.get_container_client(container)
        for blob_properties in container_client.list_blobs():
            yield common.ObjectInfo(name=blob_properties.name, size=blob_properties.size)

    def get_object(self, container: str, name: str) -> blob.BlobClient:
        return self._service_client.get_blob_client(container=container, blob=name)


class AzureFileShareBackend(common.FileShareBackend):
    """
    File share backend backed by a :py:class:`azure.storage.fileshare.ShareServiceClient`.
    """

    _service_client: fileshare.ShareServiceClient

    def __init__(self, service_client: fileshare.ShareServiceClient):
        self._service_client = service_client

    @classmethod
    def create(
        cls,
        account_url: str | None = None,
        connection_string: str | None = None,
        credential: str | None = None,
    ) -> 'AzureFileShareBackend':
        """
        Creates a backend from a connection string or an account URL.
        """
        if connection_string:
            return cls(fileshare.ShareServiceClient.from_connection_string(connection_string))
        if account_url:
            return cls(fileshare.ShareServiceClient(account_url=account_url,
                                                    credential=credential))
        raise errors.AzstoreConfigError(
            'Azure file backend requires an account URL or a connection string')

    def list_shares(self) -> Generator[common.ShareInfo, None, None]:
        logger.debug('Listing shares of %s', self._service_client.account_name)
        for share in self._service_client.list_shares():
            yield common.ShareInfo(name=share.name)

    def list_files_and_directories(
        self,
        share: str,
    ) -> Generator[common.EntryInfo, None, None]:
        logger.debug('Listing root directory of share %s', share)
        directory_client = self._service_client.get_share_client(share).get_directory_client()
        for entry in directory_client.list_directories_and_files():
            yield common.EntryInfo(
                name=entry['name'],
                is_directory=bool(entry.get('is_directory', False)),
                size=entry.get('size'),
            )

    def get_file(self, share: str, name: str) -> fileshare.ShareFileClient:
        return self._service_client.get_share_client(share).get_file_client(name)
