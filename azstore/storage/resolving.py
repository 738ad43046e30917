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
Top level module for resolving resource patterns into storage resources.

A resource pattern has the form ``<scheme>://<container>/<name>`` where each of the two
segments is either a literal name or the wildcard ``*``:

    .. code-block:: python

        resolver = ResourcePatternResolver(
            blob_backend=backends.AzureBlobBackend(blob_service_client),
        )
        for resource in resolver.resolve('azure-blob://*/model.ckpt'):
            print(resource.uri)

Wildcard segments are expanded by listing the backend. Literal segments are passed
through as-is unless ``validate_literals`` is set, in which case they are kept only if the
backend lists them.
"""

import abc
from concurrent import futures
import logging
from typing import Any, ClassVar, Dict, Iterable, List

from . import common, constants, resource
from .backends import common as backends_common
from ..utils import errors

logger = logging.getLogger(__name__)


class PatternResolver(abc.ABC):
    """
    Resolves the ``<container>/<name>`` part of a pattern against one backend.

    Subclasses provide the listings of the backend's two levels and the client lookup
    stored in each produced :py:class:`StorageResource`.
    """

    scheme: ClassVar[constants.StorageScheme]

    _validate_literals: bool
    _max_workers: int

    def __init__(
        self,
        validate_literals: bool = False,
        max_workers: int = constants.DEFAULT_MAX_WORKERS,
    ):
        if max_workers < 1:
            raise ValueError(f'max_workers must be at least 1, got {max_workers}')
        self._validate_literals = validate_literals
        self._max_workers = max_workers

    @abc.abstractmethod
    def _list_containers(self) -> Iterable[str]:
        ...

    @abc.abstractmethod
    def _list_names(self, container: str) -> Iterable[str]:
        ...

    @abc.abstractmethod
    def _lookup(self, container: str, name: str) -> Any:
        ...

    def _needs_listing(self, segment: str) -> bool:
        return common.is_wildcard(segment) or self._validate_literals

    def _resolve_containers(self, container_pattern: str) -> List[str]:
        if not self._needs_listing(container_pattern):
            return [container_pattern]
        return [
            container for container in self._list_containers()
            if common.matches(container_pattern, container)
        ]

    def _resolve_names(self, container: str, name_pattern: str) -> List[str]:
        if not self._needs_listing(name_pattern):
            return [name_pattern]
        return [
            name for name in self._list_names(container)
            if common.matches(name_pattern, name)
        ]

    def resource_for(self, container: str, name: str) -> resource.StorageResource:
        """
        Returns the handle for an exact container and name without contacting the backend.
        """
        return resource.StorageResource(
            scheme=self.scheme,
            container=container,
            name=name,
            lookup=self._lookup,
        )

    def resolve(self, remainder: str) -> List[resource.StorageResource]:
        """
        Resolves ``<container>/<name>`` into storage resources.

        :param remainder: The pattern with its scheme prefix removed.

        :return: One resource per matching (container, name) pair, ordered container-major
                 in backend listing order.

        :raises MalformedPatternError: If the remainder is not exactly two non-empty segments.
        """
        container_pattern, name_pattern = common.split_remainder(remainder)
        containers = self._resolve_containers(container_pattern)

        if self._max_workers > 1 and len(containers) > 1 and self._needs_listing(name_pattern):
            with futures.ThreadPoolExecutor(
                max_workers=min(self._max_workers, len(containers)),
                thread_name_prefix='azstore-resolve',
            ) as executor:
                names_per_container = list(executor.map(
                    lambda container: self._resolve_names(container, name_pattern),
                    containers,
                ))
        else:
            names_per_container = [
                self._resolve_names(container, name_pattern) for container in containers
            ]

        resources = [
            self.resource_for(container, name)
            for container, names in zip(containers, names_per_container)
            for name in names
        ]
        logger.debug('Resolved %s%s to %d resources',
                     self.scheme.prefix, remainder, len(resources))
        return resources


class BlobPatternResolver(PatternResolver):
    """
    Resolves patterns against the containers and blobs of a blob backend.
    """

    scheme = constants.StorageScheme.AZURE_BLOB

    _backend: backends_common.BlobBackend

    def __init__(self, backend: backends_common.BlobBackend, **kwargs):
        super().__init__(**kwargs)
        self._backend = backend

    def _list_containers(self) -> Iterable[str]:
        return (container.name for container in self._backend.list_containers())

    def _list_names(self, container: str) -> Iterable[str]:
        return (obj.name for obj in self._backend.list_objects(container))

    def _lookup(self, container: str, name: str) -> Any:
        return self._backend.get_object(container, name)


class FileSharePatternResolver(PatternResolver):
    """
    Resolves patterns against the shares of a file share backend and the files directly
    under each share's root directory. Directories are never produced.
    """

    scheme = constants.StorageScheme.AZURE_FILE

    _backend: backends_common.FileShareBackend

    def __init__(self, backend: backends_common.FileShareBackend, **kwargs):
        super().__init__(**kwargs)
        self._backend = backend

    def _list_containers(self) -> Iterable[str]:
        return (share.name for share in self._backend.list_shares())

    def _list_names(self, container: str) -> Iterable[str]:
        return (
            entry.name for entry in self._backend.list_files_and_directories(container)
            if not entry.is_directory
        )

    def _lookup(self, container: str, name: str) -> Any:
        return self._backend.get_file(container, name)


class ResourcePatternResolver:
    """
    Routes resource patterns to the resolver of the backend their scheme addresses.

    Backends are attached at construction. A scheme without a backend is rejected with
    :py:class:`BackendNotConfiguredError`.
    """

    _resolvers: Dict[constants.StorageScheme, PatternResolver]

    def __init__(
        self,
        blob_backend: backends_common.BlobBackend | None = None,
        file_backend: backends_common.FileShareBackend | None = None,
        validate_literals: bool = False,
        max_workers: int = constants.DEFAULT_MAX_WORKERS,
    ):
        self._resolvers = {}
        if blob_backend is not None:
            self._resolvers[constants.StorageScheme.AZURE_BLOB] = BlobPatternResolver(
                blob_backend, validate_literals=validate_literals, max_workers=max_workers)
        if file_backend is not None:
            self._resolvers[constants.StorageScheme.AZURE_FILE] = FileSharePatternResolver(
                file_backend, validate_literals=validate_literals, max_workers=max_workers)

    @property
    def schemes(self) -> List[constants.StorageScheme]:
        """ Returns the schemes that have a backend attached. """
        return list(self._resolvers)

    def _resolver(self, scheme: constants.StorageScheme) -> PatternResolver:
        try:
            return self._resolvers[scheme]
        except KeyError as error:
            raise errors.BackendNotConfiguredError(
                f'No backend is configured for {scheme.prefix} resources',
                scheme=scheme.value,
            ) from error

    def resolve(self, pattern: str) -> List[resource.StorageResource]:
        """
        Resolves a resource pattern such as ``azure-blob://mycontainer/*``.

        Errors raised by the backend while listing propagate unchanged and no partial
        result is returned.

        :raises UnsupportedSchemeError: If the scheme is not recognized.
        :raises BackendNotConfiguredError: If no backend is attached for the scheme.
        :raises MalformedPatternError: If the pattern is not ``<container>/<name>``.
        """
        scheme, remainder = common.split_scheme(pattern)
        return self._resolver(scheme).resolve(remainder)

    def get_resource(self, location: str) -> resource.StorageResource:
        """
        Returns the resource at a literal location such as ``azure-file://myshare/myfile``.

        The backend is not contacted. Everything after the container is the name, so every
        ``uri`` produced by :py:meth:`resolve` (e.g. ``azure-blob://c/dir/file.txt``) is
        accepted.

        :raises MalformedPatternError: If the container or the name is a wildcard.
        """
        scheme, remainder = common.split_scheme(location)
        container, name = common.split_location(remainder)
        if common.is_wildcard(container) or common.is_wildcard(name):
            raise errors.MalformedPatternError(
                f'Location {location} must not contain wildcards', location)
        return self._resolver(scheme).resource_for(container, name)
