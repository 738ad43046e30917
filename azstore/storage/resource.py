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
Handles to resolved storage resources.
"""

import dataclasses
from typing import Any, Callable, Dict

from . import common, constants


ClientLookup = Callable[[str, str], Any]


@dataclasses.dataclass(frozen=True, slots=True)
class StorageResource:
    """
    A single blob or file produced by resolving a resource pattern.

    The handle only carries names. The backend is not contacted until
    :py:meth:`get_client` is called, so a handle built from a literal pattern may refer to
    a resource that does not exist.
    """

    scheme: constants.StorageScheme
    container: str
    name: str
    lookup: ClientLookup = dataclasses.field(repr=False, compare=False)

    @property
    def uri(self) -> str:
        """ Returns the storage URI of the resource. """
        return common.format_uri(self.scheme, self.container, self.name)

    def get_client(self) -> Any:
        """
        Returns the backend client for this resource (e.g. a ``BlobClient``).
        """
        return self.lookup(self.container, self.name)

    def to_dict(self) -> Dict[str, str]:
        return {
            'uri': self.uri,
            'scheme': self.scheme.value,
            'container': self.container,
            'name': self.name,
        }

    def __str__(self) -> str:
        return self.uri
