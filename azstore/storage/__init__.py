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
The storage module resolves resource patterns into blobs and files of Azure storage.

It includes the wildcard matching utilities, the backend protocols and Azure backends, and
the resolvers that expand ``azure-blob://`` and ``azure-file://`` patterns.
"""

from .backends import (
    AzureBlobBackend,
    AzureFileShareBackend,
    BlobBackend,
    ContainerInfo,
    EntryInfo,
    FileShareBackend,
    ObjectInfo,
    ShareInfo,
)
from .common import ResourcePattern, is_wildcard, matches, parse_pattern
from .constants import StorageScheme
from .resolving import (
    BlobPatternResolver,
    FileSharePatternResolver,
    PatternResolver,
    ResourcePatternResolver,
)
from .resource import StorageResource
