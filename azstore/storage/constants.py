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
Constants for the storage module.
"""

import enum


class StorageScheme(str, enum.Enum):
    """
    URI schemes of the supported storage backends.
    """
    AZURE_BLOB = 'azure-blob'
    AZURE_FILE = 'azure-file'

    @property
    def prefix(self) -> str:
        return f'{self.value}{SCHEME_SEPARATOR}'


SCHEME_SEPARATOR = '://'
PATH_SEPARATOR = '/'
WILDCARD = '*'

DEFAULT_MAX_WORKERS = 1
