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
Error types shared across the azstore packages.
"""


class AzstoreError(Exception):
    """
    Base class for all errors raised by azstore.
    """
    pass


class AzstoreUserError(AzstoreError):
    """
    Raised when the caller supplies an input that cannot be acted on.
    """
    pass


class AzstoreConfigError(AzstoreError):
    """
    Raised when the configuration is missing or inconsistent.
    """
    pass


class UnsupportedSchemeError(AzstoreUserError):
    """
    Raised when a pattern does not start with a recognized storage scheme.
    """

    scheme: str | None

    def __init__(self, message: str, scheme: str | None = None):
        super().__init__(message)
        self.scheme = scheme


class BackendNotConfiguredError(UnsupportedSchemeError):
    """
    Raised when a pattern addresses a recognized scheme that has no backend attached.
    """
    pass


class MalformedPatternError(AzstoreUserError):
    """
    Raised when a pattern cannot be split into a container segment and a path segment.
    """

    pattern: str

    def __init__(self, message: str, pattern: str):
        super().__init__(message)
        self.pattern = pattern
