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
Common utilities for parsing and matching resource patterns.
"""

from typing import Tuple

import pydantic

from . import constants
from ..utils import errors


###########################
#     Pattern schemas     #
###########################

@pydantic.dataclasses.dataclass(
    config=pydantic.ConfigDict(
        frozen=True,
    ),
)
class ResourcePattern:
    """
    Dataclass for a parsed resource pattern.

    :param StorageScheme scheme: The storage scheme the pattern addresses
    :param str container: The container (or share) segment, a literal name or ``*``
    :param str path: The object (or file) segment, a literal name or ``*``
    """

    scheme: constants.StorageScheme = pydantic.Field(
        ...,
        description='The storage scheme the pattern addresses.',
    )

    container: str = pydantic.Field(
        ...,
        description='The container or share segment.',
    )

    path: str = pydantic.Field(
        ...,
        description='The object or file segment.',
    )

    @property
    def is_literal(self) -> bool:
        """ Returns whether neither segment is a wildcard. """
        return not is_wildcard(self.container) and not is_wildcard(self.path)

    def __str__(self) -> str:
        return format_uri(self.scheme, self.container, self.path)


##############################
#     Wildcard matching      #
##############################


def is_wildcard(segment: str) -> bool:
    """
    Returns whether the segment is the wildcard token.
    """
    return segment == constants.WILDCARD


def matches(segment: str, candidate: str) -> bool:
    """
    Returns whether a pattern segment matches a candidate name.

    The wildcard matches every candidate. Any other segment matches only the identical
    (case-sensitive) name.
    """
    return is_wildcard(segment) or segment == candidate


############################
#     Pattern parsing      #
############################


def split_scheme(pattern: str) -> Tuple[constants.StorageScheme, str]:
    """
    Splits a pattern into its storage scheme and the remainder after ``://``.

    :raises MalformedPatternError: If the pattern is empty.
    :raises UnsupportedSchemeError: If the pattern does not start with a known scheme.
    """
    if not pattern:
        raise errors.MalformedPatternError('Resource pattern is empty', pattern)

    scheme, separator, remainder = pattern.partition(constants.SCHEME_SEPARATOR)
    if not separator:
        raise errors.UnsupportedSchemeError(
            f'Resource pattern {pattern} has no scheme. Expected one of: '
            f'{", ".join(s.prefix for s in constants.StorageScheme)}',
        )
    try:
        return constants.StorageScheme(scheme), remainder
    except ValueError as error:
        raise errors.UnsupportedSchemeError(
            f'Unsupported storage scheme "{scheme}" in resource pattern {pattern}',
            scheme=scheme,
        ) from error


def split_remainder(remainder: str) -> Tuple[str, str]:
    """
    Splits the part of a pattern after the scheme into its container and path segments.

    Exactly one separator is allowed and neither segment may be empty.

    :raises MalformedPatternError: If the remainder does not have exactly two segments.
    """
    segments = remainder.split(constants.PATH_SEPARATOR)
    if len(segments) != 2:
        raise errors.MalformedPatternError(
            f'Expected <container>/<name> but got "{remainder}"', remainder)
    container, path = segments
    if not container or not path:
        raise errors.MalformedPatternError(
            f'Empty segment in "{remainder}"', remainder)
    return container, path


def split_location(remainder: str) -> Tuple[str, str]:
    """
    Splits a literal location into its container and the name that follows it.

    Only the first separator is significant, so blob names such as ``dir/file.txt`` stay
    whole.

    :raises MalformedPatternError: If there is no separator or either part is empty.
    """
    container, separator, name = remainder.partition(constants.PATH_SEPARATOR)
    if not separator or not container or not name:
        raise errors.MalformedPatternError(
            f'Expected <container>/<name> but got "{remainder}"', remainder)
    return container, name


def parse_pattern(pattern: str) -> ResourcePattern:
    """
    Parses a full resource pattern such as ``azure-blob://container/*``.
    """
    scheme, remainder = split_scheme(pattern)
    container, path = split_remainder(remainder)
    return ResourcePattern(scheme=scheme, container=container, path=path)


def format_uri(scheme: constants.StorageScheme, container: str, name: str) -> str:
    return f'{scheme.prefix}{container}{constants.PATH_SEPARATOR}{name}'
