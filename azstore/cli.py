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
Command line entry point for resolving resource patterns.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from azure.core import exceptions as azure_exceptions
import pydantic
import texttable

from .storage import backends, constants, resolving
from .utils import errors, logging as logging_utils, static_config

logger = logging.getLogger(__name__)

JSON_INDENT_SIZE = 4


class ResolverConfig(static_config.StaticConfig, logging_utils.LoggingConfig):
    """ Configuration of the Azure backends and the resolver. """
    blob_account_url: Optional[str] = pydantic.Field(
        default=None,
        description='The URL of the storage account blob endpoint.',
        json_schema_extra={'command_line': 'blob_account_url',
                           'env': 'AZSTORE_BLOB_ACCOUNT_URL'})
    blob_connection_string: Optional[pydantic.SecretStr] = pydantic.Field(
        default=None,
        description='The connection string of the storage account blob endpoint.',
        json_schema_extra={'env': 'AZSTORE_BLOB_CONNECTION_STRING'})
    file_account_url: Optional[str] = pydantic.Field(
        default=None,
        description='The URL of the storage account file endpoint.',
        json_schema_extra={'command_line': 'file_account_url',
                           'env': 'AZSTORE_FILE_ACCOUNT_URL'})
    file_connection_string: Optional[pydantic.SecretStr] = pydantic.Field(
        default=None,
        description='The connection string of the storage account file endpoint.',
        json_schema_extra={'env': 'AZSTORE_FILE_CONNECTION_STRING'})
    account_key: Optional[pydantic.SecretStr] = pydantic.Field(
        default=None,
        description='The shared key used with the account URLs.',
        json_schema_extra={'env': 'AZSTORE_ACCOUNT_KEY'})
    validate_literals: bool = pydantic.Field(
        default=False,
        description='Only return literal names that the backend lists.',
        json_schema_extra={'command_line': 'validate_literals', 'action': 'store_true'})
    max_workers: int = pydantic.Field(
        default=constants.DEFAULT_MAX_WORKERS,
        ge=1,
        description='The number of containers or shares listed concurrently.',
        json_schema_extra={'command_line': 'max_workers'})


def _secret(value: Optional[pydantic.SecretStr]) -> Optional[str]:
    return value.get_secret_value() if value is not None else None


def build_resolver(config: ResolverConfig) -> resolving.ResourcePatternResolver:
    """
    Creates a resolver with a backend for every endpoint present in the config.
    """
    account_key = _secret(config.account_key)

    blob_backend = None
    if config.blob_account_url or config.blob_connection_string:
        blob_backend = backends.AzureBlobBackend.create(
            account_url=config.blob_account_url,
            connection_string=_secret(config.blob_connection_string),
            credential=account_key,
        )

    file_backend = None
    if config.file_account_url or config.file_connection_string:
        file_backend = backends.AzureFileShareBackend.create(
            account_url=config.file_account_url,
            connection_string=_secret(config.file_connection_string),
            credential=account_key,
        )

    if blob_backend is None and file_backend is None:
        raise errors.AzstoreConfigError(
            'No storage endpoint configured. Set an account URL or connection string for '
            'the blob or file endpoint.')

    return resolving.ResourcePatternResolver(
        blob_backend=blob_backend,
        file_backend=file_backend,
        validate_literals=config.validate_literals,
        max_workers=config.max_workers,
    )


def storage_table(header: List[str]) -> texttable.Texttable:
    """
    Returns a texttable object with the common format of the command line.
    """
    table = texttable.Texttable(max_width=0)
    table.set_deco(texttable.Texttable.HEADER)
    table.set_chars(['', '', '', '='])
    table.header(header)
    table.set_header_align(['l' for _ in header])
    return table


def _resolve(resolver: resolving.ResourcePatternResolver, args: argparse.Namespace):
    """
    Resolve a pattern and print the resources.

    Args:
        resolver: The resolver built from the configuration.
        args: Parsed command line arguments.
    """
    resources = resolver.resolve(args.pattern)
    if args.format_type == 'json':
        print(json.dumps([r.to_dict() for r in resources], indent=JSON_INDENT_SIZE))
        return

    if not resources:
        print(f'No resources match {args.pattern}')
        return
    table = storage_table(header=['Container', 'Name', 'URI'])
    for r in resources:
        table.add_row([r.container, r.name, r.uri])
    print(f'{table.draw()}\n')


def setup_parser(parser: argparse._SubParsersAction):
    """
    Configures parser to resolve resource patterns.

    Args:
        parser: The parser to be configured.
    """
    resolve_parser = parser.add_parser(
        'resolve',
        help='Resolve a resource pattern into blobs or files.',
        epilog='Ex. azstore resolve "azure-blob://*/model.ckpt"')
    resolve_parser.add_argument('pattern',
                                help='The pattern to resolve, e.g. azure-file://myshare/*')
    resolve_parser.add_argument('--format-type', '-t',
                                dest='format_type',
                                choices=('json', 'text'), default='text',
                                help='Specify the output format type (Default text).')
    ResolverConfig.add_arguments(resolve_parser)
    resolve_parser.set_defaults(func=_resolve)


def create_cli_parser() -> argparse.ArgumentParser:
    """
    Create the command line argument parser.
    """
    parser = argparse.ArgumentParser(
        prog='azstore',
        description='Resolve azure-blob:// and azure-file:// resource patterns into the blobs '
                    'and files they match.',
    )
    subparsers = parser.add_subparsers(dest='command')
    subparsers.required = True
    setup_parser(subparsers)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_cli_parser()
    args = parser.parse_args(argv)

    try:
        config = ResolverConfig.from_args(args)
    except errors.AzstoreConfigError as error:
        print(f'ERROR: {error}', file=sys.stderr)
        return 2

    logging_utils.init_logger('azstore', config)

    exit_code = 0
    try:
        resolver = build_resolver(config)
        args.func(resolver, args)
    except errors.AzstoreError as error:
        print(f'ERROR: {error}', file=sys.stderr)
        exit_code = 2
    except azure_exceptions.AzureError as error:
        logger.debug('Storage request failed', exc_info=True)
        print(f'ERROR: Storage request failed: {error}', file=sys.stderr)
        exit_code = 10
    except KeyboardInterrupt:
        exit_code = 3
    return exit_code
