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
Configuration read from the command line, config files or environment variables.
"""

import argparse
import os
import typing
from typing import Any, Dict, Mapping
from typing_extensions import Self

import pydantic
import yaml

from . import errors


def _field_extra(field: 'pydantic.fields.FieldInfo') -> Dict[str, Any]:
    extra = field.json_schema_extra
    return extra if isinstance(extra, dict) else {}


class StaticConfig(pydantic.BaseModel):
    """ A class for reading in config information from either command line, files,
    or environment variables """

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser):
        """
        Adds a --config argument and an argument for each field that supports "command_line".
        """
        parser.add_argument('--config', action='append', default=[],
                            help='The yaml file from which to load configuration data. Multiple ' \
                                 'files may be specified by including this argument multiple ' \
                                 'times. If a config parameter is duplicated in more than one ' \
                                 'file, the value in the last file is used.')

        for field in cls.model_fields.values():
            extra = _field_extra(field)
            if 'command_line' not in extra:
                continue
            help_message = field.description or ''
            if not field.is_required():
                default = field.get_default(call_default_factory=True)
                if default is not None:
                    help_message += f' (default: {str(default)})'
            action = extra.get('action', 'store')
            kwargs: Dict[str, Any] = {'action': action, 'help': help_message}
            if action in ('store_true', 'store_false'):
                # Leave unset flags as None so they do not override files or defaults
                kwargs['default'] = None
            parser.add_argument(f'--{extra["command_line"]}', **kwargs)

    @classmethod
    def from_args(cls, args: argparse.Namespace,
                  environ: Mapping[str, str] | None = None) -> Self:
        """
        Builds the config from parsed arguments, picking each field from the following priority
        1. Environment variable
        2. Command line argument
        3. Config file
        4. Default
        """
        environ = os.environ if environ is None else environ
        args_dict = dict(vars(args))

        # Load any config files. The later files override anything from the earlier files
        config: Dict[str, Any] = {}
        for config_file in args_dict.pop('config', None) or []:
            with open(config_file, encoding='utf-8') as file:
                config.update(yaml.safe_load(file) or {})
            for key in config:
                if key not in cls.model_fields:
                    raise errors.AzstoreConfigError(
                        f'Unrecognized key "{key}" in config file {config_file}')

        for name, field in cls.model_fields.items():
            extra = _field_extra(field)
            env_name = extra.get('env')
            arg_name = extra.get('command_line')
            is_list = typing.get_origin(field.annotation) is list
            if env_name is not None and env_name in environ:
                value = environ[env_name]
                config[name] = value.split(',') if is_list else value
            elif arg_name is not None and args_dict.get(arg_name) is not None:
                value = args_dict[arg_name]
                config[name] = value.split(',') if is_list and isinstance(value, str) else value

        try:
            return cls(**config)
        except pydantic.ValidationError as error:
            # Report missing values with every way they could have been provided
            messages = []
            for type_error in error.errors():
                if type_error['type'] != 'missing':
                    messages.append(f'{".".join(str(loc) for loc in type_error["loc"])}: '
                                    f'{type_error["msg"]}')
                    continue
                name = str(type_error['loc'][0])
                extra = _field_extra(cls.model_fields[name])
                message = f'No value provided for config {name} via any of the following ' \
                    f'methods: config file key "{name}"'
                if 'command_line' in extra:
                    message += f', command line argument --{extra["command_line"]}'
                if 'env' in extra:
                    message += f', environment variable {extra["env"]}'
                messages.append(message)
            raise errors.AzstoreConfigError('\n'.join(messages)) from error
