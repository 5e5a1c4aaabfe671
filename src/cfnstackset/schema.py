###############################################################################
#  Copyright 2021 Amazon.com, Inc. or its affiliates. All Rights Reserved.    #
#                                                                             #
#  Licensed under the Apache License, Version 2.0 (the "License").            #
#  You may not use this file except in compliance with the License.
#  A copy of the License is located at                                        #
#                                                                             #
#      http://www.apache.org/licenses/LICENSE-2.0                             #
#                                                                             #
#  or in the "license" file accompanying this file. This file is distributed  #
#  on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, express #
#  or implied. See the License for the specific language governing permissions#
#  and limitations under the License.                                         #
###############################################################################

import os

import yaml
from pykwalify.core import Core
from pykwalify.errors import SchemaError

from cfnstackset.exceptions import ConfigurationError
from cfnstackset.utils.template import validate_template_body

SCHEMA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "validation")
RESOURCE_SCHEMA = "stack_set.schema.yaml"
DATA_SOURCE_SCHEMA = "stack_set_data.schema.yaml"

# Changing one of these fields means the stack set has to be recreated.
FORCE_NEW_FIELDS = ("name", "on_failure")

# Filled in from the remote stack set when they are not configured.
COMPUTED_FIELDS = ("template_body", "parameters")

_schemas = {}


def load_schema(file_name):
    if file_name not in _schemas:
        with open(os.path.join(SCHEMA_DIR, file_name), "r", encoding="utf-8") as f:
            _schemas[file_name] = yaml.safe_load(f)
    return _schemas[file_name]


def validate(data, file_name):
    """Validates a configuration dictionary against a bundled schema.

    Raises:
        ConfigurationError: listing every validation error pykwalify found
    """
    core = Core(source_data=data, schema_data=load_schema(file_name))
    try:
        core.validate(raise_exception=True)
    except SchemaError as e:
        raise ConfigurationError(
            "invalid configuration: {}".format(e.msg),
            errors=list(core.validation_errors or []),
        )


def validate_resource_config(config):
    validate(config, RESOURCE_SCHEMA)
    if config.get("template_body"):
        validate_template_body(config["template_body"])


def validate_data_source_config(config):
    validate(config, DATA_SOURCE_SCHEMA)


def requires_replacement(state, config):
    """Returns the force-new fields whose configured value differs from state."""
    return [
        field
        for field in FORCE_NEW_FIELDS
        if (state or {}).get(field) != (config or {}).get(field)
    ]
