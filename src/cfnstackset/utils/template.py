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

import json

import yaml

from cfnstackset.exceptions import InvalidTemplateError


class IntrinsicFunction(object):
    """A CloudFormation short-form function such as `!Ref Bucket`.

    Kept as an opaque node so the tag survives a load/dump cycle.
    """

    def __init__(self, tag, value):
        self.tag = tag
        self.value = value

    def __eq__(self, other):
        return (
            isinstance(other, IntrinsicFunction)
            and self.tag == other.tag
            and self.value == other.value
        )

    def __repr__(self):
        return "!{} {!r}".format(self.tag, self.value)


class TemplateLoader(yaml.SafeLoader):
    pass


class TemplateDumper(yaml.SafeDumper):
    pass


def _construct_intrinsic(loader, tag_suffix, node):
    if isinstance(node, yaml.ScalarNode):
        value = loader.construct_scalar(node)
    elif isinstance(node, yaml.SequenceNode):
        value = loader.construct_sequence(node, deep=True)
    else:
        value = loader.construct_mapping(node, deep=True)
    return IntrinsicFunction(tag_suffix, value)


def _represent_intrinsic(dumper, data):
    tag = "!" + data.tag
    if isinstance(data.value, list):
        return dumper.represent_sequence(tag, data.value)
    if isinstance(data.value, dict):
        return dumper.represent_mapping(tag, data.value)
    return dumper.represent_scalar(tag, str(data.value))


TemplateLoader.add_multi_constructor("!", _construct_intrinsic)
TemplateDumper.add_representer(IntrinsicFunction, _represent_intrinsic)


def is_json(template_body):
    return template_body.lstrip().startswith("{")


def load_template(template_body):
    """Parses a JSON or YAML template into a dictionary.

    Raises:
        ValueError: the body is neither JSON nor YAML, or is not a mapping
    """
    if template_body is None or not str(template_body).strip():
        raise ValueError("template body is empty")
    if is_json(template_body):
        try:
            template = json.loads(template_body)
        except ValueError as e:
            raise ValueError("invalid JSON: {}".format(e))
    else:
        try:
            template = yaml.load(template_body, Loader=TemplateLoader)
        except yaml.YAMLError as e:
            raise ValueError("invalid YAML: {}".format(e))
    if not isinstance(template, dict):
        raise ValueError(
            "expected a mapping at the top level, got {}".format(
                type(template).__name__
            )
        )
    return template


def normalize_template(template_body):
    """Returns the canonical text of a template.

    JSON stays JSON (compact, sorted keys) and YAML stays YAML (block style,
    sorted keys), so two bodies that differ only in formatting normalize to
    the same string.
    """
    template = load_template(template_body)
    if is_json(template_body):
        return json.dumps(template, sort_keys=True, separators=(",", ":"))
    return yaml.dump(
        template,
        Dumper=TemplateDumper,
        default_flow_style=False,
        sort_keys=True,
    )


def normalize_template_body(template_body):
    """normalize_template, raising InvalidTemplateError for a bad body."""
    try:
        return normalize_template(template_body)
    except ValueError as e:
        raise InvalidTemplateError(e)


def validate_template_body(template_body):
    try:
        load_template(template_body)
    except ValueError as e:
        raise InvalidTemplateError(e)
