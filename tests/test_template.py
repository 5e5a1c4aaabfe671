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

import pytest
import yaml

from cfnstackset.exceptions import InvalidTemplateError
from cfnstackset.utils.template import (
    IntrinsicFunction,
    is_json,
    load_template,
    normalize_template,
    normalize_template_body,
    validate_template_body,
)

YAML_TEMPLATE = """
Resources:
  Topic:
    Type: AWS::SNS::Topic
    Properties:
      TopicName: !Sub '${AWS::StackName}-alerts'
  Subscription:
    Type: AWS::SNS::Subscription
    Properties:
      TopicArn: !Ref Topic
      Endpoint: !GetAtt [Queue, Arn]
      Protocol: sqs
"""


@pytest.mark.unit
def test_json_is_detected_after_leading_whitespace():
    assert is_json('  \n {"Resources": {}}')
    assert not is_json("Resources: {}")


@pytest.mark.unit
def test_normalize_json_is_compact_and_sorted():
    body = '{\n  "Resources": {"B": {"Type": "x"}, "A": {"Type": "y"}}\n}'
    assert normalize_template(body) == '{"Resources":{"A":{"Type":"y"},"B":{"Type":"x"}}}'


@pytest.mark.unit
def test_normalize_json_ignores_formatting_differences():
    first = '{"Resources": {"Topic": {"Type": "AWS::SNS::Topic"}}}'
    second = '{\n    "Resources" : {\n "Topic":{"Type":"AWS::SNS::Topic"}}\n}'
    assert normalize_template(first) == normalize_template(second)


@pytest.mark.unit
def test_normalize_yaml_keeps_short_form_functions():
    normalized = normalize_template(YAML_TEMPLATE)
    assert "!Ref 'Topic'" in normalized or "!Ref Topic" in normalized
    assert "!GetAtt" in normalized
    assert "!Sub" in normalized
    # key order is sorted
    assert normalized.index("Subscription:") < normalized.index("Topic:")
    assert normalize_template(normalized) == normalized


@pytest.mark.unit
def test_load_yaml_builds_intrinsic_functions():
    template = load_template(YAML_TEMPLATE)
    properties = template["Resources"]["Subscription"]["Properties"]
    assert properties["TopicArn"] == IntrinsicFunction("Ref", "Topic")
    assert properties["Endpoint"] == IntrinsicFunction("GetAtt", ["Queue", "Arn"])


@pytest.mark.unit
@pytest.mark.parametrize("body", [
    '{"Resources": ',
    "Resources: [unclosed",
    "just a string",
    "",
    None,
])
def test_invalid_templates_are_rejected(body):
    with pytest.raises(ValueError):
        normalize_template(body)


@pytest.mark.unit
@pytest.mark.parametrize("check", [normalize_template_body, validate_template_body])
def test_template_body_helpers_raise_invalid_template_error(check):
    with pytest.raises(InvalidTemplateError) as e:
        check("Resources: [unclosed")
    assert str(e.value).startswith("template body contains an invalid JSON or YAML: ")


@pytest.mark.unit
def test_normalize_template_body_matches_normalize_template():
    body = '{"b": 1, "a": 2}'
    assert normalize_template_body(body) == normalize_template(body)
    assert validate_template_body(body) is None


@pytest.mark.unit
def test_normalized_yaml_is_still_valid_yaml():
    normalized = normalize_template("Resources:\n  Bucket:\n    Type: AWS::S3::Bucket\n")
    assert normalized == "Resources:\n  Bucket:\n    Type: AWS::S3::Bucket\n"
    assert yaml.safe_load(normalized) == {"Resources": {"Bucket": {"Type": "AWS::S3::Bucket"}}}
    assert json.loads(normalize_template('{"a": 1}')) == {"a": 1}
