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

from botocore.exceptions import ClientError

from cfnstackset import schema
from cfnstackset.aws.services.cloudformation import StackSet
from cfnstackset.exceptions import StackSetError
from cfnstackset.utils.parameter_manipulation import (
    flatten_all_parameters,
    flatten_capabilities,
    flatten_tags,
)
from cfnstackset.types import StackSetDataTypeDef
from cfnstackset.utils.template import normalize_template_body


class StackSetDataSource(object):
    """Looks up an existing stack set by name. Read only."""

    TYPE_NAME = "aws_cloudformation_stack_set"

    def __init__(self, logger, **kwargs):
        self.logger = logger
        self.stack_set = StackSet(logger, **kwargs)

    def read(self, config) -> StackSetDataTypeDef:
        schema.validate_data_source_config(config)
        name = config["name"]
        self.logger.debug("Reading CloudFormation StackSet: {}".format(name))

        try:
            response = self.stack_set.describe_stack_set(name)
        except ClientError as e:
            raise StackSetError(
                "Failed describing CloudFormation stack set ({}): {}".format(name, e)
            ) from e
        if response is None:
            raise StackSetError(
                "Failed describing CloudFormation stack set ({}): "
                "stack set not found".format(name)
            )

        stack = response["StackSet"]
        data = {
            "id": stack["StackSetId"],
            "name": stack["StackSetName"],
            "arn": stack.get("StackSetARN", stack["StackSetId"]),
            "status": stack.get("Status"),
            "description": stack.get("Description"),
            "parameters": flatten_all_parameters(stack.get("Parameters")),
            "tags": flatten_tags(stack.get("Tags")),
        }
        if stack.get("Capabilities"):
            data["capabilities"] = flatten_capabilities(stack["Capabilities"])

        data["template_body"] = normalize_template_body(stack.get("TemplateBody"))
        return data
