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

# !/bin/python

import os
from typing import Any, Dict, List, Optional

from botocore.exceptions import ClientError

from cfnstackset.aws.utils.boto3_session import Boto3Session
from cfnstackset.utils.retry_decorator import try_except_retry

STACK_SET_NOT_FOUND = "StackSetNotFoundException"
VALIDATION_ERROR = "ValidationError"
NO_UPDATES_MESSAGE = "No updates are to be performed."


def error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


def error_message(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Message", "")


class StackSet(Boto3Session):
    """Thin wrapper over the CloudFormation StackSet APIs.

    Every call logs the request it is about to make and logs unexpected
    client errors before raising them.
    """

    def __init__(self, logger, **kwargs):
        self.logger = logger
        __service_name = "cloudformation"
        kwargs.setdefault("endpoint_url", os.environ.get("CFN_ENDPOINT_URL"))
        self.max_results_per_page = 100
        super().__init__(logger, __service_name, **kwargs)
        self.cfn_client = super().get_client()

    @try_except_retry()
    def describe_stack_set(self, stack_set_name: str) -> Optional[Dict[str, Any]]:
        """Returns the DescribeStackSet response, or None if it does not exist."""
        try:
            response = self.cfn_client.describe_stack_set(StackSetName=stack_set_name)
            return response
        except ClientError as e:
            if error_code(e) == STACK_SET_NOT_FOUND:
                self.logger.info("Stack set {} not found.".format(stack_set_name))
                return None
            raise

    def create_stack_set(self, **request) -> Dict[str, Any]:
        self.logger.debug("Creating CloudFormation stack set: {}".format(request))
        try:
            return self.cfn_client.create_stack_set(**request)
        except ClientError as e:
            self.logger.log_unhandled_exception(e)
            raise

    def update_stack_set(self, **request) -> Optional[Dict[str, Any]]:
        """Returns the UpdateStackSet response, or None if nothing changed."""
        self.logger.debug("Updating CloudFormation stack set: {}".format(request))
        try:
            return self.cfn_client.update_stack_set(**request)
        except ClientError as e:
            if error_code(e) == VALIDATION_ERROR and error_message(e) == NO_UPDATES_MESSAGE:
                self.logger.debug("Current CloudFormation stack set has no updates")
                return None
            self.logger.log_unhandled_exception(e)
            raise

    def delete_stack_set(self, stack_set_name: str) -> bool:
        """Deletes the stack set. Returns False when it was already gone."""
        self.logger.debug("Deleting CloudFormation stack set {}".format(stack_set_name))
        try:
            self.cfn_client.delete_stack_set(StackSetName=stack_set_name)
            return True
        except ClientError as e:
            if error_code(e) in (VALIDATION_ERROR, STACK_SET_NOT_FOUND):
                self.logger.info(
                    "Stack set {} has already been deleted: {}".format(
                        stack_set_name, error_message(e)
                    )
                )
                return False
            self.logger.log_unhandled_exception(e)
            raise

    @try_except_retry()
    def list_stack_set_operations(self, stack_set_name: str) -> List[Dict[str, Any]]:
        """Lists every operation of a stack set, across all pages."""
        summaries: List[Dict[str, Any]] = []
        paginator = self.cfn_client.get_paginator("list_stack_set_operations")
        for page in paginator.paginate(
            StackSetName=stack_set_name,
            PaginationConfig={"PageSize": self.max_results_per_page},
        ):
            self.logger.debug(
                "Current CloudFormation stack set operations ({}): {}".format(
                    len(page.get("Summaries", [])), page.get("Summaries", [])
                )
            )
            summaries.extend(page.get("Summaries", []))
        return summaries
