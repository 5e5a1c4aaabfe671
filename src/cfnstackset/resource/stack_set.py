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
import inspect
from typing import Optional

from botocore.exceptions import ClientError

from cfnstackset import schema
from cfnstackset.aws.services.cloudformation import (
    STACK_SET_NOT_FOUND,
    VALIDATION_ERROR,
    StackSet,
    error_code,
)
from cfnstackset.exceptions import (
    ConfigurationError,
    StackSetDeletedError,
    StackSetError,
)
from cfnstackset.resource.timeouts import Timeouts
from cfnstackset.resource.waiter import StateWaiter
from cfnstackset.types import StackSetConfigTypeDef, StackSetStateTypeDef
from cfnstackset.utils.parameter_manipulation import (
    expand_parameters,
    expand_tags,
    flatten_capabilities,
    flatten_parameters,
    flatten_tags,
)
from cfnstackset.utils.template import normalize_template_body


class StackSetResource(object):
    """
    The aws_cloudformation_stack_set resource.

    Configuration and state are plain dictionaries keyed by the field names
    declared in cfnstackset.schema. Every operation returns the new state,
    or None once the stack set no longer exists.

    Example:
        resource = StackSetResource(logger, region='us-east-1')
        state = resource.create({'name': 'baseline',
                                 'template_body': template})
        state = resource.update(state, {**config, 'description': 'v2'})
        resource.delete(state)
    """

    TYPE_NAME = "aws_cloudformation_stack_set"

    CREATE_PENDING = ("RUNNING", "STOPPING")
    CREATE_TARGET = ("DELETED", "ACTIVE")
    UPDATE_PENDING = ("RUNNING", "STOPPING")
    UPDATE_TARGET = ("STOPPED", "FAILED", "SUCCEEDED")
    DELETE_PENDING = ("ACTIVE",)
    DELETE_TARGET = ("DELETED",)

    def __init__(self, logger, timeouts=None, **kwargs):
        self.logger = logger
        self.timeouts = timeouts or Timeouts.from_environ()
        self.stack_set = StackSet(logger, **kwargs)

    def _timeouts_for(self, config):
        return self.timeouts.override((config or {}).get("timeouts"))

    def _build_request(self, config):
        request = {"StackSetName": config["name"]}
        if config.get("description"):
            request["Description"] = config["description"]
        if config.get("capabilities"):
            request["Capabilities"] = flatten_capabilities(config["capabilities"])
        if config.get("parameters"):
            request["Parameters"] = expand_parameters(config["parameters"])
        if config.get("tags"):
            request["Tags"] = expand_tags(config["tags"])
        if config.get("administration_role_arn"):
            request["AdministrationRoleARN"] = config["administration_role_arn"]
        if config.get("execution_role_name"):
            request["ExecutionRoleName"] = config["execution_role_name"]
        return request

    def create(self, config: StackSetConfigTypeDef) -> Optional[StackSetStateTypeDef]:
        self.logger.info("Executing: " + self.__class__.__name__ + "/"
                         + inspect.stack()[0][3])
        schema.validate_resource_config(config)
        if not config.get("template_body") and not config.get("template_url"):
            raise ConfigurationError(
                "one of template_body or template_url must be set")

        request = self._build_request(config)
        if config.get("template_body"):
            request["TemplateBody"] = normalize_template_body(config["template_body"])
        if config.get("template_url"):
            request["TemplateURL"] = config["template_url"]

        try:
            response = self.stack_set.create_stack_set(**request)
        except ClientError as e:
            raise StackSetError(
                "Creating CloudFormation stack set failed: {}".format(e)) from e

        stack_set_id = response["StackSetId"]
        state = dict(config, id=stack_set_id)

        waiter = StateWaiter(
            self.logger,
            pending=self.CREATE_PENDING,
            target=self.CREATE_TARGET,
            refresh=lambda: self._stack_set_status(stack_set_id),
            timeout=self._timeouts_for(config).create,
            min_timeout=1,
        )
        waiter.wait_for_state()

        if waiter.last_state == "DELETED":
            raise StackSetDeletedError(stack_set_id, waiter.last_state)

        self.logger.info("CloudFormation stack set {} created".format(stack_set_id))
        return self.read(state)

    def _stack_set_status(self, stack_set_id):
        response = self.stack_set.describe_stack_set(stack_set_id)
        if response is None:
            raise StackSetError(
                "CloudFormation stack set {} not found".format(stack_set_id))
        status = response["StackSet"]["Status"]
        self.logger.debug("Current CloudFormation stack set status: {}".format(status))
        return response, status

    def read(self, state: StackSetStateTypeDef) -> Optional[StackSetStateTypeDef]:
        stack_set_id = state["id"]
        try:
            response = self.stack_set.describe_stack_set(stack_set_id)
        except ClientError as e:
            # ValidationError: Stack set with id ... does not exist
            if error_code(e) != VALIDATION_ERROR:
                raise
            response = None
        if response is None:
            self.logger.warning("Removing CloudFormation stack set {} from state"
                                " as it's already gone".format(stack_set_id))
            return None

        stack = response["StackSet"]
        self.logger.debug("Received CloudFormation stack set: {}".format(stack))
        if stack.get("StackSetId") == stack_set_id and stack.get("Status") == "DELETED":
            self.logger.debug("Removing CloudFormation stack set {} as it has"
                              " been already deleted".format(stack_set_id))
            return None

        new_state = dict(state)
        if stack.get("TemplateBody") is not None:
            new_state["template_body"] = normalize_template_body(stack["TemplateBody"])
        new_state["name"] = stack["StackSetName"]
        new_state["arn"] = stack.get("StackSetARN", stack.get("StackSetId"))
        new_state["status"] = stack.get("Status")
        if stack.get("Description") is not None:
            new_state["description"] = stack["Description"]
        new_state["parameters"] = flatten_parameters(
            stack.get("Parameters"), state.get("parameters"))
        new_state["tags"] = flatten_tags(stack.get("Tags"))
        if stack.get("Capabilities"):
            new_state["capabilities"] = flatten_capabilities(stack["Capabilities"])
        if stack.get("AdministrationRoleARN"):
            new_state["administration_role_arn"] = stack["AdministrationRoleARN"]
        if stack.get("ExecutionRoleName"):
            new_state["execution_role_name"] = stack["ExecutionRoleName"]
        return new_state

    def import_state(self, stack_set_id):
        """Adopts an existing stack set: the identifier becomes the id as is."""
        return self.read({"id": stack_set_id})

    def requires_replacement(self, state, config):
        return schema.requires_replacement(state, config)

    def update(self, state: StackSetStateTypeDef,
               config: StackSetConfigTypeDef) -> Optional[StackSetStateTypeDef]:
        self.logger.info("Executing: " + self.__class__.__name__ + "/"
                         + inspect.stack()[0][3])
        schema.validate_resource_config(config)
        stack_set_id = state["id"]

        # computed fields keep their last known value when not configured
        merged = dict(config)
        for field in schema.COMPUTED_FIELDS:
            if not merged.get(field) and state.get(field):
                merged[field] = state[field]

        request = self._build_request(merged)
        if merged.get("template_url"):
            request["TemplateURL"] = merged["template_url"]
        elif merged.get("template_body"):
            request["TemplateBody"] = normalize_template_body(merged["template_body"])
        else:
            request["UsePreviousTemplate"] = True

        self.stack_set.update_stack_set(**request)

        waiter = StateWaiter(
            self.logger,
            pending=self.UPDATE_PENDING,
            target=self.UPDATE_TARGET,
            refresh=lambda: self._operations_status(stack_set_id),
            timeout=self._timeouts_for(config).update,
            min_timeout=5,
        )
        waiter.wait_for_state()
        if waiter.last_state != "SUCCEEDED":
            self.logger.warning("Last operation on CloudFormation stack set {}"
                                " finished with status {}"
                                .format(stack_set_id, waiter.last_state))

        self.logger.debug("CloudFormation stack set {} has been updated"
                          .format(stack_set_id))
        return self.read(dict(merged, id=stack_set_id))

    def _operations_status(self, stack_set_id):
        summaries = self.stack_set.list_stack_set_operations(stack_set_id)
        if not summaries:
            # no operation has ever run on this stack set
            return summaries, "SUCCEEDED"

        self.logger.debug("Working on {} CloudFormation stack set operations."
                          .format(len(summaries)))
        status = None
        for summary in summaries:
            status = summary["Status"]
            if status in self.UPDATE_PENDING:
                self.logger.debug("Found active CloudFormation stack set"
                                  " operation: {}".format(summary))
                return summaries, status

        self.logger.debug("Current CloudFormation stack set status: {}".format(status))
        return summaries, status

    def delete(self, state: StackSetStateTypeDef) -> None:
        self.logger.info("Executing: " + self.__class__.__name__ + "/"
                         + inspect.stack()[0][3])
        stack_set_id = state.get("id")
        if not stack_set_id:
            return None
        if not self.stack_set.delete_stack_set(stack_set_id):
            return None

        waiter = StateWaiter(
            self.logger,
            pending=self.DELETE_PENDING,
            target=self.DELETE_TARGET,
            refresh=lambda: self._deletion_status(stack_set_id),
            timeout=self._timeouts_for(state).delete,
            min_timeout=5,
        )
        waiter.wait_for_state()
        self.logger.debug("CloudFormation stack set {} has been deleted"
                          .format(stack_set_id))
        return None

    def _deletion_status(self, stack_set_id):
        try:
            response = self.stack_set.describe_stack_set(stack_set_id)
        except ClientError as e:
            self.logger.debug("Error when deleting CloudFormation stack set: {}"
                              .format(e))
            if error_code(e) in (VALIDATION_ERROR, STACK_SET_NOT_FOUND):
                return None, "DELETED"
            raise
        if response is None:
            return None, "DELETED"
        status = response["StackSet"]["Status"]
        self.logger.debug("Current CloudFormation stack set status: {}".format(status))
        return response, status
