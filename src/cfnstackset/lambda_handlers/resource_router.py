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

from cfnstackset.data_source.stack_set import StackSetDataSource
from cfnstackset.resource.stack_set import StackSetResource
from cfnstackset.utils.logger import Logger

# initialise logger
log_level = os.environ.get("LOG_LEVEL", "info")
logger = Logger(loglevel=log_level)

RESOURCES = {StackSetResource.TYPE_NAME: StackSetResource}
DATA_SOURCES = {StackSetDataSource.TYPE_NAME: StackSetDataSource}


def managed_resource(event, operation):
    resource = RESOURCES[event.get("ResourceType")](logger)
    config = event.get("Config", {})
    state = event.get("State", {})
    logger.info("Router Operation: {}".format(operation))
    if operation == "create":
        response = resource.create(config)
    elif operation == "read":
        response = resource.read(state)
    elif operation == "update":
        replace = resource.requires_replacement(state, config)
        if replace:
            return {"Message": build_messages(3, ", ".join(replace))}
        response = resource.update(state, config)
    elif operation == "delete":
        response = resource.delete(state)
    elif operation == "import":
        response = resource.import_state(event.get("Id"))
    else:
        message = build_messages(1, operation)
        logger.info(message)
        return {"Message": message}
    return {"State": response}


def data_source(event, operation):
    source = DATA_SOURCES[event.get("ResourceType")](logger)
    logger.info("Router Operation: {}".format(operation))
    if operation == "read":
        return {"State": source.read(event.get("Config", {}))}
    message = build_messages(1, operation)
    logger.info(message)
    return {"Message": message}


def build_messages(code, detail=""):
    if code == 1:
        return "Operation not found: {}".format(detail)
    elif code == 2:
        return "Resource type not found: {}".format(detail)
    elif code == 3:
        return "Changing {} requires the stack set to be replaced".format(detail)
    return "Unknown error"


def lambda_handler(event, context):
    """Routes an infrastructure event to the stack set resource or data source.

    Event shape:
        {
            "Mode": "managed" | "data",
            "ResourceType": "aws_cloudformation_stack_set",
            "Operation": "create" | "read" | "update" | "delete" | "import",
            "Config": {...},
            "State": {...},
            "Id": "<stack set id, import only>"
        }
    """
    logger.info("Lambda Handler Event")
    logger.debug(event)
    mode = event.get("Mode", "managed")
    resource_type = event.get("ResourceType")
    operation = str(event.get("Operation", "")).lower()

    registry = DATA_SOURCES if mode == "data" else RESOURCES
    if resource_type not in registry:
        message = build_messages(2, resource_type)
        logger.info(message)
        return {"Message": message}

    if mode == "data":
        response = data_source(event, operation)
    else:
        response = managed_resource(event, operation)
    logger.info(response)
    return response
