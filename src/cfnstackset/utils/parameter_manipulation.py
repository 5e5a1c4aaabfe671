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

from typing import List

from cfnstackset.types import ParameterTypeDef, TagTypeDef


def _stringify(value):
    # List values are sent as comma-delimited strings; the template should
    # declare such parameters as CommaDelimitedList.
    if isinstance(value, list):
        return ",".join(map(str, value))
    return value


def expand_parameters(params_in) -> List[ParameterTypeDef]:
    """Transforms {name: value} into the CloudFormation parameter list.

    Args:
        params_in (dict): {'ParamKey': 'ParamValue'}

    Returns:
        list: [{'ParameterKey': 'ParamKey', 'ParameterValue': 'ParamValue'}]
    """
    params_list = []
    for key, value in (params_in or {}).items():
        params_list.append(
            {"ParameterKey": key, "ParameterValue": _stringify(value)}
        )
    return params_list


def flatten_all_parameters(params_in):
    return {
        param.get("ParameterKey"): param.get("ParameterValue")
        for param in params_in or []
    }


def flatten_parameters(params_in, original_params):
    """Reverse of expand_parameters limited to the configured keys.

    Parameters that were not configured (template defaults) are dropped so
    they do not show up as a difference against the configuration. When
    nothing was configured every parameter is returned.
    """
    all_params = flatten_all_parameters(params_in)
    if not original_params:
        return all_params
    return {key: value for key, value in all_params.items() if key in original_params}


def expand_tags(tags_in) -> List[TagTypeDef]:
    return [{"Key": key, "Value": value} for key, value in (tags_in or {}).items()]


def flatten_tags(tags_in):
    return {tag.get("Key"): tag.get("Value") for tag in tags_in or []}


def flatten_capabilities(capabilities):
    return sorted(set(capabilities or []))
