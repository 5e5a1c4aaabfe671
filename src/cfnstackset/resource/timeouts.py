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
import re

from cfnstackset.exceptions import ConfigurationError

DEFAULT_TIMEOUT = "30m"

_DURATION = re.compile(r"^\s*(?:(\d+)h)?\s*(?:(\d+)m)?\s*(?:(\d+)s)?\s*$")


def parse_duration(value):
    """Converts a duration such as '30m', '1h30m' or '90s' into seconds.

    A bare number is read as seconds.
    """
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if text.isdigit():
        return float(text)
    match = _DURATION.match(text)
    if not text or match is None or not any(match.groups()):
        raise ConfigurationError("invalid duration: '{}'".format(value))
    hours, minutes, seconds = (int(group or 0) for group in match.groups())
    return float(hours * 3600 + minutes * 60 + seconds)


class Timeouts(object):
    """Create, update and delete timeouts in seconds.

    Values come from the STACK_SET_{CREATE,UPDATE,DELETE}_TIMEOUT
    environment variables and can be overridden per resource with a
    'timeouts' block in the configuration.
    """

    OPERATIONS = ("create", "update", "delete")

    def __init__(self, create=DEFAULT_TIMEOUT, update=DEFAULT_TIMEOUT,
                 delete=DEFAULT_TIMEOUT):
        self.create = parse_duration(create)
        self.update = parse_duration(update)
        self.delete = parse_duration(delete)

    @classmethod
    def from_environ(cls):
        return cls(**{
            operation: os.environ.get(
                "STACK_SET_{}_TIMEOUT".format(operation.upper()), DEFAULT_TIMEOUT)
            for operation in cls.OPERATIONS
        })

    def override(self, timeouts_config):
        """Returns a copy with the values given in a 'timeouts' block applied."""
        values = {operation: getattr(self, operation) for operation in self.OPERATIONS}
        for operation, value in (timeouts_config or {}).items():
            if operation not in self.OPERATIONS:
                raise ConfigurationError(
                    "unsupported timeout '{}', expected one of {}".format(
                        operation, ", ".join(self.OPERATIONS)))
            values[operation] = value
        return Timeouts(**values)
