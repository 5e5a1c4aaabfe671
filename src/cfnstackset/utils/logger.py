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
import logging

from cfnstackset.utils.datetime_encoder import DateTimeEncoder


class Logger(object):
    """Wraps the root logger and emits one JSON formatted record per call.

    Messages may be strings, JSON strings or raw boto3 responses; they are
    serialized with DateTimeEncoder so timestamps in API responses do not
    break the log line.

    Example:
        logger = Logger(loglevel='info')
        logger.info(cfn_client.describe_stack_set(StackSetName='x'))
    """

    def __init__(self, loglevel="warning"):
        self.config(loglevel=loglevel)

    def config(self, loglevel="warning"):
        loglevel = logging.getLevelName(str(loglevel).upper())
        mainlogger = logging.getLogger()
        mainlogger.setLevel(loglevel)

        logfmt = (
            '{"time_stamp": "%(asctime)s", "log_level": "%(levelname)s", '
            '"log_message": %(message)s}'
        )
        if len(mainlogger.handlers) == 0:
            mainlogger.addHandler(logging.StreamHandler())
        mainlogger.handlers[0].setFormatter(logging.Formatter(logfmt))
        self.log = logging.LoggerAdapter(mainlogger, {})

    def _format(self, message):
        if isinstance(message, str):
            try:
                message = json.loads(message)
            except ValueError:
                pass
        try:
            return json.dumps(message, indent=4, cls=DateTimeEncoder)
        except (TypeError, ValueError):
            return json.dumps(str(message))

    def debug(self, message, **kwargs):
        self.log.debug(self._format(message), **kwargs)

    def info(self, message, **kwargs):
        self.log.info(self._format(message), **kwargs)

    def warning(self, message, **kwargs):
        self.log.warning(self._format(message), **kwargs)

    def error(self, message, **kwargs):
        self.log.error(self._format(message), **kwargs)

    def critical(self, message, **kwargs):
        self.log.critical(self._format(message), **kwargs)

    def exception(self, message, **kwargs):
        self.log.exception(self._format(message), **kwargs)

    def log_unhandled_exception(self, message):
        """Logs the exception with its traceback. Callers re-raise."""
        self.log.exception(self._format("Unhandled Exception: {}".format(message)))
