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

import time
from functools import wraps
from random import randint

from botocore.exceptions import ClientError

RETRYABLE_ERROR_CODES = (
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
)


def try_except_retry(count=3, multiplier=2):
    """Retries the wrapped call when AWS throttles it.

    Any other exception is raised straight away. The first wait is a random
    1-3 seconds and grows by the multiplier on every attempt.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            _count = count
            _seconds = randint(1, 3)
            while True:
                try:
                    return func(self, *args, **kwargs)
                except ClientError as e:
                    if e.response["Error"]["Code"] not in RETRYABLE_ERROR_CODES or _count < 1:
                        raise
                    self.logger.warning(
                        "{}, Trying again in {} seconds".format(e, _seconds)
                    )
                    time.sleep(_seconds)
                    _count -= 1
                    _seconds *= multiplier

        return wrapper

    return decorator
