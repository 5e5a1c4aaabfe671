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

from cfnstackset.exceptions import UnexpectedStateError, WaitTimeoutError

MAX_POLL_INTERVAL = 10


class StateWaiter(object):
    """Polls a refresh function until it reports one of the target states.

    Example:
        waiter = StateWaiter(logger,
                             pending=["RUNNING"],
                             target=["ACTIVE"],
                             refresh=lambda: (response, response_status),
                             timeout=1800,
                             min_timeout=5)
        response = waiter.wait_for_state()

    refresh() returns a (result, status) tuple. Exceptions raised by
    refresh() stop the wait and propagate to the caller.
    """

    def __init__(self, logger, pending, target, refresh, timeout,
                 min_timeout=1, delay=0):
        self.logger = logger
        self.pending = list(pending)
        self.target = list(target)
        self.refresh = refresh
        self.timeout = timeout
        self.min_timeout = min_timeout
        self.delay = delay
        self.last_state = None

    def _next_interval(self, interval):
        return min(max(interval * 2, self.min_timeout), MAX_POLL_INTERVAL)

    def wait_for_state(self):
        deadline = time.monotonic() + self.timeout
        if self.delay:
            time.sleep(self.delay)

        interval = self.min_timeout
        while True:
            result, state = self.refresh()
            self.last_state = state
            self.logger.debug("Waiting for state {}, current state: {}"
                              .format(self.target, state))

            if state in self.target:
                return result
            if state not in self.pending:
                raise UnexpectedStateError(state, self.target)

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise WaitTimeoutError(state, self.target, self.timeout)
            time.sleep(min(interval, remaining))
            interval = self._next_interval(interval)
