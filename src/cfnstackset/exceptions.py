class StackSetError(Exception):
    """Base class for errors raised while managing a stack set."""


class ConfigurationError(StackSetError):
    def __init__(self, message: str, errors=None):
        super().__init__(message)
        self.errors = errors or []


class InvalidTemplateError(ConfigurationError):
    def __init__(self, detail):
        super().__init__(
            "template body contains an invalid JSON or YAML: {}".format(detail)
        )
        self.detail = detail


class StackSetDeletedError(StackSetError):
    def __init__(self, stack_set_id: str, status: str):
        super().__init__(
            "{}: Stack set has status {}.".format(stack_set_id, status)
        )
        self.stack_set_id = stack_set_id
        self.status = status


class UnexpectedStateError(StackSetError):
    def __init__(self, state: str, expected):
        super().__init__(
            "unexpected state '{}', wanted target '{}'".format(
                state, ", ".join(expected)
            )
        )
        self.state = state
        self.expected = list(expected)


class WaitTimeoutError(StackSetError):
    def __init__(self, last_state: str, expected, timeout: float):
        super().__init__(
            "timeout while waiting for state to become '{}' "
            "(last state: '{}', timeout: {}s)".format(
                ", ".join(expected), last_state, int(timeout)
            )
        )
        self.last_state = last_state
        self.expected = list(expected)
        self.timeout = timeout
