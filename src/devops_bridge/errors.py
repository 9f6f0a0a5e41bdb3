"""Exceptions raised by the DevOps Center bridge."""


class DevOpsBridgeError(Exception):
    """Base exception for bridge errors."""

    pass


class MissingConnectionError(DevOpsBridgeError):
    """The resolved connection lacks an access token or instance URL.

    Raised before any request is made. Failures of the request itself are
    reported as ``ErrorDetail`` values instead.
    """

    def __init__(self, message: str = "Missing access token or instance URL."):
        super().__init__(message)


class ToolInputError(DevOpsBridgeError):
    """Tool arguments failed validation."""

    pass
