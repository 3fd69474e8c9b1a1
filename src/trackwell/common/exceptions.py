"""Trackwell exception hierarchy."""


class TrackwellError(Exception):
    """Base exception for all Trackwell errors."""

    status_code = 400

    def __init__(self, message: str = "", code: str = "TRACKWELL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class NotFoundError(TrackwellError):
    """Raised when a referenced product, checkpoint, transfer, certification
    or authorization entry does not exist."""

    status_code = 404

    def __init__(self, message: str = "Record not found"):
        super().__init__(message, code="NOT_FOUND")


class UnauthorizedError(TrackwellError):
    """Raised when the caller lacks the required relationship to a record."""

    status_code = 403

    def __init__(self, message: str = "Caller is not authorized"):
        super().__init__(message, code="UNAUTHORIZED")


class InvalidStateError(TrackwellError):
    """Raised against recalled products or records not in the required status."""

    status_code = 409

    def __init__(self, message: str = "Operation not allowed in current state"):
        super().__init__(message, code="INVALID_STATE")


class InvalidArgumentError(TrackwellError):
    """Raised when an argument is well-formed but semantically invalid."""

    status_code = 422

    def __init__(self, message: str = "Invalid argument"):
        super().__init__(message, code="INVALID_ARGUMENT")
