# errors.py
class ServiceError(Exception):
    """Base class for errors raised by the record and aggregation services."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """A required field is missing or a reference does not resolve."""

    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


class StorageError(ServiceError):
    """The database is unreachable or an operation on it failed."""

    status_code = 500
