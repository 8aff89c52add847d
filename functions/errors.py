from fastapi import status


class AppError(Exception):
    """Expected failure surfaced to the client as a 4xx response."""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_operation"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"


class InvalidOperation(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_operation"
