"""Application exception types."""

from blog_api.schemas.error import ErrorResponse


class ApiError(Exception):
    """Structured API error that maps directly to contract error payloads."""

    def __init__(self, status_code: int, code: str, message: str, details: dict | None = None) -> None:
        self.status_code = status_code
        self.code = code
        self.payload = ErrorResponse(code=code, message=message, details=details)
        super().__init__(message)


class BadRequestError(ApiError):
    """Caller-correctable input or state conflict."""

    def __init__(self, code: str, message: str = "Bad request") -> None:
        super().__init__(status_code=400, code=code, message=message)


class UnauthorizedError(ApiError):
    """Authentication missing or invalid, or privilege insufficient."""

    def __init__(self, code: str, message: str = "Unauthorized") -> None:
        super().__init__(status_code=401, code=code, message=message)


__all__ = [
    "ApiError",
    "BadRequestError",
    "UnauthorizedError",
]
