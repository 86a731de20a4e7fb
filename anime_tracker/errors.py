"""Error taxonomy for the API.

Every error is an ``HTTPException`` so services and routes can raise them the
same way; the handlers in ``main`` turn them into ``{"error": <message>}``.
"""
from fastapi import HTTPException, status


class InvalidRequest(HTTPException):
    def __init__(self, detail: str = "Invalid request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidReference(InvalidRequest):
    def __init__(self, detail: str = "Referenced resource does not exist"):
        super().__init__(detail=detail)


class DuplicateUser(InvalidRequest):
    def __init__(self, detail: str = "User already exists"):
        super().__init__(detail=detail)


class Unauthenticated(HTTPException):
    def __init__(self, detail: str = "Access denied"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredential(Unauthenticated):
    def __init__(self, detail: str = "Invalid token"):
        super().__init__(detail=detail)


class InvalidCredentials(Unauthenticated):
    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail=detail)


class Forbidden(HTTPException):
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class Conflict(HTTPException):
    def __init__(self, detail: str = "Entry changed concurrently, please retry"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class StorageFailure(HTTPException):
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class UpstreamUnavailable(HTTPException):
    def __init__(self, detail: str = "Failed to fetch anime data"):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)
