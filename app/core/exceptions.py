"""
Domain errors raised by the service layer.

Each one is an HTTPException so FastAPI answers the caller directly with
{"detail": message}. Nothing here is retried.
"""

from fastapi import HTTPException, status


class ValidationError(HTTPException):
    def __init__(self, detail: str = "All fields are required"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DeadlinePassed(HTTPException):
    """Student tried to change a registration once the drive deadline arrived."""

    def __init__(self):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This drive has ended. You cannot update your status after the deadline."
        )


class Unauthorized(HTTPException):
    def __init__(self, detail: str = "Access token required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(HTTPException):
    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
