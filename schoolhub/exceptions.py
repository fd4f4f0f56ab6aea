from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional


class DatabaseError(Exception):
    """Single error kind raised by the persistence layer for any store failure."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class SchoolNotFound(DatabaseError):
    pass


class FileStorageError(Exception):
    status_code = 500
    default_message = "File storage failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class FileTooLarge(FileStorageError):
    status_code = 400
    default_message = "Image file size must be less than 5MB"


class UnsupportedFileType(FileStorageError):
    status_code = 400
    default_message = "Only JPEG, PNG, and WebP images are allowed"


class StorageWriteFailed(FileStorageError):
    status_code = 500
    default_message = "Failed to save image file"


class APIException(HTTPException):
    def __init__(self, status_code: int, detail: str, details: Optional[Any] = None, extra: Optional[Dict[str, Any]] = None):
        super().__init__(status_code=status_code, detail=detail)
        self.details = details
        self.extra = extra or {}


def create_error_response(error_message: str, details: Optional[Any] = None, **extra: Any) -> dict:
    """Create a standardized error response"""
    content: Dict[str, Any] = {"error": error_message}
    if details is not None:
        content["details"] = details
    content.update(extra)
    return content


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    details = getattr(exc, "details", None)
    extra = getattr(exc, "extra", None) or {}
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(str(exc.detail), details, **extra),
        headers=getattr(exc, "headers", None),
    )
