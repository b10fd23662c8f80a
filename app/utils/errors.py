"""
HomeChef API - Custom Exception Classes.

Exception hierarchy for application error handling, plus the handlers
that render every error as ``{"message": ...}``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class HomeChefException(Exception):
    """
    Base exception class for HomeChef application.

    All custom exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code for the error.
        detail: Additional error details.
    """

    def __init__(
        self,
        message: str = "An error occurred",
        status_code: int = 500,
        detail: Optional[str] = None
    ):
        """
        Initialize HomeChefException.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code (default 500).
            detail: Additional error details.
        """
        self.message = message
        self.status_code = status_code
        self.detail = detail or message
        super().__init__(self.message)


class AuthenticationError(HomeChefException):
    """
    Exception raised for authentication failures.

    Used when:
    - Missing bearer token
    - Token rejected by the identity provider
    """

    def __init__(
        self,
        message: str = "unauthorized access",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=401,
            detail=detail
        )


class NotFoundError(HomeChefException):
    """
    Exception raised when a resource is not found.

    Used when:
    - No document matches an id-addressed read or mutation
    """

    def __init__(
        self,
        message: str = "Resource not found",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=404,
            detail=detail
        )


class ValidationError(HomeChefException):
    """
    Exception raised for input validation failures.

    Used when:
    - Invalid input format
    - Missing required fields
    - Business rule violations
    """

    def __init__(
        self,
        message: str = "Validation error",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=400,
            detail=detail
        )


class ForbiddenError(HomeChefException):
    """
    Exception raised for authorization failures.

    Used when:
    - Caller's role is not allowed by the access policy
    - Caller is flagged as fraud
    - Caller does not own the resource
    """

    def __init__(
        self,
        message: str = "forbidden access",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=403,
            detail=detail
        )


class ConflictError(HomeChefException):
    """
    Exception raised for resource conflicts.

    Used when:
    - Duplicate pending request, review or favorite
    - Illegal state transition
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=409,
            detail=detail
        )


class PaymentProviderError(HomeChefException):
    """Exception raised when the checkout provider call fails."""

    def __init__(
        self,
        message: str = "payment provider error",
        detail: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=502,
            detail=detail
        )


def register_exception_handlers(app: FastAPI) -> None:
    """Render all errors as ``{"message": str}`` with the mapped status."""

    @app.exception_handler(HomeChefException)
    async def homechef_exception_handler(request: Request, exc: HomeChefException):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message}
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else first.get("msg")
        else:
            message = "invalid request"
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": message}
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "internal server error"}
        )
