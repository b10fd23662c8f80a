# app/middleware/db_middleware.py
"""
Lazy Database Connection Middleware.

Ensures MongoDB connection is established before processing requests.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import logging

from database import Database
from settings import settings

logger = logging.getLogger(__name__)

# Served without touching MongoDB
SKIP_PATHS = {"/", "/health", "/health/detailed"}


class LazyDatabaseMiddleware(BaseHTTPMiddleware):
    """Middleware to ensure database connection before handling requests."""

    async def dispatch(self, request: Request, call_next):
        """
        Ensure database is connected before processing request.

        Covers the case where the startup connection attempt failed. If the
        retry fails too, the request is answered with 503 instead of
        reaching handlers whose collections were never initialized.
        """
        if request.url.path in SKIP_PATHS:
            return await call_next(request)

        if not Database._initialized:
            try:
                logger.info("Lazy initializing MongoDB connection...")
                await Database.connect_db(
                    database_url=settings.DATABASE_URL,
                    database_name=settings.DATABASE_NAME
                )
            except Exception as e:
                logger.error(f"Failed to initialize database for {request.method} {request.url.path}: {e}")
                return JSONResponse(
                    status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                    content={"message": "database unavailable"}
                )

        return await call_next(request)
