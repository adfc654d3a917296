"""
API middleware for HealScan AI.

Provides:
- Rate limiting
- Request logging
- Error handling and mapping of application errors to responses
"""

import time
from datetime import datetime
from typing import Callable

from fastapi import Request, Response, HTTPException
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from healscan.core.errors import HealScanError
from healscan.models.schemas import ErrorResponse
from healscan.utils.logger import get_logger

logger = get_logger("middleware")


# Rate limiter using client IP
limiter = Limiter(key_func=get_remote_address)


def error_response(status_code: int, error: str, message: str, error_code: str) -> JSONResponse:
    """Build a JSON ErrorResponse."""
    body = ErrorResponse(
        error=error,
        message=message,
        error_code=error_code,
        timestamp=datetime.utcnow()
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request/response logging.

    Logs:
    - Request method and path
    - Response status code
    - Processing time
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable
    ) -> Response:
        start_time = time.time()

        method = request.method
        path = request.url.path
        client_ip = get_remote_address(request)

        logger.info(
            "Request received",
            method=method,
            path=path,
            client_ip=client_ip
        )

        try:
            response = await call_next(request)

            process_time = time.time() - start_time

            logger.info(
                "Request completed",
                method=method,
                path=path,
                status_code=response.status_code,
                process_time_ms=int(process_time * 1000)
            )

            response.headers["X-Process-Time"] = f"{process_time:.4f}"

            return response

        except Exception as e:
            process_time = time.time() - start_time

            logger.error(
                "Request failed",
                method=method,
                path=path,
                error=str(e),
                process_time_ms=int(process_time * 1000)
            )
            raise


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Catches unhandled exceptions and returns safe error responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable
    ) -> Response:
        try:
            return await call_next(request)

        except HTTPException:
            raise

        except ValueError as e:
            logger.warning("Validation error", error=str(e))
            return error_response(400, "Validation Error", str(e), "VALIDATION_ERROR")

        except Exception as e:
            logger.error("Unhandled exception", error=str(e), exc_info=True)
            return error_response(
                500,
                "Internal Server Error",
                "An unexpected error occurred. Please try again.",
                "INTERNAL_ERROR"
            )


def setup_error_handlers(app) -> None:
    """Render application errors as ErrorResponse JSON."""

    @app.exception_handler(HealScanError)
    async def healscan_error_handler(request: Request, exc: HealScanError):
        logger.warning(
            "Request rejected",
            path=request.url.path,
            error_code=exc.error_code,
            error=exc.message
        )
        return error_response(
            exc.status_code,
            type(exc).__name__,
            exc.message,
            exc.error_code
        )


def setup_rate_limiting(app) -> None:
    """Setup rate limiting on the application."""
    app.state.limiter = limiter

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        return error_response(
            429,
            "Rate Limit Exceeded",
            "Too many requests. Please wait before trying again.",
            "RATE_LIMIT_EXCEEDED"
        )
