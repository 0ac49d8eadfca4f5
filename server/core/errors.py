# server/core/errors.py

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = structlog.get_logger()


# -------------------------------
# Error Taxonomy
# -------------------------------

class SocialError(Exception):
    """
    Base class for errors that are reported to the caller as {"error": message}.
    """
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(SocialError):
    status_code = 400
    default_message = "Fill all fields."


class ConflictError(SocialError):
    # 400 rather than 409, existing clients only branch on 400
    status_code = 400
    default_message = "User already exists."


class AuthError(SocialError):
    status_code = 401
    default_message = "Invalid credentials."


class NotFoundError(SocialError):
    status_code = 404
    default_message = "Not found."


class InternalError(SocialError):
    status_code = 500


# -------------------------------
# Exception Handlers
# -------------------------------

def setup_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(SocialError)
    async def social_error_handler(request: Request, exc: SocialError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("request_failed", path=request.url.path, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("malformed_request", path=request.url.path, errors=len(exc.errors()))
        return JSONResponse(status_code=400, content={"error": ValidationError.default_message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
