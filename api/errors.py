# api/errors.py
"""Map tracker exceptions and HTTP errors to JSON bodies with a "message" key."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tracker.common.exceptions import (
    ContractorNotFoundError,
    DuplicateContractorError,
    EmptyFileError,
    HeaderMismatchError,
    NoValidRowsError,
    RateLimitExceededError,
    StorageError,
    TrackerError,
)

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            content={"success": False, "message": str(exc.detail)},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
            for error in exc.errors()
        ]
        return JSONResponse(content={"message": "Invalid data", "errors": errors}, status_code=422)

    @app.exception_handler(EmptyFileError)
    async def empty_file_handler(request: Request, exc: EmptyFileError):
        return JSONResponse(content={"message": exc.message}, status_code=400)

    @app.exception_handler(HeaderMismatchError)
    async def header_mismatch_handler(request: Request, exc: HeaderMismatchError):
        content = {"message": exc.message, "expected": exc.expected, "received": exc.received}
        if exc.suggested_mode:
            content["suggestedMode"] = exc.suggested_mode
        return JSONResponse(content=content, status_code=400)

    @app.exception_handler(NoValidRowsError)
    async def no_valid_rows_handler(request: Request, exc: NoValidRowsError):
        return JSONResponse(content={"message": exc.message, "errors": exc.errors}, status_code=400)

    @app.exception_handler(ContractorNotFoundError)
    async def not_found_handler(request: Request, exc: ContractorNotFoundError):
        return JSONResponse(content={"message": exc.message}, status_code=404)

    @app.exception_handler(DuplicateContractorError)
    async def duplicate_handler(request: Request, exc: DuplicateContractorError):
        return JSONResponse(content={"message": exc.message}, status_code=409)

    @app.exception_handler(RateLimitExceededError)
    async def rate_limit_handler(request: Request, exc: RateLimitExceededError):
        return JSONResponse(
            content={"success": False, "message": exc.message},
            status_code=429,
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"Storage failure: {exc}")
        return JSONResponse(content={"message": exc.message}, status_code=500)

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(request: Request, exc: TrackerError):
        logger.error(f"Unhandled tracker error: {exc}")
        return JSONResponse(content={"message": exc.message}, status_code=400)
