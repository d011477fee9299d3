import logging
from fastapi.exceptions import RequestValidationError
from fastapi import Request, HTTPException, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BatePapoError(Exception):
    """Base class for errors reported back to the caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(BatePapoError):
    status_code = 422
    default_detail = "Invalid input"


class ConflictError(BatePapoError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Name already in use"


class NotFoundError(BatePapoError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class AuthorizationError(BatePapoError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not the author of this message"


class StoreError(BatePapoError):
    """The underlying storage failed. The detail is logged, never returned."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Storage unavailable"


def register_exception_handlers(app):
    @app.exception_handler(StoreError)
    async def store_exception_handler(request: Request, exc: StoreError):
        logger.error("Store error: %s", exc.detail, exc_info=exc.__cause__)
        return JSONResponse({"error": "Internal server error"}, status_code=exc.status_code)

    @app.exception_handler(BatePapoError)
    async def domain_exception_handler(request: Request, exc: BatePapoError):
        logger.info("Request rejected", extra={"status_code": exc.status_code, "error": type(exc).__name__})
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.info("HTTP exception", extra={"status_code": exc.status_code})
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info("Validation error", extra={"errors": exc.errors()})
        return JSONResponse({"error": "Validation error", "details": jsonable_errors(exc)}, status_code=422)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return JSONResponse({"error": "Internal server error"}, status_code=500)


def jsonable_errors(exc: RequestValidationError) -> list:
    # pydantic may put the raw exception object in "ctx"
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]
