# tastetab/core/errors.py
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """An error that maps directly onto an HTTP status and a JSON body.

    The body is ``{"error": <message>}`` plus ``"field"`` when the failure
    can be pinned on one request field.
    """

    def __init__(self, status_code: int, error: str, field: Optional[str] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.field = field

    def to_dict(self) -> dict:
        content = {"error": self.error}
        if self.field is not None:
            content["field"] = self.field
        return content


def _validation_field(loc) -> Optional[str]:
    # loc looks like ("body", "items", 0, "price"); drop the "body"/"query" prefix
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or None


async def api_error_handler(request: Request, exc: APIError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = _validation_field(first.get("loc", ()))
    message = first.get("msg", "Invalid request body")
    logger.info(f"Rejected {request.method} {request.url.path}: {field}: {message}")
    content = {"error": message}
    if field:
        content["field"] = field
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
