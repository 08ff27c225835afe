"""Error kinds raised by the store and request layer.

Each kind maps to one HTTP status in ``register_exception_handlers``; the
pure services never raise or catch these.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class WalkMateError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict:
        return {"detail": self.message}


class NotFound(WalkMateError):
    status_code = 404

    def __init__(self, kind: str, key: str | None = None):
        super().__init__(f"{kind} not found")
        self.kind = kind
        self.key = key


class ValidationFailed(WalkMateError):
    status_code = 400

    def __init__(self, errors: list[str]):
        super().__init__("Validation failed")
        self.errors = list(errors)

    def to_body(self) -> dict:
        return {"detail": self.message, "errors": self.errors}


class InvalidDate(WalkMateError):
    status_code = 400

    def __init__(self, value):
        super().__init__(f"Invalid date format: {value}")
        self.value = value


class StoreFailure(WalkMateError):
    status_code = 500

    def __init__(self, operation: str):
        super().__init__(f"{operation} failed")
        self.operation = operation


def _field_name(loc) -> str:
    # loc looks like ("body", "steps") or ("query", "period")
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "body"


def describe_validation_error(err: dict) -> str:
    """Render one pydantic error as ``"<field> <problem>"``."""
    field = _field_name(err.get("loc", ()))
    kind = err.get("type", "")
    ctx = err.get("ctx") or {}

    if kind in ("missing", "string_too_short"):
        return f"{field} is required"
    if kind == "greater_than_equal":
        return f"{field} must be at least {ctx.get('ge')}"
    if kind == "greater_than":
        return f"{field} must be greater than {ctx.get('gt')}"
    if kind == "less_than_equal":
        return f"{field} must be at most {ctx.get('le')}"
    if kind == "finite_number":
        return f"{field} must be a finite number"
    if kind.startswith("int_"):
        return f"{field} must be an integer"
    if kind.startswith("float_"):
        return f"{field} must be a number"
    if kind.startswith(("datetime_", "date_")):
        return f"{field} must be a valid date"
    if kind.startswith("string_"):
        return f"{field} must be a string"
    return f"{field}: {err.get('msg', 'invalid value')}"


async def walkmate_error_handler(request: Request, exc: WalkMateError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s -> %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s -> %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [describe_validation_error(e) for e in exc.errors()]
    logger.info(
        "%s %s -> %d validation error(s)",
        request.method,
        request.url.path,
        len(errors),
    )
    return JSONResponse(status_code=400, content=ValidationFailed(errors).to_body())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WalkMateError, walkmate_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
