import logging
from typing import Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_429_TOO_MANY_REQUESTS,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from app.core.rate_limit import RateLimitExceeded

logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Configuration manquante ou invalide : fatal au démarrage."""


def _field_message(field: str, err_type: str) -> str:
    # absent, texte, booléen : même message que pour une valeur non numérique
    if err_type in ("greater_than", "greater_than_equal"):
        return f"{field} must be a positive integer"
    return f"{field} must be a number"


def validation_details(errors) -> Dict[str, List[str]]:
    """
    Convertit les erreurs pydantic en {champ: [messages]} pour l'affichage par champ.
    """
    details: Dict[str, List[str]] = {}
    for err in errors:
        loc = [p for p in err.get("loc", ()) if isinstance(p, str) and p not in ("query", "body", "path")]
        field = loc[-1] if loc else "body"
        msg = _field_message(field, err.get("type", ""))
        details.setdefault(field, [])
        if msg not in details[field]:
            details[field].append(msg)
    return details


def error_payload(error: str, details: Dict[str, List[str]] | None = None) -> dict:
    body: dict = {"error": error}
    if details:
        body["details"] = details
    return body


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_payload(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(e.get("type") == "json_invalid" for e in errors):
        logger.warning("Invalid JSON body on %s", request.url.path)
        return JSONResponse(
            status_code=HTTP_400_BAD_REQUEST,
            content=error_payload("Invalid JSON in request body"),
        )

    details = validation_details(errors)
    logger.warning("Invalid input on %s: %s", request.url.path, details)
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content=error_payload("Invalid input", details),
    )


async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded):
    logger.warning("Rate limit exceeded on %s (retry in %ss)", request.url.path, exc.retry_after)
    return JSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content={"error": "Rate limit exceeded", "retryAfter": exc.retry_after},
        headers={"Retry-After": str(exc.retry_after)},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_payload("Internal server error"),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
