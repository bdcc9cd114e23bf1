from __future__ import annotations

import json
import re
from typing import Any

import httpx

from .exceptions import (
    ApiError,
    AuthExpiredError,
    DecodeError,
    ErrorKind,
    HttpStatusError,
    NetworkError,
    RequestTimeoutError,
)

ROUTE_NOT_FOUND_MARKER = "route not found"
_EXPRESS_MISSING_ROUTE = re.compile(r"^\s*cannot (get|post|put|patch|delete) /", re.IGNORECASE)


def is_json_response(response: httpx.Response) -> bool:
    return "application/json" in response.headers.get("content-type", "").lower()


def read_body(response: httpx.Response) -> Any:
    """Best-effort body for error reporting: JSON when possible, else text."""
    if not response.content:
        return None
    if is_json_response(response):
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return response.text
    return response.text


def deadline_exceeded_error() -> RequestTimeoutError:
    return RequestTimeoutError(kind=ErrorKind.TIMEOUT, message="Request timeout")


def normalize_exception(exc: Exception) -> ApiError:
    if isinstance(exc, ApiError):
        return exc
    if isinstance(exc, httpx.TimeoutException):
        return deadline_exceeded_error()
    return NetworkError(kind=ErrorKind.NETWORK, message=str(exc) or type(exc).__name__)


def error_from_response(response: httpx.Response) -> HttpStatusError:
    body = read_body(response)
    message = None
    if isinstance(body, dict) and body.get("message"):
        message = str(body["message"])
    if not message:
        message = f"HTTP {response.status_code}: {response.reason_phrase}"
    return HttpStatusError(
        kind=ErrorKind.HTTP_STATUS,
        message=message,
        status_code=response.status_code,
        raw_body=body,
    )


def auth_expired_error(response: httpx.Response) -> AuthExpiredError:
    body = read_body(response)
    message = "Session expired"
    if isinstance(body, dict) and body.get("message"):
        message = str(body["message"])
    return AuthExpiredError(kind=ErrorKind.AUTH_EXPIRED, message=message, raw_body=body)


def decode_error(response: httpx.Response, exc: Exception) -> DecodeError:
    return DecodeError(
        kind=ErrorKind.DECODE,
        message=f"Invalid JSON response: {exc}",
        raw_body=response.text,
    )


def is_route_not_found(error: BaseException) -> bool:
    if not isinstance(error, HttpStatusError) or error.status_code != 404:
        return False
    if ROUTE_NOT_FOUND_MARKER in error.message.lower():
        return True
    raw = error.raw_body
    return isinstance(raw, str) and bool(_EXPRESS_MISSING_ROUTE.match(raw))
