from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(str, Enum):
    NETWORK = "network"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    DECODE = "decode"
    AUTH_EXPIRED = "auth_expired"
    AUTH_REJECTED = "auth_rejected"


@dataclass
class ApiError(Exception):
    """Normalized failure of a single logical request.

    ``status_code`` is only populated for ``ErrorKind.HTTP_STATUS``.
    """

    kind: ErrorKind
    message: str
    status_code: int | None = None
    raw_body: object | None = field(default=None, repr=False)

    def __str__(self) -> str:
        status = f" [{self.status_code}]" if self.status_code is not None else ""
        return f"{self.kind.value}{status}: {self.message}"


class NetworkError(ApiError):
    """No response was received from the backend."""


class RequestTimeoutError(ApiError):
    """The client-side deadline elapsed before the call completed."""


class HttpStatusError(ApiError):
    """The backend answered outside the 2xx range."""


class DecodeError(ApiError):
    """A 2xx response carried a body that could not be parsed."""


class AuthExpiredError(ApiError):
    """The backend rejected the session (HTTP 401)."""


class LoginRejectedError(ApiError):
    """Login answered 2xx but without a token; no HTTP error status was sent."""


class ResourceNotFoundError(LookupError):
    def __init__(self, resource: str) -> None:
        super().__init__(f"Resource {resource} not found")
        self.resource = resource
