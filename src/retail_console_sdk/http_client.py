from __future__ import annotations

import json
import logging
import time
from dataclasses import replace
from typing import Any, Callable, Mapping

import httpx

from .config import ClientConfig
from .error_mapper import (
    auth_expired_error,
    deadline_exceeded_error,
    decode_error,
    error_from_response,
    is_json_response,
    is_route_not_found,
    normalize_exception,
)
from .exceptions import ApiError
from .models import HttpMethod, RequestDescriptor
from .retry import RetryPolicy
from .session import Session, SessionStore

logger = logging.getLogger(__name__)

BASE_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

SessionInvalidatedHandler = Callable[[], None]


class HttpClient:
    """Executes one logical request: auth header, timeout, retries, normalized errors."""

    def __init__(
        self,
        config: ClientConfig,
        session_store: SessionStore,
        *,
        transport: httpx.BaseTransport | None = None,
        client: httpx.Client | None = None,
        retry_policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.session_store = session_store
        self._client = client or httpx.Client(
            base_url=config.api_base_url,
            verify=config.verify_ssl,
            transport=transport,
        )
        self.retry_policy = retry_policy or RetryPolicy(
            max_attempts=config.retry_max_attempts,
            base_delay_seconds=config.retry_base_delay_seconds,
        )
        self._sleep = sleep
        self._clock = clock
        self._session_invalidated_handler: SessionInvalidatedHandler | None = None

    def register_session_invalidated_handler(self, handler: SessionInvalidatedHandler | None) -> None:
        """Called once per expired session, typically to navigate to the login screen."""
        self._session_invalidated_handler = handler

    def build_descriptor(
        self,
        method: HttpMethod | str,
        path: str,
        *,
        json_body: Any = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        handle_auth_expiry: bool = True,
    ) -> RequestDescriptor:
        body = json.dumps(json_body).encode("utf-8") if json_body is not None else None
        return RequestDescriptor(
            path=path,
            method=HttpMethod(method.upper()),
            headers=dict(headers or {}),
            body=body,
            params=dict(params) if params else None,
            timeout_seconds=self.config.timeout_seconds,
            max_attempts=self.retry_policy.max_attempts,
            handle_auth_expiry=handle_auth_expiry,
        )

    def request(self, method: HttpMethod | str, path: str, **kwargs: Any) -> Any:
        return self.execute(self.build_descriptor(method, path, **kwargs))

    def execute(self, descriptor: RequestDescriptor) -> Any:
        policy = replace(self.retry_policy, max_attempts=descriptor.max_attempts)
        attempt = 0
        while True:
            attempt += 1
            try:
                return self._attempt(descriptor)
            except ApiError as error:
                if not policy.should_retry(error, attempt):
                    log = logger.debug if is_route_not_found(error) else logger.info
                    log(
                        "request_failed",
                        extra={
                            "method": descriptor.method.value,
                            "path": descriptor.path,
                            "attempt": attempt,
                            "kind": error.kind.value,
                            "status_code": error.status_code,
                        },
                    )
                    raise
                delay = policy.delay_for(attempt)
                logger.warning(
                    "request_retry",
                    extra={
                        "method": descriptor.method.value,
                        "path": descriptor.path,
                        "attempt": attempt,
                        "max_attempts": policy.max_attempts,
                        "delay_seconds": delay,
                        "error": error.message,
                    },
                )
                self._sleep(delay)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _attempt(self, descriptor: RequestDescriptor) -> Any:
        # The session is read per attempt: the token may change between retries.
        session = self.session_store.get()
        deadline = self._clock() + descriptor.timeout_seconds
        request = self._client.build_request(
            descriptor.method.value,
            descriptor.path,
            headers=self._build_headers(descriptor.headers, session),
            content=descriptor.body,
            params=descriptor.params,
            timeout=httpx.Timeout(descriptor.timeout_seconds),
        )
        try:
            streamed = self._client.send(request, stream=True)
            try:
                content = self._read_before(streamed, deadline)
            finally:
                streamed.close()
            # Body is already decoded, so the encoding header must not be applied twice.
            headers = streamed.headers.copy()
            headers.pop("content-encoding", None)
            response = httpx.Response(
                streamed.status_code,
                headers=headers,
                content=content,
                request=request,
            )
        except httpx.HTTPError as exc:
            raise normalize_exception(exc) from exc

        if response.status_code == 401 and descriptor.handle_auth_expiry:
            self._expire_session(session)
            raise auth_expired_error(response)
        if not response.is_success:
            raise error_from_response(response)
        if not response.content:
            return None
        if not is_json_response(response):
            return response.text
        try:
            return response.json()
        except ValueError as exc:
            raise decode_error(response, exc) from exc

    def _read_before(self, response: httpx.Response, deadline: float) -> bytes:
        """Read the whole body, giving up once the attempt deadline has passed."""
        if self._clock() >= deadline:
            raise deadline_exceeded_error()
        chunks = []
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            if self._clock() >= deadline:
                raise deadline_exceeded_error()
        return b"".join(chunks)

    @staticmethod
    def _build_headers(extra: Mapping[str, str], session: Session) -> dict[str, str]:
        headers = dict(BASE_HEADERS)
        if session.token:
            headers["Authorization"] = f"Bearer {session.token}"
        headers.update(extra)
        return headers

    def _expire_session(self, session: Session) -> None:
        if self.session_store.invalidate(session.generation) and self._session_invalidated_handler:
            self._session_invalidated_handler()
