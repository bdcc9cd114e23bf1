from __future__ import annotations

import logging
from dataclasses import dataclass

from ..exceptions import ApiError, ErrorKind, LoginRejectedError
from ..models import HttpMethod, LoginResponse, MeResponse, RemoteUser, UserIdentity
from ..session import Session, SessionStore
from .base import BaseClient

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "admin"


def _local_part(email: str) -> str:
    return email.split("@", 1)[0]


def identity_from_login(user: RemoteUser | None, email: str) -> UserIdentity:
    user = user or RemoteUser()
    resolved_email = user.email or email
    return UserIdentity(
        id=user.id or user.legacy_id or "api-user",
        email=resolved_email,
        name=user.name or _local_part(resolved_email),
        role=user.role or DEFAULT_ROLE,
    )


def identity_from_me(user: RemoteUser) -> UserIdentity | None:
    if not user.id or not user.email:
        return None
    return UserIdentity(
        id=user.id,
        email=user.email,
        name=_local_part(user.email),
        role=user.role or DEFAULT_ROLE,
    )


@dataclass
class AuthClient(BaseClient):
    session_store: SessionStore | None = None

    def __post_init__(self) -> None:
        if self.session_store is None:
            self.session_store = self.http.session_store

    def login(self, email: str, password: str) -> Session:
        logger.info("login_attempt")
        data = self._request(
            HttpMethod.POST,
            "/auth/login",
            json_body={"email": email, "password": password},
            handle_auth_expiry=False,
        )
        response = LoginResponse.model_validate(data if isinstance(data, dict) else {})
        if not response.success or not response.token:
            logger.warning("login_rejected")
            raise LoginRejectedError(
                kind=ErrorKind.AUTH_REJECTED,
                message=response.message or "Invalid email or password",
                raw_body=data,
            )
        session = self.session_store.set(response.token, identity_from_login(response.user, email))
        logger.info("login_success", extra={"user_id": session.user.id if session.user else None})
        return session

    def me(self) -> MeResponse:
        data = self._request(HttpMethod.GET, "/auth/me")
        return MeResponse.model_validate(data if isinstance(data, dict) else {})

    def refresh_identity(self) -> UserIdentity | None:
        response = self.me()
        if not response.success or response.user is None:
            return None
        identity = identity_from_me(response.user)
        if identity is not None:
            self.session_store.update_user(identity)
        return identity

    def get_identity(self) -> UserIdentity | None:
        session = self.session_store.get()
        if session.token and session.user:
            try:
                refreshed = self.refresh_identity()
            except ApiError as error:
                logger.error("identity_refresh_failed", extra={"kind": error.kind.value, "error": error.message})
            else:
                if refreshed is not None:
                    return refreshed
        return self.session_store.get().user

    def logout(self) -> None:
        logger.info("logout")
        self.session_store.clear()

    def check(self) -> bool:
        return self.session_store.get().user is not None

    def get_permissions(self) -> str | None:
        user = self.session_store.get().user
        return user.role if user else None
