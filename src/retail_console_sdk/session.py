from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable

from pydantic import ValidationError

from .models import UserIdentity
from .storage import FileKeyValueStore, KeyValueStore

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


@dataclass(frozen=True)
class Session:
    token: str | None = None
    user: UserIdentity | None = None
    # Bumped on every login/logout so late 401s from an older session are ignored.
    generation: int = 0

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)


SessionListener = Callable[[Session, str], None]


class SessionStore:
    """Sole owner of the persisted token/user pair.

    Readers get immutable ``Session`` snapshots; listeners are told about every
    change together with a reason (``login``, ``identity``, ``logout``,
    ``expired``).
    """

    def __init__(self, storage: KeyValueStore | None = None) -> None:
        self._storage = storage if storage is not None else FileKeyValueStore()
        self._lock = threading.RLock()
        self._generation = 0
        self._invalidated = False
        self._listeners: list[SessionListener] = []

    def get(self) -> Session:
        with self._lock:
            return Session(
                token=self._storage.get(TOKEN_KEY) or None,
                user=self._load_user(),
                generation=self._generation,
            )

    def set(self, token: str, user: UserIdentity) -> Session:
        with self._lock:
            self._storage.set(TOKEN_KEY, token)
            self._storage.set(USER_KEY, user.model_dump_json())
            self._generation += 1
            self._invalidated = False
            session = self.get()
        self._notify(session, "login")
        return session

    def update_user(self, user: UserIdentity) -> Session:
        with self._lock:
            self._storage.set(USER_KEY, user.model_dump_json())
            session = self.get()
        self._notify(session, "identity")
        return session

    def clear(self) -> Session:
        with self._lock:
            self._wipe()
            self._generation += 1
            self._invalidated = False
            session = self.get()
        self._notify(session, "logout")
        return session

    def invalidate(self, generation: int) -> bool:
        """Clear the session after an authentication rejection.

        Returns True only for the first rejection observed for the session
        generation the request was built with; later or stale rejections are
        no-ops so the login redirect happens once.
        """
        with self._lock:
            if generation != self._generation or self._invalidated:
                return False
            self._wipe()
            self._invalidated = True
            session = self.get()
        logger.warning("session_invalidated", extra={"generation": generation})
        self._notify(session, "expired")
        return True

    def on_change(self, listener: SessionListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _wipe(self) -> None:
        self._storage.delete(TOKEN_KEY)
        self._storage.delete(USER_KEY)

    def _load_user(self) -> UserIdentity | None:
        raw = self._storage.get(USER_KEY)
        if not raw:
            return None
        try:
            return UserIdentity.model_validate_json(raw)
        except ValidationError:
            logger.warning("stored_user_corrupt")
            self._storage.delete(USER_KEY)
            return None

    def _notify(self, session: Session, reason: str) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(session, reason)
