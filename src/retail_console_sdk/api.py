from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import httpx

from .access_control import can
from .clients import (
    AuthClient,
    CouponsClient,
    EmployeesClient,
    HealthClient,
    OrdersClient,
    ProductsClient,
    SettingsClient,
    WebhooksClient,
)
from .config import ClientConfig
from .data_provider import DataProvider
from .http_client import HttpClient
from .retry import RetryPolicy
from .session import SessionStore
from .storage import KeyValueStore


@dataclass
class ConsoleApi:
    config: ClientConfig
    storage: KeyValueStore | None = None
    transport: httpx.BaseTransport | None = None
    retry_policy: RetryPolicy | None = None
    sleep: Callable[[float], None] | None = None
    on_session_invalidated: Callable[[], None] | None = None

    def __post_init__(self) -> None:
        self.session_store = SessionStore(self.storage)
        kwargs = {"sleep": self.sleep} if self.sleep is not None else {}
        self.http = HttpClient(
            self.config,
            self.session_store,
            transport=self.transport,
            retry_policy=self.retry_policy,
            **kwargs,
        )
        self.http.register_session_invalidated_handler(self.on_session_invalidated)
        self.data = DataProvider(self.http)

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http, session_store=self.session_store)

    def health_client(self) -> HealthClient:
        return HealthClient(http=self.http)

    def products_client(self) -> ProductsClient:
        return ProductsClient(http=self.http)

    def coupons_client(self) -> CouponsClient:
        return CouponsClient(http=self.http)

    def orders_client(self) -> OrdersClient:
        return OrdersClient(http=self.http)

    def employees_client(self) -> EmployeesClient:
        return EmployeesClient(http=self.http)

    def settings_client(self) -> SettingsClient:
        return SettingsClient(http=self.http)

    def webhooks_client(self) -> WebhooksClient:
        return WebhooksClient(http=self.http)

    def can(self, resource: str | None = None) -> bool:
        return can(self.session_store.get().user, resource)

    def close(self) -> None:
        self.http.close()
