from __future__ import annotations

from typing import Any, Mapping

from ..models import HttpMethod
from .base import BaseClient


class WebhooksClient(BaseClient):
    def status(self) -> Any:
        return self._request(HttpMethod.GET, "/webhooks/status")

    def create_coupon(self, api_key: str, coupon: Mapping[str, Any]) -> Any:
        return self._request(
            HttpMethod.POST,
            "/webhooks/create-coupon",
            json_body={"coupon": dict(coupon)},
            headers={"X-API-Key": api_key},
        )
