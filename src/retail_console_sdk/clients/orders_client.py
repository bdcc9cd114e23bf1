from __future__ import annotations

from typing import Any

from ..models import HttpMethod
from .base import BaseClient


class OrdersClient(BaseClient):
    def update_status(self, order_id: str, status: str, payment_status: str | None = None) -> Any:
        payload: dict[str, Any] = {"status": status}
        if payment_status is not None:
            payload["payment_status"] = payment_status
        return self._request(HttpMethod.PATCH, f"/orders/{order_id}/status", json_body=payload)
