from __future__ import annotations

from typing import Any

from ..models import HttpMethod
from .base import BaseClient


class ProductsClient(BaseClient):
    def list_active(self) -> Any:
        return self._request(HttpMethod.GET, "/products/active")

    def toggle(self, product_id: str) -> Any:
        return self._request(HttpMethod.PATCH, f"/products/{product_id}/toggle")

    def update_inventory(self, product_id: str, inventory_quantity: int) -> Any:
        if inventory_quantity < 0:
            raise ValueError("inventory_quantity must be >= 0")
        return self._request(
            HttpMethod.PATCH,
            f"/products/{product_id}/inventory",
            json_body={"inventory_quantity": inventory_quantity},
        )

    def sync_from_shopify(self) -> Any:
        return self._request(HttpMethod.POST, "/products/sync/shopify")
