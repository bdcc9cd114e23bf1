from __future__ import annotations

from typing import Any

from ..models import HttpMethod
from .base import BaseClient

SYNC_PLATFORMS = {"shopify", "stripe", "both"}


class CouponsClient(BaseClient):
    def toggle(self, coupon_id: str) -> Any:
        return self._request(HttpMethod.PATCH, f"/coupons/{coupon_id}/toggle")

    def sync(self, platform: str) -> Any:
        if platform not in SYNC_PLATFORMS:
            raise ValueError(f"Unsupported coupon platform: {platform}")
        return self._request(HttpMethod.POST, "/coupons/sync", json_body={"platform": platform})
