from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models import HttpMethod
from .base import BaseClient

INTEGRATIONS = ("shopify", "stripe")


@dataclass
class SettingsClient(BaseClient):
    """Stores third-party credentials on the backend; the console never calls them directly."""

    def _path(self, integration: str, suffix: str = "") -> str:
        if integration not in INTEGRATIONS:
            raise ValueError(f"Unsupported integration: {integration}")
        return f"/settings/{integration}{suffix}"

    def get(self, integration: str) -> Any:
        return self._request(HttpMethod.GET, self._path(integration))

    def save(self, integration: str, settings: Mapping[str, Any]) -> Any:
        return self._request(HttpMethod.POST, self._path(integration), json_body=dict(settings))

    def test(self, integration: str) -> Any:
        return self._request(HttpMethod.POST, self._path(integration, "/test"))

    def delete(self, integration: str, settings_id: str) -> Any:
        return self._request(HttpMethod.DELETE, self._path(integration, f"/{settings_id}"))
