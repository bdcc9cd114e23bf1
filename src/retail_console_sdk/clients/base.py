from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..http_client import HttpClient
from ..models import HttpMethod


@dataclass
class BaseClient:
    http: HttpClient

    def _request(self, method: HttpMethod | str, path: str, **kwargs: Any) -> Any:
        return self.http.request(method, path, **kwargs)
