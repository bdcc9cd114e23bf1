from __future__ import annotations

import logging

from ..exceptions import ApiError
from ..models import HttpMethod
from .base import BaseClient

logger = logging.getLogger(__name__)


class HealthClient(BaseClient):
    def health(self) -> dict:
        data = self._request(HttpMethod.GET, "/health")
        return data if isinstance(data, dict) else {"status": data}

    def check(self) -> bool:
        try:
            self.health()
        except ApiError as error:
            logger.error("health_check_failed", extra={"kind": error.kind.value, "error": error.message})
            return False
        return True
