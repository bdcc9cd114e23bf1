from __future__ import annotations

from typing import Any

from ..models import HttpMethod
from .base import BaseClient


class EmployeesClient(BaseClient):
    def toggle_status(self, employee_id: str) -> Any:
        return self._request(HttpMethod.PATCH, f"/employees/{employee_id}/toggle")

    def stats(self) -> Any:
        return self._request(HttpMethod.GET, "/employees/stats")
