from __future__ import annotations

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, Mapping, Sequence

from .error_mapper import is_route_not_found
from .exceptions import ApiError, ResourceNotFoundError
from .http_client import HttpClient
from .models import HttpMethod, ListFilter, ListRequest, ListResult, Pagination
from .resources import ResourceMapping, ResourceName, resolve

logger = logging.getLogger(__name__)

FilterInput = Sequence[ListFilter] | Mapping[str, Any] | None

SUPPORTED_FILTER_FIELDS = ("active", "platform", "search")


def _resource_key(resource: str | ResourceName) -> str:
    return resource.value if isinstance(resource, ResourceName) else resource


def new_client_id() -> str:
    return str(uuid.uuid4())


def _iter_filters(filters: FilterInput) -> Iterable[ListFilter]:
    if filters is None:
        return ()
    if isinstance(filters, Mapping):
        return (ListFilter(field=key, value=value) for key, value in filters.items())
    return filters


def build_list_params(filters: FilterInput) -> dict[str, Any]:
    """Translate console filters into backend query params, dropping unknown fields."""
    params: dict[str, Any] = {}
    for item in _iter_filters(filters):
        if item.field == "active" and item.value is not None:
            params["active"] = item.value
        elif item.field in SUPPORTED_FILTER_FIELDS and item.value:
            params[item.field] = item.value
    return params


def unwrap_list(body: Any, mapping: ResourceMapping) -> list[Any]:
    data = body
    if isinstance(body, Mapping):
        for key in (mapping.list_key, "data"):
            if key and body.get(key) is not None:
                data = body[key]
                break
    if isinstance(data, (list, tuple)):
        return list(data)
    return []


def unwrap_entity(body: Any, mapping: ResourceMapping) -> Any | None:
    if isinstance(body, Mapping):
        for key in (mapping.singular_key, "data"):
            if body.get(key):
                return body[key]
    return None


def paginate(items: list[Any], pagination: Pagination | None) -> list[Any]:
    if pagination is None or pagination.mode == "off":
        return items
    page_size = max(1, pagination.page_size)
    start = max(0, pagination.current - 1) * page_size
    return items[start : start + page_size]


class DataProvider:
    """Uniform CRUD over the backend resources.

    Listing never raises for backend failures and update tolerates missing
    routes, so an incomplete backend degrades to empty or local state.
    Single-entity reads and creates surface their errors to the caller.
    """

    def __init__(self, http: HttpClient) -> None:
        self.http = http

    def get_list(
        self,
        resource: str | ResourceName,
        pagination: Pagination | None = None,
        filters: FilterInput = None,
    ) -> ListResult:
        key = _resource_key(resource)
        mapping = resolve(resource)
        if mapping is None:
            logger.debug("resource_unmapped", extra={"resource": key, "operation": "list"})
            return ListResult(items=[], total=0)

        try:
            body = self.http.request(
                HttpMethod.GET,
                mapping.endpoint_path,
                params=build_list_params(filters) or None,
            )
        except ApiError as error:
            if is_route_not_found(error):
                logger.debug("resource_not_implemented", extra={"resource": key})
            else:
                logger.error(
                    "resource_list_failed",
                    extra={"resource": key, "kind": error.kind.value, "error": error.message},
                )
            return ListResult(items=[], total=0)

        items = unwrap_list(body, mapping)
        return ListResult(items=paginate(items, pagination), total=len(items))

    def get_many_lists(
        self,
        requests: Iterable[ListRequest | str | ResourceName],
        *,
        max_workers: int = 4,
    ) -> list[ListResult]:
        """Fetch several lists in parallel; results come back in request order."""
        normalized = [
            item if isinstance(item, ListRequest) else ListRequest(resource=_resource_key(item))
            for item in requests
        ]
        if not normalized:
            return []
        with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(normalized)))) as executor:
            futures = [
                executor.submit(self.get_list, item.resource, item.pagination, list(item.filters))
                for item in normalized
            ]
            return [future.result() for future in futures]

    def get_one(self, resource: str | ResourceName, resource_id: str | int) -> Any:
        key = _resource_key(resource)
        mapping = resolve(resource)
        if mapping is None:
            raise ResourceNotFoundError(key)
        try:
            body = self.http.request(HttpMethod.GET, mapping.item_path(resource_id))
        except ApiError as error:
            self._log_failure(error, key, "fetch")
            raise
        entity = unwrap_entity(body, mapping)
        return entity if entity is not None else body

    def create(self, resource: str | ResourceName, payload: Mapping[str, Any]) -> dict[str, Any]:
        key = _resource_key(resource)
        mapping = resolve(resource)
        if mapping is None:
            return {**payload, "id": new_client_id()}
        try:
            body = self.http.request(HttpMethod.POST, mapping.endpoint_path, json_body=dict(payload))
        except ApiError as error:
            self._log_failure(error, key, "create")
            raise
        entity = unwrap_entity(body, mapping)
        return entity if entity is not None else {**payload, "id": new_client_id()}

    def update(
        self,
        resource: str | ResourceName,
        resource_id: str | int,
        payload: Mapping[str, Any],
    ) -> dict[str, Any]:
        key = _resource_key(resource)
        mapping = resolve(resource)
        if mapping is None:
            return {**payload, "id": resource_id}
        try:
            body = self.http.request(
                HttpMethod.PUT,
                mapping.item_path(resource_id),
                json_body=dict(payload),
            )
        except ApiError as error:
            if is_route_not_found(error):
                logger.debug("resource_not_implemented", extra={"resource": key, "operation": "update"})
                return {**payload, "id": resource_id}
            self._log_failure(error, key, "update")
            raise
        entity = unwrap_entity(body, mapping)
        return entity if entity is not None else {**payload, "id": resource_id}

    def delete(self, resource: str | ResourceName, resource_id: str | int) -> dict[str, Any]:
        key = _resource_key(resource)
        mapping = resolve(resource)
        if mapping is None:
            return {"id": resource_id}
        try:
            self.http.request(HttpMethod.DELETE, mapping.item_path(resource_id))
        except ApiError as error:
            self._log_failure(error, key, "delete")
            raise
        return {"id": resource_id}

    def custom(
        self,
        path: str,
        method: HttpMethod | str = HttpMethod.GET,
        *,
        payload: Any = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return self.http.request(method, path, json_body=payload, params=params, headers=headers)

    def get_api_url(self) -> str:
        return self.http.config.api_base_url

    @staticmethod
    def _log_failure(error: ApiError, resource: str, operation: str) -> None:
        logger.error(
            "resource_operation_failed",
            extra={
                "resource": resource,
                "operation": operation,
                "kind": error.kind.value,
                "status_code": error.status_code,
                "error": error.message,
            },
        )
