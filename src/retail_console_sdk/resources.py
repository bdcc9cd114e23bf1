from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ResourceName(str, Enum):
    PRODUCTS = "products"
    ORDERS = "orders"
    CUSTOMERS = "customers"
    COUPONS = "coupons"
    EMPLOYEES = "employees"
    STORES = "stores"
    CALL_CLIENTS = "call-clients"
    CALLS = "calls"
    USERS = "users"


@dataclass(frozen=True)
class ResourceMapping:
    resource_name: ResourceName
    endpoint_path: str
    singular_key: str
    list_key: str | None = None

    def item_path(self, resource_id: str | int) -> str:
        return f"{self.endpoint_path}/{resource_id}"


def _mapping(name: ResourceName, singular_key: str, list_key: str | None) -> ResourceMapping:
    return ResourceMapping(
        resource_name=name,
        endpoint_path=f"/{name.value}",
        singular_key=singular_key,
        list_key=list_key,
    )


RESOURCE_REGISTRY: Mapping[ResourceName, ResourceMapping] = MappingProxyType(
    {
        mapping.resource_name: mapping
        for mapping in (
            _mapping(ResourceName.PRODUCTS, "product", "products"),
            _mapping(ResourceName.ORDERS, "order", "orders"),
            _mapping(ResourceName.CUSTOMERS, "customer", "data"),
            _mapping(ResourceName.COUPONS, "coupon", "coupons"),
            _mapping(ResourceName.EMPLOYEES, "employee", "employees"),
            _mapping(ResourceName.STORES, "store", "stores"),
            _mapping(ResourceName.CALL_CLIENTS, "client", "clients"),
            _mapping(ResourceName.CALLS, "call", "calls"),
            _mapping(ResourceName.USERS, "user", "users"),
        )
    }
)


def resolve(resource: str | ResourceName) -> ResourceMapping | None:
    """Return the mapping for ``resource`` or None when the backend has no counterpart."""
    try:
        name = ResourceName(resource)
    except ValueError:
        return None
    return RESOURCE_REGISTRY.get(name)
