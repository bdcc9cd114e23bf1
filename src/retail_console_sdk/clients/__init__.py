from .auth import AuthClient
from .coupons_client import CouponsClient
from .employees_client import EmployeesClient
from .health import HealthClient
from .orders_client import OrdersClient
from .products_client import ProductsClient
from .settings_client import SettingsClient
from .webhooks_client import WebhooksClient

__all__ = [
    "AuthClient",
    "CouponsClient",
    "EmployeesClient",
    "HealthClient",
    "OrdersClient",
    "ProductsClient",
    "SettingsClient",
    "WebhooksClient",
]
