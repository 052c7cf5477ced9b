"""
storefront_api.services
-----------------------

Service layer aggregation for the storefront API.

Routers and other callers import service classes from this package instead
of depending directly on repositories or the notification client.

Example:

    from storefront_api.services import CatalogService, OrderService
"""

from .admin_service import AdminService
from .auth_service import AuthService
from .catalog_service import CatalogService, ProductFilter
from .newsletter_service import NewsletterService
from .notifier import DisabledNotifier, EmmisorNotifier, Notifier, NotifierError, build_notifier
from .order_service import OrderService, send_order_confirmation

__all__ = [
    "AdminService",
    "AuthService",
    "CatalogService",
    "ProductFilter",
    "NewsletterService",
    "Notifier",
    "NotifierError",
    "DisabledNotifier",
    "EmmisorNotifier",
    "build_notifier",
    "OrderService",
    "send_order_confirmation",
]
