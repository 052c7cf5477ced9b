"""
HTTP routers, one module per route group.
"""

from . import admin, auth, health, newsletter, orders, public

__all__ = ["admin", "auth", "health", "newsletter", "orders", "public"]
