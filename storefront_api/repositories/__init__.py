# storefront_api/repositories/__init__.py
"""
Repository layer public exports.

One repository per table. Downstream code imports from this package instead
of the individual modules:

    from storefront_api.repositories import OrdersRepository
"""

from .addresses import AddressesRepository
from .base import SQLRepository
from .categories import CategoriesRepository
from .cms import HeroSlidesRepository, PromoBannersRepository
from .orders import OrdersRepository
from .products import ProductSort, ProductsRepository
from .users import UsersRepository

__all__ = [
    "SQLRepository",
    "UsersRepository",
    "AddressesRepository",
    "CategoriesRepository",
    "ProductsRepository",
    "ProductSort",
    "OrdersRepository",
    "HeroSlidesRepository",
    "PromoBannersRepository",
]
