"""
Top-level export module for HTTP API schemas.
"""
from . import admin, auth, catalog, common, newsletter, orders

# Common primitives
from .common import (
    APIModel,
    AddressModel,
    CreatedId,
    Envelope,
    ErrorEnvelope,
    Money,
    ok,
)

# Auth / profile
from .auth import (
    LoginRequest,
    Profile,
    RegisterRequest,
    SessionUser,
    ShippingAddressInput,
    UpdateProfileRequest,
)

# Catalog
from .catalog import (
    CategoryOut,
    ColorOption,
    GradeOption,
    HeroSlideOut,
    LandingPage,
    ProductOut,
    PromoBannerOut,
    SizeOption,
    SpecEntry,
)

# Orders
from .orders import (
    CreateOrderRequest,
    OrderCreated,
    OrderItemInput,
    OrderItemOut,
    OrderOut,
    OrderTracking,
)

# Back office
from .admin import (
    AdminProductOut,
    CategoryCreate,
    CategoryRef,
    CategoryUpdate,
    CustomerOut,
    HeroSlideCreate,
    HeroSlideUpdate,
    OrderStatusUpdate,
    ProductCreate,
    ProductUpdate,
    PromoBannerCreate,
    PromoBannerUpdate,
)

# Newsletter
from .newsletter import SubscribeRequest, UnsubscribeRequest

__all__ = [
    # Submodules
    "admin", "auth", "catalog", "common", "newsletter", "orders",

    # Common
    "APIModel", "AddressModel", "CreatedId", "Envelope", "ErrorEnvelope", "Money", "ok",

    # Auth
    "LoginRequest", "Profile", "RegisterRequest", "SessionUser",
    "ShippingAddressInput", "UpdateProfileRequest",

    # Catalog
    "CategoryOut", "ColorOption", "GradeOption", "HeroSlideOut", "LandingPage",
    "ProductOut", "PromoBannerOut", "SizeOption", "SpecEntry",

    # Orders
    "CreateOrderRequest", "OrderCreated", "OrderItemInput", "OrderItemOut",
    "OrderOut", "OrderTracking",

    # Admin
    "AdminProductOut", "CategoryCreate", "CategoryRef", "CategoryUpdate", "CustomerOut",
    "HeroSlideCreate", "HeroSlideUpdate", "OrderStatusUpdate", "ProductCreate",
    "ProductUpdate", "PromoBannerCreate", "PromoBannerUpdate",

    # Newsletter
    "SubscribeRequest", "UnsubscribeRequest",
]
