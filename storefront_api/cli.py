# storefront_api/cli.py
"""
Operator commands for the storefront API.

Usage:
    storefront-admin init-db             # create missing tables
    storefront-admin seed-admin --email admin@example.com --password ...
    storefront-admin seed-catalog        # small demo catalog (idempotent)
    storefront-admin notifier-status     # ping the notification service
"""

from __future__ import annotations

import argparse
import json
import sys
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from storefront_api.config import ConfigurationError, Settings, get_settings
from storefront_api.container import Container, build_container
from storefront_api.db import Base, db_session
from storefront_api.db.models import ProductCondition, UserRole, UserStatus
from storefront_api.logging import get_logger
from storefront_api.logging.config import configure_logging
from storefront_api.repositories import (
    CategoriesRepository,
    HeroSlidesRepository,
    ProductsRepository,
    PromoBannersRepository,
    UsersRepository,
)
from storefront_api.security import hash_password
from storefront_api.services.notifier import NotifierError
from storefront_api.services.product_fields import encode_field

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Demo catalog
# ---------------------------------------------------------------------------

DEMO_CATEGORIES: List[Dict[str, Any]] = [
    {"name": "Mac", "slug": "mac", "href": "/category/mac", "sort_order": 1},
    {"name": "iPhone", "slug": "iphone", "href": "/category/iphone", "sort_order": 2},
    {"name": "iPad", "slug": "ipad", "href": "/category/ipad", "sort_order": 3},
    {"name": "Watch", "slug": "watch", "href": "/category/watch", "sort_order": 4},
    {"name": "Accessories", "slug": "accessories", "href": "/category/accessories", "sort_order": 5},
]

DEMO_PRODUCTS: List[Dict[str, Any]] = [
    {
        "name": "iPhone 15 Pro Max",
        "category": "iPhone",
        "price": Decimal("1199.00"),
        "original_price": Decimal("1399.00"),
        "image": "/images/iphone-15-pro-max.jpg",
        "condition": ProductCondition.NEW,
        "is_new": True,
        "is_best_seller": True,
        "is_featured": True,
        "stock": 50,
        "colors": [
            {"name": "Natural Titanium", "value": "#bdbbb7"},
            {"name": "Black Titanium", "value": "#3b3b3d"},
        ],
        "storage_options": [
            {"size": "256GB", "priceBump": 0},
            {"size": "512GB", "priceBump": 200},
        ],
        "specs": [{"label": "Chip", "value": "A17 Pro"}],
        "description": "Titanium design with the A17 Pro chip.",
    },
    {
        "name": "MacBook Air 13 M2",
        "category": "Mac",
        "price": Decimal("899.00"),
        "original_price": Decimal("1099.00"),
        "image": "/images/macbook-air-m2.jpg",
        "condition": ProductCondition.REFURBISHED,
        "is_best_seller": True,
        "stock": 12,
        "memory_options": [
            {"size": "8GB", "priceBump": 0},
            {"size": "16GB", "priceBump": 200},
        ],
        "grades": [
            {"name": "Excellent", "priceBump": 100},
            {"name": "Good", "priceBump": 0},
        ],
        "description": "Refurbished MacBook Air with the M2 chip.",
    },
    {
        "name": "Apple Watch Series 9",
        "category": "Watch",
        "price": Decimal("399.00"),
        "original_price": Decimal("429.00"),
        "image": "/images/watch-series-9.jpg",
        "condition": ProductCondition.NEW,
        "is_new": True,
        "is_featured": True,
        "stock": 30,
        "description": "Brighter display and double-tap gesture.",
    },
]

DEMO_SLIDES: List[Dict[str, Any]] = [
    {
        "content": "<h1>iPhone 15 Pro</h1><p>Titanium. So strong. So light.</p>",
        "image": "/images/hero-iphone.jpg",
        "cta": "Shop now",
        "href": "/category/iphone",
        "sort_order": 1,
    },
]

DEMO_BANNERS: List[Dict[str, Any]] = [
    {
        "content": "<h2>Certified refurbished Macs</h2>",
        "cta_text": "Browse",
        "cta_link": "/category/mac",
        "image": "/images/promo-mac.jpg",
        "sort_order": 1,
    },
]

_LIST_FIELDS = ("colors", "storage_options", "memory_options", "grades", "specs", "images")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_init_db(container: Container, _args: argparse.Namespace) -> int:
    Base.metadata.create_all(container.engine())
    print("Tables created.")
    return 0


def cmd_seed_admin(container: Container, args: argparse.Namespace) -> int:
    settings: Settings = container.settings()
    password_hash = hash_password(args.password, rounds=settings.BCRYPT_ROUNDS)

    with db_session(container.session_factory()) as session:
        users = UsersRepository(session)
        existing = users.get_by_email(args.email)
        if existing is not None:
            users.update(existing, {"password_hash": password_hash, "role": UserRole.ADMIN})
            print(f"Admin {args.email} already exists; password reset.")
        else:
            users.create(
                first_name=args.first_name,
                last_name=args.last_name,
                email=args.email,
                password_hash=password_hash,
                role=UserRole.ADMIN,
                status=UserStatus.ACTIVE,
            )
            print(f"Admin {args.email} created.")
    logger.info("admin_seeded")
    return 0


def cmd_seed_catalog(container: Container, _args: argparse.Namespace) -> int:
    created = {"categories": 0, "products": 0, "hero_slides": 0, "promo_banners": 0}

    with db_session(container.session_factory()) as session:
        categories = CategoriesRepository(session)
        products = ProductsRepository(session)
        slides = HeroSlidesRepository(session)
        banners = PromoBannersRepository(session)

        for row in DEMO_CATEGORIES:
            if categories.get_by_slug(row["slug"]) is None:
                categories.create(**row)
                created["categories"] += 1

        existing_names = {p.name for p in products.list_all()}
        for row in DEMO_PRODUCTS:
            if row["name"] in existing_names:
                continue
            fields = dict(row)
            category = categories.get_by_name(fields.pop("category"))
            if category is None:
                continue
            for key in _LIST_FIELDS:
                fields[key] = encode_field(fields.get(key, []))
            products.create(category_id=category.id, **fields)
            created["products"] += 1

        if not slides.list_all():
            for row in DEMO_SLIDES:
                slides.create(**row)
                created["hero_slides"] += 1

        if not banners.list_all():
            for row in DEMO_BANNERS:
                banners.create(**row)
                created["promo_banners"] += 1

    print("Seeded: " + ", ".join(f"{k}={v}" for k, v in created.items()))
    return 0


def cmd_notifier_status(container: Container, _args: argparse.Namespace) -> int:
    notifier = container.notifier()
    if not notifier.enabled:
        print("Notifier is not configured (EMMISOR_API_KEY / EMMISOR_URL).")
        return 1
    try:
        status = notifier.get_status()
    except NotifierError as exc:
        print(f"Notifier error: {exc.message} (code={exc.code})", file=sys.stderr)
        return 1
    finally:
        notifier.close()
    print(json.dumps(status, indent=2, default=str))
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="storefront-admin", description="Storefront API operator commands.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create missing database tables.").set_defaults(func=cmd_init_db)

    seed_admin = sub.add_parser("seed-admin", help="Create an admin account or reset its password.")
    seed_admin.add_argument("--email", required=True)
    seed_admin.add_argument("--password", required=True)
    seed_admin.add_argument("--first-name", default="Store")
    seed_admin.add_argument("--last-name", default="Admin")
    seed_admin.set_defaults(func=cmd_seed_admin)

    sub.add_parser("seed-catalog", help="Load a small demo catalog.").set_defaults(func=cmd_seed_catalog)
    sub.add_parser("notifier-status", help="Call the notification service status endpoint.").set_defaults(
        func=cmd_notifier_status
    )
    return parser


def main(argv: Optional[Sequence[str]] = None, *, settings: Optional[Settings] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = settings or get_settings()
    except ConfigurationError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    configure_logging(settings)
    container = build_container(settings)
    return args.func(container, args)


if __name__ == "__main__":
    sys.exit(main())
