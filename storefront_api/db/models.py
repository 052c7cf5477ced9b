# storefront_api/db/models.py

from __future__ import annotations

import enum
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------


class Base(DeclarativeBase):
    pass


def _uuid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


# Exact decimal for every monetary column.
Money = Numeric(10, 2, asdecimal=True)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


class UserStatus(str, enum.Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    BLOCKED = "Blocked"


class ProductCondition(str, enum.Enum):
    NEW = "New"
    REFURBISHED = "Refurbished"


class OrderStatus(str, enum.Enum):
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"


class PaymentStatus(str, enum.Enum):
    PAID = "Paid"
    PENDING = "Pending"
    FAILED = "Failed"
    REFUNDED = "Refunded"


# ---------------------------------------------------------------------------
# Users & addresses
# ---------------------------------------------------------------------------


class User(Base):
    """
    A storefront account, either a customer or a back-office admin.

    ``password_hash`` is the bcrypt digest; the raw password is never stored.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column("password", String(255), nullable=False)
    phone_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    profile_image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, name="user_role_enum", values_callable=_enum_values),
        nullable=False,
        default=UserRole.CUSTOMER,
    )
    status: Mapped[UserStatus] = mapped_column(
        SQLEnum(UserStatus, name="user_status_enum", values_callable=_enum_values),
        nullable=False,
        default=UserStatus.ACTIVE,
    )

    last_active_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    addresses: Mapped[List["Address"]] = relationship(
        "Address",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<User id={self.id!r} email={self.email!r} role={self.role.value!r}>"


class Address(Base):
    """
    A postal address owned by one user.

    At most one row per user has ``is_default = True``; the services keep
    that invariant by clearing the flag and inserting the new default in
    the same transaction.
    """

    __tablename__ = "addresses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    region: Mapped[str] = mapped_column(String(255), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(20), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    user: Mapped[User] = relationship("User", back_populates="addresses")

    def __repr__(self) -> str:
        return f"<Address id={self.id!r} user_id={self.user_id!r} default={self.is_default!r}>"


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    href: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    products: Mapped[List["Product"]] = relationship("Product", back_populates="category")

    def __repr__(self) -> str:
        return f"<Category id={self.id!r} slug={self.slug!r}>"


class Product(Base):
    """
    A sellable item.

    The variant columns (colors, storage/memory options, grades, specs,
    images) hold serialized JSON text. They are opaque to the database and
    decoded by ``storefront_api.services.product_fields`` on every read.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), nullable=False, index=True)
    price: Mapped[Decimal] = mapped_column(Money, nullable=False)
    original_price: Mapped[Decimal] = mapped_column(Money, nullable=False)
    image: Mapped[str] = mapped_column(String(500), nullable=False)

    condition: Mapped[ProductCondition] = mapped_column(
        SQLEnum(ProductCondition, name="product_condition_enum", values_callable=_enum_values),
        nullable=False,
        default=ProductCondition.NEW,
    )

    is_new: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_best_seller: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    colors: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    storage_options: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    memory_options: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    grades: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    specs: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    images: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    category: Mapped[Category] = relationship("Category", back_populates="products")

    def __repr__(self) -> str:
        return f"<Product id={self.id!r} name={self.name!r}>"


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


class Order(Base):
    """
    A placed order. The primary key is the human-readable order code
    (``AT-XXXXXXXX``), which doubles as the public tracking credential.
    """

    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    customer_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    shipping_address_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("addresses.id", ondelete="SET NULL"),
        nullable=True,
    )

    subtotal: Mapped[Decimal] = mapped_column(Money, nullable=False)
    tax: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0.00"))
    shipping_cost: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0.00"))
    total: Mapped[Decimal] = mapped_column(Money, nullable=False)

    status: Mapped[OrderStatus] = mapped_column(
        SQLEnum(OrderStatus, name="order_status_enum", values_callable=_enum_values),
        nullable=False,
        default=OrderStatus.PROCESSING,
        index=True,
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        SQLEnum(PaymentStatus, name="payment_status_enum", values_callable=_enum_values),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    tracking_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    customer: Mapped[User] = relationship("User")
    shipping_address: Mapped[Optional[Address]] = relationship("Address")
    items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )

    def __repr__(self) -> str:
        return f"<Order id={self.id!r} status={self.status.value!r}>"


class OrderItem(Base):
    """
    A line item frozen at order time.

    ``product_id`` is kept as a plain snapshot column: name, price and image
    are copied here so later product edits or deletion never change the
    history of an order.
    """

    __tablename__ = "order_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    order_id: Mapped[str] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    product_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Money, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    image: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    selected_options: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)

    order: Mapped[Order] = relationship("Order", back_populates="items")

    def __repr__(self) -> str:
        return f"<OrderItem id={self.id!r} order_id={self.order_id!r} qty={self.quantity!r}>"


# ---------------------------------------------------------------------------
# CMS content
# ---------------------------------------------------------------------------


class HeroSlide(Base):
    __tablename__ = "hero_slides"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str] = mapped_column(String(500), nullable=False)
    cta: Mapped[str] = mapped_column(String(100), nullable=False)
    href: Mapped[str] = mapped_column(String(255), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class PromoBanner(Base):
    __tablename__ = "promo_banners"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    cta_text: Mapped[str] = mapped_column(String(100), nullable=False)
    cta_link: Mapped[str] = mapped_column(String(255), nullable=False)
    bg_color: Mapped[str] = mapped_column(String(20), nullable=False, default="#f5f5f7")
    image: Mapped[str] = mapped_column(String(500), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
