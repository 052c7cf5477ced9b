# storefront_api/services/product_fields.py
"""
Encoding and decoding of the product variant columns.

``colors``, ``storage_options``, ``memory_options``, ``grades``, ``specs``
and ``images`` are stored as JSON text. Reads never fail on them: a value
that is missing, is not valid JSON, is not a JSON array, or does not match
the option shape decodes to an empty list.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Sequence

from pydantic import BaseModel, TypeAdapter, ValidationError

from storefront_api.db import models
from storefront_api.logging import get_logger
from storefront_api.schemas.catalog import (
    ColorOption,
    GradeOption,
    ProductOut,
    SizeOption,
    SpecEntry,
)

logger = get_logger(__name__)


VARIANT_FIELDS: Dict[str, TypeAdapter[Any]] = {
    "colors": TypeAdapter(List[ColorOption]),
    "storage_options": TypeAdapter(List[SizeOption]),
    "memory_options": TypeAdapter(List[SizeOption]),
    "grades": TypeAdapter(List[GradeOption]),
    "specs": TypeAdapter(List[SpecEntry]),
    "images": TypeAdapter(List[str]),
}


def parse_json_list(raw: Any) -> List[Any]:
    """
    Parse a stored blob into a plain list, or ``[]`` when it is not one.
    """
    if raw is None:
        return []
    value = raw
    if isinstance(raw, (str, bytes)):
        try:
            value = json.loads(raw)
        except ValueError:
            return []
    return list(value) if isinstance(value, list) else []


def decode_field(field: str, raw: Any) -> List[Any]:
    """
    Decode one variant column into its typed list.
    """
    adapter = VARIANT_FIELDS[field]
    items = parse_json_list(raw)
    if not items:
        return []
    try:
        return adapter.validate_python(items)
    except ValidationError:
        logger.debug("product_field_decode_failed", field=field)
        return []


def decode_variants(product: models.Product) -> Dict[str, List[Any]]:
    return {field: decode_field(field, getattr(product, field)) for field in VARIANT_FIELDS}


def encode_field(items: Sequence[Any]) -> str:
    payload = [
        item.model_dump(by_alias=True, mode="json") if isinstance(item, BaseModel) else item
        for item in items
    ]
    return json.dumps(payload)


def encode_variants(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of ``fields`` with every supplied variant list encoded to
    its storage text. ``None`` values are left out.
    """
    encoded: Dict[str, Any] = {}
    for key, value in fields.items():
        if key in VARIANT_FIELDS:
            if value is None:
                continue
            encoded[key] = encode_field(value)
        else:
            encoded[key] = value
    return encoded


def to_product_out(product: models.Product) -> ProductOut:
    """
    Map a product row (category loaded) to its public view.
    """
    category = product.category
    return ProductOut(
        id=product.id,
        name=product.name,
        price=product.price,
        original_price=product.original_price,
        image=product.image,
        category=category.name if category is not None else None,
        category_slug=category.slug if category is not None else None,
        condition=product.condition,
        is_new=product.is_new,
        is_best_seller=product.is_best_seller,
        is_featured=product.is_featured,
        is_active=product.is_active,
        stock=product.stock,
        description=product.description,
        **decode_variants(product),
    )


__all__ = [
    "VARIANT_FIELDS",
    "parse_json_list",
    "decode_field",
    "decode_variants",
    "encode_field",
    "encode_variants",
    "to_product_out",
]
