# storefront_api/schemas/common.py

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, PlainSerializer, model_serializer
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Base / shared types
# ---------------------------------------------------------------------------


class APIModel(BaseModel):
    """
    Base Pydantic model for all HTTP API schemas.

    Common config:
    - camelCase on the wire, snake_case in Python
    - populate by field name as well as alias, so services can build
      responses with Python names
    - read straight from ORM rows (``from_attributes``)
    - unknown request keys are ignored; admin forms post whole rows back
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


# Exact decimal in Python, a JSON number on the wire.
Money = Annotated[
    Decimal,
    PlainSerializer(lambda value: float(value), return_type=float, when_used="json"),
]


DataT = TypeVar("DataT")


# ---------------------------------------------------------------------------
# Response envelope
# ---------------------------------------------------------------------------


class Envelope(APIModel, Generic[DataT]):
    """
    ``{success, data?, message?}`` wrapper used by every endpoint.

    Top-level keys that are ``None`` are left out of the JSON body; ``None``
    values nested inside ``data`` are kept.
    """

    success: bool = True
    data: Optional[DataT] = None
    message: Optional[str] = None

    @model_serializer(mode="wrap")
    def _drop_empty_keys(self, handler: Any) -> Dict[str, Any]:
        payload = handler(self)
        return {key: value for key, value in payload.items() if key == "success" or value is not None}


def ok(data: Any = None, message: Optional[str] = None) -> Envelope[Any]:
    return Envelope(success=True, data=data, message=message)


class ErrorEnvelope(APIModel):
    """
    Shape of every failed response. ``errors`` is only set for request
    validation failures, ``stack`` only outside production.
    """

    success: bool = False
    message: str
    errors: Optional[Dict[str, List[str]]] = None
    stack: Optional[str] = None


class CreatedId(APIModel):
    id: Any


class AddressModel(APIModel):
    address: str
    city: str
    region: str
    zip_code: str
    country: str


__all__ = [
    "APIModel",
    "Money",
    "Envelope",
    "ok",
    "ErrorEnvelope",
    "CreatedId",
    "AddressModel",
]
