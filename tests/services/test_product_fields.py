# tests/services/test_product_fields.py
import json
from decimal import Decimal

import pytest

from storefront_api.schemas.catalog import ColorOption, GradeOption, SizeOption
from storefront_api.services.product_fields import decode_field, encode_field, encode_variants, parse_json_list


class TestParseJsonList:

    @pytest.mark.parametrize("raw", [None, "", "{not json", '{"a": 1}', "42", 42])
    def test_anything_but_an_array_is_empty(self, raw):
        assert parse_json_list(raw) == []

    def test_array_text(self):
        assert parse_json_list('["a", "b"]') == ["a", "b"]


class TestDecodeField:

    def test_typed_options(self):
        decoded = decode_field("storage_options", '[{"size": "256GB", "priceBump": 100}]')

        assert decoded == [SizeOption(size="256GB", price_bump=100)]

    def test_price_bumps_keep_exact_decimals(self):
        """
        Scenario: Grade with a fractional price bump read back from storage.
        Expected: The bump is an exact Decimal, not a binary float.
        """
        decoded = decode_field("grades", '[{"name": "Excellent", "priceBump": 19.99}]')

        assert decoded == [GradeOption(name="Excellent", price_bump=Decimal("19.99"))]
        assert isinstance(decoded[0].price_bump, Decimal)
        assert decoded[0].price_bump == Decimal("19.99")

    def test_wrong_item_shape_is_empty(self):
        assert decode_field("colors", '[{"label": "no name"}]') == []


class TestEncode:

    def test_models_are_stored_with_wire_names(self):
        stored = encode_field([SizeOption(size="1TB", price_bump=300)])

        assert json.loads(stored) == [{"size": "1TB", "priceBump": 300.0}]

    def test_encode_variants_skips_none_and_keeps_other_fields(self):
        encoded = encode_variants({"name": "iPhone", "colors": [ColorOption(name="Blue", value="#00f")], "grades": None})

        assert encoded["name"] == "iPhone"
        assert json.loads(encoded["colors"]) == [{"name": "Blue", "value": "#00f"}]
        assert "grades" not in encoded
