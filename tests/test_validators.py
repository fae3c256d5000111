"""Tests for input range checks."""

from decimal import Decimal

import pytest

from src.calculators.validators import (
    validate_dependents,
    validate_gross_amount,
    validate_net_amount,
    validate_service_tax_rate,
)


class TestAmountValidators:
    @pytest.mark.parametrize("value", [Decimal("0.01"), 5000, 5000.5, "1234.56", Decimal("1000000")])
    def test_valid_gross(self, value: object) -> None:
        result = validate_gross_amount(value)
        assert result.valid
        assert result.message == ""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing(self, value: object) -> None:
        result = validate_gross_amount(value)
        assert not result.valid
        assert result.message == "Gross amount is required."

    @pytest.mark.parametrize("value", [0, -1, "abc", "nan", True])
    def test_not_positive_number(self, value: object) -> None:
        result = validate_gross_amount(value)
        assert not result.valid
        assert "greater than zero" in result.message

    def test_above_sanity_bound(self) -> None:
        result = validate_gross_amount(Decimal("1000000.01"))
        assert not result.valid
        assert "1,000,000.00" in result.message

    def test_custom_bound(self) -> None:
        assert not validate_gross_amount(501, max_amount=Decimal("500")).valid
        assert validate_gross_amount(500, max_amount=Decimal("500")).valid

    def test_net_uses_own_label(self) -> None:
        assert validate_net_amount("3577.28").valid
        result = validate_net_amount(-5)
        assert not result.valid
        assert result.message.startswith("Net amount")
        assert not validate_net_amount(2_000_000).valid


class TestDependentsValidator:
    @pytest.mark.parametrize("value", [0, 2, 20, "3", 4.0])
    def test_valid(self, value: object) -> None:
        assert validate_dependents(value).valid

    @pytest.mark.parametrize("value", [1.5, "two", None, False])
    def test_not_whole_number(self, value: object) -> None:
        result = validate_dependents(value)
        assert not result.valid
        assert "whole number" in result.message

    def test_negative(self) -> None:
        result = validate_dependents(-1)
        assert not result.valid
        assert "negative" in result.message

    def test_too_many(self) -> None:
        result = validate_dependents(21)
        assert not result.valid
        assert "maximum: 20" in result.message


class TestServiceTaxRateValidator:
    @pytest.mark.parametrize("value", [0, 5, "2.5", Decimal("100")])
    def test_valid(self, value: object) -> None:
        assert validate_service_tax_rate(value).valid

    @pytest.mark.parametrize("value", [-0.1, 100.01, "abc", None])
    def test_invalid(self, value: object) -> None:
        result = validate_service_tax_rate(value)
        assert not result.valid
        assert result.message == "Service tax rate must be between 0% and 100%."
