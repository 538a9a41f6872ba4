"""Tests for pt_common.enums — values must match the point_histories CHECK constraint."""

from src.pt_common.enums import TransactionType


class TestTransactionType:
    def test_is_str(self) -> None:
        assert isinstance(TransactionType.CHARGE, str)
        assert TransactionType.CHARGE == "CHARGE"
        assert TransactionType.USE == "USE"

    def test_exactly_two_kinds(self) -> None:
        assert {t.value for t in TransactionType} == {"CHARGE", "USE"}

    def test_lookup_by_value(self) -> None:
        assert TransactionType("USE") is TransactionType.USE
