"""
Unit tests for power-up aggregation and eligibility
"""
from decimal import Decimal
from unittest.mock import Mock

import pytest

from powerup_challenge.eligibility import EligibilityResolver
from powerup_challenge.models.power_up import PowerUpTransaction
from powerup_challenge.scanner import PowerUpScanner, ScanResult, StopReason


def tx(tx_id, amount, date="2025-09-02 10:00:00 UTC"):
    return PowerUpTransaction(date=date, amount=amount, tx_id=tx_id)


@pytest.fixture
def resolver():
    return EligibilityResolver(Mock(spec=PowerUpScanner))


def test_no_transactions(resolver):
    result = resolver.resolve([], 10)

    assert result.has_power_up is False
    assert result.total_power_up is None
    assert result.power_up_transactions == []


def test_threshold_applies_to_the_total(resolver):
    result = resolver.resolve([tx("a", "6.000"), tx("b", "6.000")], 10)

    assert result.has_power_up is True
    assert result.total_power_up == "12.000"


def test_single_transaction_below_threshold(resolver):
    result = resolver.resolve([tx("a", "6.000")], 10)

    assert result.has_power_up is False


def test_total_equal_to_threshold_passes(resolver):
    result = resolver.resolve([tx("a", "4.500"), tx("b", "5.500")], Decimal("10"))

    assert result.has_power_up is True
    assert result.total_power_up == "10.000"


def test_zero_threshold_accepts_any_power_up(resolver):
    result = resolver.resolve([tx("a", "0.001")], 0)

    assert result.has_power_up is True
    assert result.total_power_up == "0.001"


def test_sum_has_no_float_drift(resolver):
    transactions = [tx(str(i), "0.100") for i in range(3)]

    result = resolver.resolve(transactions, "0.3")

    assert result.has_power_up is True
    assert result.total_power_up == "0.300"


def test_headline_fields_come_from_the_most_recent(resolver):
    transactions = [
        tx("newest", "20.000", date="2025-09-06 12:00:00 UTC"),
        tx("older", "5.000", date="2025-09-02 08:00:00 UTC"),
    ]

    result = resolver.resolve(transactions, 10)

    assert result.power_up_tx_id == "newest"
    assert result.power_up_amount == "20.000"
    assert result.power_up_date == "2025-09-06 12:00:00 UTC"
    assert [t.tx_id for t in result.power_up_transactions] == ["newest", "older"]
    assert result.total_power_up == "25.000"


def test_resolve_is_idempotent(resolver):
    transactions = [tx("a", "3.333"), tx("b", "7.777")]

    first = resolver.resolve(transactions, 11)
    second = resolver.resolve(transactions, 11)

    assert first == second
    assert first.total_power_up == "11.110"


def test_check_user_scans_then_resolves(date_range):
    scanner = Mock(spec=PowerUpScanner)
    scanner.scan.return_value = ScanResult(
        username="alice",
        transactions=[tx("a", "12.000")],
        pages_fetched=1,
        stop_reason=StopReason.EXHAUSTED
    )

    result = EligibilityResolver(scanner).check_user("alice", date_range, 10)

    scanner.scan.assert_called_once_with("alice", date_range)
    assert result.has_power_up is True
    assert result.total_power_up == "12.000"
