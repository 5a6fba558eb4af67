"""Unit tests for data types, day counts and exceptions."""

from datetime import date, datetime

import pytest
from options_analytics.utils.dates import year_fraction
from options_analytics.utils.exceptions import InsufficientDataError, VolatilityBracketError
from options_analytics.utils.types import DataPoint, OptionContract


# ===========================
# OptionContract Tests
# ===========================


def test_invalid_option_type_raises():
    with pytest.raises(ValueError):
        OptionContract(100, 100, 1.0, 0.2, 0.05, "straddle")


def test_validate_returns_contract(atm_call):
    assert atm_call.validate() is atm_call


def test_construction_does_not_validate():
    """The engine's precondition is the caller's job; construction accepts anything."""
    contract = OptionContract(100, 100, 0.0, 0.2, 0.05, "call")
    assert contract.time_to_expiry == 0.0


@pytest.mark.parametrize(
    "field,value",
    [("spot", 0.0), ("strike", -5.0), ("time_to_expiry", 0.0), ("volatility", -0.1)],
)
def test_validate_rejects_non_positive(atm_call, field, value):
    kwargs = {
        "spot": atm_call.spot,
        "strike": atm_call.strike,
        "time_to_expiry": atm_call.time_to_expiry,
        "volatility": atm_call.volatility,
        "risk_free_rate": atm_call.risk_free_rate,
        field: value,
    }
    with pytest.raises(ValueError, match=field):
        OptionContract(**kwargs).validate()


def test_validate_allows_negative_rate():
    OptionContract(100, 100, 1.0, 0.2, -0.01, "put").validate()


def test_with_volatility(atm_call):
    bumped = atm_call.with_volatility(0.35)
    assert bumped.volatility == 0.35
    assert bumped.spot == atm_call.spot
    assert atm_call.volatility == 0.20


def test_data_point_coordinates():
    point = DataPoint(1.5, -2.0, payload={"id": 7})
    assert point.coordinates == (1.5, -2.0)
    assert point.payload == {"id": 7}


# ===========================
# Day Count Tests
# ===========================


def test_year_fraction_from_strings():
    assert year_fraction("2025-07-02", as_of="2025-01-02") == pytest.approx(181 / 365)


def test_year_fraction_accepts_dates_and_datetimes():
    assert year_fraction(date(2026, 1, 1), as_of=datetime(2025, 1, 1, 15, 30)) == 1.0


def test_year_fraction_expired_is_negative():
    assert year_fraction("2024-12-31", as_of="2025-01-01") < 0


# ===========================
# Exception Tests
# ===========================


def test_exception_messages():
    assert "3 clusters" in str(InsufficientDataError(2, 3))
    assert "outside achievable range" in str(VolatilityBracketError(1.0, 4.88, 99.9))
