"""
Pytest configuration and shared fixtures.
"""

import pytest

from options_analytics.utils.types import DataPoint, OptionContract


@pytest.fixture
def standard_params():
    """Standard at-the-money option parameters."""
    return {
        "S": 100.0,
        "K": 100.0,
        "T": 1.0,
        "r": 0.05,
        "sigma": 0.20,
    }


@pytest.fixture
def itm_call_params():
    """In-the-money call parameters."""
    return {
        "S": 110.0,
        "K": 100.0,
        "T": 1.0,
        "r": 0.05,
        "sigma": 0.20,
    }


@pytest.fixture
def atm_call():
    """Textbook ATM call: S=100, K=100, T=1, σ=20%, r=5%."""
    return OptionContract(
        spot=100.0,
        strike=100.0,
        time_to_expiry=1.0,
        volatility=0.20,
        risk_free_rate=0.05,
        option_type="call",
    )


@pytest.fixture
def atm_put(atm_call):
    """Same contract as atm_call, but a put."""
    return OptionContract(
        spot=atm_call.spot,
        strike=atm_call.strike,
        time_to_expiry=atm_call.time_to_expiry,
        volatility=atm_call.volatility,
        risk_free_rate=atm_call.risk_free_rate,
        option_type="put",
    )


@pytest.fixture
def two_blobs():
    """Six points in two well separated groups of three."""
    coords = [(0, 0), (0, 1), (1, 0), (10, 10), (10, 11), (11, 10)]
    return [
        DataPoint(x=float(x), y=float(y), payload={"symbol": f"P{i}"})
        for i, (x, y) in enumerate(coords)
    ]
