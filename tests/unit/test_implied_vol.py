"""
Unit tests for the implied volatility solver.

This module validates:
1. Round-trip accuracy (solve IV from synthetic prices)
2. Non-convergence and out-of-bracket behaviour of the lenient solver
3. Bracket rejection and result metadata of the strict solver
4. Vectorized solving across strikes
"""

import logging

import pytest
from options_analytics.core.black_scholes import black_scholes_call, black_scholes_put
from options_analytics.solvers.implied_vol import (
    implied_volatility,
    implied_volatility_vectorized,
    solve_implied_volatility,
)
from options_analytics.utils.constants import IV_MAX_VOL, IV_MIN_VOL
from options_analytics.utils.exceptions import VolatilityBracketError


# ===========================
# Round-Trip Tests
# ===========================


def test_roundtrip_atm_call():
    """Solve for IV from synthetic ATM call price, should recover original volatility."""
    true_sigma = 0.25
    S, K, T, r = 100.0, 100.0, 1.0, 0.05

    market_price = black_scholes_call(S, K, T, r, true_sigma)
    sigma = implied_volatility(market_price, S, K, T, r, "call")

    assert abs(sigma - true_sigma) < 1e-4, f"Expected {true_sigma}, got {sigma}"


def test_roundtrip_atm_put():
    true_sigma = 0.30
    S, K, T, r = 100.0, 100.0, 1.0, 0.05

    market_price = black_scholes_put(S, K, T, r, true_sigma)
    sigma = implied_volatility(market_price, S, K, T, r, "put")

    assert abs(sigma - true_sigma) < 1e-4


@pytest.mark.parametrize(
    "true_sigma",
    [0.05, 0.10, 0.20, 0.30, 0.50, 0.75, 1.00, 2.00],
)
def test_roundtrip_various_volatilities(true_sigma):
    """Test round-trip across wide range of volatilities."""
    S, K, T, r = 100.0, 100.0, 1.0, 0.05

    market_price = black_scholes_call(S, K, T, r, true_sigma)
    sigma = implied_volatility(market_price, S, K, T, r, "call")

    assert abs(sigma - true_sigma) < 1e-4


@pytest.mark.parametrize(
    "moneyness",
    [0.8, 0.9, 1.0, 1.1, 1.2],  # OTM to ITM
)
def test_roundtrip_various_strikes(moneyness):
    true_sigma = 0.25
    S, T, r = 100.0, 1.0, 0.05
    K = S / moneyness

    market_price = black_scholes_call(S, K, T, r, true_sigma)
    sigma = implied_volatility(market_price, S, K, T, r, "call")

    assert abs(sigma - true_sigma) < 1e-3


def test_textbook_price_recovers_twenty_percent():
    sigma = implied_volatility(10.4506, 100.0, 100.0, 1.0, 0.05, "call")
    assert abs(sigma - 0.20) < 1e-3


def test_price_error_within_precision():
    """The returned volatility reprices within the requested precision."""
    S, K, T, r = 100.0, 105.0, 0.5, 0.03
    market_price = 4.0
    precision = 1e-6

    sigma = implied_volatility(market_price, S, K, T, r, "call", precision=precision)

    assert abs(black_scholes_call(S, K, T, r, sigma) - market_price) < precision


# ===========================
# Lenient Solver Edge Cases
# ===========================


def test_non_convergence_returns_midpoint():
    """One bisection step returns the first midpoint, no exception."""
    sigma = implied_volatility(10.4506, 100.0, 100.0, 1.0, 0.05, "call", max_iterations=1)
    assert sigma == pytest.approx((IV_MIN_VOL + IV_MAX_VOL) / 2.0)


def test_non_convergence_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="options_analytics.solvers.implied_vol"):
        implied_volatility(10.4506, 100.0, 100.0, 1.0, 0.05, "call", max_iterations=3)
    assert "Bisection stopped" in caplog.text


def test_price_below_bracket_drifts_to_lower_edge():
    """Below intrinsic value: bisection walks to the lower edge without signalling."""
    sigma = implied_volatility(1.0, 100.0, 100.0, 1.0, 0.05, "call")
    assert abs(sigma - IV_MIN_VOL) < 1e-6


def test_price_above_bracket_drifts_to_upper_edge():
    sigma = implied_volatility(150.0, 100.0, 100.0, 1.0, 0.05, "call")
    assert abs(sigma - IV_MAX_VOL) < 1e-6


def test_invalid_max_iterations():
    with pytest.raises(ValueError):
        implied_volatility(10.0, 100.0, 100.0, 1.0, 0.05, "call", max_iterations=0)


# ===========================
# Strict Solver Tests
# ===========================


def test_strict_solver_success_metadata():
    market_price = black_scholes_put(100.0, 95.0, 0.5, 0.04, 0.35)
    result = solve_implied_volatility(market_price, 100.0, 95.0, 0.5, 0.04, "put")

    assert result.success
    assert result.method == "bisection"
    assert result.iterations >= 1
    assert result.price_error < 1e-4
    assert abs(result.volatility - 0.35) < 1e-3
    assert "Converged" in result.message


def test_strict_solver_below_range_raises():
    with pytest.raises(VolatilityBracketError) as exc_info:
        solve_implied_volatility(1.0, 100.0, 100.0, 1.0, 0.05, "call")

    error = exc_info.value
    assert error.market_price == 1.0
    assert error.min_price > 4.8
    assert isinstance(error, ValueError)


def test_strict_solver_above_range_raises():
    with pytest.raises(VolatilityBracketError):
        solve_implied_volatility(101.0, 100.0, 100.0, 1.0, 0.05, "call")


def test_strict_solver_reports_non_convergence():
    result = solve_implied_volatility(10.4506, 100.0, 100.0, 1.0, 0.05, "call", max_iterations=2)

    assert not result.success
    assert result.iterations == 2
    assert "Max iterations" in result.message


# ===========================
# Vectorized Solver Tests
# ===========================


def test_implied_volatility_vectorized():
    """Flat 25% smile is recovered at every strike."""
    strikes = [90.0, 100.0, 110.0]
    prices = [black_scholes_call(100.0, K, 1.0, 0.05, 0.25) for K in strikes]

    results = implied_volatility_vectorized(prices, 100.0, strikes, 1.0, 0.05)

    assert len(results) == 3
    for result in results:
        assert result.success
        assert abs(result.volatility - 0.25) < 1e-3


def test_vectorized_mismatched_lengths():
    with pytest.raises(ValueError):
        implied_volatility_vectorized([10.0, 5.0], 100.0, [100.0], 1.0, 0.05)
