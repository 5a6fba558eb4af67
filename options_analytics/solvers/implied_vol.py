"""
Implied volatility solver using bisection.

Black-Scholes prices increase strictly with volatility, so bisecting the
bracket [IV_MIN_VOL, IV_MAX_VOL] always terminates and never needs vega.
Two entry points share the same search:

- implied_volatility() returns a bare float and never raises on a price it
  cannot match; out-of-range prices converge to a bracket edge.
- solve_implied_volatility() rejects prices outside the achievable range
  and reports whether the search converged.
"""

import logging

from options_analytics.core.black_scholes import black_scholes_price
from options_analytics.utils.constants import (
    IV_MAX_ITERATIONS,
    IV_MAX_VOL,
    IV_MIN_VOL,
    IV_PRECISION,
)
from options_analytics.utils.exceptions import VolatilityBracketError
from options_analytics.utils.types import ImpliedVolResult, OptionType

logger = logging.getLogger(__name__)


def _bisect(
    market_price: float,
    S: float,
    K: float,
    T: float,
    r: float,
    option_type: OptionType,
    precision: float,
    max_iterations: int,
) -> tuple[float, int, float]:
    """
    Bisect the volatility bracket for the market price.

    Returns:
        (volatility, iterations, price_error) for the last midpoint evaluated
    """
    low = IV_MIN_VOL
    high = IV_MAX_VOL
    mid = 0.0
    price_error = float("inf")
    iterations = 0

    for _ in range(max_iterations):
        iterations += 1
        mid = (low + high) / 2.0
        price = black_scholes_price(S, K, T, r, mid, option_type)
        price_error = abs(price - market_price)

        if price_error < precision:
            return mid, iterations, price_error

        if price > market_price:
            high = mid
        else:
            low = mid

    return mid, iterations, price_error


def implied_volatility(
    market_price: float,
    spot: float,
    strike: float,
    time_to_expiry: float,
    risk_free_rate: float,
    option_type: OptionType = "call",
    precision: float = IV_PRECISION,
    max_iterations: int = IV_MAX_ITERATIONS,
) -> float:
    """
    Solve for implied volatility by bisection.

    Args:
        market_price: Observed market price of the option
        spot: Spot price
        strike: Strike price
        time_to_expiry: Time to expiration in years
        risk_free_rate: Risk-free rate (annualized, continuous)
        option_type: "call" or "put"
        precision: Stop once |model price - market price| < precision
        max_iterations: Maximum number of bisection steps

    Returns:
        The volatility at the last midpoint. If the search runs out of
        iterations the best approximation is returned all the same; judging
        whether it is acceptable is left to the caller.

    Examples:
        >>> sigma = implied_volatility(10.4506, 100, 100, 1.0, 0.05, "call")
        >>> abs(sigma - 0.20) < 1e-3
        True

    Notes:
        A market price below the price at 0.1% vol or above the price at
        500% vol cannot be matched; the search then drifts to the nearest
        bracket edge without signalling. Use solve_implied_volatility() to
        have that reported.
    """
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")

    sigma, iterations, price_error = _bisect(
        market_price,
        spot,
        strike,
        time_to_expiry,
        risk_free_rate,
        option_type,
        precision,
        max_iterations,
    )

    if price_error >= precision:
        logger.debug(
            "Bisection stopped after %d iterations at sigma=%.6f with price error %.2e",
            iterations,
            sigma,
            price_error,
        )

    return sigma


def solve_implied_volatility(
    market_price: float,
    spot: float,
    strike: float,
    time_to_expiry: float,
    risk_free_rate: float,
    option_type: OptionType = "call",
    precision: float = IV_PRECISION,
    max_iterations: int = IV_MAX_ITERATIONS,
) -> ImpliedVolResult:
    """
    Solve for implied volatility, rejecting unreachable prices.

    Same search as implied_volatility(), but first prices the option at
    both bracket edges and refuses market prices outside that range.

    Returns:
        ImpliedVolResult with volatility, iterations, success flag and price error

    Raises:
        VolatilityBracketError: If market_price is below the price at
            IV_MIN_VOL or above the price at IV_MAX_VOL
    """
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")

    min_price = black_scholes_price(
        spot, strike, time_to_expiry, risk_free_rate, IV_MIN_VOL, option_type
    )
    max_price = black_scholes_price(
        spot, strike, time_to_expiry, risk_free_rate, IV_MAX_VOL, option_type
    )

    if market_price < min_price - precision or market_price > max_price + precision:
        raise VolatilityBracketError(market_price, min_price, max_price)

    sigma, iterations, price_error = _bisect(
        market_price,
        spot,
        strike,
        time_to_expiry,
        risk_free_rate,
        option_type,
        precision,
        max_iterations,
    )

    success = price_error < precision
    if success:
        message = f"Converged in {iterations} iterations"
    else:
        message = (
            f"Max iterations ({max_iterations}) reached with price error {price_error:.2e}"
        )
        logger.warning("Implied volatility did not converge: %s", message)

    return ImpliedVolResult(
        volatility=sigma,
        iterations=iterations,
        method="bisection",
        success=success,
        price_error=price_error,
        message=message,
    )


def implied_volatility_vectorized(
    market_prices: list[float],
    spot: float,
    strikes: list[float],
    time_to_expiry: float,
    risk_free_rate: float,
    option_type: OptionType = "call",
    precision: float = IV_PRECISION,
) -> list[ImpliedVolResult]:
    """
    Solve for implied volatilities for multiple strikes (volatility smile).

    Raises:
        ValueError: If market_prices and strikes have different lengths
        VolatilityBracketError: If any price is unreachable

    Example:
        >>> results = implied_volatility_vectorized(
        ...     [14.23, 10.45, 7.22], spot=100, strikes=[95, 100, 105],
        ...     time_to_expiry=1.0, risk_free_rate=0.05,
        ... )
        >>> ivs = [r.volatility for r in results if r.success]
    """
    if len(market_prices) != len(strikes):
        raise ValueError(
            f"market_prices ({len(market_prices)}) and strikes ({len(strikes)}) "
            f"must have same length"
        )

    return [
        solve_implied_volatility(
            price, spot, strike, time_to_expiry, risk_free_rate, option_type, precision
        )
        for price, strike in zip(market_prices, strikes)
    ]
