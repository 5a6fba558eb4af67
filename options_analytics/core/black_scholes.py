"""
Black-Scholes option pricing model for European options.

This module implements the classical Black-Scholes formula for European
calls and puts on a non-dividend-paying underlying, together with the
standard Greeks.

Mathematical Background:
    The Black-Scholes formula prices European options under assumptions:
    - Log-normal asset price distribution
    - Constant volatility and interest rate
    - No dividends, transaction costs or taxes
    - Continuous trading possible

Preconditions:
    S, K, T and sigma must be strictly positive. Nothing here validates
    them: T <= 0 or sigma <= 0 surfaces as ZeroDivisionError or a math
    domain ValueError from the d1 computation. Use OptionContract.validate()
    before pricing user input.

References:
    Black, F., & Scholes, M. (1973). The Pricing of Options and Corporate Liabilities.
    Journal of Political Economy, 81(3), 637-654.
"""

import math

from options_analytics.core.distributions import normal_cdf, normal_pdf
from options_analytics.utils.constants import (
    CURVE_LOWER,
    CURVE_STEPS,
    CURVE_UPPER,
    DAYS_PER_YEAR,
    PERCENT_POINT,
)
from options_analytics.utils.types import Greeks, OptionContract, OptionType


def _check_option_type(option_type: str) -> None:
    if option_type not in ("call", "put"):
        raise ValueError(f"option_type must be 'call' or 'put', got '{option_type}'")


def d1(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Calculate d1 parameter in Black-Scholes formula.

    Args:
        S: Current spot price
        K: Strike price
        T: Time to expiration in years
        r: Risk-free interest rate (annualized, continuous)
        sigma: Volatility (annualized standard deviation)

    Returns:
        The d1 parameter

    Formula:
        d1 = [ln(S/K) + (r + σ²/2)T] / (σ√T)
    """
    return (math.log(S / K) + (r + 0.5 * sigma * sigma) * T) / (sigma * math.sqrt(T))


def d2(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Calculate d2 parameter in Black-Scholes formula.

    Formula:
        d2 = d1 - σ√T

    Notes:
        For a call, N(d2) is the risk-neutral probability of exercise.
    """
    return d1(S, K, T, r, sigma) - sigma * math.sqrt(T)


def black_scholes_call(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Calculate European call option price using Black-Scholes formula.

    Args:
        S: Current spot price
        K: Strike price
        T: Time to expiration in years
        r: Risk-free interest rate (annualized, continuous)
        sigma: Volatility (annualized standard deviation)

    Returns:
        Call option price

    Formula:
        C = S·N(d1) - K·e^(-rT)·N(d2)

    Examples:
        >>> # ATM call with 1 year to expiry, 20% vol, 5% rate
        >>> price = black_scholes_call(100, 100, 1.0, 0.05, 0.20)
        >>> abs(price - 10.4506) < 0.01  # Known solution
        True
    """
    d1_value = d1(S, K, T, r, sigma)
    d2_value = d1_value - sigma * math.sqrt(T)
    discount_strike = K * math.exp(-r * T)

    return S * normal_cdf(d1_value) - discount_strike * normal_cdf(d2_value)


def black_scholes_put(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Calculate European put option price using Black-Scholes formula.

    Formula:
        P = K·e^(-rT)·N(-d2) - S·N(-d1)

    Alternatively (via put-call parity):
        P = C - S + K·e^(-rT)

    Examples:
        >>> price = black_scholes_put(100, 100, 1.0, 0.05, 0.20)
        >>> abs(price - 5.5735) < 0.01  # Known solution
        True
    """
    d1_value = d1(S, K, T, r, sigma)
    d2_value = d1_value - sigma * math.sqrt(T)
    discount_strike = K * math.exp(-r * T)

    return discount_strike * normal_cdf(-d2_value) - S * normal_cdf(-d1_value)


def black_scholes_price(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
) -> float:
    """
    Calculate European option price (call or put).

    Raises:
        ValueError: If option_type is not "call" or "put"
    """
    if option_type == "call":
        return black_scholes_call(S, K, T, r, sigma)
    elif option_type == "put":
        return black_scholes_put(S, K, T, r, sigma)
    else:
        raise ValueError(f"option_type must be 'call' or 'put', got '{option_type}'")


def price_option(contract: OptionContract) -> float:
    """
    Price an option contract with Black-Scholes.

    Example:
        >>> contract = OptionContract(100, 100, 1.0, 0.20, 0.05, "put")
        >>> round(price_option(contract), 2)
        5.57
    """
    return black_scholes_price(
        contract.spot,
        contract.strike,
        contract.time_to_expiry,
        contract.risk_free_rate,
        contract.volatility,
        contract.option_type,
    )


# ===========================
# Greeks Calculations
# ===========================


def delta(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
) -> float:
    """
    Calculate option delta (∂V/∂S).

    For a call, delta ∈ [0, 1]; for a put, delta ∈ [-1, 0].

    Formulas:
        Call delta: Δ_c = N(d1)
        Put delta:  Δ_p = N(d1) - 1
    """
    _check_option_type(option_type)
    cdf_d1 = normal_cdf(d1(S, K, T, r, sigma))

    if option_type == "call":
        return cdf_d1
    return cdf_d1 - 1.0


def gamma(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Calculate option gamma (∂²V/∂S²).

    Same for calls and puts, and never negative.

    Formula:
        Γ = φ(d1) / (S · σ · √T)

    Interpretation:
        Gamma of 0.05 means: for $1 increase in spot, delta increases by 0.05.
    """
    pdf_d1 = normal_pdf(d1(S, K, T, r, sigma))
    return pdf_d1 / (S * sigma * math.sqrt(T))


def vega(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    Calculate option vega, reported per 1% change in volatility.

    Formula:
        ν = S · √T · φ(d1) · 0.01

    Interpretation:
        Vega of 0.35 means: for 1% increase in volatility (e.g., 20% → 21%),
        option price increases by $0.35.
    """
    pdf_d1 = normal_pdf(d1(S, K, T, r, sigma))
    return S * math.sqrt(T) * pdf_d1 * PERCENT_POINT


def theta(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
) -> float:
    """
    Calculate option theta, reported per calendar day.

    Formulas (annualized, then divided by 365):
        Call: Θ_c = -S·σ·φ(d1)/(2√T) - r·K·e^(-rT)·N(d2)
        Put:  Θ_p = -S·σ·φ(d1)/(2√T) + r·K·e^(-rT)·N(-d2)

    Interpretation:
        Theta of -0.05 means the option loses $0.05 per calendar day,
        all else equal.
    """
    _check_option_type(option_type)

    d1_value = d1(S, K, T, r, sigma)
    d2_value = d1_value - sigma * math.sqrt(T)
    discount_strike = K * math.exp(-r * T)

    # Diffusion contribution, same for call and put
    term1 = -(S * sigma * normal_pdf(d1_value)) / (2.0 * math.sqrt(T))

    if option_type == "call":
        term2 = -r * discount_strike * normal_cdf(d2_value)
    else:
        term2 = r * discount_strike * normal_cdf(-d2_value)

    return (term1 + term2) / DAYS_PER_YEAR


def rho(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
) -> float:
    """
    Calculate option rho, reported per 1% change in interest rate.

    Formulas:
        Call rho: ρ_c = K·T·e^(-rT)·N(d2)·0.01
        Put rho:  ρ_p = -K·T·e^(-rT)·N(-d2)·0.01
    """
    _check_option_type(option_type)

    d2_value = d2(S, K, T, r, sigma)
    discount_strike = K * T * math.exp(-r * T)

    if option_type == "call":
        return discount_strike * normal_cdf(d2_value) * PERCENT_POINT
    return -discount_strike * normal_cdf(-d2_value) * PERCENT_POINT


def calculate_greeks(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
) -> Greeks:
    """
    Calculate all Greeks for an option in one pass.

    Example:
        >>> greeks = calculate_greeks(100, 100, 1.0, 0.05, 0.20)
        >>> print(f"Delta: {greeks.delta:.4f}")
        Delta: 0.6368
    """
    return Greeks(
        delta=delta(S, K, T, r, sigma, option_type),
        gamma=gamma(S, K, T, r, sigma),
        theta=theta(S, K, T, r, sigma, option_type),
        vega=vega(S, K, T, r, sigma),
        rho=rho(S, K, T, r, sigma, option_type),
    )


def compute_greeks(contract: OptionContract) -> Greeks:
    """Calculate all Greeks for an option contract."""
    return calculate_greeks(
        contract.spot,
        contract.strike,
        contract.time_to_expiry,
        contract.risk_free_rate,
        contract.volatility,
        contract.option_type,
    )


def price_curve(
    contract: OptionContract,
    lower: float = CURVE_LOWER,
    upper: float = CURVE_UPPER,
    steps: int = CURVE_STEPS,
) -> list[tuple[float, float]]:
    """
    Price the contract across a range of spot prices.

    Args:
        contract: Option to reprice; everything but spot is held fixed
        lower: Lowest spot as a fraction of contract.spot
        upper: Highest spot as a fraction of contract.spot
        steps: Number of equal intervals between the two ends

    Returns:
        steps + 1 (spot, price) pairs, both ends included

    Raises:
        ValueError: If steps < 1, lower <= 0 or lower > upper
    """
    if steps < 1:
        raise ValueError(f"steps must be at least 1, got {steps}")
    if lower <= 0:
        raise ValueError(f"lower must be positive, got {lower}")
    if lower > upper:
        raise ValueError(f"lower ({lower}) must not exceed upper ({upper})")

    low_spot = contract.spot * lower
    step = contract.spot * (upper - lower) / steps

    curve = []
    for i in range(steps + 1):
        spot = low_spot + i * step
        price = black_scholes_price(
            spot,
            contract.strike,
            contract.time_to_expiry,
            contract.risk_free_rate,
            contract.volatility,
            contract.option_type,
        )
        curve.append((spot, price))

    return curve
