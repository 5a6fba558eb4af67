"""
Data types and structures for pricing and clustering.

This module defines the dataclasses passed into and returned from the
pricing engine, the implied volatility solver and the k-means engine.
"""

from dataclasses import dataclass, field, replace
from typing import Generic, Literal, Optional, TypeVar

OptionType = Literal["call", "put"]

T = TypeVar("T")


@dataclass(frozen=True)
class OptionContract:
    """
    Immutable parameter set for a European option.

    Attributes:
        spot: Current price of the underlying asset
        strike: Strike price
        time_to_expiry: Time to expiration in years
        volatility: Annualized volatility as a decimal fraction
        risk_free_rate: Annualized risk-free rate as a decimal (may be 0 or negative)
        option_type: Either "call" or "put"

    Notes:
        Positivity is not checked on construction. The pricing formulas are
        undefined for non-positive time or volatility; call validate() first
        when the inputs come from a user.
    """
    spot: float
    strike: float
    time_to_expiry: float
    volatility: float
    risk_free_rate: float
    option_type: OptionType = "call"

    def __post_init__(self) -> None:
        if self.option_type not in ("call", "put"):
            raise ValueError(f"Option type must be 'call' or 'put', got {self.option_type}")

    def validate(self) -> "OptionContract":
        """
        Check that the contract lies inside the Black-Scholes domain.

        Returns:
            self, so the call can be chained

        Raises:
            ValueError: If spot, strike, time to expiry or volatility is not positive
        """
        if self.spot <= 0:
            raise ValueError(f"Spot price must be positive, got spot={self.spot}")
        if self.strike <= 0:
            raise ValueError(f"Strike price must be positive, got strike={self.strike}")
        if self.time_to_expiry <= 0:
            raise ValueError(
                f"Time to expiration must be positive, got time_to_expiry={self.time_to_expiry}"
            )
        if self.volatility <= 0:
            raise ValueError(f"Volatility must be positive, got volatility={self.volatility}")
        return self

    def with_volatility(self, volatility: float) -> "OptionContract":
        """Return a copy of this contract priced at another volatility."""
        return replace(self, volatility=volatility)


@dataclass
class Greeks:
    """
    Container for option Greeks.

    Attributes:
        delta: Rate of change of option price with respect to spot price (∂V/∂S)
        gamma: Rate of change of delta with respect to spot price (∂²V/∂S²)
        theta: Rate of change of option price with respect to time, per calendar day
        vega: Rate of change of option price with respect to volatility, per 1% vol
        rho: Rate of change of option price with respect to interest rate, per 1% rate
    """
    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float


@dataclass
class ImpliedVolResult:
    """
    Result from the strict implied volatility solver.

    Attributes:
        volatility: Solved implied volatility (annualized)
        iterations: Number of bisection steps taken
        method: Always 'bisection'
        success: Whether the price error fell below the requested precision
        price_error: Absolute difference between model and market price at the solution
        message: Additional information about convergence
    """
    volatility: float
    iterations: int
    method: Literal["bisection"]
    success: bool
    price_error: float
    message: str = ""


@dataclass(frozen=True)
class DataPoint(Generic[T]):
    """
    A point to be clustered.

    Only x and y take part in clustering. The payload is carried through
    untouched so callers can annotate results (symbol, contract id, ...).
    """
    x: float
    y: float
    payload: Optional[T] = None

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Centroid:
    x: float
    y: float


@dataclass
class Cluster(Generic[T]):
    """A centroid and the points currently assigned to it."""
    centroid: Centroid
    points: list[DataPoint[T]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)
