"""Exceptions raised by the pricing and clustering engines."""


class InsufficientDataError(ValueError):
    """Raised when k-means is asked for more clusters than there are points."""

    def __init__(self, n_points: int, k: int) -> None:
        self.n_points = n_points
        self.k = k
        super().__init__(
            f"Not enough data points for {k} clusters: got {n_points}, "
            f"need at least {k}"
        )


class VolatilityBracketError(ValueError):
    """Raised when a market price cannot be reached inside the volatility bracket."""

    def __init__(
        self, market_price: float, min_price: float, max_price: float
    ) -> None:
        self.market_price = market_price
        self.min_price = min_price
        self.max_price = max_price
        super().__init__(
            f"Market price {market_price:.4f} outside achievable range "
            f"[{min_price:.4f}, {max_price:.4f}]"
        )
