"""
Command-line interface for the options analytics toolkit.

This CLI provides access to:
- Option pricing (Black-Scholes)
- Greeks calculation
- Implied volatility solving
- K-means clustering of CSV records
"""

import logging

import click
import numpy as np
import pandas as pd

from options_analytics.clustering.kmeans import k_means_clustering
from options_analytics.clustering.points import (
    points_from_frame,
    synthetic_points,
    within_cluster_sum_of_squares,
)
from options_analytics.core.black_scholes import compute_greeks, price_option
from options_analytics.solvers.implied_vol import (
    implied_volatility,
    solve_implied_volatility,
)
from options_analytics.utils.constants import IV_PRECISION
from options_analytics.utils.dates import year_fraction
from options_analytics.utils.types import OptionContract


def _time_to_expiry(time, expiry):
    if time is not None:
        return time
    if expiry is not None:
        return year_fraction(expiry)
    raise click.UsageError("Provide either --time or --expiry")


def _contract(spot, strike, time, expiry, rate, vol, type):
    contract = OptionContract(
        spot=spot,
        strike=strike,
        time_to_expiry=_time_to_expiry(time, expiry),
        volatility=vol,
        risk_free_rate=rate,
        option_type=type,
    )
    try:
        return contract.validate()
    except ValueError as e:
        raise click.BadParameter(str(e))


def _echo_clusters(clusters):
    for index, cluster in enumerate(clusters, start=1):
        symbols = [
            str(p.payload.get("symbol", "")) for p in cluster.points if isinstance(p.payload, dict)
        ]
        click.echo(
            f"Cluster {index}: {len(cluster.points):>3} points  "
            f"centroid=({cluster.centroid.x:.2f}, {cluster.centroid.y:.2f})"
        )
        if any(symbols):
            click.echo(f"  {', '.join(s for s in symbols if s)}")
    click.echo(f"Within-cluster sum of squares: {within_cluster_sum_of_squares(clusters):.4f}")


@click.group()
@click.version_option(version="1.0.0")
@click.option("--verbose", "-V", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """Options Analytics Toolkit - Black-Scholes pricing and k-means clustering."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@cli.command()
@click.option("--spot", "-S", type=float, required=True, help="Spot price")
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--time", "-T", type=float, default=None, help="Time to expiry (years)")
@click.option("--expiry", "-e", type=str, default=None, help="Expiration date (YYYY-MM-DD)")
@click.option("--rate", "-r", type=float, required=True, help="Risk-free rate")
@click.option("--vol", "-v", type=float, required=True, help="Volatility (annualized)")
@click.option("--type", "-t", type=click.Choice(["call", "put"]), default="call")
def price(spot, strike, time, expiry, rate, vol, type):
    """Calculate option price using Black-Scholes."""
    contract = _contract(spot, strike, time, expiry, rate, vol, type)
    click.echo(f"\n{type.capitalize()} Option Price: ${price_option(contract):.4f}")


@cli.command()
@click.option("--spot", "-S", type=float, required=True, help="Spot price")
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--time", "-T", type=float, default=None, help="Time to expiry (years)")
@click.option("--expiry", "-e", type=str, default=None, help="Expiration date (YYYY-MM-DD)")
@click.option("--rate", "-r", type=float, required=True, help="Risk-free rate")
@click.option("--vol", "-v", type=float, required=True, help="Volatility")
@click.option("--type", "-t", type=click.Choice(["call", "put"]), default="call")
def greeks(spot, strike, time, expiry, rate, vol, type):
    """Calculate all option Greeks."""
    contract = _contract(spot, strike, time, expiry, rate, vol, type)
    greeks_values = compute_greeks(contract)

    click.echo(f"\nGreeks for {type.capitalize()} Option:")
    click.echo(f"  Delta:  {greeks_values.delta:>10.6f}")
    click.echo(f"  Gamma:  {greeks_values.gamma:>10.6f}")
    click.echo(f"  Theta:  {greeks_values.theta:>10.6f} (per day)")
    click.echo(f"  Vega:   {greeks_values.vega:>10.6f} (per 1% vol)")
    click.echo(f"  Rho:    {greeks_values.rho:>10.6f} (per 1% rate)")


@cli.command()
@click.option("--market-price", "-p", type=float, required=True, help="Market price")
@click.option("--spot", "-S", type=float, required=True, help="Spot price")
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--time", "-T", type=float, default=None, help="Time to expiry (years)")
@click.option("--expiry", "-e", type=str, default=None, help="Expiration date (YYYY-MM-DD)")
@click.option("--rate", "-r", type=float, required=True, help="Risk-free rate")
@click.option("--type", "-t", type=click.Choice(["call", "put"]), default="call")
@click.option("--precision", type=float, default=IV_PRECISION, show_default=True)
@click.option("--strict", is_flag=True, help="Reject prices outside the volatility bracket")
def iv(market_price, spot, strike, time, expiry, rate, type, precision, strict):
    """Solve for implied volatility."""
    T = _time_to_expiry(time, expiry)
    if T <= 0:
        raise click.BadParameter(f"Time to expiration must be positive, got {T}")
    if spot <= 0:
        raise click.BadParameter(f"Spot price must be positive, got spot={spot}")
    if strike <= 0:
        raise click.BadParameter(f"Strike price must be positive, got strike={strike}")

    if not strict:
        sigma = implied_volatility(market_price, spot, strike, T, rate, type, precision)
        click.echo(f"\nImplied Volatility: {sigma:.4f} ({sigma*100:.2f}%)")
        return

    try:
        result = solve_implied_volatility(market_price, spot, strike, T, rate, type, precision)
    except ValueError as e:
        raise click.ClickException(str(e))

    click.echo(f"\nImplied Volatility: {result.volatility:.4f} ({result.volatility*100:.2f}%)")
    click.echo(f"Iterations: {result.iterations}")
    if not result.success:
        click.echo(f"Warning: {result.message}", err=True)


@cli.command()
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--x", "x_field", required=True, help="Column used as x coordinate")
@click.option("--y", "y_field", required=True, help="Column used as y coordinate")
@click.option("--clusters", "-k", type=int, default=3, show_default=True)
@click.option("--max-iterations", type=int, default=100, show_default=True)
@click.option("--seed", type=int, default=None, help="Seed for reproducible centroids")
@click.option("--init", type=click.Choice(["random", "k-means++"]), default="random")
@click.option("--empty-cluster", type=click.Choice(["keep", "reseed"]), default="keep")
def cluster(csv_path, x_field, y_field, clusters, max_iterations, seed, init, empty_cluster):
    """Cluster the rows of a CSV file on two numeric columns."""
    frame = pd.read_csv(csv_path)
    try:
        points = points_from_frame(frame, x_field, y_field)
        result = k_means_clustering(
            points, clusters, max_iterations, rng=seed, init=init, empty_cluster=empty_cluster
        )
    except (KeyError, ValueError) as e:
        raise click.ClickException(str(e))

    click.echo(f"\nCreated {clusters} clusters from {len(points)} data points.")
    _echo_clusters(result)


@cli.command()
@click.option("--clusters", "-k", type=int, default=3, show_default=True)
@click.option("--seed", type=int, default=None, help="Seed for data and centroids")
def sample(clusters, seed):
    """Cluster the built-in synthetic price/volume data set."""
    generator = np.random.default_rng(seed)
    points = synthetic_points(generator)
    try:
        result = k_means_clustering(points, clusters, rng=generator)
    except ValueError as e:
        raise click.ClickException(str(e))

    _echo_clusters(result)


if __name__ == "__main__":
    cli()
