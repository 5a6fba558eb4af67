"""
Helpers for building clustering input and scoring clustering output.

Stock and option records arrive as plain mappings (or a DataFrame); the
caller picks which two numeric fields become the x and y axes.
"""

import logging
import math
from typing import Any, Iterable, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from options_analytics.clustering.kmeans import RandomSource
from options_analytics.utils.types import Cluster, DataPoint

logger = logging.getLogger(__name__)


def _as_number(value: Any) -> float:
    """Coerce a record field to float; missing values become 0, unparseable ones NaN."""
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def points_from_records(
    records: Iterable[Mapping[str, Any]],
    x_field: str,
    y_field: str,
    payload_fields: Optional[Sequence[str]] = None,
) -> list[DataPoint[dict[str, Any]]]:
    """
    Build data points from records.

    Args:
        records: Stock or option rows
        x_field: Field used as the x coordinate
        y_field: Field used as the y coordinate
        payload_fields: Fields copied into each point's payload; all fields
            other than the two axes when None

    Returns:
        One point per record whose coordinates are finite numbers. A missing
        axis field counts as 0; non-numeric or NaN values drop the record.

    Example:
        >>> rows = [{"symbol": "AAPL", "price": 190.0, "volume": 5e6}]
        >>> points_from_records(rows, "price", "volume")[0].payload
        {'symbol': 'AAPL'}
    """
    points = []
    dropped = 0

    for record in records:
        x = _as_number(record.get(x_field))
        y = _as_number(record.get(y_field))
        if not (math.isfinite(x) and math.isfinite(y)):
            dropped += 1
            continue

        if payload_fields is None:
            payload = {key: value for key, value in record.items() if key not in (x_field, y_field)}
        else:
            payload = {key: record.get(key) for key in payload_fields}

        points.append(DataPoint(x=x, y=y, payload=payload))

    if dropped:
        logger.info("Dropped %d records with non-numeric %s/%s", dropped, x_field, y_field)

    return points


def points_from_frame(
    frame: pd.DataFrame,
    x_field: str,
    y_field: str,
    payload_fields: Optional[Sequence[str]] = None,
) -> list[DataPoint[dict[str, Any]]]:
    """
    Build data points from a DataFrame, one per row.

    Raises:
        KeyError: If either axis column is missing from the frame
    """
    missing = [name for name in (x_field, y_field) if name not in frame.columns]
    if missing:
        raise KeyError(f"Columns not found: {', '.join(missing)}")

    # NaN cells from pandas become None so they count as missing, not as NaN
    records = frame.astype(object).where(frame.notna(), None).to_dict(orient="records")
    return points_from_records(records, x_field, y_field, payload_fields)


def synthetic_points(rng: RandomSource = None) -> list[DataPoint[dict[str, Any]]]:
    """
    Generate 25 demonstration points in three price/volume groups.

    Groups: 8 points at price 100-150 / volume 1.0M-1.5M, 8 points at
    200-250 / 2.0M-2.5M, and 9 points at 150-200 / 1.5M-1.7M.
    """
    generator = np.random.default_rng(rng)
    points = []

    for i in range(25):
        if i < 8:
            x = 100 + generator.random() * 50
            y = 1_000_000 + generator.random() * 500_000
        elif i < 16:
            x = 200 + generator.random() * 50
            y = 2_000_000 + generator.random() * 500_000
        else:
            x = 150 + generator.random() * 50
            y = 1_500_000 + generator.random() * 200_000

        points.append(DataPoint(x=float(x), y=float(y), payload={"symbol": f"SAMPLE{i}"}))

    return points


def within_cluster_sum_of_squares(clusters: Sequence[Cluster]) -> float:
    """Total squared distance of every point to its cluster centroid (inertia)."""
    total = 0.0
    for cluster in clusters:
        for point in cluster.points:
            total += (point.x - cluster.centroid.x) ** 2 + (point.y - cluster.centroid.y) ** 2
    return total
