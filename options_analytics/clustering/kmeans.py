"""
K-means clustering (Lloyd's algorithm) over labeled 2-D points.

Points are grouped on their (x, y) coordinates only; whatever payload a
DataPoint carries is handed back untouched inside the resulting clusters.

Seeding is random by design: each run shuffles the input and takes the
first k points as initial centroids, so two runs on the same data may
produce different partitions. Pass a seed or a numpy Generator as `rng`
to make a run reproducible.
"""

import logging
from typing import Literal, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from options_analytics.utils.constants import KMEANS_CONVERGENCE, KMEANS_MAX_ITERATIONS
from options_analytics.utils.exceptions import InsufficientDataError
from options_analytics.utils.types import Centroid, Cluster, DataPoint, T

logger = logging.getLogger(__name__)

InitMethod = Literal["random", "k-means++"]
EmptyClusterPolicy = Literal["keep", "reseed"]
RandomSource = Union[None, int, np.random.Generator]


def _random_seeds(coords: NDArray, k: int, rng: np.random.Generator) -> NDArray:
    """Shuffle the data and take the first k points as centroids."""
    order = rng.permutation(len(coords))
    return coords[order[:k]].copy()


def _kmeans_plus_plus_seeds(coords: NDArray, k: int, rng: np.random.Generator) -> NDArray:
    """
    k-means++ seeding: each new centroid is drawn with probability
    proportional to its squared distance from the nearest chosen one.
    """
    n = len(coords)
    seeds = [coords[rng.integers(n)]]

    for _ in range(1, k):
        diffs = coords[:, None, :] - np.asarray(seeds)[None, :, :]
        closest_sq = (diffs ** 2).sum(axis=2).min(axis=1)
        total = closest_sq.sum()
        if total == 0.0:
            # All remaining points coincide with a seed
            seeds.append(coords[rng.integers(n)])
        else:
            seeds.append(coords[rng.choice(n, p=closest_sq / total)])

    return np.array(seeds, dtype=float)


def _assign(coords: NDArray, centroids: NDArray) -> tuple[NDArray, NDArray]:
    """
    Assign each point to its nearest centroid.

    Returns:
        (labels, distances) where distances is the Euclidean distance of each
        point to its assigned centroid. argmin returns the first minimum, so
        ties go to the lowest-index centroid.
    """
    distances = np.linalg.norm(coords[:, None, :] - centroids[None, :, :], axis=2)
    labels = distances.argmin(axis=1)
    return labels, distances[np.arange(len(coords)), labels]


def k_means_clustering(
    points: Sequence[DataPoint[T]],
    k: int,
    max_iterations: int = KMEANS_MAX_ITERATIONS,
    rng: RandomSource = None,
    init: InitMethod = "random",
    empty_cluster: EmptyClusterPolicy = "keep",
) -> list[Cluster[T]]:
    """
    Partition points into k clusters with Lloyd's algorithm.

    Args:
        points: Points to cluster; only x and y are read
        k: Number of clusters
        max_iterations: Upper bound on assignment/update passes
        rng: Seed or numpy Generator for the initial centroids; None draws
            fresh entropy on every call
        init: "random" seeds from k distinct input points chosen uniformly;
            "k-means++" uses distance-weighted seeding
        empty_cluster: "keep" leaves a cluster that lost all its points on its
            previous centroid; "reseed" moves it to the point farthest from
            its own centroid

    Returns:
        Exactly k clusters, in seed order. Every input point appears in
        exactly one cluster; some clusters may be empty.

    Raises:
        InsufficientDataError: If there are fewer points than clusters
        ValueError: If k or max_iterations is below 1, or an option is unknown

    Example:
        >>> pts = [DataPoint(0, 0), DataPoint(0, 1), DataPoint(10, 10), DataPoint(10, 11)]
        >>> clusters = k_means_clustering(pts, 2, rng=7)
        >>> sorted(len(c.points) for c in clusters)
        [2, 2]
    """
    if k < 1:
        raise ValueError(f"k must be at least 1, got {k}")
    if len(points) < k:
        raise InsufficientDataError(len(points), k)
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")
    if init not in ("random", "k-means++"):
        raise ValueError(f"init must be 'random' or 'k-means++', got '{init}'")
    if empty_cluster not in ("keep", "reseed"):
        raise ValueError(f"empty_cluster must be 'keep' or 'reseed', got '{empty_cluster}'")

    generator = np.random.default_rng(rng)
    coords = np.array([p.coordinates for p in points], dtype=float)

    if init == "random":
        centroids = _random_seeds(coords, k, generator)
    else:
        centroids = _kmeans_plus_plus_seeds(coords, k, generator)

    for iteration in range(1, max_iterations + 1):
        labels, assigned_distances = _assign(coords, centroids)

        new_centroids = centroids.copy()
        for j in range(k):
            members = coords[labels == j]
            if len(members) > 0:
                new_centroids[j] = members.mean(axis=0)
            elif empty_cluster == "reseed":
                farthest = int(assigned_distances.argmax())
                new_centroids[j] = coords[farthest]
                assigned_distances[farthest] = 0.0

        shift = np.abs(new_centroids - centroids)
        centroids = new_centroids

        if np.all(shift <= KMEANS_CONVERGENCE):
            logger.debug("k-means converged after %d iterations (k=%d, n=%d)", iteration, k, len(points))
            break
    else:
        logger.debug("k-means stopped at max_iterations=%d without converging", max_iterations)

    clusters = [
        Cluster(centroid=Centroid(float(cx), float(cy)), points=[])
        for cx, cy in centroids
    ]
    for point, label in zip(points, labels):
        clusters[int(label)].points.append(point)

    return clusters
