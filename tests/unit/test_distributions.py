"""Unit tests for the normal distribution approximations."""

import math

import numpy as np
import pytest
from options_analytics.core.distributions import exact_normal_cdf, normal_cdf, normal_pdf

GRID = np.linspace(-7.5, 7.5, 3001)


def test_cdf_at_zero():
    assert abs(normal_cdf(0.0) - 0.5) < 1e-7


@pytest.mark.parametrize("x", [0.1, 0.5, 1.0, 1.96, 3.0, 6.0])
def test_cdf_symmetry(x):
    """Φ(-x) = 1 - Φ(x)."""
    assert normal_cdf(-x) == pytest.approx(1.0 - normal_cdf(x), abs=1e-15)


def test_cdf_accuracy_against_scipy():
    """Abramowitz-Stegun error stays below 1.5e-7 everywhere."""
    errors = [abs(normal_cdf(x) - exact_normal_cdf(x)) for x in GRID]
    assert max(errors) < 1.5e-7


def test_cdf_monotone():
    values = [normal_cdf(x) for x in GRID]
    for lower, higher in zip(values, values[1:]):
        assert higher >= lower


def test_cdf_clamps_in_tails():
    assert normal_cdf(8.5) == 1.0
    assert normal_cdf(-8.5) == 0.0


def test_known_percentile():
    assert abs(normal_cdf(1.96) - 0.975) < 1e-4


def test_pdf_peak():
    assert normal_pdf(0.0) == pytest.approx(1.0 / math.sqrt(2.0 * math.pi))


def test_pdf_even_and_cut_off():
    assert normal_pdf(1.3) == normal_pdf(-1.3)
    assert normal_pdf(15.0) == 0.0
