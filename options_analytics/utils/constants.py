"""
Numerical constants and defaults for pricing and clustering.

This module defines the thresholds and solver parameters shared by the
pricing engine, the implied volatility solver, and the k-means engine.
"""

# Normal distribution bounds
MAX_STANDARD_DEVIATIONS = 8.0  # Beyond ±8σ, CDF is effectively 0 or 1
MAX_PDF_ARGUMENT = 10.0  # Beyond ±10, PDF < 2e-22

# Abramowitz & Stegun 7.1.26 coefficients (|error| < 1.5e-7 on erf)
AS_A1 = 0.254829592
AS_A2 = -0.284496736
AS_A3 = 1.421413741
AS_A4 = -1.453152027
AS_A5 = 1.061405429
AS_P = 0.3275911

# Greeks scaling
DAYS_PER_YEAR = 365.0  # Theta is quoted per calendar day
PERCENT_POINT = 0.01  # Vega and rho are quoted per 1% move

# Implied volatility solver parameters
IV_MIN_VOL = 0.001  # 0.1% lower bracket edge
IV_MAX_VOL = 5.0  # 500% upper bracket edge
IV_PRECISION = 1e-4  # Price accuracy for bisection termination
IV_MAX_ITERATIONS = 100  # Maximum bisection steps

# K-means parameters
KMEANS_MAX_ITERATIONS = 100
KMEANS_CONVERGENCE = 0.001  # Max per-axis centroid shift treated as converged

# Price curve defaults (fraction of spot)
CURVE_LOWER = 0.7
CURVE_UPPER = 1.3
CURVE_STEPS = 20
