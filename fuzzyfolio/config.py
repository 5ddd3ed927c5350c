"""
fuzzyfolio/config.py
--------------------
Tunable simulation parameters.

Keeping these separate from fuzzyfolio/constants.py (which holds display and
ranking constants) keeps a clean boundary: this file owns the numbers that
shape the synthetic portfolio population.  Changing any of them changes the
generated data, so cross-run determinism only holds while they are fixed.
"""

# ---------------------------------------------------------------------------
# Pseudo-random sequence
# ---------------------------------------------------------------------------
# next value = frac(sin(seed) * SEED_SCALE), seed incremented on every draw.

SEED_START: int = 42
SEED_SCALE: float = 10000.0

# ---------------------------------------------------------------------------
# Population sizes for the non-grid models
# ---------------------------------------------------------------------------

M1_POINTS: int = 800
M2_POINTS: int = 600
M3_POINTS: int = 500
M6_POINTS: int = 500
COMP_POINTS: int = 400
M7_BEST_POINTS: int = 618

# ---------------------------------------------------------------------------
# Value bands: (low, width) → value = low + rand() * width
# ---------------------------------------------------------------------------

M1_ENTROPY_BAND = (0.8, 0.4)

M2_BANDS = {
    "variance": (0.003, 0.008),
    "return":   (0.002, 0.012),
    "entropy":  (1.1,   0.3),
}

M3_BANDS = {
    "variance": (0.002, 0.006),
    "return":   (0.003, 0.010),
    "entropy":  (1.0,   0.35),
}

M6_BANDS = {
    "variance": (0.002, 0.007),
    "return":   (0.004, 0.011),
    "entropy":  (1.05,  0.3),
}

COMP_BANDS = {
    "variance": (0.003, 0.010),
    "return":   (0.001, 0.008),
    "entropy":  (0.7,   0.4),
}

M7_BEST_BANDS = {
    "alpha":    (0.2,   0.2),
    "beta":     (0.8,   0.2),
    "variance": (0.001, 0.003),
    "return":   (0.008, 0.012),
    "entropy":  (1.2,   0.2),
}

# ---------------------------------------------------------------------------
# M1 efficient-frontier sweep: base = start + t * slope, t = i / M1_POINTS
# ---------------------------------------------------------------------------

M1_VARIANCE_LINE = (0.001, 0.015)
M1_RETURN_LINE = (-0.005, 0.025)
M1_VARIANCE_JITTER: float = 0.002
M1_RETURN_JITTER: float = 0.003

# ---------------------------------------------------------------------------
# M7 fuzzy grid
# ---------------------------------------------------------------------------
# GRID_SIZE x GRID_SIZE (alpha, beta) cells, each axis = start + i * step.
# Cells inside the optimal zone are left to M7_Best.

GRID_SIZE: int = 15
GRID_START: float = 0.05
GRID_STEP: float = 0.0643
POINTS_PER_CELL: int = 38

OPTIMAL_ALPHA = (0.2, 0.4)
OPTIMAL_BETA = (0.8, 1.0)

# variance base = start + (1 - beta) * slope; return base = start + alpha * slope
M7_CLOUD_VARIANCE_LINE = (0.001, 0.012)
M7_CLOUD_RETURN_LINE = (-0.005, 0.02)
M7_CLOUD_VARIANCE_JITTER: float = 0.004
M7_CLOUD_RETURN_JITTER: float = 0.008
M7_CLOUD_ENTROPY_BAND = (0.9, 0.5)

# ---------------------------------------------------------------------------
# Simulation control
# ---------------------------------------------------------------------------
# The rolling window (months) is accepted and validated but does not alter
# generation or ranking.

WINDOW_SIZE_MIN: int = 12
WINDOW_SIZE_MAX: int = 36
DEFAULT_WINDOW_SIZE: int = 20

# Target population shown by the progress ring of the simulation control.
PROGRESS_TARGET: int = 40_000
