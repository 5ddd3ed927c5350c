"""
fuzzyfolio/simulation_engine.py
-------------------------------
Deterministic synthetic population of scored portfolios.

Design
------
* Seven disjoint populations, one per :class:`Model`, emitted model-major in
  enumeration order (M1, M2, M3, M6, COMP, M7_Cloud, M7_Best).
* Randomness comes from :class:`SeededRandom` — ``frac(sin(seed) * 10000)``
  with an incrementing integer seed starting at 42 — never from the
  ``random`` module, so output matches other implementations of the same
  formula draw-for-draw.
* Within a point, draws are consumed in the fixed order variance, return,
  entropy (M7_Best draws alpha and beta first).  Reordering them changes
  every subsequent value.

Caching
-------
``get_portfolios()`` memoizes the population for the process lifetime.  The
first call is guarded by a lock so concurrent callers never generate twice;
``reset_portfolios()`` drops the cached tuple so tests can force a rebuild.
"""

from __future__ import annotations

import logging
import math
import threading
from collections import Counter
from typing import Iterable, List, Optional, Tuple

from fuzzyfolio import config
from fuzzyfolio.enums import Model
from fuzzyfolio.models import ScoredPoint

logger = logging.getLogger(__name__)


class SeededRandom:
    """Trigonometric pseudo-random sequence in ``[0, 1)``."""

    def __init__(self, seed: int = config.SEED_START):
        self.seed = seed

    def next(self) -> float:
        x = math.sin(self.seed) * config.SEED_SCALE
        self.seed += 1
        return x - math.floor(x)

    def uniform(self, band: Tuple[float, float]) -> float:
        """``low + next() * width`` for a ``(low, width)`` band."""
        low, width = band
        return low + self.next() * width

    def jitter(self, base: float, spread: float) -> float:
        """``base`` displaced by up to ``spread / 2`` either way."""
        return base + (self.next() - 0.5) * spread


# ---------------------------------------------------------------------------
# Grid helpers
# ---------------------------------------------------------------------------

def grid_axis() -> List[float]:
    """The ``GRID_SIZE`` alpha (or beta) values of the fuzzy grid."""
    return [config.GRID_START + i * config.GRID_STEP for i in range(config.GRID_SIZE)]


def in_optimal_zone(alpha: float, beta: float) -> bool:
    """True for grid cells reserved for ``M7_Best``."""
    a_lo, a_hi = config.OPTIMAL_ALPHA
    b_lo, b_hi = config.OPTIMAL_BETA
    return a_lo <= alpha <= a_hi and b_lo <= beta <= b_hi


def cloud_cells() -> List[Tuple[float, float]]:
    """``(alpha, beta)`` cells populated by ``M7_Cloud``, alpha-major."""
    axis = grid_axis()
    return [
        (alpha, beta)
        for alpha in axis
        for beta in axis
        if not in_optimal_zone(alpha, beta)
    ]


def expected_counts() -> dict:
    """``{Model: population size}`` implied by the configuration."""
    return {
        Model.M1:       config.M1_POINTS,
        Model.M2:       config.M2_POINTS,
        Model.M3:       config.M3_POINTS,
        Model.M6:       config.M6_POINTS,
        Model.COMP:     config.COMP_POINTS,
        Model.M7_CLOUD: len(cloud_cells()) * config.POINTS_PER_CELL,
        Model.M7_BEST:  config.M7_BEST_POINTS,
    }


def population_counts(points: Iterable[ScoredPoint]) -> dict:
    """Count points per model; every model is present, possibly with 0."""
    counts = Counter(p.model for p in points)
    return {model: counts.get(model, 0) for model in Model}


# ===========================================================================
# SimulationEngine
# ===========================================================================

class SimulationEngine:
    """
    Builds the full population from a fresh :class:`SeededRandom`.

    Each ``_generate_*`` step consumes the shared sequence, so the steps must
    run in :meth:`generate` order.
    """

    @staticmethod
    def generate(seed: int = config.SEED_START) -> Tuple[ScoredPoint, ...]:
        rng = SeededRandom(seed)
        points: List[ScoredPoint] = []

        points.extend(SimulationEngine._generate_frontier(rng))
        points.extend(SimulationEngine._generate_banded(rng, Model.M2, config.M2_POINTS, config.M2_BANDS))
        points.extend(SimulationEngine._generate_banded(rng, Model.M3, config.M3_POINTS, config.M3_BANDS))
        points.extend(SimulationEngine._generate_banded(rng, Model.M6, config.M6_POINTS, config.M6_BANDS))
        points.extend(SimulationEngine._generate_banded(rng, Model.COMP, config.COMP_POINTS, config.COMP_BANDS))
        points.extend(SimulationEngine._generate_cloud(rng))
        points.extend(SimulationEngine._generate_optimal(rng))

        return tuple(points)

    # ------------------------------------------------------------------ #
    #  Per-model shaping functions
    # ------------------------------------------------------------------ #

    @staticmethod
    def _generate_frontier(rng: SeededRandom) -> List[ScoredPoint]:
        """M1 — linear sweep along the classic efficient frontier."""
        var_start, var_slope = config.M1_VARIANCE_LINE
        ret_start, ret_slope = config.M1_RETURN_LINE

        points = []
        for i in range(config.M1_POINTS):
            t = i / config.M1_POINTS
            variance = rng.jitter(var_start + t * var_slope, config.M1_VARIANCE_JITTER)
            ret = rng.jitter(ret_start + t * ret_slope, config.M1_RETURN_JITTER)
            entropy = rng.uniform(config.M1_ENTROPY_BAND)
            points.append(ScoredPoint(Model.M1, ret, variance, entropy))
        return points

    @staticmethod
    def _generate_banded(
        rng: SeededRandom,
        model: Model,
        count: int,
        bands: dict,
    ) -> List[ScoredPoint]:
        """M2 / M3 / M6 / COMP — uniform draws inside fixed bands."""
        points = []
        for _ in range(count):
            variance = rng.uniform(bands["variance"])
            ret = rng.uniform(bands["return"])
            entropy = rng.uniform(bands["entropy"])
            points.append(ScoredPoint(model, ret, variance, entropy))
        return points

    @staticmethod
    def _generate_cloud(rng: SeededRandom) -> List[ScoredPoint]:
        """M7_Cloud — jittered points over the fuzzy grid, optimal zone excluded."""
        var_start, var_slope = config.M7_CLOUD_VARIANCE_LINE
        ret_start, ret_slope = config.M7_CLOUD_RETURN_LINE

        points = []
        for alpha, beta in cloud_cells():
            var_base = var_start + (1 - beta) * var_slope
            ret_base = alpha * ret_slope + ret_start
            for _ in range(config.POINTS_PER_CELL):
                variance = rng.jitter(var_base, config.M7_CLOUD_VARIANCE_JITTER)
                ret = rng.jitter(ret_base, config.M7_CLOUD_RETURN_JITTER)
                entropy = rng.uniform(config.M7_CLOUD_ENTROPY_BAND)
                points.append(ScoredPoint(Model.M7_CLOUD, ret, variance, entropy, alpha, beta))
        return points

    @staticmethod
    def _generate_optimal(rng: SeededRandom) -> List[ScoredPoint]:
        """M7_Best — the favourable (alpha, beta) zone."""
        bands = config.M7_BEST_BANDS
        points = []
        for _ in range(config.M7_BEST_POINTS):
            alpha = rng.uniform(bands["alpha"])
            beta = rng.uniform(bands["beta"])
            variance = rng.uniform(bands["variance"])
            ret = rng.uniform(bands["return"])
            entropy = rng.uniform(bands["entropy"])
            points.append(ScoredPoint(Model.M7_BEST, ret, variance, entropy, alpha, beta))
        return points


# ---------------------------------------------------------------------------
# Process-wide cache
# ---------------------------------------------------------------------------

_cache_lock = threading.Lock()
_cached_portfolios: Optional[Tuple[ScoredPoint, ...]] = None


def get_portfolios() -> Tuple[ScoredPoint, ...]:
    """
    Return the memoized population, generating it on first use.

    Every call after the first returns the same tuple object until
    :func:`reset_portfolios` is called.
    """
    global _cached_portfolios

    cached = _cached_portfolios
    if cached is not None:
        return cached

    with _cache_lock:
        if _cached_portfolios is None:
            logger.debug("Generating portfolio population (seed=%d)", config.SEED_START)
            _cached_portfolios = SimulationEngine.generate()
            logger.info("Generated %d portfolios", len(_cached_portfolios))
        return _cached_portfolios


def reset_portfolios() -> None:
    """Drop the cached population; the next read regenerates it."""
    global _cached_portfolios
    with _cache_lock:
        _cached_portfolios = None
    logger.debug("Portfolio cache cleared")
