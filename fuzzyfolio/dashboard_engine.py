"""
fuzzyfolio/dashboard_engine.py
------------------------------
Data shaping for the dashboard views: model filtering, chart downsampling,
headline statistics and simulation progress.

Design contract:
  - No ranking computation (rankings are passed in)
  - No rendering
  - Fully deterministic and stateless (all methods are @staticmethod)
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence

from fuzzyfolio.config import PROGRESS_TARGET
from fuzzyfolio.constants import DEFAULT_MAX_POINTS, MODEL_REGISTRY
from fuzzyfolio.enums import Model
from fuzzyfolio.models import ModelSummary, ScoredPoint


class DashboardEngine:
    """Views over the point population for the chart and stats cards."""

    # ------------------------------------------------------------------ #
    #  Filtering and downsampling
    # ------------------------------------------------------------------ #

    @staticmethod
    def filter_models(
        points: Iterable[ScoredPoint],
        enabled_models: Iterable[Model],
    ) -> List[ScoredPoint]:
        """Keep points whose model is enabled, preserving order."""
        enabled = set(enabled_models)
        return [p for p in points if p.model in enabled]

    @staticmethod
    def downsample(items: Sequence, max_n: int) -> list:
        """
        Evenly spaced subset of at most *max_n* items.

        Picks ``items[floor(i * len / max_n)]`` for ``i < max_n``; sequences
        already within budget are returned whole.
        """
        if max_n <= 0:
            return []
        if len(items) <= max_n:
            return list(items)
        step = len(items) / max_n
        return [items[math.floor(i * step)] for i in range(max_n)]

    @staticmethod
    def frontier_series(
        points: Iterable[ScoredPoint],
        enabled_models: Iterable[Model],
    ) -> List[dict]:
        """
        Per-model scatter series for the efficient-frontier chart.

        Returns
        -------
        list of dict, ordered by ascending ``z_index`` (drawn back to front)::

            {
                "model":   Model,
                "display": str,
                "color":   str,
                "z_index": int,
                "points":  [{"x": variance %, "y": return %, "point": ScoredPoint}],
            }

        Only models with at least one enabled point appear.
        """
        groups: dict = {}
        for p in DashboardEngine.filter_models(points, enabled_models):
            groups.setdefault(p.model, []).append(p)

        series = []
        for model, members in groups.items():
            info = MODEL_REGISTRY.get(model, {})
            sampled = DashboardEngine.downsample(
                members, info.get("max_points", DEFAULT_MAX_POINTS)
            )
            series.append({
                "model":   model,
                "display": info.get("display", model.value),
                "color":   info.get("color", ""),
                "z_index": info.get("z_index", 0),
                "points":  [
                    {"x": p.variance * 100, "y": p.expected_return * 100, "point": p}
                    for p in sampled
                ],
            })

        series.sort(key=lambda s: s["z_index"])
        return series

    # ------------------------------------------------------------------ #
    #  Headline statistics
    # ------------------------------------------------------------------ #

    @staticmethod
    def _mean(values: List[float]) -> float:
        return sum(values) / len(values) if values else 0.0

    @staticmethod
    def headline_stats(
        points: Sequence[ScoredPoint],
        rankings: Optional[List[ModelSummary]] = None,
    ) -> dict:
        """
        Summary figures comparing the optimal fuzzy zone to Markowitz.

        Returns
        -------
        dict
            ``total_portfolios`` — population size
            ``m7_advantage``     — % return gain of M7_Best over M1
            ``risk_reduction``   — % variance reduction of M7_Best vs M1
            ``top_score``        — TOPSIS score of the leader (0 if none)
            ``best_model``       — leading model (M7_Best if no rankings)

        Percentages are ``0.0`` when the M1 baseline is zero or absent.
        """
        best = [p for p in points if p.model is Model.M7_BEST]
        base = [p for p in points if p.model is Model.M1]

        best_ret = DashboardEngine._mean([p.expected_return for p in best])
        base_ret = DashboardEngine._mean([p.expected_return for p in base])
        best_var = DashboardEngine._mean([p.variance for p in best])
        base_var = DashboardEngine._mean([p.variance for p in base])

        advantage = (best_ret - base_ret) / abs(base_ret) * 100 if base_ret else 0.0
        reduction = (base_var - best_var) / base_var * 100 if base_var else 0.0

        leader = rankings[0] if rankings else None
        return {
            "total_portfolios": len(points),
            "m7_advantage":     advantage,
            "risk_reduction":   reduction,
            "top_score":        leader.topsis_score if leader else 0.0,
            "best_model":       leader.model if leader else Model.M7_BEST,
        }

    @staticmethod
    def simulation_progress(current: int, total: int = PROGRESS_TARGET) -> float:
        """Percentage of *total* reached, clipped to [0, 100]."""
        if total <= 0:
            return 100.0
        return max(0.0, min(100.0, current / total * 100))
