"""
fuzzyfolio/topsis_engine.py
---------------------------
Per-model aggregation and TOPSIS ranking.

Pipeline::

    scored points
        → aggregate            (per-model means, every model present)
        → normalize            (vector normalisation per criterion)
        → apply_weights
        → ideal_solutions      (benefit: max/min, cost: min/max)
        → closeness            (dNeg / (dPos + dNeg))
        → stable sort, descending

Degenerate inputs never raise: an empty model aggregates to zeros, a zero
norm normalises to 0, and zero total distance scores 0.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List

import numpy as np

from fuzzyfolio.constants import CRITERIA, MODEL_REGISTRY
from fuzzyfolio.enums import Model
from fuzzyfolio.models import ModelSummary, ScoredPoint, points_to_frame

logger = logging.getLogger(__name__)


class InvalidWeightError(ValueError):
    """A criterion weight is negative, non-finite or not a number."""


@dataclass(frozen=True)
class TopsisResult:
    """
    Every intermediate of one TOPSIS run, rows in ``Model`` order and
    columns in ``CRITERIA`` order.
    """
    summaries: List[ModelSummary]
    normalized: np.ndarray
    weighted: np.ndarray
    ideal: np.ndarray
    anti_ideal: np.ndarray
    d_pos: np.ndarray
    d_neg: np.ndarray


class TopsisEngine:
    """
    Ranks the fixed set of models by relative closeness to the ideal
    solution.  Stateless; all methods are static.
    """

    # ------------------------------------------------------------------ #
    #  Weight validation
    # ------------------------------------------------------------------ #

    @staticmethod
    def validate_weights(weights: dict) -> dict:
        """
        Return ``{criterion: float}`` for every criterion in ``CRITERIA``.

        Missing keys default to 0.  Weights are *not* rescaled: they need
        not sum to 1.

        Raises
        ------
        InvalidWeightError
            If any weight is negative, NaN, infinite or not numeric.
        """
        validated = {}
        for key in CRITERIA:
            raw = weights.get(key, 0.0)
            try:
                value = float(raw)
            except (TypeError, ValueError):
                raise InvalidWeightError(
                    f"Weight for '{key}' must be a number (got {raw!r})."
                ) from None
            if not math.isfinite(value):
                raise InvalidWeightError(f"Weight for '{key}' must be finite (got {value}).")
            if value < 0:
                raise InvalidWeightError(f"Weight for '{key}' must be non-negative (got {value}).")
            validated[key] = value
        return validated

    # ------------------------------------------------------------------ #
    #  Step 1 — Partition & aggregate
    # ------------------------------------------------------------------ #

    @staticmethod
    def aggregate(points: Iterable[ScoredPoint]) -> List[ModelSummary]:
        """
        One summary per ``Model`` in enumeration order.

        Means are taken over the points of that model only; a model with no
        points gets zero means and ``count == 0``.
        """
        frame = points_to_frame(points)
        columns = list(CRITERIA)
        labels = [m.value for m in Model]

        grouped = frame.groupby("model")
        means = grouped[columns].mean().reindex(labels).fillna(0.0)
        counts = grouped.size().reindex(labels, fill_value=0)

        return [
            ModelSummary(
                model=model,
                avg_return=float(means.at[model.value, "return"]),
                avg_variance=float(means.at[model.value, "variance"]),
                avg_entropy=float(means.at[model.value, "entropy"]),
                count=int(counts[model.value]),
                color=MODEL_REGISTRY[model]["color"],
            )
            for model in Model
        ]

    @staticmethod
    def decision_matrix(summaries: List[ModelSummary]) -> np.ndarray:
        """Rows = summaries, columns = return, variance, entropy means."""
        return np.array(
            [[s.avg_return, s.avg_variance, s.avg_entropy] for s in summaries],
            dtype=float,
        ).reshape(len(summaries), len(CRITERIA))

    # ------------------------------------------------------------------ #
    #  Step 2 — Vector normalisation
    # ------------------------------------------------------------------ #

    @staticmethod
    def normalize(matrix: np.ndarray) -> np.ndarray:
        """
        Divide each column by its Euclidean norm.

        A column whose norm is zero normalises to all zeros.
        """
        norms = np.sqrt((matrix ** 2).sum(axis=0))
        return np.divide(
            matrix,
            norms,
            out=np.zeros_like(matrix, dtype=float),
            where=norms > 0,
        )

    # ------------------------------------------------------------------ #
    #  Step 3 — Weighting
    # ------------------------------------------------------------------ #

    @staticmethod
    def apply_weights(normalized: np.ndarray, weights: dict) -> np.ndarray:
        w = np.array([weights[key] for key in CRITERIA], dtype=float)
        return normalized * w

    # ------------------------------------------------------------------ #
    #  Step 4 — Ideal and anti-ideal solutions
    # ------------------------------------------------------------------ #

    @staticmethod
    def ideal_solutions(weighted: np.ndarray) -> tuple:
        """
        Return ``(ideal, anti_ideal)``.

        Benefit criteria take the column max as ideal, cost criteria the
        column min; the anti-ideal is the opposite extreme.
        """
        n = len(CRITERIA)
        if weighted.shape[0] == 0:
            return np.zeros(n), np.zeros(n)

        col_max = weighted.max(axis=0)
        col_min = weighted.min(axis=0)
        benefit = np.array([higher for _, higher in CRITERIA.values()])

        ideal = np.where(benefit, col_max, col_min)
        anti_ideal = np.where(benefit, col_min, col_max)
        return ideal, anti_ideal

    # ------------------------------------------------------------------ #
    #  Step 5 — Distances and relative closeness
    # ------------------------------------------------------------------ #

    @staticmethod
    def distances(weighted: np.ndarray, reference: np.ndarray) -> np.ndarray:
        """Row-wise Euclidean distance to *reference*."""
        return np.sqrt(((weighted - reference) ** 2).sum(axis=1))

    @staticmethod
    def closeness(d_pos: np.ndarray, d_neg: np.ndarray) -> np.ndarray:
        """``d_neg / (d_pos + d_neg)``, or 0 where both distances are zero."""
        total = d_pos + d_neg
        return np.divide(
            d_neg,
            total,
            out=np.zeros_like(total, dtype=float),
            where=total > 0,
        )

    # ------------------------------------------------------------------ #
    #  Entry points
    # ------------------------------------------------------------------ #

    @staticmethod
    def compute(points: Iterable[ScoredPoint], weights: dict) -> TopsisResult:
        """
        Run steps 1–5 and keep every intermediate.

        Summaries come back in ``Model`` order with ``topsis_score`` filled.
        A model with no points is scored on its zero means like any other row,
        so its score is not forced to 0 (zero variance sits on the cost ideal).
        """
        validated = TopsisEngine.validate_weights(weights)
        summaries = TopsisEngine.aggregate(points)

        normalized = TopsisEngine.normalize(TopsisEngine.decision_matrix(summaries))
        weighted = TopsisEngine.apply_weights(normalized, validated)
        ideal, anti_ideal = TopsisEngine.ideal_solutions(weighted)

        d_pos = TopsisEngine.distances(weighted, ideal)
        d_neg = TopsisEngine.distances(weighted, anti_ideal)
        scores = TopsisEngine.closeness(d_pos, d_neg)

        for summary, score in zip(summaries, scores):
            summary.topsis_score = float(score)

        return TopsisResult(
            summaries=summaries,
            normalized=normalized,
            weighted=weighted,
            ideal=ideal,
            anti_ideal=anti_ideal,
            d_pos=d_pos,
            d_neg=d_neg,
        )

    @staticmethod
    def rank(points: Iterable[ScoredPoint], weights: dict) -> List[ModelSummary]:
        """
        Main entry point.  Exactly one summary per model, sorted descending
        by ``topsis_score``; equal scores keep ``Model`` enumeration order.

        Raises
        ------
        InvalidWeightError
            If *weights* contains a negative or non-finite value.
        """
        result = TopsisEngine.compute(points, weights)

        # list.sort is stable, including with reverse=True
        ranked = sorted(result.summaries, key=lambda s: s.topsis_score, reverse=True)
        logger.debug(
            "TOPSIS winner %s (%.4f) with weights %s",
            ranked[0].model.value, ranked[0].topsis_score, weights,
        )
        return ranked
