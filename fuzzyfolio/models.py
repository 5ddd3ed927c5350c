from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

import pandas as pd

from fuzzyfolio.constants import CSV_COLUMNS
from fuzzyfolio.enums import Model


@dataclass(frozen=True)
class ScoredPoint:
    """
    One simulated portfolio outcome.

    ``variance`` and ``entropy`` are expected to be non-negative but are not
    clamped: jittered cloud points may dip marginally below zero variance and
    are kept as generated.  ``alpha`` / ``beta`` are present only for the
    fuzzy-parameterised models and are always set together.
    """
    model: Model
    expected_return: float
    variance: float
    entropy: float
    alpha: Optional[float] = None
    beta: Optional[float] = None

    def __post_init__(self):
        if (self.alpha is None) != (self.beta is None):
            raise ValueError(
                f"{self.model.value} point must carry both alpha and beta or neither "
                f"(got alpha={self.alpha!r}, beta={self.beta!r})."
            )

    @property
    def has_fuzzy_params(self) -> bool:
        return self.alpha is not None

    def to_dict(self) -> dict:
        """Serializable record; fuzzy parameters are omitted when absent."""
        record = {
            "model":    self.model.value,
            "return":   self.expected_return,
            "variance": self.variance,
            "entropy":  self.entropy,
        }
        if self.has_fuzzy_params:
            record["alpha"] = self.alpha
            record["beta"] = self.beta
        return record

    @classmethod
    def from_dict(cls, record: dict) -> "ScoredPoint":
        """
        Inverse of :meth:`to_dict`.

        Raises
        ------
        ValueError
            If a required key is missing or the model label is unknown.
        """
        missing = {"model", "return", "variance", "entropy"} - set(record)
        if missing:
            raise ValueError(f"Point record is missing keys: {sorted(missing)}")

        alpha = record.get("alpha")
        beta = record.get("beta")
        return cls(
            model=Model.parse(record["model"]),
            expected_return=float(record["return"]),
            variance=float(record["variance"]),
            entropy=float(record["entropy"]),
            alpha=None if alpha is None else float(alpha),
            beta=None if beta is None else float(beta),
        )


@dataclass
class ModelSummary:
    """Per-model means and TOPSIS closeness for one ranking run."""
    model: Model
    avg_return: float = 0.0
    avg_variance: float = 0.0
    avg_entropy: float = 0.0
    count: int = 0
    topsis_score: float = 0.0
    color: str = ""

    def to_dict(self) -> dict:
        return {
            "model":       self.model.value,
            "avgReturn":   self.avg_return,
            "avgVariance": self.avg_variance,
            "avgEntropy":  self.avg_entropy,
            "count":       self.count,
            "topsisScore": self.topsis_score,
            "color":       self.color,
        }


def points_to_frame(points: Iterable[ScoredPoint]) -> pd.DataFrame:
    """
    Tabulate *points* with one row per point and ``CSV_COLUMNS`` as columns.

    ``model`` holds the label string; numeric columns are always float64 so
    absent fuzzy parameters become NaN and an empty input still has the
    right dtypes.
    """
    records = [
        (p.model.value, p.expected_return, p.variance, p.entropy, p.alpha, p.beta)
        for p in points
    ]
    frame = pd.DataFrame.from_records(records, columns=list(CSV_COLUMNS))
    numeric = [c for c in CSV_COLUMNS if c != "model"]
    frame[numeric] = frame[numeric].astype(float)
    return frame
