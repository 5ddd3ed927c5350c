from __future__ import annotations

from typing import Dict, List

from fuzzyfolio.constants import MODEL_REGISTRY
from fuzzyfolio.enums import Model
from fuzzyfolio.models import ModelSummary


class ResponseGenerator:
    """
    Builds the plain-text dashboard.

    **Formatting-only** — ranking is delegated to :class:`TopsisEngine` and
    statistics to :class:`DashboardEngine`.  This class must not perform
    calculations itself.
    """

    # ------------------------------------------------------------------ #
    #  Headline cards
    # ------------------------------------------------------------------ #

    def stats(self, stats: Dict) -> str:
        best: Model = stats["best_model"]
        return "\n".join([
            f"Portfolios generated : {stats['total_portfolios']:,}",
            f"M7 advantage         : {stats['m7_advantage']:+.1f}% vs Markowitz",
            f"Risk reduction       : -{stats['risk_reduction']:.1f}% variance",
            f"TOPSIS score         : {stats['top_score']:.2f} ({best.value.replace('_', ' ')})",
        ])

    def weights_banner(self, weights: Dict[str, float]) -> str:
        parts = "  ".join(f"{k}={v:.0%}" for k, v in weights.items())
        total = sum(weights.values())
        return f"Weights: {parts}  (Total: {total * 100:.0f}%)"

    def progress(self, current: int, total: int, percent: float) -> str:
        return f"Simulation: {current:,} / {total:,} ({percent:.1f}%)"

    # ------------------------------------------------------------------ #
    #  TOPSIS leaderboard
    # ------------------------------------------------------------------ #

    def leaderboard(self, rankings: List[ModelSummary]) -> str:
        sep = "=" * 84
        lines = [
            sep,
            f"{'RK':<4} {'MODEL':<20} {'DESCRIPTION':<24} {'SCORE':>6}  "
            f"{'RETURN':>8}  {'VAR':>7}  {'ENTROPY':>7}  {'N':>5}",
            "-" * 84,
        ]

        for i, s in enumerate(rankings, 1):
            info = MODEL_REGISTRY.get(s.model, {})
            lines.append(
                f"{i:<4} {info.get('display', s.model.value):<20} "
                f"{info.get('description', ''):<24} {s.topsis_score:>6.2f}  "
                f"{s.avg_return * 100:>+7.2f}%  {s.avg_variance * 100:>6.3f}%  "
                f"{s.avg_entropy:>7.3f}  {s.count:>5,}"
            )

        lines.append(sep)
        if rankings:
            top = rankings[0]
            lines.append(
                f"\nTop model: {MODEL_REGISTRY.get(top.model, {}).get('display', top.model.value)}"
                f" (closeness {top.topsis_score:.4f})"
            )
        return "\n".join(lines)

    def export_written(self, path: str, count: int, fmt: str) -> str:
        return f"Exported {count:,} portfolios as {fmt.upper()} to {path}"
