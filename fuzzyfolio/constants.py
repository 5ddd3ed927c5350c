"""
fuzzyfolio/constants.py
-----------------------
Business-logic constants shared across modules.

Placing these here keeps the formatting layer (ResponseGenerator), the
dashboard views and the ranking engine aligned on a single source of truth
for the closed set of models without creating circular imports.
"""

from __future__ import annotations

from fuzzyfolio.enums import Model, ExportFormat


# ---------------------------------------------------------------------------
# Model registry
# ---------------------------------------------------------------------------
# Each entry drives:
#   - TopsisEngine summaries (color carried through)
#   - DashboardEngine frontier series (z_index ordering, max_points budget)
#   - ResponseGenerator leaderboard (display name, description)
# ---------------------------------------------------------------------------

MODEL_REGISTRY: dict[Model, dict] = {
    Model.M1: {
        "display":     "Markowitz (M1)",
        "description": "Markowitz Classic",
        "color":       "hsl(220 90% 56%)",
        "z_index":     3,
        "max_points":  150,
    },
    Model.M2: {
        "display":     "Max Entropy (M2)",
        "description": "Max Shannon Entropy",
        "color":       "hsl(192 95% 50%)",
        "z_index":     2,
        "max_points":  100,
    },
    Model.M3: {
        "display":     "Hybrid (M3)",
        "description": "Min Var + Max Entropy",
        "color":       "hsl(280 80% 60%)",
        "z_index":     4,
        "max_points":  100,
    },
    Model.M6: {
        "display":     "Fuzzy Return (M6)",
        "description": "Fuzzy Return + Min Var",
        "color":       "hsl(38 92% 50%)",
        "z_index":     4,
        "max_points":  100,
    },
    Model.COMP: {
        "display":     "Comparative (COMP)",
        "description": "Possibilistic Mean-Var",
        "color":       "hsl(340 80% 55%)",
        "z_index":     2,
        "max_points":  80,
    },
    Model.M7_CLOUD: {
        "display":     "M7 Fuzzy Space",
        "description": "Fuzzy Exploration Space",
        "color":       "hsl(220 15% 55%)",
        "z_index":     1,
        "max_points":  500,   # heavy reduction for the cloud
    },
    Model.M7_BEST: {
        "display":     "M7 Optimal",
        "description": "Fuzzy Entropy Optimal",
        "color":       "hsl(152 76% 50%)",
        "z_index":     10,
        "max_points":  150,
    },
}

# Chart budget for a model missing from the registry.
DEFAULT_MAX_POINTS: int = 100


# ---------------------------------------------------------------------------
# TOPSIS criteria: weight key → (ScoredPoint attribute, higher_is_better)
# ---------------------------------------------------------------------------

CRITERIA: dict[str, tuple[str, bool]] = {
    "return":   ("expected_return", True),
    "variance": ("variance",        False),   # cost criterion
    "entropy":  ("entropy",         True),
}

DEFAULT_WEIGHTS: dict[str, float] = {
    "return":   0.4,
    "variance": 0.3,
    "entropy":  0.3,
}

DEFAULT_ENABLED_MODELS: tuple[Model, ...] = (
    Model.M1,
    Model.M3,
    Model.M6,
    Model.M7_CLOUD,
    Model.M7_BEST,
)


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

CSV_COLUMNS: tuple[str, ...] = ("model", "return", "variance", "entropy", "alpha", "beta")
CSV_FLOAT_FORMAT: str = "%.6f"

MIME_TYPES: dict[ExportFormat, str] = {
    ExportFormat.JSON: "application/json",
    ExportFormat.CSV:  "text/csv",
}

EXPORT_FILENAME_TEMPLATE: str = "fuzzyfolio_{total}_portfolios.{ext}"
