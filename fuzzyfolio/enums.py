from enum import Enum


class Model(Enum):
    """
    Portfolio-construction strategy that produced a cluster of scored points.

    Declaration order is the canonical order: generation emits populations
    in this order and the TOPSIS ranking breaks score ties by it.
    """
    M1 = "M1"                   # Markowitz mean-variance
    M2 = "M2"                   # Max Shannon entropy
    M3 = "M3"                   # Min variance + max entropy
    M6 = "M6"                   # Fuzzy entropy return + min variance
    COMP = "COMP"               # Possibilistic mean-variance (comparison)
    M7_CLOUD = "M7_Cloud"       # Fuzzy (alpha, beta) grid exploration
    M7_BEST = "M7_Best"         # Optimal fuzzy zone

    @property
    def is_fuzzy(self) -> bool:
        """True for models whose points carry alpha/beta parameters."""
        return self in (Model.M7_CLOUD, Model.M7_BEST)

    @classmethod
    def parse(cls, label: str) -> "Model":
        """Resolve a label such as ``"M7_Best"`` (case-insensitive)."""
        for model in cls:
            if model.value.lower() == str(label).strip().lower():
                return model
        raise ValueError(
            f"Unknown model: '{label}'. "
            f"Valid options: {[m.value for m in cls]}"
        )


class ExportFormat(Enum):
    """Serialization format for a point collection."""
    JSON = "json"
    CSV = "csv"

    @classmethod
    def parse(cls, fmt) -> "ExportFormat":
        if isinstance(fmt, cls):
            return fmt
        try:
            return cls(str(fmt).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown export format: '{fmt}'. "
                f"Valid options: {[f.value for f in cls]}"
            ) from None
