from dataclasses import dataclass, field
from typing import Dict, List

from fuzzyfolio.config import DEFAULT_WINDOW_SIZE, WINDOW_SIZE_MIN, WINDOW_SIZE_MAX
from fuzzyfolio.constants import DEFAULT_ENABLED_MODELS, DEFAULT_WEIGHTS
from fuzzyfolio.enums import Model


@dataclass
class SessionContext:
    """
    Holds the user-controlled state of one dashboard session.

    ``window_size`` (months) is validated and kept for display only; it does
    not feed generation or ranking.
    """
    is_running: bool = False
    window_size: int = DEFAULT_WINDOW_SIZE

    # Criteria weights (each in [0, 1] by convention, need not sum to 1)
    weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))

    # Models drawn on the frontier chart and included in exports
    enabled_models: List[Model] = field(default_factory=lambda: list(DEFAULT_ENABLED_MODELS))

    def __post_init__(self):
        self.set_window_size(self.window_size)

    def set_window_size(self, size: int) -> None:
        """Raises ``ValueError`` when *size* is outside the slider range."""
        if not WINDOW_SIZE_MIN <= int(size) <= WINDOW_SIZE_MAX:
            raise ValueError(
                f"Window size must be between {WINDOW_SIZE_MIN} and "
                f"{WINDOW_SIZE_MAX} months (got {size})."
            )
        self.window_size = int(size)

    def set_weight(self, criterion: str, value: float) -> None:
        if criterion not in DEFAULT_WEIGHTS:
            raise ValueError(
                f"Unknown criterion: '{criterion}'. "
                f"Valid options: {list(DEFAULT_WEIGHTS)}"
            )
        self.weights = {**self.weights, criterion: float(value)}

    def toggle_model(self, model: Model) -> None:
        """Enable *model* if disabled, disable it otherwise."""
        if model in self.enabled_models:
            self.enabled_models = [m for m in self.enabled_models if m != model]
        else:
            self.enabled_models = [*self.enabled_models, model]

    def toggle_running(self) -> bool:
        self.is_running = not self.is_running
        return self.is_running

    def reset(self):
        """Reset the session to its initial state."""
        self.__init__()
