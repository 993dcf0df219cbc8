# config.py
#
# Shared constants for quiz sessions. The presentation layer owns these bounds;
# engines accept any sequence they are given.
import random
from dataclasses import dataclass
from typing import Optional

from sortquiz.ordering import ConvergenceDirection, OrderDirection

MIN_SIZE = 5
MAX_SIZE = 20

MIN_VALUE = 1
MAX_VALUE = 99

# Seconds to wait after an accepted step before the next prompt is shown.
STEP_DELAY = 0.6
# Selection sort only: pause between confirming the target and swapping it in.
SELECT_DELAY = 0.8


def clamp_size(raw) -> int:
    """Parse an array size from loose input and clamp it to [MIN_SIZE, MAX_SIZE]."""
    try:
        size = int(raw)
    except (TypeError, ValueError):
        return MIN_SIZE
    return max(MIN_SIZE, min(MAX_SIZE, size))


def generate_random_array(size: int, rng: random.Random = None) -> list:
    rng = rng or random.Random()
    return [rng.randint(MIN_VALUE, MAX_VALUE) for _ in range(size)]


@dataclass
class QuizSettings:
    """
    `convergence` of None means each algorithm uses its own default direction
    (see AlgorithmKind.default_convergence).
    """
    size: int = MIN_SIZE
    order: OrderDirection = OrderDirection.ASCENDING
    convergence: Optional[ConvergenceDirection] = None
    step_delay: float = STEP_DELAY
    select_delay: float = SELECT_DELAY

    def convergence_for(self, kind) -> ConvergenceDirection:
        return self.convergence or kind.default_convergence

    @classmethod
    def from_mapping(cls, data: dict) -> "QuizSettings":
        """
        Build settings from loose input such as parsed CLI args or widget values.
        Unknown keys are ignored; the size is clamped, enum names are parsed.
        """
        convergence = data.get("convergence")
        return cls(
            size=clamp_size(data.get("size", MIN_SIZE)),
            order=OrderDirection.parse(data.get("order", OrderDirection.ASCENDING)),
            convergence=ConvergenceDirection.parse(convergence) if convergence else None,
            step_delay=float(data.get("step_delay", STEP_DELAY)),
            select_delay=float(data.get("select_delay", SELECT_DELAY)),
        )
