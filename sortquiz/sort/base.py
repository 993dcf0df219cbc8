# base.py
#
# Types shared by the three quiz engines. The engines do not inherit from a
# common class; they are a closed set of variants tagged by AlgorithmKind and
# all satisfy the QuizEngine protocol.
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Tuple

from sortquiz.ordering import ConvergenceDirection


class AlgorithmKind(Enum):
    BUBBLE = "bubble_sort"
    INSERTION = "insertion_sort"
    SELECTION = "selection_sort"

    @property
    def title(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def default_convergence(self) -> ConvergenceDirection:
        """Bubble settles the high end first; insertion and selection build from the left."""
        if self is AlgorithmKind.BUBBLE:
            return ConvergenceDirection.RIGHT
        return ConvergenceDirection.LEFT


# Prompt phases
COMPARE = "compare"
PICK = "pick"
PLACE = "place"
SELECT = "select"
DONE = "done"


@dataclass(frozen=True)
class PromptDescriptor:
    """
    Everything the presentation layer needs to draw one step:
    - active:   indices to highlight
    - eligible: legal targets for the next action (indices, or insertion slots
                during the "place" phase); empty when the action is a button
    - settled:  indices already in their final position
    - states:   one style key per index (see default_styles.DEFAULT_STYLES)
    """
    algorithm: AlgorithmKind
    phase: str
    message: str
    values: Tuple[int, ...]
    active: Tuple[int, ...] = ()
    eligible: Tuple[int, ...] = ()
    settled: Tuple[int, ...] = ()
    states: Tuple[str, ...] = ()
    picked: Optional[int] = None
    is_complete: bool = False


@dataclass(frozen=True)
class StepOutcome:
    action: object
    mutated: bool
    moved: Tuple[Tuple[int, int], ...] = ()
    newly_settled: Tuple[int, ...] = ()
    is_complete: bool = False
    message: str = ""
    delay: float = 0.0
    accepted: bool = True


class QuizEngine(Protocol):
    kind: AlgorithmKind

    def initialize(self, values, order, convergence) -> PromptDescriptor: ...

    def submit_action(self, action) -> StepOutcome: ...

    def current_prompt(self) -> PromptDescriptor: ...

    def is_complete(self) -> bool: ...

    def expected_action(self): ...

    def to_svl(self) -> dict: ...


def element_states(length, settled=(), active=(), active_style="compare", extra=None):
    """Style key per index: settled wins over idle, active wins over settled."""
    states = ["idle"] * length
    for i in settled:
        states[i] = "sorted"
    for i in active:
        states[i] = active_style
    for i, style in (extra or {}).items():
        states[i] = style
    return tuple(states)


def completion_message() -> str:
    return "🎉 Congratulations! The sequence is sorted."
