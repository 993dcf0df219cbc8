import logging
from enum import Enum

from sortquiz.errors import IllegalTarget, InvalidAction
from sortquiz.ordering import ConvergenceDirection, OrderDirection, SortSequence
from sortquiz.sort.base import (
    COMPARE, DONE, AlgorithmKind, PromptDescriptor, StepOutcome,
    completion_message, element_states,
)
from sortquiz.svl import SvlTrace, move_elements, update_style

logger = logging.getLogger(__name__)

VARIABLES_SCHEMA = [
    {"name": "i", "type": "pointer", "description": "Pass counter, number of settled elements"},
    {"name": "j", "type": "pointer", "description": "Scan cursor over adjacent pairs"}
]

PSEUDOCODE = {
    ConvergenceDirection.RIGHT: [
        "function BubbleSort(array):",                  # 1
        "  n = length(array)",                          # 2
        "  for i from 0 to n-2:",                       # 3
        "    for j from 0 to n-i-2:",                   # 4
        "      if out_of_order(array[j], array[j+1]):", # 5
        "        swap(array[j], array[j+1])",           # 6
        "  return array"                                # 7
    ],
    ConvergenceDirection.LEFT: [
        "function BubbleSort(array):",                  # 1
        "  n = length(array)",                          # 2
        "  for i from 0 to n-2:",                       # 3
        "    for j from n-1 down to i+1:",              # 4
        "      if out_of_order(array[j-1], array[j]):", # 5
        "        swap(array[j-1], array[j])",           # 6
        "  return array"                                # 7
    ],
}


class BubbleAction(Enum):
    SWAP = "swap"
    SKIP = "skip"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        # "next" and "no_swap" are accepted labels for the no-swap button
        text = str(value).strip().lower()
        if text in ("skip", "next", "no_swap"):
            return cls.SKIP
        return cls(text)


class BubbleEngine:
    """
    Adjacent compare-and-swap quiz. For every active pair the learner answers
    "swap" or "skip"; a correct answer is applied and the cursor advances,
    an incorrect one raises InvalidAction and changes nothing.

    Right convergence scans j upward over pairs (j, j+1) and settles the high
    end; Left convergence scans j downward over pairs (j-1, j) and settles the
    low end.
    """

    kind = AlgorithmKind.BUBBLE

    def __init__(self, step_delay: float = 0.0):
        self.step_delay = step_delay
        self.sequence = None
        self.trace = None
        self.i = 0
        self.j = 0
        self._complete = False

    # =================================================================
    # Lifecycle
    # =================================================================

    def initialize(self, values, order=OrderDirection.ASCENDING,
                   convergence=ConvergenceDirection.RIGHT) -> PromptDescriptor:
        self.sequence = SortSequence(values, order, convergence)
        n = len(self.sequence)
        self.i = 0
        self.j = max(n - 1, 0) if self.sequence.converges_left else 0
        self._complete = False
        self.trace = SvlTrace(
            "Bubble Sort",
            VARIABLES_SCHEMA,
            PSEUDOCODE[self.sequence.convergence],
            self.sequence.values,
            {"order": self.sequence.order.value, "convergence": self.sequence.convergence.value},
        )
        self.trace.add({}, 2)
        self.trace.add({}, 3)
        if self.i >= n - 1:
            self._finish()
        logger.debug("Bubble quiz initialized with %s", self.sequence)
        return self.current_prompt()

    def is_complete(self) -> bool:
        return self._complete

    def to_svl(self) -> dict:
        return self.trace.to_svl()

    # =================================================================
    # State queries
    # =================================================================

    def active_pair(self):
        if self.sequence.converges_left:
            return self.j - 1, self.j
        return self.j, self.j + 1

    def settled_indices(self):
        n = len(self.sequence)
        if self._complete:
            return tuple(range(n))
        if self.sequence.converges_left:
            return tuple(range(self.i))
        return tuple(n - 1 - k for k in range(self.i))

    def should_swap(self) -> bool:
        a, b = self.active_pair()
        left, right = self.sequence[a], self.sequence[b]
        return left != right and not self.sequence.precedes(left, right)

    def expected_action(self) -> BubbleAction:
        self._require_active(None)
        return BubbleAction.SWAP if self.should_swap() else BubbleAction.SKIP

    def current_prompt(self) -> PromptDescriptor:
        values = self.sequence.snapshot()
        settled = self.settled_indices()
        if self._complete:
            return PromptDescriptor(
                algorithm=self.kind, phase=DONE, message=completion_message(),
                values=values, settled=settled,
                states=element_states(len(values), settled), is_complete=True,
            )
        a, b = self.active_pair()
        return PromptDescriptor(
            algorithm=self.kind,
            phase=COMPARE,
            message=f"Compare {values[a]} and {values[b]}: do they need to be swapped?",
            values=values,
            active=(a, b),
            settled=settled,
            states=element_states(len(values), settled, (a, b)),
        )

    # =================================================================
    # Actions
    # =================================================================

    def submit_action(self, action) -> StepOutcome:
        self._require_active(action)
        try:
            choice = BubbleAction.parse(action)
        except ValueError:
            raise IllegalTarget(action, [a.value for a in BubbleAction]) from None

        a, b = self.active_pair()
        left, right = self.sequence[a], self.sequence[b]
        needs_swap = self.should_swap()
        relation = "greater than" if self.sequence.order is OrderDirection.ASCENDING else "less than"
        details = {"left": left, "right": right, "indices": [a, b]}

        if choice is BubbleAction.SWAP and not needs_swap:
            logger.info("Rejected swap of %s and %s", left, right)
            raise InvalidAction(
                "no_swap_needed",
                f"❌ Wrong! {left} is not {relation} {right}, no swap needed.",
                details,
            )
        if choice is BubbleAction.SKIP and needs_swap:
            logger.info("Rejected skip of %s and %s", left, right)
            raise InvalidAction(
                "swap_required",
                f"❌ Wrong! {left} is {relation} {right}, they must be swapped!",
                details,
            )

        meta = {"i": self.i, "j": self.j}
        self.trace.add(meta, 5, [update_style([a, b], "compare")])
        moved = ()
        if choice is BubbleAction.SWAP:
            self.sequence.swap(a, b)
            moved = ((a, b), (b, a))
            self.trace.add(meta, 6, [move_elements(moved)])
        self.trace.add(meta, 4, [update_style([a, b], "idle")])

        newly_settled = self._advance()
        logger.debug("Bubble %s at (%d, %d) accepted: %s", choice.value, a, b, self.sequence.values)
        return StepOutcome(
            action=choice,
            mutated=bool(moved),
            moved=moved,
            newly_settled=newly_settled,
            is_complete=self._complete,
            message=completion_message() if self._complete else "✅ Correct!",
            delay=self.step_delay,
        )

    def swap(self) -> StepOutcome:
        return self.submit_action(BubbleAction.SWAP)

    def skip(self) -> StepOutcome:
        return self.submit_action(BubbleAction.SKIP)

    # =================================================================
    # Cursor bookkeeping
    # =================================================================

    def _advance(self):
        n = len(self.sequence)
        settled = []
        if self.sequence.converges_left:
            self.j -= 1
            if self.j <= self.i:
                settled.append(self.i)
                self.trace.add({"i": self.i, "j": "-"}, 3, [update_style([self.i], "sorted")])
                self.i += 1
                self.j = n - 1
        else:
            self.j += 1
            if self.j >= n - 1 - self.i:
                index = n - 1 - self.i
                settled.append(index)
                self.trace.add({"i": self.i, "j": "-"}, 3, [update_style([index], "sorted")])
                self.j = 0
                self.i += 1

        if self.i >= n - 1:
            before = set(self.settled_indices()) | set(settled)
            self._finish()
            # the last unsettled element is in place by elimination
            settled.extend(k for k in range(n) if k not in before)
        return tuple(settled)

    def _finish(self):
        self._complete = True
        self.trace.add({}, 7, [update_style(range(len(self.sequence)), "sorted")])
        logger.debug("Bubble quiz complete: %s", self.sequence.values)

    def _require_active(self, action):
        if self.sequence is None:
            raise IllegalTarget(action, (), "Engine has not been initialized")
        if self._complete:
            raise IllegalTarget(action, (), "Sorting is already complete")
