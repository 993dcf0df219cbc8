import logging

from sortquiz.errors import IllegalTarget, InvalidAction
from sortquiz.ordering import ConvergenceDirection, OrderDirection, SortSequence
from sortquiz.sort.base import (
    DONE, SELECT, AlgorithmKind, PromptDescriptor, StepOutcome,
    completion_message, element_states,
)
from sortquiz.svl import SvlTrace, move_elements, update_style

logger = logging.getLogger(__name__)

VARIABLES_SCHEMA = [
    {"name": "sorted_index", "type": "pointer", "description": "Next slot of the settled region to fill"},
    {"name": "target", "type": "pointer", "description": "Index chosen by the learner"}
]

PSEUDOCODE = {
    ConvergenceDirection.LEFT: [
        "function SelectionSort(array):",                 # 1
        "  n = length(array)",                            # 2
        "  for s from 0 to n-2:",                         # 3
        "    t = extremal index in [s, n-1]",             # 4
        "    swap(array[s], array[t])",                   # 5
        "  return array"                                  # 6
    ],
    ConvergenceDirection.RIGHT: [
        "function SelectionSort(array):",                 # 1
        "  n = length(array)",                            # 2
        "  for s from n-1 down to 1:",                    # 3
        "    t = extremal index in [0, s]",               # 4
        "    swap(array[s], array[t])",                   # 5
        "  return array"                                  # 6
    ],
}


class SelectionEngine:
    """
    Selection quiz: each round the learner must point at the element that
    belongs in the next settled slot. Any index holding the extremal value is
    accepted; the chosen element is then swapped into `sorted_index`.
    """

    kind = AlgorithmKind.SELECTION

    def __init__(self, step_delay: float = 0.0, select_delay: float = 0.0):
        self.step_delay = step_delay
        self.select_delay = select_delay
        self.sequence = None
        self.trace = None
        self.sorted_index = 0
        self._complete = False

    def initialize(self, values, order=OrderDirection.ASCENDING,
                   convergence=ConvergenceDirection.RIGHT) -> PromptDescriptor:
        self.sequence = SortSequence(values, order, convergence)
        n = len(self.sequence)
        self.sorted_index = 0 if self.sequence.converges_left else max(n - 1, 0)
        self._complete = False
        self.trace = SvlTrace(
            "Selection Sort",
            VARIABLES_SCHEMA,
            PSEUDOCODE[self.sequence.convergence],
            self.sequence.values,
            {"order": self.sequence.order.value, "convergence": self.sequence.convergence.value},
        )
        self.trace.add({}, 2)
        self._check_complete()
        logger.debug("Selection quiz initialized with %s", self.sequence)
        return self.current_prompt()

    def is_complete(self) -> bool:
        return self._complete

    def to_svl(self) -> dict:
        return self.trace.to_svl()

    # =================================================================
    # State queries
    # =================================================================

    def eligible_indices(self):
        n = len(self.sequence)
        if self._complete:
            return ()
        if self.sequence.converges_left:
            return tuple(range(self.sorted_index, n))
        return tuple(range(0, self.sorted_index + 1))

    def settled_indices(self):
        n = len(self.sequence)
        if self._complete:
            return tuple(range(n))
        if self.sequence.converges_left:
            return tuple(range(self.sorted_index))
        return tuple(range(self.sorted_index + 1, n))

    def extremal_value(self):
        """
        Left convergence wants the value that precedes all others in the scan
        range, Right convergence the value all others precede.
        """
        values = [self.sequence[i] for i in self.eligible_indices()]
        best = values[0]
        for value in values[1:]:
            if self.sequence.converges_left:
                if self.sequence.precedes(value, best):
                    best = value
            elif self.sequence.precedes(best, value):
                best = value
        return best

    def target_word(self) -> str:
        ascending = self.sequence.order is OrderDirection.ASCENDING
        return "minimum" if ascending == self.sequence.converges_left else "maximum"

    def expected_action(self) -> int:
        self._require_active(None)
        best = self.extremal_value()
        return next(i for i in self.eligible_indices() if self.sequence[i] == best)

    def current_prompt(self) -> PromptDescriptor:
        values = self.sequence.snapshot()
        settled = self.settled_indices()
        if self._complete:
            return PromptDescriptor(
                algorithm=self.kind, phase=DONE, message=completion_message(),
                values=values, settled=settled,
                states=element_states(len(values), settled), is_complete=True,
            )
        eligible = self.eligible_indices()
        round_number = len(settled) + 1
        return PromptDescriptor(
            algorithm=self.kind,
            phase=SELECT,
            message=f"🔍 Round {round_number}: find the {self.target_word()} of the unsorted region",
            values=values,
            eligible=eligible,
            settled=settled,
            states=element_states(len(values), settled, eligible, "clickable"),
        )

    # =================================================================
    # Actions
    # =================================================================

    def submit_action(self, action) -> StepOutcome:
        self._require_active(action)
        eligible = self.eligible_indices()
        if not isinstance(action, int) or isinstance(action, bool) or action not in eligible:
            raise IllegalTarget(action, eligible)

        picked = self.sequence[action]
        best = self.extremal_value()
        word = self.target_word()
        if picked != best:
            logger.info("Rejected %s at index %d, %s is %s", picked, action, word, best)
            raise InvalidAction(
                "not_extremal",
                f"❌ Wrong! {picked} is not the current {word} (the {word} is {best}).",
                {"index": action, "value": picked, "expected": best},
            )

        slot = self.sorted_index
        meta = {"sorted_index": slot, "target": action}
        self.trace.add(meta, 4, [update_style([action], "key_element")])
        moved = ()
        if action != slot:
            self.sequence.swap(slot, action)
            moved = ((slot, action), (action, slot))
            self.trace.add(meta, 5, [
                [update_style([slot, action], "swapping"), move_elements(moved)]
            ])

        newly_settled = [slot]
        ops = [update_style([slot], "sorted")]
        if action != slot:
            ops.append(update_style([action], "idle"))
        self.trace.add(meta, 3, [ops])

        if self.sequence.converges_left:
            self.sorted_index += 1
        else:
            self.sorted_index -= 1
        self._check_complete()
        if self._complete:
            # the last remaining element is in place by elimination
            newly_settled.append(self.sorted_index)

        logger.debug("Selected %s for slot %d: %s", picked, slot, self.sequence.values)
        return StepOutcome(
            action=action,
            mutated=bool(moved),
            moved=moved,
            newly_settled=tuple(newly_settled),
            is_complete=self._complete,
            message=f"✅ Correct! The {word} is {best}.",
            delay=self.select_delay + self.step_delay,
        )

    def select(self, index: int) -> StepOutcome:
        return self.submit_action(index)

    def _check_complete(self):
        n = len(self.sequence)
        if self.sequence.converges_left:
            done = self.sorted_index >= n - 1
        else:
            done = self.sorted_index <= 0
        if done and not self._complete:
            self._complete = True
            self.trace.add({}, 6, [update_style(range(n), "sorted")])
            logger.debug("Selection quiz complete: %s", self.sequence.values)

    def _require_active(self, action):
        if self.sequence is None:
            raise IllegalTarget(action, (), "Engine has not been initialized")
        if self._complete:
            raise IllegalTarget(action, (), "Sorting is already complete")
