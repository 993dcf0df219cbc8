import logging

from sortquiz.errors import IllegalTarget, InvalidAction
from sortquiz.ordering import ConvergenceDirection, OrderDirection, SortSequence
from sortquiz.sort.base import (
    DONE, PICK, PLACE, AlgorithmKind, PromptDescriptor, StepOutcome,
    completion_message, element_states,
)
from sortquiz.svl import SvlTrace, draw_temp, remove_temp, update_style, update_values

logger = logging.getLogger(__name__)

VARIABLES_SCHEMA = [
    {"name": "boundary", "type": "pointer", "description": "Edge of the settled region"},
    {"name": "key", "type": "value", "description": "Value currently being inserted"},
    {"name": "slot", "type": "pointer", "description": "Insertion position chosen for key"}
]

PSEUDOCODE = {
    ConvergenceDirection.LEFT: [
        "function InsertionSort(array):",                          # 1
        "  for b from 0 to n-2:",                                  # 2
        "    key = array[b+1]",                                    # 3
        "    slot = first k in [0, b] with precedes(key, array[k])", # 4
        "    if none: slot = b+1",                                 # 5
        "    remove array[b+1]",                                   # 6
        "    insert key at slot",                                  # 7
        "    settle region [0, b+1]",                              # 8
        "  return array"                                           # 9
    ],
    ConvergenceDirection.RIGHT: [
        "function InsertionSort(array):",                          # 1
        "  for b from n-1 down to 1:",                             # 2
        "    key = array[b-1]",                                    # 3
        "    slot = first k in [b, n-1] with precedes(key, array[k])", # 4
        "    if none: slot = n",                                   # 5
        "    remove array[b-1]",                                   # 6
        "    insert key at slot",                                  # 7
        "    settle region [b-1, n-1]",                            # 8
        "  return array"                                           # 9
    ],
}


class InsertionEngine:
    """
    Two-phase insertion quiz.

    Pick phase: the only legal target is the unsettled element adjacent to the
    settled region (boundary+1 for Left, boundary-1 for Right).

    Place phase: the learner chooses an insertion slot. Slots are absolute
    insertion positions: for a settled region [lo, hi] the candidates are
    lo .. hi+1, where slot k means "in front of the element now at k" and
    hi+1 means "after the last settled element". The correct slot is the
    first settled index, scanned in increasing index order, whose value the
    picked value precedes; hi+1 when there is none.
    """

    kind = AlgorithmKind.INSERTION

    def __init__(self, step_delay: float = 0.0):
        self.step_delay = step_delay
        self.sequence = None
        self.trace = None
        self.boundary = 0
        self.picked_index = None
        self.picked_value = None
        self._complete = False

    # =================================================================
    # Lifecycle
    # =================================================================

    def initialize(self, values, order=OrderDirection.ASCENDING,
                   convergence=ConvergenceDirection.RIGHT) -> PromptDescriptor:
        self.sequence = SortSequence(values, order, convergence)
        n = len(self.sequence)
        self.boundary = 0 if self.sequence.converges_left else max(n - 1, 0)
        self.picked_index = None
        self.picked_value = None
        self._complete = False
        self.trace = SvlTrace(
            "Insertion Sort",
            VARIABLES_SCHEMA,
            PSEUDOCODE[self.sequence.convergence],
            self.sequence.values,
            {"order": self.sequence.order.value, "convergence": self.sequence.convergence.value},
        )
        if n:
            self.trace.add({"boundary": self.boundary}, 2, [update_style([self.boundary], "sorted")])
        self._check_complete()
        logger.debug("Insertion quiz initialized with %s", self.sequence)
        return self.current_prompt()

    def is_complete(self) -> bool:
        return self._complete

    def to_svl(self) -> dict:
        return self.trace.to_svl()

    # =================================================================
    # State queries
    # =================================================================

    @property
    def phase(self) -> str:
        if self._complete:
            return DONE
        return PICK if self.picked_index is None else PLACE

    def settled_range(self):
        """Inclusive (lo, hi) bounds of the settled region."""
        n = len(self.sequence)
        if self._complete:
            return 0, n - 1
        if self.sequence.converges_left:
            return 0, self.boundary
        return self.boundary, n - 1

    def settled_indices(self):
        lo, hi = self.settled_range()
        return tuple(range(lo, hi + 1))

    def pick_target(self) -> int:
        if self.sequence.converges_left:
            return self.boundary + 1
        return self.boundary - 1

    def candidate_slots(self):
        lo, hi = self.settled_range()
        return tuple(range(lo, hi + 2))

    def correct_slot(self) -> int:
        lo, hi = self.settled_range()
        for k in range(lo, hi + 1):
            if self.sequence.precedes(self.picked_value, self.sequence[k]):
                return k
        return hi + 1

    def expected_action(self) -> int:
        self._require_active(None)
        if self.phase == PICK:
            return self.pick_target()
        return self.correct_slot()

    def current_prompt(self) -> PromptDescriptor:
        values = self.sequence.snapshot()
        settled = self.settled_indices()
        n = len(values)
        if self._complete:
            return PromptDescriptor(
                algorithm=self.kind, phase=DONE, message=completion_message(),
                values=values, settled=settled,
                states=element_states(n, settled), is_complete=True,
            )
        if self.phase == PICK:
            target = self.pick_target()
            which = "first" if self.sequence.converges_left else "last"
            return PromptDescriptor(
                algorithm=self.kind,
                phase=PICK,
                message=f"👆 Click the {which} card of the unsorted region",
                values=values,
                active=(target,),
                eligible=(target,),
                settled=settled,
                states=element_states(n, settled, extra={target: "clickable"}),
            )
        return PromptDescriptor(
            algorithm=self.kind,
            phase=PLACE,
            message=f"📍 Click the slot in the sorted region where {self.picked_value} belongs",
            values=values,
            active=(self.picked_index,),
            eligible=self.candidate_slots(),
            settled=settled,
            states=element_states(n, settled, (self.picked_index,), "key_element"),
            picked=self.picked_index,
        )

    # =================================================================
    # Actions
    # =================================================================

    def submit_action(self, action) -> StepOutcome:
        self._require_active(action)
        if not isinstance(action, int) or isinstance(action, bool):
            raise IllegalTarget(action, self.current_prompt().eligible,
                                f"Insertion actions are integer indices, got {action!r}")
        if self.phase == PICK:
            return self._pick(action)
        return self._place(action)

    def pick(self, index: int) -> StepOutcome:
        self._require_active(index)
        if self.phase != PICK:
            raise IllegalTarget(index, (), "A card is already picked; choose an insertion slot")
        return self.submit_action(index)

    def place(self, slot: int) -> StepOutcome:
        self._require_active(slot)
        if self.phase != PLACE:
            raise IllegalTarget(slot, (), "Pick a card before choosing an insertion slot")
        return self.submit_action(slot)

    def _pick(self, index):
        target = self.pick_target()
        if index != target:
            raise IllegalTarget(index, (target,))
        self.picked_index = index
        self.picked_value = self.sequence[index]
        self.trace.add(
            {"boundary": self.boundary, "key": self.picked_value, "slot": "-"}, 3,
            [[draw_temp("key_holder", self.picked_value, "key_holder_box"),
              update_style([index], "placeholder")]]
        )
        logger.debug("Picked %s at index %d", self.picked_value, index)
        return StepOutcome(action=index, mutated=False,
                           message=f"Where does {self.picked_value} belong?")

    def _place(self, slot):
        slots = self.candidate_slots()
        if slot not in slots:
            raise IllegalTarget(slot, slots)
        value = self.picked_value
        if slot != self.correct_slot():
            logger.info("Rejected slot %d for %s", slot, value)
            raise InvalidAction(
                "wrong_insertion_slot",
                f"❌ Wrong! {value} does not belong here.",
                {"value": value, "slot": slot},
            )

        origin = self.picked_index
        meta = {"boundary": self.boundary, "key": value, "slot": slot}
        self.trace.add(meta, 4)
        final = self.sequence.move(origin, slot)
        if self.sequence.converges_left:
            self.boundary += 1
        else:
            self.boundary -= 1
        self.picked_index = None
        self.picked_value = None
        self._check_complete()

        touched = range(min(origin, final), max(origin, final) + 1)
        self.trace.add(meta, 7, [[
            remove_temp("key_holder"),
            update_values(self.sequence.values, touched),
            update_style(self.settled_indices(), "sorted"),
        ]])
        if self._complete:
            self.trace.add({}, 9, [update_style(range(len(self.sequence)), "sorted")])
        logger.debug("Inserted %s at %d: %s", value, final, self.sequence.values)
        return StepOutcome(
            action=slot,
            mutated=final != origin,
            moved=((origin, final),),
            newly_settled=(self.boundary,),
            is_complete=self._complete,
            message=completion_message() if self._complete else "✅ Correct! Inserted.",
            delay=self.step_delay,
        )

    # =================================================================
    # Completion
    # =================================================================

    def _check_complete(self):
        n = len(self.sequence)
        if self.sequence.converges_left:
            done = self.boundary >= n - 1
        else:
            done = self.boundary <= 0
        if done and not self._complete:
            self._complete = True
            logger.debug("Insertion quiz complete: %s", self.sequence.values)

    def _require_active(self, action):
        if self.sequence is None:
            raise IllegalTarget(action, (), "Engine has not been initialized")
        if self._complete:
            raise IllegalTarget(action, (), "Sorting is already complete")
