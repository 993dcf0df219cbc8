"""Tests for the bubble sort quiz engine."""

import pytest

from sortquiz.errors import IllegalTarget, InvalidAction
from sortquiz.ordering import ConvergenceDirection, OrderDirection
from sortquiz.sort import BubbleAction, BubbleEngine
from sortquiz.validate import validate_svl

ASC = OrderDirection.ASCENDING
DESC = OrderDirection.DESCENDING
LEFT = ConvergenceDirection.LEFT
RIGHT = ConvergenceDirection.RIGHT


def make(values, order=ASC, convergence=RIGHT, **kwargs):
    engine = BubbleEngine(**kwargs)
    engine.initialize(values, order, convergence)
    return engine


class TestBubbleScenario:
    """[5, 3, 4], ascending, settling on the right."""

    def test_walkthrough(self):
        engine = make([5, 3, 4])
        prompt = engine.current_prompt()
        assert prompt.phase == "compare"
        assert prompt.active == (0, 1)
        assert prompt.states == ("compare", "compare", "idle")

        outcome = engine.submit_action("swap")
        assert outcome.mutated
        assert outcome.moved == ((0, 1), (1, 0))
        assert engine.sequence.values == [3, 5, 4]
        assert engine.current_prompt().active == (1, 2)

        outcome = engine.swap()
        assert engine.sequence.values == [3, 4, 5]
        assert outcome.newly_settled == (2,)
        assert engine.current_prompt().settled == (2,)
        assert engine.current_prompt().active == (0, 1)

        outcome = engine.skip()
        assert not outcome.mutated
        assert outcome.is_complete
        assert set(outcome.newly_settled) == {0, 1}
        assert engine.is_complete()
        assert engine.sequence.values == [3, 4, 5]

        done = engine.current_prompt()
        assert done.phase == "done"
        assert done.settled == (0, 1, 2)
        assert done.states == ("sorted", "sorted", "sorted")

    def test_left_convergence_walkthrough(self):
        engine = make([5, 3, 4], convergence=LEFT)
        assert engine.current_prompt().active == (1, 2)
        engine.skip()
        assert engine.current_prompt().active == (0, 1)
        outcome = engine.swap()
        assert engine.sequence.values == [3, 5, 4]
        assert outcome.newly_settled == (0,)
        assert engine.current_prompt().active == (1, 2)
        outcome = engine.swap()
        assert engine.sequence.values == [3, 4, 5]
        assert outcome.is_complete
        assert set(outcome.newly_settled) == {1, 2}


class TestBubbleValidation:

    def test_skip_when_swap_required(self):
        engine = make([5, 3, 4])
        with pytest.raises(InvalidAction) as exc:
            engine.skip()
        assert exc.value.reason == "swap_required"
        assert exc.value.details == {"left": 5, "right": 3, "indices": [0, 1]}
        assert "5 is greater than 3" in exc.value.message

    def test_swap_when_not_needed(self):
        engine = make([3, 5, 4])
        with pytest.raises(InvalidAction) as exc:
            engine.swap()
        assert exc.value.reason == "no_swap_needed"
        assert exc.value.message == "❌ Wrong! 3 is not greater than 5, no swap needed."

    def test_rejection_is_idempotent(self):
        engine = make([5, 3, 4])
        errors = []
        for _ in range(2):
            with pytest.raises(InvalidAction) as exc:
                engine.skip()
            errors.append(exc.value)
        assert errors[0] == errors[1]
        assert engine.sequence.values == [5, 3, 4]
        assert (engine.i, engine.j) == (0, 0)
        assert len(engine.to_svl()["deltas"]) == 2

    def test_equal_values_need_no_swap(self):
        engine = make([4, 4, 1])
        assert engine.expected_action() is BubbleAction.SKIP
        with pytest.raises(InvalidAction):
            engine.swap()

    def test_descending_order(self):
        engine = make([3, 5], order=DESC)
        assert engine.expected_action() is BubbleAction.SWAP
        with pytest.raises(InvalidAction) as exc:
            engine.skip()
        assert "3 is less than 5" in exc.value.message
        engine.swap()
        assert engine.sequence.values == [5, 3]
        assert engine.is_complete()

    def test_next_is_accepted_as_skip(self):
        engine = make([1, 2, 3])
        assert engine.submit_action("next").action is BubbleAction.SKIP

    def test_unknown_action(self):
        engine = make([1, 2, 3])
        with pytest.raises(IllegalTarget):
            engine.submit_action("jump")


class TestBubbleBoundaries:

    @pytest.mark.parametrize("convergence", [LEFT, RIGHT])
    def test_single_element_is_complete(self, convergence):
        engine = make([9], convergence=convergence)
        assert engine.is_complete()
        assert engine.current_prompt().settled == (0,)
        with pytest.raises(IllegalTarget):
            engine.swap()

    @pytest.mark.parametrize("convergence", [LEFT, RIGHT])
    def test_two_elements_take_one_decision(self, convergence):
        engine = make([2, 1], convergence=convergence)
        outcome = engine.swap()
        assert outcome.is_complete
        assert engine.sequence.values == [1, 2]

    def test_empty_sequence(self):
        engine = make([], convergence=LEFT)
        assert engine.is_complete()
        assert engine.current_prompt().values == ()

    def test_uninitialized_engine(self):
        with pytest.raises(IllegalTarget):
            BubbleEngine().swap()

    def test_delay_is_reported(self):
        engine = make([1, 2, 3], step_delay=0.6)
        assert engine.skip().delay == 0.6


class TestBubbleTrace:

    def test_trace_is_valid_svl(self):
        engine = make([5, 3, 4])
        engine.swap()
        engine.swap()
        engine.skip()
        svl = engine.to_svl()
        ok, reason = validate_svl(svl)
        assert ok, reason
        assert svl["algorithm"]["name"] == "Bubble Sort"
        assert [e["value"] for e in svl["initial_frame"]["data_state"]["data"]] == [5, 3, 4]
        ops = [d["operations"] for d in svl["deltas"]]
        assert sum(1 for o in ops for op in o if op["op"] == "moveElements") == 2
