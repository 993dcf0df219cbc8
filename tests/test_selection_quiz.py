"""Tests for the selection sort quiz engine."""

import pytest

from sortquiz.errors import IllegalTarget, InvalidAction
from sortquiz.ordering import ConvergenceDirection, OrderDirection
from sortquiz.sort import SelectionEngine
from sortquiz.validate import validate_svl

ASC = OrderDirection.ASCENDING
DESC = OrderDirection.DESCENDING
LEFT = ConvergenceDirection.LEFT
RIGHT = ConvergenceDirection.RIGHT


def make(values, order=ASC, convergence=LEFT, **kwargs):
    engine = SelectionEngine(**kwargs)
    engine.initialize(values, order, convergence)
    return engine


class TestSelectionScenario:
    """[4, 1, 3], ascending, settling on the left."""

    def test_walkthrough(self):
        engine = make([4, 1, 3])
        prompt = engine.current_prompt()
        assert prompt.phase == "select"
        assert prompt.eligible == (0, 1, 2)
        assert "minimum" in prompt.message

        outcome = engine.select(1)
        assert outcome.moved == ((0, 1), (1, 0))
        assert outcome.newly_settled == (0,)
        assert engine.sequence.values == [1, 4, 3]
        assert engine.current_prompt().eligible == (1, 2)
        assert engine.expected_action() == 2

        outcome = engine.select(2)
        assert outcome.is_complete
        assert outcome.newly_settled == (1, 2)
        assert engine.sequence.values == [1, 3, 4]

    def test_right_convergence_walkthrough(self):
        engine = make([4, 1, 3], convergence=RIGHT)
        assert "maximum" in engine.current_prompt().message
        engine.select(0)
        assert engine.sequence.values == [3, 1, 4]
        assert engine.current_prompt().settled == (2,)
        assert engine.current_prompt().eligible == (0, 1)
        engine.select(0)
        assert engine.sequence.values == [1, 3, 4]
        assert engine.is_complete()


class TestSelectionValidation:

    def test_wrong_target(self):
        engine = make([4, 1, 3])
        errors = []
        for _ in range(2):
            with pytest.raises(InvalidAction) as exc:
                engine.select(0)
            errors.append(exc.value)
        assert errors[0] == errors[1]
        assert errors[0].reason == "not_extremal"
        assert errors[0].details == {"index": 0, "value": 4, "expected": 1}
        assert errors[0].message == "❌ Wrong! 4 is not the current minimum (the minimum is 1)."
        assert engine.sequence.values == [4, 1, 3]
        assert engine.sorted_index == 0

    def test_any_index_holding_the_extremal_value_is_accepted(self):
        engine = make([3, 1, 1, 2])
        assert engine.expected_action() == 1
        engine.select(2)
        assert engine.sequence.values == [1, 1, 3, 2]

    def test_settled_index_is_not_eligible(self):
        engine = make([4, 1, 3])
        engine.select(1)
        with pytest.raises(IllegalTarget):
            engine.select(0)

    @pytest.mark.parametrize("convergence, word", [(LEFT, "maximum"), (RIGHT, "minimum")])
    def test_descending_targets(self, convergence, word):
        engine = make([2, 9, 5], order=DESC, convergence=convergence)
        assert engine.target_word() == word
        while not engine.is_complete():
            engine.select(engine.expected_action())
        assert engine.sequence.values == [9, 5, 2]

    def test_delay_combines_selection_and_step(self):
        engine = make([4, 1, 3], step_delay=0.6, select_delay=0.8)
        assert engine.select(1).delay == pytest.approx(1.4)


class TestSelectionBoundaries:

    @pytest.mark.parametrize("convergence", [LEFT, RIGHT])
    def test_single_element_is_complete(self, convergence):
        engine = make([4], convergence=convergence)
        assert engine.is_complete()
        assert engine.current_prompt().eligible == ()

    @pytest.mark.parametrize("convergence", [LEFT, RIGHT])
    def test_two_elements_take_one_decision(self, convergence):
        engine = make([2, 1], convergence=convergence)
        outcome = engine.select(engine.expected_action())
        assert outcome.is_complete
        assert engine.sequence.values == [1, 2]

    def test_trace_is_valid_svl(self):
        engine = make([5, 2, 8, 1], convergence=RIGHT)
        while not engine.is_complete():
            engine.select(engine.expected_action())
        ok, reason = validate_svl(engine.to_svl())
        assert ok, reason
