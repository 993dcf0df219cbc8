"""Tests for the session controller."""

import random

import pytest

from sortquiz.config import MAX_VALUE, MIN_VALUE, QuizSettings
from sortquiz.dispatcher import ALGORITHM_DISPATCH_TABLE, QuizSession, resolve_algorithm
from sortquiz.errors import IllegalTarget, InvalidAction, QuizError
from sortquiz.ordering import ConvergenceDirection
from sortquiz.sort import AlgorithmKind, BubbleEngine, InsertionEngine, SelectionEngine, StepOutcome


class TestResolveAlgorithm:

    def test_dispatch_table_covers_every_kind(self):
        assert set(ALGORITHM_DISPATCH_TABLE) == {k.value for k in AlgorithmKind}
        for kind in AlgorithmKind:
            assert ALGORITHM_DISPATCH_TABLE[kind.value].kind is kind

    @pytest.mark.parametrize("name, kind", [
        ("bubble_sort", AlgorithmKind.BUBBLE),
        ("insertion", AlgorithmKind.INSERTION),
        ("Selection", AlgorithmKind.SELECTION),
        (AlgorithmKind.BUBBLE, AlgorithmKind.BUBBLE),
    ])
    def test_resolve(self, name, kind):
        assert resolve_algorithm(name) is kind

    def test_unknown_algorithm(self):
        with pytest.raises(KeyError):
            resolve_algorithm("quick_sort")


class TestQuizSession:

    def test_start_with_values(self):
        session = QuizSession()
        prompt = session.start("bubble_sort", [5, 3, 4])
        assert isinstance(session.engine, BubbleEngine)
        assert prompt.values == (5, 3, 4)
        assert session.is_active
        assert not session.is_complete

    def test_start_with_random_values(self):
        session = QuizSession(QuizSettings(size=12), rng=random.Random(5))
        prompt = session.start("selection")
        assert len(prompt.values) == 12
        assert all(MIN_VALUE <= v <= MAX_VALUE for v in prompt.values)

    def test_no_active_session(self):
        session = QuizSession()
        with pytest.raises(QuizError):
            session.submit("swap")
        with pytest.raises(QuizError):
            session.prompt
        with pytest.raises(QuizError):
            session.restart()

    def test_mistakes_and_notifications(self):
        events = []
        session = QuizSession()
        session.subscribe(lambda s, event: events.append(event))
        session.start("bubble", [5, 3, 4])
        with pytest.raises(InvalidAction):
            session.submit("skip")
        session.submit("swap")
        assert session.mistakes == 1
        assert session.steps == 1
        assert events[0] is None
        assert isinstance(events[1], InvalidAction)
        assert isinstance(events[2], StepOutcome)

    def test_unsubscribe(self):
        events = []
        session = QuizSession()
        unsubscribe = session.subscribe(lambda s, event: events.append(event))
        unsubscribe()
        session.start("bubble", [1, 2])
        assert events == []

    def test_illegal_target_is_not_a_mistake(self):
        session = QuizSession()
        session.start("insertion", [3, 1, 2])
        with pytest.raises(IllegalTarget):
            session.submit(2)
        assert session.mistakes == 0

    def test_pacer_receives_engine_delays(self):
        pauses = []
        session = QuizSession(QuizSettings(step_delay=0.6, select_delay=0.8, convergence=ConvergenceDirection.LEFT),
                              pacer=pauses.append)
        session.start("insertion", [3, 1, 2])
        session.submit(1)
        session.submit(0)
        assert pauses == [0.6]

        session.start("selection", [4, 1, 3])
        session.submit(1)
        assert pauses[-1] == pytest.approx(1.4)

    @pytest.mark.parametrize("algorithm_id, convergence", [
        ("bubble", ConvergenceDirection.RIGHT),
        ("insertion", ConvergenceDirection.LEFT),
        ("selection", ConvergenceDirection.LEFT),
    ])
    def test_default_convergence_per_algorithm(self, algorithm_id, convergence):
        session = QuizSession()
        session.start(algorithm_id, [4, 1, 3])
        assert session.convergence is convergence
        assert session.engine.sequence.convergence is convergence

    def test_explicit_convergence_overrides_default(self):
        session = QuizSession(QuizSettings(convergence=ConvergenceDirection.RIGHT))
        session.start("selection", [4, 1, 3])
        assert session.convergence is ConvergenceDirection.RIGHT
        with pytest.raises(InvalidAction):
            session.submit(1)
        session.submit(0)
        assert session.prompt.values == (3, 1, 4)

    def test_start_replaces_previous_engine(self):
        session = QuizSession()
        session.start("bubble", [5, 3, 4])
        first = session.engine
        session.submit("swap")
        session.start("insertion", [5, 3, 4])
        assert isinstance(session.engine, InsertionEngine)
        assert session.engine is not first
        assert session.steps == 0
        assert first.sequence.values == [3, 5, 4]

    def test_restart(self):
        session = QuizSession(QuizSettings(size=6, convergence=ConvergenceDirection.LEFT), rng=random.Random(1))
        session.start("selection", [4, 1, 3])
        session.submit(1)
        prompt = session.restart(reuse_values=True)
        assert prompt.values == (4, 1, 3)
        assert isinstance(session.engine, SelectionEngine)
        prompt = session.restart()
        assert len(prompt.values) == 6

    def test_end(self):
        session = QuizSession()
        session.start("bubble", [2, 1])
        session.end()
        assert not session.is_active
        with pytest.raises(QuizError):
            session.prompt

    def test_completion(self):
        session = QuizSession(QuizSettings.from_mapping({"order": "desc", "convergence": "left"}))
        session.start("insertion", [1, 4, 2, 3])
        while not session.is_complete:
            session.submit(session.hint())
        assert session.prompt.values == (4, 3, 2, 1)
        assert session.to_svl()["algorithm"]["order"] == "desc"
