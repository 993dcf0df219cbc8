# dispatcher.py
#
# Session controller: owns the single active engine, relays learner actions to
# it and tells subscribers to redraw after every state change.
import logging
import random

from sortquiz.config import QuizSettings, generate_random_array
from sortquiz.errors import InvalidAction, QuizError
from sortquiz.sort import AlgorithmKind, BubbleEngine, InsertionEngine, SelectionEngine

logger = logging.getLogger(__name__)

# Map algorithm ID strings to engine classes
ALGORITHM_DISPATCH_TABLE = {
    AlgorithmKind.BUBBLE.value: BubbleEngine,
    AlgorithmKind.INSERTION.value: InsertionEngine,
    AlgorithmKind.SELECTION.value: SelectionEngine,
}


def resolve_algorithm(algorithm_id) -> AlgorithmKind:
    """Accept an AlgorithmKind, its id ("bubble_sort") or its short name ("bubble")."""
    if isinstance(algorithm_id, AlgorithmKind):
        return algorithm_id
    text = str(algorithm_id).strip().lower()
    if text in ALGORITHM_DISPATCH_TABLE:
        return AlgorithmKind(text)
    if f"{text}_sort" in ALGORITHM_DISPATCH_TABLE:
        return AlgorithmKind(f"{text}_sort")
    raise KeyError(f"Algorithm with ID '{algorithm_id}' not found in dispatch table "
                   f"(known: {', '.join(ALGORITHM_DISPATCH_TABLE)})")


def build_engine(kind: AlgorithmKind, settings: QuizSettings):
    engine_class = ALGORITHM_DISPATCH_TABLE[kind.value]
    if kind is AlgorithmKind.SELECTION:
        return engine_class(step_delay=settings.step_delay, select_delay=settings.select_delay)
    return engine_class(step_delay=settings.step_delay)


def _no_pause(seconds):
    pass


class QuizSession:
    """
    One learner, one engine at a time. Starting, restarting or ending a session
    drops the previous engine before anything else happens, so two engines never
    share a sequence.

    `pacer(seconds)` is called after every accepted step with the delay the
    engine asks for; the default does not wait at all. Subscribers are called as
    `callback(session, event)` where event is the StepOutcome, the InvalidAction,
    or None for start/restart/end.
    """

    def __init__(self, settings: QuizSettings = None, rng: random.Random = None, pacer=None):
        self.settings = settings or QuizSettings()
        self.rng = rng or random.Random()
        self.pacer = pacer or _no_pause
        self.engine = None
        self.algorithm = None
        self.initial_values = None
        self.mistakes = 0
        self.steps = 0
        self._fixed_values = False
        self._subscribers = []

    # =================================================================
    # Lifecycle
    # =================================================================

    def start(self, algorithm_id, values=None):
        kind = resolve_algorithm(algorithm_id)
        self.end(notify=False)
        self._fixed_values = values is not None
        if values is None:
            values = generate_random_array(self.settings.size, self.rng)
        self.algorithm = kind
        self.initial_values = list(values)
        return self._launch()

    def restart(self, reuse_values: bool = False):
        if self.algorithm is None:
            raise QuizError("No quiz has been started yet")
        if not (reuse_values and self._fixed_values):
            self.initial_values = generate_random_array(self.settings.size, self.rng)
        self.engine = None
        logger.info("Restarting %s", self.algorithm.value)
        return self._launch()

    def end(self, notify: bool = True):
        if self.engine is not None:
            logger.info("Ending %s session after %d steps, %d mistakes",
                        self.algorithm.value, self.steps, self.mistakes)
        self.engine = None
        if notify:
            self._notify(None)

    def _launch(self):
        engine = build_engine(self.algorithm, self.settings)
        prompt = engine.initialize(self.initial_values, self.settings.order, self.convergence)
        self.engine = engine
        self.mistakes = 0
        self.steps = 0
        logger.info("Started %s on %s (order=%s, convergence=%s)",
                    self.algorithm.value, self.initial_values,
                    self.settings.order.value, self.convergence.value)
        self._notify(None)
        return prompt

    # =================================================================
    # Relaying learner actions
    # =================================================================

    def submit(self, action):
        engine = self._active_engine()
        try:
            outcome = engine.submit_action(action)
        except InvalidAction as e:
            self.mistakes += 1
            self._notify(e)
            raise
        self.steps += 1
        if outcome.delay:
            self.pacer(outcome.delay)
        if outcome.is_complete:
            logger.info("%s complete after %d steps, %d mistakes: %s",
                        self.algorithm.value, self.steps, self.mistakes, engine.sequence.values)
        self._notify(outcome)
        return outcome

    @property
    def prompt(self):
        return self._active_engine().current_prompt()

    @property
    def is_complete(self) -> bool:
        return self._active_engine().is_complete()

    @property
    def is_active(self) -> bool:
        return self.engine is not None

    @property
    def convergence(self):
        if self.algorithm is None:
            return self.settings.convergence
        return self.settings.convergence_for(self.algorithm)

    def hint(self):
        return self._active_engine().expected_action()

    def to_svl(self) -> dict:
        return self._active_engine().to_svl()

    # =================================================================
    # Redraw notifications
    # =================================================================

    def subscribe(self, callback):
        self._subscribers.append(callback)
        return lambda: self._subscribers.remove(callback)

    def _notify(self, event):
        for callback in list(self._subscribers):
            callback(self, event)

    def _active_engine(self):
        if self.engine is None:
            raise QuizError("No active quiz session")
        return self.engine
