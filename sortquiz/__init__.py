from sortquiz.config import QuizSettings
from sortquiz.dispatcher import ALGORITHM_DISPATCH_TABLE, QuizSession
from sortquiz.errors import IllegalTarget, InvalidAction, QuizError
from sortquiz.ordering import ConvergenceDirection, OrderDirection, SortSequence, is_ordered, precedes
from sortquiz.sort import (
    AlgorithmKind, BubbleAction, BubbleEngine, InsertionEngine, PromptDescriptor,
    SelectionEngine, StepOutcome,
)

__version__ = "1.0.0"

__all__ = [
    "ALGORITHM_DISPATCH_TABLE",
    "AlgorithmKind",
    "BubbleAction",
    "BubbleEngine",
    "ConvergenceDirection",
    "IllegalTarget",
    "InsertionEngine",
    "InvalidAction",
    "OrderDirection",
    "PromptDescriptor",
    "QuizError",
    "QuizSession",
    "QuizSettings",
    "SelectionEngine",
    "SortSequence",
    "StepOutcome",
    "is_ordered",
    "precedes",
]
