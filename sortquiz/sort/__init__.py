from sortquiz.sort.base import AlgorithmKind, PromptDescriptor, QuizEngine, StepOutcome
from sortquiz.sort.bubble_quiz import BubbleAction, BubbleEngine
from sortquiz.sort.insertion_quiz import InsertionEngine
from sortquiz.sort.selection_quiz import SelectionEngine

__all__ = [
    "AlgorithmKind",
    "PromptDescriptor",
    "QuizEngine",
    "StepOutcome",
    "BubbleAction",
    "BubbleEngine",
    "InsertionEngine",
    "SelectionEngine",
]
