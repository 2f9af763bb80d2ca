"""
DFA Engine - Deterministic Finite Automaton Framework

A reusable engine for defining graphs of numbered states with behaviors on
entry and guarded transitions between them, driving them step by step, and
persisting their position across process runs.
"""

from .errors import (
    ConfigurationError,
    GraphMismatchError,
    GuardEvaluationError,
    NoOutgoingTransitionError,
    SerializationError,
    StateNotFoundError,
    StateTransitionError,
    UnknownStateError,
    UnsupportedFormatError,
)
from .persistence import SerializationFormat, load, save
from .state import DFA, DFAState, StepOutcome, StepResult

__version__ = "0.1.0"
__author__ = "DFA Engine Team"

__all__ = [
    "ConfigurationError",
    "DFA",
    "DFAState",
    "GraphMismatchError",
    "GuardEvaluationError",
    "NoOutgoingTransitionError",
    "SerializationError",
    "SerializationFormat",
    "StateNotFoundError",
    "StateTransitionError",
    "StepOutcome",
    "StepResult",
    "UnknownStateError",
    "UnsupportedFormatError",
    "load",
    "save",
]
