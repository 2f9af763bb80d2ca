"""
Automaton state machine module.

Holds the state registry, the guarded transition table and the ``DFA`` base
class that concrete automatons extend.
"""
from .machine import DFA, state_id_of
from .models import DFAState, StepOutcome, StepResult
from .registry import OrderedStates, StateRegistry
from .transitions import TransitionTable

__all__ = [
    "DFA",
    "DFAState",
    "OrderedStates",
    "StateRegistry",
    "StepOutcome",
    "StepResult",
    "TransitionTable",
    "state_id_of",
]
