"""
Error classification for the automaton engine.

Structural errors report a defect in how an automaton is defined, referenced
or persisted. Runtime errors report a failure while the automaton executes or
while its document is read or written. Configuration errors report an
unreadable or invalid engine configuration. Exceptions raised by caller-supplied
guards and behaviors are never wrapped and do not appear here.
"""

from .structural import (
    DFAStructureError,
    UnknownStateError,
    StateNotFoundError,
    GraphMismatchError,
    UnsupportedFormatError,
)
from .configuration import ConfigurationError
from .runtime_failures import (
    DFARuntimeError,
    GuardEvaluationError,
    NoOutgoingTransitionError,
    StateTransitionError,
    SerializationError,
)

__all__ = [
    # Structural errors
    "DFAStructureError",
    "UnknownStateError",
    "StateNotFoundError",
    "GraphMismatchError",
    "UnsupportedFormatError",
    # Runtime failures
    "DFARuntimeError",
    "GuardEvaluationError",
    "NoOutgoingTransitionError",
    "StateTransitionError",
    "SerializationError",
    # Configuration
    "ConfigurationError",
]
