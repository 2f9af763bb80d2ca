"""
Runtime failure classifications.

These exceptions represent failures while driving an automaton or while
reading and writing its persisted document.
"""

from typing import Any, Dict, Optional


class DFARuntimeError(Exception):
    """Base class for failures during execution or persistence."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class GuardEvaluationError(DFARuntimeError):
    """A guard produced something other than a boolean."""

    def __init__(self, message: str, from_id: Optional[int] = None,
                 to_id: Optional[int] = None, result: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.from_id = from_id
        self.to_id = to_id
        self.result = result


class NoOutgoingTransitionError(DFARuntimeError):
    """Step attempted from a state with no candidate edges."""

    def __init__(self, message: str, state_id: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.state_id = state_id


class StateTransitionError(DFARuntimeError):
    """Execution operation used while the automaton has no valid position."""

    def __init__(self, message: str, current_state: Optional[int] = None,
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_transition = attempted_transition


class SerializationError(DFARuntimeError):
    """I/O or encoding failure while reading or writing a document."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target
