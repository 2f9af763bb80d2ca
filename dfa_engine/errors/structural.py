"""
Structural error classifications.

These exceptions are raised when an automaton references states that do not
exist, when a persisted document no longer matches the automaton's graph, or
when an encoding is requested that the engine does not provide. They are
always reported to the caller and never corrected silently.
"""

from typing import Any, Dict, Iterable, Optional


class DFAStructureError(Exception):
    """Base class for defects in automaton structure or usage."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class UnknownStateError(DFAStructureError, LookupError):
    """A state id was referenced that is not registered."""

    def __init__(self, message: str, state_id: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.state_id = state_id


class StateNotFoundError(UnknownStateError):
    """Registry lookup for an absent id."""


class GraphMismatchError(DFAStructureError):
    """Persisted position is absent from the freshly defined graph."""

    def __init__(self, message: str, state_id: Optional[int] = None,
                 defined_ids: Optional[Iterable[int]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.state_id = state_id
        self.defined_ids = sorted(defined_ids or [])


class UnsupportedFormatError(DFAStructureError, ValueError):
    """Requested serialization format is not provided."""

    def __init__(self, message: str, requested: Any = None,
                 supported: Optional[Iterable[str]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.requested = requested
        self.supported = list(supported or [])
