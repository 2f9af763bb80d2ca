"""
Automaton data models.

This module defines the state record that concrete automatons extend with
their own payload fields, and the result type returned by a single step.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from functools import total_ordering
from typing import Any, Callable, Optional

from ..errors import SerializationError, StateTransitionError

Behavior = Callable[[], None]
Guard = Callable[[], bool]


@total_ordering
@dataclass(eq=False)
class DFAState:
    """
    A single automaton state, identified by a non-negative integer id.

    Subclasses add payload fields with ``@dataclass(eq=False)`` so that
    identity, hashing and ordering stay on ``id``. The ``behavior`` field is
    executable and is never persisted; payload fields declared with
    ``metadata={"persist": False}`` are skipped as well.
    """

    id: int = 0
    behavior: Optional[Behavior] = field(
        default=None, repr=False, compare=False, metadata={"persist": False}
    )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DFAState):
            return NotImplemented
        return self.id == other.id

    def __lt__(self, other: "DFAState") -> bool:
        if not isinstance(other, DFAState):
            return NotImplemented
        return self.id < other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def enter(self) -> None:
        """Run the behavior attached to this state."""
        if self.behavior is None:
            raise StateTransitionError(
                f"State {self.id} has no behavior bound",
                current_state=self.id,
                attempted_transition="enter",
            )
        self.behavior()

    @classmethod
    def persisted_fields(cls) -> list[str]:
        """Names of the payload fields written to documents, id excluded."""
        return [
            f.name for f in fields(cls)
            if f.name != "id" and f.metadata.get("persist", True)
        ]

    def payload(self) -> dict[str, Any]:
        """Persisted payload field values."""
        return {name: getattr(self, name) for name in self.persisted_fields()}

    def to_document(self) -> dict[str, Any]:
        return {"id": self.id, **self.payload()}

    @classmethod
    def from_document(cls, data: Any) -> "DFAState":
        """Rebuild a state from its persisted form; behavior stays unbound."""
        if not isinstance(data, dict):
            raise SerializationError(
                f"State entry must be a mapping, got {type(data).__name__}",
                operation="load",
            )

        state_id = data.get("id")
        if isinstance(state_id, bool) or not isinstance(state_id, int) or state_id < 0:
            raise SerializationError(
                f"State entry has invalid id {state_id!r}",
                operation="load",
            )

        known = set(cls.persisted_fields())
        unknown = sorted(set(data) - known - {"id"})
        if unknown:
            raise SerializationError(
                f"State {state_id} has fields unknown to {cls.__name__}: {', '.join(unknown)}",
                operation="load",
            )

        kwargs = {name: value for name, value in data.items() if name in known}
        try:
            return cls(id=state_id, **kwargs)
        except TypeError as e:
            raise SerializationError(
                f"Cannot rebuild state {state_id} as {cls.__name__}: {e}",
                operation="load",
            ) from e


class StepOutcome(str, Enum):
    """Outcome of a single step."""
    MOVED = "moved"
    NO_OUTGOING_TRANSITION = "no_outgoing_transition"
    BLOCKED = "blocked"


@dataclass(frozen=True)
class StepResult:
    """Represents the result of one step of the automaton."""

    outcome: StepOutcome
    from_id: int
    to_id: Optional[int] = None

    @property
    def moved(self) -> bool:
        return self.outcome == StepOutcome.MOVED

    def __bool__(self) -> bool:
        return self.moved
