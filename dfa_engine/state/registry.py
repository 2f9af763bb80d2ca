"""
State registry keyed by state id.

Enumeration is always ordered by id, independent of insertion order, so that
persisted documents and logged sequences are reproducible.
"""

from operator import attrgetter
from typing import Generic, Iterator, TypeVar

from ..errors import StateNotFoundError
from .models import DFAState

TState = TypeVar("TState", bound=DFAState)


class OrderedStates(Generic[TState]):
    """Restartable view over a registry, sorted by id on each iteration."""

    def __init__(self, states: dict[int, TState]):
        self._states = states

    def __iter__(self) -> Iterator[TState]:
        return iter(sorted(self._states.values(), key=attrgetter("id")))

    def __len__(self) -> int:
        return len(self._states)

    def __repr__(self) -> str:
        return f"OrderedStates(ids={sorted(self._states)})"


class StateRegistry(Generic[TState]):
    """Owns the states of one automaton, indexed by unique id."""

    def __init__(self) -> None:
        self._states: dict[int, TState] = {}

    def register(self, state: TState) -> None:
        """Insert a state, silently replacing any state with the same id."""
        if state.id < 0:
            raise ValueError(f"State id must be non-negative, got {state.id}")
        self._states[state.id] = state

    def get(self, state_id: int) -> TState:
        try:
            return self._states[state_id]
        except KeyError:
            raise StateNotFoundError(
                f"State {state_id} is not registered",
                state_id=state_id,
            ) from None

    def all(self) -> OrderedStates[TState]:
        return OrderedStates(self._states)

    def ids(self) -> list[int]:
        return sorted(self._states)

    def __contains__(self, state_id: object) -> bool:
        return state_id in self._states

    def __iter__(self) -> Iterator[TState]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._states)
