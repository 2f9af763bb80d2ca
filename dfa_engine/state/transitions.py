"""
Transition table for guarded edges.

Edges are kept in an insertion-ordered map from ``(from_id, to_id)`` to a
zero-argument guard. A per-source index derived from that map serves
candidate lookup in link order, which is the tie-break order used when
several guards hold at once.
"""

from typing import Iterator, Optional

from ..errors import GuardEvaluationError
from ..logging.config import get_state_logger, log_guard_decision
from .models import Guard

state_logger = get_state_logger(__name__)


def is_truth_value(result: object) -> bool:
    """True if ``result`` is usable as a guard decision."""
    if result is None:
        return False
    return isinstance(result, bool) or hasattr(type(result), "__bool__")


class TransitionTable:
    """Ordered map from edge to guard with a per-source lookup."""

    def __init__(self, owner: str = "DFA") -> None:
        self.owner = owner
        self._guards: dict[tuple[int, int], Guard] = {}
        self._by_source: dict[int, list[int]] = {}

    def link(self, from_id: int, to_id: int, guard: Guard) -> None:
        """Store a guard for an edge; relinking keeps the original position."""
        if not callable(guard):
            raise TypeError(f"Guard for edge {from_id}->{to_id} is not callable")

        edge = (from_id, to_id)
        if edge not in self._guards:
            self._by_source.setdefault(from_id, []).append(to_id)
        self._guards[edge] = guard

    def edges_from(self, state_id: int) -> list[int]:
        return list(self._by_source.get(state_id, ()))

    def guard_for(self, from_id: int, to_id: int) -> Optional[Guard]:
        return self._guards.get((from_id, to_id))

    def has_edge(self, from_id: int, to_id: int) -> bool:
        return (from_id, to_id) in self._guards

    def edges(self) -> list[tuple[int, int]]:
        return list(self._guards)

    def evaluate(self, from_id: int, to_id: int) -> bool:
        """
        Evaluate the guard of an edge.

        A missing edge evaluates to False. Exceptions raised by the guard
        propagate unchanged. Results that define their own truth value
        (``bool``, numbers, ``numpy.bool_``) are converted with ``bool()``.

        Raises:
            GuardEvaluationError: If the guard returns None or a value whose
                truth would only mean "non-empty" (strings, containers, plain
                objects)
        """
        guard = self._guards.get((from_id, to_id))
        if guard is None:
            return False

        try:
            result = guard()
        except Exception as e:
            state_logger.warning(
                "guard_raised",
                automaton=self.owner,
                from_state=from_id,
                to_state=to_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        if not is_truth_value(result):
            raise GuardEvaluationError(
                f"Guard for edge {from_id}->{to_id} returned "
                f"{type(result).__name__}, expected bool",
                from_id=from_id,
                to_id=to_id,
                result=result,
            )

        passed = bool(result)
        log_guard_decision(state_logger, self.owner, from_id, to_id, passed)
        return passed

    def clear(self) -> None:
        self._guards.clear()
        self._by_source.clear()

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return iter(self.edges())

    def __len__(self) -> int:
        return len(self._guards)
