"""
Core automaton execution logic.

``DFA`` is the base class for concrete automatons. A subclass defines its
states and guarded transitions once, at construction; callers then drive it
with ``start_from``, ``move_to`` and ``step``. Guards and behaviors are plain
callables held per edge and per state, so the registry and the transition
table stay homogeneous.
"""

from abc import ABC, abstractmethod
from typing import IO, TYPE_CHECKING, Any, ClassVar, Optional, Union

from ..config.loader import get_engine_config
from ..errors import (
    NoOutgoingTransitionError,
    StateTransitionError,
    UnknownStateError,
)
from ..logging.config import get_state_logger, log_state_transition
from .models import DFAState, Guard, StepOutcome, StepResult
from .registry import OrderedStates, StateRegistry
from .transitions import TransitionTable

if TYPE_CHECKING:
    from pathlib import Path

    from ..persistence.formats import SerializationFormat

state_logger = get_state_logger(__name__)

StateRef = Union[int, DFAState]


def state_id_of(ref: StateRef) -> int:
    """Resolve a state reference (id or state object) to its id."""
    if isinstance(ref, DFAState):
        return ref.id
    if isinstance(ref, bool) or not isinstance(ref, int):
        raise TypeError(f"State reference must be an int or DFAState, got {type(ref).__name__}")
    return ref


class DFA(ABC):
    """
    Deterministic finite automaton with guarded transitions.

    Subclasses implement ``define_states`` and ``define_transitions``; both
    run once, in that order, from ``__init__``. Automaton context read by
    guards (for example a value being classified) should be assigned before
    calling ``super().__init__()`` or declared as a class attribute.

    Class attributes:
        state_type: State class used to rebuild persisted states
        context_fields: Automaton attributes persisted alongside the states
    """

    state_type: ClassVar[type[DFAState]] = DFAState
    context_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self) -> None:
        self._registry: StateRegistry = StateRegistry()
        self._transitions = TransitionTable(owner=type(self).__name__)
        self._current_id: Optional[int] = None

        self.define_states()
        self.define_transitions()

    @abstractmethod
    def define_states(self) -> None:
        """Register every state of the automaton."""

    @abstractmethod
    def define_transitions(self) -> None:
        """Link guarded transitions between already defined states."""

    # Definition

    def add_state(self, state_or_id: StateRef, state: Optional[DFAState] = None) -> DFAState:
        """
        Register a state.

        Called either as ``add_state(state)``, keeping the state's own id, or
        as ``add_state(state_id, state)``, which assigns the id first. A state
        registered under an existing id replaces the previous one.
        """
        if state is None:
            if not isinstance(state_or_id, DFAState):
                raise TypeError("add_state(state_id) requires a state argument")
            state = state_or_id
        else:
            state.id = state_id_of(state_or_id)

        self._registry.register(state)
        return state

    def add_transition(self, from_ref: StateRef, to_ref: StateRef, guard: Guard) -> None:
        """
        Link ``from_ref`` to ``to_ref`` behind ``guard``.

        Raises:
            UnknownStateError: If either end has not been defined yet
        """
        from_id = state_id_of(from_ref)
        to_id = state_id_of(to_ref)

        for state_id in (from_id, to_id):
            if state_id not in self._registry:
                raise UnknownStateError(
                    f"Transition {from_id}->{to_id} references undefined state {state_id}",
                    state_id=state_id,
                )

        self._transitions.link(from_id, to_id, guard)

    # Introspection

    @property
    def registry(self) -> StateRegistry:
        return self._registry

    @property
    def transitions(self) -> TransitionTable:
        return self._transitions

    @property
    def states(self) -> OrderedStates:
        return self._registry.all()

    @property
    def is_started(self) -> bool:
        return self._current_id is not None

    @property
    def current_id(self) -> int:
        return self._require_position()

    @property
    def current_state(self) -> DFAState:
        return self._registry.get(self._require_position())

    def _require_position(self) -> int:
        if self._current_id is None:
            raise StateTransitionError(
                f"{type(self).__name__} has no current state; call start_from first"
            )
        return self._current_id

    # Execution

    def start_from(self, ref: StateRef) -> None:
        """Set the current state without running its behavior."""
        state_id = state_id_of(ref)
        if state_id not in self._registry:
            raise UnknownStateError(
                f"Cannot start from undefined state {state_id}",
                state_id=state_id,
            )

        previous = self._current_id
        self._current_id = state_id
        log_state_transition(
            state_logger,
            automaton=type(self).__name__,
            from_state=previous,
            to_state=state_id,
            trigger="start_from",
        )

    def can_move_to(self, ref: StateRef) -> bool:
        """True iff an edge from the current state exists and its guard holds."""
        return self._transitions.evaluate(self._require_position(), state_id_of(ref))

    def move_to(self, ref: StateRef) -> bool:
        """
        Move to ``ref`` if its guard holds, then run its behavior once.

        Returns:
            True if the move happened, False if there was no legal move
        """
        return self._move(state_id_of(ref), trigger="move_to")

    def _move(self, to_id: int, trigger: str) -> bool:
        from_id = self._require_position()
        if not self._transitions.evaluate(from_id, to_id):
            return False

        target = self._registry.get(to_id)
        if target.behavior is None:
            raise StateTransitionError(
                f"State {to_id} has no behavior bound",
                current_state=from_id,
                attempted_transition=f"{from_id}->{to_id}",
            )

        self._current_id = to_id
        log_state_transition(
            state_logger,
            automaton=type(self).__name__,
            from_state=from_id,
            to_state=to_id,
            trigger=trigger,
        )
        target.enter()
        return True

    def next_candidates(self, from_ref: Optional[StateRef] = None) -> list[int]:
        """Target ids reachable from ``from_ref`` (default: current), in link order."""
        if from_ref is None:
            from_id = self._require_position()
        else:
            from_id = state_id_of(from_ref)
        return self._transitions.edges_from(from_id)

    def next_states(self, from_ref: Optional[StateRef] = None) -> list[DFAState]:
        return [self._registry.get(to_id) for to_id in self.next_candidates(from_ref)]

    def step(self, strict: bool = False) -> StepResult:
        """
        Take the first candidate edge whose guard holds.

        Args:
            strict: Raise instead of reporting when the current state has no
                outgoing transitions

        Returns:
            StepResult describing whether and where the automaton moved
        """
        from_id = self._require_position()
        candidates = self.next_candidates()

        if not candidates:
            if strict:
                raise NoOutgoingTransitionError(
                    f"No outgoing transition from state {from_id}",
                    state_id=from_id,
                )
            state_logger.debug(
                "step_no_outgoing_transition",
                automaton=type(self).__name__,
                state=from_id,
            )
            return StepResult(StepOutcome.NO_OUTGOING_TRANSITION, from_id)

        for to_id in candidates:
            if self._move(to_id, trigger="step"):
                return StepResult(StepOutcome.MOVED, from_id, to_id)

        state_logger.debug(
            "step_blocked",
            automaton=type(self).__name__,
            state=from_id,
            candidates=candidates,
        )
        return StepResult(StepOutcome.BLOCKED, from_id)

    def run_until(self, target_ref: StateRef, max_steps: Optional[int] = None) -> bool:
        """
        Step until the current state is ``target_ref``.

        Returns:
            True when the target is reached, False when the automaton is
            blocked or ``max_steps`` steps were taken without reaching it

        Raises:
            NoOutgoingTransitionError: If a state without edges is reached
                before the target
        """
        target_id = state_id_of(target_ref)
        if max_steps is None:
            max_steps = get_engine_config().execution.max_steps

        for _ in range(max_steps):
            if self.current_id == target_id:
                return True
            if not self.step(strict=True):
                return False

        return self.current_id == target_id

    # Persistence

    def save(
        self,
        target: Union[str, "Path", IO[str]],
        fmt: Union["SerializationFormat", str, None] = None,
    ) -> None:
        """Write states and position to ``target``; see persistence.store.save."""
        from ..persistence.store import save

        save(self, target, fmt)

    @classmethod
    def load(
        cls,
        source: Union[str, "Path", IO[str]],
        fmt: Union["SerializationFormat", str, None] = None,
    ) -> "DFA":
        """Rebuild an automaton of this type from ``source``."""
        from ..persistence.store import load

        return load(cls, source, fmt)

    def context(self) -> dict[str, Any]:
        """Values of ``context_fields`` for persistence."""
        return {name: getattr(self, name) for name in self.context_fields}

    def _restore(self, states: list[DFAState], current_id: int,
                 context: Optional[dict[str, Any]] = None) -> None:
        """Overlay persisted states, position and context onto this instance."""
        for state in states:
            self._registry.register(state)
        for name, value in (context or {}).items():
            setattr(self, name, value)
        self._current_id = current_id
