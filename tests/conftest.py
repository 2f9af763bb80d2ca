"""Pytest configuration and shared fixtures."""

from dataclasses import dataclass, field

import pytest

from dfa_engine import DFA, DFAState
from dfa_engine.config import set_engine_config


@dataclass(eq=False)
class ParityState(DFAState):
    """Parity classifier state with a persisted weight and a volatile note."""
    weight: float = 0.0
    note: str = field(default="", metadata={"persist": False})


class ParityAutomaton(DFA):
    """Classifies ``value`` as even or odd, recording every state entered."""

    state_type = ParityState

    START, CHECK, EVEN, ODD, DONE = range(5)

    def __init__(self, value: int = 0):
        self.value = value
        self.entered: list[int] = []
        super().__init__()

    def define_states(self):
        for state_id, weight in [
            (self.START, 10.0),
            (self.CHECK, 10.1),
            (self.EVEN, 10.2),
            (self.ODD, 10.3),
            (self.DONE, 10.5),
        ]:
            self.add_state(state_id, ParityState(weight=weight, behavior=self._recorder(state_id)))

    def define_transitions(self):
        self.add_transition(self.START, self.CHECK, lambda: True)
        self.add_transition(self.CHECK, self.EVEN, lambda: self.value % 2 == 0)
        self.add_transition(self.CHECK, self.ODD, lambda: self.value % 2 != 0)
        self.add_transition(self.EVEN, self.DONE, lambda: True)
        self.add_transition(self.ODD, self.DONE, lambda: True)

    def _recorder(self, state_id):
        return lambda: self.entered.append(state_id)


class ContextParityAutomaton(ParityAutomaton):
    """Parity automaton that also persists the classified value."""

    context_fields = ("value",)


class SiblingAutomaton(DFA):
    """State 0 links to 1, 2 and 3; guards are driven by a flags mapping."""

    def __init__(self):
        self.flags = {1: False, 2: False, 3: False}
        self.entered: list[int] = []
        super().__init__()

    def define_states(self):
        for state_id in range(4):
            self.add_state(DFAState(id=state_id, behavior=self._recorder(state_id)))

    def define_transitions(self):
        for to_id in (1, 2, 3):
            self.add_transition(0, to_id, self._flag(to_id))

    def _flag(self, to_id):
        return lambda: self.flags[to_id]

    def _recorder(self, state_id):
        return lambda: self.entered.append(state_id)


@pytest.fixture
def parity_cls():
    """Parity classifier automaton type."""
    return ParityAutomaton


@pytest.fixture
def context_parity_cls():
    """Parity classifier type persisting its value."""
    return ContextParityAutomaton


@pytest.fixture
def odd_parity():
    """Parity classifier holding 7, started at START."""
    automaton = ParityAutomaton(7)
    automaton.start_from(ParityAutomaton.START)
    return automaton


@pytest.fixture
def siblings():
    """Automaton with three sibling edges from state 0, started at 0."""
    automaton = SiblingAutomaton()
    automaton.start_from(0)
    return automaton


@pytest.fixture(autouse=True)
def reset_engine_config():
    """Restore the process-wide configuration after each test."""
    yield
    set_engine_config(None)
