"""Tests for the state registry."""

import pytest

from dfa_engine.errors import StateNotFoundError, UnknownStateError
from dfa_engine.state.models import DFAState
from dfa_engine.state.registry import StateRegistry


class TestStateRegistry:
    """Test StateRegistry class."""

    def test_register_and_get(self):
        registry = StateRegistry()
        state = DFAState(id=7)

        registry.register(state)

        assert registry.get(7) is state
        assert 7 in registry
        assert len(registry) == 1

    def test_register_duplicate_overwrites(self):
        """Registering an existing id silently replaces the state."""
        registry = StateRegistry()
        first = DFAState(id=1)
        second = DFAState(id=1)

        registry.register(first)
        registry.register(second)

        assert registry.get(1) is second
        assert len(registry) == 1

    def test_get_missing_raises_not_found(self):
        registry = StateRegistry()

        with pytest.raises(StateNotFoundError) as exc_info:
            registry.get(42)

        assert exc_info.value.state_id == 42
        assert isinstance(exc_info.value, UnknownStateError)
        assert isinstance(exc_info.value, LookupError)

    def test_negative_id_rejected(self):
        with pytest.raises(ValueError):
            StateRegistry().register(DFAState(id=-1))

    def test_all_is_sorted_independent_of_insertion(self):
        registry = StateRegistry()
        for state_id in (4, 0, 3, 1, 2):
            registry.register(DFAState(id=state_id))

        assert [s.id for s in registry.all()] == [0, 1, 2, 3, 4]
        assert registry.ids() == [0, 1, 2, 3, 4]

    def test_all_is_restartable(self):
        registry = StateRegistry()
        for state_id in (2, 1):
            registry.register(DFAState(id=state_id))

        view = registry.all()

        assert [s.id for s in view] == [1, 2]
        assert [s.id for s in view] == [1, 2]
        assert len(view) == 2

    def test_all_view_reflects_later_registrations(self):
        registry = StateRegistry()
        view = registry.all()

        registry.register(DFAState(id=9))

        assert [s.id for s in view] == [9]

    def test_iteration_matches_all(self):
        registry = StateRegistry()
        for state_id in (5, 2):
            registry.register(DFAState(id=state_id))

        assert list(registry) == list(registry.all())
