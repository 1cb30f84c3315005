"""Tests for the selection state machine and key-repeat debouncing."""

import random

import pytest

from scylla.selection import NavKey, SelectionState

DOWN = NavKey.DOWN
UP = NavKey.UP
OTHER = NavKey.OTHER
QUIT = NavKey.QUIT


def _apply(state: SelectionState, events) -> SelectionState:
    for event in events:
        state.handle(event)
    return state


class TestSelectionStateInit:

    def test_starts_at_zero(self):
        state = SelectionState(count=3)
        assert state.index == 0
        assert state.last_key is None

    def test_empty_has_no_selection(self):
        state = SelectionState(count=0)
        assert state.index is None

    def test_empty_ignores_given_index(self):
        assert SelectionState(count=0, index=4).index is None

    def test_index_clamped_into_range(self):
        assert SelectionState(count=3, index=9).index == 2
        assert SelectionState(count=3, index=-2).index == 0


class TestNavigation:

    def test_down_moves_once(self):
        assert _apply(SelectionState(count=3), [DOWN]).index == 1

    def test_up_at_zero_is_noop(self):
        assert _apply(SelectionState(count=3), [UP]).index == 0

    def test_down_at_last_is_noop(self):
        state = SelectionState(count=3, index=2)
        assert _apply(state, [DOWN]).index == 2

    def test_up_moves_once(self):
        state = SelectionState(count=3, index=2)
        assert _apply(state, [UP]).index == 1

    def test_navigation_on_empty_list_keeps_no_selection(self):
        state = _apply(SelectionState(count=0), [DOWN, None, UP, DOWN])
        assert state.index is None


class TestDebounce:

    def test_repeated_down_collapses(self):
        state = _apply(SelectionState(count=3), [DOWN, DOWN, DOWN])
        assert state.index == 1

    def test_idle_poll_rearms(self):
        state = _apply(SelectionState(count=3), [DOWN, None, DOWN])
        assert state.index == 2

    def test_other_key_rearms(self):
        state = _apply(SelectionState(count=3), [DOWN, OTHER, DOWN])
        assert state.index == 2

    def test_direction_change_is_acted_on(self):
        state = _apply(SelectionState(count=3), [DOWN, UP, DOWN])
        assert state.index == 1

    def test_remembers_last_acted_key(self):
        state = _apply(SelectionState(count=3), [DOWN])
        assert state.last_key is DOWN

    def test_idle_poll_clears_memory(self):
        state = _apply(SelectionState(count=3), [DOWN, None])
        assert state.last_key is None

    def test_noop_move_still_remembered(self):
        state = SelectionState(count=3, index=2)
        _apply(state, [DOWN, UP])
        # DOWN was a no-op at the bottom but still arms the edge; UP acts
        assert state.index == 1

    def test_held_key_with_idle_gaps(self):
        events = [DOWN, DOWN, None, DOWN, DOWN, None, DOWN]
        state = _apply(SelectionState(count=10), events)
        assert state.index == 3


class TestQuit:

    def test_quit_returns_false(self):
        assert SelectionState(count=3).handle(QUIT) is False

    def test_other_events_return_true(self):
        state = SelectionState(count=3)
        for event in (DOWN, UP, OTHER, None):
            assert state.handle(event) is True

    def test_quit_does_not_mutate(self):
        state = _apply(SelectionState(count=3), [DOWN])
        state.handle(QUIT)
        assert state.index == 1
        assert state.last_key is DOWN


class TestBounds:

    @pytest.mark.parametrize("seed", range(20))
    def test_index_always_in_range(self, seed):
        rng = random.Random(seed)
        count = rng.randint(1, 6)
        state = SelectionState(count=count)
        for _ in range(200):
            state.handle(rng.choice([UP, DOWN, OTHER, None]))
            assert 0 <= state.index < count
