"""Tests for HistoryManager undo/redo semantics."""

import pytest

from immustate import HistoryManager, ImmutableContainer


def increment(state):
    state['count'] += 1


@pytest.fixture
def replays():
    return []


@pytest.fixture
def manager(replays):
    m = HistoryManager()
    m.capture_replay(replays.append)
    return m


def fill(manager, *values):
    for value in values:
        manager.append(value)


class TestAppend:
    def test_empty_history(self):
        manager = HistoryManager()

        assert manager.index == -1
        assert manager.history_size == 0
        assert manager.history == ()

    def test_append_moves_cursor(self, manager):
        fill(manager, 'a', 'b', 'c')

        assert manager.history == ('a', 'b', 'c')
        assert manager.index == 2

    def test_append_after_undo_discards_redo_branch(self, manager):
        fill(manager, 'a', 'b', 'c')
        manager.undo()
        manager.append('d')

        assert manager.history == ('a', 'b', 'd')
        assert manager.index == 2
        assert not manager.can_redo

    def test_append_after_double_undo(self, manager):
        fill(manager, 'a', 'b', 'c')
        manager.undo()
        manager.undo()
        manager.append('e')

        assert manager.history == ('a', 'e')
        assert manager.index == 1


class TestBoundaries:
    def test_undo_on_empty_history_is_noop(self, manager, replays):
        manager.undo()
        manager.redo()

        assert manager.index == -1
        assert replays == []

    def test_undo_at_oldest_entry_is_noop(self, manager, replays):
        fill(manager, 'a')
        manager.undo()

        assert manager.index == 0
        assert replays == []

    def test_redo_at_newest_entry_is_noop(self, manager, replays):
        fill(manager, 'a', 'b')
        manager.redo()

        assert manager.index == 1
        assert replays == []


def test_round_trip(manager, replays):
    fill(manager, 'a', 'b', 'c')

    manager.undo()
    manager.undo()
    assert manager.index == 0
    assert replays == ['b', 'a']

    manager.redo()
    manager.redo()
    assert manager.index == 2
    assert replays == ['b', 'a', 'b', 'c']


def test_without_replay_setter_cursor_moves_silently():
    manager = HistoryManager()
    fill(manager, 'a', 'b')
    manager.undo()

    assert manager.index == 0


def test_hooks_bundle_wires_append_and_capture():
    manager = HistoryManager()
    hooks = manager.hooks

    assert hooks.on_initialize == manager.append
    assert hooks.on_update == manager.append
    assert hooks.set_set_state == manager.capture_replay
    assert hooks.will_update is None


class TestWithContainer:
    """HistoryManager wired into a live container."""

    @pytest.fixture
    def wired(self):
        manager = HistoryManager()
        container = ImmutableContainer(None, manager.hooks)
        received = []
        container.register_subscriber(received.append)
        return manager, container, received

    def test_initialize_and_two_updates(self, wired):
        manager, container, received = wired
        container.initialize({'count': 0})
        container.apply(increment)
        container.apply(increment)

        assert manager.history_size == 3
        assert manager.index == 2

        manager.undo()

        assert manager.index == 1
        assert received[-1] == {'count': 1}
        assert container.state == {'count': 1}

    def test_undo_replays_recorded_objects(self, wired):
        manager, container, received = wired
        container.initialize({'count': 0})
        container.apply(increment)
        manager.undo()

        assert received[-1] is manager.history[0]

    def test_apply_after_undo_branches_from_replayed_value(self, wired):
        manager, container, received = wired
        container.initialize({'count': 0})
        container.apply(increment)
        container.apply(increment)
        manager.undo()
        manager.undo()
        container.apply(lambda s: s.update(count=s['count'] + 10))

        assert container.state == {'count': 10}
        assert manager.history == ({'count': 0}, {'count': 10})
        assert not manager.can_redo

    def test_replay_does_not_append(self, wired):
        manager, container, received = wired
        container.initialize({'count': 0})
        container.apply(increment)
        manager.undo()
        manager.redo()

        assert manager.history_size == 2
        assert container.state == {'count': 1}

    def test_undo_before_subscriber_is_dropped(self):
        manager = HistoryManager()
        container = ImmutableContainer({'count': 0}, manager.hooks)
        container.initialize({'count': 0})
        container.apply(increment)
        manager.undo()

        assert manager.index == 0
        assert container.state == {'count': 1}
