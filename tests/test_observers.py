"""Tests for the logging and history-recording hook bundles."""

import logging

from immustate import HistoryLog, HistoryManager, ImmutableContainer, combine_hooks, logging_hooks


def increment(state):
    state['count'] += 1


def test_logging_hooks_report_lifecycle(caplog):
    logger = logging.getLogger('tests.observers')
    container = ImmutableContainer({'count': 0}, logging_hooks(logger))

    with caplog.at_level(logging.INFO, logger='tests.observers'):
        container.initialize({'count': 0})
        container.apply(increment)

    messages = [record.getMessage() for record in caplog.records]
    assert messages == [
        "Container initialized with state: {'count': 0}",
        "Will apply update increment to: {'count': 0}",
        "Updated state: {'count': 1}",
    ]
    assert caplog.records[1].update == 'increment'


def test_logging_hooks_respect_level(caplog):
    logger = logging.getLogger('tests.observers.debug')
    container = ImmutableContainer({'count': 0}, logging_hooks(logger, level=logging.DEBUG))

    with caplog.at_level(logging.INFO, logger='tests.observers.debug'):
        container.apply(increment)

    assert caplog.records == []


def test_history_log_records_every_state():
    history = HistoryLog()
    container = ImmutableContainer({'count': 0}, history.hooks)
    container.initialize({'count': 0})
    container.apply(increment)
    container.apply(increment)

    assert history.entries == ({'count': 0}, {'count': 1}, {'count': 2})


def test_history_log_logs_at_debug(caplog):
    history = HistoryLog()

    with caplog.at_level(logging.DEBUG, logger='immustate.observers'):
        history.record('a')

    assert any('State history (1)' in record.getMessage() for record in caplog.records)


def test_observers_combine_with_undo():
    history = HistoryLog()
    undo = HistoryManager()
    container = ImmutableContainer({'count': 0}, combine_hooks(logging_hooks(), history.hooks, undo.hooks))
    container.bind(lambda state: None)
    container.apply(increment)
    undo.undo()

    # replays bypass on_update, so the log only holds real updates
    assert history.entries == ({'count': 0}, {'count': 1})
    assert container.state == {'count': 0}
