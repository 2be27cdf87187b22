"""Tests for logger configuration and formatters."""

import json
import logging

from colorama import Fore, Style

from immustate import ContainerConfig, configure_from, configure_logger
from immustate import log_config
from immustate.log_config import ColoredFormatter, StructuredFormatter


def make_record(level=logging.INFO, msg='hello %s', args=('world',), **extra):
    record = logging.LogRecord('immustate.test', level, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_structured_formatter_emits_json_with_extra():
    payload = json.loads(StructuredFormatter().format(make_record(update='increment')))

    assert payload['message'] == 'hello world'
    assert payload['level'] == 'INFO'
    assert payload['logger'] == 'immustate.test'
    assert payload['update'] == 'increment'
    assert 'timestamp' in payload


def test_colored_formatter_wraps_line_in_level_color():
    line = ColoredFormatter('%(levelname)s %(message)s').format(make_record(level=logging.ERROR))

    assert line.startswith(Fore.RED)
    assert line.endswith(Style.RESET_ALL)
    assert 'ERROR hello world' in line


def test_configure_logger_replaces_handlers():
    logger = configure_logger('immustate.tests.configure', level='debug', structured=True)
    logger = configure_logger('immustate.tests.configure', level='debug', structured=True)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, StructuredFormatter)


def test_configure_logger_unknown_level_falls_back_to_info():
    logger = configure_logger('immustate.tests.fallback', level='chatty')

    assert logger.level == logging.INFO
    assert type(logger.handlers[0].formatter) is logging.Formatter


def test_configure_from_config():
    config = ContainerConfig(log_level='WARNING', colored_logs=True)
    logger = configure_from(config, name='immustate.tests.from_config')

    assert logger.level == logging.WARNING
    assert isinstance(logger.handlers[0].formatter, ColoredFormatter)


def test_colored_output_prepares_windows_console(monkeypatch):
    calls = []
    monkeypatch.setattr(log_config, 'just_fix_windows_console', lambda: calls.append(True))

    configure_logger('immustate.tests.windows', colored=True)
    configure_logger('immustate.tests.windows.plain', colored=False)

    assert calls == [True]
