"""Unit tests for logging utilities in logging.py.

Test coverage includes:

1. JsonFormatter
   - Emits timestamp, level, logger and message as JSON.
   - Attaches `extra` fields and exception tracebacks.

2. initialize_logging()
   - Configures the root logger level from LOG_LEVEL.
"""

import sys
import json
import logging
from datetime import datetime, UTC

import pytest

from shortkeys.utils.logging import JsonFormatter, initialize_logging


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def formatter():
    return JsonFormatter()


@pytest.fixture
def make_record():
    def _make_record(message='Persisted new URL record.', level=logging.INFO, extra=None, exc_info=None):
        record = logging.LogRecord('shortkeys.coordinator', level, __file__, 1, message, None, exc_info)
        for key, value in (extra or {}).items():
            setattr(record, key, value)
        return record

    return _make_record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield root
    root.setLevel(level)
    root.handlers[:] = handlers


# -------------------------------
# 1. JsonFormatter
# -------------------------------


def test_format_standard_fields(formatter, make_record):
    record = make_record()
    record.created = datetime(2025, 12, 26, 12, tzinfo=UTC).timestamp()
    record.msecs = 0

    log = json.loads(formatter.format(record))

    assert log['timestamp'] == '2025-12-26T12:00:00.000Z'
    assert log['level'] == 'INFO'
    assert log['logger'] == 'shortkeys.coordinator'
    assert log['message'] == 'Persisted new URL record.'


def test_format_extra_fields(formatter, make_record):
    log = json.loads(formatter.format(make_record(extra={'shortKey': 'Xq3_9a', 'event': 'ENCODE_SUCCESS'})))

    assert log['shortKey'] == 'Xq3_9a'
    assert log['event'] == 'ENCODE_SUCCESS'
    assert 'args' not in log
    assert 'lineno' not in log


def test_format_non_serializable_extra(formatter, make_record):
    log = json.loads(formatter.format(make_record(extra={'data': {1, 2}})))
    assert isinstance(log['data'], str)


def test_format_exception(formatter, make_record):
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = make_record(level=logging.ERROR, exc_info=sys.exc_info())

    log = json.loads(formatter.format(record))

    assert 'RuntimeError: boom' in log['exception']


# -------------------------------
# 2. initialize_logging()
# -------------------------------


@pytest.mark.parametrize('level, expected', [('debug', logging.DEBUG), ('WARNING', logging.WARNING), (None, logging.INFO)])
def test_initialize_logging(monkeypatch, restore_root_logger, level, expected):
    if level is None:
        monkeypatch.delenv('LOG_LEVEL', raising=False)
    else:
        monkeypatch.setenv('LOG_LEVEL', level)

    initialize_logging()

    root = logging.getLogger()
    assert root.level == expected
    assert any(isinstance(handler.formatter, JsonFormatter) for handler in root.handlers)
