"""
Tests for arcade.logging.

Tests cover:
- Level filtering (global and per module)
- Message formatting
- FileSink JSONL output
- Sink registry and emit_record
- Environment configuration
"""

import json

import pytest

from arcade import logging as arcade_logging
from arcade.logging import (
    FileSink,
    LogLevel,
    NullSink,
    close_all_sinks,
    configure_logging,
    create_sink,
    emit_record,
    get_logger,
    register_sink,
)


class TestLevels:
    """Test level filtering."""

    def test_default_level_is_info(self, logging_config, capsys):
        log = get_logger('test.levels')
        log.debug("hidden")
        log.info("shown %d", 3)
        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "[test.levels] INFO: shown 3" in out

    def test_configure_global_level(self, logging_config, capsys):
        configure_logging(level='DEBUG')
        get_logger('test.levels').debug("now visible")
        assert "DEBUG: now visible" in capsys.readouterr().out

    def test_module_level_overrides_global(self, logging_config, capsys):
        configure_logging(level='WARNING', modules={'test.noisy': 'TRACE'})
        get_logger('test.noisy').trace("frame")
        get_logger('test.quiet').info("skipped")
        out = capsys.readouterr().out
        assert "[test.noisy] TRACE: frame" in out
        assert "skipped" not in out

    def test_off_disables(self, logging_config, capsys):
        configure_logging(level='OFF')
        get_logger('test.levels').critical("nothing")
        assert capsys.readouterr().out == ""

    def test_unknown_level_falls_back_to_info(self, logging_config):
        configure_logging(level='LOUD')
        assert get_logger('test.levels').level == LogLevel.INFO

    def test_bad_format_args_do_not_raise(self, logging_config, capsys):
        get_logger('test.levels').info("%d heads", "many")
        assert "%d heads" in capsys.readouterr().out

    def test_loggers_are_cached(self):
        assert get_logger('test.cache') is get_logger('test.cache')


class TestFileSink:
    """Test JSONL output."""

    def test_writes_header_records_footer(self, tmp_path):
        sink = FileSink(log_dir=str(tmp_path), session_name='run1')
        sink.emit('session', {'type': 'session_end', 'score': 12})
        path = sink.log_paths['session']
        sink.close()

        lines = [json.loads(line) for line in path.read_text().splitlines()]
        assert path.name == 'run1_session.jsonl'
        assert lines[0]['type'] == 'header'
        assert lines[1]['score'] == 12
        assert 'wall_time' in lines[1]
        assert lines[-1]['type'] == 'footer'

    def test_one_file_per_module(self, tmp_path):
        with FileSink(log_dir=str(tmp_path), session_name='run2') as sink:
            sink.emit('a', {'n': 1})
            sink.emit('b', {'n': 2})
            sink.flush()
            assert set(sink.log_paths) == {'a', 'b'}
        assert len(list(tmp_path.iterdir())) == 2

    def test_no_file_until_first_record(self, tmp_path):
        sink = FileSink(log_dir=str(tmp_path / 'logs'))
        sink.close()
        assert not (tmp_path / 'logs').exists()


class TestSinkRegistry:
    """Test register_sink / emit_record."""

    def test_emit_without_sink(self, logging_config):
        assert emit_record('nobody', {'x': 1}) is False

    def test_emit_to_registered_sink(self, logging_config, tmp_path):
        sink = FileSink(log_dir=str(tmp_path), session_name='reg')
        register_sink('session', sink)
        assert emit_record('session', {'type': 'session_end'}) is True

        close_all_sinks()
        assert emit_record('session', {'type': 'late'}) is False
        assert (tmp_path / 'reg_session.jsonl').exists()

    def test_create_sink_disabled_by_default(self, logging_config):
        assert isinstance(create_sink('session'), NullSink)

    def test_create_sink_enabled(self, logging_config, tmp_path):
        logging_config['channels']['session'] = {'enabled': True, 'dir': str(tmp_path)}
        sink = create_sink('session', session_name='on')
        assert isinstance(sink, FileSink)
        sink.emit('session', {'score': 1})
        sink.close()
        assert (tmp_path / 'on_session.jsonl').exists()


class TestEnvironmentConfig:
    """Test ARCADE_LOG_* / ARCADE_LOGGING_* parsing."""

    def test_env_levels_and_channels(self, logging_config):
        arcade_logging.load_environment({
            'ARCADE_LOG_LEVEL': 'ERROR',
            'ARCADE_LOG_PAPOPE_SESSION': 'DEBUG',
            'ARCADE_LOGGING_SESSION_ENABLED': 'true',
            'ARCADE_LOG_DIR': '/tmp/arcade-test-logs',
            'UNRELATED': 'x',
        })

        assert logging_config['level'] == LogLevel.ERROR
        assert get_logger('papope.session').level == LogLevel.DEBUG
        assert logging_config['channels']['session']['enabled'] is True
        assert arcade_logging.get_log_dir() == '/tmp/arcade-test-logs'

    @pytest.mark.parametrize("raw,expected", [
        ('true', True),
        ('off', False),
        ('12', 12),
        ('0.5', 0.5),
        ('/var/log', '/var/log'),
    ])
    def test_coerce(self, raw, expected):
        assert arcade_logging._coerce(raw) == expected


class TestLogLevelParse:
    """Test level names."""

    @pytest.mark.parametrize("name,expected", [
        ('trace', LogLevel.TRACE),
        ('WARN', LogLevel.WARNING),
        (' error ', LogLevel.ERROR),
        ('OFF', LogLevel.OFF),
    ])
    def test_names(self, name, expected):
        assert LogLevel.parse(name) == expected

    def test_unknown_uses_default(self):
        assert LogLevel.parse('LOUD', default=LogLevel.DEBUG) == LogLevel.DEBUG
