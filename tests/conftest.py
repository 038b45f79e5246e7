"""Pytest fixtures for arcade framework tests."""
import os

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import pytest

from arcade import logging as arcade_logging


@pytest.fixture
def logging_config(monkeypatch):
    """Isolate changes to the global logging configuration."""
    monkeypatch.setitem(arcade_logging._config, 'level', arcade_logging.LogLevel.INFO)
    monkeypatch.setitem(arcade_logging._config, 'levels', {})
    monkeypatch.setitem(arcade_logging._config, 'channels', {})
    monkeypatch.setitem(arcade_logging._config, 'log_dir', None)
    yield arcade_logging._config
    arcade_logging.close_all_sinks()
