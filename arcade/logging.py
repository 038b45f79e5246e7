"""
Arcade logging.

Two channels:

* console: get_logger(name) returns an ArcadeLogger printing
  "[name] LEVEL: message" lines at or above the level configured for it.
* records: emit_record(channel, record) hands a JSON-serialisable dict to the
  LogSink registered for that channel (a JSONL file, or nothing at all).

Usage:
    from arcade.logging import get_logger, emit_record

    log = get_logger('papope.session')
    log.info("Session started: %d ms", 30000)
    emit_record('session', {'type': 'session_end', 'score': 42})

Environment, read once on import:
    ARCADE_LOG_LEVEL=DEBUG               default console level
    ARCADE_LOG_PAPOPE_SESSION=TRACE      level of one logger (dots -> underscores)
    ARCADE_LOG_DIR=/tmp/arcade-logs      where FileSink writes
    ARCADE_LOGGING_SESSION_ENABLED=true  record settings per channel

Or from code:
    configure_logging(level='DEBUG', modules={'papope.simulation': 'TRACE'})
"""

import json
import os
import sys
import time
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import IO, Any, Dict, Mapping, Optional


class LogLevel(IntEnum):
    """Console levels; numeric values line up with the stdlib's."""
    TRACE = 5      # every frame
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100

    @classmethod
    def parse(cls, name: str, default: 'LogLevel' = None) -> 'LogLevel':
        """Level from its name (case-insensitive, WARN accepted); unknown -> default or INFO."""
        name = name.strip().upper()
        if name == 'WARN':
            name = 'WARNING'
        try:
            return cls[name]
        except KeyError:
            return default if default is not None else cls.INFO


_config: Dict[str, Any] = {
    'level': LogLevel.INFO,   # default console level
    'levels': {},             # logger key -> LogLevel
    'log_dir': None,          # FileSink directory override
    'channels': {},           # record channel -> settings from ARCADE_LOGGING_*
}


def _level_key(name: str) -> str:
    return name.lower().replace('.', '_').replace('/', '_')


def _coerce(value: str) -> Any:
    """Environment strings to bool, int or float where they look like one."""
    lowered = value.strip().lower()
    if lowered in ('true', 'yes', 'on', '1'):
        return True
    if lowered in ('false', 'no', 'off', '0'):
        return False
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            continue
    return value


def configure_logging(level: str = 'INFO', modules: Optional[Mapping[str, str]] = None) -> None:
    """
    Set the default console level and, optionally, per-logger overrides.

    Args:
        level: Level name applied to every logger without an override
        modules: Logger name -> level name
    """
    _config['level'] = LogLevel.parse(level)
    for name, name_level in (modules or {}).items():
        _config['levels'][_level_key(name)] = LogLevel.parse(name_level)


def load_environment(environ: Optional[Mapping[str, str]] = None) -> None:
    """Apply ARCADE_LOG_* and ARCADE_LOGGING_* variables (os.environ by default)."""
    environ = os.environ if environ is None else environ

    for key, value in environ.items():
        if key == 'ARCADE_LOG_LEVEL':
            _config['level'] = LogLevel.parse(value)
        elif key == 'ARCADE_LOG_DIR':
            _config['log_dir'] = value
        elif key.startswith('ARCADE_LOG_'):
            _config['levels'][key[len('ARCADE_LOG_'):].lower()] = LogLevel.parse(value)
        elif key.startswith('ARCADE_LOGGING_'):
            channel, _, setting = key[len('ARCADE_LOGGING_'):].lower().partition('_')
            if channel and setting:
                _config['channels'].setdefault(channel, {})[setting] = _coerce(value)


load_environment()


def get_log_dir() -> str:
    """Directory for record files: ARCADE_LOG_DIR, else the per-user data dir."""
    configured = _config['log_dir'] or os.environ.get('ARCADE_LOG_DIR')
    if configured:
        return str(Path(configured).expanduser())

    if sys.platform == 'darwin':
        base = Path.home() / 'Library' / 'Application Support'
    elif sys.platform == 'win32':
        base = Path(os.environ.get('APPDATA', str(Path.home())))
    else:
        base = Path(os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share')))
    return str(base / 'arcade' / 'logs')


def get_module_config(channel: str) -> Dict[str, Any]:
    """Settings collected for a record channel ({} when none were given)."""
    return _config['channels'].get(channel.lower(), {})


# =============================================================================
# Record sinks
# =============================================================================

class LogSink(ABC):
    """Destination for structured records. Usable as a context manager."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write one record for a channel."""

    @abstractmethod
    def flush(self) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    def __enter__(self) -> 'LogSink':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class FileSink(LogSink):
    """
    One JSONL file per channel: a header line, the records, a footer line.

    Files are named "<session_name>_<channel>.jsonl" and created on the
    first record, so a sink that never receives one leaves nothing behind.

    Args:
        log_dir: Target directory (default: get_log_dir() at first write)
        session_name: File name prefix (default: local start time)
    """

    def __init__(self, log_dir: Optional[str] = None, session_name: Optional[str] = None):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._handles: Dict[str, IO[str]] = {}

    def path_for(self, module: str) -> Path:
        directory = self._log_dir or Path(get_log_dir())
        return directory / f"{self._session_name}_{module}.jsonl"

    @property
    def log_paths(self) -> Dict[str, Path]:
        """Files opened so far, by channel."""
        return {module: self.path_for(module) for module in self._handles}

    @staticmethod
    def _write(handle: IO[str], record: Dict[str, Any]) -> None:
        handle.write(json.dumps(record) + "\n")

    def _handle(self, module: str) -> IO[str]:
        handle = self._handles.get(module)
        if handle is None:
            path = self.path_for(module)
            path.parent.mkdir(parents=True, exist_ok=True)
            handle = self._handles[module] = open(path, 'a')
            self._write(handle, {
                'type': 'header',
                'module': module,
                'session_name': self._session_name,
                'start_time': time.time(),
            })
        return handle

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        self._write(self._handle(module), {'wall_time': time.time(), **record})

    def flush(self) -> None:
        for handle in self._handles.values():
            handle.flush()

    def close(self) -> None:
        for module, handle in self._handles.items():
            self._write(handle, {'type': 'footer', 'module': module, 'end_time': time.time()})
            handle.close()
        self._handles.clear()


class NullSink(LogSink):
    """Accepts records and drops them."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    _sinks[module] = sink


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Send a record to the channel's sink.

    Returns:
        False when no sink is registered for the channel
    """
    sink = _sinks.get(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    """Close every registered sink and forget them."""
    while _sinks:
        _, sink = _sinks.popitem()
        sink.close()


def create_sink(module: str, session_name: Optional[str] = None) -> LogSink:
    """
    The sink a channel is configured for.

    Records are opt-in: a FileSink when ARCADE_LOGGING_<CHANNEL>_ENABLED is
    true (written to ARCADE_LOGGING_<CHANNEL>_DIR if given), a NullSink
    otherwise.
    """
    settings = get_module_config(module)
    if settings.get('enabled') is not True:
        return NullSink()
    return FileSink(log_dir=settings.get('dir'), session_name=session_name)


# =============================================================================
# Console loggers
# =============================================================================

class ArcadeLogger:
    """
    Console logger for one named module.

    The effective level is looked up on every call, so configure_logging()
    also affects loggers created before it ran.
    """

    def __init__(self, module: str):
        self.module = module
        self._key = _level_key(module)

    @property
    def level(self) -> LogLevel:
        return _config['levels'].get(self._key, _config['level'])

    def _log(self, level: LogLevel, label: str, msg: str, *args) -> None:
        if level < self.level:
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label}: {msg}")

    def trace(self, msg: str, *args) -> None:
        self._log(LogLevel.TRACE, 'TRACE', msg, *args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, *args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, *args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, *args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)

    def critical(self, msg: str, *args) -> None:
        self._log(LogLevel.CRITICAL, 'CRIT', msg, *args)


@lru_cache(maxsize=64)
def get_logger(module: str) -> ArcadeLogger:
    """Shared logger per module name."""
    return ArcadeLogger(module)
