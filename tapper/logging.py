"""
Hockey Tapper Logging System

Provides consistent, per-module logging for the simulation core, the game
session, and the leaderboard stores.

Structured Record Logging:
    Besides console messages, modules can emit structured records (game
    events, saved scores) to sinks. FileSink writes JSONL to disk; NullSink
    discards everything.

Usage:
    from tapper.logging import get_logger

    log = get_logger('physics')
    log.debug("Integrating step")
    log.info("Puck launched")

    # Structured records (game events, etc.)
    from tapper.logging import emit_record
    emit_record('session', {'type': 'goal', 'points': 200})

Configuration:
    Environment variables:
        TAPPER_LOG_LEVEL=DEBUG           # Global default level
        TAPPER_LOG_PHYSICS=DEBUG         # Module-specific level
        TAPPER_LOG_ANIMATION=WARNING
        TAPPER_LOG_DIR=/tmp/tapper-logs  # Where FileSink writes

        # Module-specific structured logging
        TAPPER_LOGGING_SESSION_ENABLED=true

    Or programmatically:
        from tapper.logging import configure_logging
        configure_logging(level='DEBUG', modules={'particles': 'INFO'})
"""

import json
import os
import sys
import time
import traceback
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, IO, Optional


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""
    TRACE = 5      # Per-tick detail
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100      # Disable logging


# =============================================================================
# Sink-Based Structured Logging
# =============================================================================

class LogSink(ABC):
    """
    Abstract base class for log record sinks.

    Sinks receive structured log records and write them to their destination.
    """

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """
        Emit a structured log record.

        Args:
            module: Module name (e.g., 'session', 'leaderboard')
            record: Structured data to log (must be JSON-serializable)
        """

    @abstractmethod
    def flush(self) -> None:
        """Flush any buffered records."""

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""

    def __enter__(self) -> 'LogSink':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class FileSink(LogSink):
    """
    Writes structured log records to JSONL files.

    Each module gets its own file in the log directory. Records are written
    as JSON Lines (one JSON object per line), bracketed by a header and a
    footer record.

    Args:
        log_dir: Directory for log files (default: from get_log_dir())
        session_name: Session identifier for file naming (default: timestamp)
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        session_name: Optional[str] = None,
    ):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, IO[str]] = {}

    def _ensure_dir(self) -> Path:
        """Lazily initialize log directory."""
        if self._log_dir is None:
            self._log_dir = Path(get_log_dir())
        self._log_dir.mkdir(parents=True, exist_ok=True)
        return self._log_dir

    def _path_for(self, module: str) -> Path:
        return self._ensure_dir() / f"{self._session_name}_{module}.jsonl"

    def _get_file(self, module: str) -> IO[str]:
        """Get or create file handle for module."""
        if module not in self._files:
            handle = open(self._path_for(module), 'a')
            header = {
                "type": "header",
                "module": module,
                "session_name": self._session_name,
                "start_time": time.time(),
                "start_time_iso": time.strftime("%Y-%m-%dT%H:%M:%S"),
            }
            handle.write(json.dumps(header) + "\n")
            self._files[module] = handle
        return self._files[module]

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write record to module's JSONL file."""
        handle = self._get_file(module)
        if 'wall_time' not in record:
            record = {'wall_time': time.time(), **record}
        handle.write(json.dumps(record) + "\n")

    def flush(self) -> None:
        for handle in self._files.values():
            handle.flush()

    def close(self) -> None:
        """Write footers and close all open files."""
        for module, handle in self._files.items():
            footer = {
                "type": "footer",
                "module": module,
                "end_time": time.time(),
                "end_time_iso": time.strftime("%Y-%m-%dT%H:%M:%S"),
            }
            handle.write(json.dumps(footer) + "\n")
            handle.close()
        self._files.clear()

    @property
    def log_paths(self) -> Dict[str, Path]:
        """Paths of the files opened so far, by module."""
        return {module: self._path_for(module) for module in self._files}


class NullSink(LogSink):
    """No-op sink when structured logging is disabled."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


# Sink registry - active sinks by module
_sinks: Dict[str, LogSink] = {}
_default_sink: Optional[LogSink] = None


def register_sink(module: str, sink: LogSink) -> None:
    """
    Register a sink for a specific module.

    Args:
        module: Module name (e.g., 'session')
        sink: Sink instance to receive records
    """
    _sinks[module] = sink


def set_default_sink(sink: Optional[LogSink]) -> None:
    """Set the default sink for modules without specific sinks."""
    global _default_sink
    _default_sink = sink


def get_sink(module: str) -> Optional[LogSink]:
    """Get the sink for a module, or the default sink."""
    return _sinks.get(module, _default_sink)


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Emit a structured log record to the appropriate sink.

    Args:
        module: Module name (e.g., 'session', 'leaderboard')
        record: Structured data to log (must be JSON-serializable)

    Returns:
        True if record was emitted, False if no sink available
    """
    sink = get_sink(module)
    if sink:
        sink.emit(module, record)
        return True
    return False


def close_all_sinks() -> None:
    """Close all registered sinks."""
    global _default_sink
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()
    if _default_sink:
        _default_sink.close()
        _default_sink = None


def create_sink_for_module(
    module: str,
    session_name: Optional[str] = None,
) -> LogSink:
    """
    Create the sink configured for a module.

    A FileSink when ``TAPPER_LOGGING_<MODULE>_ENABLED`` is true (or the module
    was enabled programmatically), otherwise a NullSink.

    Args:
        module: Module name for configuration lookup
        session_name: Optional session identifier for file naming
    """
    config = get_module_config(module)
    if not config.get('enabled', False):
        return NullSink()
    return FileSink(log_dir=config.get('dir'), session_name=session_name)


def ensure_module_sink(module: str, session_name: Optional[str] = None) -> LogSink:
    """Register the configured sink for a module unless one is already active.

    Returns:
        The sink that will receive the module's records
    """
    sink = get_sink(module)
    if sink is None:
        sink = create_sink_for_module(module, session_name)
        register_sink(module, sink)
    return sink


# =============================================================================
# Global configuration
# =============================================================================

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
    'log_dir': None,         # Override log directory (None = platform default)
    'modules': {},           # Per-module structured logging settings
}


def get_log_dir() -> str:
    """Get the log directory.

    Priority:
    1. Configured log_dir (TAPPER_LOG_DIR or configure_logging)
    2. Platform-specific user data directory:
       - macOS: ~/Library/Application Support/HockeyTapper/logs
       - Windows: %APPDATA%/HockeyTapper/logs
       - Linux: ~/.local/share/hockey-tapper/logs

    Returns:
        Path to log directory (as string)
    """
    if _config.get('log_dir'):
        return str(Path(_config['log_dir']).expanduser())

    if sys.platform == 'darwin':
        user_data = Path.home() / 'Library' / 'Application Support' / 'HockeyTapper'
    elif sys.platform == 'win32':
        user_data = Path(os.environ.get('APPDATA', str(Path.home()))) / 'HockeyTapper'
    else:
        xdg_data = os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))
        user_data = Path(xdg_data) / 'hockey-tapper'

    return str(user_data / 'logs')


def get_module_config(module: str) -> Dict[str, Any]:
    """Get structured logging settings for a module.

    Settings come from env vars such as:
        TAPPER_LOGGING_SESSION_ENABLED=true
        TAPPER_LOGGING_SESSION_DIR=/tmp/events

    which map to ``{'enabled': True, 'dir': '/tmp/events'}``.

    Returns:
        Dict of module settings, empty dict if none configured
    """
    return _config['modules'].get(module.lower(), {})


def enable_module_records(module: str, log_dir: Optional[str] = None) -> None:
    """Turn on structured records for a module programmatically."""
    settings = _config['modules'].setdefault(module.lower(), {})
    settings['enabled'] = True
    if log_dir:
        settings['dir'] = log_dir


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate type."""
    lower = value.lower()
    if lower in ('true', '1', 'yes', 'on'):
        return True
    if lower in ('false', '0', 'no', 'off'):
        return False
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        pass
    return value


def _format_message(module: str, level: str, msg: str) -> str:
    """Format a log message."""
    return f"[{module}] {level}: {msg}"


def _level_from_string(level_str: str) -> LogLevel:
    """Convert string to LogLevel (unknown names fall back to INFO)."""
    mapping = {
        'TRACE': LogLevel.TRACE,
        'DEBUG': LogLevel.DEBUG,
        'INFO': LogLevel.INFO,
        'WARNING': LogLevel.WARNING,
        'WARN': LogLevel.WARNING,
        'ERROR': LogLevel.ERROR,
        'CRITICAL': LogLevel.CRITICAL,
        'OFF': LogLevel.OFF,
    }
    return mapping.get(level_str.upper(), LogLevel.INFO)


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
) -> None:
    """
    Configure the logging system.

    Args:
        level: Default log level for all modules
        modules: Dict of module_name -> level for per-module configuration
        log_dir: Directory for FileSink output
    """
    _config['default_level'] = _level_from_string(level)

    if modules:
        for mod, mod_level in modules.items():
            _config['module_levels'][mod.lower()] = _level_from_string(mod_level)

    if log_dir:
        _config['log_dir'] = log_dir


def _load_env_config() -> None:
    """Load configuration from environment variables.

    Supports two prefixes:
    - TAPPER_LOG_*: Log levels (TAPPER_LOG_PHYSICS=DEBUG)
    - TAPPER_LOGGING_*: Module record settings (TAPPER_LOGGING_SESSION_ENABLED=true)
    """
    if 'TAPPER_LOG_LEVEL' in os.environ:
        _config['default_level'] = _level_from_string(os.environ['TAPPER_LOG_LEVEL'])

    if 'TAPPER_LOG_DIR' in os.environ:
        _config['log_dir'] = os.environ['TAPPER_LOG_DIR']

    reserved = ('TAPPER_LOG_LEVEL', 'TAPPER_LOG_DIR')
    for key, value in os.environ.items():
        if key.startswith('TAPPER_LOG_') and key not in reserved:
            module_name = key[len('TAPPER_LOG_'):].lower()
            _config['module_levels'][module_name] = _level_from_string(value)

    for key, value in os.environ.items():
        if key.startswith('TAPPER_LOGGING_'):
            parts = key[len('TAPPER_LOGGING_'):].lower().split('_', 1)
            if len(parts) == 2:
                module, setting = parts
                _config['modules'].setdefault(module, {})[setting] = _parse_env_value(value)


# Load env config on import
_load_env_config()


class TapperLogger:
    """
    Logger for a specific module.

    Messages below the module's effective level are dropped before any
    formatting happens, so per-tick trace calls cost almost nothing when
    disabled.
    """

    def __init__(self, module: str):
        self.module = module
        self._module_key = module.lower().replace('.', '_').replace('/', '_')

    @property
    def level(self) -> LogLevel:
        """Get effective log level for this module."""
        if self._module_key in _config['module_levels']:
            return _config['module_levels'][self._module_key]
        return _config['default_level']

    def is_enabled_for(self, level: LogLevel) -> bool:
        """Check if message at given level would be logged."""
        return level >= self.level

    def _log(self, level: LogLevel, level_name: str, msg: str, *args) -> None:
        if not self.is_enabled_for(level):
            return

        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"

        print(_format_message(self.module, level_name, msg))

    def trace(self, msg: str, *args) -> None:
        """Log at TRACE level (very verbose)."""
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

    def exception(self, msg: str, *args, exc_info: bool = True) -> None:
        """
        Log an exception with traceback.

        Args:
            msg: Message describing what failed
            exc_info: If True, include current exception traceback
        """
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)

        if exc_info:
            tb = traceback.format_exc()
            if tb and tb.strip() != 'NoneType: None':
                for line in tb.strip().split('\n'):
                    self._log(LogLevel.ERROR, 'TRACE', line)


@lru_cache(maxsize=64)
def get_logger(module: str) -> TapperLogger:
    """
    Get a logger for the specified module.

    Loggers are cached, so calling get_logger('foo') multiple times
    returns the same logger instance.

    Args:
        module: Module name (e.g., 'physics', 'animation', 'session')

    Returns:
        TapperLogger instance for the module
    """
    return TapperLogger(module)


def disable_logging() -> None:
    """Disable all console logging."""
    _config['default_level'] = LogLevel.OFF
    _config['module_levels'].clear()
