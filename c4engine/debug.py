"""
debug.py - Debug and logging functionality for the c4engine package

This module provides a single DebugManager instance (``debug``) that every
part of the engine logs through. Messages carry an optional component tag
(``engine``, ``ai``, ``env``, ``cli``) so that noisy parts can be filtered
out while diagnosing a specific one.
"""

import logging
import os
import sys
import time
from contextlib import contextmanager
from enum import Enum
from typing import Dict, Iterator, List, Optional, Set


class DebugLevel(Enum):
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


# Mapping to standard logging levels
LEVEL_MAP = {
    DebugLevel.NONE: logging.CRITICAL + 1,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: logging.DEBUG,  # logging has no TRACE level
}

ENV_LEVEL = "C4ENGINE_DEBUG_LEVEL"
ENV_LOG_FILE = "C4ENGINE_LOG_FILE"

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugManager:
    """Routes engine log messages to the ``c4engine`` logger."""

    def __init__(self, logger_name: str = "c4engine"):
        self._level = DebugLevel.WARNING
        self._enabled = True
        self._log_file: Optional[str] = None
        self._enabled_components: Set[str] = set()  # empty means all
        self._logger = self._setup_logger(logger_name)
        self._timers: Dict[str, float] = {}

    def _setup_logger(self, name: str) -> logging.Logger:
        logger = logging.getLogger(name)
        logger.setLevel(LEVEL_MAP[self._level])
        logger.propagate = False

        if not any(getattr(h, "_c4engine_console", False) for h in logger.handlers):
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
            console_handler._c4engine_console = True
            logger.addHandler(console_handler)

        return logger

    @property
    def level(self) -> DebugLevel:
        return self._level

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def configure(self, level: DebugLevel = None,
                  enabled: bool = None,
                  log_file: str = None,
                  components: List[str] = None):
        """
        Configure the debug manager settings.

        Args:
            level: Debug level to set
            enabled: Whether logging is enabled at all
            log_file: Path to a log file ("" removes file logging)
            components: Components to log for (empty list for all)
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(LEVEL_MAP[level])

        if enabled is not None:
            self._enabled = enabled

        if log_file is not None:
            for handler in self._logger.handlers[:]:
                if isinstance(handler, logging.FileHandler):
                    self._logger.removeHandler(handler)
                    handler.close()

            self._log_file = log_file or None
            if self._log_file:
                file_handler = logging.FileHandler(self._log_file)
                file_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
                self._logger.addHandler(file_handler)

        if components is not None:
            self._enabled_components = set(components)

    def configure_from_env(self, environ=None) -> None:
        """Apply C4ENGINE_DEBUG_LEVEL / C4ENGINE_LOG_FILE if they are set."""
        environ = os.environ if environ is None else environ

        level_str = environ.get(ENV_LEVEL)
        if level_str:
            self.set_from_string(level_str)

        log_file = environ.get(ENV_LOG_FILE)
        if log_file:
            self.configure(log_file=log_file)

    def _should_log(self, level: DebugLevel, component: str = None) -> bool:
        if not self._enabled or self._level == DebugLevel.NONE:
            return False

        if level.value > self._level.value:
            return False

        if component and self._enabled_components and component not in self._enabled_components:
            return False

        return True

    def log(self, level: DebugLevel, message: str, component: str = None):
        """
        Log a message at the specified level.

        Args:
            level: Debug level for the message
            message: The message to log
            component: Optional component name for filtering
        """
        if not self._should_log(level, component):
            return

        if component:
            message = f"[{component}] {message}"

        if level == DebugLevel.ERROR:
            self._logger.error(message)
        elif level == DebugLevel.WARNING:
            self._logger.warning(message)
        elif level == DebugLevel.INFO:
            self._logger.info(message)
        elif level == DebugLevel.DEBUG:
            self._logger.debug(message)
        elif level == DebugLevel.TRACE:
            self._logger.debug(f"TRACE: {message}")

    def error(self, message: str, component: str = None):
        self.log(DebugLevel.ERROR, message, component)

    def warning(self, message: str, component: str = None):
        self.log(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: str = None):
        self.log(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: str = None):
        self.log(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: str = None):
        self.log(DebugLevel.TRACE, message, component)

    # Performance tracking
    def start_timer(self, marker_name: str):
        self._timers[marker_name] = time.perf_counter()

    def end_timer(self, marker_name: str, component: str = None) -> Optional[float]:
        """
        Stop a named timer and log the elapsed time.

        Returns:
            Elapsed seconds, or None if the timer was never started
        """
        started = self._timers.pop(marker_name, None)
        if started is None:
            self.warning(f"Timer '{marker_name}' not started", "debug")
            return None

        elapsed = time.perf_counter() - started
        self.debug(f"Performance [{marker_name}]: {elapsed:.6f} seconds", component)
        return elapsed

    @contextmanager
    def timed(self, marker_name: str, component: str = None) -> Iterator[None]:
        """Time the enclosed block under ``marker_name``."""
        self.start_timer(marker_name)
        try:
            yield
        finally:
            self.end_timer(marker_name, component)

    def set_from_string(self, level_str: str) -> bool:
        """Set the level from a name such as "debug"; returns False if unknown."""
        try:
            level = DebugLevel[level_str.strip().upper()]
        except KeyError:
            self.warning(f"Unknown debug level: {level_str}")
            return False

        self.configure(level=level)
        self.info(f"Debug level set to {level.name}")
        return True


# Shared instance
debug = DebugManager()
