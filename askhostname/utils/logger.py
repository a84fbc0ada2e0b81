"""
Logging system with colored output for hostname queries.

This module provides a Logger class that supports colored console output
using colorama, different log levels with distinct colors, and progress
indicators for range scans. Diagnostics are written to stderr so that
stdout only ever carries query results.
"""

import sys
import threading
from datetime import datetime
from enum import Enum
from typing import Optional, TextIO
from colorama import Fore, Style, init

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class LogLevel(Enum):
    """Enumeration for different log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class Logger:
    """
    Logger class with colored console output and progress indicators.

    Safe to call from worker threads: each message is printed under a lock.
    """

    # Color mapping for different log levels
    LEVEL_COLORS = {
        LogLevel.DEBUG: Fore.CYAN,
        LogLevel.INFO: Fore.GREEN,
        LogLevel.WARNING: Fore.YELLOW,
        LogLevel.ERROR: Fore.RED,
    }

    LEVEL_ORDER = {
        LogLevel.DEBUG: 0,
        LogLevel.INFO: 1,
        LogLevel.WARNING: 2,
        LogLevel.ERROR: 3,
    }

    def __init__(
        self,
        name: str = "askhostname",
        min_level: LogLevel = LogLevel.WARNING,
        stream: Optional[TextIO] = None,
    ):
        """
        Initialize the Logger.

        Args:
            name: Name of the logger (default: "askhostname")
            min_level: Minimum log level to display (default: WARNING)
            stream: Output stream (default: sys.stderr at call time)
        """
        self.name = name
        self.min_level = min_level
        self.stream = stream
        self._lock = threading.Lock()
        self._progress_active = False

    def _should_log(self, level: LogLevel) -> bool:
        return self.LEVEL_ORDER[level] >= self.LEVEL_ORDER[self.min_level]

    def _format_timestamp(self) -> str:
        return datetime.now().strftime("%H:%M:%S")

    def _emit(self, text: str) -> None:
        with self._lock:
            print(text, file=self.stream or sys.stderr, flush=True)

    def _log(self, level: LogLevel, message: str, **kwargs) -> None:
        """
        Internal logging method that handles formatting and output.

        Args:
            level: Log level
            message: Message to log
            **kwargs: Additional context, rendered as key=value pairs
        """
        if not self._should_log(level):
            return

        timestamp = self._format_timestamp()
        color = self.LEVEL_COLORS[level]

        formatted_message = (
            f"{Style.DIM}[{timestamp}]{Style.RESET_ALL} "
            f"{color}{level.value:<7}{Style.RESET_ALL} "
            f"{message}"
        )

        if kwargs:
            details = " | ".join([f"{k}={v}" for k, v in kwargs.items()])
            formatted_message += f" {Style.DIM}({details}){Style.RESET_ALL}"

        self._emit(formatted_message)

    def debug(self, message: str, **kwargs) -> None:
        """Log a debug message."""
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log an info message."""
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log a warning message."""
        self._log(LogLevel.WARNING, message, **kwargs)

    def error(
        self, message: str, exception: Optional[Exception] = None, **kwargs
    ) -> None:
        """
        Log an error message.

        Args:
            message: Error message
            exception: Optional exception object for additional context
            **kwargs: Additional context information
        """
        if exception:
            kwargs["exception"] = f"{type(exception).__name__}: {str(exception)}"
        self._log(LogLevel.ERROR, message, **kwargs)

    def success(self, message: str, **kwargs) -> None:
        """
        Log a success message (formatted as INFO with special styling).

        Args:
            message: Success message
            **kwargs: Additional context information
        """
        if not self._should_log(LogLevel.INFO):
            return

        timestamp = self._format_timestamp()
        formatted_message = (
            f"{Style.DIM}[{timestamp}]{Style.RESET_ALL} "
            f"{Fore.GREEN}SUCCESS {Style.RESET_ALL} "
            f"{Style.BRIGHT}{message}{Style.RESET_ALL}"
        )

        if kwargs:
            details = " | ".join([f"{k}={v}" for k, v in kwargs.items()])
            formatted_message += f" {Style.DIM}({details}){Style.RESET_ALL}"

        self._emit(formatted_message)

    def section(self, title: str) -> None:
        """
        Log a section header for organizing output.

        Args:
            title: Section title
        """
        if not self._should_log(LogLevel.INFO):
            return

        separator = "=" * 60
        self._emit(
            f"\n{Fore.BLUE}{Style.BRIGHT}{separator}\n"
            f"  {title.upper()}\n"
            f"{separator}{Style.RESET_ALL}\n"
        )

    def progress_start(self, message: str) -> None:
        """
        Start a progress indicator for long-running operations.

        Args:
            message: Progress message to display
        """
        if not self._should_log(LogLevel.INFO):
            return

        self._emit(
            f"{Style.DIM}[{self._format_timestamp()}]{Style.RESET_ALL} "
            f"{Fore.BLUE}PROGRESS{Style.RESET_ALL} "
            f"{message}..."
        )
        self._progress_active = True

    def progress_update(self, message: str) -> None:
        """
        Update the current progress indicator.

        Args:
            message: Updated progress message
        """
        if not self._progress_active or not self._should_log(LogLevel.INFO):
            return

        self._emit(
            f"{Style.DIM}[{self._format_timestamp()}]{Style.RESET_ALL} "
            f"{Fore.BLUE}PROGRESS{Style.RESET_ALL} "
            f"{message}..."
        )

    def progress_end(self, final_message: Optional[str] = None) -> None:
        """
        End the current progress indicator.

        Args:
            final_message: Optional final message to display
        """
        if not self._progress_active:
            return

        self._progress_active = False

        if final_message and self._should_log(LogLevel.INFO):
            self.success(final_message)

    def scan_info(self, target: str, host_count: int, workers: int, timeout_ms: int) -> None:
        """
        Display range scan parameters in a formatted way.

        Args:
            target: CIDR block being scanned
            host_count: Number of host addresses in the block
            workers: Size of the worker pool
            timeout_ms: Per-query timeout in milliseconds
        """
        if not self._should_log(LogLevel.INFO):
            return

        self._emit(
            f"\n{Fore.CYAN}{Style.BRIGHT}RANGE SCAN{Style.RESET_ALL}\n"
            f"  Range:   {Style.BRIGHT}{target}{Style.RESET_ALL}\n"
            f"  Hosts:   {Style.BRIGHT}{host_count}{Style.RESET_ALL}\n"
            f"  Workers: {Style.BRIGHT}{workers}{Style.RESET_ALL}\n"
            f"  Timeout: {Style.BRIGHT}{timeout_ms} ms{Style.RESET_ALL}\n"
        )


# Global logger instance
logger = Logger()


def set_log_level(level: LogLevel) -> None:
    """
    Set the global log level.

    Args:
        level: Minimum log level to display
    """
    logger.min_level = level


def get_logger(name: str = "askhostname") -> Logger:
    """
    Get a logger instance with the specified name.

    The returned logger follows the global logger's current level.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return Logger(name, min_level=logger.min_level, stream=logger.stream)
