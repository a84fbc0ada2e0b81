"""
Utility functions and helper classes.
"""

from .logger import Logger, LogLevel, logger, set_log_level, get_logger
from .error_handler import (
    ErrorHandler, ErrorType, AskHostnameError, AddressParseError, AddressRangeParseError,
    Ipv6UnsupportedError, SocketError, SocketCreateError, SocketConnectError, SocketSendError,
    SocketTimeoutError, InvalidResponseError, InvalidResponsesError, ScanError, ConfigurationError
)
from .json_reporter import JSONReporter
from .result_formatter import ResultFormatter
from . import network_utils

__all__ = [
    'Logger',
    'LogLevel',
    'logger',
    'set_log_level',
    'get_logger',
    'ErrorHandler',
    'ErrorType',
    'AskHostnameError',
    'AddressParseError',
    'AddressRangeParseError',
    'Ipv6UnsupportedError',
    'SocketError',
    'SocketCreateError',
    'SocketConnectError',
    'SocketSendError',
    'SocketTimeoutError',
    'InvalidResponseError',
    'InvalidResponsesError',
    'ScanError',
    'ConfigurationError',
    'JSONReporter',
    'ResultFormatter',
    'network_utils'
]
