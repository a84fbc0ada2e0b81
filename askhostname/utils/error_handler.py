"""
Error types and centralized error reporting for hostname queries.

This module defines the exception hierarchy raised by the codecs, the UDP
transport and the scan orchestrator, and an ErrorHandler that keeps per-type
statistics and prints user-friendly messages with troubleshooting hints.
"""

from typing import Optional, Dict, Any, List, Sequence
from enum import Enum

from .logger import Logger, get_logger


class ErrorType(Enum):
    """Enumeration for the different kinds of query errors."""
    PARSE_ADDRESS = "parse_address"
    PARSE_ADDRESS_RANGE = "parse_address_range"
    SOCKET_CREATE = "socket_create"
    SOCKET_CONNECT = "socket_connect"
    SOCKET_SEND = "socket_send"
    SOCKET_TIMEOUT = "socket_timeout"
    INVALID_RESPONSE_NBNS = "invalid_response_nbns"
    INVALID_RESPONSE_MDNS = "invalid_response_mdns"
    INVALID_RESPONSES = "invalid_responses"
    IPV6_UNSUPPORTED = "ipv6_unsupported"
    SCAN_ERROR = "scan_error"
    CONFIGURATION = "configuration"


class AskHostnameError(Exception):
    """
    Base exception class for askhostname.

    Attributes:
        message: Human-readable error message
        error_type: Kind of error, used for statistics and hints
        context: Additional context information about the error
    """

    error_type = ErrorType.SCAN_ERROR

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class AddressParseError(AskHostnameError):
    """Raised when a target is not a valid IP address."""
    error_type = ErrorType.PARSE_ADDRESS


class AddressRangeParseError(AskHostnameError):
    """Raised when a target is not a valid CIDR block."""
    error_type = ErrorType.PARSE_ADDRESS_RANGE


class Ipv6UnsupportedError(AskHostnameError):
    """Raised for IPv6 targets, which neither protocol handles."""
    error_type = ErrorType.IPV6_UNSUPPORTED


class SocketError(AskHostnameError):
    """Base class for UDP socket failures."""
    pass


class SocketCreateError(SocketError):
    error_type = ErrorType.SOCKET_CREATE


class SocketConnectError(SocketError):
    error_type = ErrorType.SOCKET_CONNECT


class SocketSendError(SocketError):
    error_type = ErrorType.SOCKET_SEND


class SocketTimeoutError(SocketError):
    """Raised when the configured timeout value is rejected."""
    error_type = ErrorType.SOCKET_TIMEOUT


class InvalidResponseError(AskHostnameError):
    """
    Raised when a reply is malformed or truncated.

    Attributes:
        protocol: "nbns" or "mdns"
    """

    def __init__(self, protocol: str, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.protocol = protocol
        if protocol == "nbns":
            self.error_type = ErrorType.INVALID_RESPONSE_NBNS
        else:
            self.error_type = ErrorType.INVALID_RESPONSE_MDNS


class InvalidResponsesError(AskHostnameError):
    """Raised when both the NBNS and the mDNS sub-query of a host failed."""
    error_type = ErrorType.INVALID_RESPONSES

    def __init__(self, errors: Sequence[AskHostnameError], context: Optional[Dict[str, Any]] = None):
        super().__init__(
            "multiple invalid responses: " + "; ".join(str(e) for e in errors),
            context,
        )
        self.errors = list(errors)


class ScanError(AskHostnameError):
    """
    Summary error for a range scan in which at least one host failed.

    Raised only after every host has been queried and every result emitted.

    Attributes:
        outcomes: Every HostOutcome of the scan, in finish order
        failures: The outcomes that carry an error
    """
    error_type = ErrorType.SCAN_ERROR

    def __init__(self, outcomes: List[Any], failures: List[Any]):
        super().__init__(
            f"scan finished with {len(failures)} failed "
            f"host{'s' if len(failures) != 1 else ''} out of {len(outcomes)}"
        )
        self.outcomes = outcomes
        self.failures = failures


class ConfigurationError(AskHostnameError):
    """Raised for unusable configuration values."""
    error_type = ErrorType.CONFIGURATION


class ErrorHandler:
    """
    Centralized error reporting.

    Counts errors per ErrorType, logs one line per failing host during range
    scans and prints troubleshooting suggestions for fatal errors.
    """

    SUGGESTIONS = {
        ErrorType.PARSE_ADDRESS: [
            "Provide a dotted IPv4 address such as 192.168.1.10",
        ],
        ErrorType.PARSE_ADDRESS_RANGE: [
            "Provide a CIDR block such as 192.168.1.0/24",
        ],
        ErrorType.IPV6_UNSUPPORTED: [
            "NetBIOS and mDNS reverse lookups are only performed over IPv4",
        ],
        ErrorType.SOCKET_CREATE: [
            "Check that a local UDP port can be bound",
            "Large ranges may exhaust file descriptors; lower the worker count",
        ],
        ErrorType.SOCKET_CONNECT: [
            "Check that the target address is routable from this host",
        ],
        ErrorType.SOCKET_SEND: [
            "Check firewall rules for outgoing UDP to ports 137 and 5353",
        ],
        ErrorType.SOCKET_TIMEOUT: [
            "The timeout must be a positive number of milliseconds",
        ],
        ErrorType.CONFIGURATION: [
            "Check the path given to --config",
            "Without --config, query_config.yml in the working directory is used when present",
        ],
    }

    def __init__(self, logger: Optional[Logger] = None):
        """
        Initialize the ErrorHandler.

        Args:
            logger: Logger instance for error reporting
        """
        self.logger = logger or get_logger(__name__)
        self.error_statistics: Dict[ErrorType, int] = {error_type: 0 for error_type in ErrorType}

    def record(self, error: AskHostnameError) -> None:
        """Count an error without logging it."""
        self.error_statistics[error.error_type] += 1

    def report_host_error(self, address: Any, error: Exception) -> None:
        """
        Report a failing host as a single log line.

        Args:
            address: Address of the host that failed
            error: Error raised while querying the host
        """
        if isinstance(error, AskHostnameError):
            self.record(error)
        self.logger.error(f"{address}: {error}")

    def report_fatal(self, error: AskHostnameError) -> None:
        """
        Record an error that stops the program and log troubleshooting hints.

        The error message itself is printed by the caller.

        Args:
            error: The error that ended the run
        """
        self.record(error)
        suggestions = self.SUGGESTIONS.get(error.error_type, [])
        if suggestions:
            self.logger.info("Troubleshooting suggestions:")
        for suggestion in suggestions:
            self.logger.info(f"  • {suggestion}")

    def get_error_summary(self) -> Dict[str, int]:
        """
        Get the non-zero error counts.

        Returns:
            Mapping of error type value to count
        """
        return {
            error_type.value: count
            for error_type, count in self.error_statistics.items()
            if count
        }
