"""
Scanner Orchestrator for askhostname.

This module provides the ScanOrchestrator class that runs the NBNS and mDNS
queries for one host, or fans them out over a CIDR range on a fixed-size
worker pool, merging results and collecting errors.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Optional

from .data_models import HostOutcome, IPAddress, OutputMode, QueryResult, ScanStatistics, ScanTarget
from .output_sink import OutputSink
from ..config.config_loader import QueryConfig, validate_timeout_ms
from ..scanners.mdns_scanner import MDNSScanner
from ..scanners.nbns_scanner import NBNSScanner
from ..scanners.udp_transport import UDPTransport
from ..utils.error_handler import AskHostnameError, ErrorHandler, InvalidResponsesError, ScanError
from ..utils.logger import Logger, get_logger
from ..utils.network_utils import get_host_count, parse_address, parse_network, parse_scan_target, require_ipv4

PROGRESS_EVERY = 64


class ScanOrchestrator:
    """
    Runs hostname queries for a single host or a whole range.

    A single host is queried synchronously on the caller's thread. A range
    is expanded to its host addresses and every host becomes one unit of
    work on a ThreadPoolExecutor; the calling thread consumes finished units
    and is the only writer of the output sink and the error list.
    """

    def __init__(
        self,
        config: Optional[QueryConfig] = None,
        logger: Optional[Logger] = None,
        transport: Optional[UDPTransport] = None,
        output_sink: Optional[OutputSink] = None,
        formatter: Optional[Callable[[QueryResult], str]] = None,
    ):
        """
        Initialize the scan orchestrator.

        Args:
            config: Query configuration (defaults are used when omitted)
            logger: Logger for diagnostics
            transport: Transport shared by both scanners (built from config when omitted)
            output_sink: Destination of formatted results in range mode
            formatter: Turns a QueryResult into sink text

        Raises:
            SocketTimeoutError: If the configured timeout is not positive
        """
        self.config = config or QueryConfig()
        self.logger = logger or get_logger(__name__)
        self.error_handler = ErrorHandler(self.logger)

        self.config.timeout_ms = validate_timeout_ms(self.config.timeout_ms)

        self.transport = transport or UDPTransport(
            self.config.timeout_ms, self.config.recv_buffer_size, self.logger
        )
        self.nbns_scanner = NBNSScanner(self.transport, self.logger, port=self.config.nbns_port)
        self.mdns_scanner = MDNSScanner(self.transport, self.logger, port=self.config.mdns_port)

        self.output_sink = output_sink or OutputSink(OutputMode(self.config.output_mode))
        self.formatter = formatter or (lambda result: "")

        self._errors_lock = threading.Lock()
        self.errors: List[HostOutcome] = []
        self.statistics = ScanStatistics()

    def scan(self, target: ScanTarget):
        """
        Query a parsed target.

        Returns:
            QueryResult for a single address, list of HostOutcome for a range
        """
        if target.is_range:
            return self.query_range(str(target.network))
        require_ipv4(target.address)
        return self.query_host(target.address)

    def query_single(self, address: str) -> QueryResult:
        """
        Query one host on the calling thread.

        Args:
            address: IPv4 address string

        Returns:
            QueryResult, possibly empty when the host answered neither query

        Raises:
            AddressParseError, Ipv6UnsupportedError, SocketError,
            InvalidResponseError, InvalidResponsesError
        """
        ip = parse_address(address)
        require_ipv4(ip)
        return self.query_host(ip)

    def query_host(self, ip: IPAddress) -> QueryResult:
        """
        Run both sub-queries for one host and merge their answers.

        A failing sub-query does not stop the other one. With one failure that
        error is raised, with two they are combined into InvalidResponsesError.
        Whatever was learned is attached to the raised error as
        ``partial_result``.
        """
        result = QueryResult(ip_address=ip)
        errors: List[AskHostnameError] = []

        if ip.version == 4:
            try:
                answers = self.nbns_scanner.query(ip)
                if answers:
                    result.host_names.extend(answers)
            except AskHostnameError as e:
                errors.append(e)

        try:
            domain_name = self.mdns_scanner.query(ip)
            if domain_name:
                result.domain_name = domain_name
        except AskHostnameError as e:
            errors.append(e)

        if not errors:
            return result

        error = errors[0] if len(errors) == 1 else InvalidResponsesError(errors, {"address": ip})
        error.partial_result = result
        raise error

    def _run_unit(self, ip: IPAddress) -> HostOutcome:
        try:
            return HostOutcome(address=ip, result=self.query_host(ip))
        except AskHostnameError as e:
            return HostOutcome(address=ip, result=getattr(e, "partial_result", None), error=e)

    def _record_error(self, outcome: HostOutcome) -> None:
        with self._errors_lock:
            self.errors.append(outcome)

    def query_range(self, cidr: str) -> List[HostOutcome]:
        """
        Query every host address of a CIDR block concurrently.

        Every host is queried to completion; a failing host never stops the
        others. Results are written to the output sink as hosts finish
        (immediate mode) or once at the end (deferred mode).

        Args:
            cidr: IPv4 CIDR block, e.g. "192.168.1.0/24"

        Returns:
            One HostOutcome per host address, in finish order

        Raises:
            AddressRangeParseError, Ipv6UnsupportedError
            ScanError: After all output was emitted, if any host failed
        """
        network = parse_network(cidr)
        require_ipv4(network)

        host_count = get_host_count(network)
        self.logger.scan_info(str(network), host_count, self.config.workers, self.config.timeout_ms)
        self.logger.progress_start(f"Querying {host_count} hosts")

        started = time.monotonic()
        self.errors = []
        outcomes: List[HostOutcome] = []

        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            future_to_target = {
                executor.submit(self._run_unit, ip): ip
                for ip in network.hosts()
            }

            for future in as_completed(future_to_target):
                try:
                    outcome = future.result()
                except Exception as e:
                    outcome = HostOutcome(address=future_to_target[future], error=e)
                outcomes.append(outcome)

                if outcome.result is not None and not outcome.result.is_empty():
                    self.output_sink.append(self.formatter(outcome.result))
                if outcome.failed:
                    self._record_error(outcome)
                    self.error_handler.report_host_error(outcome.address, outcome.error)

                if len(outcomes) % PROGRESS_EVERY == 0:
                    self.logger.progress_update(f"{len(outcomes)}/{host_count} hosts done")

        self.output_sink.flush()

        self.statistics = ScanStatistics(
            total_addresses_scanned=len(outcomes),
            hosts_answered=sum(1 for o in outcomes if o.result is not None and not o.result.is_empty()),
            hosts_failed=len(self.errors),
            scan_duration=time.monotonic() - started,
        )
        self.logger.progress_end(
            f"Queried {self.statistics.total_addresses_scanned} hosts in "
            f"{self.statistics.scan_duration:.2f}s, {self.statistics.hosts_answered} answered"
        )

        if self.errors:
            raise ScanError(outcomes, list(self.errors))
        return outcomes

    def run(self, target: str):
        """Parse ``target`` and query it; see ``scan``."""
        return self.scan(parse_scan_target(target))
