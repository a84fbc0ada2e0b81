"""
Main entry point for askhostname.

This module provides the command-line interface: argument parsing, building
the query configuration, running the orchestrator and mapping the outcome to
an exit code.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config.config_loader import ConfigLoader, QueryConfig, validate_timeout_ms
from .core.data_models import HostOutcome, OutputMode
from .core.output_sink import OutputSink
from .core.scanner_orchestrator import ScanOrchestrator
from .utils.error_handler import AskHostnameError, ConfigurationError, ErrorHandler, ScanError
from .utils.json_reporter import JSONReporter
from .utils.logger import LogLevel, get_logger, set_log_level
from .utils.network_utils import parse_scan_target
from .utils.result_formatter import ResultFormatter


class AskHostnameApp:
    """
    Main application class for askhostname.

    Handles configuration, output wiring and the exit code of one run.
    """

    def __init__(self, stdout=None):
        """
        Initialize the application.

        Args:
            stdout: Stream receiving query results (default: sys.stdout)
        """
        self.logger = get_logger(__name__)
        self.error_handler = ErrorHandler(self.logger)
        self.stdout = stdout

    def _load_config(self, args: argparse.Namespace) -> QueryConfig:
        """
        Load the YAML configuration and apply command line overrides.

        Raises:
            ConfigurationError: If --config names a missing file
            SocketTimeoutError: If --timeout is not a positive number
        """
        if args.config:
            config_path = Path(args.config)
            if not config_path.is_file():
                raise ConfigurationError(f"config file not found: {args.config}")
            config = ConfigLoader(config_path.parent, self.logger).load_query_config(config_path.name)
        else:
            config = ConfigLoader(logger=self.logger).load_query_config()

        if args.timeout is not None:
            config.timeout_ms = validate_timeout_ms(args.timeout, self.logger)
        if args.workers is not None:
            config.workers = max(1, args.workers)
        if args.deferred:
            config.output_mode = OutputMode.DEFERRED.value
        return config

    def run(self, args: argparse.Namespace) -> int:
        """
        Run one query.

        Args:
            args: Parsed command line arguments

        Returns:
            int: Exit code (0 for success, 1 for any error)
        """
        try:
            config = self._load_config(args)
            target = parse_scan_target(args.target)
            self.logger.section(f"askhostname {target}")

            formatter = ResultFormatter(verbose=args.verbose)
            sink = OutputSink(OutputMode(config.output_mode), self.stdout)
            orchestrator = ScanOrchestrator(
                config=config,
                logger=self.logger,
                output_sink=sink,
                formatter=formatter,
            )

            if target.is_range:
                sink.append(formatter.header(next(target.addresses(), None)))
                outcomes = orchestrator.query_range(str(target.network))
                if args.json:
                    self._write_json(args.json, args.target, outcomes)
                return 0

            result = orchestrator.query_host(target.address)
            if result.is_empty():
                self.logger.warning(f"No answer from {target.address}")
                return 0
            sink.append(formatter.header(target.address))
            sink.append(formatter(result))
            sink.flush()
            if args.json:
                self._write_json(args.json, args.target, [HostOutcome(address=target.address, result=result)])
            return 0

        except ScanError as e:
            if args.json:
                self._write_json(args.json, args.target, e.outcomes)
            print(f"askhostname: {e}", file=sys.stderr)
            return 1
        except AskHostnameError as e:
            self.error_handler.report_fatal(e)
            print(f"askhostname: {e}", file=sys.stderr)
            return 1

    def _write_json(self, path: str, target: str, outcomes: List[HostOutcome]) -> None:
        report_path = Path(path)
        JSONReporter(str(report_path.parent)).generate_report(target, outcomes, report_path.name)


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="askhostname",
        description="Ask hosts for their NetBIOS and mDNS names",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  askhostname 192.168.1.10                 # Query one host
  askhostname 192.168.1.0/24               # Query every host of a range
  askhostname 192.168.1.0/24 -t 1000 -v    # Longer timeout, all NetBIOS names
  askhostname 10.0.0.0/22 --deferred       # Print everything once the scan ends
        """
    )

    parser.add_argument(
        "target",
        help="IPv4 address or CIDR block (e.g. 192.168.1.0/24)"
    )

    parser.add_argument(
        "--timeout", "-t",
        type=int,
        help="Reply timeout in milliseconds (default: 500)"
    )

    parser.add_argument(
        "--workers", "-w",
        type=int,
        help="Number of hosts queried in parallel during range scans (default: 32)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show every NetBIOS name, the MAC address and the domain name"
    )

    parser.add_argument(
        "--deferred",
        action="store_true",
        help="Buffer range scan output and print it once all hosts are done"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="YAML configuration file (default: ./query_config.yml when present)"
    )

    parser.add_argument(
        "--json",
        type=str,
        metavar="FILE",
        help="Also write the results to a JSON report"
    )

    parser.add_argument(
        "--log-level",
        choices=[level.value.lower() for level in LogLevel],
        default="warning",
        help="Diagnostics printed on stderr (default: warning)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"askhostname {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for askhostname.

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    set_log_level(LogLevel(args.log_level.upper()))

    app = AskHostnameApp()
    return app.run(args)


if __name__ == "__main__":
    sys.exit(main())
