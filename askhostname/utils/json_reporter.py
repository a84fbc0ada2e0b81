"""
JSON Report Generator for askhostname.

Writes query results and per-host failures to a JSON file, with timestamped
file names and collision handling.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.data_models import HostOutcome, MacAddress, NetBIOSName, QueryResult
from .logger import get_logger


class JSONReporter:
    """
    Handles generation of JSON reports from query results.

    This class is responsible for:
    - Converting results and failures to JSON-serializable dictionaries
    - Managing output file naming with timestamp-based collision handling
    """

    def __init__(self, output_directory: str = "."):
        """
        Initialize the JSON reporter.

        Args:
            output_directory: Directory where generated reports are saved
        """
        self.output_directory = Path(output_directory)
        self.logger = get_logger(__name__)

    def result_to_dict(self, result: QueryResult) -> Dict[str, Any]:
        names = []
        mac_address = None
        for answer in result.host_names:
            if isinstance(answer, NetBIOSName):
                names.append({
                    "name": answer.name,
                    "service": answer.service,
                    "service_description": answer.service_description,
                    "kind": answer.kind.value,
                })
            elif isinstance(answer, MacAddress):
                mac_address = str(answer)
        return {
            "ip_address": str(result.ip_address),
            "hostname": result.hostname,
            "netbios_names": names,
            "mac_address": mac_address,
            "domain_name": result.domain_name,
        }

    def build_report(self, target: str, outcomes: List[HostOutcome], timestamp: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Convert outcomes to the report structure.

        Results are sorted by address for stable output.
        """
        results = [
            o.result for o in outcomes
            if o.result is not None and not o.result.is_empty()
        ]
        results.sort(key=lambda r: int(r.ip_address))
        failures = sorted((o for o in outcomes if o.failed), key=lambda o: int(o.address))

        return {
            "target": target,
            "timestamp": (timestamp or datetime.now()).isoformat(),
            "hosts_queried": len(outcomes),
            "results": [self.result_to_dict(r) for r in results],
            "failures": [
                {"ip_address": str(o.address), "error": str(o.error), "error_type": type(o.error).__name__}
                for o in failures
            ],
        }

    def generate_report(self, target: str, outcomes: List[HostOutcome], filename: Optional[str] = None) -> str:
        """
        Write a JSON report.

        Args:
            target: Address or CIDR block that was queried
            outcomes: Outcomes to report
            filename: File name; generated from the current time when omitted

        Returns:
            str: Path to the generated JSON file

        Raises:
            IOError: If file cannot be written
        """
        timestamp = datetime.now()
        self.output_directory.mkdir(parents=True, exist_ok=True)

        if filename:
            filepath = self.output_directory / filename
        else:
            filepath = self._handle_file_collision(
                self.output_directory / f"askhostname_{timestamp.strftime('%Y%m%d_%H%M%S')}.json"
            )

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(self.build_report(target, outcomes, timestamp), f, indent=2, ensure_ascii=False)

        self.logger.info(f"JSON report written: {filepath}")
        return str(filepath)

    def _handle_file_collision(self, filepath: Path) -> Path:
        """
        Handle filename collisions by adding incremental suffix.

        Args:
            filepath: Original file path

        Returns:
            Path: Unique file path
        """
        if not filepath.exists():
            return filepath

        base_name = filepath.stem
        extension = filepath.suffix
        counter = 1

        while True:
            new_filepath = filepath.parent / f"{base_name}_{counter:03d}{extension}"
            if not new_filepath.exists():
                return new_filepath

            counter += 1
            if counter > 999:
                raise IOError(f"Too many file collisions for {filepath}")
