"""
Configuration loader for askhostname.
Handles loading and validation of the YAML query configuration with fallback to defaults.
"""

import yaml
from typing import Any, Optional
from dataclasses import dataclass, asdict
from pathlib import Path

from ..utils.error_handler import SocketTimeoutError
from ..utils.logger import Logger, get_logger

DEFAULT_CONFIG_FILE = "query_config.yml"
DEFAULT_TIMEOUT_MS = 500
TOO_LOW_TIMEOUT_WARNING_MS = 100
TOO_BIG_TIMEOUT_WARNING_MS = 3500
MAX_TIMEOUT_MS = 3600 * 1000


@dataclass
class QueryConfig:
    """Configuration shared by the transport and the orchestrator."""
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    workers: int = 32
    recv_buffer_size: int = 256
    nbns_port: int = 137
    mdns_port: int = 5353
    output_mode: str = "immediate"  # immediate, deferred


def validate_timeout_ms(timeout_ms: Any, logger: Optional[Logger] = None) -> int:
    """
    Validate a timeout in milliseconds.

    Args:
        timeout_ms: Value to validate
        logger: Logger used for out-of-range warnings

    Returns:
        The timeout as an int

    Raises:
        SocketTimeoutError: If the value is not a positive integer or exceeds MAX_TIMEOUT_MS
    """
    try:
        value = int(timeout_ms)
    except (ValueError, TypeError):
        raise SocketTimeoutError("timeout must be an integer number of milliseconds", {"timeout_ms": timeout_ms})

    if value <= 0:
        raise SocketTimeoutError("timeout must be greater than 0 ms", {"timeout_ms": value})
    if value > MAX_TIMEOUT_MS:
        raise SocketTimeoutError(f"timeout must be at most {MAX_TIMEOUT_MS} ms", {"timeout_ms": value})

    if logger:
        if value < TOO_LOW_TIMEOUT_WARNING_MS:
            logger.warning(f"Timeout of {value} ms is very low, slow hosts may be reported as silent")
        elif value > TOO_BIG_TIMEOUT_WARNING_MS:
            logger.warning(f"Timeout of {value} ms is very high, range scans will be slow")
    return value


class ConfigLoader:
    """
    Loads and validates the YAML query configuration.
    Provides fallback to default configuration when the file is missing.
    """

    def __init__(self, config_dir: Optional[str] = None, logger: Optional[Logger] = None):
        """
        Initialize ConfigLoader.

        Args:
            config_dir: Directory containing configuration files.
                       Defaults to the current working directory.
            logger: Logger for validation warnings
        """
        if config_dir is None:
            self.config_dir = Path.cwd()
        else:
            self.config_dir = Path(config_dir)

        self.logger = logger or get_logger(__name__)

    def load_query_config(self, config_file: str = DEFAULT_CONFIG_FILE) -> QueryConfig:
        """
        Load query configuration from a YAML file.

        Args:
            config_file: Name of (or path to) the configuration file

        Returns:
            QueryConfig object with loaded or default configuration
        """
        config_path = self.config_dir / config_file

        if not config_path.exists():
            self.logger.debug(f"Config file not found at {config_path}. Using default configuration.")
            return QueryConfig()

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self.logger.error(f"Error parsing config file {config_path}: {e}")
            self.logger.warning("Using default query configuration.")
            return QueryConfig()
        except OSError as e:
            self.logger.error(f"Cannot read config file {config_path}: {e}")
            self.logger.warning("Using default query configuration.")
            return QueryConfig()

        if not isinstance(config_data, dict) or not isinstance(config_data.get('query'), dict):
            self.logger.warning(f"Invalid config structure in {config_path}. Using default configuration.")
            return QueryConfig()

        query_data = config_data['query']
        defaults = QueryConfig()

        return QueryConfig(
            timeout_ms=self._validate_timeout(query_data.get('timeout_ms', defaults.timeout_ms), defaults.timeout_ms),
            workers=self._validate_positive_int(query_data.get('workers', defaults.workers), 'workers', defaults.workers),
            recv_buffer_size=self._validate_positive_int(
                query_data.get('recv_buffer_size', defaults.recv_buffer_size), 'recv_buffer_size', defaults.recv_buffer_size
            ),
            nbns_port=self._validate_port(query_data.get('nbns_port', defaults.nbns_port), 'nbns_port', defaults.nbns_port),
            mdns_port=self._validate_port(query_data.get('mdns_port', defaults.mdns_port), 'mdns_port', defaults.mdns_port),
            output_mode=self._validate_output_mode(query_data.get('output_mode', defaults.output_mode)),
        )

    def _validate_timeout(self, value: Any, default: int) -> int:
        try:
            return validate_timeout_ms(value, self.logger)
        except SocketTimeoutError as e:
            self.logger.warning(f"Invalid timeout_ms: {e}. Using default: {default}")
            return default

    def _validate_positive_int(self, value: Any, field_name: str, default: int) -> int:
        """
        Validate that a value is a positive integer.

        Args:
            value: Value to validate
            field_name: Name of the field for error messages
            default: Default value to use if validation fails

        Returns:
            Validated integer value or default
        """
        try:
            int_value = int(value)
            if int_value <= 0:
                self.logger.warning(f"Invalid {field_name}: {value}. Must be positive. Using default: {default}")
                return default
            return int_value
        except (ValueError, TypeError):
            self.logger.warning(f"Invalid {field_name}: {value}. Must be an integer. Using default: {default}")
            return default

    def _validate_port(self, value: Any, field_name: str, default: int) -> int:
        port = self._validate_positive_int(value, field_name, default)
        if port > 65535:
            self.logger.warning(f"Invalid {field_name}: {value}. Must be at most 65535. Using default: {default}")
            return default
        return port

    def _validate_output_mode(self, mode: Any) -> str:
        """
        Validate the output mode.

        Args:
            mode: Mode to validate

        Returns:
            Validated mode or default
        """
        valid_modes = ["immediate", "deferred"]
        if mode not in valid_modes:
            self.logger.warning(f"Invalid output_mode: {mode}. Must be one of {valid_modes}. Using default: immediate")
            return "immediate"
        return mode

    def create_default_config(self, config_file: str = DEFAULT_CONFIG_FILE) -> Path:
        """
        Create the default configuration file if it doesn't exist.

        Returns:
            Path of the configuration file
        """
        config_path = self.config_dir / config_file
        if config_path.exists():
            return config_path

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump({'query': asdict(QueryConfig())}, f, default_flow_style=False, indent=2)
        self.logger.info(f"Created default query config at {config_path}")
        return config_path
