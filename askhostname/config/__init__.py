"""
Configuration module for askhostname.
Provides configuration loading and validation for the query transport and orchestrator.
"""

from .config_loader import ConfigLoader, QueryConfig, validate_timeout_ms

__all__ = ['ConfigLoader', 'QueryConfig', 'validate_timeout_ms']
