"""
askhostname

Resolves a host's NetBIOS names and mDNS name by sending a NetBIOS NODE
STATUS query and an mDNS reverse PTR query over UDP, for one IPv4 address or
for every host of a CIDR block.
"""

__version__ = "1.0.0"

from .core.scanner_orchestrator import ScanOrchestrator
from .config.config_loader import QueryConfig

__all__ = ['ScanOrchestrator', 'QueryConfig', '__version__']
