"""
Core components for hostname queries.
"""

from .data_models import (
    QueryKind,
    NameKind,
    OutputMode,
    NetBIOSName,
    MacAddress,
    QueryResult,
    ScanTarget,
    HostOutcome,
    ScanStatistics
)
from .output_sink import OutputSink

__all__ = [
    'QueryKind',
    'NameKind',
    'OutputMode',
    'NetBIOSName',
    'MacAddress',
    'QueryResult',
    'ScanTarget',
    'HostOutcome',
    'ScanStatistics',
    'OutputSink'
]
