"""
Core data models and enums for askhostname.

This module defines the data structures used throughout a query, from the
decoded NetBIOS answers up to the per-host aggregate and range outcomes.
"""

import ipaddress
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class QueryKind(Enum):
    """The two name services a host is asked about."""
    NBNS = "nbns"
    MDNS = "mdns"


class NameKind(Enum):
    """Kind of a NetBIOS name, from the group and permanent flag bits."""
    UNIQUE = "unique"
    GROUP = "group"
    PERMANENT = "permanent"
    PERMANENT_GROUP = "permanent_group"


class OutputMode(Enum):
    """How the output sink hands results to its stream."""
    IMMEDIATE = "immediate"
    DEFERRED = "deferred"


# NetBIOS suffix types commonly seen
SUFFIX_MAP = {
    0x00: "Workstation/Service",
    0x03: "Messenger Service",
    0x06: "RAS Server Service",
    0x1B: "Domain Master Browser",
    0x1C: "Domain Controllers",
    0x1D: "Master Browser",
    0x1E: "Browser Service Elections",
    0x1F: "NetDDE Service",
    0x20: "File Server Service",
    0x21: "RAS Client Service",
}

_KIND_LABELS = {
    NameKind.UNIQUE: "",
    NameKind.GROUP: " (Group)",
    NameKind.PERMANENT: " (Permanent name)",
    NameKind.PERMANENT_GROUP: " (Permanent group)",
}


@dataclass(frozen=True)
class NetBIOSName:
    """
    One name record from a NODE STATUS response.

    Attributes:
        name: Up to 15 printable characters, padding removed
        service: NetBIOS suffix byte
        kind: Unique, group, permanent or permanent group
    """
    name: str
    service: int
    kind: NameKind = NameKind.UNIQUE

    @property
    def service_description(self) -> Optional[str]:
        return SUFFIX_MAP.get(self.service)

    def describe(self) -> str:
        return f"{self.name}{_KIND_LABELS[self.kind]} Service: {self.service:x}"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class MacAddress:
    """Adapter MAC address reported after the name records."""
    raw: bytes

    def __post_init__(self):
        if len(self.raw) != 6:
            raise ValueError(f"MAC address needs 6 bytes, got {len(self.raw)}")

    def describe(self) -> str:
        return f"MAC address: {self}"

    def __str__(self) -> str:
        return ":".join(f"{b:02x}" for b in self.raw)


NBNSAnswer = Union[NetBIOSName, MacAddress]


@dataclass
class QueryResult:
    """
    Everything learned about one host.

    Attributes:
        ip_address: Address that was queried
        host_names: NBNS answers in response order, MAC address last
        domain_name: Name returned by the mDNS reverse lookup
    """
    ip_address: IPAddress
    host_names: List[NBNSAnswer] = field(default_factory=list)
    domain_name: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.host_names and not self.domain_name

    @property
    def hostname(self) -> Optional[str]:
        """First NetBIOS name, which is the machine name on Windows hosts."""
        for answer in self.host_names:
            if isinstance(answer, NetBIOSName):
                return answer.name
        return None

    @property
    def mac_address(self) -> Optional[MacAddress]:
        for answer in self.host_names:
            if isinstance(answer, MacAddress):
                return answer
        return None


@dataclass(frozen=True)
class ScanTarget:
    """
    A single address or a CIDR block to query.

    Attributes:
        address: Set for a single host
        network: Set for a range
    """
    address: Optional[IPAddress] = None
    network: Optional[Union[ipaddress.IPv4Network, ipaddress.IPv6Network]] = None

    @property
    def is_range(self) -> bool:
        return self.network is not None

    def addresses(self) -> Iterator[IPAddress]:
        """Host addresses of the target, network and broadcast excluded."""
        if self.network is not None:
            return self.network.hosts()
        return iter([self.address])

    def __str__(self) -> str:
        return str(self.network if self.network is not None else self.address)


@dataclass
class HostOutcome:
    """
    Result of one unit of work in a range scan.

    Exactly one of result and error is set, except when a host failed after
    one protocol already answered: then error is set and result holds the
    partial answer.
    """
    address: IPAddress
    result: Optional[QueryResult] = None
    error: Optional[Exception] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class ScanStatistics:
    """
    Statistics about a finished range scan.

    Attributes:
        total_addresses_scanned: Number of host addresses queried
        hosts_answered: Hosts with a non-empty result
        hosts_failed: Hosts whose query raised an error
        scan_duration: Wall time of the scan in seconds
    """
    total_addresses_scanned: int = 0
    hosts_answered: int = 0
    hosts_failed: int = 0
    scan_duration: float = 0.0
