"""
Network utility functions for parsing query targets.

This module turns command line strings into addresses, CIDR blocks and
ScanTargets, raising the askhostname error types on bad input.
"""

import ipaddress
from typing import Union

from ..core.data_models import IPAddress, ScanTarget
from .error_handler import AddressParseError, AddressRangeParseError, Ipv6UnsupportedError


def parse_address(address: str) -> IPAddress:
    """
    Parse a single IP address.

    Args:
        address: Address string, IPv4 or IPv6

    Returns:
        The parsed address

    Raises:
        AddressParseError: If the string is not an IP address
    """
    try:
        return ipaddress.ip_address(address.strip())
    except (ValueError, AttributeError) as e:
        raise AddressParseError(f"invalid IP address: {address!r}") from e


def parse_network(network: str) -> Union[ipaddress.IPv4Network, ipaddress.IPv6Network]:
    """
    Parse a CIDR block. Host bits are allowed (192.168.1.7/24 is 192.168.1.0/24).

    Raises:
        AddressRangeParseError: If the string is not a CIDR block
    """
    try:
        return ipaddress.ip_network(network.strip(), strict=False)
    except (ValueError, AttributeError) as e:
        raise AddressRangeParseError(f"invalid address range: {network!r}") from e


def require_ipv4(address) -> None:
    """
    Raises:
        Ipv6UnsupportedError: If the address or network is IPv6
    """
    if address.version != 4:
        raise Ipv6UnsupportedError(f"IPv6 is not supported: {address}")


def parse_scan_target(target: str) -> ScanTarget:
    """
    Parse a target that is either one address or a CIDR block.

    A target containing "/" is treated as a range.

    Raises:
        AddressParseError, AddressRangeParseError, Ipv6UnsupportedError
    """
    if "/" in target:
        network = parse_network(target)
        require_ipv4(network)
        return ScanTarget(network=network)

    address = parse_address(target)
    require_ipv4(address)
    return ScanTarget(address=address)


def get_host_count(network: Union[ipaddress.IPv4Network, ipaddress.IPv6Network]) -> int:
    """
    Number of addresses ``network.hosts()`` yields.

    Args:
        network: IPv4 network

    Returns:
        Host count, network and broadcast addresses excluded for prefixes up to /30
    """
    if network.prefixlen >= network.max_prefixlen - 1:
        return network.num_addresses
    return network.num_addresses - 2
