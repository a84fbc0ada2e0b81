"""
Scanner modules for askhostname.

This package contains the UDP transport, the base scanner interface and one
scanner per name service (NBNS, mDNS).
"""

from .base_scanner import BaseScanner
from .udp_transport import UDPTransport, RECV_BUFF_SIZE
from .nbns_scanner import NBNSScanner
from .mdns_scanner import MDNSScanner

__all__ = [
    'BaseScanner',
    'UDPTransport',
    'RECV_BUFF_SIZE',
    'NBNSScanner',
    'MDNSScanner'
]
