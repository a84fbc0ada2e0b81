"""
Wire codecs for the NetBIOS NODE STATUS and mDNS reverse PTR exchanges.
"""

from . import mdns, nbns
from .header import HEADER_SIZE, QueryHeader, build_header
from .reader import BufferUnderrun, ByteReader

__all__ = [
    'mdns',
    'nbns',
    'HEADER_SIZE',
    'QueryHeader',
    'build_header',
    'BufferUnderrun',
    'ByteReader'
]
