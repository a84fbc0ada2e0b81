from __future__ import annotations

import io
import struct
import threading
from typing import Callable, Dict, List, Optional, Tuple

import pytest

from askhostname.codec import mdns, nbns
from askhostname.config.config_loader import QueryConfig
from askhostname.core.data_models import OutputMode
from askhostname.core.output_sink import OutputSink
from askhostname.core.scanner_orchestrator import ScanOrchestrator
from askhostname.utils.logger import LogLevel, Logger


def name_record(name: str, service: int = 0x00, flags: int = 0x04) -> bytes:
    return name.ljust(15).encode("ascii")[:15] + bytes([service, flags, 0x00])


def nbns_response(
    records: List[bytes],
    mac: Optional[bytes] = b"\x00\x11\x22\x33\x44\x55",
    name_count: Optional[int] = None,
    data_size: Optional[int] = None,
    request: Optional[bytes] = None,
) -> bytes:
    """NODE STATUS reply: echoed request, TTL, RDLENGTH, count, records, statistics."""
    request = request if request is not None else nbns.build_query()
    body = b"".join(records)
    stats = (mac or b"") + (b"\x00" * 40 if mac else b"")
    count = len(records) if name_count is None else name_count
    size = 1 + len(body) + len(stats) if data_size is None else data_size
    return request + b"\x00\x00\x00\x00" + struct.pack("!HB", size, count) + body + stats


def encode_name(name: str) -> bytes:
    out = b""
    for label in name.split("."):
        out += bytes([len(label)]) + label.encode("ascii")
    return out + b"\x00"


def mdns_response(request: bytes, domain_name: str = "host.local", ancount: int = 1) -> bytes:
    """Unicast reply echoing the question, with one PTR answer."""
    echoed = request[:6] + struct.pack("!H", ancount) + request[8:]
    rdata = encode_name(domain_name)
    answer = b"\xc0\x0c" + struct.pack("!HHIH", mdns.QTYPE_PTR, 0x8001, 120, len(rdata))
    return echoed + answer + rdata


Handler = Callable[[object, int, bytes], Optional[bytes]]


class FakeTransport:
    """Stands in for UDPTransport; ``handler(address, port, request)`` produces the reply."""

    def __init__(self, handler: Optional[Handler] = None):
        self.handler = handler or (lambda address, port, request: None)
        self.calls: List[Tuple[object, int, bytes]] = []
        self._lock = threading.Lock()

    def send_and_receive(self, address, port, request, timeout_ms=None):
        with self._lock:
            self.calls.append((address, port, request))
        return self.handler(address, port, request)

    def addresses(self, port: int) -> List[object]:
        with self._lock:
            return [address for address, p, _ in self.calls if p == port]


def replying(answers: Dict[str, Tuple[Optional[List[bytes]], Optional[str]]]) -> Handler:
    """
    Build a handler from ``{address: (nbns records or None, domain name or None)}``.
    """
    def handler(address, port, request):
        records, domain_name = answers.get(str(address), (None, None))
        if port == nbns.PORT and records is not None:
            return nbns_response(records, request=request)
        if port == mdns.PORT and domain_name is not None:
            return mdns_response(request, domain_name)
        return None
    return handler


@pytest.fixture()
def quiet_logger() -> Logger:
    return Logger("test", min_level=LogLevel.ERROR, stream=io.StringIO())


@pytest.fixture()
def make_orchestrator(quiet_logger):
    def factory(handler: Optional[Handler] = None, mode: OutputMode = OutputMode.IMMEDIATE, **config_kwargs):
        transport = FakeTransport(handler)
        stream = io.StringIO()
        sink = OutputSink(mode, stream)
        config = QueryConfig(output_mode=mode.value, **config_kwargs)
        orchestrator = ScanOrchestrator(
            config=config,
            logger=quiet_logger,
            transport=transport,
            output_sink=sink,
            formatter=lambda result: f"{result.ip_address} {result.hostname or '-'} {result.domain_name or '-'}\n",
        )
        return orchestrator, transport, stream
    return factory
