"""
Shared text buffer for query results.

Only the thread consuming finished units writes to the sink; the lock keeps
every append atomic and is never held across a network call.
"""

import sys
import threading
from typing import List, Optional, TextIO

from .data_models import OutputMode


class OutputSink:
    """
    Collects formatted results and hands them to a stream.

    In immediate mode every append is written through at once. In deferred
    mode appends accumulate and ``flush`` writes them in a single call.
    Either way text appears in append order, which is the order hosts
    finished in, not address order.
    """

    def __init__(self, mode: OutputMode = OutputMode.IMMEDIATE, stream: Optional[TextIO] = None):
        self.mode = mode
        self.stream = stream
        self._lock = threading.Lock()
        self._buffer: List[str] = []
        self._written: List[str] = []

    def _write(self, text: str) -> None:
        stream = self.stream or sys.stdout
        stream.write(text)
        stream.flush()

    def append(self, text: str) -> None:
        if not text:
            return
        with self._lock:
            if self.mode is OutputMode.IMMEDIATE:
                self._write(text)
                self._written.append(text)
            else:
                self._buffer.append(text)

    def flush(self) -> None:
        with self._lock:
            if not self._buffer:
                return
            text = "".join(self._buffer)
            self._buffer.clear()
            self._write(text)
            self._written.append(text)

    @property
    def pending(self) -> int:
        """Number of appends waiting for ``flush``."""
        with self._lock:
            return len(self._buffer)

    def getvalue(self) -> str:
        """Everything written to the stream so far."""
        with self._lock:
            return "".join(self._written)
