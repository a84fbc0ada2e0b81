"""
Cursor over a received datagram.

Both response parsers walk the buffer with a ByteReader instead of slicing
by hand. Reading past the end raises BufferUnderrun, which the codecs turn
into InvalidResponseError.
"""

import struct


class BufferUnderrun(ValueError):
    """Raised when a read needs more bytes than the buffer has left."""

    def __init__(self, wanted: int, available: int):
        super().__init__(f"need {wanted} bytes, {available} left")
        self.wanted = wanted
        self.available = available


class ByteReader:
    """Sequential big-endian reader over a bytes object."""

    def __init__(self, data: bytes, offset: int = 0):
        self._data = bytes(data)
        self._offset = offset

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return max(len(self._data) - self._offset, 0)

    def _require(self, count: int) -> None:
        if count < 0 or count > self.remaining:
            raise BufferUnderrun(count, self.remaining)

    def skip(self, count: int) -> None:
        self._require(count)
        self._offset += count

    def take(self, count: int) -> bytes:
        self._require(count)
        chunk = self._data[self._offset:self._offset + count]
        self._offset += count
        return chunk

    def read_u8(self) -> int:
        return self.take(1)[0]

    def read_u16_be(self) -> int:
        return struct.unpack("!H", self.take(2))[0]

    def peek_u16_be(self, offset: int) -> int:
        """Read a u16 at an absolute offset without moving the cursor."""
        if offset < 0 or offset + 2 > len(self._data):
            raise BufferUnderrun(2, max(len(self._data) - offset, 0))
        return struct.unpack_from("!H", self._data, offset)[0]
