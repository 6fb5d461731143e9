"""
Receive Buffer

Append-only byte sequence with a read cursor. The transport appends bytes as
they arrive; the decoder peeks at the front and only reads (consumes) once a
whole frame is available.
"""

from .errors import BufferUnderflow

# Consumed bytes are dropped from the front once the cursor passes this offset
COMPACT_THRESHOLD = 4096


class ReceiveBuffer:
    def __init__(self, data: bytes = b""):
        self._data = bytearray(data)
        self._pos = 0

    def append(self, data: bytes):
        """Append received bytes to the end of the buffer."""
        self._data.extend(data)

    extend = append

    def __len__(self) -> int:
        return len(self._data) - self._pos

    def __bytes__(self) -> bytes:
        return bytes(self._data[self._pos:])

    def __repr__(self) -> str:
        return f"ReceiveBuffer({len(self)} bytes)"

    def peek(self, size: int, offset: int = 0) -> bytes:
        """
        Return ``size`` bytes starting ``offset`` bytes past the cursor,
        without consuming them.

        Raises:
            BufferUnderflow: if fewer than offset + size bytes are buffered
        """
        if offset + size > len(self):
            raise BufferUnderflow(offset + size, len(self))
        start = self._pos + offset
        return bytes(self._data[start:start + size])

    def read(self, size: int) -> bytes:
        """
        Consume ``size`` bytes from the front of the buffer.

        Nothing is consumed if fewer than ``size`` bytes are available.

        Raises:
            BufferUnderflow: if fewer than ``size`` bytes are buffered
        """
        if size > len(self):
            raise BufferUnderflow(size, len(self))
        chunk = bytes(self._data[self._pos:self._pos + size])
        self._pos += size

        if self._pos >= COMPACT_THRESHOLD or self._pos == len(self._data):
            del self._data[:self._pos]
            self._pos = 0
        return chunk
