# sensornode/buffer.py
"""Byte access for uplink payloads.

``ByteReader`` offers fixed-width reads at explicit offsets. Reads that run
past the end of the payload (or start before it) never raise: the missing
bytes read as zero and ``overrun_reads`` is incremented. The decode tables
only check the payload length at a few fixed points and rely on this.

``Cursor`` owns the running offset of one decode call and advances by the
width of every field it reads.
"""

from __future__ import annotations

import logging
from typing import Literal, Sequence, Union

from .float32 import decode_float32

_LOGGER = logging.getLogger(__name__)

ByteOrder = Literal["big", "little"]
Payload = Union[bytes, bytearray, memoryview, Sequence[int]]


def _to_bytes(payload: Payload | None) -> bytes:
    """Normalise payload inputs to a byte string."""
    if payload is None:
        return b""
    if isinstance(payload, bytes):
        return payload
    return bytes(payload)


class ByteReader:
    """Read-only view over a raw uplink payload."""

    def __init__(self, payload: Payload | None) -> None:
        self._payload = _to_bytes(payload)
        self.overrun_reads = 0

    def __len__(self) -> int:
        return len(self._payload)

    def __repr__(self) -> str:
        return f"ByteReader({self._payload.hex()!r})"

    @property
    def length(self) -> int:
        return len(self._payload)

    @property
    def payload(self) -> bytes:
        return self._payload

    # ────────────────────────────────────────────────────────────
    # Raw access
    # ────────────────────────────────────────────────────────────

    def _take(self, offset: int, width: int) -> bytes:
        end = offset + width
        if offset >= 0 and end <= len(self._payload):
            return self._payload[offset:end]

        self.overrun_reads += 1
        _LOGGER.debug(
            "read of %d byte(s) at offset %d overruns %d byte payload; zero-filling",
            width, offset, len(self._payload),
        )
        n = len(self._payload)
        return bytes(self._payload[i] if 0 <= i < n else 0 for i in range(offset, end))

    def read_int(self, offset: int, width: int, byteorder: ByteOrder, signed: bool) -> int:
        """Read ``width`` bytes at ``offset`` as an integer."""
        return int.from_bytes(self._take(offset, width), byteorder, signed=signed)

    def slice(self, start: int = 0, end: int | None = None) -> bytes:
        """Return ``payload[start:end]`` with both bounds clamped to ``[0, len]``."""
        n = len(self._payload)
        if end is None:
            end = n
        start = max(0, min(start, n))
        end = max(start, min(end, n))
        return self._payload[start:end]

    # ────────────────────────────────────────────────────────────
    # Typed reads
    # ────────────────────────────────────────────────────────────

    def read_uint8(self, offset: int) -> int:
        return self.read_int(offset, 1, "big", False)

    def read_int8(self, offset: int) -> int:
        return self.read_int(offset, 1, "big", True)

    def read_uint16_be(self, offset: int) -> int:
        return self.read_int(offset, 2, "big", False)

    def read_uint16_le(self, offset: int) -> int:
        return self.read_int(offset, 2, "little", False)

    def read_int16_be(self, offset: int) -> int:
        return self.read_int(offset, 2, "big", True)

    def read_int16_le(self, offset: int) -> int:
        return self.read_int(offset, 2, "little", True)

    def read_uint32_be(self, offset: int) -> int:
        return self.read_int(offset, 4, "big", False)

    def read_uint32_le(self, offset: int) -> int:
        return self.read_int(offset, 4, "little", False)

    def read_int32_be(self, offset: int) -> int:
        return self.read_int(offset, 4, "big", True)

    def read_int32_le(self, offset: int) -> int:
        return self.read_int(offset, 4, "little", True)

    def read_float_be(self, offset: int) -> float:
        return decode_float32(self.read_uint32_be(offset))

    def read_float_le(self, offset: int) -> float:
        return decode_float32(self.read_uint32_le(offset))


class Cursor:
    """Running offset into a ``ByteReader`` for one decode call."""

    def __init__(self, reader: ByteReader, offset: int = 0, byteorder: ByteOrder = "big") -> None:
        self.reader = reader
        self.offset = offset
        self.byteorder: ByteOrder = byteorder

    def __repr__(self) -> str:
        return f"Cursor(offset={self.offset}, byteorder={self.byteorder!r}, length={self.reader.length})"

    @property
    def remaining(self) -> int:
        return max(0, self.reader.length - self.offset)

    def seek(self, offset: int) -> "Cursor":
        self.offset = offset
        return self

    def skip(self, count: int) -> "Cursor":
        """Advance past ``count`` bytes without reading them."""
        self.offset += count
        return self

    def _read(self, width: int, signed: bool) -> int:
        value = self.reader.read_int(self.offset, width, self.byteorder, signed)
        self.offset += width
        return value

    def uint8(self) -> int:
        return self._read(1, False)

    def int8(self) -> int:
        return self._read(1, True)

    def uint16(self) -> int:
        return self._read(2, False)

    def int16(self) -> int:
        return self._read(2, True)

    def uint32(self) -> int:
        return self._read(4, False)

    def int32(self) -> int:
        return self._read(4, True)

    def float32(self) -> float:
        return decode_float32(self._read(4, False))
