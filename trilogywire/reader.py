"""Parsing of primitive values out of protocol packet payloads."""

from __future__ import annotations

import struct

from .errors import ExtraDataInPacket, NullValue, ProtocolViolation, TruncatedPacket

_FLOAT = struct.Struct("<f")
_DOUBLE = struct.Struct("<d")


class Reader:
    """Sequential little-endian reader over a packet payload."""

    def __init__(self, buff: bytes | bytearray | memoryview = b"") -> None:
        self.buff = bytes(buff)
        self.pos = 0

    def _take(self, length: int) -> bytes:
        end = self.pos + length
        if length < 0 or end > len(self.buff):
            raise TruncatedPacket()
        chunk = self.buff[self.pos:end]
        self.pos = end
        return chunk

    def _uint(self, width: int) -> int:
        return int.from_bytes(self._take(width), "little")

    def get_uint8(self) -> int:
        return self._uint(1)

    def get_uint16(self) -> int:
        return self._uint(2)

    def get_uint24(self) -> int:
        return self._uint(3)

    def get_uint32(self) -> int:
        return self._uint(4)

    def get_uint64(self) -> int:
        return self._uint(8)

    def get_float(self) -> float:
        return _FLOAT.unpack(self._take(4))[0]

    def get_double(self) -> float:
        return _DOUBLE.unpack(self._take(8))[0]

    def get_lenenc(self) -> int:
        """Read a length-encoded integer; raises NullValue for the NULL marker."""
        start = self.pos
        prefix = self.get_uint8()
        if prefix < 0xFB:
            return prefix
        if prefix == 0xFB:
            raise NullValue()
        widths = {0xFC: 2, 0xFD: 3, 0xFE: 8}
        width = widths.get(prefix)
        if width is None:
            self.pos = start
            raise ProtocolViolation()
        try:
            return self._uint(width)
        except TruncatedPacket:
            self.pos = start
            raise

    def get_buffer(self, length: int) -> bytes:
        return self._take(length)

    def get_lenenc_buffer(self) -> bytes:
        start = self.pos
        length = self.get_lenenc()
        try:
            return self._take(length)
        except TruncatedPacket:
            self.pos = start
            raise

    def get_string(self) -> bytes:
        """Read a NUL-terminated string, returning it without the terminator."""
        end = self.buff.find(b"\x00", self.pos)
        if end < 0:
            raise TruncatedPacket()
        value = self.buff[self.pos:end]
        self.pos = end + 1
        return value

    def get_eof_buffer(self) -> bytes:
        """Return every remaining byte, possibly none."""
        value = self.buff[self.pos:]
        self.pos = len(self.buff)
        return value

    def eof(self) -> bool:
        return self.pos >= len(self.buff)

    def finish(self) -> None:
        """Raise ExtraDataInPacket unless the whole buffer was consumed."""
        if not self.eof():
            raise ExtraDataInPacket()