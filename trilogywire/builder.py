"""Construction of outgoing protocol packets."""

from __future__ import annotations

import struct

from .errors import MaxPacketExceeded, TypeOverflow
from .packet_parser import MAX_PACKET_LEN

_FLOAT = struct.Struct("<f")
_DOUBLE = struct.Struct("<d")
_HEADER_LEN = 4


class Builder:
    """Builds one logical packet, splitting it into wire fragments as needed.

    Each fragment carries a 3-byte little-endian payload length followed by a
    sequence number. Payloads of ``MAX_PACKET_LEN`` bytes or more are split
    into several fragments with consecutive sequence numbers. After building,
    ``seq`` holds the sequence number the next packet in the exchange must use.
    """

    def __init__(self, seq: int = 0, max_packet_length: int | None = None) -> None:
        self.buffer = bytearray()
        self.seq = seq & 0xFF
        self.packet_length = 0
        self.packet_max_length = max_packet_length
        self._fragment_length = 0
        self._header_offset = 0
        self._start_fragment()

    def _start_fragment(self) -> None:
        self._header_offset = len(self.buffer)
        self.buffer += bytes((0, 0, 0, self.seq))
        self.seq = (self.seq + 1) & 0xFF
        self._fragment_length = 0

    def _close_fragment(self) -> None:
        offset = self._header_offset
        self.buffer[offset:offset + 3] = self._fragment_length.to_bytes(3, "little")

    def _append(self, data: bytes | bytearray | memoryview) -> None:
        view = memoryview(data).cast("B")
        total = len(view)
        if self.packet_max_length is not None and self.packet_length + total > self.packet_max_length:
            raise MaxPacketExceeded(
                f"packet of {self.packet_length + total} bytes exceeds maximum of {self.packet_max_length}"
            )
        pos = 0
        while True:
            room = MAX_PACKET_LEN - self._fragment_length
            chunk = view[pos:pos + room]
            self.buffer += chunk
            self._fragment_length += len(chunk)
            pos += len(chunk)
            if self._fragment_length == MAX_PACKET_LEN:
                self._close_fragment()
                self._start_fragment()
            if pos >= total:
                break
        self.packet_length += total

    def _write_uint(self, val: int, width: int) -> None:
        if not 0 <= val < 1 << (8 * width):
            raise TypeOverflow(f"{val} does not fit in {width * 8} unsigned bits")
        self._append(val.to_bytes(width, "little"))

    def write_uint8(self, val: int) -> None:
        self._write_uint(val, 1)

    def write_uint16(self, val: int) -> None:
        self._write_uint(val, 2)

    def write_uint24(self, val: int) -> None:
        self._write_uint(val, 3)

    def write_uint32(self, val: int) -> None:
        self._write_uint(val, 4)

    def write_uint64(self, val: int) -> None:
        self._write_uint(val, 8)

    def write_float(self, val: float) -> None:
        try:
            packed = _FLOAT.pack(val)
        except OverflowError as exc:
            raise TypeOverflow(f"{val} does not fit in a float") from exc
        self._append(packed)

    def write_double(self, val: float) -> None:
        self._append(_DOUBLE.pack(val))

    def write_lenenc(self, val: int) -> None:
        """Append a length-encoded integer, using as few bytes as the value allows."""
        if val < 0:
            raise TypeOverflow(f"{val} cannot be length-encoded")
        if val < 0xFB:
            self._write_uint(val, 1)
        elif val <= 0xFFFF:
            self._append(b"\xfc" + val.to_bytes(2, "little"))
        elif val <= 0xFFFFFF:
            self._append(b"\xfd" + val.to_bytes(3, "little"))
        elif val < 1 << 64:
            self._append(b"\xfe" + val.to_bytes(8, "little"))
        else:
            raise TypeOverflow(f"{val} cannot be length-encoded")

    def write_buffer(self, data: bytes | bytearray | memoryview) -> None:
        self._append(data)

    def write_lenenc_buffer(self, data: bytes | bytearray | memoryview) -> None:
        """Append bytes preceded by their length as a length-encoded integer."""
        payload = bytes(data)
        if self.packet_max_length is not None:
            # check up front so a failed write leaves the packet unchanged
            prefix = 1 if len(payload) < 0xFB else 3 if len(payload) <= 0xFFFF else 4 if len(payload) <= 0xFFFFFF else 9
            if self.packet_length + prefix + len(payload) > self.packet_max_length:
                raise MaxPacketExceeded(
                    f"packet would exceed maximum of {self.packet_max_length} bytes"
                )
        self.write_lenenc(len(payload))
        self._append(payload)

    def write_string(self, data: str | bytes | bytearray) -> None:
        """Append a NUL-terminated string; text is encoded as UTF-8."""
        raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        self._append(raw + b"\x00")

    def set_max_packet_length(self, max_length: int) -> None:
        """Limit the packet size; fails if the packet is already larger."""
        if self.packet_length > max_length:
            raise MaxPacketExceeded(
                f"packet is already {self.packet_length} bytes, larger than {max_length}"
            )
        self.packet_max_length = max_length

    def finalize(self) -> bytes:
        """Fill in the last fragment's length and return the wire bytes."""
        self._close_fragment()
        return bytes(self.buffer)