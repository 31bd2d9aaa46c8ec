"""Incremental framing of the length-prefixed, sequenced packet stream."""

from __future__ import annotations

from enum import Enum

from .errors import InvalidSequenceId

MAX_PACKET_LEN = 0xFFFFFF


class _State(Enum):
    LEN_0 = 0
    LEN_1 = 1
    LEN_2 = 2
    SEQ = 3
    PAYLOAD = 4


class PacketParser:
    """Splits a byte stream into packet payloads, joining fragmented packets.

    ``execute`` consumes input up to the end of one complete packet and then
    pauses, returning how many bytes it used and the packet it finished.
    """

    def __init__(self, sequence_number: int = 0) -> None:
        self.reset(sequence_number)

    def reset(self, sequence_number: int = 0) -> None:
        """Forget any partial packet and expect the given sequence number next."""
        self.sequence_number = sequence_number & 0xFF
        self._state = _State.LEN_0
        self._fragment = False
        self._bytes_remaining = 0
        self._payload = bytearray()

    def execute(self, data: bytes | bytearray | memoryview) -> tuple[int, bytes | None]:
        """Feed bytes; return (bytes consumed, finished packet or None)."""
        view = memoryview(data)
        length = len(view)
        i = 0
        while i < length:
            state = self._state
            if state is _State.LEN_0:
                self._bytes_remaining = view[i]
                self._state = _State.LEN_1
                i += 1
            elif state is _State.LEN_1:
                self._bytes_remaining |= view[i] << 8
                self._state = _State.LEN_2
                i += 1
            elif state is _State.LEN_2:
                self._bytes_remaining |= view[i] << 16
                was_fragment = self._fragment
                self._fragment = self._bytes_remaining == MAX_PACKET_LEN
                self._state = _State.SEQ
                i += 1
                if not was_fragment:
                    self._payload = bytearray()
            elif state is _State.SEQ:
                if view[i] != self.sequence_number:
                    raise InvalidSequenceId(
                        f"expected sequence {self.sequence_number}, got {view[i]}"
                    )
                self.sequence_number = (self.sequence_number + 1) & 0xFF
                self._state = _State.PAYLOAD
                i += 1
                if self._bytes_remaining == 0:
                    packet = self._end_of_payload()
                    if packet is not None:
                        return i, packet
            else:
                chunk = min(length - i, self._bytes_remaining)
                self._payload += view[i:i + chunk]
                i += chunk
                self._bytes_remaining -= chunk
                if self._bytes_remaining == 0:
                    packet = self._end_of_payload()
                    if packet is not None:
                        return i, packet
        return i, None

    def _end_of_payload(self) -> bytes | None:
        self._state = _State.LEN_0
        if self._fragment:
            return None
        packet = bytes(self._payload)
        self._payload = bytearray()
        return packet