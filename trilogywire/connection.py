"""Packet-level I/O over a connected stream socket."""

from __future__ import annotations

from typing import Protocol

from .builder import Builder
from .errors import ClosedConnection
from .options import SocketOptions
from .packet_parser import PacketParser

RECV_BUFFER_SIZE = 32768


class StreamSocket(Protocol):
    """The subset of the socket interface a connection relies on."""

    def recv(self, bufsize: int) -> bytes: ...

    def send(self, data: bytes) -> int: ...

    def close(self) -> None: ...


class PacketConnection:
    """Sends built packets and reads framed packets from a socket.

    Works with blocking and non-blocking sockets. ``read_packet`` performs at
    most one ``recv`` per call and returns None when no complete packet is
    available yet. ``flush_writes`` performs one ``send`` per call and
    returns False while part of the outgoing packet remains unwritten.
    """

    def __init__(self, sock: StreamSocket, options: SocketOptions | None = None) -> None:
        self.sock: StreamSocket | None = sock
        self.options = options if options is not None else SocketOptions()
        self.parser = PacketParser(0)
        self._recv_buff = b""
        self._recv_pos = 0
        self._out = b""
        self._written = 0

    def __enter__(self) -> PacketConnection:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _socket(self) -> StreamSocket:
        if self.sock is None:
            raise ClosedConnection("connection is closed")
        return self.sock

    @property
    def write_pending(self) -> bool:
        """True while part of the last sent packet is still unwritten."""
        return self._written < len(self._out)

    def begin_command(self, seq: int) -> Builder:
        """Start a packet with the given sequence number and return its builder.

        The reply is expected to carry the following sequence number.
        """
        limit = self.options.max_allowed_packet
        builder = Builder(seq, limit if limit > 0 else None)
        self.parser.sequence_number = (seq + 1) & 0xFF
        return builder

    def send(self, builder: Builder) -> bool:
        """Finalize the builder and start writing it; see ``flush_writes``."""
        self._out = builder.finalize()
        self._written = 0
        # A packet split into fragments consumes several sequence numbers.
        self.parser.sequence_number = builder.seq
        return self.flush_writes()

    def flush_writes(self) -> bool:
        """Write more of the pending packet; True once it is fully written."""
        sock = self._socket()
        try:
            sent = sock.send(self._out[self._written:])
        except (BlockingIOError, InterruptedError):
            return False
        except BrokenPipeError as exc:
            raise ClosedConnection("peer closed the connection") from exc
        self._written += sent
        return self._written >= len(self._out)

    def read_packet(self) -> bytes | None:
        """Return the next complete packet payload, or None if not yet available."""
        if self._recv_pos == len(self._recv_buff):
            sock = self._socket()
            try:
                data = sock.recv(RECV_BUFFER_SIZE)
            except (BlockingIOError, InterruptedError):
                return None
            if not data:
                raise ClosedConnection("peer closed the connection")
            self._recv_buff = bytes(data)
            self._recv_pos = 0

        consumed, packet = self.parser.execute(memoryview(self._recv_buff)[self._recv_pos:])
        self._recv_pos += consumed
        return packet

    def reset_sequence(self, seq: int = 0) -> None:
        """Expect the given sequence number on the next packet read."""
        self.parser.sequence_number = seq & 0xFF

    def close(self) -> None:
        """Close the socket; safe to call more than once."""
        if self.sock is not None:
            sock, self.sock = self.sock, None
            sock.close()