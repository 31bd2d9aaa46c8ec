# trilogywire

`trilogywire` is a small library with no dependencies. It provides building
blocks for talking to MySQL-compatible servers at the wire level. You get the
pieces needed to build packet payloads, read them back, frame them on a byte
stream and move them over a socket. It has no high-level client API.

## Modules

| Module | Contents |
| --- | --- |
| `trilogywire.errors` | `ErrorCode`, the `TrilogyError` exception family, `error_name()`, `error_for_code()` |
| `trilogywire.reader` | `Reader`, which parses values out of a packet payload |
| `trilogywire.builder` | `Builder`, which writes a payload and frames it into sequenced wire packets |
| `trilogywire.packet_parser` | `PacketParser`, which reassembles packets from a byte stream and checks sequence numbers |
| `trilogywire.options` | `SocketOptions` and the `WaitType`, `SslMode` and `TlsVersion` enums |
| `trilogywire.connection` | `PacketConnection`, which sends built packets and reads framed packets from a socket |
| `trilogywire.escaping` | `escape()`, which escapes data for use inside quoted SQL string literals |

## Reading a payload

```python
from trilogywire.errors import TruncatedPacket
from trilogywire.reader import Reader

reader = Reader(b"\x01\x00\xfc\x01\x00hello\x00")
reader.get_uint16()   # 1
reader.get_lenenc()   # 1
reader.get_string()   # b"hello"
reader.finish()       # raises ExtraDataInPacket if bytes were left unread

try:
    Reader(b"\x01").get_uint16()
except TruncatedPacket:
    ...
```

`Reader` offers fixed-width little-endian integers (`get_uint8` through
`get_uint64`), `get_float`, `get_double`, length-encoded integers
(`get_lenenc`), `get_buffer(length)`, `get_lenenc_buffer()`, NUL-terminated
strings (`get_string`), `get_eof_buffer()` for the rest of the payload, and
`eof()`. A length-encoded NULL marker (`0xfb`) raises `NullValue`. The invalid
prefix `0xff` raises `ProtocolViolation`.

## Building packets

`Builder(seq=0, max_packet_length=None)` starts a packet with the given
sequence number. The `write_*` methods append integers, floats, length-encoded
integers, raw bytes, length-prefixed bytes and NUL-terminated strings. Values
out of range raise `TypeOverflow`. When a maximum length is set, by argument
or with `set_max_packet_length()`, a payload that would grow past it raises
`MaxPacketExceeded`.

`finalize()` fills in the length headers and returns the wire bytes. A payload
of `0xFFFFFF` bytes or more is split into several fragments with consecutive
sequence numbers. Afterwards, `builder.seq` holds the sequence number the next
packet of the exchange must carry.

## Parsing a byte stream

`PacketParser(sequence_number=0)` consumes bytes in whatever chunks arrive.
`execute(data)` returns a tuple `(consumed, packet)`:

- It stops right after the first complete packet, and `packet` holds that
  payload with any fragments joined.
- Otherwise `packet` is `None`, and all of `data` was consumed.
- Feed the bytes that were not consumed back in to get the next packet.

A sequence number that does not match the expected one raises
`InvalidSequenceId`. `reset(sequence_number)` discards any partial packet.

## Sending and receiving over a socket

`PacketConnection(sock, options=None)` works with any object that has `recv`,
`send` and `close`. The socket may be blocking or non-blocking.

- `begin_command(seq)` returns a `Builder`. It honours
  `SocketOptions.max_allowed_packet` when that value is positive.
- `send(builder)` finalizes the builder and performs one write.
- `flush_writes()` returns `True` once the whole packet has been written.
- `read_packet()` performs at most one `recv`. It returns a complete payload,
  or `None` if none is available yet.
- A closed peer raises `ClosedConnection`.

The connection is a context manager and closes its socket on exit.

```python
import socket

from trilogywire.builder import Builder
from trilogywire.connection import PacketConnection

client, server = socket.socketpair()
with PacketConnection(client) as conn:
    builder = conn.begin_command(0)
    builder.write_uint8(0x0E)
    done = conn.send(builder)
    while not done:
        done = conn.flush_writes()

    reply = Builder(1)
    reply.write_buffer(b"\x00\x00\x00\x02\x00\x00\x00")
    server.sendall(reply.finalize())

    packet = None
    while packet is None:
        packet = conn.read_packet()
    # packet == b"\x00\x00\x00\x02\x00\x00\x00"
server.close()
```

`SocketOptions` is a dataclass that holds connection settings:

- host, port or path
- credentials; a text password is stored as UTF-8 bytes
- TLS mode and version bounds, certificate paths
- timeouts in seconds
- keepalive settings, capability flags and `max_allowed_packet`

It raises `ValueError` for values out of range.

## Escaping

```python
from trilogywire.escaping import escape

escape("it's")                             # "it\\'s"
escape(b"it's", no_backslash_escapes=True) # b"it''s"
```

By default, quotes, backslash, NUL, newline, carriage return and Ctrl-Z are
escaped with a backslash. With `no_backslash_escapes`, only single quotes are
doubled. Text in gives text out, and bytes-like input gives bytes.

## Errors

Failures raise subclasses of `TrilogyError`, and each carries its `ErrorCode`:

- `TruncatedPacket`
- `ProtocolViolation`
- `ExtraDataInPacket`
- `NullValue`
- `InvalidSequenceId`
- `MaxPacketExceeded`
- `TypeOverflow`
- `UnexpectedPacket`
- `ClosedConnection`

`error_name(code)` returns the symbolic name of a numeric code, or `None`.
`error_for_code(code)` returns the matching exception instance, and raises
`ValueError` for the OK code.

## What it does not do

This package works at the packet level only. It has none of the following:

- connection handshake or authentication
- TLS setup or host name resolution
- commands: queries, result sets, prepared statements
- character-set tables

`SocketOptions` only stores the settings for these. Acting on them is up to
the code that uses the package.