"""Packet readers, builders, framing, socket I/O and escaping for the MySQL-compatible wire protocol."""

__version__ = "0.1.0"

__all__ = [
    "builder",
    "connection",
    "errors",
    "escaping",
    "options",
    "packet_parser",
    "reader",
]