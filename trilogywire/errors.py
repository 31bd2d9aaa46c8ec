"""Error codes and the exceptions raised for them."""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Numeric status codes used across the wire protocol layer."""

    OK = 0
    ERR = -1
    EOF = -2
    SYSERR = -3
    UNEXPECTED_PACKET = -4
    TRUNCATED_PACKET = -5
    PROTOCOL_VIOLATION = -6
    AUTH_PLUGIN_TOO_LONG = -7
    EXTRA_DATA_IN_PACKET = -8
    INVALID_CHARSET = -9
    AGAIN = -10
    CLOSED_CONNECTION = -11
    HAVE_RESULTS = -12
    NULL_VALUE = -13
    INVALID_SEQUENCE_ID = -14
    TYPE_OVERFLOW = -15
    OPENSSL_ERR = -16
    UNSUPPORTED = -17
    DNS_ERR = -18
    AUTH_SWITCH = -19
    MAX_PACKET_EXCEEDED = -20
    UNKNOWN_TYPE = -21


def error_name(code: int) -> str | None:
    """Return the symbolic name of an error code, or None if it is unknown."""
    try:
        return "TRILOGY_" + ErrorCode(code).name
    except ValueError:
        return None


class TrilogyError(Exception):
    """Base class for protocol errors; carries the matching error code."""

    code: ErrorCode = ErrorCode.ERR

    def __init__(self, message: str | None = None, code: int | None = None) -> None:
        if code is not None:
            self.code = ErrorCode(code)
        super().__init__(message if message is not None else error_name(self.code))


class TruncatedPacket(TrilogyError):
    """A packet ended before the value being read was complete."""

    code = ErrorCode.TRUNCATED_PACKET


class ProtocolViolation(TrilogyError):
    """The peer sent data that breaks the protocol."""

    code = ErrorCode.PROTOCOL_VIOLATION


class ExtraDataInPacket(TrilogyError):
    """A packet held bytes after everything expected was read."""

    code = ErrorCode.EXTRA_DATA_IN_PACKET


class NullValue(TrilogyError):
    """A length-encoded value was the NULL marker."""

    code = ErrorCode.NULL_VALUE


class InvalidSequenceId(TrilogyError):
    """A packet arrived with an unexpected sequence number."""

    code = ErrorCode.INVALID_SEQUENCE_ID


class MaxPacketExceeded(TrilogyError):
    """A packet being built grew past the allowed maximum size."""

    code = ErrorCode.MAX_PACKET_EXCEEDED


class TypeOverflow(TrilogyError):
    """A value does not fit the type it must be stored in."""

    code = ErrorCode.TYPE_OVERFLOW


class UnexpectedPacket(TrilogyError):
    """A packet of a kind not valid at this point was received."""

    code = ErrorCode.UNEXPECTED_PACKET


class ClosedConnection(TrilogyError):
    """The peer closed the connection."""

    code = ErrorCode.CLOSED_CONNECTION


_ERROR_CLASSES: dict[ErrorCode, type[TrilogyError]] = {
    cls.code: cls
    for cls in (
        TruncatedPacket,
        ProtocolViolation,
        ExtraDataInPacket,
        NullValue,
        InvalidSequenceId,
        MaxPacketExceeded,
        TypeOverflow,
        UnexpectedPacket,
        ClosedConnection,
    )
}


def error_for_code(code: int) -> TrilogyError:
    """Build the exception that corresponds to a non-OK error code."""
    error_code = ErrorCode(code)
    if error_code is ErrorCode.OK:
        raise ValueError("OK is not an error code")
    cls = _ERROR_CLASSES.get(error_code)
    if cls is None:
        return TrilogyError(code=error_code)
    return cls()