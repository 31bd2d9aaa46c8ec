"""Escaping of values for inclusion in quoted SQL string literals."""

from __future__ import annotations

import re

_BACKSLASH_ESCAPES: dict[int, bytes] = {
    ord('"'): b'\\"',
    0: b"\\0",
    ord("'"): b"\\'",
    ord("\\"): b"\\\\",
    ord("\n"): b"\\n",
    ord("\r"): b"\\r",
    26: b"\\Z",
}

_SPECIAL = re.compile(b"[" + re.escape(bytes(sorted(_BACKSLASH_ESCAPES))) + b"]")
_QUOTE = re.compile(b"'")


def _escape_bytes(raw: bytes, no_backslash_escapes: bool) -> bytes:
    if no_backslash_escapes:
        return _QUOTE.sub(b"''", raw)
    return _SPECIAL.sub(lambda match: _BACKSLASH_ESCAPES[match.group()[0]], raw)


def escape(
    data: str | bytes | bytearray | memoryview, no_backslash_escapes: bool = False
) -> str | bytes:
    """Escape ``data`` so it can sit between quotes in an SQL statement.

    With ``no_backslash_escapes`` (the server's NO_BACKSLASH_ESCAPES mode)
    only single quotes are doubled; otherwise quotes, backslashes, NUL,
    newline, carriage return and Ctrl-Z are escaped with a backslash.
    Text comes back as text, anything bytes-like comes back as bytes.
    """
    if isinstance(data, str):
        return _escape_bytes(data.encode("utf-8"), no_backslash_escapes).decode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return _escape_bytes(bytes(data), no_backslash_escapes)
    raise TypeError(f"cannot escape value of type {type(data).__name__}")