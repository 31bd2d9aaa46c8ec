"""Connection and socket settings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class WaitType(IntEnum):
    """What a caller is waiting for on the socket."""

    READ = 0
    WRITE = 1
    HANDSHAKE = 2


class SslMode(IntEnum):
    """How TLS is negotiated; the strictest mode is 1 so truthiness is safe."""

    DISABLED = 0
    VERIFY_IDENTITY = 1
    VERIFY_CA = 2
    REQUIRED_NOVERIFY = 3
    PREFERRED_NOVERIFY = 4


class TlsVersion(IntEnum):
    """Bounds on the negotiated TLS protocol version."""

    UNDEF = 0
    TLS_1_0 = 1
    TLS_1_1 = 2
    TLS_1_2 = 3
    TLS_1_3 = 4


def _check_range(name: str, value: int, upper: int) -> None:
    if not 0 <= value <= upper:
        raise ValueError(f"{name} must be between 0 and {upper}, got {value}")


@dataclass
class SocketOptions:
    """Everything needed to open and authenticate a connection.

    Timeouts are in seconds; None means no timeout.
    """

    hostname: str | None = None
    path: str | None = None
    database: str | None = None
    username: str | None = None
    password: bytes | None = None
    encoding: int = 0

    ssl_mode: SslMode = SslMode.DISABLED
    tls_min_version: TlsVersion = TlsVersion.UNDEF
    tls_max_version: TlsVersion = TlsVersion.UNDEF
    port: int = 0

    ssl_ca: str | None = None
    ssl_capath: str | None = None
    ssl_cert: str | None = None
    ssl_cipher: str | None = None
    ssl_crl: str | None = None
    ssl_crlpath: str | None = None
    ssl_key: str | None = None
    tls_ciphersuites: str | None = None

    connect_timeout: float | None = None
    read_timeout: float | None = None
    write_timeout: float | None = None

    keepalive_enabled: bool = False
    keepalive_idle: int = 0
    keepalive_count: int = 0
    keepalive_interval: int = 0

    flags: int = 0

    max_allowed_packet: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.password, str):
            # str.encode defaults to UTF-8
            self.password = self.password.encode()
        elif self.password is not None:
            self.password = bytes(self.password)

        self.ssl_mode = SslMode(self.ssl_mode)
        self.tls_min_version = TlsVersion(self.tls_min_version)
        self.tls_max_version = TlsVersion(self.tls_max_version)

        _check_range("encoding", self.encoding, 0xFF)
        _check_range("port", self.port, 0xFFFF)
        _check_range("keepalive_idle", self.keepalive_idle, 0xFFFF)
        _check_range("keepalive_count", self.keepalive_count, 0xFFFF)
        _check_range("keepalive_interval", self.keepalive_interval, 0xFFFF)
        _check_range("flags", self.flags, 0xFFFFFFFF)
        if self.max_allowed_packet < 0:
            raise ValueError("max_allowed_packet must not be negative")

        for name in ("connect_timeout", "read_timeout", "write_timeout"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must not be negative")

    @property
    def password_len(self) -> int:
        return len(self.password) if self.password is not None else 0