import pytest

from trilogywire.options import SocketOptions, SslMode, TlsVersion, WaitType


def test_defaults_are_zeroed():
    opts = SocketOptions()
    assert opts.ssl_mode is SslMode.DISABLED
    assert opts.tls_min_version is TlsVersion.UNDEF
    assert opts.password is None
    assert opts.password_len == 0
    assert opts.max_allowed_packet == 0


def test_integer_modes_are_coerced_to_enums():
    opts = SocketOptions(ssl_mode=1, tls_min_version=3, tls_max_version=4)
    assert opts.ssl_mode is SslMode.VERIFY_IDENTITY
    assert opts.tls_min_version is TlsVersion.TLS_1_2
    assert opts.tls_max_version is TlsVersion.TLS_1_3


def test_strictest_ssl_mode_is_truthy_and_disabled_is_falsy():
    assert bool(SocketOptions(ssl_mode=SslMode.VERIFY_IDENTITY).ssl_mode)
    assert not SocketOptions().ssl_mode


def test_text_password_is_encoded():
    password = "password"
    opts = SocketOptions(username="user", password=password)
    assert opts.password == b"password"
    assert opts.password_len == len(password)


def test_unknown_ssl_mode_is_rejected():
    with pytest.raises(ValueError):
        SocketOptions(ssl_mode=9)


@pytest.mark.parametrize(
    "field, value",
    [
        ("port", 70000),
        ("port", -1),
        ("encoding", 256),
        ("keepalive_idle", 0x10000),
        ("max_allowed_packet", -5),
        ("read_timeout", -0.5),
    ],
)
def test_out_of_range_values_are_rejected(field, value):
    with pytest.raises(ValueError):
        SocketOptions(**{field: value})


def test_wait_type_round_trips_by_value():
    assert [WaitType(w.value) for w in WaitType] == list(WaitType)
    assert WaitType(2) is WaitType.HANDSHAKE