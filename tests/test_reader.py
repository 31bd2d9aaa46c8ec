import struct

import pytest

from trilogywire.errors import ExtraDataInPacket, NullValue, ProtocolViolation, TruncatedPacket
from trilogywire.reader import Reader


def test_read_uint8():
    reader = Reader(bytes([0x01]))
    assert reader.get_uint8() == 1
    reader.finish()
    assert reader.eof()


def test_read_uint8_truncated():
    with pytest.raises(TruncatedPacket):
        Reader(b"").get_uint8()


def test_read_uint16():
    reader = Reader(bytes([0x01, 0x00]))
    assert reader.get_uint16() == 1
    reader.finish()
    assert reader.eof()


def test_read_uint16_truncated():
    with pytest.raises(TruncatedPacket):
        Reader(bytes([0x01])).get_uint16()


def test_read_uint24():
    reader = Reader(bytes([0x01, 0x00, 0x00]))
    assert reader.get_uint24() == 1
    reader.finish()
    assert reader.eof()


def test_read_uint24_truncated():
    with pytest.raises(TruncatedPacket):
        Reader(bytes([0x01, 0x00])).get_uint24()


def test_read_uint32():
    reader = Reader(bytes([0x01, 0x00, 0x00, 0x00]))
    assert reader.get_uint32() == 1
    reader.finish()
    assert reader.eof()


def test_read_uint32_truncated():
    with pytest.raises(TruncatedPacket):
        Reader(bytes([0x01, 0x00, 0x00])).get_uint32()


def test_read_uint64():
    reader = Reader(bytes([0x01, 0, 0, 0, 0, 0, 0, 0]))
    assert reader.get_uint64() == 1
    reader.finish()
    assert reader.eof()


def test_read_uint64_truncated():
    with pytest.raises(TruncatedPacket):
        Reader(bytes([0x01, 0, 0, 0, 0, 0, 0])).get_uint64()


def test_read_lenenc():
    buff = bytes(
        [0x01, 0xFB, 0xFC, 0x01, 0x00, 0xFD, 0x01, 0x00, 0x00,
         0xFE, 0x01, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00]
    )
    reader = Reader(buff)
    assert reader.get_lenenc() == 1
    with pytest.raises(NullValue):
        reader.get_lenenc()
    assert reader.get_lenenc() == 1
    assert reader.get_lenenc() == 1
    assert reader.get_lenenc() == 1
    reader.finish()
    assert reader.eof()


def test_read_lenenc_truncated():
    reader = Reader(bytes([0xFE, 0x01, 0, 0, 0, 0, 0, 0]))
    with pytest.raises(TruncatedPacket):
        reader.get_lenenc()


def test_read_lenenc_invalid():
    with pytest.raises(ProtocolViolation):
        Reader(bytes([0xFF])).get_lenenc()


def test_read_lenenc_empty():
    with pytest.raises(TruncatedPacket):
        Reader(b"").get_lenenc()


def test_read_buffer():
    buff = bytes([0x68, 0x65, 0x6C, 0x6C, 0x6F])
    reader = Reader(buff)
    assert reader.get_buffer(len(buff)) == buff
    reader.finish()
    assert reader.eof()


def test_read_buffer_truncated():
    reader = Reader(bytes([0x68, 0x65, 0x6C, 0x6C, 0x6F]))
    with pytest.raises(TruncatedPacket):
        reader.get_buffer(50)


def test_read_lenenc_buffer():
    reader = Reader(bytes([0x01, 0x61]))
    data = reader.get_lenenc_buffer()
    assert len(data) == 0x01
    assert data[0] == 0x61
    reader.finish()
    assert reader.eof()


def test_read_lenenc_buffer_truncated():
    with pytest.raises(TruncatedPacket):
        Reader(bytes([0x01])).get_lenenc_buffer()


def test_read_lenenc_buffer_invalid():
    with pytest.raises(ProtocolViolation):
        Reader(bytes([0xFF])).get_lenenc_buffer()


def test_read_string():
    buff = bytes([0x68, 0x65, 0x6C, 0x6C, 0x6F, 0x00])
    reader = Reader(buff)
    data = reader.get_string()
    assert len(data) == len(buff) - 1
    assert data == buff[:-1]
    reader.finish()
    assert reader.eof()


def test_read_string_truncated():
    with pytest.raises(TruncatedPacket):
        Reader(bytes([0x68, 0x65, 0x6C, 0x6C])).get_string()


def test_read_eof_buffer():
    buff = bytes([0x68, 0x65, 0x6C, 0x6C, 0x6F])
    reader = Reader(buff)
    data = reader.get_eof_buffer()
    assert len(data) == len(buff)
    assert data == buff
    reader.finish()
    assert reader.eof()


def test_read_eof_buffer_when_empty():
    reader = Reader(b"")
    assert reader.get_eof_buffer() == b""
    reader.finish()
    assert reader.eof()


def test_reader_extra_data():
    buff = bytes([0x68, 0x65, 0x6C, 0x6C, 0x6F])
    reader = Reader(buff)
    assert reader.get_buffer(len(buff) - 2) == buff[:-2]
    with pytest.raises(ExtraDataInPacket):
        reader.finish()


def test_reader_eof():
    assert Reader(b"").eof() is True


def test_read_float_and_double_round_trip():
    value = 1234.5
    reader = Reader(struct.pack("<f", value) + struct.pack("<d", value))
    assert reader.get_float() == value
    assert reader.get_double() == value
    reader.finish()
    assert reader.eof()


def test_read_float_truncated():
    with pytest.raises(TruncatedPacket):
        Reader(bytes([0, 0, 0])).get_float()


def test_truncated_read_does_not_advance():
    reader = Reader(bytes([0x01]))
    with pytest.raises(TruncatedPacket):
        reader.get_uint16()
    assert reader.get_uint8() == 1