"""Tests for the byte reader and cursor."""

from sensornode.buffer import ByteReader, Cursor


def test_fixed_width_reads_respect_sign_and_endianness() -> None:
    reader = ByteReader(bytes([0x34, 0x12, 0xFF, 0xFE, 0x80, 0x00, 0x00, 0x01]))

    assert reader.read_uint16_le(0) == 0x1234
    assert reader.read_uint16_be(0) == 0x3412
    assert reader.read_int16_be(2) == -2
    assert reader.read_uint16_be(2) == 0xFFFE
    assert reader.read_int16_le(2) == -257
    assert reader.read_int8(4) == -128
    assert reader.read_uint8(4) == 0x80
    assert reader.read_uint32_be(4) == 0x80000001
    assert reader.read_int32_be(4) == -0x7FFFFFFF
    assert reader.read_uint32_le(4) == 0x01000080
    assert reader.read_int32_le(0) == 0xFEFF1234 - 2**32


def test_int32_all_ones_is_minus_one() -> None:
    reader = ByteReader([0xFF] * 4)

    assert reader.read_int32_be(0) == -1
    assert reader.read_uint32_le(0) == 0xFFFFFFFF


def test_reads_past_the_end_are_zero_filled_and_counted() -> None:
    reader = ByteReader([0x01])

    assert reader.read_uint16_be(0) == 0x0100
    assert reader.read_uint32_le(0) == 1
    assert reader.read_uint8(5) == 0
    assert reader.read_uint8(-1) == 0
    assert reader.overrun_reads == 4


def test_in_bounds_reads_do_not_count_as_overruns() -> None:
    reader = ByteReader(b"\x00\x01\x02\x03")

    reader.read_uint32_be(0)
    reader.read_uint16_le(2)

    assert reader.overrun_reads == 0


def test_empty_payload_is_readable() -> None:
    reader = ByteReader(b"")

    assert len(reader) == 0
    assert reader.read_uint32_be(0) == 0
    assert reader.slice() == b""


def test_slice_clamps_bounds() -> None:
    reader = ByteReader(b"\x01\x02\x03\x04")

    assert reader.slice(1, 3) == b"\x02\x03"
    assert reader.slice(-5, 100) == b"\x01\x02\x03\x04"
    assert reader.slice(3, 1) == b""
    assert reader.slice(2) == b"\x03\x04"


def test_float_reads_use_the_float32_decoder() -> None:
    reader = ByteReader(bytes.fromhex("3F800000") + bytes.fromhex("0000C03F"))

    assert reader.read_float_be(0) == 1.0
    assert reader.read_float_le(4) == 1.5


def test_cursor_advances_by_field_width() -> None:
    cur = Cursor(ByteReader(bytes.fromhex("0102030405060708")))

    assert cur.uint8() == 0x01
    assert cur.uint16() == 0x0203
    assert cur.offset == 3
    assert cur.remaining == 5
    cur.skip(1)
    assert cur.uint32() == 0x05060708
    assert cur.remaining == 0
    assert cur.uint8() == 0
    assert cur.remaining == 0


def test_cursor_little_endian_and_seek() -> None:
    cur = Cursor(ByteReader(bytes.fromhex("FEFF0A000000")), byteorder="little")

    assert cur.int16() == -2
    assert cur.uint32() == 10
    assert cur.seek(0).uint16() == 0xFFFE
