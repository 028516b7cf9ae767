#!/usr/bin/env python3
#
# Test aivdm/bits.py
#
# This file is Copyright (c) 2010 by the GPSD project
# BSD terms apply: see the file COPYING in the distribution root for details.

import pytest

from aivdm.bits import (SIXBIT_ASCII, BitVector, decode_byte, encode_byte,
                        sign_extend)
from aivdm.errors import DecodeError

# (armoring character, six-bit value or None if invalid)
armoring_tests = [
    ('0', 0),
    ('1', 1),
    ('9', 9),
    ('@', 16),
    ('P', 32),
    ('W', 39),
    ('`', 40),
    ('a', 41),
    ('w', 63),
    ('X', None),
    ('_', None),
    ('/', None),
    ('x', None),
    (' ', None),
    ('ab', None),
    (0x30, 0),
    (0x77, 63),
    (0x5f, None),
]


@pytest.mark.parametrize("ch, value", armoring_tests)
def test_decode_byte(ch, value):
    assert decode_byte(ch) == value


def test_encode_byte_inverts_decode_byte():
    for value in range(64):
        assert decode_byte(encode_byte(value)) == value


@pytest.mark.parametrize("value", [-1, 64, 100])
def test_encode_byte_range(value):
    with pytest.raises(ValueError):
        encode_byte(value)


# (raw, width, signed value)
sign_tests = [
    (0x80, 8, -128),
    (0x7f, 8, 127),
    (0xff, 8, -1),
    (0x00, 8, 0),
    (0x8000000, 28, -134217728),
    ((1 << 27) | 12345, 28, -134205383),
    (0x6791AC0, 28, 108600000),
    (0x3ffff, 18, -1),
    (0x10000, 17, -65536),
]


@pytest.mark.parametrize("raw, width, value", sign_tests)
def test_sign_extend(raw, width, value):
    assert sign_extend(raw, width) == value


def test_get_bits_within_one_character():
    bits = BitVector("w")
    assert bits.get_bits(2) == 3
    assert bits.get_bits(4) == 15
    assert bits.get_bits(1) is None


def test_get_bits_across_characters():
    # '1' is 000001, 'P' is 100000
    bits = BitVector("1P")
    assert bits.get_bits(7) == 3
    assert bits.get_bits(5) == 0
    assert bits.bits_remaining() == 0


def test_get_bits_zero_and_remaining():
    bits = BitVector("1P")
    assert bits.get_bits(0) == 0
    assert bits.offset == 0
    assert bits.get_bits(-1) == 0b000001100000


def test_get_bits_short_read():
    bits = BitVector("w")
    assert bits.get_bits(4) == 15
    # Only two bits are left; they come back on their own
    assert bits.get_bits(8) == 3
    assert bits.get_bits(8) is None


def test_get_bits_wide_is_bytes():
    bits = BitVector.from_bits("1" * 40)
    assert bits.get_bits(40) == b"\xff" * 5


def test_get_bytes_tail():
    bits = BitVector.from_bits("1" * 36)
    assert bits.get_bits(36) == b"\xff\xff\xff\xff\x0f"


def test_get_bits_ascii():
    text = "".join(format(SIXBIT_ASCII.index(c), "06b") for c in "HELLO  ")
    bits = BitVector.from_bits(text)
    assert bits.get_bits_ascii(42) == "HELLO"


@pytest.mark.parametrize("n", [1, 2, 5, 17])
def test_get_bits_ascii_padding_is_empty(n):
    bits = BitVector.from_bits("000000" * n)
    assert bits.get_bits_ascii(6 * n) == ""


def test_get_bits_ascii_needs_whole_characters():
    with pytest.raises(DecodeError):
        BitVector("0000").get_bits_ascii(5)


def test_get_bits_ascii_stops_at_end():
    text = "".join(format(SIXBIT_ASCII.index(c), "06b") for c in "AB")
    assert BitVector.from_bits(text).get_bits_ascii(120) == "AB"


def test_invalid_character_raises():
    bits = BitVector("1X")
    assert bits.get_bits(6) == 1
    with pytest.raises(DecodeError):
        bits.get_bits(6)


def test_ubits_sbits_leave_cursor_alone():
    bits = BitVector.from_bits("10000000" + "01111111")
    assert bits.ubits(0, 8) == 0x80
    assert bits.sbits(0, 8) == -128
    assert bits.sbits(8, 8) == 127
    assert bits.offset == 0
    assert bits.ubits(24, 6) is None


def test_from_bits_pads():
    bits = BitVector.from_bits("1" * 10)
    assert bits.data == "wt"
    assert bits.pad == 2
    assert len(bits) == 10
    assert bits.get_bits(10) == 0x3ff


def test_fill_bits():
    bits = BitVector("w", 2)
    assert len(bits) == 4
    assert bits.bits_remaining() == 4
    assert len(BitVector("", 3)) == 0


def test_fill_bits_are_not_data():
    bits = BitVector("w", 2)
    assert bits.ubits(0, 6) == 15
    assert bits.get_bits(8) == 15
    assert bits.get_bits(1) is None


def test_get_bits_remaining_when_exhausted():
    bits = BitVector("w")
    assert bits.get_bits(6) == 63
    assert bits.get_bits(-1) is None
    assert bits.get_bits(0) == 0


def test_reset():
    bits = BitVector("1P")
    bits.get_bits(9)
    bits.reset()
    assert bits.offset == 0
    assert bits.get_bits(6) == 1


def test_skip():
    bits = BitVector("1P")
    bits.skip(6)
    assert bits.get_bits(1) == 1
    bits.skip(100)
    assert bits.bits_remaining() == 0


def test_append():
    bits = BitVector("1")
    bits.append(BitVector("P", 2))
    assert bits.data == "1P"
    assert bits.pad == 2
    assert len(bits) == 10
    assert bits.get_bits(10) == 0b0000011000


def test_accepts_bytes():
    assert BitVector(b"1P").get_bits(12) == 0b000001100000

# End
