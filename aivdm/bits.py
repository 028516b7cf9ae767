# bits.py - bit-level access to AIVDM six-bit armored payloads
#
# This file is Copyright (c) 2010 by the GPSD project
# BSD terms apply: see the file COPYING in the distribution root for details.
#
# An AIVDM payload packs six bits into each printable character.  Fields
# inside it are not aligned to character boundaries, so they are pulled
# out by bit offset.  BitVector offers two ways to do that: ubits() and
# sbits() extract at an explicit offset and leave no state behind, while
# get_bits() and friends march a cursor forward through the payload the
# way the per-type layouts consume it.

from .errors import DecodeError
from .misc import polystr

# Embedded text uses its own six-bit alphabet, distinct from the armoring.
# '@' (value 0) is padding and never appears in decoded text.
SIXBIT_ASCII = ("@ABCDEFGHIJKLMNOPQRSTUVWXYZ[\\]^_"
                " !\"#$%&'()*+,-./0123456789:;<=>?")


def decode_byte(ch):
    "Map one armoring character to its six-bit value, None if invalid."
    if isinstance(ch, str):
        if len(ch) != 1:
            return None
        ch = ord(ch)
    if ch < 0x30 or ch > 0x77 or 0x57 < ch < 0x60:
        return None
    if ch < 0x60:
        return ch - 0x30
    return ch - 0x38


def encode_byte(value):
    "Map a six-bit value to its armoring character."
    if value < 0 or value > 0x3f:
        raise ValueError("six-bit value out of range: %r" % (value,))
    if value < 40:
        return chr(value + 0x30)
    return chr(value + 0x38)


def sign_extend(raw, width):
    "Recover a two's-complement value from the low width bits of raw."
    mask = (1 << width) - 1
    if raw & (1 << (width - 1)):
        return -(((~raw) & mask) + 1)
    return raw


class BitVector:
    "Forward-only bit cursor over AIVDM-style six-bit armoring."
    def __init__(self, data='', pad=0):
        self.data = polystr(data) if data else ''
        self.pad = int(pad or 0)	# Trailing fill bits to ignore
        self.offset = 0			# Bits consumed so far

    @classmethod
    def from_bits(cls, bitstring):
        "Armor a string of '0' and '1' characters, padding the last character."
        pad = -len(bitstring) % 6
        bitstring += '0' * pad
        data = ''.join(encode_byte(int(bitstring[i:i+6], 2))
                       for i in range(0, len(bitstring), 6))
        return cls(data, pad)

    def sixbit(self, index):
        "Six-bit value of the armoring character at index."
        value = decode_byte(self.data[index])
        if value is None:
            raise DecodeError("Invalid six-bit character %r in payload."
                              % self.data[index])
        return value

    def ubits(self, start, width):
        "Extract a (zero-origin) bitfield from the payload as an unsigned int."
        if width == 0:
            return 0
        available = len(self) - start
        if available <= 0:
            return None
        # A field cut off by the fill bits yields the bits present
        width = min(width, available)
        fld = 0
        for i in range(start // 6, (start + width + 5) // 6):
            fld = (fld << 6) | self.sixbit(i)
        end = (start + width) % 6
        if end != 0:
            fld >>= (6 - end)
        return fld & ((1 << width) - 1)

    def sbits(self, start, width):
        "Extract a (zero-origin) bitfield from the payload as a signed int."
        fld = self.ubits(start, width)
        if fld is None:
            return None
        return sign_extend(fld, width)

    def get_bits(self, n):
        """Consume the next n bits.

        Up to 32 bits come back as an unsigned int, wider requests as a
        byte string (see get_bytes).  n == -1 asks for everything that
        is left.  None means the payload was already exhausted.
        """
        if n < 0:
            n = self.bits_remaining()
            if n <= 0:
                return None
        if n > 32:
            return self.get_bytes(n)
        value = self.ubits(self.offset, n)
        if value is not None:
            self.offset = min(self.offset + n, len(self))
        return value

    def get_bytes(self, n):
        "Consume n bits as a byte string, eight bits per byte, the tail short."
        if n < 0:
            n = self.bits_remaining()
        octets = bytearray()
        while n > 0:
            ch = self.get_bits(min(n, 8))
            if ch is None:
                break
            octets.append(ch)
            n -= 8
        return bytes(octets)

    def get_bits_ascii(self, n):
        "Consume n bits of embedded six-bit text."
        if n % 6 != 0:
            raise DecodeError("Text field width %d is not a multiple of 6." % n)
        chars = []
        for _ in range(n // 6):
            value = self.get_bits(6)
            if value is None:
                break
            chars.append(SIXBIT_ASCII[value])
        return "".join(chars).replace("@", "").rstrip()

    def skip(self, n):
        "Step over n bits without interpreting them."
        self.offset = min(self.offset + n, len(self))

    def reset(self):
        "Rewind the cursor to the first bit; the payload is kept."
        self.offset = 0

    def append(self, other):
        "Concatenate another vector's payload and adopt its fill bits."
        self.data += other.data
        self.pad = other.pad

    def bits_remaining(self):
        return len(self) - self.offset

    def __len__(self):
        return max(0, 6 * len(self.data) - self.pad)

    def __repr__(self):
        "Used for dumping binary data."
        return "%d:%s,%d" % (len(self), self.data, self.pad)

# End
