# decoder.py - interpret the layout tables against a reassembled payload
#
# This file is Copyright (c) 2010 by the GPSD project
# BSD terms apply: see the file COPYING in the distribution root for details.
#
# This is the execution machinery for the pseudolanguage in layouts.py.
# There isn't much of it: the whole point of the design is to embody most
# of the information about the AIS format in the pseudoinstruction tables.

import binascii
import json
import logging
from types import MappingProxyType

from .bits import sign_extend
from .errors import DecodeError
from .layouts import (array, bitfield, dispatch, group, header, layouts,
                      message_title, partition, spare)
from .misc import inside_polygon

__all__ = ['DecodedMessage', 'aivdm_unpack', 'decode']

log = logging.getLogger(__name__)


def cook(inst, value, width):
    "Turn a raw field value into its reported form."
    if inst.type == 'signed':
        value = sign_extend(value, width)
    if value == inst.oob:
        return None
    if isinstance(inst.formatter, tuple):
        # Codes past the end of a legend table are reported raw
        if value < len(inst.formatter):
            return inst.formatter[value]
        return value
    if inst.formatter is not None:
        return inst.formatter(value)
    return value


def unpack_field(label, bits, values, inst):
    "Consume one bitfield, record its raw value, and return it cooked."
    width = inst.width
    if callable(width):
        width = width(values)
        if width < 0:
            raise DecodeError("Type %s: no room left for field %s."
                              % (label, inst.name))
    if inst.type == 'string':
        value = bits.get_bits_ascii(width)
    elif inst.type == 'raw':
        value = bits.get_bytes(width)
    else:
        if bits.bits_remaining() < width:
            raise DecodeError("Type %s: field %s runs past the end "
                              "of the message." % (label, inst.name))
        value = bits.get_bits(width)
    values[inst.name] = value
    if inst.validator and not inst.validator(value):
        raise DecodeError("Type %s: validation of field %s failed (value %r)."
                          % (label, inst.name, value))
    if inst.type in ('string', 'raw'):
        return value
    return cook(inst, value, width)


def aivdm_unpack(label, bits, values, instructions):
    """Unpack fields from bits according to instructions.

    Raw field values accumulate in values, where conditionals, dispatches
    and computed widths can see them; the cooked fields are returned.
    """
    cooked = {}
    for inst in instructions:
        if inst.conditional is not None and not inst.conditional(inst, values):
            continue
        elif isinstance(inst, spare):
            bits.skip(inst.width)
        elif isinstance(inst, dispatch):
            i = inst.compute(values[inst.fieldname])
            # This is the recursion that lets us handle variant types
            cooked.update(aivdm_unpack(label, bits, values, inst.subtypes[i]))
        elif isinstance(inst, group):
            cooked[inst.name] = aivdm_unpack(label, bits, values,
                                             inst.instructions)
        elif isinstance(inst, array):
            items = []
            for _ in range(inst.count(values)):
                if bits.bits_remaining() < inst.width:
                    raise DecodeError("Type %s: field %s runs past the end "
                                      "of the message." % (label, inst.name))
                items.append(bits.get_bits(inst.width))
            cooked[inst.name] = items
        elif isinstance(inst, bitfield):
            cooked[inst.name] = unpack_field(label, bits, values, inst)
    return cooked


def freeze(value):
    "Read-only view of a cooked value."
    if isinstance(value, dict):
        return MappingProxyType({k: freeze(v) for (k, v) in value.items()})
    if isinstance(value, list):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value):
    "Mutable deep copy of a frozen value."
    if isinstance(value, MappingProxyType):
        return {k: thaw(v) for (k, v) in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value


class DecodedMessage:
    "One decoded AIS message, with both attribute and dictionary behavior."
    __slots__ = ('msgtype', 'raw', '_fields')

    def __init__(self, msgtype, fields, raw=()):
        object.__setattr__(self, 'msgtype', msgtype)
        object.__setattr__(self, 'raw', tuple(raw))
        object.__setattr__(self, '_fields', freeze(fields))

    def __setattr__(self, name, value):
        raise AttributeError("DecodedMessage is read-only")

    def __delattr__(self, name):
        raise AttributeError("DecodedMessage is read-only")

    @property
    def title(self):
        return message_title(self.msgtype)

    def get(self, k, d=None):
        return self._fields.get(k, d)

    def keys(self):
        return self._fields.keys()

    def items(self):
        return self._fields.items()

    def values(self):
        return self._fields.values()

    def __getitem__(self, key):
        "Emulate dictionary."
        return self._fields[key]

    def __contains__(self, key):
        return key in self._fields

    def __iter__(self):
        return iter(self._fields)

    def __len__(self):
        return len(self._fields)

    def __eq__(self, other):
        if not isinstance(other, DecodedMessage):
            return NotImplemented
        return (self.msgtype == other.msgtype
                and self._fields == other._fields)

    def as_dict(self):
        "Deep, mutable copy of the fields."
        return thaw(self._fields)

    def json(self):
        "Render the fields as a JSON object; byte strings become hex."
        def hexify(o):
            if isinstance(o, bytes):
                return binascii.hexlify(o).decode('ascii')
            raise TypeError("%r is not JSON serializable" % (o,))
        return json.dumps(self.as_dict(), default=hexify)

    def has_coordinate(self):
        return self.get('lon') is not None and self.get('lat') is not None

    def coordinate(self):
        "Position as a (lon, lat) pair of floats."
        return (float(self['lon']), float(self['lat']))

    def in_polygon(self, polygon):
        "Is the reported position inside a polygon of (lon, lat) vertices?"
        if not self.has_coordinate():
            return False
        return inside_polygon(self.coordinate(), polygon)

    def __str__(self):
        return "<DecodedMessage: type %d %s>" % (self.msgtype, dict(self._fields))

    __repr__ = __str__


def decode(bits, raw=()):
    """Decode a complete, reassembled payload.

    raw is the sequence of sentences the payload came from.  Raises
    DecodeError when the payload does not fit its message type.
    """
    bits.reset()
    msgtype = bits.get_bits(6)
    if msgtype is None or not 1 <= msgtype <= 27:
        raise DecodeError("AIS Message ID out of range [1,27].")
    view = layouts[msgtype]
    if isinstance(view, partition):
        view = view.select(bits)
    bits.reset()
    length = bits.bits_remaining()
    if not view.accepts(length):
        raise DecodeError("Type %s: unexpected number of bits remaining (%d)."
                          % (view.label, length))
    values = {'length': length}
    cooked = aivdm_unpack(view.label, bits, values,
                          header + view.instructions)
    if view.postprocess is not None:
        cooked = view.postprocess(cooked, values)
    log.debug("decoded type %s message from MMSI %d", view.label, values['mmsi'])
    return DecodedMessage(msgtype, cooked, raw)

# End
