# nmea.py - find, split and checksum AIVDM/AIVDO sentences
#
# This file is Copyright (c) 2010 by the GPSD project
# BSD terms apply: see the file COPYING in the distribution root for details.
#
# A sentence looks like this:
#
#   !AIVDM,2,1,3,B,55P5TL01VIaAL@7WKO@mBplU@<PDhh000000001S;AJ::4A80?4i@E53,0*3E
#
# i.e. talker and sentence type, fragment count, fragment number,
# sequential message id, radio channel, armored payload, and the number
# of fill bits followed by '*' and a two-hex-digit checksum.  Receivers
# often prefix their own timestamps or tags, and the USCG feed appends
# metadata after the checksum, so the sentence is searched for rather
# than expected at the start of the line.

import collections
import re

from .bits import BitVector
from .errors import ParseError
from .misc import polystr

AIVDM_RE = re.compile(r"[!$][A-Z]{2}VD[MO],[^*]*\*[0-9A-F]{2}", re.IGNORECASE)


def checksum(body):
    "XOR of every character of a sentence body (between the '!' and the '*')."
    csum = 0
    for c in body:
        csum ^= ord(c)
    return csum


def sentence(body, leader='!'):
    "Wrap a sentence body with its leader and checksum."
    return "%s%s*%02X" % (leader, body, checksum(body))


class Fragment(collections.namedtuple('Fragment', (
        'msgid', 'totno', 'msgno', 'seqno', 'channel',
        'payload', 'fillbits', 'checksum', 'raw'))):
    "One physical sentence, carrying all or part of an AIS message."
    __slots__ = ()

    @property
    def key(self):
        "Identifies the message this fragment belongs to."
        return (self.msgid, self.totno, self.channel, self.seqno)

    @property
    def is_first(self):
        return self.msgno == 1

    @property
    def is_last(self):
        return self.msgno == self.totno

    def bits(self):
        "A fresh bit vector over this fragment's payload."
        return BitVector(self.payload, self.fillbits)


def parse_sentence(line):
    "Extract and validate the sentence in line; raise ParseError if there is none."
    raw = polystr(line)
    match = AIVDM_RE.search(raw)
    if match is None:
        raise ParseError("Unable to parse.")
    text = match.group(0)
    body = text[1:-3]
    fields = body.split(",")
    if len(fields) != 7:
        raise ParseError("Unexpected NMEA sentence.")
    if checksum(body) != int(text[-2:], 16):
        raise ParseError("Invalid checksum.")
    (msgid, totno, msgno, seqno, channel, payload, fillbits) = fields
    try:
        totno = int(totno)
        msgno = int(msgno)
        fillbits = int(fillbits) if fillbits else 0
    except ValueError:
        raise ParseError("Unexpected NMEA sentence.")
    if not 1 <= msgno <= totno or not 0 <= fillbits <= 5:
        raise ParseError("Unexpected NMEA sentence.")
    return Fragment(msgid, totno, msgno, seqno, channel,
                    payload, fillbits, int(text[-2:], 16), raw)

# End
