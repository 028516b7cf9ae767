#!/usr/bin/env python3
#
# Test aivdm/session.py
#
# This file is Copyright (c) 2010 by the GPSD project
# BSD terms apply: see the file COPYING in the distribution root for details.

import logging

import pytest

from aivdm.bits import BitVector
from aivdm.errors import SessionError
from aivdm.nmea import parse_sentence, sentence
from aivdm.session import AISDecoder, Session

REFERENCE = "!AIVDM,1,1,,B,35?I5`1003oS2TvCC@Cju5`:0Dtb,0*3F"

# A type 8 broadcast carrying 30 bytes of application data: 296 bits,
# i.e. 50 characters with 4 fill bits.
DATA = bytes(range(1, 31))
BINARY = BitVector.from_bits(
    format(8, "06b") + "00" + format(366123456, "030b") + "00"
    + format(366, "010b") + format(56, "06b")
    + "".join(format(b, "08b") for b in DATA))


def fragments(seqno=4, channel="A", bits=BINARY, split=(20, 40)):
    "Cut a payload into NMEA sentences."
    (a, b) = split
    chunks = [bits.data[:a], bits.data[a:b], bits.data[b:]]
    lines = []
    for (i, chunk) in enumerate(chunks):
        pad = bits.pad if i == len(chunks) - 1 else 0
        lines.append(sentence("AIVDM,%d,%d,%s,%s,%s,%d"
                              % (len(chunks), i + 1, seqno, channel,
                                 chunk, pad)))
    return lines


class Recorder:
    "Collect what the decoder reports."
    def __init__(self):
        self.completed = []
        self.errors = []
        self.decoder = AISDecoder(oncomplete=self.completed.append,
                                  onerror=self.onerror)

    def onerror(self, raw, message):
        self.errors.append((raw, message))


def test_single_fragment():
    rec = Recorder()
    assert rec.decoder.receive(REFERENCE)
    assert len(rec.completed) == 1
    assert rec.completed[0]["mmsi"] == 351684000
    assert rec.completed[0].raw == (REFERENCE,)
    assert rec.errors == []
    assert rec.decoder.pending == 0


def test_three_fragments():
    rec = Recorder()
    lines = fragments()
    assert rec.decoder.receive(lines[0])
    assert rec.decoder.pending == 1
    assert rec.decoder.receive(lines[1])
    assert rec.completed == []
    assert rec.decoder.receive(lines[2])
    assert len(rec.completed) == 1
    msg = rec.completed[0]
    assert msg.msgtype == 8
    assert (msg["dac"], msg["fid"]) == (366, 56)
    assert msg["data"] == DATA
    assert msg.raw == tuple(lines)
    assert rec.errors == []
    assert rec.decoder.pending == 0


def test_reassembled_length():
    fragment = [parse_sentence(line) for line in fragments()]
    session = Session(fragment[0])
    session.append(fragment[1])
    session.append(fragment[2])
    assert session.complete()
    assert len(session.bits) == 296


# A type 8 broadcast received off the air, with the receiver's own
# prefixes left on the first and last lines
CAPTURE = [
    "i-a-!AIVDM,3,1,4,A,88AmaI1KfM4JkIJk0k`gWTN;Hgmg;NGI:H;e:<abTAM,0*3D",
    "!AIVDM,3,2,4,A,Vt9AhaAI=WkPLI1EIfWW1dDCrEW`Qc>GfP>iOmV@Ino,0*43",
    "i-4a!AIVDM,3,3,4,A,WgksFfc=0,2*76",
]


def test_captured_three_fragments():
    rec = Recorder()
    for line in CAPTURE:
        assert rec.decoder.receive(line)
    assert rec.errors == []
    assert len(rec.completed) == 1
    msg = rec.completed[0]
    assert msg.msgtype == 8
    assert msg["mmsi"] == 555575652
    assert (msg["dac"], msg["fid"]) == (366, 57)
    assert len(msg["data"]) == 64
    assert msg.raw == tuple(CAPTURE)


def test_captured_reassembled_length():
    fragment = [parse_sentence(line) for line in CAPTURE]
    session = Session(fragment[0])
    session.append(fragment[1])
    session.append(fragment[2])
    assert session.complete()
    assert len(session.bits) == 568


def test_short_field_is_not_padded_with_fill_bits():
    bits = BitVector.from_bits(
        format(25, "06b") + "00" + format(366123456, "030b") + "10" + "111")
    assert bits.pad == 5
    line = sentence("AIVDM,1,1,,A,%s,%d" % (bits.data, bits.pad))
    rec = Recorder()
    assert not rec.decoder.receive(line)
    assert rec.completed == []
    assert rec.errors == [
        ([line], "Type 25: field dest_mmsi runs past the end of the message.")]


def test_withheld_fragment_stays_pending():
    rec = Recorder()
    lines = fragments()
    rec.decoder.receive(lines[0])
    assert rec.decoder.pending == 1
    assert rec.completed == []
    assert rec.errors == []


def test_out_of_order():
    rec = Recorder()
    lines = fragments()
    assert rec.decoder.receive(lines[0])
    assert not rec.decoder.receive(lines[2])
    assert rec.completed == []
    assert rec.errors == [([lines[0], lines[2]], "Unable to append.")]
    assert rec.decoder.pending == 0
    # The stale session is gone, so the middle fragment is an orphan too
    assert not rec.decoder.receive(lines[1])
    assert rec.errors[-1] == ([lines[1]], "Unable to append.")
    assert rec.completed == []


def test_session_append_raises():
    fragment = [parse_sentence(line) for line in fragments()]
    session = Session(fragment[0])
    with pytest.raises(SessionError):
        session.append(fragment[2])


def test_orphan_continuation():
    rec = Recorder()
    lines = fragments()
    assert not rec.decoder.receive(lines[1])
    assert rec.errors == [([lines[1]], "Unable to append.")]
    assert rec.decoder.pending == 0


def test_supersession():
    rec = Recorder()
    lines = fragments()
    rec.decoder.receive(lines[0])
    rec.decoder.receive(lines[1])
    assert rec.decoder.receive(lines[0])
    assert rec.errors == [([lines[0], lines[1]], "Unterminated message.")]
    assert rec.decoder.pending == 1
    rec.decoder.receive(lines[1])
    rec.decoder.receive(lines[2])
    assert len(rec.completed) == 1


def test_sessions_are_keyed():
    rec = Recorder()
    on_a = fragments(channel="A")
    on_b = fragments(channel="B")
    other = fragments(seqno=5)
    for lines in (on_a, on_b, other):
        rec.decoder.receive(lines[0])
    assert rec.decoder.pending == 3
    for lines in (on_b, other, on_a):
        rec.decoder.receive(lines[1])
        rec.decoder.receive(lines[2])
    assert len(rec.completed) == 3
    assert rec.errors == []


def test_clear():
    rec = Recorder()
    lines = fragments()
    rec.decoder.receive(lines[0])
    rec.decoder.clear()
    assert rec.decoder.pending == 0
    assert not rec.decoder.receive(lines[1])
    assert rec.errors == [([lines[1]], "Unable to append.")]


def test_corrupted_fragment_never_enters_a_session():
    rec = Recorder()
    lines = fragments()
    corrupted = lines[0].replace(",4,A,8", ",4,A,9")
    assert corrupted != lines[0]
    assert not rec.decoder.receive(corrupted)
    assert rec.errors == [([corrupted], "Invalid checksum.")]
    assert rec.decoder.pending == 0


# (line, error reported)
rejected_tests = [
    ("", "Unable to parse."),
    ("garbage", "Unable to parse."),
    (REFERENCE[:-2] + "00", "Invalid checksum."),
    (sentence("AIVDM,1,1,B,35?I5`1003oS2TvCC@Cju5`:0Dtb,0"),
     "Unexpected NMEA sentence."),
    (sentence("AIVDM,1,1,,B,35?I5`1003oS2TvCC@Cju5`:0Dt,0"),
     "Type 3: unexpected number of bits remaining (162)."),
    (sentence("AIVDM,1,1,,B,w5?I5`1003oS2TvCC@Cju5`:0Dtb,0"),
     "AIS Message ID out of range [1,27]."),
    (sentence("AIVDM,1,1,,B,35?I5`1003oS2TvCC@CjX5`:0Dtb,0"),
     "Invalid six-bit character 'X' in payload."),
]


@pytest.mark.parametrize("line, message", rejected_tests)
def test_rejected_lines(line, message):
    rec = Recorder()
    assert not rec.decoder.receive(line)
    assert rec.errors == [([line], message)]
    assert rec.completed == []


def test_callback_setters():
    decoder = AISDecoder()
    assert not decoder.onerror(None)
    assert not decoder.oncomplete("not callable")
    assert decoder.onerror(print)
    assert decoder.oncomplete(lambda msg: None)


def test_no_callbacks(caplog):
    decoder = AISDecoder()
    with caplog.at_level(logging.WARNING, logger="aivdm.session"):
        assert decoder.receive(REFERENCE)
        assert not decoder.receive("garbage")
    assert "Unable to parse." in caplog.text


def test_callback_exceptions_propagate():
    def explode(msg):
        raise RuntimeError("boom")
    decoder = AISDecoder(oncomplete=explode)
    with pytest.raises(RuntimeError):
        decoder.receive(REFERENCE)

# End
