# session.py - reassemble multi-sentence AIVDM messages and decode them
#
# This file is Copyright (c) 2010 by the GPSD project
# BSD terms apply: see the file COPYING in the distribution root for details.
#
# Messages longer than one sentence arrive as numbered fragments that
# share a talker, fragment count, channel and sequential message id.  A
# session collects them in order; when the last one arrives the joined
# payload is decoded and handed to the completion callback.  Anything
# that goes wrong is handed to the error callback together with the raw
# sentences involved.  Pending sessions never time out; a new first
# fragment with the same key, or clear(), is the only way to abandon one.

import logging

from .decoder import decode
from .errors import AISError, SessionError
from .misc import polystr
from .nmea import parse_sentence

__all__ = ['AISDecoder', 'Session']

log = logging.getLogger(__name__)


class Session:
    "Reassembly state for one multi-fragment message."
    def __init__(self, fragment):
        self.key = fragment.key
        self.totno = fragment.totno
        self.msgno = fragment.msgno
        self.seqno = fragment.seqno
        self.bits = fragment.bits()
        self.raw = [fragment.raw]

    def append(self, fragment):
        "Add the next fragment in order; raise SessionError if it is not."
        if fragment.seqno != self.seqno or fragment.msgno != self.msgno + 1:
            raise SessionError("Unable to append.")
        self.bits.append(fragment.bits())
        self.raw.append(fragment.raw)
        self.msgno = fragment.msgno

    def complete(self):
        return self.msgno == self.totno

    def __repr__(self):
        return "<Session %r: %d/%d>" % (self.key, self.msgno, self.totno)


class AISDecoder:
    """Feed it lines, get decoded messages through callbacks.

    oncomplete(message) receives each DecodedMessage; onerror(raw, text)
    receives the list of raw lines involved and a description of what went
    wrong.  Not thread-safe; use one decoder per thread.
    """
    def __init__(self, oncomplete=None, onerror=None):
        self.sessions = {}
        self._oncomplete = None
        self._onerror = None
        self.oncomplete(oncomplete)
        self.onerror(onerror)

    def oncomplete(self, callback):
        "Set the completion callback; return whether it is usable."
        self._oncomplete = callback if callable(callback) else None
        return self._oncomplete is not None

    def onerror(self, callback):
        "Set the error callback; return whether it is usable."
        self._onerror = callback if callable(callback) else None
        return self._onerror is not None

    @property
    def pending(self):
        "Number of sessions waiting for more fragments."
        return len(self.sessions)

    def clear(self):
        "Abandon all pending sessions without reporting them."
        log.debug("dropping %d pending sessions", len(self.sessions))
        self.sessions.clear()

    def error(self, raw, message):
        if self._onerror is not None:
            self._onerror(list(raw), message)
        else:
            log.warning("%s %s", message, " ".join(r.strip() for r in raw))

    def receive(self, line):
        """Process one line of input.

        Returns True if the line was accepted (whether or not it completed
        a message), False if it, or the message it completed, was rejected.
        """
        try:
            fragment = parse_sentence(line)
        except AISError as e:
            self.error([polystr(line)], e.message)
            return False

        if fragment.is_first:
            stale = self.sessions.pop(fragment.key, None)
            if stale is not None:
                log.debug("%r superseded", stale)
                self.error(stale.raw, "Unterminated message.")
            session = Session(fragment)
            log.debug("%r started", session)
        else:
            session = self.sessions.pop(fragment.key, None)
            try:
                if session is None:
                    raise SessionError("Unable to append.")
                session.append(fragment)
            except SessionError as e:
                raw = session.raw if session is not None else []
                log.debug("orphan fragment %d/%d", fragment.msgno,
                          fragment.totno)
                self.error(raw + [fragment.raw], e.message)
                return False

        if not session.complete():
            self.sessions[fragment.key] = session
            return True

        try:
            message = decode(session.bits, session.raw)
        except AISError as e:
            self.error(session.raw, e.message or "Unable to decode.")
            return False
        if self._oncomplete is not None:
            self._oncomplete(message)
        return True

# End
