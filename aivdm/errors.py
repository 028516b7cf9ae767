# errors.py - exceptions raised while unpacking AIVDM traffic
#
# This file is Copyright (c) 2010 by the GPSD project
# BSD terms apply: see the file COPYING in the distribution root for details.


class AISError(Exception):
    "Base class for everything that can go wrong with one AIVDM message."
    def __init__(self, message):
        Exception.__init__(self, message)
        self.message = message

    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, self.message)


class ParseError(AISError):
    "The line holds no usable NMEA sentence, or its checksum is wrong."


class SessionError(AISError):
    "A fragment does not fit the message being reassembled."


class DecodeError(AISError):
    "A reassembled payload does not match the layout of its message type."

# End
