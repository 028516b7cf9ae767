# Make the decoder's public interface available without prefix.
#
# This file is Copyright (c) 2010 by the GPSD project
# BSD terms apply: see the file COPYING in the distribution root for details.

from .bits import BitVector, decode_byte, encode_byte, sign_extend
from .decoder import DecodedMessage, decode
from .errors import AISError, DecodeError, ParseError, SessionError
from .layouts import message_title
from .nmea import Fragment, checksum, parse_sentence, sentence
from .session import AISDecoder, Session

__version__ = '1.0'
