# misc.py - miscellaneous text and geometry helpers
#
# This file is Copyright (c) 2010 by the GPSD project
# BSD terms apply: see the file COPYING in the distribution root for details.

# AIVDM sentences are pure US-ASCII, but they arrive from serial ports and
# sockets as bytes as often as they arrive as text.  The 'latin-1' encoding
# maps all 256 byte values directly to Unicode page 0, so a line can be
# turned into text and back without loss whatever garbage surrounds the
# sentence itself.

BINARY_ENCODING = 'latin-1'


def polystr(o):
    "Convert bytes or str to str with proper encoding."
    if isinstance(o, str):
        return o
    if isinstance(o, (bytes, bytearray)):
        return str(o, encoding=BINARY_ENCODING)
    raise ValueError


def polybytes(o):
    "Convert bytes or str to bytes with proper encoding."
    if isinstance(o, bytes):
        return o
    if isinstance(o, str):
        return bytes(o, encoding=BINARY_ENCODING)
    raise ValueError


def inside_polygon(point, polygon):
    """Even-odd test of a (lon, lat) point against a polygon.

    The polygon is a sequence of (lon, lat) vertices; the closing edge
    from the last vertex back to the first is implied.
    """
    (x, y) = point
    inside = False
    n = len(polygon)
    for i in range(n):
        (xi, yi) = polygon[i]
        (xj, yj) = polygon[(i + 1) % n]
        if (yi < y <= yj) or (yj < y <= yi):
            # x coordinate of the edge where it crosses the horizontal
            # line through the point
            if xi + (y - yi) / (yj - yi) * (xj - xi) < x:
                inside = not inside
    return inside

# End
