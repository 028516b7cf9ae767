# layouts.py - declarative descriptions of the 27 AIVDM message types
#
# This file is Copyright (c) 2010 by the GPSD project
# BSD terms apply: see the file COPYING in the distribution root for details.
#
# The decoder works by defining a declarative pseudolanguage in which
# to describe the process of extracting packed bitfields from an AIS
# message, a set of tables which contain instructions in the pseudolanguage,
# and a small amount of code (in decoder.py) for interpreting it.
#
# Widths are bit counts.  Where a width depends on the message, as for the
# trailing text and data fields, it is given as a function of the raw
# values unpacked so far; values["length"] always holds the total number
# of payload bits.

from .errors import DecodeError

# Here are the pseudoinstructions in the pseudolanguage.


class bitfield:
    "Object defining the interpretation of an AIS bitfield."
    # The oob (out-of-band) member isn't used in data extraction.  A field
    # whose value equals it is reported as None, meaning "not available".
    def __init__(self, name, width, dtype, oob, legend,
                 validator=None, formatter=None, conditional=None):
        self.name = name		# Fieldname, for internal use and JSON
        self.width = width		# Bit width, or function of values
        self.type = dtype		# Data type: signed/unsigned/string/raw
        self.oob = oob			# Out-of-band value to be shown as None
        self.legend = legend		# Human-friendly description of field
        self.validator = validator	# Validation checker
        self.formatter = formatter	# Legend tuple or custom hook
        self.conditional = conditional	# Evaluation guard for this field


class spare:
    "Describes spare bits, not to be interpreted."
    def __init__(self, width, conditional=None):
        self.width = width
        self.conditional = conditional	# Evaluation guard for this field


class dispatch:
    "Describes how to dispatch to a message type variant on a subfield value."
    def __init__(self, fieldname, subtypes, compute=lambda x: x,
                 conditional=None):
        self.fieldname = fieldname	# Value of view to dispatch on
        self.subtypes = subtypes	# Possible subtypes to dispatch to
        self.compute = compute		# Pass value through this pre-dispatch
        self.conditional = conditional	# Evaluation guard for this field


class group:
    "Fields reported together as one nested mapping."
    def __init__(self, name, instructions, legend, conditional=None):
        self.name = name
        self.instructions = instructions
        self.legend = legend
        self.conditional = conditional


class array:
    "A run of identically shaped unsigned fields reported as a list."
    def __init__(self, name, width, count, legend, conditional=None):
        self.name = name
        self.width = width
        self.count = count		# Function of values
        self.legend = legend
        self.conditional = conditional


class layout:
    "Everything needed to decode one message type."
    def __init__(self, label, instructions, length, postprocess=None):
        self.label = label		# Used in error messages
        self.instructions = instructions
        self.length = length		# Bit count, (min, max) or a set
        self.postprocess = postprocess	# Hook run on the cooked fields

    def accepts(self, length):
        "Is a payload of this many bits acceptable?"
        if isinstance(self.length, int):
            return length == self.length
        if isinstance(self.length, tuple):
            return self.length[0] <= length <= self.length[1]
        return length in self.length


class partition:
    "A message type whose layout is selected by a field inside the payload."
    def __init__(self, label, start, width, variants):
        self.label = label
        self.start = start
        self.width = width
        self.variants = variants

    def select(self, bits):
        "Pick the layout variant for this payload."
        partno = bits.ubits(self.start, self.width)
        if partno not in self.variants:
            raise DecodeError("Type %s: unknown part number %s."
                              % (self.label, partno))
        return self.variants[partno]

# Message-type-specific information begins here. There are four
# different kinds of things in it: (1) string tables for expanding
# enumerated-type codes, (2) hook functions, (3) instruction tables,
# and (4) the per-type layout declarations.
#
# A legend tuple is indexed by the field value; codes past its end are
# reported as the raw number.

status_legends = (
    "Under way using engine",
    "At anchor",
    "Not under command",
    "Restricted manoeuverability",
    "Constrained by her draught",
    "Moored",
    "Aground",
    "Engaged in fishing",
    "Under way sailing",
    "Reserved for future amendment of Navigational Status for HSC",
    "Reserved for future amendment of Navigational Status for WIG",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "AIS-SART is active",
    "Not defined (default)",
    )

maneuver_legends = (
    "Not available (default)",
    "No special maneuver",
    "Special maneuver (such as regional passing arrangement)",
    )

epfd_legends = (
    "Undefined (default)",
    "GPS",
    "GLONASS",
    "Combined GPS/GLONASS",
    "Loran-C",
    "Chayka",
    "Integrated navigation system",
    "Surveyed",
    "Galileo",
    )

second_legends = {
    60: "Time stamp is not available (default)",
    61: "Positioning system is in manual input mode",
    62: "Electronic Position Fixing System operates in estimated "
        "(dead reckoning) mode",
    63: "Positioning system is inoperative",
    }

ship_type_legends = (
    "Not available (default)",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Wing in ground (WIG), all ships of this type",
    "Wing in ground (WIG), Hazardous category A",
    "Wing in ground (WIG), Hazardous category B",
    "Wing in ground (WIG), Hazardous category C",
    "Wing in ground (WIG), Hazardous category D",
    "Wing in ground (WIG), Reserved for future use",
    "Wing in ground (WIG), Reserved for future use",
    "Wing in ground (WIG), Reserved for future use",
    "Wing in ground (WIG), Reserved for future use",
    "Wing in ground (WIG), Reserved for future use",
    "Fishing",
    "Towing",
    "Towing: length exceeds 200m or breadth exceeds 25m",
    "Dredging or underwater ops",
    "Diving ops",
    "Military ops",
    "Sailing",
    "Pleasure Craft",
    "Reserved",
    "Reserved",
    "High speed craft (HSC), all ships of this type",
    "High speed craft (HSC), Hazardous category A",
    "High speed craft (HSC), Hazardous category B",
    "High speed craft (HSC), Hazardous category C",
    "High speed craft (HSC), Hazardous category D",
    "High speed craft (HSC), Reserved for future use",
    "High speed craft (HSC), Reserved for future use",
    "High speed craft (HSC), Reserved for future use",
    "High speed craft (HSC), Reserved for future use",
    "High speed craft (HSC), No additional information",
    "Pilot Vessel",
    "Search and Rescue vessel",
    "Tug",
    "Port Tender",
    "Anti-pollution equipment",
    "Law Enforcement",
    "Spare - Local Vessel",
    "Spare - Local Vessel",
    "Medical Transport",
    "Noncombatant ship according to RR Resolution No. 18",
    "Passenger, all ships of this type",
    "Passenger, Hazardous category A",
    "Passenger, Hazardous category B",
    "Passenger, Hazardous category C",
    "Passenger, Hazardous category D",
    "Passenger, Reserved for future use",
    "Passenger, Reserved for future use",
    "Passenger, Reserved for future use",
    "Passenger, Reserved for future use",
    "Passenger, No additional information",
    "Cargo, all ships of this type",
    "Cargo, Hazardous category A",
    "Cargo, Hazardous category B",
    "Cargo, Hazardous category C",
    "Cargo, Hazardous category D",
    "Cargo, Reserved for future use",
    "Cargo, Reserved for future use",
    "Cargo, Reserved for future use",
    "Cargo, Reserved for future use",
    "Cargo, No additional information",
    "Tanker, all ships of this type",
    "Tanker, Hazardous category A",
    "Tanker, Hazardous category B",
    "Tanker, Hazardous category C",
    "Tanker, Hazardous category D",
    "Tanker, Reserved for future use",
    "Tanker, Reserved for future use",
    "Tanker, Reserved for future use",
    "Tanker, Reserved for future use",
    "Tanker, No additional information",
    "Other Type, all ships of this type",
    "Other Type, Hazardous category A",
    "Other Type, Hazardous category B",
    "Other Type, Hazardous category C",
    "Other Type, Hazardous category D",
    "Other Type, Reserved for future use",
    "Other Type, Reserved for future use",
    "Other Type, Reserved for future use",
    "Other Type, Reserved for future use",
    "Other Type, No additional information",
    )

aid_type_legends = (
    "Default, Type of Aid to Navigation not specified",
    "Reference point",
    "RACON (radar transponder marking a navigation hazard)",
    "Fixed structure off shore, such as oil platforms, wind farms, rigs",
    "Spare, Reserved for future use",
    "Light, without sectors",
    "Light, with sectors",
    "Leading Light Front",
    "Leading Light Rear",
    "Beacon, Cardinal N",
    "Beacon, Cardinal E",
    "Beacon, Cardinal S",
    "Beacon, Cardinal W",
    "Beacon, Port hand",
    "Beacon, Starboard hand",
    "Beacon, Preferred Channel port hand",
    "Beacon, Preferred Channel starboard hand",
    "Beacon, Isolated danger",
    "Beacon, Safe water",
    "Beacon, Special mark",
    "Cardinal Mark N",
    "Cardinal Mark E",
    "Cardinal Mark S",
    "Cardinal Mark W",
    "Port hand Mark",
    "Starboard hand Mark",
    "Preferred Channel Port hand",
    "Preferred Channel Starboard hand",
    "Isolated danger",
    "Safe Water",
    "Special Mark",
    "Light Vessel / LANBY / Rigs",
    )

station_type_legends = (
    "All types of mobiles (default)",
    "Reserved for future use",
    "All types of Class B mobile stations",
    "SAR airborne mobile station",
    "Aid to Navigation station",
    "Class B shipborne mobile station (IEC62287 only)",
    "Regional use and inland waterways",
    "Regional use and inland waterways",
    "Regional use and inland waterways",
    "Regional use and inland waterways",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    )

interval_legends = (
    "As given by the autonomous mode",
    "10 Minutes",
    "6 Minutes",
    "3 Minutes",
    "1 Minute",
    "30 Seconds",
    "15 Seconds",
    "10 Seconds",
    "5 Seconds",
    "Next Shorter Reporting Interval",
    "Next Longer Reporting Interval",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    "Reserved for future use",
    )

txrx_legends = (
    "TxA/TxB, RxA/RxB (default)",
    "TxA, RxA/RxB",
    "TxB, RxA/RxB",
    "Reserved for future use",
    )

# One-bit flags
accuracy_legends = ("Unaugmented GNSS fix (accuracy > 10m)",
                    "DGPS-quality fix (accuracy < 10m)")
raim_legends = ("RAIM not in use (default)", "RAIM in use")
dte_legends = ("Data terminal ready", "Not ready (default)")
assigned_legends = ("Autonomous mode (default)", "Assigned mode")
retransmit_legends = ("No retransmit (default)", "Retransmitted")
cs_legends = ("Class B SOTDMA", "Class B CS (Carrier Sense) unit")
display_legends = ("No visual display", "Has display")
yes_no_legends = ("No", "Yes")
off_position_legends = ("On position", "Off position")
virtual_aid_legends = (
    "Real Aid to Navigation at indicated position (default)",
    "Virtual Aid to Navigation simulated by nearby AIS station")
power_legends = ("Low", "High")
addressed_legends = ("Broadcast", "Addressed")
comm_state_legends = ("SOTDMA", "ITDMA")
gnss_legends = ("Current GNSS position", "Not GNSS position (default)")


def latlon_format(n):
    "High-precision position, 1/10000 minute."
    return n / 600000.0


def short_latlon_format(n):
    "Low-precision position, 1/10 minute."
    return n / 600.0


def lon_check(formatter):
    "Wrap a position formatter so impossible longitudes come back as None."
    def checked(n):
        value = formatter(n)
        return None if abs(value) > 180 else value
    return checked


def lat_check(formatter):
    "Wrap a position formatter so impossible latitudes come back as None."
    def checked(n):
        value = formatter(n)
        return None if abs(value) > 90 else value
    return checked


lon_format = lon_check(latlon_format)
lat_format = lat_check(latlon_format)
short_lon_format = lon_check(short_latlon_format)
short_lat_format = lat_check(short_latlon_format)


def tenths_format(n):
    return n / 10.0


def second_format(n):
    return second_legends.get(n, n)


def shiptype_format(n):
    if n < len(ship_type_legends):
        return ship_type_legends[n]
    return "Not available (default)"


def zcount_format(n):
    "Z count, 0.6 seconds per unit."
    return n * 6 / 10.0


def text_width(fixed):
    "Width of a trailing text field: whole characters after fixed bits."
    return lambda v: max(0, v["length"] - fixed) // 6 * 6


def length_at_least(bits):
    return lambda i, v: v["length"] >= bits


# Common header of every message type
header = (
    bitfield("type",      6, 'unsigned', None, "Message Type"),
    bitfield("repeat",    2, 'unsigned', None, "Repeat Indicator"),
    bitfield("mmsi",     30, 'unsigned', None, "MMSI"),
    )

# Communication state, selected by message type or by a flag bit
sotdma = (
    bitfield("sync_state",    2, 'unsigned', None, "Sync state"),
    bitfield("slot_timeout",  3, 'unsigned', None, "Slot time-out"),
    bitfield("sub_message",  14, 'unsigned', None, "Sub message"),
    )

itdma = (
    bitfield("sync_state",    2, 'unsigned', None, "Sync state"),
    bitfield("slot_alloc",   13, 'unsigned', None, "Slot increment"),
    bitfield("num_slots",     3, 'unsigned', None, "Number of slots"),
    bitfield("keep_flag",     1, 'unsigned', None, "Keep flag"),
    )

# Radio status chosen by the comm_state flag, as in types 9, 18 and 26
selected_radio = group("radio", (dispatch("comm_state", [sotdma, itdma]),),
                       "Radio status")

antenna = group("antenna", (
    bitfield("to_bow",        9, 'unsigned', None, "Dimension to Bow"),
    bitfield("to_stern",      9, 'unsigned', None, "Dimension to Stern"),
    bitfield("to_port",       6, 'unsigned', None, "Dimension to Port"),
    bitfield("to_starboard",  6, 'unsigned', None, "Dimension to Starboard"),
    ), "Dimensions")

# Common Navigation Block is the format for AIS types 1, 2, and 3
cnb = (
    bitfield("status",   4, 'unsigned', None,      "Navigation Status",
             formatter=status_legends),
    bitfield("turn",     8, 'signed',   -128,      "Rate of Turn"),
    bitfield("speed",   10, 'unsigned', 1023,      "Speed Over Ground",
             formatter=tenths_format),
    bitfield("accuracy", 1, 'unsigned', None,      "Position Accuracy",
             formatter=accuracy_legends),
    bitfield("lon",     28, 'signed',   None,      "Longitude",
             formatter=lon_format),
    bitfield("lat",     27, 'signed',   None,      "Latitude",
             formatter=lat_format),
    bitfield("course",  12, 'unsigned', 3600,      "Course Over Ground",
             formatter=tenths_format),
    bitfield("heading",  9, 'unsigned', 511,       "True Heading"),
    bitfield("second",   6, 'unsigned', None,      "Time Stamp",
             formatter=second_format),
    bitfield("maneuver", 2, 'unsigned', None,      "Maneuver Indicator",
             formatter=maneuver_legends),
    spare(3),
    bitfield("raim",     1, 'unsigned', None,      "RAIM flag",
             formatter=raim_legends),
    group("radio", (dispatch("type", [sotdma, itdma],
                             lambda t: 1 if t == 3 else 0),),
          "Radio status"),
    )

type4 = (
    bitfield("year",    14,  "unsigned", None,      "Year"),
    bitfield("month",    4,  "unsigned", None,      "Month"),
    bitfield("day",      5,  "unsigned", None,      "Day"),
    bitfield("hour",     5,  "unsigned", None,      "Hour"),
    bitfield("minute",   6,  "unsigned", None,      "Minute"),
    bitfield("second",   6,  "unsigned", None,      "Second"),
    bitfield("accuracy", 1,  "unsigned", None,      "Fix quality",
             formatter=accuracy_legends),
    bitfield("lon",     28,  "signed",   None,      "Longitude",
             formatter=lon_format),
    bitfield("lat",     27,  "signed",   None,      "Latitude",
             formatter=lat_format),
    bitfield("epfd",     4,  "unsigned", None,      "Type of EPFD",
             formatter=epfd_legends),
    spare(10),
    bitfield("raim",     1,  "unsigned", None,      "RAIM flag",
             formatter=raim_legends),
    group("radio", sotdma, "SOTDMA state"),
    )

type5 = (
    bitfield("ais_version",   2, 'unsigned', None, "AIS Version"),
    bitfield("imo",          30, 'unsigned', None, "IMO Identification Number"),
    bitfield("callsign",     42, 'string',   None, "Call Sign"),
    bitfield("shipname",    120, 'string',   None, "Vessel Name"),
    bitfield("shiptype",      8, 'unsigned', None, "Ship Type",
             formatter=shiptype_format),
    antenna,
    bitfield("epfd",          4, 'unsigned', None, "Position Fix Type",
             formatter=epfd_legends),
    group("eta", (
        bitfield("month",     4, 'unsigned', None, "ETA month"),
        bitfield("day",       5, 'unsigned', None, "ETA day"),
        bitfield("hour",      5, 'unsigned', None, "ETA hour"),
        bitfield("minute",    6, 'unsigned', None, "ETA minute"),
        ), "Estimated Time of Arrival"),
    bitfield("draught",       8, 'unsigned', None, "Draught",
             formatter=tenths_format),
    # Some transmitters cut the message short inside the destination
    bitfield("destination",
             lambda v: min(120, max(0, v["length"] - 302) // 6 * 6),
             'string', None, "Destination"),
    bitfield("dte",           1, 'unsigned', None, "DTE",
             formatter=dte_legends, conditional=length_at_least(423)),
    )

type6 = (
    bitfield("seqno",            2, 'unsigned', None, "Sequence Number"),
    bitfield("dest_mmsi",       30, 'unsigned', None, "Destination MMSI"),
    bitfield("retransmit",       1, 'unsigned', None, "Retransmit flag",
             formatter=retransmit_legends),
    spare(1),
    bitfield("dac",             10, 'unsigned', None, "DAC"),
    bitfield("fid",              6, 'unsigned', None, "Functional ID"),
    bitfield("data",            -1, 'raw',      None, "Data"),
    )

# Types 7 and 13 carry from one to four acknowledgements
type7 = (spare(2),)
for n in range(1, 5):
    type7 += (
        bitfield("mmsi%d" % n,    30, 'unsigned', None, "MMSI number %d" % n,
                 conditional=length_at_least(40 + 32 * n)),
        bitfield("mmsiseq%d" % n,  2, 'unsigned', None,
                 "Sequence number %d" % n,
                 conditional=length_at_least(40 + 32 * n)),
        )

type8 = (
    spare(2),
    bitfield("dac",            10,  'unsigned', None,  "DAC",
             conditional=length_at_least(56)),
    bitfield("fid",             6,  'unsigned', None,  "Functional ID",
             conditional=length_at_least(56)),
    bitfield("data",           -1,  'raw',      None,  "Data"),
    )

type9 = (
    bitfield("alt",      12, 'unsigned', 4095,     "Altitude"),
    bitfield("speed",    10, 'unsigned', 1023,     "SOG"),
    bitfield("accuracy",  1, 'unsigned', None,     "Position Accuracy",
             formatter=accuracy_legends),
    bitfield("lon",      28, 'signed',   None,     "Longitude",
             formatter=lon_format),
    bitfield("lat",      27, 'signed',   None,     "Latitude",
             formatter=lat_format),
    bitfield("course",   12, 'unsigned', 3600,     "Course Over Ground",
             formatter=tenths_format),
    bitfield("second",    6, 'unsigned', None,     "Time Stamp",
             formatter=second_format),
    bitfield("regional",  8, 'unsigned', None,     "Regional reserved"),
    bitfield("dte",       1, 'unsigned', None,     "DTE",
             formatter=dte_legends),
    spare(3),
    bitfield("assigned",  1, 'unsigned', None,     "Assigned",
             formatter=assigned_legends),
    bitfield("raim",      1, 'unsigned', None,     "RAIM flag",
             formatter=raim_legends),
    bitfield("comm_state", 1, 'unsigned', None,    "Communication state",
             formatter=comm_state_legends),
    selected_radio,
    )

type10 = (
    spare(2),
    bitfield("dest_mmsi",   30, 'unsigned', None, "Destination MMSI"),
    spare(2),
    )

type12 = (
    bitfield("seqno",          2, 'unsigned', None, "Sequence Number"),
    bitfield("dest_mmsi",     30, 'unsigned', None, "Destination MMSI"),
    bitfield("retransmit",     1, 'unsigned', None, "Retransmit flag",
             formatter=retransmit_legends),
    spare(1),
    bitfield("text", text_width(72), 'string', None, "Text"),
    )

type14 = (
    spare(2),
    bitfield("text", text_width(40), 'string', None, "Text"),
    )

type15 = (
    spare(2),
    bitfield("mmsi1",      30, 'unsigned', None, "First interrogated MMSI"),
    bitfield("type1_1",     6, 'unsigned', None, "First message type"),
    bitfield("offset1_1",  12, 'unsigned', None, "First slot offset"),
    spare(2, conditional=length_at_least(108)),
    bitfield("type1_2",     6, 'unsigned', None, "Second message type",
             conditional=length_at_least(108)),
    bitfield("offset1_2",  12, 'unsigned', None, "Second slot offset",
             conditional=length_at_least(108)),
    spare(2, conditional=length_at_least(158)),
    bitfield("mmsi2",      30, 'unsigned', None, "Second interrogated MMSI",
             conditional=length_at_least(158)),
    bitfield("type2_1",     6, 'unsigned', None, "Message type",
             conditional=length_at_least(158)),
    bitfield("offset2_1",  12, 'unsigned', None, "Slot offset",
             conditional=length_at_least(158)),
    )

type16 = (
    spare(2),
    bitfield("mmsi1",      30, 'unsigned', None, "Destination A MMSI"),
    bitfield("offset1",    12, 'unsigned', None, "Offset A"),
    bitfield("increment1", 10, 'unsigned', None, "Increment A"),
    bitfield("mmsi2",      30, 'unsigned', None, "Destination B MMSI",
             conditional=lambda i, v: v["length"] == 144),
    bitfield("offset2",    12, 'unsigned', None, "Offset B",
             conditional=lambda i, v: v["length"] == 144),
    bitfield("increment2", 10, 'unsigned', None, "Increment B",
             conditional=lambda i, v: v["length"] == 144),
    )


def type17_word_count(values):
    "Number of 24-bit DGNSS words, which must exactly fill the message."
    n = values["n_words"]
    if values["length"] != 120 + 24 * n:
        raise DecodeError("Type 17: %d data words do not fit %d bits."
                          % (n, values["length"]))
    return n


type17 = (
    spare(2),
    bitfield("lon",         18, 'signed',   None, "Longitude",
             formatter=short_lon_format),
    bitfield("lat",         17, 'signed',   None, "Latitude",
             formatter=short_lat_format),
    spare(5),
    group("data", (
        bitfield("msg_type",  6, 'unsigned', None, "DGNSS message type"),
        bitfield("staid",    10, 'unsigned', None, "Station ID"),
        bitfield("z_count",  13, 'unsigned', None, "Z count",
                 formatter=zcount_format),
        bitfield("seq_no",    3, 'unsigned', None, "Sequence number"),
        bitfield("n_words",   5, 'unsigned', None, "Number of words"),
        bitfield("health",    3, 'unsigned', None, "Station health"),
        array("words", 24, type17_word_count, "DGNSS data words"),
        ), "DGNSS correction data",
        conditional=lambda i, v: v["length"] > 80),
    )

type18 = (
    spare(8),
    bitfield("speed",     10, 'unsigned', 1023, "Speed Over Ground",
             formatter=tenths_format),
    bitfield("accuracy",   1, 'unsigned', None, "Position Accuracy",
             formatter=accuracy_legends),
    bitfield("lon",       28, 'signed',   None, "Longitude",
             formatter=lon_format),
    bitfield("lat",       27, 'signed',   None, "Latitude",
             formatter=lat_format),
    bitfield("course",    12, 'unsigned', 3600, "Course Over Ground",
             formatter=tenths_format),
    bitfield("heading",    9, 'unsigned', 511,  "True Heading"),
    bitfield("second",     6, 'unsigned', None, "Time Stamp",
             formatter=second_format),
    bitfield("regional",   2, 'unsigned', None, "Regional reserved"),
    bitfield("cs",         1, 'unsigned', None, "CS Unit",
             formatter=cs_legends),
    bitfield("display",    1, 'unsigned', None, "Display flag",
             formatter=display_legends),
    bitfield("dsc",        1, 'unsigned', None, "DSC flag",
             formatter=yes_no_legends),
    bitfield("band",       1, 'unsigned', None, "Band flag",
             formatter=yes_no_legends),
    bitfield("msg22",      1, 'unsigned', None, "Message 22 flag",
             formatter=yes_no_legends),
    bitfield("assigned",   1, 'unsigned', None, "Assigned",
             formatter=assigned_legends),
    bitfield("raim",       1, 'unsigned', None, "RAIM flag",
             formatter=raim_legends),
    bitfield("comm_state", 1, 'unsigned', None, "Communication state",
             formatter=comm_state_legends),
    selected_radio,
    )

type19 = (
    spare(8),
    bitfield("speed",     10, 'unsigned', 1023, "Speed Over Ground",
             formatter=tenths_format),
    bitfield("accuracy",   1, 'unsigned', None, "Position Accuracy",
             formatter=accuracy_legends),
    bitfield("lon",       28, 'signed',   None, "Longitude",
             formatter=lon_format),
    bitfield("lat",       27, 'signed',   None, "Latitude",
             formatter=lat_format),
    bitfield("course",    12, 'unsigned', 3600, "Course Over Ground",
             formatter=tenths_format),
    bitfield("heading",    9, 'unsigned', 511,  "True Heading"),
    bitfield("second",     6, 'unsigned', None, "Time Stamp",
             formatter=second_format),
    bitfield("regional",   4, 'unsigned', None, "Regional reserved"),
    bitfield("shipname", 120, 'string',   None, "Vessel Name"),
    bitfield("shiptype",   8, 'unsigned', None, "Ship Type",
             formatter=shiptype_format),
    antenna,
    bitfield("epfd",       4, 'unsigned', None, "Position Fix Type",
             formatter=epfd_legends),
    bitfield("raim",       1, 'unsigned', None, "RAIM flag",
             formatter=raim_legends),
    bitfield("dte",        1, 'unsigned', None, "DTE",
             formatter=dte_legends),
    bitfield("assigned",   1, 'unsigned', None, "Assigned",
             formatter=assigned_legends),
    spare(4),
    )

# Type 20 reserves from one to four blocks of slots
type20 = (spare(2),)
for n in range(1, 5):
    type20 += (
        bitfield("offset%d" % n,    12, 'unsigned', None,
                 "Offset number %d" % n,
                 conditional=length_at_least(40 + 30 * n)),
        bitfield("number%d" % n,     4, 'unsigned', None,
                 "Reserved slots %d" % n,
                 conditional=length_at_least(40 + 30 * n)),
        bitfield("timeout%d" % n,    3, 'unsigned', None,
                 "Time-out %d" % n,
                 conditional=length_at_least(40 + 30 * n)),
        bitfield("increment%d" % n, 11, 'unsigned', None,
                 "Increment %d" % n,
                 conditional=length_at_least(40 + 30 * n)),
        )
del n


def type21_postprocess(cooked, values):
    "Join the name extension onto the name; off_position needs a valid second."
    cooked["name"] = (cooked["name"] + cooked.pop("name_ext")).rstrip()
    if values["second"] >= 60:
        del cooked["off_position"]
    return cooked


type21 = (
    bitfield("aid_type",      5, 'unsigned', None, "Aid type",
             formatter=aid_type_legends),
    bitfield("name",        120, 'string',   None, "Name"),
    bitfield("accuracy",      1, 'unsigned', None, "Position Accuracy",
             formatter=accuracy_legends),
    bitfield("lon",          28, 'signed',   None, "Longitude",
             formatter=lon_format),
    bitfield("lat",          27, 'signed',   None, "Latitude",
             formatter=lat_format),
    antenna,
    bitfield("epfd",          4, 'unsigned', None, "Position Fix Type",
             formatter=epfd_legends),
    bitfield("second",        6, 'unsigned', None, "UTC Second",
             formatter=second_format),
    bitfield("off_position",  1, 'unsigned', None, "Off-Position Indicator",
             formatter=off_position_legends),
    bitfield("regional",      8, 'unsigned', None, "Regional reserved"),
    bitfield("raim",          1, 'unsigned', None, "RAIM flag",
             formatter=raim_legends),
    bitfield("virtual_aid",   1, 'unsigned', None, "Virtual-aid flag",
             formatter=virtual_aid_legends),
    bitfield("assigned",      1, 'unsigned', None, "Assigned",
             formatter=assigned_legends),
    spare(1),
    bitfield("name_ext", text_width(272), 'string', None,
             "Name Extension"),
    )


def type22_postprocess(cooked, values):
    "An addressed channel management message names two stations, not an area."
    if values["addressed"]:
        for corner in ("ne_lon", "ne_lat", "sw_lon", "sw_lat"):
            del cooked[corner]
        cooked["dest1"] = (values["ne_lon"] << 12) | (values["ne_lat"] >> 5)
        cooked["dest2"] = (values["sw_lon"] << 12) | (values["sw_lat"] >> 5)
    return cooked


type22 = (
    spare(2),
    bitfield("channel_a",   12, 'unsigned', None, "Channel A"),
    bitfield("channel_b",   12, 'unsigned', None, "Channel B"),
    bitfield("txrx",         4, 'unsigned', None, "Tx/Rx mode",
             formatter=lambda n: txrx_legends[n & 0x03]),
    bitfield("power",        1, 'unsigned', None, "Power",
             formatter=power_legends),
    bitfield("ne_lon",      18, 'signed',   None, "NE Longitude",
             formatter=short_lon_format),
    bitfield("ne_lat",      17, 'signed',   None, "NE Latitude",
             formatter=short_lat_format),
    bitfield("sw_lon",      18, 'signed',   None, "SW Longitude",
             formatter=short_lon_format),
    bitfield("sw_lat",      17, 'signed',   None, "SW Latitude",
             formatter=short_lat_format),
    bitfield("addressed",    1, 'unsigned', None, "Addressed",
             formatter=addressed_legends),
    bitfield("band_a",       1, 'unsigned', None, "Channel A Band"),
    bitfield("band_b",       1, 'unsigned', None, "Channel B Band"),
    bitfield("zonesize",     3, 'unsigned', None, "Zone size"),
    spare(23),
    )

type23 = (
    spare(2),
    bitfield("ne_lon",      18, 'signed',   None, "NE Longitude",
             formatter=short_lon_format),
    bitfield("ne_lat",      17, 'signed',   None, "NE Latitude",
             formatter=short_lat_format),
    bitfield("sw_lon",      18, 'signed',   None, "SW Longitude",
             formatter=short_lon_format),
    bitfield("sw_lat",      17, 'signed',   None, "SW Latitude",
             formatter=short_lat_format),
    bitfield("stationtype",  4, 'unsigned', None, "Station Type",
             formatter=station_type_legends),
    bitfield("shiptype",     8, 'unsigned', None, "Ship Type",
             formatter=shiptype_format),
    spare(22),
    bitfield("txrx",         2, 'unsigned', None, "Tx/Rx mode",
             formatter=txrx_legends),
    bitfield("interval",     4, 'unsigned', None, "Reporting interval",
             formatter=interval_legends),
    bitfield("quiet",        4, 'unsigned', None, "Quiet time"),
    spare(6),
    )

type24a = (
    bitfield("partno",        2, 'unsigned', None, "Part Number"),
    bitfield("shipname",    120, 'string',   None, "Vessel Name"),
    )

type24b = (
    bitfield("partno",        2, 'unsigned', None, "Part Number"),
    bitfield("shiptype",      8, 'unsigned', None, "Ship Type",
             formatter=shiptype_format),
    bitfield("vendorid",     18, 'string',   None, "Vendor ID"),
    bitfield("model",         4, 'unsigned', None, "Unit Model Code"),
    bitfield("serial",       20, 'unsigned', None, "Serial Number"),
    bitfield("callsign",     42, 'string',   None, "Call Sign"),
    # Auxiliary craft (MMSI 98xxxxxxx) name their mothership instead
    dispatch("mmsi", [
        (antenna,),
        (bitfield("mothership_mmsi", 30, 'unsigned', None,
                  "Mothership MMSI"),),
        ], lambda m: 1 if m // 1000000 == 98 else 0),
    spare(6),
    )

type25 = (
    bitfield("addressed",     1, 'unsigned', None, "Addressing flag",
             formatter=addressed_legends),
    bitfield("structured",    1, 'unsigned', None, "Binary data flag"),
    bitfield("dest_mmsi",    30, 'unsigned', None, "Destination MMSI",
             conditional=lambda i, v: v["addressed"]),
    bitfield("dac",          10, 'unsigned', None, "DAC",
             conditional=lambda i, v: v["structured"]),
    bitfield("fid",           6, 'unsigned', None, "Functional ID",
             conditional=lambda i, v: v["structured"]),
    bitfield("data",         -1, 'raw',      None, "Data"),
    )

# Type 26 ends with 20 bits of communication state after the data
type26 = type25[:-1] + (
    bitfield("data",
             lambda v: (v["length"] - 40 - 30 * v["addressed"]
                        - 16 * v["structured"] - 20),
             'raw', None, "Data"),
    bitfield("comm_state",    1, 'unsigned', None, "Communication state",
             formatter=comm_state_legends),
    selected_radio,
    )

type27 = (
    bitfield("accuracy",  1, 'unsigned', None, "Position Accuracy",
             formatter=accuracy_legends),
    bitfield("raim",      1, 'unsigned', None, "RAIM flag",
             formatter=raim_legends),
    bitfield("status",    4, 'unsigned', None, "Navigation Status",
             formatter=status_legends),
    bitfield("lon",      18, 'signed',   None, "Longitude",
             formatter=short_lon_format),
    bitfield("lat",      17, 'signed',   None, "Latitude",
             formatter=short_lat_format),
    bitfield("speed",     6, 'unsigned', 63,   "Speed Over Ground"),
    bitfield("course",    9, 'unsigned', 511,  "Course Over Ground"),
    bitfield("gnss",      1, 'unsigned', None, "GNSS Position status",
             formatter=gnss_legends),
    spare(1),
    )

# This is the master dispatch on AIS message type.  Length expectations
# are used for integrity checking; a tuple is (minimum, maximum).
layouts = {
    1:  layout("1",  cnb,    168),
    2:  layout("2",  cnb,    168),
    3:  layout("3",  cnb,    168),
    4:  layout("4",  type4,  168),
    5:  layout("5",  type5,  (416, 426)),
    6:  layout("6",  type6,  (88, 1008)),
    7:  layout("7",  type7,  (72, 168)),
    8:  layout("8",  type8,  (40, 1008)),
    9:  layout("9",  type9,  168),
    10: layout("10", type10, 72),
    11: layout("11", type4,  168),
    12: layout("12", type12, (72, 1008)),
    13: layout("13", type7,  (72, 168)),
    14: layout("14", type14, (40, 1008)),
    15: layout("15", type15, (88, 160)),
    16: layout("16", type16, frozenset((96, 144))),
    17: layout("17", type17, (80, 816)),
    18: layout("18", type18, 168),
    19: layout("19", type19, 312),
    20: layout("20", type20, (72, 160)),
    21: layout("21", type21, (272, 360), type21_postprocess),
    22: layout("22", type22, 168, type22_postprocess),
    23: layout("23", type23, 160),
    24: partition("24", 38, 2, {
        0: layout("24A", type24a, (160, 168)),
        1: layout("24B", type24b, 168),
        }),
    25: layout("25", type25, (40, 168)),
    26: layout("26", type26, (60, 1064)),
    27: layout("27", type27, (96, 168)),
    }

message_titles = {
    1:  "Position Report Class A",
    2:  "Position Report Class A (Assigned schedule)",
    3:  "Position Report Class A (Response to interrogation)",
    4:  "Base Station Report",
    5:  "Static and Voyage Related Data",
    6:  "Binary Addressed Message",
    7:  "Binary Acknowledge",
    8:  "Binary Broadcast Message",
    9:  "Standard SAR Aircraft Position Report",
    10: "UTC/Date Inquiry",
    11: "UTC/Date Response",
    12: "Addressed Safety Related Message",
    13: "Safety Related Acknowledge",
    14: "Safety Related Broadcast Message",
    15: "Interrogation",
    16: "Assigned Mode Command",
    17: "DGNSS Broadcast Binary Message",
    18: "Standard Class B Equipment Position Report",
    19: "Extended Class B Equipment Position Report",
    20: "Data Link Management Message",
    21: "Aids-to-Navigation Report",
    22: "Channel Management",
    23: "Group Assignment Command",
    24: "Static Data Report",
    25: "Single Slot Binary Message",
    26: "Multiple Slot Binary Message with Communications State",
    27: "Long Range AIS Broadcast message",
    }


def message_title(msgtype):
    "Human-readable name of a message type, None if there is no such type."
    return message_titles.get(msgtype)

# End
