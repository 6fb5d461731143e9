"""
HTTP/2 Framing Constants (draft-ietf-httpbis-http2-04)
"""

from .errors import (
    InvalidFrameType, InvalidFlag, UnknownSettingsId, UnknownErrorId
)

# Frame header: Length (16) | Type (8) | Flags (8) | R + Stream Identifier (32)
FRAME_HEADER_FORMAT = ">HBBI"
FRAME_HEADER_SIZE = 8

UINT32_FORMAT = ">I"

MAX_PAYLOAD_SIZE = 2**16 - 1
MAX_STREAM_ID = 0x7fffffff
MAX_WINDOW_INCREMENT = 0x7fffffff
MAX_UINT32 = 0xffffffff

STREAM_ID_MASK = 0x7fffffff     # clears the reserved bit
SETTINGS_ID_MASK = 0x0fffffff   # 24-bit id with 4 reserved bits

PING_PAYLOAD_SIZE = 8

# Frame Types
FRAME_DATA = 0x0
FRAME_HEADERS = 0x1
FRAME_PRIORITY = 0x2
FRAME_RST_STREAM = 0x3
FRAME_SETTINGS = 0x4
FRAME_PUSH_PROMISE = 0x5
FRAME_PING = 0x6
FRAME_GOAWAY = 0x7
FRAME_WINDOW_UPDATE = 0x9
FRAME_CONTINUATION = 0xa

FRAME_TYPES = {
    "data": FRAME_DATA,
    "headers": FRAME_HEADERS,
    "priority": FRAME_PRIORITY,
    "rst_stream": FRAME_RST_STREAM,
    "settings": FRAME_SETTINGS,
    "push_promise": FRAME_PUSH_PROMISE,
    "ping": FRAME_PING,
    "goaway": FRAME_GOAWAY,
    "window_update": FRAME_WINDOW_UPDATE,
    "continuation": FRAME_CONTINUATION,
}

FRAME_TYPE_NAMES = {code: name for name, code in FRAME_TYPES.items()}

# Flag name -> bit position, per frame type
FRAME_FLAGS = {
    "data": {
        "end_stream": 0,
        "reserved": 1,
    },
    "headers": {
        "end_stream": 0,
        "reserved": 1,
        "end_headers": 2,
        "priority": 3,
    },
    "priority": {},
    "rst_stream": {},
    "settings": {},
    "push_promise": {
        "end_push_promise": 0,
    },
    "ping": {
        "pong": 0,
    },
    "goaway": {},
    "window_update": {},
    "continuation": {
        "end_stream": 0,
        "end_headers": 1,
    },
}

# Settings Parameters
SETTINGS_MAX_CONCURRENT_STREAMS = 4
SETTINGS_INITIAL_WINDOW_SIZE = 7
SETTINGS_FLOW_CONTROL_OPTIONS = 10

DEFINED_SETTINGS = {
    "settings_max_concurrent_streams": SETTINGS_MAX_CONCURRENT_STREAMS,
    "settings_initial_window_size": SETTINGS_INITIAL_WINDOW_SIZE,
    "settings_flow_control_options": SETTINGS_FLOW_CONTROL_OPTIONS,
}

SETTINGS_NAMES = {code: name for name, code in DEFINED_SETTINGS.items()}

# Error Codes (0x4 is unassigned in this draft)
DEFINED_ERRORS = {
    "no_error": 0,
    "protocol_error": 1,
    "internal_error": 2,
    "flow_control_error": 3,
    "stream_closed": 5,
    "frame_too_large": 6,
    "refused_stream": 7,
    "cancel": 8,
    "compression_error": 9,
}

ERROR_NAMES = {code: name for name, code in DEFINED_ERRORS.items()}


def frame_type_code(frame_type) -> int:
    """Resolve a frame type name to its opcode."""
    code = FRAME_TYPES.get(frame_type)
    if code is None:
        raise InvalidFrameType(frame_type)
    return code


def frame_type_name(code: int):
    """Resolve an opcode to its name; unassigned opcodes are returned as-is."""
    return FRAME_TYPE_NAMES.get(code, code)


def flag_bit(frame_type: str, flag: str) -> int:
    """
    Look up the bit position of a flag for a frame type.

    Raises:
        InvalidFlag: if the flag is not defined for this frame type
    """
    position = FRAME_FLAGS.get(frame_type, {}).get(flag)
    if position is None:
        raise InvalidFlag(flag, frame_type)
    return position


def settings_id(setting) -> int:
    """Resolve a settings name to its id. Integers pass through unchanged."""
    if isinstance(setting, int):
        return setting
    code = DEFINED_SETTINGS.get(setting)
    if code is None:
        raise UnknownSettingsId(setting)
    return code


def settings_name(code: int):
    return SETTINGS_NAMES.get(code, code)


def error_code(error) -> int:
    """
    Resolve an error name to its numeric code.

    Integers pass through, but must still fit the 32-bit wire field.
    """
    if isinstance(error, int):
        if not 0 <= error <= MAX_UINT32:
            raise UnknownErrorId(error)
        return error
    code = DEFINED_ERRORS.get(error)
    if code is None:
        raise UnknownErrorId(error)
    return code


def error_name(code: int):
    return ERROR_NAMES.get(code, code)
