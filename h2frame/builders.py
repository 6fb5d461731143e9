"""
HTTP/2 Frame Builders

Each payload builder takes a frame descriptor and returns its payload bytes.
``encode_frame`` records the payload length on the descriptor and prepends
the common header.
"""

import logging
import struct

from .constants import (
    UINT32_FORMAT, MAX_UINT32, PING_PAYLOAD_SIZE,
    STREAM_ID_MASK, SETTINGS_ID_MASK,
    error_code, settings_id
)
from .errors import (
    InvalidFrameType, InvalidPingPayloadSize, InvalidStreamId,
    InvalidSettingsValue, InvalidFieldValue
)
from .frames import Frame
from .header import encode_header

logger = logging.getLogger(__name__)


def pack_uint32(value: int) -> bytes:
    return struct.pack(UINT32_FORMAT, value)


def pack_stream_field(value: int, field: str) -> bytes:
    """
    Pack a 31-bit field with the reserved bit cleared.

    Raises:
        InvalidFieldValue: if the value is negative
    """
    if value < 0:
        raise InvalidFieldValue(value, field)
    return pack_uint32(value & STREAM_ID_MASK)


def pack_error(error) -> bytes:
    """
    Pack an error code, resolving names through DEFINED_ERRORS.

    Raises:
        UnknownErrorId: if the name is not defined
    """
    return pack_uint32(error_code(error))


def build_data_payload(frame) -> bytes:
    return bytes(frame.payload)


def build_headers_payload(frame) -> bytes:
    """
    HEADERS payload: [R + Priority (31)] Header Block Fragment

    A priority value implies the ``priority`` flag; the flag is added to the
    descriptor so the header reflects it. An explicit flag without a value
    writes priority 0, which is also recorded on the descriptor.
    """
    if frame.priority is not None:
        frame.flags.add("priority")

    payload = b""
    if "priority" in frame.flags:
        if frame.priority is None:
            frame.priority = 0
        payload += pack_stream_field(frame.priority, "priority")
    return payload + bytes(frame.payload)


def build_priority_payload(frame) -> bytes:
    return pack_stream_field(frame.priority, "priority")


def build_rst_stream_payload(frame) -> bytes:
    return pack_error(frame.error)


def build_settings_payload(frame) -> bytes:
    """
    SETTINGS payload: repeated [Reserved (8) | Identifier (24) | Value (32)]

    Raises:
        InvalidStreamId: if the frame is not on stream 0
        UnknownSettingsId: if a setting name is not defined
        InvalidSettingsValue: if a value does not fit in 32 bits
    """
    if frame.stream != 0:
        raise InvalidStreamId(frame.stream)

    payload = b""
    for key, value in frame.payload:
        setting = settings_id(key)
        if not 0 <= value <= MAX_UINT32:
            raise InvalidSettingsValue(value)
        payload += pack_uint32(setting & SETTINGS_ID_MASK)
        payload += pack_uint32(value)
    return payload


def build_push_promise_payload(frame) -> bytes:
    return pack_stream_field(frame.promise_stream, "promise_stream") + bytes(frame.payload)


def build_ping_payload(frame) -> bytes:
    if len(frame.payload) != PING_PAYLOAD_SIZE:
        raise InvalidPingPayloadSize(len(frame.payload))
    return bytes(frame.payload)


def build_goaway_payload(frame) -> bytes:
    """GOAWAY payload: R + Last-Stream-ID (31) | Error Code (32) | [Debug Data]"""
    payload = pack_stream_field(frame.last_stream, "last_stream")
    payload += pack_error(frame.error)
    if frame.payload:
        payload += bytes(frame.payload)
    return payload


def build_window_update_payload(frame) -> bytes:
    # Out-of-range increments are rejected by encode_header before masking matters
    return pack_uint32(frame.increment & STREAM_ID_MASK)


def build_continuation_payload(frame) -> bytes:
    return bytes(frame.payload)


PAYLOAD_BUILDERS = {
    "data": build_data_payload,
    "headers": build_headers_payload,
    "priority": build_priority_payload,
    "rst_stream": build_rst_stream_payload,
    "settings": build_settings_payload,
    "push_promise": build_push_promise_payload,
    "ping": build_ping_payload,
    "goaway": build_goaway_payload,
    "window_update": build_window_update_payload,
    "continuation": build_continuation_payload,
}


def encode_frame(frame: Frame) -> bytes:
    """
    Encode a frame descriptor into wire bytes.

    Sets ``frame.length`` to the payload size before building the header.

    Args:
        frame: Frame descriptor

    Returns:
        bytes: 8-byte common header followed by the payload

    Raises:
        FramingError: on any invalid field; no bytes are returned
    """
    builder = PAYLOAD_BUILDERS.get(frame.type)
    if builder is None:
        raise InvalidFrameType(frame.type)

    payload = builder(frame)
    frame.length = len(payload)
    header = encode_header(frame)

    logger.debug("Encoded %s frame: stream=%d len=%d", frame.type, frame.stream, frame.length)
    return header + payload
