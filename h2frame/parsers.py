"""
HTTP/2 Frame Parsers

``decode_frame`` pulls one complete frame off a receive buffer, or reports
that more data is needed without consuming anything.
"""

import logging
import struct

from .buffer import ReceiveBuffer
from .constants import (
    FRAME_HEADER_SIZE, UINT32_FORMAT, STREAM_ID_MASK, SETTINGS_ID_MASK,
    error_name, settings_name
)
from .errors import MalformedFrame
from .frames import (
    DataFrame, HeadersFrame, PriorityFrame, RstStreamFrame,
    SettingsFrame, PushPromiseFrame, PingFrame, GoawayFrame,
    WindowUpdateFrame, ContinuationFrame, UnknownFrame
)
from .header import decode_header

logger = logging.getLogger(__name__)


class NeedMoreData:
    """Decode outcome: the buffer does not hold a complete frame yet."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "NEED_MORE_DATA"


NEED_MORE_DATA = NeedMoreData()


def unpack_uint32(payload: bytes, offset: int = 0) -> int:
    return struct.unpack_from(UINT32_FORMAT, payload, offset)[0]


def _require(frame_type: str, payload: bytes, needed: int):
    if len(payload) < needed:
        raise MalformedFrame(frame_type, len(payload), needed)


def parse_data_payload(payload: bytes, **common) -> DataFrame:
    return DataFrame(payload=payload, **common)


def parse_headers_payload(payload: bytes, **common) -> HeadersFrame:
    priority = None
    if "priority" in common["flags"]:
        _require("headers", payload, 4)
        priority = unpack_uint32(payload) & STREAM_ID_MASK
        payload = payload[4:]
    return HeadersFrame(priority=priority, payload=payload, **common)


def parse_priority_payload(payload: bytes, **common) -> PriorityFrame:
    _require("priority", payload, 4)
    return PriorityFrame(priority=unpack_uint32(payload) & STREAM_ID_MASK, **common)


def parse_rst_stream_payload(payload: bytes, **common) -> RstStreamFrame:
    _require("rst_stream", payload, 4)
    return RstStreamFrame(error=error_name(unpack_uint32(payload)), **common)


def parse_settings_payload(payload: bytes, **common) -> SettingsFrame:
    """
    Parse SETTINGS pairs in wire order.

    Ids without a registered name are kept as integers. A trailing partial
    pair is ignored.
    """
    settings = []
    for offset in range(0, len(payload) - len(payload) % 8, 8):
        setting = unpack_uint32(payload, offset) & SETTINGS_ID_MASK
        value = unpack_uint32(payload, offset + 4)
        settings.append((settings_name(setting), value))
    return SettingsFrame(payload=settings, **common)


def parse_push_promise_payload(payload: bytes, **common) -> PushPromiseFrame:
    _require("push_promise", payload, 4)
    return PushPromiseFrame(
        promise_stream=unpack_uint32(payload) & STREAM_ID_MASK,
        payload=payload[4:],
        **common
    )


def parse_ping_payload(payload: bytes, **common) -> PingFrame:
    return PingFrame(payload=payload, **common)


def parse_goaway_payload(payload: bytes, **common) -> GoawayFrame:
    _require("goaway", payload, 8)
    return GoawayFrame(
        last_stream=unpack_uint32(payload) & STREAM_ID_MASK,
        error=error_name(unpack_uint32(payload, 4)),
        payload=payload[8:] if len(payload) > 8 else None,
        **common
    )


def parse_window_update_payload(payload: bytes, **common) -> WindowUpdateFrame:
    _require("window_update", payload, 4)
    return WindowUpdateFrame(increment=unpack_uint32(payload) & STREAM_ID_MASK, **common)


def parse_continuation_payload(payload: bytes, **common) -> ContinuationFrame:
    return ContinuationFrame(payload=payload, **common)


PAYLOAD_PARSERS = {
    "data": parse_data_payload,
    "headers": parse_headers_payload,
    "priority": parse_priority_payload,
    "rst_stream": parse_rst_stream_payload,
    "settings": parse_settings_payload,
    "push_promise": parse_push_promise_payload,
    "ping": parse_ping_payload,
    "goaway": parse_goaway_payload,
    "window_update": parse_window_update_payload,
    "continuation": parse_continuation_payload,
}


def decode_frame(buffer: ReceiveBuffer):
    """
    Decode one frame from the front of a receive buffer.

    The header is peeked first; bytes are consumed only once the whole
    frame (header + declared length) is buffered.

    Args:
        buffer: Byte source providing len(), peek(size) and read(size)

    Returns:
        Frame, or NEED_MORE_DATA if the frame is incomplete (nothing consumed)

    Raises:
        MalformedFrame: if the payload is too short for its fixed fields.
            The frame's bytes have already been consumed.
    """
    if len(buffer) < FRAME_HEADER_SIZE:
        logger.debug("Need more data: %d bytes buffered, header needs %d",
                     len(buffer), FRAME_HEADER_SIZE)
        return NEED_MORE_DATA

    length, frame_type, flags, stream = decode_header(buffer.peek(FRAME_HEADER_SIZE))
    if len(buffer) < FRAME_HEADER_SIZE + length:
        logger.debug("Need more data: %d bytes buffered, frame needs %d",
                     len(buffer), FRAME_HEADER_SIZE + length)
        return NEED_MORE_DATA

    buffer.read(FRAME_HEADER_SIZE)
    payload = buffer.read(length)

    common = {"stream": stream, "flags": flags, "length": length}
    parser = PAYLOAD_PARSERS.get(frame_type)
    if parser is None:
        frame = UnknownFrame(code=frame_type, payload=payload, **common)
    else:
        frame = parser(payload, **common)

    logger.debug("Decoded %s frame: stream=%d len=%d", frame_type, stream, length)
    return frame


def parse_frames(data: bytes) -> tuple:
    """
    Decode every complete frame in a byte string.

    Args:
        data: Raw bytes, possibly ending in a partial frame

    Returns:
        tuple: (frames, remaining) where remaining holds the unconsumed tail

    Raises:
        MalformedFrame: on the first frame too short for its fixed fields
    """
    buffer = ReceiveBuffer(data)
    frames = []
    while True:
        frame = decode_frame(buffer)
        if frame is NEED_MORE_DATA:
            break
        frames.append(frame)
    return frames, bytes(buffer)
