"""
HTTP/2 Frame Codec (draft-ietf-httpbis-http2-04)

Provides:
- Frame type, flag, settings and error code registries
- Common frame header encoding/decoding
- Per-type payload building and parsing
- A receive buffer with non-consuming partial-frame handling
"""

from .constants import *
from .errors import (
    FramingError,
    InvalidFrameType,
    PayloadTooLarge,
    StreamIdTooLarge,
    WindowIncrementTooLarge,
    InvalidFlag,
    UnknownSettingsId,
    UnknownErrorId,
    InvalidPingPayloadSize,
    InvalidStreamId,
    InvalidSettingsValue,
    MalformedFrame,
    BufferUnderflow,
    InvalidFieldValue,
)
from .frames import (
    Frame,
    DataFrame,
    HeadersFrame,
    PriorityFrame,
    RstStreamFrame,
    SettingsFrame,
    PushPromiseFrame,
    PingFrame,
    GoawayFrame,
    WindowUpdateFrame,
    ContinuationFrame,
    UnknownFrame,
    FRAME_CLASSES,
    frame_from_dict,
    sorted_flags,
    describe_frame,
)
from .buffer import ReceiveBuffer
from .header import encode_header, decode_header
from .builders import encode_frame
from .parsers import decode_frame, parse_frames, NeedMoreData, NEED_MORE_DATA

encode = encode_frame
decode = decode_frame
