"""
HTTP/2 Common Frame Header (draft-ietf-httpbis-http2-04 Section 4.1)

    +-------------------------------+---------------+---------------+
    |         Length (16)           |   Type (8)    |   Flags (8)   |
    +-+-------------+---------------+-------------------------------+
    |R|                 Stream Identifier (31)                      |
    +-+-------------------------------------------------------------+
"""

import struct

from .constants import (
    FRAME_HEADER_FORMAT, FRAME_HEADER_SIZE, FRAME_FLAGS,
    MAX_PAYLOAD_SIZE, MAX_STREAM_ID, MAX_WINDOW_INCREMENT, STREAM_ID_MASK,
    frame_type_code, frame_type_name, flag_bit
)
from .errors import PayloadTooLarge, StreamIdTooLarge, WindowIncrementTooLarge


def encode_flags(frame_type: str, flags) -> int:
    """
    Build the flag byte for a frame type.

    Raises:
        InvalidFlag: if a flag is not defined for the frame type
    """
    mask = 0
    for flag in flags:
        mask |= 1 << flag_bit(frame_type, flag)
    return mask


def decode_flags(frame_type, mask: int) -> set:
    """Collect the names of the flags set in ``mask`` for a frame type."""
    return {
        name for name, position in FRAME_FLAGS.get(frame_type, {}).items()
        if mask & (1 << position)
    }


def encode_header(frame) -> bytes:
    """
    Build the 8-byte common header for a frame whose ``length`` is already set.

    Validation order: frame type, payload length, stream id, window increment,
    then flags. The stream id is written unmasked.

    Args:
        frame: Frame descriptor

    Returns:
        bytes: 8-byte header

    Raises:
        InvalidFrameType, PayloadTooLarge, StreamIdTooLarge,
        WindowIncrementTooLarge, InvalidFlag
    """
    type_code = frame_type_code(frame.type)

    if frame.length > MAX_PAYLOAD_SIZE:
        raise PayloadTooLarge(frame.length)

    if not 0 <= frame.stream <= MAX_STREAM_ID:
        raise StreamIdTooLarge(frame.stream)

    if frame.type == "window_update" and not 0 <= frame.increment <= MAX_WINDOW_INCREMENT:
        raise WindowIncrementTooLarge(frame.increment)

    flags = encode_flags(frame.type, frame.flags)

    return struct.pack(FRAME_HEADER_FORMAT, frame.length, type_code, flags, frame.stream)


def decode_header(data: bytes) -> tuple:
    """
    Parse the 8-byte common header.

    Args:
        data: At least 8 bytes; only the first 8 are read

    Returns:
        tuple: (length, type, flags, stream). ``type`` is the frame type name,
        or the raw opcode if it is unassigned. The reserved bit of the stream
        id is cleared.
    """
    length, type_code, mask, stream = struct.unpack(
        FRAME_HEADER_FORMAT, data[:FRAME_HEADER_SIZE]
    )
    frame_type = frame_type_name(type_code)
    flags = decode_flags(frame_type, mask)
    return length, frame_type, flags, stream & STREAM_ID_MASK
