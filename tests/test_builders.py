"""Tests for frame encoding."""

import struct

import pytest

from h2frame import encode_frame
from h2frame.errors import (
    InvalidFrameType, PayloadTooLarge, StreamIdTooLarge, InvalidFlag,
    UnknownSettingsId, UnknownErrorId, InvalidPingPayloadSize,
    InvalidStreamId, InvalidSettingsValue, WindowIncrementTooLarge,
    InvalidFieldValue
)
from h2frame.frames import (
    DataFrame, HeadersFrame, PriorityFrame, RstStreamFrame, SettingsFrame,
    PushPromiseFrame, PingFrame, GoawayFrame, WindowUpdateFrame,
    ContinuationFrame, UnknownFrame
)


def test_data_frame_bytes():
    frame = DataFrame(stream=1, flags={"end_stream"}, payload=b"abc")
    assert encode_frame(frame) == bytes.fromhex("0003000100000001") + b"abc"
    assert frame.length == 3


def test_encoding_is_deterministic():
    frame = GoawayFrame(last_stream=7, error="cancel", payload=b"bye")
    assert encode_frame(frame) == encode_frame(frame)


def test_payload_size_boundary():
    assert len(encode_frame(DataFrame(payload=b"x" * 65535))) == 8 + 65535
    with pytest.raises(PayloadTooLarge):
        encode_frame(DataFrame(payload=b"x" * 65536))


def test_stream_id_boundary():
    encode_frame(DataFrame(stream=0x7fffffff))
    with pytest.raises(StreamIdTooLarge):
        encode_frame(DataFrame(stream=0x80000000))


def test_headers_priority_implies_flag():
    frame = HeadersFrame(stream=3, priority=9, payload=b"hdr")
    data = encode_frame(frame)
    assert "priority" in frame.flags
    assert data[1] == 7
    assert data[3] & 0b1000
    assert data[8:12] == struct.pack(">I", 9)
    assert data[12:] == b"hdr"


def test_headers_without_priority():
    data = encode_frame(HeadersFrame(stream=3, flags={"end_headers"}, payload=b"hdr"))
    assert data[:8] == bytes.fromhex("0003010400000003")
    assert data[8:] == b"hdr"


def test_headers_priority_is_masked():
    data = encode_frame(HeadersFrame(stream=1, priority=0xffffffff))
    assert data[8:12] == b"\x7f\xff\xff\xff"


def test_invalid_flag():
    with pytest.raises(InvalidFlag):
        encode_frame(DataFrame(stream=1, flags={"end_headers"}))


def test_priority_frame():
    data = encode_frame(PriorityFrame(stream=1, priority=0x80000010))
    assert data == bytes.fromhex("0004020000000001") + bytes.fromhex("00000010")


def test_rst_stream_error_codes():
    assert encode_frame(RstStreamFrame(stream=1, error="cancel"))[8:] == b"\x00\x00\x00\x08"
    assert encode_frame(RstStreamFrame(stream=1, error=0x42))[8:] == b"\x00\x00\x00\x42"
    with pytest.raises(UnknownErrorId) as exc:
        encode_frame(RstStreamFrame(stream=1, error="bogus"))
    assert exc.value.value == "bogus"


def test_settings_frame():
    frame = SettingsFrame(payload=[("settings_max_concurrent_streams", 100)])
    data = encode_frame(frame)
    assert data[:8] == bytes.fromhex("0008040000000000")
    assert data[8:] == bytes.fromhex("00000004") + bytes.fromhex("00000064")


def test_settings_from_dict_and_numeric_ids():
    frame = SettingsFrame(payload={"settings_initial_window_size": 65535, 0x1f000001: 1})
    data = encode_frame(frame)
    assert frame.length == 16
    assert data[8:16] == bytes.fromhex("000000070000ffff")
    # ids are masked to 28 bits
    assert data[16:20] == bytes.fromhex("0f000001")


def test_settings_requires_stream_zero():
    with pytest.raises(InvalidStreamId):
        encode_frame(SettingsFrame(stream=1, payload=[("settings_initial_window_size", 1)]))


def test_settings_unknown_name():
    with pytest.raises(UnknownSettingsId):
        encode_frame(SettingsFrame(payload=[("settings_bogus", 1)]))


def test_settings_value_range():
    with pytest.raises(InvalidSettingsValue):
        encode_frame(SettingsFrame(payload=[("settings_initial_window_size", 2**32)]))


def test_push_promise():
    data = encode_frame(PushPromiseFrame(stream=1, promise_stream=2, payload=b"hb"))
    assert data[:2] == b"\x00\x06"
    assert data[8:] == bytes.fromhex("00000002") + b"hb"


@pytest.mark.parametrize("size", [7, 9])
def test_ping_payload_size(size):
    with pytest.raises(InvalidPingPayloadSize) as exc:
        encode_frame(PingFrame(payload=b"x" * size))
    assert exc.value.value == size


def test_ping_frame():
    data = encode_frame(PingFrame(flags={"pong"}, payload=b"12345678"))
    assert data == bytes.fromhex("0008060100000000") + b"12345678"


def test_goaway():
    data = encode_frame(GoawayFrame(last_stream=5, error="protocol_error"))
    assert data == bytes.fromhex("0008070000000000") + bytes.fromhex("0000000500000001")

    data = encode_frame(GoawayFrame(last_stream=5, error=0, payload=b"debug"))
    assert data[:2] == b"\x00\x0d"
    assert data[16:] == b"debug"


def test_window_update():
    data = encode_frame(WindowUpdateFrame(stream=3, increment=50))
    assert data == bytes.fromhex("0004090000000003") + bytes.fromhex("00000032")


def test_window_update_too_large():
    with pytest.raises(WindowIncrementTooLarge) as exc:
        encode_frame(WindowUpdateFrame(stream=3, increment=0x80000000))
    assert exc.value.value == 0x80000000


def test_continuation():
    data = encode_frame(ContinuationFrame(stream=3, flags={"end_headers"}, payload=b"more"))
    assert data == bytes.fromhex("00040a0200000003") + b"more"


def test_unknown_frame_cannot_be_encoded():
    with pytest.raises(InvalidFrameType):
        encode_frame(UnknownFrame(code=0x8, payload=b""))


def test_window_update_negative_increment():
    """A negative increment must not be masked into the largest window."""
    with pytest.raises(WindowIncrementTooLarge) as exc:
        encode_frame(WindowUpdateFrame(stream=1, increment=-1))
    assert exc.value.value == -1


@pytest.mark.parametrize("frame, field", [
    (PriorityFrame(stream=1, priority=-5), "priority"),
    (HeadersFrame(stream=1, priority=-1, payload=b"hb"), "priority"),
    (PushPromiseFrame(stream=1, promise_stream=-2), "promise_stream"),
    (GoawayFrame(last_stream=-1, error="no_error"), "last_stream"),
])
def test_negative_31_bit_fields_rejected(frame, field):
    with pytest.raises(InvalidFieldValue) as exc:
        encode_frame(frame)
    assert exc.value.field == field
    assert exc.value.value < 0


def test_headers_explicit_priority_flag_records_zero():
    frame = HeadersFrame(stream=1, flags={"priority"}, payload=b"hb")
    data = encode_frame(frame)
    assert frame.priority == 0
    assert data[8:12] == b"\x00\x00\x00\x00"
