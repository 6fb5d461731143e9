"""Tests for the frame type, flag, settings and error registries."""

import pytest

from h2frame.constants import (
    FRAME_TYPES, FRAME_TYPE_NAMES, FRAME_FLAGS, DEFINED_SETTINGS,
    SETTINGS_NAMES, DEFINED_ERRORS, ERROR_NAMES,
    frame_type_code, frame_type_name, flag_bit,
    settings_id, settings_name, error_code, error_name,
)
from h2frame.errors import (
    InvalidFrameType, InvalidFlag, UnknownSettingsId, UnknownErrorId
)


def test_frame_type_opcodes():
    assert FRAME_TYPES["data"] == 0x0
    assert FRAME_TYPES["goaway"] == 0x7
    assert FRAME_TYPES["window_update"] == 0x9
    assert FRAME_TYPES["continuation"] == 0xa


def test_opcode_8_unassigned():
    assert 0x8 not in FRAME_TYPE_NAMES
    assert frame_type_name(0x8) == 0x8


def test_reverse_maps_are_inverses():
    for table, reverse in ((FRAME_TYPES, FRAME_TYPE_NAMES),
                           (DEFINED_SETTINGS, SETTINGS_NAMES),
                           (DEFINED_ERRORS, ERROR_NAMES)):
        assert len(table) == len(reverse)
        for name, code in table.items():
            assert reverse[code] == name


def test_every_frame_type_has_flag_table():
    assert set(FRAME_FLAGS) == set(FRAME_TYPES)
    for flags in FRAME_FLAGS.values():
        assert all(0 <= position <= 3 for position in flags.values())


def test_frame_type_code_unknown():
    with pytest.raises(InvalidFrameType) as exc:
        frame_type_code("bogus")
    assert exc.value.value == "bogus"


def test_flag_bit():
    assert flag_bit("headers", "priority") == 3
    assert flag_bit("continuation", "end_headers") == 1
    with pytest.raises(InvalidFlag) as exc:
        flag_bit("data", "end_headers")
    assert exc.value.value == "end_headers"
    assert exc.value.frame_type == "data"


def test_settings_lookup():
    assert settings_id("settings_max_concurrent_streams") == 4
    assert settings_id("settings_initial_window_size") == 7
    assert settings_id("settings_flow_control_options") == 10
    assert settings_id(99) == 99
    assert settings_name(7) == "settings_initial_window_size"
    assert settings_name(99) == 99
    with pytest.raises(UnknownSettingsId):
        settings_id("settings_bogus")


def test_error_lookup():
    assert error_code("no_error") == 0
    assert error_code("compression_error") == 9
    assert error_code(42) == 42
    assert error_name(5) == "stream_closed"
    # 4 is intentionally unassigned
    assert error_name(4) == 4
    with pytest.raises(UnknownErrorId):
        error_code("bogus_error")
    with pytest.raises(UnknownErrorId):
        error_code(2**32)
