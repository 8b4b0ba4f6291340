"""Tests for tmx2map.events -- object to event record encoding."""

from __future__ import annotations

import pytest

from tmx2map.errors import FormatError, UnknownEventError
from tmx2map.events import (
    EVENT_FINISH,
    EVENT_JUMP,
    EVENT_L,
    EVENT_R,
    EVENT_SKID,
    EVENT_U,
    EVENT_UL,
    EVENT_UR,
    TRIGGER_TYPE_BY_GID,
    Event,
    checkpoint_value,
    encode_events,
    event_color,
    event_from,
)
from tmx2map.tmx import TmxObject

FIRST = 105


def _event(local_gid: int, x: int, y: int) -> Event:
    return event_from(TmxObject(gid=FIRST + local_gid, x=x, y=y), FIRST)


# ---------------------------------------------------------------------------
# Trigger table
# ---------------------------------------------------------------------------

class TestTriggerTable:
    def test_size(self):
        assert len(TRIGGER_TYPE_BY_GID) == 55

    def test_finish(self):
        assert TRIGGER_TYPE_BY_GID[0] == EVENT_U | EVENT_FINISH == 0x83

    def test_jumps(self):
        assert TRIGGER_TYPE_BY_GID[1:4] == (
            EVENT_L | EVENT_JUMP, EVENT_U | EVENT_JUMP, EVENT_R | EVENT_JUMP,
        )

    def test_skids(self):
        assert TRIGGER_TYPE_BY_GID[4:7] == (
            EVENT_L | EVENT_SKID, EVENT_U | EVENT_SKID, EVENT_R | EVENT_SKID,
        )

    def test_ordinary_entries_have_no_flags(self):
        for entry in TRIGGER_TYPE_BY_GID[7:]:
            assert entry in (EVENT_L, EVENT_UL, EVENT_U, EVENT_UR, EVENT_R)


# ---------------------------------------------------------------------------
# Checkpoint values
# ---------------------------------------------------------------------------

class TestCheckpointValue:
    def test_left_and_right_use_x(self):
        assert checkpoint_value(EVENT_L, 12, 99) == 12
        assert checkpoint_value(EVENT_R, 12, 99) == 12

    def test_up_uses_y(self):
        assert checkpoint_value(EVENT_U, 12, 99) == 99

    def test_up_left_sums(self):
        assert checkpoint_value(EVENT_UL, 12, 99) == 111

    def test_up_left_wraps(self):
        assert checkpoint_value(EVENT_UL, 200, 100) == (300 % 256)

    def test_up_right_wraps(self):
        assert checkpoint_value(EVENT_UR, 50, 10) == 216

    def test_up_right_no_wrap(self):
        assert checkpoint_value(EVENT_UR, 10, 50) == 40

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            checkpoint_value(0, 1, 1)


# ---------------------------------------------------------------------------
# event_from
# ---------------------------------------------------------------------------

class TestEventFrom:
    def test_finish_event(self):
        event = _event(0, 20, 10)
        assert event == Event(trigger_type=0x83, checkpoint=5, type=0, color=0)
        assert event.is_finish
        assert event.direction == EVENT_U

    def test_coordinates_halved(self):
        # Local gid 7 is a left-facing narrow checkpoint
        event = _event(7, 41, 99)
        assert event.checkpoint == 20

    def test_up_right_checkpoint(self):
        # Local gid 12 is up-right; post-scale x=50, y=10
        assert TRIGGER_TYPE_BY_GID[12] == EVENT_UR
        event = _event(12, 100, 20)
        assert event.checkpoint == 216

    def test_up_left_checkpoint(self):
        assert TRIGGER_TYPE_BY_GID[9] == EVENT_UL
        event = _event(9, 40, 60)
        assert event.checkpoint == 50

    @pytest.mark.parametrize("local_gid", range(7))
    def test_special_events_have_no_type_or_color(self, local_gid):
        event = _event(local_gid, 8, 8)
        assert event.type == 0
        assert event.color == 0
        assert event.trigger_type == TRIGGER_TYPE_BY_GID[local_gid]

    def test_jump_and_skid_flags(self):
        assert _event(2, 8, 8).is_jump
        assert _event(5, 8, 8).is_skid
        assert not _event(5, 8, 8).is_finish

    @pytest.mark.parametrize("local_gid,color", [
        (7, 0), (16, 0),
        (17, 1), (36, 1),
        (37, 2), (40, 2),
        (41, 3), (49, 3),
        (50, 4), (54, 4),
    ])
    def test_color_bands(self, local_gid, color):
        event = _event(local_gid, 8, 8)
        assert event.color == color
        assert event.type == local_gid - 7

    def test_negative_coordinates_truncate_toward_zero(self):
        # Local gid 7 is left-facing, so the checkpoint is the scaled x
        assert _event(7, -1, 10).checkpoint == 0
        assert _event(7, -3, 10).checkpoint == 0xFF

    def test_negative_y_truncates_toward_zero(self):
        assert _event(0, 20, -1).checkpoint == 0

    def test_large_coordinates_wrap_to_byte(self):
        event = _event(7, 2 * 300, 2)
        assert event.checkpoint == 300 % 256

    @pytest.mark.parametrize("local_gid", [-1, 55, 200])
    def test_gid_outside_table(self, local_gid):
        with pytest.raises(UnknownEventError):
            _event(local_gid, 8, 8)

    def test_unknown_event_is_format_error(self):
        with pytest.raises(FormatError):
            event_from(TmxObject(gid=1, x=8, y=8), FIRST)

    def test_event_color_outside_bands(self):
        with pytest.raises(UnknownEventError):
            event_color(55)


# ---------------------------------------------------------------------------
# Record bytes
# ---------------------------------------------------------------------------

class TestEventBytes:
    def test_field_order(self):
        event = Event(trigger_type=0x04, checkpoint=216, type=5, color=0)
        assert event.to_bytes() == bytes([0x04, 216, 5, 0])

    def test_from_bytes(self):
        event = Event.from_bytes(bytes([0x43, 7, 0, 0]))
        assert event.is_jump
        assert event.direction == EVENT_U
        assert event.checkpoint == 7

    def test_encode_events_keeps_order(self):
        objects = [
            TmxObject(gid=FIRST + 50, x=8, y=8),
            TmxObject(gid=FIRST, x=20, y=10),
        ]
        events = encode_events(objects, FIRST)
        assert [e.color for e in events] == [4, 0]
        assert events[1].is_finish
