"""tmx2map/events.py -- Object to event record encoding.

Every object in the object group becomes a 4-byte event: trigger type,
checkpoint value, event type and colour. The object's local gid selects the
trigger type from TRIGGER_TYPE_BY_GID; its position, scaled down to engine
units and projected along the trigger direction, gives the checkpoint.
"""

from __future__ import annotations

from dataclasses import dataclass

from tmx2map.errors import UnknownEventError
from tmx2map.tmx import TmxObject

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# TMX pixel coordinates per engine grid unit
X_Y_OBJECT_SCALE = 2

# Trigger directions (low 3 bits of the trigger type)
EVENT_L = 0x01
EVENT_UL = 0x02
EVENT_U = 0x03
EVENT_UR = 0x04
EVENT_R = 0x05
DIRECTION_MASK = 0x07

# Special event flags (high bits of the trigger type)
EVENT_FINISH = 0x80
EVENT_JUMP = 0x40
EVENT_SKID = 0x20

DIRECTION_NAMES: dict[int, str] = {
    EVENT_L: "L",
    EVENT_UL: "UL",
    EVENT_U: "U",
    EVENT_UR: "UR",
    EVENT_R: "R",
}

# Trigger type per local object gid
TRIGGER_TYPE_BY_GID: tuple[int, ...] = (
    # 0: finish
    EVENT_U | EVENT_FINISH,
    # 1..3: jump
    EVENT_L | EVENT_JUMP, EVENT_U | EVENT_JUMP, EVENT_R | EVENT_JUMP,
    # 4..6: skid
    EVENT_L | EVENT_SKID, EVENT_U | EVENT_SKID, EVENT_R | EVENT_SKID,
    # 7..16: narrow
    EVENT_L, EVENT_L, EVENT_UL, EVENT_UL, EVENT_UL,
    EVENT_UR, EVENT_UR, EVENT_UR, EVENT_R, EVENT_R,
    # 17..36: very easy
    EVENT_L, EVENT_L, EVENT_L, EVENT_L, EVENT_UL, EVENT_UL, EVENT_UL,
    EVENT_UL, EVENT_U, EVENT_U, EVENT_U, EVENT_U, EVENT_UR, EVENT_UR, EVENT_UR,
    EVENT_UR, EVENT_R, EVENT_R, EVENT_R, EVENT_R,
    # 37..40: easy
    EVENT_UL, EVENT_UL, EVENT_UR, EVENT_UR,
    # 41..49: medium
    EVENT_R,   # R-U-UR
    EVENT_L,   # L-R-UR
    EVENT_UL,  # UL-UR-UL
    EVENT_UR,  # UR-UL-UR
    EVENT_UR,  # UR-L-UR
    EVENT_U, EVENT_U, EVENT_U, EVENT_U,
    # 50..54: hard
    EVENT_UR,  # UR-L-U
    EVENT_UR,  # UR-R-U-UR
    EVENT_UR,  # UR-R-UL-U
    EVENT_U,   # U-UL-R-UR
    EVENT_UR,  # UR-U-R-U-R
)

SPECIAL_EVENT_COUNT = 7

# Colour by local gid range: (exclusive upper bound, colour)
COLOR_BANDS: tuple[tuple[int, int], ...] = (
    (17, 0),  # narrow
    (37, 1),  # very easy
    (41, 2),  # easy
    (50, 3),  # medium
    (55, 4),  # hard
)

EVENT_SIZE = 4


# ---------------------------------------------------------------------------
# Data class
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Event:
    """One engine event record."""

    trigger_type: int
    checkpoint: int
    type: int
    color: int

    @property
    def direction(self) -> int:
        return self.trigger_type & DIRECTION_MASK

    @property
    def is_finish(self) -> bool:
        return bool(self.trigger_type & EVENT_FINISH)

    @property
    def is_jump(self) -> bool:
        return bool(self.trigger_type & EVENT_JUMP)

    @property
    def is_skid(self) -> bool:
        return bool(self.trigger_type & EVENT_SKID)

    def to_bytes(self) -> bytes:
        return bytes((self.trigger_type, self.checkpoint, self.type, self.color))

    @classmethod
    def from_bytes(cls, data: bytes) -> Event:
        trigger_type, checkpoint, type_, color = data[:EVENT_SIZE]
        return cls(trigger_type, checkpoint, type_, color)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def checkpoint_value(direction: int, x: int, y: int) -> int:
    """Progress coordinate along *direction* for engine position (x, y)."""
    if direction in (EVENT_L, EVENT_R):
        return x & 0xFF
    if direction == EVENT_U:
        return y & 0xFF
    if direction == EVENT_UL:
        return (y + x) & 0xFF
    if direction == EVENT_UR:
        return (y - x + 0x100) & 0xFF
    raise ValueError(f"Unknown trigger direction: {direction}")


def event_color(gid: int) -> int:
    """Difficulty colour of an ordinary checkpoint by local gid."""
    for upper, color in COLOR_BANDS:
        if gid < upper:
            return color
    raise UnknownEventError(f"No colour band for event gid {gid}.")


def event_from(obj: TmxObject, first_object_gid: int) -> Event:
    """Encode one TMX object as an engine event.

    Raises:
        UnknownEventError: If the object's local gid is outside the table.
    """
    gid = obj.gid - first_object_gid
    if not 0 <= gid < len(TRIGGER_TYPE_BY_GID):
        raise UnknownEventError(
            f"Object gid {obj.gid} (local {gid}) at {obj.x},{obj.y} "
            f"is not an event tile.",
        )
    trigger_type = TRIGGER_TYPE_BY_GID[gid]
    # Truncate toward zero
    x = int(obj.x / X_Y_OBJECT_SCALE) & 0xFF
    y = int(obj.y / X_Y_OBJECT_SCALE) & 0xFF
    checkpoint = checkpoint_value(trigger_type & DIRECTION_MASK, x, y)

    if gid < SPECIAL_EVENT_COUNT:
        # Finish/jump/skid: flags already live in the table entry.
        return Event(trigger_type, checkpoint, type=0, color=0)
    return Event(trigger_type, checkpoint, type=gid - SPECIAL_EVENT_COUNT,
                 color=event_color(gid))


def encode_events(objects, first_object_gid: int) -> list[Event]:
    """Encode objects in document order."""
    return [event_from(obj, first_object_gid) for obj in objects]
