"""Input synthesis helpers: mouse speed, mouse movement, key classification."""

from __future__ import annotations

import math
from typing import List, NamedTuple, Optional, Tuple

from gyromapper.keycodes import (
    V_WHEEL_DOWN,
    V_WHEEL_UP,
    VK_DECIMAL,
    VK_DELETE,
    VK_DIVIDE,
    VK_END,
    VK_ESCAPE,
    VK_HOME,
    VK_INSERT,
    VK_LBUTTON,
    VK_LWIN,
    VK_MBUTTON,
    VK_NEXT,
    VK_NUMPAD0,
    VK_PRIOR,
    VK_RBUTTON,
    VK_RETURN,
    VK_SNAPSHOT,
    VK_XBUTTON1,
    VK_XBUTTON2,
    name_to_key,
)

VK_HELP = 0x2F
VK_NUMPAD9 = 0x69
VK_BROWSER_BACK = 0xA6
VK_LAUNCH_APP2 = 0xB7

MOUSEEVENTF_MOVE = 0x0001
MOUSEEVENTF_LEFTDOWN = 0x0002
MOUSEEVENTF_LEFTUP = 0x0004
MOUSEEVENTF_RIGHTDOWN = 0x0008
MOUSEEVENTF_RIGHTUP = 0x0010
MOUSEEVENTF_MIDDLEDOWN = 0x0020
MOUSEEVENTF_MIDDLEUP = 0x0040
MOUSEEVENTF_XDOWN = 0x0080
MOUSEEVENTF_XUP = 0x0100
MOUSEEVENTF_WHEEL = 0x0800
MOUSEEVENTF_ABSOLUTE = 0x8000

XBUTTON1 = 0x0001
XBUTTON2 = 0x0002
WHEEL_DELTA = 120

# Pointer speed multipliers for the system mouse speed settings 1 to 20.
_SPEED_MULTIPLIERS = (
    0.0,
    1.0 / 32.0,
    1.0 / 16.0,
    1.0 / 8.0,
    2.0 / 8.0,
    3.0 / 8.0,
    4.0 / 8.0,
    5.0 / 8.0,
    6.0 / 8.0,
    7.0 / 8.0,
    1.0,
    1.25,
    1.5,
    1.75,
    2.0,
    2.25,
    2.5,
    2.75,
    3.0,
    3.25,
    3.5,
)


def mouse_speed_multiplier(setting: Optional[int]) -> float:
    """The pointer speed multiplier for a system mouse speed setting of 1 to 20.

    Any other setting yields 1.0.
    """
    if setting is not None and 1 <= setting <= 20:
        return _SPEED_MULTIPLIERS[setting]
    return 1.0


class MouseAccumulator:
    """Turns fractional mouse movement into whole pixel steps, carrying the rest."""

    def __init__(self) -> None:
        self.x = 0.0
        self.y = 0.0

    def move(self, x: float, y: float) -> Tuple[int, int]:
        """Add a movement and return the whole pixels to move now."""
        self.x += x
        self.y += y
        dx = int(self.x)
        dy = int(self.y)
        self.x -= dx
        self.y -= dy
        return dx, dy


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def normalized_to_absolute(x: float, y: float) -> Tuple[int, int]:
    """Absolute mouse coordinates for a position normalised to [0, 1] on the screen."""
    return _round_half_away(65535.0 * x), _round_half_away(65535.0 * y)


class MouseEvent(NamedTuple):
    """Mouse event flags and their accompanying data."""

    flags: int
    data: int


_MOUSE_EVENTS = {
    VK_LBUTTON: (MOUSEEVENTF_LEFTDOWN, MOUSEEVENTF_LEFTUP, 0),
    VK_RBUTTON: (MOUSEEVENTF_RIGHTDOWN, MOUSEEVENTF_RIGHTUP, 0),
    VK_MBUTTON: (MOUSEEVENTF_MIDDLEDOWN, MOUSEEVENTF_MIDDLEUP, 0),
    VK_XBUTTON1: (MOUSEEVENTF_XDOWN, MOUSEEVENTF_XUP, XBUTTON1),
    VK_XBUTTON2: (MOUSEEVENTF_XDOWN, MOUSEEVENTF_XUP, XBUTTON2),
    V_WHEEL_UP: (MOUSEEVENTF_WHEEL, 0, WHEEL_DELTA),
    V_WHEEL_DOWN: (MOUSEEVENTF_WHEEL, 0, -WHEEL_DELTA),
}


def mouse_event_for(code: int, pressed: bool) -> Optional[MouseEvent]:
    """The mouse event for pressing or releasing a mouse key code.

    Returns None where there is no event, such as releasing a wheel step.
    """
    press, release, data = _MOUSE_EVENTS.get(code, (0, 0, 0))
    flags = press if pressed else release
    if not flags:
        return None
    return MouseEvent(flags, data)


_NUM_LOCK_KEYS = frozenset((VK_DECIMAL, VK_HOME, VK_END, VK_INSERT, VK_DELETE, VK_PRIOR, VK_NEXT))


def is_num_lock_key(code: int) -> bool:
    """Whether the key's meaning depends on the num lock state."""
    return VK_NUMPAD0 <= code <= VK_NUMPAD9 or code in _NUM_LOCK_KEYS


def is_extended_key(code: int) -> bool:
    """Whether the key is sent with the extended-key flag."""
    return (
        (VK_PRIOR <= code <= VK_HELP and code != VK_SNAPSHOT)
        or VK_LWIN <= code <= VK_DIVIDE
        or VK_BROWSER_BACK <= code <= VK_LAUNCH_APP2
    )


class KeyStroke(NamedTuple):
    """A console key event: pressed state, virtual key code and character."""

    pressed: bool
    virtual_key: int
    char: str


def console_keystrokes(command: str) -> List[KeyStroke]:
    """The console input that types ``command`` on a fresh line and submits it.

    Escape clears the line, each character is typed, and Enter submits.
    """
    strokes = [
        KeyStroke(True, VK_ESCAPE, chr(VK_ESCAPE)),
        KeyStroke(False, VK_ESCAPE, chr(VK_ESCAPE)),
    ]
    strokes.extend(KeyStroke(True, name_to_key(c.upper()), c) for c in command)
    strokes.append(KeyStroke(True, VK_RETURN, chr(VK_RETURN)))
    strokes.append(KeyStroke(False, VK_RETURN, chr(VK_RETURN)))
    return strokes