"""State of virtual Xbox and DualShock 4 gamepads, as sent to the bus driver."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Protocol, Union

from gyromapper.keycodes import (
    KeyCode,
    PS_CIRCLE,
    PS_CROSS,
    PS_DOWN,
    PS_HOME,
    PS_L1,
    PS_L2,
    PS_L3,
    PS_LEFT,
    PS_OPTIONS,
    PS_PAD_CLICK,
    PS_R1,
    PS_R2,
    PS_R3,
    PS_RIGHT,
    PS_SHARE,
    PS_SQUARE,
    PS_TRIANGLE,
    PS_UP,
    X_A,
    X_B,
    X_BACK,
    X_DOWN,
    X_GUIDE,
    X_LB,
    X_LEFT,
    X_LS,
    X_LT,
    X_RB,
    X_RIGHT,
    X_RS,
    X_RT,
    X_START,
    X_UP,
    X_X,
    X_Y,
)

SHRT_MAX = 32767
SHRT_MIN = -32768
UCHAR_MAX = 255

# Xbox 360 report button bits
XUSB_GAMEPAD_DPAD_UP = 0x0001
XUSB_GAMEPAD_DPAD_DOWN = 0x0002
XUSB_GAMEPAD_DPAD_LEFT = 0x0004
XUSB_GAMEPAD_DPAD_RIGHT = 0x0008
XUSB_GAMEPAD_START = 0x0010
XUSB_GAMEPAD_BACK = 0x0020
XUSB_GAMEPAD_LEFT_THUMB = 0x0040
XUSB_GAMEPAD_RIGHT_THUMB = 0x0080
XUSB_GAMEPAD_LEFT_SHOULDER = 0x0100
XUSB_GAMEPAD_RIGHT_SHOULDER = 0x0200
XUSB_GAMEPAD_GUIDE = 0x0400
XUSB_GAMEPAD_A = 0x1000
XUSB_GAMEPAD_B = 0x2000
XUSB_GAMEPAD_X = 0x4000
XUSB_GAMEPAD_Y = 0x8000

# DualShock 4 report button bits
DS4_BUTTON_SQUARE = 1 << 4
DS4_BUTTON_CROSS = 1 << 5
DS4_BUTTON_CIRCLE = 1 << 6
DS4_BUTTON_TRIANGLE = 1 << 7
DS4_BUTTON_SHOULDER_LEFT = 1 << 8
DS4_BUTTON_SHOULDER_RIGHT = 1 << 9
DS4_BUTTON_TRIGGER_LEFT = 1 << 10
DS4_BUTTON_TRIGGER_RIGHT = 1 << 11
DS4_BUTTON_SHARE = 1 << 12
DS4_BUTTON_OPTIONS = 1 << 13
DS4_BUTTON_THUMB_LEFT = 1 << 14
DS4_BUTTON_THUMB_RIGHT = 1 << 15

DS4_SPECIAL_BUTTON_PS = 1 << 0
DS4_SPECIAL_BUTTON_TOUCHPAD = 1 << 1

ACCEL_TO_RAW = 8192.0
GYRO_TO_RAW = 32767.0 / 2000.0


class VigemError(IntEnum):
    """Error codes reported by the virtual gamepad bus."""

    NONE = 0x20000000
    BUS_NOT_FOUND = 0xE0000001
    NO_FREE_SLOT = 0xE0000002
    INVALID_TARGET = 0xE0000003
    REMOVAL_FAILED = 0xE0000004
    ALREADY_CONNECTED = 0xE0000005
    TARGET_UNINITIALIZED = 0xE0000006
    TARGET_NOT_PLUGGED_IN = 0xE0000007
    BUS_VERSION_MISMATCH = 0xE0000008
    BUS_ACCESS_FAILED = 0xE0000009
    CALLBACK_ALREADY_REGISTERED = 0xE0000010
    CALLBACK_NOT_FOUND = 0xE0000011
    BUS_ALREADY_CONNECTED = 0xE0000012
    BUS_INVALID_HANDLE = 0xE0000013
    XUSB_USERINDEX_OUT_OF_RANGE = 0xE0000014
    INVALID_PARAMETER = 0xE0000015
    NOT_SUPPORTED = 0xE0000016
    WINAPI = 0xE0000017
    TIMED_OUT = 0xE0000018
    IS_DISPOSING = 0xE0000019


def describe_vigem_error(code: int) -> str:
    """The symbolic name of a bus error code, or its hexadecimal value."""
    try:
        return f"VIGEM_ERROR_{VigemError(code).name}"
    except ValueError:
        return hex(code)


class DpadDirection(IntEnum):
    """Hat switch values of a DualShock 4 report."""

    NORTH = 0x0
    NORTHEAST = 0x1
    EAST = 0x2
    SOUTHEAST = 0x3
    SOUTH = 0x4
    SOUTHWEST = 0x5
    WEST = 0x6
    NORTHWEST = 0x7
    NONE = 0x8


_D = DpadDirection

_HAT_PRESS = {
    _D.NONE: {X_UP: _D.NORTH, X_DOWN: _D.SOUTH, X_LEFT: _D.WEST, X_RIGHT: _D.EAST},
    _D.NORTHWEST: {X_DOWN: _D.WEST, X_RIGHT: _D.NORTH},
    _D.WEST: {X_UP: _D.NORTHWEST, X_DOWN: _D.SOUTHWEST, X_RIGHT: _D.NONE},
    _D.SOUTHWEST: {X_UP: _D.WEST, X_RIGHT: _D.SOUTH},
    _D.SOUTH: {X_UP: _D.NONE, X_LEFT: _D.SOUTHWEST, X_RIGHT: _D.SOUTHEAST},
    _D.SOUTHEAST: {X_UP: _D.EAST, X_LEFT: _D.SOUTH},
    _D.EAST: {X_UP: _D.NORTHEAST, X_DOWN: _D.SOUTHEAST, X_LEFT: _D.NONE},
    _D.NORTHEAST: {X_DOWN: _D.EAST, X_LEFT: _D.NORTH},
    _D.NORTH: {X_DOWN: _D.NONE, X_LEFT: _D.NORTHWEST, X_RIGHT: _D.NORTHEAST},
}

_HAT_RELEASE = {
    _D.NORTHWEST: {X_UP: _D.WEST, X_LEFT: _D.NORTH},
    _D.WEST: {X_LEFT: _D.NONE},
    _D.SOUTHWEST: {X_DOWN: _D.WEST, X_LEFT: _D.SOUTH},
    _D.SOUTH: {X_DOWN: _D.NONE},
    _D.SOUTHEAST: {X_DOWN: _D.EAST, X_RIGHT: _D.SOUTH},
    _D.EAST: {X_RIGHT: _D.NONE},
    _D.NORTHEAST: {X_UP: _D.EAST, X_RIGHT: _D.NORTH},
    _D.NORTH: {X_UP: _D.NONE},
}


class DpadHat:
    """Tracks the hat direction as d-pad buttons are pressed and released."""

    def __init__(self, value: int = DpadDirection.NONE) -> None:
        self.value = DpadDirection(value)

    def set(self, direction: int) -> DpadDirection:
        """Press a d-pad button (an X_UP..X_RIGHT code) and return the new hat."""
        self.value = _HAT_PRESS.get(self.value, {}).get(direction, self.value)
        return self.value

    def clear(self, direction: int) -> DpadDirection:
        """Release a d-pad button and return the new hat."""
        self.value = _HAT_RELEASE.get(self.value, {}).get(direction, self.value)
        return self.value


class _Point(Protocol):
    x: float
    y: float


KeyLike = Union[KeyCode, int]


def _code_of(key: KeyLike) -> int:
    return key.code if isinstance(key, KeyCode) else int(key)


def _clamp(value, low, high):
    return max(low, min(value, high))


def _trigger_amount(value: float) -> int:
    return int(_clamp(value, 0.0, 1.0) * UCHAR_MAX)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _to_short(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value >= 0x8000 else value


_XBOX_BUTTONS = {
    X_UP: XUSB_GAMEPAD_DPAD_UP,
    X_DOWN: XUSB_GAMEPAD_DPAD_DOWN,
    X_LEFT: XUSB_GAMEPAD_DPAD_LEFT,
    X_RIGHT: XUSB_GAMEPAD_DPAD_RIGHT,
    X_LB: XUSB_GAMEPAD_LEFT_SHOULDER,
    X_BACK: XUSB_GAMEPAD_BACK,
    X_X: XUSB_GAMEPAD_X,
    X_A: XUSB_GAMEPAD_A,
    X_Y: XUSB_GAMEPAD_Y,
    X_B: XUSB_GAMEPAD_B,
    X_RB: XUSB_GAMEPAD_RIGHT_SHOULDER,
    X_START: XUSB_GAMEPAD_START,
    X_LS: XUSB_GAMEPAD_LEFT_THUMB,
    X_RS: XUSB_GAMEPAD_RIGHT_THUMB,
    X_GUIDE: XUSB_GAMEPAD_GUIDE,
}


@dataclass
class XboxReport:
    """An Xbox 360 controller report being assembled for the next update."""

    buttons: int = 0
    left_trigger: int = 0
    right_trigger: int = 0
    thumb_lx: int = 0
    thumb_ly: int = 0
    thumb_rx: int = 0
    thumb_ry: int = 0
    left_trigger_digital: bool = field(default=False, compare=False)
    right_trigger_digital: bool = field(default=False, compare=False)

    def set_button(self, key: KeyLike, pressed: bool) -> None:
        code = _code_of(key)
        mask = _XBOX_BUTTONS.get(code)
        if mask is not None:
            self.buttons = self.buttons | mask if pressed else self.buttons & ~mask
        elif code == X_LT:
            self.left_trigger_digital = pressed
            self.set_left_trigger(1.0)
        elif code == X_RT:
            self.right_trigger_digital = pressed
            self.set_right_trigger(1.0)

    def set_stick(self, x: float, y: float, is_left: bool) -> None:
        if is_left:
            self.set_left_stick(x, y)
        else:
            self.set_right_stick(x, y)

    @staticmethod
    def _add_axis(current: int, amount: float) -> int:
        return _clamp(int(current + SHRT_MAX * _clamp(amount, -1.0, 1.0)), SHRT_MIN, SHRT_MAX)

    def set_left_stick(self, x: float, y: float) -> None:
        """Add a deflection in [-1, 1] to the left stick."""
        self.thumb_lx = self._add_axis(self.thumb_lx, x)
        self.thumb_ly = self._add_axis(self.thumb_ly, y)

    def set_right_stick(self, x: float, y: float) -> None:
        """Add a deflection in [-1, 1] to the right stick."""
        self.thumb_rx = self._add_axis(self.thumb_rx, x)
        self.thumb_ry = self._add_axis(self.thumb_ry, y)

    def set_left_trigger(self, value: float) -> None:
        self.left_trigger = _clamp(self.left_trigger + _trigger_amount(value), 0, UCHAR_MAX)

    def set_right_trigger(self, value: float) -> None:
        self.right_trigger = _clamp(self.right_trigger + _trigger_amount(value), 0, UCHAR_MAX)

    def update(self) -> XboxReport:
        """Return the report to send and start a new one, keeping held buttons."""
        if self.left_trigger_digital:
            self.set_left_trigger(1.0)
        if self.right_trigger_digital:
            self.set_right_trigger(1.0)
        sent = copy.copy(self)
        self.left_trigger = self.right_trigger = 0
        self.thumb_lx = self.thumb_ly = self.thumb_rx = self.thumb_ry = 0
        return sent


_DS4_BUTTONS = {
    PS_L1: DS4_BUTTON_SHOULDER_LEFT,
    PS_SHARE: DS4_BUTTON_SHARE,
    PS_SQUARE: DS4_BUTTON_SQUARE,
    PS_CROSS: DS4_BUTTON_CROSS,
    PS_TRIANGLE: DS4_BUTTON_TRIANGLE,
    PS_CIRCLE: DS4_BUTTON_CIRCLE,
    PS_R1: DS4_BUTTON_SHOULDER_RIGHT,
    PS_OPTIONS: DS4_BUTTON_OPTIONS,
    PS_L3: DS4_BUTTON_THUMB_LEFT,
    PS_R3: DS4_BUTTON_THUMB_RIGHT,
}

_DS4_SPECIAL = {
    PS_HOME: DS4_SPECIAL_BUTTON_PS,
    PS_PAD_CLICK: DS4_SPECIAL_BUTTON_TOUCHPAD,
}

_DPAD_CODES = (PS_UP, PS_DOWN, PS_LEFT, PS_RIGHT)


def _touch_bytes(press: _Point) -> list:
    xy = (int(press.y * 943.0) << 12) | int(press.x * 1920.0)
    return [xy & 0xFF, (xy >> 8) & 0xFF, (xy >> 16) & 0xFF]


@dataclass
class Ds4Report:
    """A DualShock 4 extended report being assembled for the next update."""

    buttons: int = int(DpadDirection.NONE)
    special: int = 0
    thumb_lx: int = 0x80
    thumb_ly: int = 0x80
    thumb_rx: int = 0x80
    thumb_ry: int = 0x80
    trigger_l: int = 0
    trigger_r: int = 0
    gyro_x: int = 0
    gyro_y: int = 0
    gyro_z: int = 0
    accel_x: int = 0
    accel_y: int = 0
    accel_z: int = 0
    touch_packets_n: int = 0
    touch_packet_counter: int = 0
    touch_is_up_tracking_num1: int = 0x80
    touch_data1: list = field(default_factory=lambda: [0, 0, 0])
    touch_is_up_tracking_num2: int = 0x80
    touch_data2: list = field(default_factory=lambda: [0, 0, 0])
    left_trigger_digital: bool = field(default=False, compare=False)
    right_trigger_digital: bool = field(default=False, compare=False)
    _touch_packet: int = field(default=0, init=False, compare=False, repr=False)
    _next_touch_id: int = field(default=1, init=False, compare=False, repr=False)
    _touch_id1: Optional[int] = field(default=0, init=False, compare=False, repr=False)
    _touch_id2: Optional[int] = field(default=0, init=False, compare=False, repr=False)

    def set_button(self, key: KeyLike, pressed: bool) -> None:
        code = _code_of(key)
        if code in _DPAD_CODES:
            hat = DpadHat(self.buttons & 0x000F)
            value = hat.set(code) if pressed else hat.clear(code)
            self.buttons = (self.buttons & 0xFFF0) | int(value)
        elif code in _DS4_SPECIAL:
            mask = _DS4_SPECIAL[code]
            self.special = self.special | mask if pressed else self.special & ~mask
        elif code in _DS4_BUTTONS:
            self._apply(_DS4_BUTTONS[code], pressed)
        elif code == PS_L2:
            self.left_trigger_digital = pressed
            self._apply(DS4_BUTTON_TRIGGER_LEFT, pressed)
            self.set_left_trigger(1.0 if pressed else 0.0)
        elif code == PS_R2:
            self.right_trigger_digital = pressed
            self._apply(DS4_BUTTON_TRIGGER_RIGHT, pressed)
            self.set_right_trigger(1.0 if pressed else 0.0)

    def _apply(self, mask: int, pressed: bool) -> None:
        self.buttons = (self.buttons | mask) if pressed else (self.buttons & ~mask & 0xFFFF)

    def set_stick(self, x: float, y: float, is_left: bool) -> None:
        if is_left:
            self.set_left_stick(x, y)
        else:
            self.set_right_stick(x, y)

    @staticmethod
    def _add_axis(current: int, amount: float) -> int:
        return _clamp(int(current + UCHAR_MAX * _clamp(amount / 2.0, -0.5, 0.5)), 0, UCHAR_MAX)

    def set_left_stick(self, x: float, y: float) -> None:
        """Add a deflection in [-1, 1] to the left stick; positive y is up."""
        self.thumb_lx = self._add_axis(self.thumb_lx, x)
        self.thumb_ly = self._add_axis(self.thumb_ly, -y)

    def set_right_stick(self, x: float, y: float) -> None:
        """Add a deflection in [-1, 1] to the right stick; positive y is up."""
        self.thumb_rx = self._add_axis(self.thumb_rx, x)
        self.thumb_ry = self._add_axis(self.thumb_ry, -y)

    def set_left_trigger(self, value: float) -> None:
        self.trigger_l = _clamp(self.trigger_l + _trigger_amount(value), 0, UCHAR_MAX)
        self._apply(DS4_BUTTON_TRIGGER_LEFT, value > 0)

    def set_right_trigger(self, value: float) -> None:
        self.trigger_r = _clamp(self.trigger_r + _trigger_amount(value), 0, UCHAR_MAX)
        self._apply(DS4_BUTTON_TRIGGER_RIGHT, value > 0)

    def set_gyro(self, accel_x, accel_y, accel_z, gyro_x, gyro_y, gyro_z) -> None:
        """Store motion data: acceleration in g and angular speed in degrees per second."""
        self.accel_x = _to_short(_round_half_away(accel_x * ACCEL_TO_RAW))
        self.accel_y = _to_short(_round_half_away(accel_y * ACCEL_TO_RAW))
        self.accel_z = _to_short(_round_half_away(accel_z * ACCEL_TO_RAW))
        self.gyro_x = _to_short(_round_half_away(gyro_x * GYRO_TO_RAW))
        self.gyro_y = _to_short(_round_half_away(gyro_y * GYRO_TO_RAW))
        self.gyro_z = _to_short(_round_half_away(gyro_z * GYRO_TO_RAW))

    def set_touch_state(self, press1: Optional[_Point], press2: Optional[_Point]) -> None:
        """Report up to two touchpad contacts in normalised coordinates, or None."""
        if (
            press1 is not None
            or self._touch_id1 is not None
            or press2 is not None
            or self._touch_id2 is not None
        ):
            self.touch_packets_n = 1
            self._touch_packet = (self._touch_packet + 1) & 0xFF
            self.touch_packet_counter = self._touch_packet

        if press1 is not None:
            if self._touch_id1 is None:
                self._touch_id1 = self._take_touch_id()
            self.touch_is_up_tracking_num1 = self._touch_id1 & 0x7F
            self.touch_data1 = _touch_bytes(press1)
        elif self._touch_id1 is not None:
            self.touch_is_up_tracking_num1 = 0x80 | (self._touch_id1 & 0x7F)
            self._touch_id1 = None

        if press2 is not None:
            if self._touch_id2 is None:
                self._touch_id2 = self._take_touch_id()
            self.touch_is_up_tracking_num2 = self._touch_id2 & 0x7F
            self.touch_data2 = _touch_bytes(press2)
        elif self._touch_id2 is not None:
            self.touch_is_up_tracking_num2 = 0x80 | (self._touch_id2 & 0x7F)
            self._touch_id2 = None

    def _take_touch_id(self) -> int:
        touch_id = self._next_touch_id
        self._next_touch_id = (self._next_touch_id + 1) % 0x80
        return touch_id

    def update(self) -> Ds4Report:
        """Return the report to send and start a new one, keeping held buttons."""
        if self.left_trigger_digital:
            self.set_left_trigger(1.0)
        if self.right_trigger_digital:
            self.set_right_trigger(1.0)
        sent = copy.deepcopy(self)
        self.thumb_lx = self.thumb_ly = self.thumb_rx = self.thumb_ry = 0x80
        self.trigger_l = self.trigger_r = 0
        self.gyro_x = self.gyro_y = self.gyro_z = 0
        self.accel_x = self.accel_y = self.accel_z = 0
        self.touch_packets_n = 0
        self.touch_packet_counter = 0
        self.touch_is_up_tracking_num1 = 0x80
        self.touch_is_up_tracking_num2 = 0x80
        self.touch_data1 = [0, 0, 0]
        self.touch_data2 = [0, 0, 0]
        return sent