"""Key code constants and conversion of key names to virtual key codes."""

from __future__ import annotations

from dataclasses import dataclass

# Custom codes, placed in slots the virtual key table leaves unused.
V_WHEEL_UP = 0x03
V_WHEEL_DOWN = 0x07
NO_HOLD_MAPPED = 0x0A
CALIBRATE = 0x0B
GYRO_INV_X = 0x88
GYRO_INV_Y = 0x89
GYRO_INVERT = 0x8A
GYRO_OFF_BIND = 0x8B
GYRO_ON_BIND = 0x8C
GYRO_TRACK_X = 0x8D
GYRO_TRACK_Y = 0x8E
GYRO_TRACKBALL = 0x8F
COMMAND_ACTION = 0x97
RUMBLE = 0xE6

SMALL_RUMBLE = "R0080"
BIG_RUMBLE = "RFF00"

# XInput buttons
X_UP = 0xE8
X_DOWN = 0xE9
X_LEFT = 0xEA
X_RIGHT = 0xEB
X_LB = 0xEC
X_RB = 0xED
X_X = 0xEE
X_A = 0xEF
X_Y = 0xF0
X_B = 0xF1
X_LS = 0xF2
X_RS = 0xF3
X_BACK = 0xF4
X_START = 0xF5
X_GUIDE = 0xB8
X_LT = 0xD8
X_RT = 0xD9

# DS4 buttons
PS_UP = 0xE8
PS_DOWN = 0xE9
PS_LEFT = 0xEA
PS_RIGHT = 0xEB
PS_L1 = 0xEC
PS_R1 = 0xED
PS_SQUARE = 0xEE
PS_CROSS = 0xEF
PS_TRIANGLE = 0xF0
PS_CIRCLE = 0xF1
PS_L3 = 0xF2
PS_R3 = 0xF3
PS_SHARE = 0xF4
PS_OPTIONS = 0xF5
PS_HOME = 0xB8
PS_PAD_CLICK = 0xB9
PS_L2 = 0xD8
PS_R2 = 0xD9

# Virtual key codes
VK_LBUTTON = 0x01
VK_RBUTTON = 0x02
VK_MBUTTON = 0x04
VK_XBUTTON1 = 0x05
VK_XBUTTON2 = 0x06
VK_BACK = 0x08
VK_TAB = 0x09
VK_RETURN = 0x0D
VK_SHIFT = 0x10
VK_CONTROL = 0x11
VK_MENU = 0x12
VK_CAPITAL = 0x14
VK_ESCAPE = 0x1B
VK_SPACE = 0x20
VK_PRIOR = 0x21
VK_NEXT = 0x22
VK_END = 0x23
VK_HOME = 0x24
VK_LEFT = 0x25
VK_UP = 0x26
VK_RIGHT = 0x27
VK_DOWN = 0x28
VK_SNAPSHOT = 0x2C
VK_INSERT = 0x2D
VK_DELETE = 0x2E
VK_LWIN = 0x5B
VK_RWIN = 0x5C
VK_APPS = 0x5D
VK_NUMPAD0 = 0x60
VK_MULTIPLY = 0x6A
VK_ADD = 0x6B
VK_SUBTRACT = 0x6D
VK_DECIMAL = 0x6E
VK_DIVIDE = 0x6F
VK_F1 = 0x70
VK_F10 = 0x79
VK_F12 = 0x7B
VK_F19 = 0x82
VK_NUMLOCK = 0x90
VK_SCROLL = 0x91
VK_LSHIFT = 0xA0
VK_RSHIFT = 0xA1
VK_LCONTROL = 0xA2
VK_RCONTROL = 0xA3
VK_LMENU = 0xA4
VK_RMENU = 0xA5
VK_VOLUME_MUTE = 0xAD
VK_VOLUME_DOWN = 0xAE
VK_VOLUME_UP = 0xAF
VK_MEDIA_NEXT_TRACK = 0xB0
VK_MEDIA_PREV_TRACK = 0xB1
VK_MEDIA_STOP = 0xB2
VK_MEDIA_PLAY_PAUSE = 0xB3
VK_OEM_1 = 0xBA
VK_OEM_PLUS = 0xBB
VK_OEM_COMMA = 0xBC
VK_OEM_MINUS = 0xBD
VK_OEM_PERIOD = 0xBE
VK_OEM_2 = 0xBF
VK_OEM_3 = 0xC0
VK_OEM_4 = 0xDB
VK_OEM_5 = 0xDC
VK_OEM_6 = 0xDD
VK_OEM_7 = 0xDE

_SINGLE_CHARACTERS = {
    "+": VK_OEM_PLUS,
    "-": VK_OEM_MINUS,
    ",": VK_OEM_COMMA,
    ".": VK_OEM_PERIOD,
    ";": VK_OEM_1,
    "/": VK_OEM_2,
    "`": VK_OEM_3,
    "[": VK_OEM_4,
    "\\": VK_OEM_5,
    "]": VK_OEM_6,
    "'": VK_OEM_7,
}

_NAMED_KEYS = {
    "LEFT": VK_LEFT,
    "RIGHT": VK_RIGHT,
    "UP": VK_UP,
    "DOWN": VK_DOWN,
    "SPACE": VK_SPACE,
    "CONTROL": VK_CONTROL,
    "LCONTROL": VK_LCONTROL,
    "RCONTROL": VK_RCONTROL,
    "SHIFT": VK_SHIFT,
    "LSHIFT": VK_LSHIFT,
    "RSHIFT": VK_RSHIFT,
    "ALT": VK_MENU,
    "LALT": VK_LMENU,
    "RALT": VK_RMENU,
    "LWINDOWS": VK_LWIN,
    "RWINDOWS": VK_RWIN,
    "CONTEXT": VK_APPS,
    "TAB": VK_TAB,
    "ENTER": VK_RETURN,
    "ESC": VK_ESCAPE,
    "PAGEUP": VK_PRIOR,
    "PAGEDOWN": VK_NEXT,
    "HOME": VK_HOME,
    "END": VK_END,
    "INSERT": VK_INSERT,
    "DELETE": VK_DELETE,
    "LMOUSE": VK_LBUTTON,
    "RMOUSE": VK_RBUTTON,
    "MMOUSE": VK_MBUTTON,
    "BMOUSE": VK_XBUTTON1,
    "FMOUSE": VK_XBUTTON2,
    "SCROLLDOWN": V_WHEEL_DOWN,
    "SCROLLUP": V_WHEEL_UP,
    "BACKSPACE": VK_BACK,
    "MULTIPLY": VK_MULTIPLY,
    "ADD": VK_ADD,
    "SUBSTRACT": VK_SUBTRACT,
    "SUBTRACT": VK_SUBTRACT,
    "DIVIDE": VK_DIVIDE,
    "DECIMAL": VK_DECIMAL,
    "CAPS_LOCK": VK_CAPITAL,
    "SCREENSHOT": VK_SNAPSHOT,
    "SCROLL_LOCK": VK_SCROLL,
    "NUM_LOCK": VK_NUMLOCK,
    "MUTE": VK_VOLUME_MUTE,
    "VOLUME_DOWN": VK_VOLUME_DOWN,
    "VOLUME_UP": VK_VOLUME_UP,
    "NEXT_TRACK": VK_MEDIA_NEXT_TRACK,
    "PREV_TRACK": VK_MEDIA_PREV_TRACK,
    "STOP_TRACK": VK_MEDIA_STOP,
    "PLAY_PAUSE": VK_MEDIA_PLAY_PAUSE,
    "NONE": NO_HOLD_MAPPED,
    "CALIBRATE": CALIBRATE,
    "GYRO_INV_X": GYRO_INV_X,
    "GYRO_INV_Y": GYRO_INV_Y,
    "GYRO_INVERT": GYRO_INVERT,
    "GYRO_TRACK_X": GYRO_TRACK_X,
    "GYRO_TRACK_Y": GYRO_TRACK_Y,
    "GYRO_TRACKBALL": GYRO_TRACKBALL,
    "GYRO_ON": GYRO_ON_BIND,
    "GYRO_OFF": GYRO_OFF_BIND,
    "X_UP": X_UP,
    "PS_UP": X_UP,
    "X_DOWN": X_DOWN,
    "PS_DOWN": X_DOWN,
    "X_LEFT": X_LEFT,
    "PS_LEFT": X_LEFT,
    "X_RIGHT": X_RIGHT,
    "PS_RIGHT": X_RIGHT,
    "X_LB": X_LB,
    "PS_L1": X_LB,
    "X_RB": X_RB,
    "PS_R1": X_RB,
    "X_X": X_X,
    "PS_SQUARE": X_X,
    "X_A": X_A,
    "PS_CROSS": X_A,
    "X_Y": X_Y,
    "PS_TRIANGLE": X_Y,
    "X_B": X_B,
    "PS_CIRCLE": X_B,
    "X_LS": X_LS,
    "PS_L3": X_LS,
    "X_RS": X_RS,
    "PS_R3": X_RS,
    "X_BACK": X_BACK,
    "PS_SHARE": X_BACK,
    "X_START": X_START,
    "PS_OPTIONS": X_START,
    "X_GUIDE": PS_HOME,
    "PS_HOME": PS_HOME,
    "PS_PAD_CLICK": PS_PAD_CLICK,
    "X_RT": X_RT,
    "PS_R2": X_RT,
    "X_LT": X_LT,
    "PS_L2": X_LT,
}

_RUMBLE_DIGITS = frozenset("0123456789ABCDEF")


def is_controller_key(code: int) -> bool:
    """Whether ``code`` designates a virtual controller button."""
    return X_UP <= code <= X_START or code in (PS_HOME, PS_PAD_CLICK, X_LT, X_RT)


def name_to_key(name: str) -> int:
    """Map a key name to its code, or 0 if the name is not recognised."""
    length = len(name)
    if length == 1:
        char = name
        if "0" <= char <= "9":
            return ord(char) - ord("0") + 0x30
        if "A" <= char <= "Z":
            return ord(char) - ord("A") + 0x41
        if char in _SINGLE_CHARACTERS:
            return _SINGLE_CHARACTERS[char]
    elif length == 2:
        first, second = name
        if first == "F":
            if "1" <= second <= "9":
                return ord(second) - ord("1") + VK_F1
        elif first == "N":
            if "0" <= second <= "9":
                return ord(second) - ord("0") + VK_NUMPAD0
    elif length == 3:
        first, second, third = name
        if first == "F" and second <= "2" and "0" <= third <= "9":
            code = (ord(second) - ord("1")) * 10 + VK_F10 + (ord(third) - ord("0"))
            return code & 0xFFFF
    elif length == 5:
        if name[0] == "R" and all(c in _RUMBLE_DIGITS for c in name[1:]):
            return RUMBLE

    if length > 2 and name[0] == '"' and name[-1] == '"':
        return COMMAND_ACTION
    return _NAMED_KEYS.get(name, 0x00)


@dataclass(frozen=True)
class KeyCode:
    """A key code together with the name it was given."""

    code: int = NO_HOLD_MAPPED
    name: str = "None"

    @classmethod
    def parse(cls, name: str) -> KeyCode:
        """Build a key code from a key name, a quoted command or a rumble name."""
        code = name_to_key(name)
        if code == COMMAND_ACTION:
            return cls(code, name[1:-1])
        if name == "SMALL_RUMBLE":
            return cls(RUMBLE, SMALL_RUMBLE)
        if name == "BIG_RUMBLE":
            return cls(RUMBLE, BIG_RUMBLE)
        if code != 0:
            return cls(code, name)
        return cls(code, "")

    def is_valid(self) -> bool:
        return self.code != 0

    def __str__(self) -> str:
        return self.name