import pytest

from gyromapper import keycodes as kc
from gyromapper.keycodes import KeyCode, is_controller_key, name_to_key


@pytest.mark.parametrize(
    "name, expected",
    [
        ("LEFT", kc.VK_LEFT),
        ("RIGHT", kc.VK_RIGHT),
        ("ENTER", kc.VK_RETURN),
        ("ESC", kc.VK_ESCAPE),
        ("LMOUSE", kc.VK_LBUTTON),
        ("SCROLLUP", kc.V_WHEEL_UP),
        ("SCROLLDOWN", kc.V_WHEEL_DOWN),
        ("NONE", kc.NO_HOLD_MAPPED),
        ("CALIBRATE", kc.CALIBRATE),
        ("GYRO_ON", kc.GYRO_ON_BIND),
        ("GYRO_OFF", kc.GYRO_OFF_BIND),
        ("SUBSTRACT", kc.VK_SUBTRACT),
        ("SUBTRACT", kc.VK_SUBTRACT),
        ("X_GUIDE", kc.PS_HOME),
        ("PS_PAD_CLICK", kc.PS_PAD_CLICK),
        ("+", kc.VK_OEM_PLUS),
        ("\\", kc.VK_OEM_5),
        ("'", kc.VK_OEM_7),
        ("F1", kc.VK_F1),
        ("F10", kc.VK_F10),
        ("F12", kc.VK_F12),
        ("F19", kc.VK_F19),
        ("N0", kc.VK_NUMPAD0),
    ],
)
def test_named_keys(name, expected):
    assert name_to_key(name) == expected


def test_letters_and_digits_map_to_ascii():
    assert name_to_key("A") == ord("A")
    assert name_to_key("Z") == ord("Z")
    assert name_to_key("7") == ord("7")


@pytest.mark.parametrize(
    "xbox, ps",
    [("X_A", "PS_CROSS"), ("X_LB", "PS_L1"), ("X_LT", "PS_L2"), ("X_BACK", "PS_SHARE")],
)
def test_xbox_and_ps_aliases(xbox, ps):
    assert name_to_key(xbox) == name_to_key(ps)


def test_rumble_names():
    assert name_to_key(kc.SMALL_RUMBLE) == kc.RUMBLE
    assert name_to_key(kc.BIG_RUMBLE) == kc.RUMBLE
    assert name_to_key("R00ag") == 0


def test_quoted_command():
    assert name_to_key('"echo hi"') == kc.COMMAND_ACTION
    assert name_to_key('""') == 0


def test_unknown_and_lowercase_names():
    assert name_to_key("FOO") == 0
    assert name_to_key("a") == 0
    assert name_to_key("") == 0


def test_is_controller_key():
    for code in (kc.X_UP, kc.X_START, kc.PS_HOME, kc.PS_PAD_CLICK, kc.X_LT, kc.X_RT):
        assert is_controller_key(code)
    assert not is_controller_key(kc.VK_SPACE)
    assert not is_controller_key(kc.RUMBLE)


def test_default_keycode():
    key = KeyCode()
    assert key.code == kc.NO_HOLD_MAPPED
    assert str(key) == "None"
    assert key.is_valid()


def test_parse_plain_key():
    key = KeyCode.parse("ENTER")
    assert key == KeyCode(kc.VK_RETURN, "ENTER")
    assert str(key) == "ENTER"


def test_parse_command_strips_quotes():
    key = KeyCode.parse('"echo hi"')
    assert key.code == kc.COMMAND_ACTION
    assert key.name == "echo hi"


def test_parse_rumble_aliases():
    assert KeyCode.parse("SMALL_RUMBLE") == KeyCode(kc.RUMBLE, kc.SMALL_RUMBLE)
    assert KeyCode.parse("BIG_RUMBLE") == KeyCode(kc.RUMBLE, kc.BIG_RUMBLE)


def test_parse_unknown_is_invalid():
    key = KeyCode.parse("NOT_A_KEY")
    assert not key.is_valid()
    assert key.name == ""


def test_keycode_equality_considers_name():
    assert KeyCode.parse("X_A") != KeyCode.parse("PS_CROSS")
    assert KeyCode.parse("X_A").code == KeyCode.parse("PS_CROSS").code