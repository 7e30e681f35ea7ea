import pytest

from gyromapper import gamepad
from gyromapper.gamepad import (
    Ds4Report,
    DpadDirection,
    DpadHat,
    VigemError,
    XboxReport,
    describe_vigem_error,
)
from gyromapper.keycodes import (
    KeyCode,
    PS_CROSS,
    PS_DOWN,
    PS_HOME,
    PS_L2,
    PS_LEFT,
    PS_RIGHT,
    PS_UP,
    X_A,
    X_B,
    X_DOWN,
    X_LEFT,
    X_LT,
    X_RIGHT,
    X_UP,
)
from gyromapper.values import FloatXY


def test_describe_known_error():
    assert describe_vigem_error(VigemError.TIMED_OUT) == "VIGEM_ERROR_TIMED_OUT"
    assert describe_vigem_error(VigemError.BUS_NOT_FOUND) == "VIGEM_ERROR_BUS_NOT_FOUND"


def test_describe_unknown_error_is_hex():
    assert describe_vigem_error(0x1234) == hex(0x1234)


@pytest.mark.parametrize(
    "presses, expected",
    [
        ([X_UP], DpadDirection.NORTH),
        ([X_UP, X_RIGHT], DpadDirection.NORTHEAST),
        ([X_DOWN, X_LEFT], DpadDirection.SOUTHWEST),
        ([X_LEFT, X_RIGHT], DpadDirection.NONE),
        ([X_UP, X_DOWN], DpadDirection.NONE),
    ],
)
def test_hat_press_sequences(presses, expected):
    hat = DpadHat()
    for direction in presses:
        result = hat.set(direction)
    assert result == expected
    assert hat.value == expected


@pytest.mark.parametrize(
    "start, released, expected",
    [
        (DpadDirection.NORTHWEST, X_UP, DpadDirection.WEST),
        (DpadDirection.NORTHWEST, X_LEFT, DpadDirection.NORTH),
        (DpadDirection.SOUTHEAST, X_RIGHT, DpadDirection.SOUTH),
        (DpadDirection.EAST, X_RIGHT, DpadDirection.NONE),
        (DpadDirection.NORTH, X_DOWN, DpadDirection.NORTH),
    ],
)
def test_hat_release(start, released, expected):
    assert DpadHat(start).clear(released) == expected


def test_hat_press_then_release_returns_to_none():
    hat = DpadHat()
    for direction in (X_UP, X_RIGHT, X_DOWN, X_LEFT):
        hat.set(direction)
        assert hat.clear(direction) == DpadDirection.NONE


def test_xbox_button_bits():
    report = XboxReport()
    report.set_button(KeyCode.parse("X_A"), True)
    report.set_button(X_B, True)
    assert report.buttons == gamepad.XUSB_GAMEPAD_A | gamepad.XUSB_GAMEPAD_B
    report.set_button(X_A, False)
    assert report.buttons == gamepad.XUSB_GAMEPAD_B


def test_xbox_stick_clamps():
    report = XboxReport()
    report.set_left_stick(2.0, -5.0)
    assert report.thumb_lx == gamepad.SHRT_MAX
    assert report.thumb_ly == -gamepad.SHRT_MAX
    report.set_left_stick(1.0, -1.0)
    assert report.thumb_lx == gamepad.SHRT_MAX
    assert report.thumb_ly == gamepad.SHRT_MIN


def test_xbox_set_stick_dispatches():
    report = XboxReport()
    report.set_stick(1.0, 1.0, False)
    assert report.thumb_rx == gamepad.SHRT_MAX
    assert report.thumb_lx == 0


def test_xbox_trigger_clamps():
    report = XboxReport()
    report.set_right_trigger(1.0)
    report.set_right_trigger(1.0)
    assert report.right_trigger == gamepad.UCHAR_MAX


def test_xbox_update_keeps_buttons_and_digital_trigger():
    report = XboxReport()
    report.set_button(X_A, True)
    report.set_button(X_LT, True)
    report.set_left_stick(0.5, 0.5)
    sent = report.update()
    assert sent.left_trigger == gamepad.UCHAR_MAX
    assert sent.thumb_lx > 0
    assert report.left_trigger == 0
    assert report.thumb_lx == 0
    assert report.buttons == gamepad.XUSB_GAMEPAD_A
    assert report.update().left_trigger == gamepad.UCHAR_MAX


def test_ds4_initial_state():
    report = Ds4Report()
    assert report.thumb_lx == 0x80
    assert report.buttons & 0xF == DpadDirection.NONE
    assert report.touch_is_up_tracking_num1 == 0x80


def test_ds4_stick_full_deflection():
    report = Ds4Report()
    report.set_left_stick(1.0, 1.0)
    assert report.thumb_lx == gamepad.UCHAR_MAX
    assert report.thumb_ly == 0


def test_ds4_dpad_uses_hat_nibble():
    report = Ds4Report()
    report.set_button(PS_UP, True)
    report.set_button(PS_RIGHT, True)
    assert report.buttons & 0xF == DpadDirection.NORTHEAST
    report.set_button(PS_UP, False)
    assert report.buttons & 0xF == DpadDirection.EAST
    report.set_button(PS_CROSS, True)
    assert report.buttons & gamepad.DS4_BUTTON_CROSS
    assert report.buttons & 0xF == DpadDirection.EAST


def test_ds4_dpad_opposite_cancel():
    report = Ds4Report()
    report.set_button(PS_DOWN, True)
    report.set_button(PS_LEFT, True)
    assert report.buttons & 0xF == DpadDirection.SOUTHWEST


def test_ds4_home_sets_special():
    report = Ds4Report()
    report.set_button(PS_HOME, True)
    assert report.special == gamepad.DS4_SPECIAL_BUTTON_PS
    report.set_button(PS_HOME, False)
    assert report.special == 0


def test_ds4_l2_digital():
    report = Ds4Report()
    report.set_button(PS_L2, True)
    assert report.trigger_l == gamepad.UCHAR_MAX
    assert report.buttons & gamepad.DS4_BUTTON_TRIGGER_LEFT
    report.set_button(PS_L2, False)
    assert not report.buttons & gamepad.DS4_BUTTON_TRIGGER_LEFT


def test_ds4_gyro_scaling():
    report = Ds4Report()
    report.set_gyro(1.0, 0.0, -1.0, 2000.0, 0.0, -2000.0)
    assert report.accel_x == 8192
    assert report.accel_z == -8192
    assert report.gyro_x == 32767
    assert report.gyro_z == -32767
    assert report.accel_y == 0


def test_ds4_touch_encoding_round_trip():
    report = Ds4Report()
    press = FloatXY(0.25, 0.75)
    report.set_touch_state(press, None)
    raw = int.from_bytes(bytes(report.touch_data1), "little")
    assert raw & 0xFFF == int(press.x * 1920.0)
    assert raw >> 12 == int(press.y * 943.0)
    assert report.touch_packets_n == 1
    assert report.touch_packet_counter == 1


def test_ds4_touch_release_and_new_id():
    report = Ds4Report()
    report.set_touch_state(None, None)
    assert report.touch_is_up_tracking_num1 & 0x80
    report.set_touch_state(FloatXY(0.1, 0.1), None)
    first_id = report.touch_is_up_tracking_num1
    assert not first_id & 0x80
    report.set_touch_state(None, None)
    assert report.touch_is_up_tracking_num1 == 0x80 | first_id
    report.set_touch_state(FloatXY(0.1, 0.1), None)
    assert report.touch_is_up_tracking_num1 == first_id + 1
    assert report.touch_packet_counter == 4


def test_ds4_update_resets_analog_and_keeps_buttons():
    report = Ds4Report()
    report.set_button(PS_CROSS, True)
    report.set_button(PS_HOME, True)
    report.set_right_stick(1.0, 0.0)
    sent = report.update()
    assert sent.thumb_rx == gamepad.UCHAR_MAX
    assert report.thumb_rx == 0x80
    assert report.buttons & gamepad.DS4_BUTTON_CROSS
    assert report.special == gamepad.DS4_SPECIAL_BUTTON_PS
    sent.touch_data1[0] = 7
    assert report.touch_data1 == [0, 0, 0]