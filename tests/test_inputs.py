import pytest

from gyromapper.inputs import (
    MOUSEEVENTF_LEFTDOWN,
    MOUSEEVENTF_LEFTUP,
    MOUSEEVENTF_WHEEL,
    MOUSEEVENTF_XDOWN,
    WHEEL_DELTA,
    XBUTTON2,
    MouseAccumulator,
    console_keystrokes,
    is_extended_key,
    is_num_lock_key,
    mouse_event_for,
    mouse_speed_multiplier,
    normalized_to_absolute,
)
from gyromapper.keycodes import (
    V_WHEEL_DOWN,
    V_WHEEL_UP,
    VK_ESCAPE,
    VK_HOME,
    VK_LBUTTON,
    VK_LWIN,
    VK_NUMPAD0,
    VK_RETURN,
    VK_SNAPSHOT,
    VK_XBUTTON2,
    name_to_key,
)


@pytest.mark.parametrize("setting", [None, 0, 21, -3])
def test_mouse_speed_out_of_range_is_one(setting):
    assert mouse_speed_multiplier(setting) == 1.0


def test_mouse_speed_table_ends():
    assert mouse_speed_multiplier(1) == 1.0 / 32.0
    assert mouse_speed_multiplier(10) == 1.0
    assert mouse_speed_multiplier(20) == 3.5


def test_mouse_speed_increases():
    speeds = [mouse_speed_multiplier(s) for s in range(1, 21)]
    assert speeds == sorted(speeds)
    assert len(set(speeds)) == 20


def test_accumulator_carries_fractions():
    acc = MouseAccumulator()
    assert acc.move(0.5, 0.5) == (0, 0)
    assert acc.move(0.5, 0.5) == (1, 1)


def test_accumulator_total_is_preserved():
    acc = MouseAccumulator()
    moves = [(-1.5, 2.7), (0.25, -0.4), (3.1, 0.05)]
    total_x = total_y = 0
    for x, y in moves:
        dx, dy = acc.move(x, y)
        total_x += dx
        total_y += dy
    assert total_x + acc.x == pytest.approx(sum(m[0] for m in moves))
    assert total_y + acc.y == pytest.approx(sum(m[1] for m in moves))
    assert abs(acc.x) < 1 and abs(acc.y) < 1


def test_accumulator_truncates_toward_zero():
    acc = MouseAccumulator()
    assert acc.move(-1.5, 2.7) == (-1, 2)


def test_normalized_to_absolute_corners():
    assert normalized_to_absolute(0.0, 1.0) == (0, 65535)


def test_mouse_button_events():
    assert mouse_event_for(VK_LBUTTON, True) == (MOUSEEVENTF_LEFTDOWN, 0)
    assert mouse_event_for(VK_LBUTTON, False) == (MOUSEEVENTF_LEFTUP, 0)
    assert mouse_event_for(VK_XBUTTON2, True) == (MOUSEEVENTF_XDOWN, XBUTTON2)


def test_wheel_events():
    assert mouse_event_for(V_WHEEL_UP, True) == (MOUSEEVENTF_WHEEL, WHEEL_DELTA)
    assert mouse_event_for(V_WHEEL_DOWN, True) == (MOUSEEVENTF_WHEEL, -WHEEL_DELTA)
    assert mouse_event_for(V_WHEEL_UP, False) is None


def test_non_mouse_code_has_no_event():
    assert mouse_event_for(name_to_key("A"), True) is None


def test_num_lock_keys():
    assert is_num_lock_key(VK_NUMPAD0 + 5) is True
    assert is_num_lock_key(VK_HOME) is True
    assert is_num_lock_key(name_to_key("A")) is False


def test_extended_keys():
    assert is_extended_key(VK_HOME) is True
    assert is_extended_key(VK_LWIN) is True
    assert is_extended_key(VK_SNAPSHOT) is False
    assert is_extended_key(name_to_key("A")) is False


def test_console_keystrokes_frame_command():
    strokes = console_keystrokes("quit")
    assert len(strokes) == len("quit") + 4
    assert [(s.pressed, s.virtual_key) for s in strokes[:2]] == [(True, VK_ESCAPE), (False, VK_ESCAPE)]
    assert [(s.pressed, s.virtual_key) for s in strokes[-2:]] == [(True, VK_RETURN), (False, VK_RETURN)]


def test_console_keystrokes_characters():
    strokes = console_keystrokes("q1")[2:-2]
    assert [s.char for s in strokes] == ["q", "1"]
    assert [s.virtual_key for s in strokes] == [name_to_key("Q"), name_to_key("1")]
    assert all(s.pressed for s in strokes)