# gyromapper

Building blocks for mapping game controller input, including gyro input, to
keyboard, mouse and virtual gamepad actions. Everything here is plain Python
with no dependencies outside the standard library.

## Modules

- `gyromapper.quat`: `Quat` and `Vec`, immutable quaternion and 3D vector
  types. `Quat.angle_axis` builds a rotation, `*` composes quaternions,
  `normalized` and `inverse` do what they say. `Vec` supports `+`, `-`,
  scaling with `*` and `/`, negation, `length`, `normalized`, `dot`, `cross`,
  and rotation with `vec * quat`.
- `gyromapper.keycodes`: key code constants and `name_to_key`, which turns
  binding names such as `"A"`, `"F12"`, `"N5"`, `"LMOUSE"`, `"X_A"`,
  `"PS_CROSS"` or a rumble name like `"R80FF"` into a code, or 0 if the name
  is unknown. A quoted name maps to `COMMAND_ACTION`. `KeyCode.parse` builds
  a `KeyCode` (code and name), handling quoted commands and the
  `SMALL_RUMBLE` / `BIG_RUMBLE` names. `is_controller_key` tells gamepad
  buttons apart from other keys.
- `gyromapper.variables`: `JSMVariable`, a value with a fixed default, a
  filter applied on every assignment and change listeners identified by
  number; `ChordedVariable`, which adds per-chord alternative values
  (`at_chord`, `get_chord`, `chorded_value`); and `JSMSetting`, a chorded
  variable with a setting id and marked modeshift removal. The chord values
  `NO_CHORD` and `INVALID_CHORD` are module constants.
- `gyromapper.values`: parsing and formatting of setting values:
  `FlickSnapMode` (`parse_flick_snap_mode`, `format_flick_snap_mode`),
  `AxisMode` (`parse_axis_mode`), `AxisSignPair`, `FloatXY`, `Color`
  (`xRRGGBB`, a name looked up in a mapping you pass, or three integers
  clamped to 0..255) and `AdaptiveTriggerSetting`. Bad input raises
  `ValueParseError`, a subclass of `ValueError`.
- `gyromapper.gamepad`: the state of virtual Xbox 360 and DualShock 4
  reports, `XboxReport` and `Ds4Report`, with buttons, sticks, triggers,
  DS4 motion data and touchpad contacts. `update()` returns the finished
  report and starts a new one that keeps held buttons. `DpadHat` tracks the
  DS4 hat direction, and `describe_vigem_error` names a `VigemError` code.
- `gyromapper.inputs`: helpers for mouse and keyboard input:
  `mouse_speed_multiplier` for a system mouse speed of 1 to 20,
  `MouseAccumulator` for sub-pixel mouse movement, `normalized_to_absolute`
  for absolute coordinates, `mouse_event_for` for mouse button and wheel
  events, `is_num_lock_key` and `is_extended_key`, and `console_keystrokes`,
  the key events that type a command on a fresh console line.

## Example

```python
from gyromapper.keycodes import KeyCode, name_to_key
from gyromapper.values import FloatXY
from gyromapper.variables import JSMVariable

assert name_to_key("F1") == 0x70
key = KeyCode.parse("SMALL_RUMBLE")
print(key)                          # R0080

sens = JSMVariable(FloatXY(1.0, 1.0))
sens.add_on_change_listener(lambda v: print("now", v), False)
sens.set(FloatXY.parse("2 3"))      # now 2 3
sens.reset()                        # now 1
```

## What this package does not do

It computes values and report contents only. It does not read controllers,
send keyboard or mouse input to the operating system, talk to a virtual
gamepad bus driver, or hide devices from other applications or add itself to
a whitelist for that. It has no command-line program, configuration file
loader or tray icon.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```