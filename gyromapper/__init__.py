"""Controller mapping building blocks: gyro maths, key codes, chorded settings, setting values, gamepad reports and input helpers."""

__version__ = "0.1.0"