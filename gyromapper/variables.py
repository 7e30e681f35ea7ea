"""Observable variables with defaults, filters and chorded alternatives."""

from __future__ import annotations

from itertools import count
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

T = TypeVar("T")

OnChange = Callable[[T], None]
Filter = Callable[[T, T], T]

# Chord identifiers are ordered values: real chords compare greater than
# NO_CHORD, and INVALID_CHORD designates a chord that cannot be resolved.
NO_CHORD = -1
INVALID_CHORD = -2

# Listener identifiers are unique across every variable.
_listener_ids = count(1)


def _accept_new(current, new):
    return new


class JSMVariable(Generic[T]):
    """A value that notifies listeners when it changes.

    Every assignment goes through a filter that receives the current and the
    proposed value and returns the value actually stored. The default value
    is fixed at construction and restored by :meth:`reset`.
    """

    def __init__(self, default: T = None, label: str = "") -> None:
        self._default = default
        self._value = default
        self._filter: Filter = _accept_new
        self._listeners: Dict[int, OnChange] = {}
        self.label = label

    @property
    def value(self) -> T:
        return self._value

    @property
    def default(self) -> T:
        return self._default

    def copy_with_default(self, default: T) -> JSMVariable[T]:
        """A new variable sharing this one's filter, without its listeners."""
        copy: JSMVariable[T] = JSMVariable(default)
        copy._filter = self._filter
        return copy

    def set_filter(self, filter_function: Filter) -> JSMVariable[T]:
        """Install a filter and run it on the current value."""
        self._filter = filter_function
        self.set(self._value)
        return self

    def add_on_change_listener(self, listener: OnChange, call_listener: bool = False) -> int:
        """Register a listener and return its identifier."""
        listener_id = next(_listener_ids)
        self._listeners[listener_id] = listener
        if call_listener:
            listener(self._value)
        return listener_id

    def remove_on_change_listener(self, listener_id: int) -> bool:
        """Forget a listener; tell whether it was registered."""
        return self._listeners.pop(listener_id, None) is not None

    def reset(self) -> JSMVariable[T]:
        """Assign the default value, notifying listeners if it changes."""
        self.set(self._default)
        return self

    def set(self, new_value: T) -> T:
        """Assign a value through the filter and return what was stored."""
        old_value = self._value
        self._value = self._filter(old_value, new_value)
        if self._value != old_value:
            for listener in list(self._listeners.values()):
                listener(self._value)
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class ChordedVariable(JSMVariable[T]):
    """A variable with alternative values that apply while a chord is held."""

    def __init__(self, default: T = None, label: str = "") -> None:
        super().__init__(default, label)
        self._chords: Dict[Hashable, JSMVariable[T]] = {}

    def at_chord(self, chord) -> JSMVariable[T]:
        """The variable for ``chord``, created with this default if missing."""
        variable = self._chords.get(chord)
        if variable is None:
            variable = self.copy_with_default(self._default)
            self._chords[chord] = variable
        return variable

    def get_chord(self, chord) -> Optional[JSMVariable[T]]:
        """The variable for ``chord`` if one exists."""
        return self._chords.get(chord)

    def chorded_value(self, chord) -> Optional[T]:
        """The value under ``chord``.

        A real chord yields its own value or None if it has none; NO_CHORD
        yields the base value; INVALID_CHORD yields None.
        """
        if chord > NO_CHORD:
            variable = self._chords.get(chord)
            return variable.value if variable is not None else None
        if chord != INVALID_CHORD:
            return self._value
        return None

    def reset(self) -> ChordedVariable[T]:
        """Restore the default value and drop every chord."""
        super().reset()
        self._chords.clear()
        return self


class JSMSetting(ChordedVariable[T]):
    """A chorded setting identified by a setting id."""

    def __init__(self, setting_id, default: T = None, label: str = "") -> None:
        super().__init__(default, label)
        self.id = setting_id
        self._chord_to_remove = NO_CHORD

    def mark_modeshift_for_removal(self, modeshift) -> None:
        self._chord_to_remove = modeshift

    def process_modeshift_removal(self, modeshift) -> None:
        """Drop the chord for ``modeshift`` if it was marked for removal."""
        if self._chord_to_remove == modeshift and modeshift in self._chords:
            del self._chords[modeshift]
            self._chord_to_remove = NO_CHORD