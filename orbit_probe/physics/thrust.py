# orbit_probe/physics/thrust.py
from enum import IntEnum


class ThrustCommand(IntEnum):
    """
    Discrete tangential thrust input, sampled once per tick.
    The value scales settings.THRUST along the velocity direction.
    """
    RETROGRADE = -1
    NONE = 0
    PROGRADE = 1

    @classmethod
    def from_keys(cls, up: bool, down: bool) -> "ThrustCommand":
        """
        Map two directional keys to a command.
        Down is checked after up, so holding both yields RETROGRADE.
        """
        command = cls.NONE
        if up:
            command = cls.PROGRADE
        if down:
            command = cls.RETROGRADE
        return command

    @classmethod
    def parse(cls, value) -> "ThrustCommand":
        """Accept an int (-1/0/1), a member, or a name such as 'prograde'."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
            try:
                value = int(key)
            except ValueError:
                raise ValueError(f"Unknown thrust command: {value!r}") from None
        return cls(int(value))
