"""Size formatting helpers and the match modes used when verifying an index."""

from __future__ import annotations

import enum

MB = 1024 * 1024

MODE_ALL = 0b100
MODE_FULL = 0b010
MODE_PARTIAL = 0b001

_POSTFIXES = ("  B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB")


class MatchMode(enum.IntEnum):
    """How a wordlist is checked against an index.

    The ``ALL`` bit walks the whole wordlist instead of random samples; the
    ``FULL`` and ``PARTIAL`` bits select which kinds of match are tried.
    """

    ALL = 0b111
    ALL_FULL = 0b110
    ALL_PARTIAL = 0b101
    RANDOM = 0b011
    RANDOM_FULL = 0b010
    RANDOM_PARTIAL = 0b001

    @classmethod
    def parse(cls, name: str) -> MatchMode:
        """Look up a mode by name, ignoring case."""
        key = name.upper()
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f'Unknown Match Mode "{key}"!') from None

    @property
    def whole_wordlist(self) -> bool:
        return bool(self & MODE_ALL)

    @property
    def full(self) -> bool:
        return bool(self & MODE_FULL)

    @property
    def partial(self) -> bool:
        return bool(self & MODE_PARTIAL)


def get_byte_power(size: int) -> int:
    """Return the binary power (0 = B, 1 = KiB, ...) best suited to show ``size``."""
    size = int(size)
    power = 0
    while size >= 1000:
        size >>= 10
        power += 1
    return power


def get_byte_power_postfix(power: int) -> str:
    """Return the unit suffix for a binary power."""
    if power >= len(_POSTFIXES):
        return f"2^{power * 10}{_POSTFIXES[0]}"
    return _POSTFIXES[power]


def get_formatted_size(size: int, power: int = -1) -> str:
    """Format ``size`` bytes with a fixed-width number and unit.

    A negative ``power`` picks the unit automatically.
    """
    size = int(size)
    format_power = get_byte_power(size) if power < 0 else power
    if format_power == 0:
        number = f"{size:>3}    "
    else:
        number = f"{size / (1 << (10 * format_power)):7.3f}"
    return f"{number} {get_byte_power_postfix(format_power)}"