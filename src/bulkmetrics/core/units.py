"""Time units and the conversion factors used for rates and durations."""

from enum import Enum


class TimeUnit(Enum):
    """Time granularity, valued in nanoseconds per unit."""

    NANOSECONDS = 1
    MICROSECONDS = 1_000
    MILLISECONDS = 1_000_000
    SECONDS = 1_000_000_000
    MINUTES = 60 * 1_000_000_000
    HOURS = 60 * 60 * 1_000_000_000
    DAYS = 24 * 60 * 60 * 1_000_000_000

    @property
    def nanos(self) -> int:
        """Number of nanoseconds in one unit."""
        return self.value


_NANOS_PER_SECOND = TimeUnit.SECONDS.nanos


def rate_unit_label(unit: TimeUnit, event_noun: str) -> str:
    """Build a rate label such as ``events/second``.

    Args:
        unit: The time unit rates are expressed per.
        event_noun: What is being counted (e.g. "events", "calls").

    Returns:
        ``"<event_noun>/<unit>"`` with the unit's plural "s" stripped.
    """
    name = unit.name.lower()
    return f"{event_noun}/{name[:-1]}"


def rate_factor(unit: TimeUnit) -> float:
    """Return the number of seconds in one ``unit``.

    Multiplying a per-second rate by this factor gives the rate per ``unit``.
    """
    return unit.nanos / _NANOS_PER_SECOND


def duration_factor(unit: TimeUnit) -> float:
    """Return the factor converting nanoseconds into ``unit``."""
    return 1.0 / unit.nanos


def duration_unit_label(unit: TimeUnit) -> str:
    """Return the lowercase unit name, e.g. ``milliseconds``."""
    return unit.name.lower()
