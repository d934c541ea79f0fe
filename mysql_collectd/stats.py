"""Typed, nullable stat values as produced by a sample source.

The type codes are the same numbering collectd uses for its data source
types in types.db, so a stat's type can be handed straight to collectd
if needed.

"""
from __future__ import annotations

from decimal import Decimal
from typing import Any
from typing import Dict


COUNTER = 0
GAUGE = 1
DERIVE = 2

TYPE_NAMES = {COUNTER: "counter", GAUGE: "gauge", DERIVE: "derive"}


class Stat:
    """A single observed value.

    ``value`` is meaningless when ``is_null`` is set; consumers check
    ``is_null`` first.

    """

    __slots__ = ("type", "value", "is_null")

    type: int
    value: int
    is_null: bool

    def __init__(self, type: int, value: int, is_null: bool = False):
        self.type = type
        self.value = value
        self.is_null = is_null

    def __eq__(self, other):
        if not isinstance(other, Stat):
            return False
        return (self.type, self.value, self.is_null) == (
            other.type,
            other.value,
            other.is_null,
        )

    def __repr__(self):
        return "Stat(%s, %s)" % (
            TYPE_NAMES.get(self.type, self.type),
            "NULL" if self.is_null else self.value,
        )


# a batch of stats, keyed on metric name, e.g. "mysql_commands/select"
Stats = Dict[str, Stat]


def to_int(value: Any) -> int:
    """Convert a driver value to an int.

    Handles ints, Decimal, and numeric strings or bytes, which is how
    MySQL hands back the values of status variables.

    """
    if isinstance(value, bool):
        return int(value)
    elif isinstance(value, int):
        return value
    elif isinstance(value, (bytes, bytearray)):
        value = value.decode("ascii")
    elif isinstance(value, (Decimal, float)):
        return int(value)

    try:
        return int(value)
    except (TypeError, ValueError) as err:
        raise ValueError("not an integer stat value: %r" % (value,)) from err


def classify(type_: int, value: Any, is_null: bool = False) -> Stat:
    """Wrap a raw driver value as a :class:`.Stat` of the given type.

    A ``None`` value is always a null stat, never a zero reading.

    """
    if type_ not in TYPE_NAMES:
        raise ValueError("unknown stat type: %r" % (type_,))

    if is_null or value is None:
        return Stat(type_, 0, True)
    return Stat(type_, to_int(value))


def counter(value: Any) -> Stat:
    return classify(COUNTER, value)


def derive(value: Any) -> Stat:
    return classify(DERIVE, value)


def gauge(value: Any) -> Stat:
    return classify(GAUGE, value)
