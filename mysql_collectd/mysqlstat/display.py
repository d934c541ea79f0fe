from __future__ import annotations

from typing import Dict
from typing import Iterator
from typing import Union


def format_value(value: Union[int, float, None]) -> str:
    if value is None:
        return "-"
    elif isinstance(value, float):
        return "%.3f" % value
    else:
        return str(value)


def format_lines(
    values: Dict[str, Union[int, float, None]]
) -> Iterator[str]:
    """Yield one "name value" line per metric, names aligned, sorted
    by name."""

    if not values:
        return

    width = max(len(name) for name in values)
    for name in sorted(values):
        yield "%-*s %s" % (width, name, format_value(values[name]))


class Display:
    def __init__(self, stream):
        self.stream = stream
        self.polls = 0

    def show(self, timestamp: str, values) -> None:
        self.polls += 1
        self.stream.write("--- poll %d at %s\n" % (self.polls, timestamp))
        for line in format_lines(values):
            self.stream.write(line + "\n")
        self.stream.flush()
