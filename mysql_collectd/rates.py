from __future__ import annotations

import logging
import time
from typing import Callable
from typing import Dict
from typing import Optional
from typing import Union

from . import stats


log = logging.getLogger(__name__)

WIDTH_32BIT = 2**32
WIDTH_64BIT = 2**64


class RateState:
    """Last value and collection time seen for a counter or derive."""

    __slots__ = ("value", "timestamp")

    value: int
    timestamp: float

    def __init__(self, value: int, timestamp: float):
        self.value = value
        self.timestamp = timestamp

    def __repr__(self):
        return "RateState(value=%r, timestamp=%r)" % (
            self.value,
            self.timestamp,
        )


class RateEngine:
    """Turns successive counter / derive readings into rates per second.

    Gauges are passed through untouched.  For counters and derives, the
    last reading of each metric is kept so that the next reading can be
    differentiated against it; the first reading of a metric, or the first
    one after a NULL, has nothing to compare to and comes out as ``None``.

    Counters which appear to go backwards are assumed to have wrapped.
    The width of the counter isn't known, so it's guessed from the previous
    value: anything below 2**32 is taken as a 32 bit counter, otherwise
    64 bit.  This is an approximation; a 64 bit counter which was reset
    while still small will be read as a 32 bit wraparound.

    Not safe for concurrent use; callers serialize calls to
    :meth:`.update` for a given engine.

    """

    counters: Dict[str, RateState]

    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock
        self.counters = {}

    def update(
        self, stats_: stats.Stats, now: Optional[float] = None
    ) -> Dict[str, Union[int, float, None]]:
        """Process one batch of stats, returning a value per metric name.

        ``now`` is the collection time for the whole batch; defaults to
        the engine's clock.

        """
        if now is None:
            now = self.clock()

        result: Dict[str, Union[int, float, None]] = {}

        for name, stat in stats_.items():
            if stat.type == stats.GAUGE:
                result[name] = None if stat.is_null else stat.value
            elif stat.type in (stats.COUNTER, stats.DERIVE):
                result[name] = self._rate(name, stat, now)
            else:
                log.warning(
                    "Metric %s cannot be classified as one of the supported "
                    "data types (gauge, derive or counter), skipping",
                    name,
                )

        return result

    def _rate(self, name: str, stat: stats.Stat, now: float) -> Optional[float]:
        if stat.is_null:
            # start over when the value comes back; the gap is of unknown
            # length
            self.counters.pop(name, None)
            return None

        old = self.counters.get(name)
        self.counters[name] = RateState(stat.value, now)

        if old is None:
            return None

        elapsed = now - old.timestamp
        if elapsed <= 0:
            log.debug(
                "Metric %s collected at %s, not after previous collection "
                "at %s; treating as first measurement",
                name,
                now,
                old.timestamp,
            )
            return None

        delta = stat.value - old.value

        if stat.type == stats.COUNTER and delta < 0:
            if old.value < WIDTH_32BIT:
                delta += WIDTH_32BIT
            else:
                delta += WIDTH_64BIT

        return delta / elapsed
