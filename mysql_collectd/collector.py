from __future__ import annotations

import logging
import threading
from typing import Dict
from typing import Iterable
from typing import Iterator
from typing import List
from typing import NamedTuple
from typing import Optional
from typing import Protocol
from typing import Set
from typing import Union

from . import exc
from . import rates
from . import stats


log = logging.getLogger(__name__)

# the calls made against the server; each one returns a batch of stats
CALL_GLOBAL = 0
CALL_INNODB = 1
CALL_MASTER = 2
CALL_SLAVE = 3

CALL_NAMES = {
    CALL_GLOBAL: "global status",
    CALL_INNODB: "innodb metrics",
    CALL_MASTER: "master status",
    CALL_SLAVE: "slave status",
}


class StatsSource(Protocol):
    def get_status(self, parse_innodb: bool) -> stats.Stats:
        ...

    def get_innodb(self) -> stats.Stats:
        ...

    def get_master_status(self) -> stats.Stats:
        ...

    def get_slave_status(self) -> stats.Stats:
        ...

    def close(self) -> None:
        ...


class Metric(NamedTuple):
    """A metric name along with the call that collects it."""

    name: str
    call: int


class Catalog:
    """Maps metric names to the call that has to be made to collect them.

    Built once from the result of discovery and not changed afterwards.

    """

    def __init__(self, calls_by_name: Dict[str, int]):
        self._calls_by_name = calls_by_name

    @classmethod
    def from_metrics(cls, metrics: Iterable[Metric]) -> Catalog:
        calls_by_name: Dict[str, int] = {}
        for metric in metrics:
            existing = calls_by_name.get(metric.name)
            if existing is not None and existing != metric.call:
                # not expected; the later call wins
                log.warning(
                    "Metric %s is reported by both %s and %s; "
                    "using %s",
                    metric.name,
                    CALL_NAMES.get(existing, existing),
                    CALL_NAMES.get(metric.call, metric.call),
                    CALL_NAMES.get(metric.call, metric.call),
                )
            calls_by_name[metric.name] = metric.call
        return cls(calls_by_name)

    def calls_for(self, names: Iterable[str]) -> Set[int]:
        """Return the calls needed to collect the given metrics.

        Names that aren't in the catalog don't contribute any call.

        """
        calls_by_name = self._calls_by_name
        return {
            calls_by_name[name] for name in names if name in calls_by_name
        }

    def metrics(self) -> List[Metric]:
        return [
            Metric(name, call) for name, call in self._calls_by_name.items()
        ]

    def __contains__(self, name: object) -> bool:
        return name in self._calls_by_name

    def __iter__(self) -> Iterator[str]:
        return iter(self._calls_by_name)

    def __len__(self) -> int:
        return len(self._calls_by_name)


class MetricCollector:
    """Discovers available metrics and performs collection calls against
    a stats source, running the results through a :class:`.RateEngine`.

    """

    def __init__(
        self,
        source: StatsSource,
        use_innodb: bool,
        rate_engine: Optional[rates.RateEngine] = None,
    ):
        self.source = source
        self.use_innodb = use_innodb
        self.rate_engine = (
            rate_engine if rate_engine is not None else rates.RateEngine()
        )
        self._mutex = threading.Lock()

    def _fetch(self, call: int) -> stats.Stats:
        source = self.source
        if call == CALL_GLOBAL:
            return source.get_status(self.use_innodb)
        elif call == CALL_INNODB:
            return source.get_innodb()
        elif call == CALL_MASTER:
            return source.get_master_status()
        elif call == CALL_SLAVE:
            return source.get_slave_status()
        else:
            raise ValueError("unknown call: %r" % (call,))

    def discover(self) -> List[Metric]:
        """Return the metrics this server can report.

        Raises :class:`.SourceError` when global status, or InnoDB metrics
        if those were asked for, can't be read.  Master and slave status
        are skipped if they fail, as the server may not be set up for
        replication.

        """
        result: List[Metric] = []

        calls = [CALL_GLOBAL]
        if self.use_innodb:
            calls.append(CALL_INNODB)

        for call in calls:
            result.extend(_metrics(self._fetch(call), call))

        for call in (CALL_MASTER, CALL_SLAVE):
            try:
                batch = self._fetch(call)
            except exc.BatchUnavailable as err:
                log.debug("No %s on this server: %s", CALL_NAMES[call], err)
            except exc.SourceError as err:
                log.warning(
                    "Skipping %s, request failed: %s", CALL_NAMES[call], err
                )
            else:
                result.extend(_metrics(batch, call))

        log.info("Discovered %d metrics", len(result))
        return result

    def collect(
        self, calls: Iterable[int]
    ) -> Dict[str, Union[int, float, None]]:
        """Perform the given calls, returning values for every metric they
        report.

        Counters and derives come back as rates per second.  If any call
        fails, the error is raised and nothing is returned.

        """
        result: Dict[str, Union[int, float, None]] = {}

        self._mutex.acquire()
        try:
            for call in sorted(set(calls)):
                batch = self._fetch(call)
                result.update(self.rate_engine.update(batch))
        finally:
            self._mutex.release()

        return result


def _metrics(batch: stats.Stats, call: int) -> Iterator[Metric]:
    for name in batch:
        yield Metric(name, call)
