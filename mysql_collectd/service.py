from __future__ import annotations

import logging
import threading
from typing import Any
from typing import Callable
from typing import Dict
from typing import Iterable
from typing import List
from typing import Optional
from typing import Union

from . import collector
from . import source


log = logging.getLogger(__name__)


class StatsService:
    """The surface a host (collectd, the mysqlstat command) talks to.

    The source is connected and metrics are discovered once, on first
    use; after that, requests for metric names are turned into the
    smallest set of calls needed to collect them.

    """

    catalog: Optional[collector.Catalog]
    collector: Optional[collector.MetricCollector]

    def __init__(
        self,
        url: Any,
        use_innodb: bool = False,
        make_source: Callable[[Any], collector.StatsSource] = (
            source.MySQLStats
        ),
    ):
        self.url = url
        self.use_innodb = use_innodb
        self.make_source = make_source
        self.initialized = False
        self.init_mutex = threading.Lock()
        self.catalog = None
        self.collector = None
        self._source: Optional[collector.StatsSource] = None

    def init(self) -> None:
        """Connect and discover metrics, if not done already.

        If discovery fails the source is closed and the error raised;
        the next call tries again.

        """
        self.init_mutex.acquire()
        try:
            if self.initialized:
                return

            source_ = self.make_source(self.url)
            collector_ = collector.MetricCollector(source_, self.use_innodb)

            try:
                metrics = collector_.discover()
            except Exception:
                source_.close()
                raise

            self._source = source_
            self.collector = collector_
            self.catalog = collector.Catalog.from_metrics(metrics)
            self.initialized = True
        finally:
            self.init_mutex.release()

    def discover(self) -> List[collector.Metric]:
        self.init()
        assert self.catalog is not None
        return self.catalog.metrics()

    def metric_names(self) -> List[str]:
        self.init()
        return sorted(self.catalog)

    def collect_calls(
        self, calls: Iterable[int]
    ) -> Dict[str, Union[int, float, None]]:
        self.init()
        assert self.collector is not None
        return self.collector.collect(calls)

    def collect_metrics(
        self, names: Iterable[str]
    ) -> Dict[str, Union[int, float, None]]:
        """Collect the given metrics.

        Returns a value for each name asked for; ``None`` where there's
        no value, including for names that weren't discovered.

        """
        names = list(names)
        if not names:
            return {}

        self.init()
        assert self.catalog is not None

        values = self.collect_calls(self.catalog.calls_for(names))
        return {name: values.get(name) for name in names}

    def close(self) -> None:
        self.init_mutex.acquire()
        try:
            if self._source is not None:
                self._source.close()
            self._source = self.collector = self.catalog = None
            self.initialized = False
        finally:
            self.init_mutex.release()
