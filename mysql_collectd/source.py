"""Reads status counters from a MySQL server using SQLAlchemy."""
from __future__ import annotations

import logging
import re
from typing import Any
from typing import Iterable
from typing import Tuple
from typing import TYPE_CHECKING
from typing import Union

from sqlalchemy import create_engine
from sqlalchemy import exc as sa_exc
from sqlalchemy import text

from . import exc
from . import mysql_types
from . import stats

if TYPE_CHECKING:
    from sqlalchemy import Engine
    from sqlalchemy import URL


log = logging.getLogger(__name__)

# first version with information_schema.innodb_metrics
INNODB_METRICS_VERSION = 50600

_version = text("SELECT VERSION()")
_global_status = text("SHOW GLOBAL STATUS")
_innodb_metrics = text(
    "SELECT name, count, type FROM information_schema.innodb_metrics "
    "WHERE status = 'enabled'"
)
_master_status = text("SHOW MASTER STATUS")
_slave_status = text("SHOW SLAVE STATUS")


def parse_version(version_string: str) -> int:
    """Parse a MySQL version string to a number.

    E.g. "5.6.21-log" becomes 50621.

    """
    numbers = version_string.strip().split("-")[0]
    parts = [int(m) for m in re.findall(r"\d+", numbers)[:3]]
    parts += [0] * (3 - len(parts))
    major, minor, patch = parts
    return major * 10000 + minor * 100 + patch


class MySQLStats:
    """Stats source for a MySQL server.

    Each ``get_*()`` method makes one request and returns a batch of
    :class:`.Stat` objects keyed on metric name, raising
    :class:`.SourceError` if the request fails.

    """

    engine: Engine
    version: int

    def __init__(self, url_or_engine: Union[str, URL, Engine]):
        owns_engine = not hasattr(url_or_engine, "connect")
        if owns_engine:
            self.engine = create_engine(url_or_engine)
        else:
            self.engine = url_or_engine

        try:
            version_string = self._scalar(_version, "version request failed")
        except exc.SourceError:
            if owns_engine:
                self.engine.dispose()
            raise

        self.version = parse_version(version_string)
        log.info(
            "Connected to MySQL %s on %s",
            version_string,
            self.engine.url.render_as_string(hide_password=True),
        )

    @property
    def supports_innodb(self) -> bool:
        return self.version >= INNODB_METRICS_VERSION

    def _scalar(self, statement, message):
        try:
            with self.engine.connect() as conn:
                return conn.execute(statement).scalar()
        except sa_exc.SQLAlchemyError as err:
            raise exc.SourceError("%s: %s" % (message, err)) from err

    def _rows(self, statement, message) -> Tuple[list, list]:
        try:
            with self.engine.connect() as conn:
                result = conn.execute(statement)
                return list(result.keys()), result.fetchall()
        except sa_exc.SQLAlchemyError as err:
            raise exc.SourceError("%s: %s" % (message, err)) from err

    def get_status(self, parse_innodb: bool) -> stats.Stats:
        keys, rows = self._rows(_global_status, "status request failed")
        return status_stats(
            ((row[0], row[1]) for row in rows), parse_innodb
        )

    def get_innodb(self) -> stats.Stats:
        if not self.supports_innodb:
            raise exc.BatchUnavailable(
                "innodb stats not supported on current version "
                "of mysql server"
            )
        keys, rows = self._rows(_innodb_metrics, "innodb request failed")
        return innodb_stats((row[0], row[1]) for row in rows)

    def get_master_status(self) -> stats.Stats:
        keys, rows = self._rows(_master_status, "master request failed")
        if not rows:
            raise exc.BatchUnavailable("master request returned 0 rows")
        return column_stats(
            dict(zip(keys, rows[0])), mysql_types.master_columns
        )

    def get_slave_status(self) -> stats.Stats:
        keys, rows = self._rows(_slave_status, "slave request failed")
        if len(keys) < mysql_types.SLAVE_STATUS_MIN_COLUMNS:
            raise exc.SourceError(
                "slave request failed: number of columns < %d: %d"
                % (mysql_types.SLAVE_STATUS_MIN_COLUMNS, len(keys))
            )
        if not rows:
            raise exc.BatchUnavailable("slave request returned 0 rows")
        return column_stats(
            dict(zip(keys, rows[0])), mysql_types.slave_columns
        )

    def close(self) -> None:
        self.engine.dispose()


def status_stats(
    rows: Iterable[Tuple[str, Any]], parse_innodb: bool
) -> stats.Stats:
    """Map (variable name, value) rows of SHOW GLOBAL STATUS to stats."""

    result: stats.Stats = {}

    for name, value in rows:
        if name.startswith(mysql_types.status_excluded_prefixes):
            continue

        for prefix, metric_prefix, type_ in mysql_types.status_prefixes:
            if name.startswith(prefix):
                result[metric_prefix + name[len(prefix) :]] = stats.classify(
                    type_, value
                )
                break
        else:
            if name in mysql_types.status_variables:
                metric_name, type_ = mysql_types.status_variables[name]
                result[metric_name] = stats.classify(type_, value)
            elif parse_innodb and name in mysql_types.innodb_status_variables:
                metric_name, type_ = mysql_types.innodb_status_variables[name]
                result[metric_name] = stats.classify(type_, value)

    return result


def innodb_stats(rows: Iterable[Tuple[str, Any]]) -> stats.Stats:
    """Map (name, count) rows of information_schema.innodb_metrics
    to stats."""

    result: stats.Stats = {}
    for name, value in rows:
        if name in mysql_types.innodb_metrics:
            metric_name, type_ = mysql_types.innodb_metrics[name]
            result[metric_name] = stats.classify(type_, value)
    return result


def column_stats(row: dict, columns: dict) -> stats.Stats:
    result: stats.Stats = {}
    for column, (metric_name, type_) in columns.items():
        try:
            value = row[column]
        except KeyError as ke:
            raise exc.SourceError(
                "column %s not present in result" % column
            ) from ke
        result[metric_name] = stats.classify(type_, value)
    return result
