from __future__ import annotations

import logging
import sys

from .. import __version__


if True:
    import collectd  # type: ignore[import]

_the_handler: CollectdHandler | None = None


class CollectdHandler(logging.Handler):
    levels = {
        logging.INFO: collectd.info,
        logging.WARN: collectd.warning,
        logging.ERROR: collectd.error,
        logging.DEBUG: collectd.info,
        logging.CRITICAL: collectd.error,
    }

    def emit(self, record):
        fn = self.levels.get(record.levelno, collectd.info)
        fn("[%s] %s" % (record.name, self.format(record)))

    @classmethod
    def setup(cls, name, config_loglevel):
        global _the_handler
        if _the_handler is None:
            _the_handler = CollectdHandler()
            collectd.info(
                "[mysql-collectd] mysql_collectd version: %s" % __version__
            )
            collectd.info("[mysql-collectd] Python version: %s" % sys.version)

        log = logging.getLogger(name)
        if _the_handler not in log.handlers:
            log.addHandler(_the_handler)

        loglevel = {
            "warn": logging.WARN,
            "error": logging.ERROR,
            "debug": logging.DEBUG,
            "info": logging.INFO,
        }[config_loglevel.lower()]

        log.setLevel(loglevel)
