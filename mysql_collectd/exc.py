"""Exceptions raised by sample sources."""


class SourceError(Exception):
    """A batch of stats could not be retrieved from the server."""


class BatchUnavailable(SourceError):
    """The server has nothing to report for this batch.

    E.g. ``SHOW MASTER STATUS`` on a server with binary logging off, or
    InnoDB metrics on a server too old to have them.  Discovery skips
    optional batches raising this; for mandatory batches it is as fatal as
    any other :class:`.SourceError`.

    """
