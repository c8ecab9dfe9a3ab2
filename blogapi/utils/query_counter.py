"""
Query Counter

Counts physical SQL statements issued through an engine. Used by the test
suite to prove that eager-loaded reads run a constant number of queries
no matter how many rows they return.

The listener is only attached when a counter is handed to the database
(``settings.count_queries`` in the application), so production engines
never pay for the event hook.
"""

import logging
import threading

from sqlalchemy import event

logger = logging.getLogger(__name__)


class QueryCounter:
    """Thread-safe counter of executed statements."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.enabled = False
        self._count = 0

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    def start(self) -> None:
        """Enable counting and reset the count to zero."""
        with self._lock:
            self.enabled = True
            self._count = 0

    def stop(self) -> None:
        """Disable counting; the current count is kept."""
        with self._lock:
            self.enabled = False

    def reset(self) -> None:
        """Zero the count without touching ``enabled``."""
        with self._lock:
            self._count = 0

    def increment(self) -> None:
        with self._lock:
            if self.enabled:
                self._count += 1


def install_query_counter(engine, counter: QueryCounter) -> None:
    """Attach ``counter`` to every cursor execution on the async engine."""
    sync_engine = engine.sync_engine

    @event.listens_for(sync_engine, "after_cursor_execute")
    def _count_query(conn, cursor, statement, parameters, context, executemany):
        counter.increment()

    logger.info("Query counter installed on engine %s", sync_engine.url.render_as_string(hide_password=True))
