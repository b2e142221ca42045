"""
In-process business search for Python callers (scripts, other services
embedding the desk). Over HTTP the same last-query-wins rule is left to the
client, which drops any ``GET /businesses/search`` response whose ``seq`` is
not the latest one it sent.
"""
import logging
import threading
from typing import Callable, List, Sequence

logger = logging.getLogger(__name__)


class BusinessSearch:
    """
    Last-query-wins business search.

    Every call to ``issue`` supersedes the previous query. In-flight lookups
    are not cancelled; their results are simply dropped by ``resolve`` if a
    newer query has been issued in the meantime.

    Usage:
        search = BusinessSearch(lambda q: find_businesses_by_name(db, q))
        search.search("acme")
        search.results
    """

    def __init__(self, lookup: Callable[[str], Sequence]):
        self._lookup = lookup
        self._lock = threading.Lock()
        self._latest = 0
        self.query = ""
        self.results: List = []

    def issue(self, query: str) -> int:
        with self._lock:
            self._latest += 1
            self.query = query
            return self._latest

    def resolve(self, token: int, results: Sequence) -> bool:
        """Apply results for ``token``; returns False when they are stale."""
        with self._lock:
            if token != self._latest:
                logger.debug("Dropping stale search results (token %s, latest %s)", token, self._latest)
                return False
            self.results = list(results)
            return True

    def search(self, query: str) -> bool:
        token = self.issue(query)
        return self.resolve(token, self._lookup(query))
