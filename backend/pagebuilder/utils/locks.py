import threading
from contextlib import contextmanager
from typing import Dict


class PageLocks:
    """
    One re-entrant lock per page id.

    Writers for the same page queue up behind each other; different pages
    never share a lock. A registry belongs to one repository instance.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.RLock] = {}

    def get(self, page_id: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(page_id)
            if lock is None:
                lock = self._locks[page_id] = threading.RLock()
            return lock

    @contextmanager
    def hold(self, page_id: str):
        lock = self.get(page_id)
        with lock:
            yield

    def forget(self, page_id: str) -> None:
        with self._guard:
            self._locks.pop(page_id, None)
