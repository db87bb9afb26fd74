import threading
from contextlib import contextmanager
from typing import Dict, Hashable


class KeyedLock:
    """
    Un lock por clave (user id, email, module id).
    El lock interno solo protege el diccionario de locks, nunca la operación.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, threading.Lock] = {}

    def _get(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, key: Hashable):
        lock = self._get(key)
        with lock:
            yield
