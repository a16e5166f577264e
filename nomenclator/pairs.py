import json
import logging
import threading
from contextlib import contextmanager
from typing import List

from .models import Pair

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Many concurrent readers or one writer."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read(self):
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class PairCollection:
    """In-memory record of the pairs produced by a run, kept for JSON export."""

    def __init__(self):
        self._pairs: List[Pair] = []
        self._lock = ReadWriteLock()

    def add(self, pair: Pair):
        with self._lock.write():
            self._pairs.append(pair)

    def snapshot(self) -> List[Pair]:
        with self._lock.read():
            return list(self._pairs)

    def __len__(self):
        with self._lock.read():
            return len(self._pairs)

    def save_json(self, path: str) -> int:
        """
        Overwrite `path` with the collected pairs as a pretty-printed array of
        {"name": str, "key": [int, ...]}.

        Returns:
            Number of pairs written
        """
        with self._lock.read():
            data = [pair.to_dict() for pair in self._pairs]
            print(f"Saving JSON ({len(data)} pairs) to {path}")
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
                f.write('\n')
        logger.info(f"Saved {len(data)} pairs to {path}")
        return len(data)


def load_pairs_json(path: str) -> List[Pair]:
    """Read back a file written by PairCollection.save_json."""
    with open(path, encoding='utf-8') as f:
        return [Pair.from_dict(item) for item in json.load(f)]
