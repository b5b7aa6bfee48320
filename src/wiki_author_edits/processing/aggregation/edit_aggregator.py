"""Grouped sum of (username, increment) pairs."""
import threading
from collections import Counter
from typing import Dict, Iterable, Mapping

from wiki_author_edits.processing.parser.username_extractor import UsernamePair


def count_pairs(pairs: Iterable[UsernamePair]) -> Counter:
    """Partial sums for one worker."""
    partial: Counter = Counter()
    for username, increment in pairs:
        partial[username] += increment
    return partial


class EditCountAggregator:
    """
    Lock-protected running totals keyed by exact username.

    Partials may be merged in any order and grouping; the totals are the
    same. Safe to feed from several threads; each ``merge`` or
    ``add_pairs`` call is applied atomically.
    """

    def __init__(self):
        self._totals: Counter = Counter()
        self._lock = threading.Lock()

    def add_pairs(self, pairs: Iterable[UsernamePair]) -> None:
        self.merge(count_pairs(pairs))

    def merge(self, partial: Mapping[str, int]) -> None:
        with self._lock:
            for username, total in partial.items():
                self._totals[username] += total

    def totals(self) -> Dict[str, int]:
        """Snapshot of the current totals without zero entries."""
        with self._lock:
            return {username: total for username, total in self._totals.items() if total > 0}

    def __len__(self) -> int:
        return len(self.totals())
