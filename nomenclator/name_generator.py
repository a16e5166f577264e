import logging
import random
from typing import List, Sequence, Set

from .errors import NameSpaceExhausted

logger = logging.getLogger(__name__)

MAX_RETRIES = 1000


def parse_words(text: str) -> List[str]:
    """
    Split a word list into words.
    Lines containing '[' or ']' are annotations in the source lists and are dropped.
    """
    words = []
    for line in text.splitlines():
        if '[' in line or ']' in line:
            continue
        words.extend(line.split())
    return words


def load_words(path: str) -> List[str]:
    """Read a whitespace-separated word list from disk."""
    with open(path, encoding='utf-8') as f:
        return parse_words(f.read())


class UniqueNameAllocator:
    """
    Hands out "<adjective>-<noun>" names that are unique for the lifetime of
    the allocator.

    Names are drawn by sampling with rejection rather than enumerating the
    adjective x noun product, so retries climb sharply as the used set nears
    the name-space size. Running out near full occupancy is expected.
    """

    def __init__(
        self,
        adjectives: Sequence[str],
        nouns: Sequence[str],
        max_retries: int = MAX_RETRIES,
        rng: random.Random = None
    ):
        if not adjectives or not nouns:
            raise ValueError("adjective and noun lists must both be non-empty")
        self.adjectives = list(adjectives)
        self.nouns = list(nouns)
        self.max_retries = max_retries
        self._rng = rng or random.Random()
        self._used: Set[str] = set()

    @property
    def namespace_size(self) -> int:
        return len(self.adjectives) * len(self.nouns)

    @property
    def used_count(self) -> int:
        return len(self._used)

    def allocate_unique(self) -> str:
        """Return a name never handed out before, or raise NameSpaceExhausted."""
        for _ in range(self.max_retries):
            adj = self._rng.choice(self.adjectives)
            noun = self._rng.choice(self.nouns)
            name = f"{adj}-{noun}"

            if name not in self._used:
                self._used.add(name)
                return name

        logger.warning(f"No unused name after {self.max_retries} attempts ({self.used_count}/{self.namespace_size} used)")
        raise NameSpaceExhausted(self.max_retries, self.used_count, self.namespace_size)
