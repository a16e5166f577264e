import logging
import secrets
from typing import Callable

from .errors import EntropyUnavailable

logger = logging.getLogger(__name__)

KEY_SIZE = 32


class KeyGenerator:
    """
    Produces fixed-length secret keys from the operating system's CSPRNG.
    The keys are persisted as credentials, so `random` is never used here.
    """

    def __init__(self, key_size: int = KEY_SIZE, source: Callable[[int], bytes] = secrets.token_bytes):
        if key_size <= 0:
            raise ValueError("key_size must be positive")
        self.key_size = key_size
        self._source = source

    def generate(self) -> bytes:
        """Return `key_size` fresh random bytes or raise EntropyUnavailable."""
        try:
            key = self._source(self.key_size)
        except (OSError, NotImplementedError) as e:
            logger.error(f"Entropy source failed: {e}")
            raise EntropyUnavailable(self.key_size, str(e)) from e

        if not isinstance(key, bytes) or len(key) != self.key_size:
            got = len(key) if isinstance(key, (bytes, bytearray)) else type(key).__name__
            raise EntropyUnavailable(
                self.key_size,
                f"short read from entropy source (got {got}, wanted {self.key_size})"
            )
        return key
