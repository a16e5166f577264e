"""
Pytest configuration and fixtures for nomenclator tests.
"""
import os
import sys
import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from nomenclator.key_generator import KeyGenerator
from nomenclator.name_generator import UniqueNameAllocator
from nomenclator.orchestrator import Orchestrator
from nomenclator.pair_store import PairStore
from nomenclator.pairs import PairCollection


SMALL_ADJECTIVES = ["red", "blue"]
SMALL_NOUNS = ["fox", "owl"]


@pytest.fixture
def db_path(tmp_path):
    """Path to a store file that does not exist yet."""
    return str(tmp_path / "keys.db")


@pytest.fixture
def store(db_path):
    """PairStore over a fresh file."""
    store = PairStore(db_path, timeout=1.0)
    yield store
    store.close()


@pytest.fixture
def key_generator():
    return KeyGenerator()


@pytest.fixture
def small_allocator():
    """Allocator over the 2 x 2 name space."""
    return UniqueNameAllocator(SMALL_ADJECTIVES, SMALL_NOUNS)


@pytest.fixture
def make_orchestrator(store, key_generator):
    """Factory for orchestrators sharing the test store, with progress output silenced."""
    def factory(count, **kwargs):
        kwargs.setdefault('key_generator', key_generator)
        kwargs.setdefault('progress', None)
        if 'name_source' not in kwargs:
            kwargs.setdefault('allocator', UniqueNameAllocator(SMALL_ADJECTIVES, SMALL_NOUNS))
        return Orchestrator(count=count, store=store, **kwargs)
    return factory


@pytest.fixture
def pair_collection():
    return PairCollection()


@pytest.fixture
def word_files(tmp_path):
    """Write the small word lists to disk, with an annotation line in each."""
    adjectives = tmp_path / "adjectives.txt"
    nouns = tmp_path / "nouns.txt"
    adjectives.write_text("[colours]\n" + "\n".join(SMALL_ADJECTIVES) + "\n")
    nouns.write_text("[animals]\n" + "\n".join(SMALL_NOUNS) + "\n")
    return str(adjectives), str(nouns)
