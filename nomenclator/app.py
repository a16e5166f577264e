import logging

from .config import Config
from .key_generator import KeyGenerator
from .name_generator import UniqueNameAllocator, load_words
from .name_source import RemoteNameSource
from .orchestrator import Orchestrator
from .pair_store import PairStore
from .pairs import PairCollection

LOG_FORMAT = 'nomenclator: %(asctime)s %(levelname)s %(message)s'


def configure_logging(log_file: str, level: int = logging.INFO) -> logging.Handler:
    """Append the package's log records to `log_file`. Returns the attached handler."""
    handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y/%m/%d %H:%M:%S'))

    package_logger = logging.getLogger('nomenclator')
    package_logger.setLevel(level)
    package_logger.addHandler(handler)
    return handler


def create_orchestrator(cfg: Config, **kwargs) -> Orchestrator:
    """
    Build an Orchestrator and its collaborators from configuration.
    Extra keyword arguments are passed to the Orchestrator (progress, stop_event).

    Raises:
        OSError: a word list could not be read
        StoreIOError: the store file could not be opened
    """
    allocator = None
    name_source = None
    if cfg.use_name_source:
        name_source = RemoteNameSource(cfg.NAME_SOURCE_URL, timeout=cfg.NAME_SOURCE_TIMEOUT)
    else:
        allocator = UniqueNameAllocator(
            load_words(cfg.ADJECTIVES_FILE),
            load_words(cfg.NOUNS_FILE),
            max_retries=cfg.MAX_NAME_RETRIES
        )

    store = PairStore(cfg.DATABASE_FILE, timeout=cfg.STORE_TIMEOUT)
    try:
        store.ensure_bucket()
    except Exception:
        store.close()
        if name_source is not None:
            name_source.close()
        raise

    return Orchestrator(
        count=cfg.KEY_COUNT,
        store=store,
        key_generator=KeyGenerator(),
        allocator=allocator,
        name_source=name_source,
        pairs=PairCollection() if cfg.JSON_OUT else None,
        **kwargs
    )
