import logging
from typing import Iterator, List, Optional, Tuple

from sqlalchemy import create_engine, inspect, select, func
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .errors import StoreIOError, StoreTimeout
from .models import Base, BUCKET, KeyEntry

logger = logging.getLogger(__name__)


class PairStore:
    """
    Durable name -> key store backed by a single SQLite file.

    Each pairing is written in its own transaction: begin, make sure the
    `keys` bucket exists, upsert the entry, commit. A run cut short leaves
    no half-written pairs behind. Writing a name that already exists
    replaces its key.
    """

    def __init__(self, path: str, timeout: float = 5.0):
        self.path = path
        self.timeout = timeout
        self.engine = create_engine(
            f"sqlite:///{path}",
            connect_args={'timeout': timeout}
        )
        self._session_factory = sessionmaker(bind=self.engine)

    def ensure_bucket(self):
        """Create the store file and the `keys` bucket if they are missing."""
        try:
            with self.engine.begin() as conn:
                Base.metadata.create_all(conn, checkfirst=True)
        except SQLAlchemyError as e:
            raise self._translate(e) from e
        logger.info(f"Store ready at {self.path}")

    def persist(self, name: str, key: bytes) -> bool:
        """Write one pairing atomically. Raises StoreIOError on failure."""
        try:
            raw_name = name.encode('utf-8')
        except UnicodeEncodeError as e:
            logger.error(f"Store {self.path} rejected name {name!r}: {e}")
            raise StoreIOError(self.path, f"name is not valid UTF-8: {e}") from e

        try:
            with self._session_factory.begin() as session:
                Base.metadata.create_all(session.connection(), checkfirst=True)
                session.merge(KeyEntry(name=raw_name, key=key))
        except SQLAlchemyError as e:
            raise self._translate(e) from e
        return True

    def get(self, name: str) -> Optional[bytes]:
        """Return the stored key for `name`, or None."""
        if not self._has_bucket():
            return None
        try:
            with self._session_factory() as session:
                entry = session.get(KeyEntry, name.encode('utf-8'))
                return entry.key if entry else None
        except SQLAlchemyError as e:
            raise self._translate(e) from e

    def items(self) -> Iterator[Tuple[str, bytes]]:
        if not self._has_bucket():
            return iter(())
        try:
            with self._session_factory() as session:
                rows = session.execute(select(KeyEntry.name, KeyEntry.key)).all()
        except SQLAlchemyError as e:
            raise self._translate(e) from e
        return iter([(name.decode('utf-8'), key) for name, key in rows])

    def names(self) -> List[str]:
        return [name for name, _ in self.items()]

    def count(self) -> int:
        if not self._has_bucket():
            return 0
        try:
            with self._session_factory() as session:
                return session.scalar(select(func.count()).select_from(KeyEntry))
        except SQLAlchemyError as e:
            raise self._translate(e) from e

    def close(self):
        self.engine.dispose()

    def _has_bucket(self) -> bool:
        try:
            return inspect(self.engine).has_table(BUCKET)
        except SQLAlchemyError as e:
            raise self._translate(e) from e

    def _translate(self, error: SQLAlchemyError) -> StoreIOError:
        if isinstance(error, OperationalError) and 'locked' in str(error.orig).lower():
            logger.error(f"Store {self.path} locked for more than {self.timeout}s")
            return StoreTimeout(self.path, self.timeout)
        logger.error(f"Store {self.path} error: {error}")
        return StoreIOError(self.path, str(error.orig) if getattr(error, 'orig', None) else str(error))
