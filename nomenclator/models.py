from dataclasses import dataclass

from sqlalchemy import Column, LargeBinary
from sqlalchemy.orm import declarative_base

from .key_generator import KEY_SIZE

Base = declarative_base()

BUCKET = 'keys'


class KeyEntry(Base):
    __tablename__ = BUCKET

    name = Column(LargeBinary, primary_key=True)
    key = Column(LargeBinary(KEY_SIZE), nullable=False)

    def __repr__(self):
        return f"<KeyEntry {self.name!r}>"


@dataclass(frozen=True)
class Pair:
    name: str
    key: bytes

    def __post_init__(self):
        if len(self.key) != KEY_SIZE:
            raise ValueError(f"key must be {KEY_SIZE} bytes, got {len(self.key)}")

    def to_dict(self) -> dict:
        return {'name': self.name, 'key': list(self.key)}

    @classmethod
    def from_dict(cls, data: dict) -> "Pair":
        return cls(name=data['name'], key=bytes(data['key']))
