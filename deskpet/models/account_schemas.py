from datetime import datetime

from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.schema import Column
from sqlalchemy.types import JSON, DateTime, Integer, String, Uuid
from uuid6 import uuid7


class Base(DeclarativeBase):
    pass


class AccountTable(Base):
    __tablename__ = "accounts"
    account_id = Column(Uuid, primary_key=True, default=uuid7)
    username = Column(String, unique=True, index=True, nullable=False)
    hash_password = Column(String, nullable=False)
    salt = Column(String, nullable=False)
    rewards = Column(JSON, nullable=False, default=list)
    level = Column(Integer, nullable=False, default=1)
    # bumped on every progress write, compared on update
    revision = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.now)
