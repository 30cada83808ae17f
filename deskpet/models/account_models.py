from typing import List
from uuid import UUID

from pydantic import BaseModel


class AccountModel(BaseModel):
    """This class is used to read an account record with its credential and progress."""
    account_id: UUID
    username: str
    hash_password: str
    salt: str
    rewards: List[str]
    level: int
    revision: int

    class Config:
        from_attributes = True


class ProgressModel(BaseModel):
    """Level and unlocked rewards of one account."""
    level: int
    rewards: List[str]
