from typing import List

from pydantic import BaseModel


class CredentialsModel(BaseModel):
    """Body of /register and /login. Lengths are checked by the auth service."""
    username: str = ""
    password: str = ""


class ClaimRewardModel(BaseModel):
    level: int


class MessageModel(BaseModel):
    message: str


class TokenModel(BaseModel):
    token: str


class ProgressResponseModel(BaseModel):
    level: int
    rewards: List[str]


class RewardResponseModel(BaseModel):
    message: str
    level: int
    rewards: List[str]
