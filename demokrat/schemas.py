from typing import Dict, List

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    identity: str = Field(..., min_length=1)
    secret: str = Field(..., min_length=1)


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AdminTokenOut(TokenOut):
    privilege_level: str
    issued_version: int


class AdminSessionOut(BaseModel):
    identity: str
    privilege_level: str
    issued_version: int
    allowed_actions: List[str]


class PostUpdate(BaseModel):
    post: str = Field(..., examples=["President"])


class CandidateIn(BaseModel):
    name: str = Field(..., min_length=1)


class BallotIn(BaseModel):
    candidate: str = Field(..., min_length=1)


class BallotOut(BaseModel):
    message: str
    post: str
    candidate: str


class VoteStatusOut(BaseModel):
    post: str
    has_voted: bool


class TallyOut(BaseModel):
    post: str
    results: Dict[str, int]
    total: int
