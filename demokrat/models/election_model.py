from pydantic import BaseModel, Field
from typing import List


class Election(BaseModel):
    post: str = Field(default="", examples=["President"])

    @property
    def is_open(self) -> bool:
        return bool(self.post)


class ElectionOut(BaseModel):
    post: str
    candidates: List[str]
