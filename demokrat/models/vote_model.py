from datetime import datetime

from pydantic import BaseModel


class Ballot(BaseModel):
    voter_identity: str
    post: str
    candidate: str
    cast_at: datetime
