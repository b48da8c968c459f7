from pydantic import BaseModel


class VoterPrincipal(BaseModel):
    identity: str
    secret: str  # pincode


class VoterSession(BaseModel):
    identity: str
