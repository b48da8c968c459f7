# demokrat/errors.py
"""
Error taxonomy shared by the services and the HTTP layer.

Every error carries the HTTP status it maps to and a fixed public message.
Messages never say which half of a credential was wrong, and authorization
failures never mention the resource that was asked for.
"""


class DemokratError(Exception):
    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        self.message = message or self.message

    @property
    def code(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code}


# --- Authentication / authorization ---

class AuthError(DemokratError):
    status_code = 401
    message = "Not authenticated"


class InvalidCredentials(AuthError):
    message = "Invalid credentials"


class SessionRevoked(AuthError):
    message = "Session has been revoked, please log in again"


class Forbidden(AuthError):
    status_code = 403
    message = "Insufficient privileges"


# --- Voting ---

class VoteError(DemokratError):
    status_code = 409
    message = "Vote rejected"


class NoActiveElection(VoteError):
    message = "No election is currently open"


class AlreadyVoted(VoteError):
    message = "Voter has already voted for this post"


class UnknownCandidate(VoteError):
    status_code = 404
    message = "Candidate not found in election"


class InvalidRequest(DemokratError):
    status_code = 422
    message = "Invalid request"


# --- Storage ---

class StoreUnavailable(DemokratError):
    status_code = 503
    message = "Storage backend unavailable"

    def __init__(self, message: str = None, outcome_unknown: bool = False):
        super().__init__(message)
        # True when a write may or may not have been applied
        self.outcome_unknown = outcome_unknown

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["outcome_unknown"] = self.outcome_unknown
        return data
