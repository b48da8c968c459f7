from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PrivilegeLevel(str, Enum):
    NONE = "none"
    RESULTS_ONLY = "results_only"
    MODIFY = "modify"
    SUPERADMIN = "superadmin"

    @classmethod
    def parse(cls, value: Optional[str]) -> "PrivilegeLevel":
        """
        Normalise a stored privilege string.

        Accepts the current names as well as the ones written by the first
        deployment ("all", "valberedning", "results", ""). Anything unknown
        maps to NONE.
        """
        if isinstance(value, cls):
            return value
        key = (value or "").strip().lower()
        try:
            return cls(key)
        except ValueError:
            return LEGACY_PRIVILEGES.get(key, cls.NONE)


LEGACY_PRIVILEGES = {
    "": PrivilegeLevel.NONE,
    "all": PrivilegeLevel.SUPERADMIN,
    "valberedning": PrivilegeLevel.MODIFY,
    "results": PrivilegeLevel.RESULTS_ONLY,
}


class AdminPrincipal(BaseModel):
    identity: str
    secret: str
    privilege_level: PrivilegeLevel = PrivilegeLevel.NONE

    @field_validator("privilege_level", mode="before")
    @classmethod
    def _normalise_privilege(cls, value):
        return PrivilegeLevel.parse(value)


class AdminSession(BaseModel):
    identity: str
    privilege_level: PrivilegeLevel
    issued_version: int = Field(..., ge=1)
