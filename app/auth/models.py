"""
Pydantic models for session state.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


# Bump when the payload layout changes; older tokens stop decoding.
SESSION_SCHEMA_VERSION = 1


class UserRef(BaseModel):
    """The user a session belongs to."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str


class SessionPayload(BaseModel):
    """Signed session record carried by the session cookie."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    v: int = SESSION_SCHEMA_VERSION
    user: Optional[UserRef] = None
    expires: int  # ms since epoch

    @field_validator("v")
    @classmethod
    def check_version(cls, v: int) -> int:
        if v != SESSION_SCHEMA_VERSION:
            raise ValueError(f"Unsupported session schema version: {v}")
        return v

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def remaining_ms(self, now_ms: int) -> int:
        """Milliseconds left before expiry (negative once expired)."""
        return self.expires - now_ms

    def is_expired(self, now_ms: int) -> bool:
        return self.expires <= now_ms


class Credentials(BaseModel):
    """Username and password as submitted by the login form."""
    username: str = ""
    password: str = ""
