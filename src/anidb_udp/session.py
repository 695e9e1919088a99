# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Session snapshot model for the AniDB UDP client.

AUTH is expensive for the API and rate limited on its own, so callers
commonly keep a session key across process restarts. The library never
writes anything itself; it only offers a validated, JSON-friendly snapshot
that the caller can store wherever it likes and hand back later.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator


class SessionSnapshot(BaseModel):
    """
    Everything needed to resume an authenticated client.

    The client identity is kept alongside the key because the server binds
    sessions to the client name and version that authenticated.
    """

    client: str
    client_version: int
    session_key: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("client", "session_key")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @property
    def age_seconds(self) -> float:
        """Seconds since the snapshot was taken."""
        return (datetime.now(timezone.utc) - self.created_at).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "client": self.client,
            "client_version": self.client_version,
            "session_key": self.session_key,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionSnapshot":
        """Create a SessionSnapshot from a dict produced by :meth:`to_dict`."""
        return cls(
            client=data["client"],
            client_version=data["client_version"],
            session_key=data["session_key"],
            created_at=(
                datetime.fromisoformat(data["created_at"])
                if data.get("created_at")
                else datetime.now(timezone.utc)
            ),
        )


__all__ = ["SessionSnapshot"]
