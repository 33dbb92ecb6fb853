"""UserSession data model."""

from typing import Optional

from pydantic import BaseModel, Field


class UserSession(BaseModel):
    """Represents an authenticated Discord user."""

    id: str = Field(..., min_length=1, description="Session user ID")
    discord_id: str = Field(..., min_length=1, description="Discord snowflake ID")
    username: str = Field(..., description="Discord username")
    avatar: Optional[str] = Field(default=None, description="Discord avatar hash")

    model_config = {"frozen": True}

    @property
    def user_id(self) -> int:
        """Numeric user ID used to key trades."""
        return int(self.discord_id)
