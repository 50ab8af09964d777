"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict

from forum_moderation.models import TrustState


class UserResponse(BaseModel):
    """Schema for user information returned by the API."""

    id: int
    login: str
    display_name: str | None
    trust_state: TrustState

    model_config = ConfigDict(from_attributes=True)


class TrustStateUpdate(BaseModel):
    """Administrative override of a user's trust state."""

    trust_state: TrustState
