"""User profile and administrative trust-state endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from forum_moderation.api.v1.dependencies import CurrentUserDep, SessionDep, TrustStoreDep
from forum_moderation.core.errors import NotFoundError, UnauthorizedError
from forum_moderation.models import User
from forum_moderation.schemas.common import Alert
from forum_moderation.schemas.user import TrustStateUpdate, UserResponse

router = APIRouter(prefix="/users", tags=["users"], responses={403: {"model": Alert}})


@router.get("/me", response_model=UserResponse)
async def read_current_user(current_user: CurrentUserDep) -> User:
    """Return the authenticated user, including their trust state."""
    return current_user


@router.put("/{user_id}/trust-state", response_model=UserResponse)
async def override_trust_state(
    user_id: int,
    payload: TrustStateUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
    trust_store: TrustStoreDep,
) -> User:
    """Administrative override of a user's trust state."""
    if not current_user.is_admin:
        raise UnauthorizedError("Only administrators can change trust states")
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("user", user_id)
    trust_store.override(current_user, user, payload.trust_state)
    return user
