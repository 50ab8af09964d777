"""Shared API dependencies for authentication and the moderation services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from forum_moderation.core.security import decode_access_token
from forum_moderation.db.session import get_db
from forum_moderation.models import User
from forum_moderation.services import (
    ContentStateMachine,
    GroupMembershipAuthorizer,
    ModerationActionProcessor,
    ModerationQueue,
    TrustStateStore,
    VisibilityFilter,
)

# Anonymous viewers are allowed through; endpoints that need a user say so.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _decode_user_id(subject: object) -> int:
    """Decode the numeric user ID carried in a token subject.

    Raises:
        HTTPException: If the subject is not a user identifier.
    """
    try:
        return int(str(subject))
    except ValueError as err:
        raise _credentials_error() from err


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User | None:
    """Return the authenticated viewer, or ``None`` for anonymous requests.

    Raises:
        HTTPException: If a token is supplied but invalid or names no user.
    """
    if credentials is None:
        return None
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise _credentials_error() from err

    subject = payload.get("sub")
    if subject is None:
        raise _credentials_error()
    user = db.get(User, _decode_user_id(subject))
    if user is None:
        raise _credentials_error("User not found")
    return user


def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    """Require an authenticated user."""
    if user is None:
        raise _credentials_error("Not authenticated")
    return user


def get_authorizer(db: SessionDep) -> GroupMembershipAuthorizer:
    return GroupMembershipAuthorizer(db)


AuthorizerDep = Annotated[GroupMembershipAuthorizer, Depends(get_authorizer)]


def get_visibility_filter(db: SessionDep, authorizer: AuthorizerDep) -> VisibilityFilter:
    return VisibilityFilter(db, authorizer)


def get_content_machine(db: SessionDep) -> ContentStateMachine:
    return ContentStateMachine(db)


def get_trust_store(db: SessionDep) -> TrustStateStore:
    return TrustStateStore(db)


def get_moderation_queue(db: SessionDep) -> ModerationQueue:
    return ModerationQueue(db)


def get_moderation_processor(
    db: SessionDep,
    authorizer: AuthorizerDep,
) -> ModerationActionProcessor:
    return ModerationActionProcessor(db, authorizer=authorizer)


# Type aliases for dependency injection
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
VisibilityDep = Annotated[VisibilityFilter, Depends(get_visibility_filter)]
ContentDep = Annotated[ContentStateMachine, Depends(get_content_machine)]
TrustStoreDep = Annotated[TrustStateStore, Depends(get_trust_store)]
QueueDep = Annotated[ModerationQueue, Depends(get_moderation_queue)]
ProcessorDep = Annotated[ModerationActionProcessor, Depends(get_moderation_processor)]
