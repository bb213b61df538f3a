"""FastAPI dependencies for College Events API."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from college_events.config import Settings, get_settings
from college_events.database import get_db
from college_events.exceptions import AuthError
from college_events.repository import EventRepository
from college_events.security import TokenService
from college_events.storage import ImageStorage

# Missing credentials are reported by get_current_user_id, not by HTTPBearer
bearer_scheme = HTTPBearer(
    scheme_name="Bearer Token",
    description="Token returned by /api/auth/register or /api/auth/login",
    auto_error=False,
)


def get_token_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenService:
    return TokenService.from_settings(settings)


def get_image_storage(
    settings: Annotated[Settings, Depends(get_settings)],
) -> ImageStorage:
    return ImageStorage.from_settings(settings)


def get_event_repository(
    db: Annotated[Session, Depends(get_db)],
) -> EventRepository:
    return EventRepository(db)


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> str:
    """
    Dependency resolving the caller's user id from the bearer token.

    Only the token is checked; whether the user still exists is up to the
    endpoint.

    Raises:
        AuthError: MISSING_TOKEN, INVALID_TOKEN or EXPIRED
    """
    if credentials is None or not credentials.credentials:
        raise AuthError.missing_token()
    return tokens.verify(credentials.credentials)


# Type aliases for cleaner dependency injection
CurrentUserId = Annotated[str, Depends(get_current_user_id)]
DBSession = Annotated[Session, Depends(get_db)]
Tokens = Annotated[TokenService, Depends(get_token_service)]
Events = Annotated[EventRepository, Depends(get_event_repository)]
Images = Annotated[ImageStorage, Depends(get_image_storage)]
