"""Registration, login and current-user routes for College Events API."""

import logging

from fastapi import APIRouter, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from college_events.dependencies import CurrentUserId, DBSession, Tokens
from college_events.exceptions import AuthError, ConflictError, NotFoundError
from college_events.models import User, is_valid_id, utcnow
from college_events.schemas import (
    AuthResponse,
    LoginRequest,
    UserCreate,
    UserResponse,
    UserSummary,
    error_responses,
)
from college_events.security import TokenService, get_password_hash, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


class AuthService:
    """Registration, login and profile lookup."""

    def __init__(self, db: Session, tokens: TokenService) -> None:
        self.db = db
        self.tokens = tokens

    def register(self, name: str, email: str, password: str) -> AuthResponse:
        """
        Register a new user and sign them in.

        Raises:
            ConflictError: If the email is already registered
            ConfigError: If no signing secret is configured
        """
        existing = self.db.query(User).filter(User.email == email).first()
        if existing:
            raise ConflictError("User already exists")

        hashed_password = get_password_hash(password)

        now = utcnow()
        user = User(
            name=name,
            email=email,
            hashed_password=hashed_password,
            created_at=now,
            updated_at=now,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise ConflictError("User already exists")
        self.db.refresh(user)

        logger.info("Registered user %s", user.id)
        return AuthResponse(
            token=self.tokens.issue(user.id),
            user=UserSummary.model_validate(user),
        )

    def login(self, email: str, password: str) -> AuthResponse:
        """
        Authenticate by email and password.

        Raises:
            AuthError: INVALID_CREDENTIALS for an unknown email or a wrong
                password alike
        """
        user = self.db.query(User).filter(User.email == email).first()
        if user is None:
            logger.info("Login failed: unknown email")
            raise AuthError.invalid_credentials()

        if not verify_password(password, user.hashed_password):
            logger.info("Login failed for user %s: wrong password", user.id)
            raise AuthError.invalid_credentials()

        logger.info("User %s logged in", user.id)
        return AuthResponse(
            token=self.tokens.issue(user.id),
            user=UserSummary.model_validate(user),
        )

    def current_user(self, user_id: str) -> User:
        """
        Look up the profile behind a verified token.

        Raises:
            NotFoundError: If the user no longer exists
        """
        user = None
        if is_valid_id(user_id):
            user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFoundError("User not found")
        return user


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(400),
)
def register(
    user_data: UserCreate,
    db: DBSession,
    tokens: Tokens,
) -> AuthResponse:
    """
    Register a new user.

    Returns:
        AuthResponse: Token and the created user (no password)
    """
    service = AuthService(db, tokens)
    return service.register(user_data.name, user_data.email, user_data.password)


@router.post("/login", response_model=AuthResponse, responses=error_responses(400))
def login(
    login_data: LoginRequest,
    db: DBSession,
    tokens: Tokens,
) -> AuthResponse:
    """
    Authenticate user and return a fresh token.

    Returns:
        AuthResponse: Token and the user it belongs to
    """
    service = AuthService(db, tokens)
    return service.login(login_data.email, login_data.password)


@router.get("/me", response_model=UserResponse, responses=error_responses(401, 404))
def get_current_user_info(
    user_id: CurrentUserId,
    db: DBSession,
    tokens: Tokens,
) -> User:
    """Get the authenticated user's profile."""
    return AuthService(db, tokens).current_user(user_id)
