"""Password hashing and session tokens."""

import logging
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from college_events.config import Settings
from college_events.exceptions import AuthError, ConfigError

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt (salted, cost factor 10).

    CPU-bound: async callers should run it in the thread pool.
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Returns False on mismatch. A hash passlib cannot identify raises
    ``ValueError``; that means the stored data is corrupt, not that the
    caller typed the wrong password.
    """
    return pwd_context.verify(plain_password, hashed_password)


class TokenService:
    """
    Issues and verifies signed, self-contained session tokens.

    Tokens carry ``sub`` (the user id), ``iat`` and ``exp``. There is no
    server-side session store, so a token stays valid until it expires.
    """

    def __init__(
        self,
        secret: str | None,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(hours=24),
    ) -> None:
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            lifetime=timedelta(hours=settings.token_expire_hours),
        )

    def _require_secret(self) -> str:
        if not self.secret:
            raise ConfigError("JWT_SECRET is not configured")
        return self.secret

    def issue(self, user_id: str, now: datetime | None = None) -> str:
        """
        Create a token for ``user_id``.

        Args:
            user_id: The user's ID to encode in the token
            now: Issue instant (defaults to the current UTC time)

        Returns:
            str: Encoded token

        Raises:
            ConfigError: If no signing secret is configured
        """
        secret = self._require_secret()
        issued_at = now or datetime.now(timezone.utc)
        to_encode = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(to_encode, secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Verify a token and return the user id it was issued for.

        Raises:
            AuthError: EXPIRED once past ``exp``, INVALID_TOKEN for a bad
                signature or a malformed payload
            ConfigError: If no signing secret is configured
        """
        secret = self._require_secret()
        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise AuthError.expired()
        except JWTError as e:
            logger.debug("Token rejected: %s", e)
            raise AuthError.invalid_token()

        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise AuthError.invalid_token()
        return user_id
