from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.exceptions import Conflict, Unauthorized, ValidationError
from storefront.models.user import User
from storefront.repositories.user_repo import UserRepository
from storefront.utils.logging import get_logger
from storefront.utils.transactions import smart_transaction

log = get_logger(__name__)

MAX_USERNAME_LENGTH = 150
# bcrypt only looks at the first 72 bytes of the secret
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class SessionToken:
    """A freshly issued session token and the moment it stops being valid."""

    token: str
    expires_at: datetime


def _hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


# compared against when the username is unknown, so both paths cost one checkpw
_DUMMY_HASH = bcrypt.hashpw(b"storefront-dummy-secret", bcrypt.gensalt(rounds=4))


class IdentityService:
    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)

    def _validate_credentials(self, username: str, password: str) -> str:
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username is required")
        if len(username) > MAX_USERNAME_LENGTH:
            raise ValidationError(f"Username must be at most {MAX_USERNAME_LENGTH} characters")
        if not password:
            raise ValidationError("Password is required")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return username

    def register(self, username: str, password: str) -> User:
        username = self._validate_credentials(username, password)
        password_hash = _hash_password(password)
        try:
            with smart_transaction(self.db):
                if self.user_repo.get_by_username(username):
                    raise Conflict(f"Username already exists: {username}")
                user = self.user_repo.create(username, password_hash)
        except IntegrityError:
            # lost a race with a concurrent registration of the same name
            raise Conflict(f"Username already exists: {username}")
        log.info("Registered user id=%s username=%r", user.id, username)
        return user

    def authenticate(self, username: str, password: str) -> SessionToken:
        username = (username or "").strip()
        user = self.user_repo.get_by_username(username) if username else None
        candidate = (password or "").encode("utf-8")
        if len(candidate) > MAX_PASSWORD_BYTES:
            # no stored secret is this long
            bcrypt.checkpw(b"", _DUMMY_HASH)
            log.warning("Login failed for username=%r: password too long", username)
            raise Unauthorized("Invalid username or password")
        if user is None:
            bcrypt.checkpw(candidate, _DUMMY_HASH)
            log.warning("Login failed for unknown username=%r", username)
            raise Unauthorized("Invalid username or password")
        if not bcrypt.checkpw(candidate, user.password_hash.encode("utf-8")):
            log.warning("Login failed for username=%r", username)
            raise Unauthorized("Invalid username or password")
        return self.issue_token(user)

    def issue_token(self, user: User, now: Optional[datetime] = None) -> SessionToken:
        now = now or datetime.now(timezone.utc)
        expires_at = now + timedelta(seconds=settings.TOKEN_TTL_SECONDS)
        claims = {
            "sub": user.username,
            "user_id": user.id,
            "iat": now,
            "exp": expires_at,
        }
        token = jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
        return SessionToken(token=token, expires_at=expires_at)

    @staticmethod
    def decode_token(token: str) -> dict:
        """
        Verify signature and expiry of a session token and return its claims.
        Raises Unauthorized for anything that is not a currently valid token.
        """
        if not token:
            raise Unauthorized("Missing token")
        try:
            return jwt.decode(
                token,
                settings.SECRET_KEY,
                algorithms=[settings.JWT_ALGORITHM],
                options={"require": ["exp", "sub", "user_id"]},
            )
        except jwt.ExpiredSignatureError:
            raise Unauthorized("Token expired")
        except jwt.InvalidTokenError as e:
            raise Unauthorized(f"Invalid token: {e}")
