"""Authentication service for JWT, refresh tokens and password handling."""

import logging
import secrets
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from tierlist.config import get_settings
from tierlist.database import run_in_transaction
from tierlist.domain.result import Result, unauthorized, validation
from tierlist.models.user import USERNAME_MAX_LENGTH, USERNAME_MIN_LENGTH, RefreshToken, User

logger = logging.getLogger(__name__)

settings = get_settings()

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 50

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass
class TokenPair:
    """Access and refresh tokens issued together."""

    access_token: str
    refresh_token: str
    access_expires_at: datetime
    refresh_expires_at: datetime


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, username: str, expires_at: datetime | None = None) -> str:
    """Create a JWT access token."""
    expire = expires_at or datetime.now(UTC) + timedelta(
        minutes=settings.access_token_expiration_minutes
    )
    to_encode = {
        "sub": str(user_id),
        "username": username,
        "jti": str(uuid.uuid4()),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
        return payload
    except JWTError:
        return None


def generate_refresh_token(user: User) -> RefreshToken:
    """Create a new, not yet persisted refresh token for a user."""
    return RefreshToken(
        user=user,
        token=secrets.token_urlsafe(48),
        expires_at=datetime.now(UTC) + timedelta(days=settings.refresh_token_expiration_days),
        is_revoked=False,
    )


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username."""
    return db.query(User).filter(User.username == username).first()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def authenticate_user(db: Session, username: str, password: str) -> User | None:
    """Authenticate a user by username and password."""
    user = get_user_by_username(db, username)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def register_user(db: Session, username: str, password: str) -> Result[User]:
    """Create a new user with a hashed password."""
    credentials_error = _check_credentials(username, password)
    if credentials_error is not None:
        return Result.failure(credentials_error)

    if get_user_by_username(db, username):
        return Result.failure(validation("Username already exists."))

    user = User(username=username, password_hash=get_password_hash(password))

    def operation() -> Result[User]:
        db.add(user)
        return Result.success(user)

    result = run_in_transaction(db, operation)
    if result.is_success:
        logger.info(f"Registered user {username}")
    return result


def login_user(db: Session, username: str, password: str) -> Result[TokenPair]:
    """Check credentials and issue a new token pair."""
    user = authenticate_user(db, username, password)
    if user is None:
        return Result.failure(unauthorized("Invalid username or password."))
    return _issue_tokens(db, user)


def refresh_tokens(db: Session, token: str) -> Result[TokenPair]:
    """Rotate a refresh token: revoke the presented one and issue a new pair."""
    if not token:
        return Result.failure(validation("Refresh token cannot be empty."))

    existing = db.query(RefreshToken).filter(RefreshToken.token == token).first()
    if existing is None:
        return Result.failure(
            unauthorized("Invalid refresh token.", code="Auth.InvalidRefreshToken")
        )
    if existing.is_revoked:
        return Result.failure(
            unauthorized("Refresh token has been revoked.", code="Auth.InvalidRefreshToken")
        )
    if existing.is_expired:
        return Result.failure(
            unauthorized("Refresh token has expired.", code="Auth.InvalidRefreshToken")
        )

    existing.revoke()
    return _issue_tokens(db, existing.user)


def _issue_tokens(db: Session, user: User) -> Result[TokenPair]:
    access_expires_at = datetime.now(UTC) + timedelta(
        minutes=settings.access_token_expiration_minutes
    )
    access_token = create_access_token(user.id, user.username, access_expires_at)
    refresh_token = generate_refresh_token(user)

    def operation() -> Result[TokenPair]:
        db.add(refresh_token)
        return Result.success(
            TokenPair(
                access_token=access_token,
                refresh_token=refresh_token.token,
                access_expires_at=access_expires_at,
                refresh_expires_at=refresh_token.expires_at,
            )
        )

    return run_in_transaction(db, operation)


def _check_credentials(username: str, password: str):
    if not username or not username.strip() or not password or not password.strip():
        return validation("Username and password cannot be empty.")
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        return validation(
            f"Username must be between {USERNAME_MIN_LENGTH} and "
            f"{USERNAME_MAX_LENGTH} characters."
        )
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        return validation(
            f"Password must be between {PASSWORD_MIN_LENGTH} and "
            f"{PASSWORD_MAX_LENGTH} characters."
        )
    return None
