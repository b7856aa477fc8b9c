"""
JWT Authentication for FastAPI

Password hashing, admin credential checks, and bearer-token issuance and
verification for the admin API.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from config.settings import settings
from src.estatehub.db.models import Admin
from src.estatehub.db.repository import AdminRepository
from src.estatehub.utils.logger import get_logger

logger = get_logger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer scheme; missing headers are reported as 401 by get_token_payload
bearer_scheme = HTTPBearer(auto_error=False)


class InvalidTokenError(Exception):
    """Raised when a token is missing, malformed, expired, or forged."""


class TokenPayload(BaseModel):
    """Decoded token claims."""
    sub: str
    username: str
    role: str
    exp: int

    @property
    def admin_id(self) -> int:
        return int(self.sub)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against its hash.

    Args:
        plain_password: Plain text password
        hashed_password: Bcrypt hashed password

    Returns:
        True if password matches, False otherwise
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognizable hash
        return False


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hashed password
    """
    return pwd_context.hash(password)


def validate_credentials(session: Session, username: str, password: str) -> Optional[Admin]:
    """
    Authenticate an admin with username and password.

    Unknown usernames, inactive accounts, and wrong passwords all return
    None; none of them raise.

    Args:
        session: Database session
        username: Username
        password: Plain text password

    Returns:
        Admin if authentication succeeds, None otherwise
    """
    admin = AdminRepository().get_active_by_username(session, username)
    if not admin:
        logger.info("admin_login_failed", username=username, reason="unknown_or_inactive")
        return None
    if not verify_password(password, admin.password):
        logger.info("admin_login_failed", username=username, reason="bad_password")
        return None
    logger.info("admin_login_succeeded", admin_id=admin.id, username=admin.username)
    return admin


def create_access_token(admin: Admin, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT for an admin.

    Args:
        admin: Authenticated admin
        expires_delta: Token lifetime (default settings.access_token_expire_hours)

    Returns:
        Encoded JWT token
    """
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.access_token_expire_hours)
    expire = datetime.now(timezone.utc) + expires_delta
    role = admin.role.value if hasattr(admin.role, "value") else str(admin.role)
    to_encode = {
        "sub": str(admin.id),
        "username": admin.username,
        "role": role,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> TokenPayload:
    """
    Verify signature and expiry of a token and return its claims.

    Raises:
        InvalidTokenError: For any defect; callers do not learn which one
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
        return TokenPayload(**payload)
    except (JWTError, ValidationError, TypeError) as e:
        raise InvalidTokenError(str(e)) from e


def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenPayload:
    """
    Dependency guarding admin routes.

    Raises:
        HTTPException: 401 for any missing or invalid credential
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise credentials_exception
    try:
        return decode_access_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.info("admin_token_rejected", error=str(e))
        raise credentials_exception
