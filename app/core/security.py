"""
Security Module

Password hashing with bcrypt and bearer-token (JWT) encoding and
decoding. Token issuance is exposed for tooling and tests only;
the service itself never hands out tokens.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

import bcrypt
import jwt

from app.config.settings import settings
from app.config.logging import get_logger
from app.core.constants import ErrorMessages
from app.core.exceptions import AuthenticationError
from app.core.permissions import Principal, RoleName

logger = get_logger(__name__)


class PasswordManager:
    """Password hashing and verification"""

    @staticmethod
    def hash_password(password: str) -> Tuple[str, str]:
        """
        Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Tuple of (hashed password, salt) as text
        """
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8"), salt.decode("utf-8")

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.

        Returns:
            True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
        except ValueError as e:
            logger.warning(f"Password verification failed: {e}")
            return False


class TokenManager:
    """JWT token management utilities"""

    @staticmethod
    def create_token(
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create a signed JWT with the given claims and an expiry.

        Args:
            data: Claims to encode in token
            expires_delta: Custom expiration time

        Returns:
            Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

        to_encode = data.copy()
        to_encode.update({"exp": expire, "iat": now})

        return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    @staticmethod
    def verify_token(token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT.

        Raises:
            AuthenticationError: If the token is expired, tampered or malformed
        """
        try:
            return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            logger.warning("Rejected expired bearer token")
            raise AuthenticationError(ErrorMessages.TOKEN_INVALID)
        except jwt.PyJWTError as e:
            logger.warning(f"Token verification failed: {e}")
            raise AuthenticationError(ErrorMessages.TOKEN_INVALID)


def create_access_token(email: str, role: RoleName | str, expires_delta: Optional[timedelta] = None) -> str:
    """Create an access token for the given identity"""
    role_value = RoleName(role).value
    return TokenManager.create_token(
        {"sub": email, "email": email, "role": role_value},
        expires_delta=expires_delta,
    )


def resolve_principal(token: Optional[str]) -> Principal:
    """
    Resolve the authenticated principal from a raw bearer token.

    Raises:
        AuthenticationError: If no token is given or its claims are unusable
    """
    if not token:
        raise AuthenticationError(ErrorMessages.TOKEN_NOT_FOUND)

    payload = TokenManager.verify_token(token)
    email = payload.get("email") or payload.get("sub")
    role = payload.get("role")

    if not email or not role:
        logger.warning("Bearer token is missing the email or role claim")
        raise AuthenticationError(ErrorMessages.TOKEN_INVALID)

    try:
        role_name = RoleName(role)
    except ValueError:
        logger.warning(f"Bearer token carries unknown role '{role}'")
        raise AuthenticationError(ErrorMessages.TOKEN_INVALID)

    return Principal(email=str(email).strip().lower(), role=role_name)


def hash_password(password: str) -> Tuple[str, str]:
    return PasswordManager.hash_password(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return PasswordManager.verify_password(plain_password, hashed_password)
