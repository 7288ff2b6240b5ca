"""
Password hashing and access tokens.

Passwords are bcrypt hashes managed by passlib. Access tokens are HS256 JWTs
whose ``sub`` is the user id; the role and name ride along as extra claims so
the frontend can render without another round trip.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any, Tuple
from jose import JWTError, jwt
from passlib.context import CryptContext

from .config import settings


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def verify_and_upgrade_password(plain_password: str, hashed_password: str) -> Tuple[bool, Optional[str]]:
    """
    Check a password and report a replacement hash when the stored one is outdated.

    Returns:
        Tuple of (matches, new hash or None)
    """
    return pwd_context.verify_and_update(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(
    subject: str | int,
    expires_delta: Optional[timedelta] = None,
    additional_claims: Optional[Dict[str, Any]] = None
) -> str:
    """
    Sign an access token for ``subject`` (a user id).

    Tokens last ``ACCESS_TOKEN_EXPIRE_MINUTES`` unless ``expires_delta`` says
    otherwise. Reserved claims cannot be overridden by ``additional_claims``.
    """
    issued_at = datetime.now(timezone.utc)
    claims: Dict[str, Any] = dict(additional_claims or {})
    claims.update({
        "sub": str(subject),
        "iat": issued_at,
        "exp": issued_at + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)),
    })
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """Decoded claims, or None for a bad signature, malformed token or expiry."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


def token_user_id(token: str) -> Optional[int]:
    """User id carried in a valid token's ``sub`` claim."""
    payload = verify_token(token)
    if payload is None:
        return None
    subject = str(payload.get("sub", ""))
    return int(subject) if subject.isdigit() else None
