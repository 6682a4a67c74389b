"""Access token utilities."""
from datetime import datetime, timezone
from typing import Optional

from jose import JWTError, jwt


def token_expiry(token: str) -> Optional[datetime]:
    """
    Read the expiry of an access token without verifying its signature.

    The console never holds the auth backend's signing key; the claims are
    only used to decide whether a refresh is worth trying.

    Args:
        token: JWT access token string

    Returns:
        Expiry as an aware UTC datetime, or None if the token has no
        readable ``exp`` claim

    Example:
        >>> token_expiry("not-a-jwt") is None
        True
    """
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return None

    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        return None

    return datetime.fromtimestamp(exp, tz=timezone.utc)


def token_expired(token: str, now: Optional[datetime] = None) -> bool:
    """
    Check whether an access token has expired.

    Tokens without a readable expiry are treated as valid; the backend
    answers 401 for them if they are not.

    Args:
        token: JWT access token string
        now: Reference time (defaults to current UTC time)

    Returns:
        True if the ``exp`` claim is in the past
    """
    expiry = token_expiry(token)
    if expiry is None:
        return False

    now = now or datetime.now(timezone.utc)
    return expiry <= now
