"""Tests for access token utility functions."""
from datetime import datetime, timedelta, timezone

from jose import jwt


def make_token(expires_in: timedelta | None) -> str:
    claims = {"sub": "user123"}
    if expires_in is not None:
        claims["exp"] = int((datetime.now(timezone.utc) + expires_in).timestamp())
    return jwt.encode(claims, "someone-elses-secret", algorithm="HS256")


class TestTokenExpiry:
    """Tests for reading token expiry."""

    def test_token_expiry_read(self):
        """Test the exp claim is read without the signing key."""
        from app.utils.auth import token_expiry

        token = make_token(timedelta(minutes=30))
        expiry = token_expiry(token)

        assert expiry is not None
        assert expiry.tzinfo is not None
        assert expiry > datetime.now(timezone.utc)

    def test_token_expiry_missing_claim(self):
        """Test a token without exp has no expiry."""
        from app.utils.auth import token_expiry

        assert token_expiry(make_token(None)) is None

    def test_token_expiry_not_a_jwt(self):
        """Test opaque tokens have no expiry."""
        from app.utils.auth import token_expiry

        assert token_expiry("opaque-token") is None


class TestTokenExpired:
    """Tests for token_expired."""

    def test_valid_token(self):
        """Test a token expiring in the future is valid."""
        from app.utils.auth import token_expired

        assert token_expired(make_token(timedelta(minutes=5))) is False

    def test_expired_token(self):
        """Test a token whose exp has passed is expired."""
        from app.utils.auth import token_expired

        assert token_expired(make_token(timedelta(minutes=-5))) is True

    def test_reference_time(self):
        """Test expiry is judged against the given time."""
        from app.utils.auth import token_expired

        token = make_token(timedelta(minutes=5))
        later = datetime.now(timezone.utc) + timedelta(hours=1)

        assert token_expired(token, now=later) is True

    def test_opaque_token_not_expired(self):
        """Test tokens without readable claims are left to the backend."""
        from app.utils.auth import token_expired

        assert token_expired("opaque-token") is False
