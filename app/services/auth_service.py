"""Authentication service - login, refresh and authorized requests."""
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from app.errors import AuthError, NotAuthenticatedError
from app.models.auth import AuthTokens, AuthUser, Session
from app.utils.auth import token_expired
from app.utils.session import SessionStore

logger = logging.getLogger(__name__)


class AuthService:
    """Service for handling the operator's session against the auth backend."""

    def __init__(self, client: httpx.AsyncClient, store: SessionStore):
        """Initialize service with the auth backend client and session store."""
        self.client = client
        self.store = store

    async def login(self, login: str, password: str) -> Session:
        """
        Login and store the issued tokens.

        Args:
            login: Username or email
            password: Plain text password

        Returns:
            Stored session

        Raises:
            AuthError: If the auth backend rejects the credentials
        """
        try:
            response = await self.client.post(
                "/users/auth",
                json={"login": login, "password": password},
            )
        except httpx.HTTPError as e:
            logger.error("Auth backend unreachable: %s", e)
            raise AuthError("Auth service unavailable")

        if not response.is_success:
            logger.info("Login rejected for %r (HTTP %d)", login, response.status_code)
            raise AuthError("Invalid login or password")

        try:
            session = Session.model_validate(response.json())
        except (ValueError, ValidationError):
            raise AuthError("Unexpected response from auth service")

        self.store.set(session)
        logger.info("Logged in as %r", login)
        return session

    async def refresh(self) -> bool:
        """
        Exchange the refresh token for new tokens.

        Returns:
            True if new tokens were stored, False otherwise
        """
        session = self.store.get()
        if not session or not session.tokens.refresh_token:
            return False

        try:
            response = await self.client.post(
                "/users/auth/refresh",
                json={"refreshToken": session.tokens.refresh_token},
            )
            if not response.is_success:
                return False
            tokens = AuthTokens.model_validate(response.json()["tokens"])
        except (httpx.HTTPError, ValueError, KeyError, ValidationError) as e:
            logger.warning("Token refresh failed: %s", e)
            return False

        self.store.set(Session(tokens=tokens, user=session.user))
        return True

    def logout(self) -> None:
        """Forget the stored session."""
        self.store.clear()

    def current_user(self) -> Optional[AuthUser]:
        """Return the stored user if a session with an access token exists."""
        session = self.store.get()
        if not session or not session.tokens.access_token:
            return None
        return session.user

    def is_authenticated(self) -> bool:
        """True if an unexpired access token is stored."""
        session = self.store.get()
        if not session or not session.tokens.access_token:
            return False
        return not token_expired(session.tokens.access_token)

    def _auth_headers(self, headers: Optional[dict] = None) -> dict:
        headers = dict(headers or {})
        session = self.store.get()
        if session and session.tokens.access_token:
            headers["Authorization"] = f"Bearer {session.tokens.access_token}"
        return headers

    async def request(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        **kwargs,
    ) -> httpx.Response:
        """
        Send a request to a backend with the stored bearer token.

        On 401 the tokens are refreshed once and the request is retried.

        Args:
            client: Backend client to send through
            method: HTTP method
            url: Path relative to the client's base URL
            **kwargs: Passed to ``httpx.AsyncClient.request``

        Returns:
            Backend response

        Raises:
            NotAuthenticatedError: If the backend still refuses after a
                failed refresh; the session is cleared
        """
        headers = kwargs.pop("headers", None)
        response = await client.request(
            method, url, headers=self._auth_headers(headers), **kwargs
        )

        if response.status_code != 401:
            return response

        session = self.store.get()
        if not session or not session.tokens.refresh_token:
            raise NotAuthenticatedError("Not authenticated")

        if not await self.refresh():
            logger.info("Session expired, clearing stored tokens")
            self.store.clear()
            raise NotAuthenticatedError("Session expired")

        return await client.request(
            method, url, headers=self._auth_headers(headers), **kwargs
        )
