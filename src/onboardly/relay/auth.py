"""Bearer-token authentication for the completion relay."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

import httpx

from .models import RelayError, VerifiedUser

logger = logging.getLogger(__name__)

MISSING_AUTHORIZATION = "Missing authorization header"
UNAUTHORIZED = "Unauthorized"


def extract_bearer(header: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header.

    Raises:
        RelayError: 401 if the header is absent or not a bearer header
    """
    if not header or not header.startswith("Bearer "):
        raise RelayError(401, MISSING_AUTHORIZATION)
    return header[len("Bearer "):]


class SessionVerifier(ABC):
    """Resolves a bearer token to a user session.

    Hides which auth provider issued the token.
    """

    @abstractmethod
    async def verify(self, token: str) -> VerifiedUser:
        """Verify a token.

        Raises:
            RelayError: 401 if the token does not resolve to a valid session
        """

    async def close(self) -> None:
        """Release any resources held by the verifier."""


class SupabaseSessionVerifier(SessionVerifier):
    """Verifies tokens against a Supabase auth endpoint."""

    def __init__(
        self,
        url: str,
        anon_key: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self._user_url = f"{url.rstrip('/')}/auth/v1/user"
        self._anon_key = anon_key
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def verify(self, token: str) -> VerifiedUser:
        try:
            response = await self._http.get(
                self._user_url,
                headers={"apikey": self._anon_key, "Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            logger.warning("Session verification failed: %s", e)
            raise RelayError(401, UNAUTHORIZED) from e

        if response.status_code != 200:
            raise RelayError(401, UNAUTHORIZED)

        try:
            data = response.json()
        except ValueError as e:
            raise RelayError(401, UNAUTHORIZED) from e
        if not isinstance(data, dict) or not data.get("id"):
            raise RelayError(401, UNAUTHORIZED)
        return VerifiedUser(id=str(data["id"]), email=data.get("email"))

    async def close(self) -> None:
        if self._owns_client:
            await self._http.aclose()


class StaticTokenVerifier(SessionVerifier):
    """Accepts a fixed set of tokens. For local development and tests."""

    def __init__(self, tokens: Iterable[str]):
        self._tokens = frozenset(t for t in tokens if t)

    async def verify(self, token: str) -> VerifiedUser:
        if token not in self._tokens:
            raise RelayError(401, UNAUTHORIZED)
        return VerifiedUser(id=f"static:{token[:8]}")
