"""
Selectel authentication handshake.

``GET auth_url`` with ``X-Auth-User``/``X-Auth-Key`` returns the storage URL
and a temporary token in the response headers.
"""

import threading
import time
from typing import Optional

import structlog

from ..core.config import DEFAULT_AUTH_URL
from ..core.exceptions import AuthenticationError, TransportError
from ..core.logging_config import mask_secret
from ..utils.http.client import HttpClient
from ..utils.http.status import HTTP_FORBIDDEN, HTTP_NO_CONTENT, HTTP_OK
from .interface import AuthenticationInterface

logger = structlog.get_logger(__name__)

HEADER_AUTH_USER = "X-Auth-User"
HEADER_AUTH_KEY = "X-Auth-Key"
HEADER_STORAGE_URL = "X-Storage-Url"
HEADER_AUTH_TOKEN = "X-Auth-Token"
HEADER_EXPIRE_AUTH_TOKEN = "X-Expire-Auth-Token"


class SelectelAuthentication(AuthenticationInterface):
    """Authenticates lazily on first use and again once the token expires."""

    def __init__(self, user: str, key: str, auth_url: str = DEFAULT_AUTH_URL,
                 http_client: Optional[HttpClient] = None):
        self.user = user
        self.key = key
        self.auth_url = auth_url
        self.http_client = http_client or HttpClient()

        self._storage_url: Optional[str] = None
        self._auth_token: Optional[str] = None
        self._expires_at: Optional[float] = None
        # Shared by every in-flight request of a batch
        self._lock = threading.RLock()

    def get_storage_url(self) -> str:
        with self._lock:
            self._ensure_authenticated()
            return self._storage_url

    def get_auth_token(self) -> str:
        with self._lock:
            self._ensure_authenticated()
            return self._auth_token

    def _is_valid(self) -> bool:
        if not self._auth_token:
            return False
        return self._expires_at is None or time.monotonic() < self._expires_at

    def _ensure_authenticated(self) -> None:
        if not self._is_valid():
            self.authenticate()

    def authenticate(self) -> None:
        """
        Perform the handshake and cache the result.

        Raises:
            AuthenticationError: On bad credentials, an unexpected answer or a transport fault
        """
        if not self.user or not self.key:
            raise AuthenticationError("Auth user and key must be set")

        logger.info("Authenticating", auth_url=self.auth_url,
                    user=self.user, key_masked=mask_secret(self.key))
        request = self.http_client.create_request(
            "get", self.auth_url,
            headers={HEADER_AUTH_USER: self.user, HEADER_AUTH_KEY: self.key},
        )
        try:
            response = self.http_client.send(request)
        except TransportError as e:
            raise AuthenticationError(f"Cannot reach auth service {self.auth_url}: {e}") from e

        if response.status_code == HTTP_FORBIDDEN:
            raise AuthenticationError("Authentication failed: bad credentials")
        if response.status_code not in (HTTP_NO_CONTENT, HTTP_OK):
            raise AuthenticationError(
                f"Authentication failed with HTTP {response.status_code}: {response.reason}"
            )

        headers = {name.lower(): value for name, value in response.headers.items()}
        storage_url = headers.get(HEADER_STORAGE_URL.lower())
        auth_token = headers.get(HEADER_AUTH_TOKEN.lower())
        if not storage_url or not auth_token:
            raise AuthenticationError("Auth response is missing storage URL or token")

        expire = headers.get(HEADER_EXPIRE_AUTH_TOKEN.lower())
        self._storage_url = storage_url.rstrip("/")
        self._auth_token = auth_token
        self._expires_at = time.monotonic() + int(expire) if expire and expire.isdigit() else None
        logger.info("Authenticated", storage_url=self._storage_url,
                    token_masked=mask_secret(auth_token), expires_in=expire)
