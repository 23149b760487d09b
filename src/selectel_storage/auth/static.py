from ..core.exceptions import AuthenticationError
from .interface import AuthenticationInterface


class StaticAuthentication(AuthenticationInterface):
    """Credentials obtained elsewhere and passed in as-is."""

    def __init__(self, storage_url: str, auth_token: str):
        self.storage_url = storage_url
        self.auth_token = auth_token

    def get_storage_url(self) -> str:
        if not self.storage_url:
            raise AuthenticationError("Storage URL is not set")
        return self.storage_url.rstrip("/")

    def get_auth_token(self) -> str:
        if not self.auth_token:
            raise AuthenticationError("Auth token is not set")
        return self.auth_token
