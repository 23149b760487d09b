"""Authentication provider interface."""

from abc import ABC, abstractmethod


class AuthenticationInterface(ABC):
    """Supplies the storage base URL and the auth token for every request."""

    @abstractmethod
    def get_storage_url(self) -> str:
        """Base URL of the account's container namespace."""
        pass

    @abstractmethod
    def get_auth_token(self) -> str:
        """Value for the X-Auth-Token header."""
        pass
