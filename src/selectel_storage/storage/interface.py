"""Storage resource interface definitions."""

from abc import ABC, abstractmethod
from typing import Dict


class ServerResource(ABC):
    """A named object in a container together with its HTTP headers."""

    @property
    @abstractmethod
    def server_name(self) -> str:
        """Name of the object inside its container."""
        pass

    @property
    @abstractmethod
    def headers(self) -> Dict[str, str]:
        """Headers sent along with the object."""
        pass

    def __repr__(self):
        return f"{self.__class__.__name__}(server_name='{self.server_name}')"
