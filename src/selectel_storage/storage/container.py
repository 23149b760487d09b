"""Container reference."""

from typing import Optional

from ..core.exceptions import UsageError


class Container:
    """Named namespace on the storage under which objects live."""

    def __init__(self, name: Optional[str] = None):
        self._name = name

    @property
    def name(self) -> str:
        """
        Container name.

        Raises:
            UsageError: If the name is empty or was never set
        """
        if not self._name:
            raise UsageError("Name for container is not set")
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value

    def set_name(self, value: str) -> "Container":
        self._name = value
        return self

    def __repr__(self):
        return f"Container(name={self._name!r})"
