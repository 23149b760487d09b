"""
Symbolic link descriptor.

A symlink is an empty object whose Content-Type marks it as a link and whose
``X-Object-Meta-Location`` header points at the target object.
"""

import hashlib
from typing import Dict, Optional

from ..core.exceptions import UsageError
from .container import Container
from .file import HEADER_CONTENT_DISPOSITION, HEADER_CONTENT_LENGTH, HEADER_CONTENT_TYPE
from .interface import ServerResource

HEADER_LOCATION = "X-Object-Meta-Location"
HEADER_DELETE_AT = "X-Object-Meta-Delete-At"
HEADER_LINK_KEY = "X-Object-Meta-Link-Key"


class SymLink(ServerResource):
    """Link to another object of the same account."""

    TYPE_SYMLINK = "x-storage/symlink"
    TYPE_ONETIME = "x-storage/onetime-symlink"
    TYPE_SYMLINK_SECURE = "x-storage/symlink+secure"
    TYPE_ONETIME_SECURE = "x-storage/onetime-symlink+secure"

    TYPES = (TYPE_SYMLINK, TYPE_ONETIME, TYPE_SYMLINK_SECURE, TYPE_ONETIME_SECURE)
    SECURE_TYPES = (TYPE_SYMLINK_SECURE, TYPE_ONETIME_SECURE)

    def __init__(self, server_name: str, link_type: str = TYPE_SYMLINK):
        self._server_name = server_name
        self._headers: Dict[str, str] = {HEADER_CONTENT_LENGTH: "0"}
        self.set_type(link_type)

    @property
    def server_name(self) -> str:
        return self._server_name

    def set_server_name(self, value: str) -> "SymLink":
        self._server_name = value
        return self

    @property
    def headers(self) -> Dict[str, str]:
        return self._headers

    @property
    def type(self) -> str:
        return self._headers[HEADER_CONTENT_TYPE]

    def set_type(self, link_type: str) -> "SymLink":
        if link_type not in self.TYPES:
            raise UsageError(f"Unknown symlink type '{link_type}'")
        self._headers[HEADER_CONTENT_TYPE] = link_type
        return self

    @property
    def location(self) -> Optional[str]:
        return self._headers.get(HEADER_LOCATION)

    def set_location(self, container: Container, target: ServerResource) -> "SymLink":
        """Point the link at ``target`` inside ``container``."""
        self._headers[HEADER_LOCATION] = f"/{container.name}/{target.server_name}"
        return self

    def set_delete_at(self, timestamp: int) -> "SymLink":
        """Unix timestamp after which the storage removes the link."""
        self._headers[HEADER_DELETE_AT] = str(int(timestamp))
        return self

    def set_password(self, password: str) -> "SymLink":
        """
        Protect a secure link with a password.

        Raises:
            UsageError: If the link type is not secure or no location is set yet
        """
        if self.type not in self.SECURE_TYPES:
            raise UsageError("Password can only be set for secure symlink types")
        if not self.location:
            raise UsageError("Symlink location must be set before the password")
        key = hashlib.md5((password + self.location).encode("utf-8")).hexdigest()
        self._headers[HEADER_LINK_KEY] = key
        return self

    def set_content_disposition(self, value: str) -> "SymLink":
        self._headers[HEADER_CONTENT_DISPOSITION] = value
        return self
