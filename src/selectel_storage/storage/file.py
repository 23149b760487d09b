"""
File descriptor: an object in a container, optionally backed by a local file.
"""

import json
from typing import Any, Dict, IO, Optional

import structlog

from ..core.exceptions import FileNotExistsError, FileUnreadableError, UnexpectedError
from ..utils import fs
from .interface import ServerResource

logger = structlog.get_logger(__name__)

HEADER_CONTENT_LENGTH = "Content-Length"
HEADER_ETAG = "ETag"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_CONTENT_DISPOSITION = "Content-Disposition"


class File(ServerResource):
    """
    Object representing a file in the storage.

    Metadata getters only read cached header values. Setters called without a
    value derive the header from ``local_name``; this is the only place the
    descriptor touches the local filesystem.
    """

    def __init__(self, server_name: str):
        """
        Args:
            server_name: Name of the file in the container
        """
        self._server_name = server_name
        self._local_name: Optional[str] = None
        self._headers: Dict[str, str] = {}

    @property
    def server_name(self) -> str:
        return self._server_name

    def set_server_name(self, value: str) -> "File":
        self._server_name = value
        return self

    @property
    def local_name(self) -> Optional[str]:
        return self._local_name

    def set_local_name(self, value: str) -> "File":
        self._local_name = value
        return self

    @property
    def headers(self) -> Dict[str, str]:
        return self._headers

    def set_headers(self, value: Dict[str, str]) -> "File":
        self._headers = dict(value)
        return self

    @property
    def size(self) -> Optional[int]:
        value = self._headers.get(HEADER_CONTENT_LENGTH)
        return int(value) if value not in (None, "") else None

    def set_size(self, value: Optional[int] = None) -> "File":
        """
        Set the Content-Length header.

        Args:
            value: Size in bytes. If empty, taken from the local file.

        Raises:
            FileNotExistsError: If the size has to be derived and the local file is missing
            FileUnreadableError: If the size has to be derived and the local file cannot be read
        """
        if not value:
            self._assert_file_exists()
            self._assert_file_readable()
            value = fs.get_file_size(self._local_name)
            logger.debug("Derived file size", local_name=self._local_name, size=value)
        self._headers[HEADER_CONTENT_LENGTH] = str(value)
        return self

    @property
    def md5(self) -> Optional[str]:
        """ETag header."""
        return self._headers.get(HEADER_ETAG)

    def set_md5(self, value: Optional[str] = None) -> "File":
        """
        Set the ETag header.

        Args:
            value: MD5 hex digest. If empty, computed from the local file.

        Raises:
            FileNotExistsError: If the local file is missing
            FileUnreadableError: If the local file cannot be read
        """
        if not value:
            self._assert_file_exists()
            self._assert_file_readable()
            try:
                value = fs.get_file_md5(self._local_name)
            except PermissionError as e:
                raise FileUnreadableError(self._local_name) from e
            logger.debug("Derived file md5", local_name=self._local_name, md5=value)
        self._headers[HEADER_ETAG] = value
        return self

    @property
    def content_type(self) -> Optional[str]:
        return self._headers.get(HEADER_CONTENT_TYPE)

    def set_content_type(self, value: Optional[str] = None) -> "File":
        """
        Set the Content-Type header.

        Args:
            value: MIME type. If empty, guessed from the local file name.

        Raises:
            FileNotExistsError: If the type has to be derived and the local file is missing
            FileUnreadableError: If the type has to be derived and the local file cannot be read
        """
        if not value:
            self._assert_file_exists()
            self._assert_file_readable()
            value = fs.get_file_mime_type(self._local_name)
        self._headers[HEADER_CONTENT_TYPE] = value
        return self

    @property
    def content_disposition(self) -> Optional[str]:
        return self._headers.get(HEADER_CONTENT_DISPOSITION)

    def set_content_disposition(self, value: str) -> "File":
        self._headers[HEADER_CONTENT_DISPOSITION] = value
        return self

    def resolve_metadata(self) -> "File":
        """Derive size, md5 and content type from the local file where they are not set yet."""
        if not self.size:
            self.set_size()
        if not self.md5:
            self.set_md5()
        if not self.content_type:
            self.set_content_type()
        return self

    def open_local(self, mode: str = "rb") -> IO:
        """
        Open the local file and return a handle to it.

        The caller owns the returned handle and must close it.

        Raises:
            FileNotExistsError: If the local file is missing
            FileUnreadableError: If the local file cannot be read
            UnexpectedError: If opening fails for another reason
        """
        self._assert_file_exists()
        self._assert_file_readable()
        try:
            return open(self._local_name, mode)
        except OSError as e:
            raise UnexpectedError(f"Cannot open file '{self._local_name}' due to unknown error") from e

    def _assert_file_exists(self) -> None:
        if not fs.file_exists(self._local_name):
            raise FileNotExistsError(self._local_name)

    def _assert_file_readable(self) -> None:
        if not fs.file_readable(self._local_name):
            raise FileUnreadableError(self._local_name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "serverName": self._server_name,
            "localName": self._local_name,
            "headers": dict(self._headers),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
