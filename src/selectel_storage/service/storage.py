"""
Storage Service - single and batch object operations against Selectel storage.
"""

from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import structlog

from ..auth import AuthenticationInterface, SelectelAuthentication, StaticAuthentication
from ..core.config import DEFAULT_AUTH_URL, DEFAULT_TIMEOUT, get_selectel_section
from ..core.exceptions import (
    CrcFailedError,
    ParallelOperationError,
    UnexpectedHttpStatusError,
    UsageError,
)
from ..core.logging_config import mask_secret
from ..storage import Container, File, ServerResource, SymLink
from ..utils.http import BatchPool, BatchResult, HttpClient, HttpRequest
from ..utils.http.status import (
    HTTP_CREATED,
    HTTP_NO_CONTENT,
    HTTP_NOT_FOUND,
    HTTP_UNPROCESSABLE_ENTITY,
)

logger = structlog.get_logger(__name__)

HEADER_AUTH_TOKEN = "X-Auth-Token"
HEADER_ACCOUNT_TEMP_URL_KEY = "X-Account-Meta-Temp-URL-Key"


class StorageService:
    """Selectel storage service."""

    def __init__(self, authentication: AuthenticationInterface,
                 http_client: Optional[HttpClient] = None, owns_client: Optional[bool] = None):
        """
        Args:
            authentication: Provider of the storage URL and auth token
            http_client: Transport; the service creates and owns one when omitted
            owns_client: Close the transport in close(); defaults to True only for a created one
        """
        self.authentication = authentication
        self._owns_client = http_client is None if owns_client is None else owns_client
        self.http_client = http_client or HttpClient()

    def close(self) -> None:
        if self._owns_client:
            self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def upload_file(self, container: Container, file: File) -> bool:
        """
        Upload a file to a container.

        Args:
            container: Container with its name set
            file: File with its local name and size set

        Returns:
            True if the file was created

        Raises:
            UsageError: If the file has no size set; nothing is sent
            CrcFailedError: If the server reports an ETag mismatch
            UnexpectedHttpStatusError: For any other status
        """
        self._assert_upload_size(file)
        request = self.create_request_upload_file(container, file)

        response = self.http_client.send(request)
        if response.status_code == HTTP_CREATED:
            logger.info("File uploaded", container=container.name, server_name=file.server_name)
            return True
        if response.status_code == HTTP_UNPROCESSABLE_ENTITY:
            raise CrcFailedError(file.local_name)
        raise UnexpectedHttpStatusError(response.status_code, response.reason)

    def upload_files(self, container: Container, files: Sequence[File], atomic: bool) -> BatchResult:
        """
        Upload several files in parallel.

        When ``atomic`` is set and any upload fails, the files that did upload
        are deleted again before the error is raised. Failures of those
        compensating deletes are logged and ignored.

        Raises:
            UsageError: If any file has no size set; nothing is sent
            ParallelOperationError: If at least one upload failed
        """
        for file in files:
            self._assert_upload_size(file)

        requests = self._build_requests(
            [lambda f=f: self.create_request_upload_file(container, f) for f in files]
        )
        result = BatchPool(requests, files, [HTTP_CREATED], self.http_client).send()
        if not result.has_failures:
            return result

        if atomic:
            self._rollback_uploads(container, result.ok)

        raise ParallelOperationError("uploadFiles", list(result.failed))

    def _rollback_uploads(self, container: Container, uploaded: Sequence[File]) -> None:
        logger.info("Rolling back uploaded files", container=container.name, count=len(uploaded))
        for file in uploaded:
            try:
                self.delete_file(container, file)
            except Exception as e:
                logger.warning("Compensating delete failed",
                               container=container.name, server_name=file.server_name, error=str(e))

    def delete_file(self, container: Container, file: ServerResource) -> bool:
        """
        Delete an object.

        Returns:
            True if deleted, False if it did not exist

        Raises:
            UnexpectedHttpStatusError: For any status other than 204 or 404
        """
        request = self.create_http_request("delete", container, file)

        response = self.http_client.send(request)
        if response.status_code == HTTP_NO_CONTENT:
            logger.info("File deleted", container=container.name, server_name=file.server_name)
            return True
        if response.status_code == HTTP_NOT_FOUND:
            logger.debug("File to delete not found", container=container.name, server_name=file.server_name)
            return False
        raise UnexpectedHttpStatusError(response.status_code, response.reason)

    def delete_files(self, container: Container, files: Sequence[ServerResource]) -> BatchResult:
        """
        Delete several objects in parallel. Missing objects count as deleted.

        Raises:
            ParallelOperationError: If at least one delete failed
        """
        requests = self._build_requests(
            [lambda f=f: self.create_http_request("delete", container, f) for f in files]
        )
        result = BatchPool(requests, files, [HTTP_NO_CONTENT, HTTP_NOT_FOUND], self.http_client).send()
        if result.has_failures:
            raise ParallelOperationError("deleteFiles", list(result.failed))
        return result

    def create_symlink(self, container: Container, link: SymLink) -> bool:
        """
        Create a symlink object in the container.

        Raises:
            UnexpectedHttpStatusError: For any status other than 201
        """
        request = self.create_request_make_symlink(container, link)

        response = self.http_client.send(request)
        if response.status_code == HTTP_CREATED:
            logger.info("Symlink created", container=container.name,
                        server_name=link.server_name, location=link.location)
            return True
        raise UnexpectedHttpStatusError(response.status_code, response.reason)

    def create_symlinks(self, container: Container, links: Sequence[SymLink]) -> BatchResult:
        """
        Create several symlinks in parallel.

        Raises:
            ParallelOperationError: If at least one link was not created
        """
        requests = self._build_requests(
            [lambda link=link: self.create_request_make_symlink(container, link) for link in links]
        )
        result = BatchPool(requests, links, [HTTP_CREATED], self.http_client).send()
        if result.has_failures:
            raise ParallelOperationError("createSymLinks", list(result.failed))
        return result

    def set_account_secret_key(self, secret_key: str) -> None:
        """
        Set the key used to sign temporary URLs.

        WARNING: this sets the secret key for ALL containers of the account.

        Raises:
            UnexpectedHttpStatusError: For any status other than 204
        """
        request = self.http_client.create_request(
            "post",
            self.authentication.get_storage_url(),
            headers={
                HEADER_AUTH_TOKEN: self.authentication.get_auth_token(),
                HEADER_ACCOUNT_TEMP_URL_KEY: secret_key,
            },
        )
        logger.warning("Setting account-wide secret key", key_masked=mask_secret(secret_key))

        response = self.http_client.send(request)
        if response.status_code != HTTP_NO_CONTENT:
            raise UnexpectedHttpStatusError(
                response.status_code, response.reason or "Only HTTP_NO_CONTENT is expected"
            )

    def object_url(self, container: Container, resource: ServerResource) -> str:
        if not resource.server_name:
            raise UsageError("Server name for the object is not set")
        return "/".join([
            self.authentication.get_storage_url(),
            quote(container.name, safe=""),
            quote(resource.server_name, safe="/"),
        ])

    def create_http_request(self, method: str, container: Container,
                            resource: ServerResource) -> HttpRequest:
        url = self.object_url(container, resource)
        return self.http_client.create_request(
            method, url, headers={HEADER_AUTH_TOKEN: self.authentication.get_auth_token()}
        )

    def create_request_upload_file(self, container: Container, file: File) -> HttpRequest:
        """PUT request whose body is a freshly opened handle on the local file."""
        request = self.create_http_request("put", container, file)
        request.add_headers(file.headers)
        request.body = file.open_local("rb")
        return request

    def create_request_make_symlink(self, container: Container, link: SymLink) -> HttpRequest:
        request = self.create_http_request("put", container, link)
        request.add_headers(link.headers)
        return request

    @staticmethod
    def _build_requests(builders: List[Any]) -> List[HttpRequest]:
        """Build every request or none; bodies already opened are closed on failure."""
        built: List[HttpRequest] = []
        try:
            for build in builders:
                built.append(build())
        except Exception:
            for request in built:
                request.close()
            raise
        return built

    @staticmethod
    def _assert_upload_size(file: File) -> None:
        try:
            size = file.size
        except ValueError as e:
            raise UsageError("File should have size set for upload operation") from e
        if not size:
            raise UsageError("File should have size set for upload operation")


def get_storage_service(configuration: Optional[Dict] = None) -> StorageService:
    """
    Factory function to create a StorageService from configuration settings.

    Args:
        configuration: Configuration dictionary containing storage.selectel settings

    Returns:
        Configured StorageService instance
    """
    selectel_config = get_selectel_section(configuration)
    http_client = HttpClient(
        timeout=selectel_config.get("timeout", DEFAULT_TIMEOUT),
        max_workers=selectel_config.get("max_workers"),
    )

    if selectel_config.get("storage_url") and selectel_config.get("auth_token"):
        logger.debug("Using static storage credentials", storage_url=selectel_config["storage_url"])
        authentication = StaticAuthentication(
            selectel_config["storage_url"], selectel_config["auth_token"]
        )
    else:
        logger.debug("Using Selectel authentication",
                     auth_url=selectel_config.get("auth_url", DEFAULT_AUTH_URL))
        authentication = SelectelAuthentication(
            user=str(selectel_config.get("user") or ""),
            key=str(selectel_config.get("key") or ""),
            auth_url=selectel_config.get("auth_url", DEFAULT_AUTH_URL),
            http_client=http_client,
        )

    return StorageService(authentication, http_client, owns_client=True)
