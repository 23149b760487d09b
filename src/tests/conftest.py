"""Shared fixtures."""

import pytest

from selectel_storage import Container, File, StaticAuthentication, StorageService

from .fakes import AUTH_TOKEN, STORAGE_URL, FakeHttpClient


@pytest.fixture
def http_client():
    return FakeHttpClient()


@pytest.fixture
def authentication():
    return StaticAuthentication(STORAGE_URL, AUTH_TOKEN)


@pytest.fixture
def service(authentication, http_client):
    return StorageService(authentication, http_client)


@pytest.fixture
def container():
    return Container("photos")


@pytest.fixture
def make_file(tmp_path):
    """Create a local file and a File descriptor with its size set."""

    def _make(name: str, content: bytes = b"hello world") -> File:
        path = tmp_path / name
        path.write_bytes(content)
        return File(name).set_local_name(str(path)).set_size()

    return _make
