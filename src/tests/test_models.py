"""Tests for Container, File and SymLink descriptors."""

import hashlib
import json

import pytest

from selectel_storage import Container, File, SymLink, UsageError
from selectel_storage.core.exceptions import FileNotExistsError, FileUnreadableError
from selectel_storage.utils import fs


class TestContainer:
    def test_name(self):
        assert Container("photos").name == "photos"

    @pytest.mark.parametrize("name", [None, ""])
    def test_empty_name_is_usage_error(self, name):
        with pytest.raises(UsageError, match="Name for container is not set"):
            Container(name).name

    def test_rename(self):
        container = Container("old").set_name("new")
        assert container.name == "new"


class TestFileMetadata:
    @pytest.fixture
    def local_file(self, tmp_path):
        path = tmp_path / "photo.png"
        path.write_bytes(b"\x89PNG data")
        return path

    def test_explicit_values_do_not_touch_filesystem(self, monkeypatch):
        def forbidden(*args, **kwargs):
            raise AssertionError("filesystem accessed")

        for name in ("file_exists", "file_readable", "get_file_size", "get_file_md5", "get_file_mime_type"):
            monkeypatch.setattr(fs, name, forbidden)

        file = (
            File("remote.bin")
            .set_local_name("/does/not/exist")
            .set_size(42)
            .set_md5("abc")
            .set_content_type("application/x-test")
        )

        assert file.size == 42
        assert file.md5 == "abc"
        assert file.content_type == "application/x-test"
        assert file.headers["Content-Length"] == "42"

    def test_getters_do_not_derive(self):
        file = File("remote.bin").set_local_name("/does/not/exist")

        assert file.size is None
        assert file.md5 is None
        assert file.content_type is None

    def test_values_derived_from_local_file(self, local_file):
        file = File("photo.png").set_local_name(str(local_file))

        file.set_size().set_md5().set_content_type()

        assert file.size == len(b"\x89PNG data")
        assert file.md5 == hashlib.md5(b"\x89PNG data").hexdigest()
        assert file.content_type == "image/png"

    def test_unknown_extension_falls_back_to_octet_stream(self, tmp_path):
        path = tmp_path / "blob.unknownext"
        path.write_bytes(b"x")

        file = File("blob").set_local_name(str(path)).set_content_type()

        assert file.content_type == "application/octet-stream"

    @pytest.mark.parametrize("setter", ["set_size", "set_md5", "set_content_type"])
    def test_missing_file_raises_not_exists(self, setter, tmp_path):
        file = File("x").set_local_name(str(tmp_path / "missing.txt"))

        with pytest.raises(FileNotExistsError) as exc_info:
            getattr(file, setter)()

        assert exc_info.value.local_name == str(tmp_path / "missing.txt")

    def test_unset_local_name_raises_not_exists(self):
        with pytest.raises(FileNotExistsError):
            File("x").set_size()

    def test_unreadable_file_raises_unreadable(self, local_file, monkeypatch):
        monkeypatch.setattr(fs, "file_readable", lambda path: False)
        file = File("photo.png").set_local_name(str(local_file))

        for method in ("set_size", "set_md5", "set_content_type", "open_local"):
            with pytest.raises(FileUnreadableError):
                getattr(file, method)()

        assert file.headers == {}

    def test_resolve_metadata_keeps_explicit_values(self, local_file):
        file = File("photo.png").set_local_name(str(local_file)).set_content_type("image/x-custom")

        file.resolve_metadata()

        assert file.content_type == "image/x-custom"
        assert file.size == len(b"\x89PNG data")
        assert file.md5 is not None

    def test_open_local_returns_readable_handle(self, local_file):
        file = File("photo.png").set_local_name(str(local_file))

        with file.open_local() as handle:
            assert handle.read() == b"\x89PNG data"

    def test_unknown_headers_pass_through(self):
        file = File("x").set_headers({"X-Object-Meta-Owner": "me"}).set_content_disposition("inline")

        assert file.headers == {"X-Object-Meta-Owner": "me", "Content-Disposition": "inline"}
        assert file.content_disposition == "inline"

    def test_to_json(self):
        file = File("remote.txt").set_local_name("/tmp/local.txt").set_size(3)

        assert json.loads(file.to_json()) == {
            "serverName": "remote.txt",
            "localName": "/tmp/local.txt",
            "headers": {"Content-Length": "3"},
        }


class TestSymLink:
    def test_defaults(self):
        link = SymLink("link")

        assert link.headers == {"Content-Length": "0", "Content-Type": SymLink.TYPE_SYMLINK}

    def test_unknown_type_is_usage_error(self):
        with pytest.raises(UsageError):
            SymLink("link", link_type="text/plain")

    def test_location_and_delete_at(self):
        link = SymLink("link", SymLink.TYPE_ONETIME).set_location(Container("photos"), File("a.jpg"))
        link.set_delete_at(1700000000.5)

        assert link.location == "/photos/a.jpg"
        assert link.headers["X-Object-Meta-Delete-At"] == "1700000000"
        assert link.type == SymLink.TYPE_ONETIME

    def test_password_sets_link_key(self):
        link = SymLink("link", SymLink.TYPE_SYMLINK_SECURE).set_location(Container("photos"), File("a.jpg"))

        link.set_password("pw")

        expected = hashlib.md5(b"pw/photos/a.jpg").hexdigest()
        assert link.headers["X-Object-Meta-Link-Key"] == expected

    def test_password_requires_secure_type(self):
        link = SymLink("link").set_location(Container("photos"), File("a.jpg"))

        with pytest.raises(UsageError):
            link.set_password("pw")

    def test_password_requires_location(self):
        with pytest.raises(UsageError):
            SymLink("link", SymLink.TYPE_ONETIME_SECURE).set_password("pw")
