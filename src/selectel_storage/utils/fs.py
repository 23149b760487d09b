"""
Local filesystem helpers used to derive upload metadata.
"""

import hashlib
import mimetypes
import os

DEFAULT_MIME_TYPE = "application/octet-stream"
CHUNK_SIZE = 1024 * 1024


def file_exists(path) -> bool:
    return bool(path) and os.path.isfile(path)


def file_readable(path) -> bool:
    return bool(path) and os.access(path, os.R_OK)


def get_file_size(path: str) -> int:
    return os.path.getsize(path)


def get_file_md5(path: str) -> str:
    """Hex MD5 digest of the file contents, read in chunks."""
    digest = hashlib.md5()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def get_file_mime_type(path: str) -> str:
    guess, _ = mimetypes.guess_type(path)
    return guess or DEFAULT_MIME_TYPE
