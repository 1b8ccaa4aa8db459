"""Filesystem blob store."""

import os
import stat
import tempfile
from pathlib import Path, PurePosixPath
from typing import Union

from ..exceptions import BlobNotFoundError, StoreError
from .base import BlobStore

PUBLIC_MODE = stat.S_IRUSR | stat.S_IWUSR | stat.S_IRGRP | stat.S_IROTH
PRIVATE_MODE = stat.S_IRUSR | stat.S_IWUSR


class LocalBlobStore(BlobStore):
    """Stores each bucket as a directory under ``root``.

    Objects are written to a temporary file and renamed into place, so readers
    never observe a half-written object. Public objects are world-readable.
    """

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    def _path(self, bucket: str, key: str) -> Path:
        parts = PurePosixPath(key).parts
        if not parts or any(part in ("..", "/") for part in parts):
            raise StoreError(f"invalid object key {key!r}")
        return self.root / bucket / Path(*parts)

    def write_object(self, bucket: str, key: str, data: bytes) -> None:
        path = self._path(bucket, key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=".upload-")
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.chmod(tmp, PRIVATE_MODE)
            os.replace(tmp, path)
        except OSError as e:
            raise StoreError(f"writing {bucket}/{key} failed", original_error=e) from e

    def read_object(self, bucket: str, key: str) -> bytes:
        path = self._path(bucket, key)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise BlobNotFoundError(bucket, key) from e
        except OSError as e:
            raise StoreError(f"reading {bucket}/{key} failed", original_error=e) from e

    def set_public_readable(self, bucket: str, key: str) -> None:
        path = self._path(bucket, key)
        try:
            os.chmod(path, PUBLIC_MODE)
        except FileNotFoundError as e:
            raise BlobNotFoundError(bucket, key) from e
        except OSError as e:
            raise StoreError(f"publishing {bucket}/{key} failed", original_error=e) from e

    def is_public(self, bucket: str, key: str) -> bool:
        """Whether anonymous readers may fetch the object."""
        return bool(self._path(bucket, key).stat().st_mode & stat.S_IROTH)
