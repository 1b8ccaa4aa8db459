"""Base blob store interface."""
from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Durable object storage for template and meme images."""

    @abstractmethod
    def write_object(self, bucket: str, key: str, data: bytes) -> None:
        """Write an object, replacing any existing object under ``key``.

        Args:
            bucket: Bucket name
            key: Object key
            data: Object contents

        Raises:
            StoreError: If the write fails
        """

    @abstractmethod
    def read_object(self, bucket: str, key: str) -> bytes:
        """Read an object.

        Raises:
            BlobNotFoundError: If the object does not exist
            StoreError: If the read fails
        """

    @abstractmethod
    def set_public_readable(self, bucket: str, key: str) -> None:
        """Grant anonymous read access to an object.

        Raises:
            StoreError: If the ACL change fails
        """


def public_url(prefix: str, key: str) -> str:
    """Public URL of an object published under ``prefix``."""
    return f"{prefix.rstrip('/')}/{key}"


def output_key(meme_id: str) -> str:
    """Canonical key of a meme's rendered image."""
    return f"{meme_id}.png"
