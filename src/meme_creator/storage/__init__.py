"""Blob storage backends."""

from .base import BlobStore, output_key, public_url
from .local import LocalBlobStore
from .s3 import S3BlobStore

__all__ = ["BlobStore", "LocalBlobStore", "S3BlobStore", "output_key", "public_url"]
