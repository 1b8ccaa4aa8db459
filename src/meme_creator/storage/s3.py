"""S3 blob store."""

from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import BlobNotFoundError, StoreError
from ..utils.logging import get_logger
from .base import BlobStore

logger = get_logger(__name__)

MISSING_CODES = {"NoSuchKey", "404", "NotFound"}


class S3BlobStore(BlobStore):
    """Blob store backed by S3 or any S3-compatible service."""

    def __init__(
        self,
        client: Optional[Any] = None,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            client: Preconfigured boto3 S3 client, created when omitted
            region_name: AWS region for a new client
            endpoint_url: Alternative endpoint for S3-compatible services
        """
        self.client = client or boto3.client(
            "s3", region_name=region_name, endpoint_url=endpoint_url
        )

    def write_object(self, bucket: str, key: str, data: bytes) -> None:
        try:
            self.client.put_object(Bucket=bucket, Key=key, Body=data)
        except (BotoCoreError, ClientError) as e:
            logger.error("s3_put_failed", bucket=bucket, key=key, error=str(e))
            raise StoreError(f"writing {bucket}/{key} failed", original_error=e) from e

    def read_object(self, bucket: str, key: str) -> bytes:
        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read()
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in MISSING_CODES:
                raise BlobNotFoundError(bucket, key) from e
            logger.error("s3_get_failed", bucket=bucket, key=key, error=str(e))
            raise StoreError(f"reading {bucket}/{key} failed", original_error=e) from e
        except BotoCoreError as e:
            logger.error("s3_get_failed", bucket=bucket, key=key, error=str(e))
            raise StoreError(f"reading {bucket}/{key} failed", original_error=e) from e

    def set_public_readable(self, bucket: str, key: str) -> None:
        try:
            self.client.put_object_acl(Bucket=bucket, Key=key, ACL="public-read")
        except (BotoCoreError, ClientError) as e:
            logger.error("s3_acl_failed", bucket=bucket, key=key, error=str(e))
            raise StoreError(f"publishing {bucket}/{key} failed", original_error=e) from e
