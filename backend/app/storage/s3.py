"""Amazon S3 object store (and S3-compatible services via ``endpoint_url``).

Objects are written with ``put_object``; public objects get the
``public-read`` canned ACL. Public URLs are built from ``public_base_url``
when configured (CDN, MinIO gateway, …) and otherwise follow the
virtual-hosted style::

    https://<bucket>.s3.<region>.amazonaws.com/<key>
"""
import logging
from typing import Optional
from urllib.parse import quote

from botocore.exceptions import BotoCoreError, ClientError

from .base import ObjectStore, StorageError, StoredObject

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"


class S3ObjectStore(ObjectStore):
    """Object store backed by an S3 bucket.

    Args:
        bucket:                Target bucket name.
        region_name:           AWS region.  Defaults to ``us-east-1``.
        key_prefix:            Prepended to every key (e.g. ``"photos/"``).
        endpoint_url:          Custom endpoint for S3-compatible services.
        public_base_url:       Base for public URLs.  ``None`` → bucket URL.
        aws_access_key_id:     AWS access key.  ``None`` → default credential chain.
        aws_secret_access_key: AWS secret access key.
        aws_session_token:     Optional temporary-credential session token.
    """

    def __init__(
        self,
        bucket: str,
        region_name: Optional[str] = None,
        key_prefix: str = "",
        endpoint_url: Optional[str] = None,
        public_base_url: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        aws_session_token: Optional[str] = None,
    ) -> None:
        self._bucket        = bucket
        self._region        = region_name or DEFAULT_REGION
        self._key_prefix    = key_prefix
        self._endpoint_url  = endpoint_url
        self._public_base   = public_base_url.rstrip("/") if public_base_url else None
        self._access_key    = aws_access_key_id
        self._secret_key    = aws_secret_access_key
        self._session_token = aws_session_token
        self._client: Optional[object] = None

    @property
    def name(self) -> str:
        return "s3"

    @property
    def bucket(self) -> str:
        return self._bucket

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _get_client(self) -> object:
        """Return a cached boto3 s3 client."""
        if self._client is None:
            import boto3  # lazy import, not required when mocked in tests

            kwargs: dict = {"region_name": self._region}
            if self._access_key and self._secret_key:
                kwargs["aws_access_key_id"]     = self._access_key
                kwargs["aws_secret_access_key"] = self._secret_key
            if self._session_token:
                kwargs["aws_session_token"] = self._session_token
            if self._endpoint_url:
                kwargs["endpoint_url"] = self._endpoint_url

            self._client = boto3.client("s3", **kwargs)

        return self._client

    def _object_key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    def public_url(self, object_key: str) -> str:
        """Public URL for an object key (prefix already applied)."""
        quoted = quote(object_key)
        if self._public_base:
            return f"{self._public_base}/{quoted}"
        if self._endpoint_url:
            return f"{self._endpoint_url.rstrip('/')}/{self._bucket}/{quoted}"
        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{quoted}"

    # -----------------------------------------------------------------------
    # ObjectStore implementation
    # -----------------------------------------------------------------------

    def store(
        self,
        key: str,
        content: bytes,
        content_type: str,
        public_read: bool = True,
    ) -> StoredObject:
        client = self._get_client()
        object_key = self._object_key(key)

        params = {
            "Bucket":      self._bucket,
            "Key":         object_key,
            "Body":        content,
            "ContentType": content_type,
        }
        if public_read:
            params["ACL"] = "public-read"

        logger.debug(
            "[storage/s3] put_object bucket=%s key=%s bytes=%d",
            self._bucket, object_key, len(content),
        )
        try:
            client.put_object(**params)
        except (ClientError, BotoCoreError) as exc:
            logger.error(
                "[storage/s3] put_object failed bucket=%s key=%s: %s",
                self._bucket, object_key, exc,
            )
            raise StorageError(f"Failed to store {object_key}: {exc}", key=object_key) from exc

        return StoredObject(key=object_key, url=self.public_url(object_key))
