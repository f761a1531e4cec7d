"""Builds the configured ObjectStore.

Usage:
    from app.config import get_config
    from app.storage.factory import build_object_store

    store = build_object_store(get_config())
"""
import logging

from app.config import AppConfig

from .base import ObjectStore
from .local import LocalObjectStore
from .memory import InMemoryObjectStore
from .s3 import S3ObjectStore

logger = logging.getLogger(__name__)


def build_object_store(config: AppConfig) -> ObjectStore:
    """Create the object store selected by ``storage.backend``.

    Raises:
        ValueError: If the backend name is not recognised.
    """
    storage = config.storage
    backend = storage.backend

    if backend == "s3":
        aws = config.secrets.aws
        store: ObjectStore = S3ObjectStore(
            bucket=storage.bucket,
            region_name=storage.region,
            key_prefix=storage.key_prefix,
            endpoint_url=storage.endpoint_url,
            public_base_url=storage.public_base_url,
            aws_access_key_id=aws.access_key_id or None,
            aws_secret_access_key=aws.secret_access_key or None,
            aws_session_token=aws.session_token or None,
        )
    elif backend == "local":
        store = LocalObjectStore(
            root_dir=storage.local_dir,
            public_base_url=storage.public_base_url or f"http://localhost:{config.server.port}/files",
        )
    elif backend == "memory":
        store = InMemoryObjectStore(bucket=storage.bucket)
    else:
        raise ValueError(f"Unknown storage backend: {backend!r}")

    logger.info("Object store ready: backend=%s bucket=%s", store.name, storage.bucket)
    return store
