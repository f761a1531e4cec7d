"""Object storage back-ends for uploaded photos.

Provides the ``ObjectStore`` capability the upload handler persists files
through, with S3 (boto3), local filesystem and in-memory implementations.
"""
from .base import ObjectStore, StorageError, StoredObject
from .factory import build_object_store
from .local import LocalObjectStore
from .memory import InMemoryObjectStore
from .s3 import S3ObjectStore

__all__ = [
    "ObjectStore",
    "StorageError",
    "StoredObject",
    "build_object_store",
    "LocalObjectStore",
    "InMemoryObjectStore",
    "S3ObjectStore",
]
