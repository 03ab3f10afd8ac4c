"""Remote object storage: the ``RemoteStore`` contract and its S3 backend."""

from .base import RemoteStore
from .s3 import S3Store, create_s3_client

__all__ = ["RemoteStore", "S3Store", "create_s3_client"]
