"""
Storage backends for computed daylight schedules.

Schedules are stored as opaque byte blobs (parquet) under a flat filename
built by ``cache.schedule_key``, either in a local directory (CLI) or an S3
bucket (web backend).
"""
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Optional

import boto3
from botocore.exceptions import ClientError


class Storage(ABC):
    """Byte-blob store addressed by filename."""

    @abstractmethod
    def get(self, filename: str) -> Optional[bytes]:
        """
        Read a stored schedule.

        Args:
            filename: Schedule key, e.g. "69.6500_18.9600_AqrabBalad_2024.parquet"

        Returns:
            Stored bytes, or None when nothing is stored under filename

        Raises:
            OSError: The backend exists but cannot be read
        """

    @abstractmethod
    def put(self, filename: str, data: bytes) -> None:
        """
        Store a schedule, replacing any previous value under the same key.

        Args:
            filename: Schedule key
            data: Serialized schedule

        Raises:
            OSError: The backend cannot be written
        """


class LocalFileStorage(Storage):
    """
    Files in a single directory, created on first use.

    Writes go to a hidden temporary file in the same directory and are renamed
    into place, so a concurrent reader sees either the old schedule or the
    new one.

    Args:
        base_dir: Directory holding the schedules
    """

    def __init__(self, base_dir: str):
        self.base_dir = base_dir
        os.makedirs(base_dir, exist_ok=True)

    def _path(self, filename: str) -> str:
        return os.path.join(self.base_dir, filename)

    def get(self, filename: str) -> Optional[bytes]:
        try:
            with open(self._path(filename), 'rb') as f:
                return f.read()
        except FileNotFoundError:
            return None

    def put(self, filename: str, data: bytes) -> None:
        # Write beside the target and rename so readers never see a partial file
        fd, temp_path = tempfile.mkstemp(dir=self.base_dir, prefix='.tmp_')
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
            os.replace(temp_path, self._path(filename))
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise


class S3Storage(Storage):
    """
    Objects in an S3 bucket, optionally under a key prefix.

    A missing object reads as None; every other S3 error propagates so that
    permission or bucket problems are not mistaken for cache misses.

    Args:
        bucket_name: Bucket to read and write
        prefix: Key prefix ("folder"), with or without trailing slash
        **kwargs: Passed to boto3.client('s3', ...), e.g. region_name
    """

    def __init__(self, bucket_name: str, prefix: str = '', **kwargs):
        self.bucket_name = bucket_name
        self.prefix = prefix.rstrip('/') + '/' if prefix else ''
        self.s3_client = boto3.client('s3', **kwargs)

    def _key(self, filename: str) -> str:
        return f'{self.prefix}{filename}'

    def get(self, filename: str) -> Optional[bytes]:
        """
        Read an object.

        Returns:
            Object body, or None if the key does not exist

        Raises:
            botocore.exceptions.ClientError: Any S3 error other than NoSuchKey
        """
        try:
            response = self.s3_client.get_object(Bucket=self.bucket_name, Key=self._key(filename))
        except ClientError as e:
            if e.response['Error']['Code'] == 'NoSuchKey':
                return None
            raise
        return response['Body'].read()

    def put(self, filename: str, data: bytes) -> None:
        self.s3_client.put_object(Bucket=self.bucket_name, Key=self._key(filename), Body=data)
