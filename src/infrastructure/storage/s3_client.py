"""
S3 object store client implementation.

Infrastructure layer for S3-compatible storage using boto3.
"""

from pathlib import Path
from typing import Optional, Dict
from urllib.parse import quote
import logging

import boto3
from boto3.s3.transfer import TransferConfig
from botocore.client import Config

from domain.storage import ObjectInfo, StoreCredentials, ProgressCallback


class S3ObjectStore:
    """
    Object store client bound to one job's credentials.
    Implements IObjectStore protocol.

    Low-level boto3 clients are thread-safe, so one instance is shared by
    every download worker of a job. Errors from botocore propagate unchanged;
    the calling stage decides which domain error they become.
    """

    def __init__(
        self,
        credentials: StoreCredentials,
        connect_timeout: float = 60.0,
        read_timeout: float = 60.0,
        chunk_size: int = 1024 * 1024,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize S3 client.

        Args:
            credentials: Per-job credentials (region, key id, secret, endpoint)
            connect_timeout: Socket connect timeout in seconds
            read_timeout: Socket read timeout in seconds
            chunk_size: Streaming chunk size for downloads
            logger: Logger instance
        """
        if not credentials.validate():
            raise ValueError("S3 credentials not set (region, accessKeyId, secretAccessKey)")

        self.credentials = credentials
        self.chunk_size = chunk_size
        self.logger = logger or logging.getLogger(__name__)

        config = Config(
            signature_version='s3v4',
            s3={'addressing_style': 'path'},
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
        )

        kwargs = {
            'region_name': credentials.region,
            'aws_access_key_id': credentials.access_key_id,
            'aws_secret_access_key': credentials.secret_access_key,
            'config': config,
        }
        if credentials.endpoint:
            kwargs['endpoint_url'] = credentials.endpoint

        self.s3 = boto3.client('s3', **kwargs)

        # Multipart uploads are aborted by the transfer manager on failure
        self._transfer_config = TransferConfig(
            multipart_threshold=50 * 1024 * 1024,  # 50MB
            multipart_chunksize=50 * 1024 * 1024,   # 50MB
            max_concurrency=4,
            use_threads=True
        )

    @property
    def endpoint_url(self) -> str:
        return self.s3.meta.endpoint_url.rstrip('/')

    def location_for(self, bucket: str, key: str) -> str:
        """Canonical path-style URL of an object."""
        return f"{self.endpoint_url}/{bucket}/{quote(key)}"

    def head(self, bucket: str, key: str) -> ObjectInfo:
        """Fetch object metadata without the body."""
        self.logger.debug(f"HEAD s3://{bucket}/{key}")
        response = self.s3.head_object(Bucket=bucket, Key=key)

        return ObjectInfo(
            bucket=bucket,
            key=key,
            size=int(response.get('ContentLength', 0)),
            etag=response.get('ETag', '').strip('"') or None
        )

    def download(
        self,
        bucket: str,
        key: str,
        local_path: Path,
        on_bytes: Optional[ProgressCallback] = None
    ) -> int:
        """Stream an object body into a local file, chunk by chunk."""
        self.logger.info(f"Downloading s3://{bucket}/{key} -> {local_path}")

        response = self.s3.get_object(Bucket=bucket, Key=key)
        body = response['Body']
        received = 0

        try:
            with open(local_path, 'wb') as f:
                for chunk in body.iter_chunks(chunk_size=self.chunk_size):
                    if not chunk:
                        continue
                    f.write(chunk)
                    received += len(chunk)
                    if on_bytes:
                        on_bytes(len(chunk))
        finally:
            body.close()

        self.logger.debug(f"Received {received} bytes for {bucket}/{key}")
        return received

    def upload(
        self,
        local_path: Path,
        bucket: str,
        key: str,
        extra_args: Optional[Dict[str, str]] = None,
        on_bytes: Optional[ProgressCallback] = None
    ) -> str:
        """Upload a file (multipart above the threshold) and return its location."""
        if not local_path.exists():
            raise FileNotFoundError(f"File not found: {local_path}")

        kwargs = {'Config': self._transfer_config}
        if extra_args:
            kwargs['ExtraArgs'] = dict(extra_args)
        if on_bytes:
            kwargs['Callback'] = on_bytes

        self.s3.upload_file(str(local_path), bucket, key, **kwargs)
        return self.location_for(bucket, key)
