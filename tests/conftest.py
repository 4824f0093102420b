import sys
import os
import threading
from pathlib import Path

import pytest

# Ensure src/ is on sys.path so the layer packages are importable
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from domain.models import JobDescriptor, NotificationSpec, DestinationRef, SourceRef  # noqa: E402
from domain.storage import ObjectInfo, StoreCredentials  # noqa: E402


class FakeObjectStore:
    """In-memory IObjectStore used across the unit and integration tests."""

    def __init__(self, objects=None, fail_on=None, endpoint='https://s3.test.local', chunk_size=4):
        self.objects = dict(objects or {})
        self.fail_on = set(fail_on or ())
        self.endpoint = endpoint
        self.chunk_size = chunk_size
        self.heads = []
        self.downloads = []
        self.uploads = []
        self._lock = threading.Lock()

    def head(self, bucket, key):
        with self._lock:
            self.heads.append((bucket, key))
        if (bucket, key) not in self.objects:
            raise KeyError(f"NoSuchKey: {bucket}/{key}")
        return ObjectInfo(bucket=bucket, key=key, size=len(self.objects[(bucket, key)]))

    def download(self, bucket, key, local_path, on_bytes=None):
        with self._lock:
            self.downloads.append((bucket, key))
        data = self.objects[(bucket, key)]
        written = 0
        with open(local_path, 'wb') as f:
            for start in range(0, len(data), self.chunk_size):
                if (bucket, key) in self.fail_on and written > 0:
                    raise IOError("Connection reset by peer")
                chunk = data[start:start + self.chunk_size]
                f.write(chunk)
                written += len(chunk)
                if on_bytes:
                    on_bytes(len(chunk))
        return written

    def upload(self, local_path, bucket, key, extra_args=None, on_bytes=None):
        data = Path(local_path).read_bytes()
        with self._lock:
            self.uploads.append({
                'bucket': bucket,
                'key': key,
                'data': data,
                'extra_args': dict(extra_args or {}),
            })
        if on_bytes:
            on_bytes(len(data))
        return f"{self.endpoint}/{bucket}/{key}"


@pytest.fixture
def credentials():
    return StoreCredentials(region='eu-west-1', access_key_id='AKIDEXAMPLE', secret_access_key='secret')


@pytest.fixture
def store_factory():
    """Class used to build custom in-memory stores."""
    return FakeObjectStore


@pytest.fixture
def fake_store():
    return FakeObjectStore(objects={
        ('bucket-a', 'folder/file1.txt'): b'hello world, this is file one',
        ('bucket-a', 'folder/file2.txt'): b'and this is the second file',
    })


@pytest.fixture
def make_job(credentials):
    """Build a JobDescriptor without going through the parser."""

    def _make(files=('bucket-a/folder/file1.txt', 'bucket-a/folder/file2.txt'),
              destination='bucket-b/out/archive.zip', notifications=(), job_id='job-1', **kwargs):
        sources = []
        for address in files:
            bucket, key = address.split('/', 1)
            sources.append(SourceRef(bucket=bucket, key=key, name=key.rsplit('/', 1)[-1]))
        bucket, key = destination.split('/', 1)
        return JobDescriptor(
            sources=tuple(sources),
            destination=DestinationRef(bucket=bucket, key=key, name=key.rsplit('/', 1)[-1]),
            credentials=credentials,
            notifications=tuple(
                n if isinstance(n, NotificationSpec) else NotificationSpec(type=n['type'], params={
                    k: v for k, v in n.items() if k != 'type'
                })
                for n in notifications
            ),
            job_id=job_id,
            **kwargs
        )

    return _make
