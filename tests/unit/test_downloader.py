"""
Unit tests for bounded parallel downloads.
"""

import threading
import time

import pytest

from domain.descriptor import parse_sources
from domain.exceptions import DownloadFailed
from domain.models import ByteCounter
from infrastructure.io.downloader import ObjectDownloader


class SlowStore:
    """Store that tracks how many downloads run at the same time."""

    def __init__(self, delay=0.02):
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def download(self, bucket, key, local_path, on_bytes=None):
        with self._lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            time.sleep(self.delay)
            local_path.write_bytes(b'12345')
            if on_bytes:
                on_bytes(5)
            return 5
        finally:
            with self._lock:
                self.in_flight -= 1


class TestObjectDownloader:
    """Test ObjectDownloader."""

    def test_downloads_every_source(self, fake_store, tmp_path):
        sources = parse_sources(['bucket-a/folder/file1.txt', 'bucket-a/folder/file2.txt'])
        counter = ByteCounter()

        total = ObjectDownloader(fake_store, concurrency=2).download_all(sources, tmp_path, counter)

        expected = sum(len(v) for v in fake_store.objects.values())
        assert total == expected
        assert counter.value == expected
        assert (tmp_path / 'file1.txt').read_bytes() == b'hello world, this is file one'
        assert (tmp_path / 'file2.txt').read_bytes() == b'and this is the second file'

    def test_in_flight_never_exceeds_concurrency(self, tmp_path):
        store = SlowStore()
        sources = parse_sources([f'b/dir/f{i}.bin' for i in range(12)])

        total = ObjectDownloader(store, concurrency=3).download_all(sources, tmp_path, ByteCounter())

        assert store.max_in_flight <= 3
        assert total == 12 * 5

    def test_sequential_mode(self, tmp_path):
        store = SlowStore(delay=0.005)
        sources = parse_sources([f'b/f{i}.bin' for i in range(4)])

        ObjectDownloader(store, concurrency=1).download_all(sources, tmp_path, ByteCounter())

        assert store.max_in_flight == 1

    def test_first_failure_is_raised(self, store_factory, tmp_path):
        """Test the failing source's error is the cause of DownloadFailed."""
        store = store_factory(
            objects={
                ('b', 'one.txt'): b'first file',
                ('b', 'two.txt'): b'second file',
                ('b', 'three.txt'): b'third file',
            },
            fail_on={('b', 'two.txt')},
        )
        sources = parse_sources(['b/one.txt', 'b/two.txt', 'b/three.txt'])

        with pytest.raises(DownloadFailed, match="b/two.txt") as exc_info:
            ObjectDownloader(store, concurrency=1).download_all(sources, tmp_path, ByteCounter())

        assert isinstance(exc_info.value.__cause__, IOError)
        assert "Connection reset by peer" in str(exc_info.value.__cause__)

    def test_invalid_concurrency(self, fake_store):
        with pytest.raises(ValueError):
            ObjectDownloader(fake_store, concurrency=0)
