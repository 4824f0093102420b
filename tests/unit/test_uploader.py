"""
Unit tests for the archive uploader.
"""

from unittest.mock import MagicMock

import pytest

from domain.descriptor import parse_address
from domain.exceptions import UploadFailed
from domain.models import DestinationRef
from infrastructure.io.uploader import ArchiveUploader, UploadProgress


@pytest.fixture
def destination():
    return parse_address('bucket-b/out/archive.zip', DestinationRef)


@pytest.fixture
def archive(tmp_path):
    path = tmp_path / 'archive.zip'
    path.write_bytes(b'PK' + b'\x00' * 98)
    return path


class TestArchiveUploader:

    def test_upload_with_acl_and_storage_class(self, fake_store, destination, archive):
        result = ArchiveUploader(fake_store).upload(
            archive, destination, acl='public-read', storage_class='STANDARD_IA'
        )

        upload = fake_store.uploads[0]
        assert upload['bucket'] == 'bucket-b'
        assert upload['key'] == 'out/archive.zip'
        assert upload['extra_args'] == {'ACL': 'public-read', 'StorageClass': 'STANDARD_IA'}
        assert result.success is True
        assert result.url == 'https://s3.test.local/bucket-b/out/archive.zip'
        assert result.size_bytes == 100

    def test_defaults(self, fake_store, destination, archive):
        ArchiveUploader(fake_store).upload(archive, destination)

        assert fake_store.uploads[0]['extra_args'] == {'ACL': 'private', 'StorageClass': 'STANDARD'}

    def test_store_error(self, destination, archive):
        store = MagicMock()
        store.upload.side_effect = RuntimeError("AccessDenied")

        with pytest.raises(UploadFailed, match="AccessDenied") as exc_info:
            ArchiveUploader(store).upload(archive, destination)

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_missing_file(self, fake_store, destination, tmp_path):
        with pytest.raises(UploadFailed):
            ArchiveUploader(fake_store).upload(tmp_path / 'missing.zip', destination)
        assert fake_store.uploads == []


class TestUploadProgress:

    def test_accumulates(self):
        progress = UploadProgress(total_bytes=100)
        progress(30)
        progress(70)

        assert progress.seen == 100

    def test_unknown_total(self):
        progress = UploadProgress(total_bytes=0)
        progress(5)

        assert progress.seen == 5
