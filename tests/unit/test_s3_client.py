"""
Unit tests for the S3 object store client.
"""

from unittest.mock import MagicMock, patch

import pytest

from domain.storage import StoreCredentials
from infrastructure.storage.s3_client import S3ObjectStore


@pytest.fixture
def mock_boto3():
    with patch('infrastructure.storage.s3_client.boto3') as mock:
        mock_s3 = MagicMock()
        mock_s3.meta.endpoint_url = 'https://s3.eu-west-1.amazonaws.com'
        mock.client.return_value = mock_s3
        yield mock


class TestS3ObjectStoreInit:
    """Test client construction."""

    def test_builds_client_from_credentials(self, mock_boto3, credentials):
        S3ObjectStore(credentials, connect_timeout=5, read_timeout=7)

        args, kwargs = mock_boto3.client.call_args
        assert args == ('s3',)
        assert kwargs['region_name'] == 'eu-west-1'
        assert kwargs['aws_access_key_id'] == 'AKIDEXAMPLE'
        assert kwargs['aws_secret_access_key'] == 'secret'
        assert 'endpoint_url' not in kwargs
        assert kwargs['config'].connect_timeout == 5
        assert kwargs['config'].read_timeout == 7

    def test_custom_endpoint(self, mock_boto3):
        creds = StoreCredentials(
            region='us-east-1', access_key_id='k', secret_access_key='s',
            endpoint='http://localhost:9000'
        )
        S3ObjectStore(creds)

        assert mock_boto3.client.call_args[1]['endpoint_url'] == 'http://localhost:9000'

    def test_incomplete_credentials(self, mock_boto3):
        creds = StoreCredentials(region='us-east-1', access_key_id='', secret_access_key='s')

        with pytest.raises(ValueError):
            S3ObjectStore(creds)
        mock_boto3.client.assert_not_called()


class TestS3ObjectStoreOperations:
    """Test head, download and upload."""

    def test_location_is_path_style(self, mock_boto3, credentials):
        store = S3ObjectStore(credentials)

        assert store.location_for('bucket-b', 'out/my archive.zip') == \
            'https://s3.eu-west-1.amazonaws.com/bucket-b/out/my%20archive.zip'

    def test_head(self, mock_boto3, credentials):
        store = S3ObjectStore(credentials)
        store.s3.head_object.return_value = {'ContentLength': 1234, 'ETag': '"abc"'}

        info = store.head('bucket-a', 'folder/file1.txt')

        store.s3.head_object.assert_called_once_with(Bucket='bucket-a', Key='folder/file1.txt')
        assert info.size == 1234
        assert info.etag == 'abc'
        assert info.name == 'file1.txt'

    def test_head_error_propagates(self, mock_boto3, credentials):
        store = S3ObjectStore(credentials)
        store.s3.head_object.side_effect = RuntimeError("403 Forbidden")

        with pytest.raises(RuntimeError, match="403"):
            store.head('bucket-a', 'secret.txt')

    def test_download_streams_chunks(self, mock_boto3, credentials, tmp_path):
        store = S3ObjectStore(credentials)
        body = MagicMock()
        body.iter_chunks.return_value = [b'abc', b'', b'defg']
        store.s3.get_object.return_value = {'Body': body}
        seen = []

        target = tmp_path / 'file1.txt'
        received = store.download('bucket-a', 'folder/file1.txt', target, on_bytes=seen.append)

        assert received == 7
        assert seen == [3, 4]
        assert target.read_bytes() == b'abcdefg'
        body.close.assert_called_once()

    def test_download_closes_body_on_error(self, mock_boto3, credentials, tmp_path):
        store = S3ObjectStore(credentials)
        body = MagicMock()

        def chunks(chunk_size):
            yield b'abc'
            raise IOError("Connection reset by peer")

        body.iter_chunks.side_effect = chunks
        store.s3.get_object.return_value = {'Body': body}

        with pytest.raises(IOError):
            store.download('bucket-a', 'k', tmp_path / 'k')
        body.close.assert_called_once()

    def test_upload_passes_extra_args(self, mock_boto3, credentials, tmp_path):
        store = S3ObjectStore(credentials)
        archive = tmp_path / 'archive.zip'
        archive.write_bytes(b'PK')
        callback = MagicMock()

        location = store.upload(
            archive, 'bucket-b', 'out/archive.zip',
            extra_args={'ACL': 'private', 'StorageClass': 'STANDARD'},
            on_bytes=callback
        )

        args, kwargs = store.s3.upload_file.call_args
        assert args == (str(archive), 'bucket-b', 'out/archive.zip')
        assert kwargs['ExtraArgs'] == {'ACL': 'private', 'StorageClass': 'STANDARD'}
        assert kwargs['Callback'] is callback
        assert location == 'https://s3.eu-west-1.amazonaws.com/bucket-b/out/archive.zip'

    def test_upload_missing_file(self, mock_boto3, credentials, tmp_path):
        store = S3ObjectStore(credentials)

        with pytest.raises(FileNotFoundError):
            store.upload(tmp_path / 'missing.zip', 'bucket-b', 'k')
        store.s3.upload_file.assert_not_called()
