"""
Unit tests for job descriptor parsing.
"""

import pytest

from domain.descriptor import parse_address, parse_job, parse_sources
from domain.exceptions import InvalidJobPayload, MalformedAddress, NameCollision
from domain.models import DestinationRef, ObjectRef, SourceRef


def make_data(**overrides):
    data = {
        'id': 'job-42',
        'credentials': {
            'region': 'eu-west-1',
            'accessKeyId': 'AKIDEXAMPLE',
            'secretAccessKey': 'secret',
        },
        'files': ['bucket-a/folder/file1.txt', 'bucket-a/folder/file2.txt'],
        'destination': 'bucket-b/out/archive.zip',
    }
    data.update(overrides)
    return data


class TestParseAddress:
    """Test splitting of "bucket/key" strings."""

    @pytest.mark.parametrize('address', [
        'bucket/file.txt',
        'bucket-a/folder/file1.txt',
        'my.bucket/a/b/c/d/deep name.csv',
        'bucket/folder/',
    ])
    def test_rejoining_bucket_and_key_reconstructs_address(self, address):
        """Test bucket is the first segment and bucket/key is the original string."""
        ref = parse_address(address)

        assert ref.bucket == address.split('/')[0]
        assert f"{ref.bucket}/{ref.key}" == address
        assert ref.full_key == address

    def test_name_is_last_segment(self):
        """Test display name is the last path segment."""
        ref = parse_address('bucket-a/folder/sub/file1.txt')

        assert ref.bucket == 'bucket-a'
        assert ref.key == 'folder/sub/file1.txt'
        assert ref.name == 'file1.txt'

    def test_builds_requested_type(self):
        """Test the reference subclass can be chosen."""
        assert isinstance(parse_address('b/k', SourceRef), SourceRef)
        assert isinstance(parse_address('b/k', DestinationRef), DestinationRef)
        assert type(parse_address('b/k')) is ObjectRef

    def test_no_separator_fails(self):
        """Test address without '/' is rejected."""
        with pytest.raises(MalformedAddress):
            parse_address('just-a-bucket')

    @pytest.mark.parametrize('address', ['bucket/', '/key.txt', '', None])
    def test_empty_parts_fail(self, address):
        """Test empty bucket or key is rejected."""
        with pytest.raises(MalformedAddress):
            parse_address(address)


class TestParseSources:
    """Test source list parsing."""

    def test_parses_all_sources(self):
        sources = parse_sources(['a/x/1.txt', 'b/y/2.txt'])

        assert [s.name for s in sources] == ['1.txt', '2.txt']
        assert all(isinstance(s, SourceRef) for s in sources)

    def test_same_display_name_is_rejected(self):
        """Test two sources landing on the same scratch file are rejected."""
        with pytest.raises(NameCollision, match="report.csv"):
            parse_sources(['bucket/2023/report.csv', 'bucket/2024/report.csv'])


class TestParseJob:
    """Test full job payload parsing."""

    def test_parse_valid_job(self):
        job = parse_job(make_data())

        assert job.job_id == 'job-42'
        assert len(job.sources) == 2
        assert job.destination.bucket == 'bucket-b'
        assert job.destination.key == 'out/archive.zip'
        assert job.destination.name == 'archive.zip'
        assert job.credentials.region == 'eu-west-1'
        assert job.credentials.access_key_id == 'AKIDEXAMPLE'

    def test_defaults(self):
        """Test ACL, storage class and notifications defaults."""
        job = parse_job(make_data())

        assert job.acl == 'private'
        assert job.storage_class == 'STANDARD'
        assert job.notifications == ()

    def test_explicit_acl_and_storage_class(self):
        job = parse_job(make_data(acl='public-read', storageClass='REDUCED_REDUNDANCY'))

        assert job.acl == 'public-read'
        assert job.storage_class == 'REDUCED_REDUNDANCY'

    def test_missing_id_is_none(self):
        data = make_data()
        del data['id']

        assert parse_job(data).job_id is None

    def test_notifications_keep_params(self):
        job = parse_job(make_data(notifications=[
            {'type': 'HTTP', 'method': 'post', 'url': 'https://example.com/{:id}', 'strictSSL': False},
        ]))

        notification = job.notifications[0]
        assert notification.type == 'HTTP'
        assert notification.type_tag == 'http'
        assert notification.get('url') == 'https://example.com/{:id}'
        assert notification.get('strictSSL') is False
        assert 'type' not in notification.params

    @pytest.mark.parametrize('field', ['credentials', 'files', 'destination'])
    def test_missing_required_field(self, field):
        data = make_data()
        del data[field]

        with pytest.raises(InvalidJobPayload, match=field):
            parse_job(data)

    def test_empty_file_list(self):
        with pytest.raises(InvalidJobPayload):
            parse_job(make_data(files=[]))

    def test_notification_without_type_is_kept_untyped(self):
        """Test a typeless notification does not reject the job."""
        job = parse_job(make_data(notifications=[{'url': 'https://example.com'}, 'junk']))

        assert [n.type_tag for n in job.notifications] == ['', '']
        assert job.notifications[0].get('url') == 'https://example.com'

    def test_source_named_like_archive(self):
        """Test a source cannot share the archive file name in scratch."""
        data = make_data(
            files=['bucket-a/in/archive.zip', 'bucket-a/in/other.txt'],
            destination='bucket-b/out/archive.zip',
        )

        with pytest.raises(NameCollision, match="archive.zip"):
            parse_job(data)

    @pytest.mark.parametrize('missing', ['region', 'accessKeyId', 'secretAccessKey'])
    def test_incomplete_credentials(self, missing):
        data = make_data()
        del data['credentials'][missing]

        with pytest.raises(InvalidJobPayload, match="credentials"):
            parse_job(data)

    def test_malformed_destination(self):
        with pytest.raises(MalformedAddress):
            parse_job(make_data(destination='archive.zip'))

    def test_data_must_be_mapping(self):
        with pytest.raises(InvalidJobPayload):
            parse_job(None)
