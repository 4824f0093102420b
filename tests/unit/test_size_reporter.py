"""
Unit tests for archive size reporting.
"""

import logging

import pytest

from domain.exceptions import ArchiveStatUnavailable
from infrastructure.io.size_reporter import SizeReporter, compression_ratio


class TestCompressionRatio:

    def test_sixty_percent(self):
        assert compression_ratio(400, 1000) == "60.00"

    def test_two_decimals(self):
        assert compression_ratio(1, 3) == "66.67"

    def test_archive_larger_than_sources(self):
        assert compression_ratio(150, 100) == "-50.00"

    def test_no_source_bytes(self):
        assert compression_ratio(22, 0) is None


class TestSizeReporter:

    def test_reports_size_and_logs_ratio(self, tmp_path, caplog):
        archive = tmp_path / 'archive.zip'
        archive.write_bytes(b'x' * 400)

        with caplog.at_level(logging.INFO):
            size = SizeReporter().report(archive, 1000)

        assert size == 400
        assert "compressed by 60.00%" in caplog.text

    def test_zero_source_bytes(self, tmp_path):
        archive = tmp_path / 'archive.zip'
        archive.write_bytes(b'x' * 22)

        assert SizeReporter().report(archive, 0) == 22

    def test_missing_archive(self, tmp_path):
        with pytest.raises(ArchiveStatUnavailable):
            SizeReporter().report(tmp_path / 'missing.zip', 1000)
