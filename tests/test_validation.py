"""
Tests for record validation
"""

from dataclasses import replace

import pytest

from hubscraper.core.base import DocumentationLink, ExtractedRecord, RecordSource
from hubscraper.extraction.validation import parse_timestamp, validate_record


@pytest.fixture
def valid_record():
    """Minimal valid record"""
    return ExtractedRecord(
        id="idle-ec2",
        title="Idle EC2 Instances",
        source=RecordSource(url="https://hub.pointfive.co/inefficiencies/idle-ec2"),
        scraped_at="2024-01-02T03:04:05.678Z",
        documentation_links=(DocumentationLink(url="https://aws.amazon.com/ec2/", title="EC2"),)
    )


class TestValidateRecord:
    """Test cases for validate_record"""

    def test_valid_record(self, valid_record):
        report = validate_record(valid_record)

        assert report.is_valid
        assert report.errors == []

    def test_missing_title(self, valid_record):
        report = validate_record(replace(valid_record, title=None))

        assert not report.is_valid
        assert report.errors == ['Missing or invalid title']

    def test_missing_id(self, valid_record):
        report = validate_record(replace(valid_record, id=""))

        assert 'Missing or invalid id' in report.errors

    def test_relative_source_url(self, valid_record):
        report = validate_record(replace(valid_record, source=RecordSource(url="/inefficiencies/x")))

        assert report.errors == ['Invalid source URL format']

    def test_relative_documentation_link(self, valid_record):
        links = valid_record.documentation_links + (DocumentationLink(url="/docs"),)

        report = validate_record(replace(valid_record, documentation_links=links))

        assert report.errors == ['Invalid documentation link URL at index 1']

    def test_bad_timestamp(self, valid_record):
        report = validate_record(replace(valid_record, scraped_at="yesterday"))

        assert report.errors == ['Missing or invalid scraped_at timestamp']

    def test_multiple_errors_are_all_reported(self, valid_record):
        report = validate_record(replace(valid_record, title=None, scraped_at=""))

        assert len(report.errors) == 2


class TestParseTimestamp:
    """Test cases for timestamp parsing"""

    def test_zulu_suffix(self):
        parsed = parse_timestamp("2024-01-02T03:04:05.678Z")

        assert parsed.year == 2024
        assert parsed.utcoffset().total_seconds() == 0

    @pytest.mark.parametrize("value", [None, "", "not a date", 12])
    def test_invalid(self, value):
        assert parse_timestamp(value) is None
