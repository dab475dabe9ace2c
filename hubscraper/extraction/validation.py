"""
Record validation

Checks an assembled record against the output schema. Validation never
rejects a record; callers log the errors as warnings and keep the record.
"""

from datetime import datetime
from typing import Optional

from hubscraper.core.base import ExtractedRecord, ValidationReport
from hubscraper.extraction.links import is_absolute_url


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, accepting a trailing 'Z'"""
    if not isinstance(value, str) or not value:
        return None
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def validate_record(record: ExtractedRecord) -> ValidationReport:
    errors = []

    if not record.id or not isinstance(record.id, str):
        errors.append('Missing or invalid id')

    if not record.title or not isinstance(record.title, str):
        errors.append('Missing or invalid title')

    if record.source is None or not is_absolute_url(record.source.url):
        errors.append('Invalid source URL format')

    for index, link in enumerate(record.documentation_links):
        if not is_absolute_url(link.url):
            errors.append(f'Invalid documentation link URL at index {index}')

    if parse_timestamp(record.scraped_at) is None:
        errors.append('Missing or invalid scraped_at timestamp')

    return ValidationReport(is_valid=not errors, errors=errors)
