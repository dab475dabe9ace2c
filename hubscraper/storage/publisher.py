"""
Record Publisher

Writes a batch to blob storage: one summary object first, then one
object per record. A failed record upload is counted and logged; the
remaining records are still published.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from hubscraper.core.base import (
    BatchResult,
    BlobStorageInterface,
    ExtractedRecord,
    StorageError,
    UploadReceipt,
)
from hubscraper.core.config import StorageConfig
from hubscraper.storage.keys import record_key, summary_key, timestamp_slug


@dataclass
class PublishReport:
    """Outcome of publishing one batch"""
    summary: UploadReceipt
    records: List[UploadReceipt] = field(default_factory=list)
    failed: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed

    def to_dict(self) -> Dict[str, Any]:
        return {
            'summary': self.summary.to_dict(),
            'uploaded': len(self.records),
            'failed': len(self.failed),
            'records': [receipt.to_dict() for receipt in self.records],
            'errors': list(self.failed)
        }


class RecordPublisher:
    """Maps batches and records onto storage keys and uploads them"""

    def __init__(self, storage: BlobStorageInterface, config: StorageConfig):
        self.storage = storage
        self.prefix = config.prefix
        self.file_prefix = config.file_prefix
        self.logger = logging.getLogger(__name__)

    async def publish_record(self, record: ExtractedRecord, position: int = 1,
                             stamp: Optional[str] = None) -> UploadReceipt:
        key = record_key(self.prefix, self.file_prefix, record.id, position, stamp or timestamp_slug())
        return await self.storage.put_json(key, record.to_dict())

    async def publish_batch(self, batch: BatchResult, moment: Optional[datetime] = None) -> PublishReport:
        """
        Publish the batch summary followed by every record

        Raises:
            StorageError: When the summary itself cannot be stored
        """
        stamp = timestamp_slug(moment)
        summary = await self.storage.put_json(
            summary_key(self.prefix, self.file_prefix, stamp), batch.to_dict()
        )
        report = PublishReport(summary=summary)

        for position, record in enumerate(batch.items, start=1):
            try:
                receipt = await self.publish_record(record, position, stamp)
                report.records.append(receipt)
            except StorageError as e:
                self.logger.error(f"Failed to publish record {record.id}: {e}",
                                  extra={'context': {'id': record.id, 'position': position}})
                report.failed.append({'id': record.id, 'position': position, 'error': str(e)})

        self.logger.info(
            f"Published {len(report.records)}/{len(batch.items)} records",
            extra={'context': {'requestId': batch.request_id, 'failed': len(report.failed),
                               'summaryKey': summary.key}}
        )
        return report
