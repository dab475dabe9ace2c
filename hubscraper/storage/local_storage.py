"""
Local Blob Storage Implementation

Writes JSON objects to the local file system, laid out like the remote
bucket so a run can be inspected without cloud credentials.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import aiofiles

from hubscraper.core.base import BlobStorageInterface, StorageError, UploadReceipt
from hubscraper.core.config import StorageConfig


class LocalBlobStorage(BlobStorageInterface):
    """
    Implementation of blob storage backed by a local directory
    """

    def __init__(self, config: StorageConfig):
        super().__init__(config)
        self.logger = logging.getLogger(__name__)
        self.base_path = Path(config.local_path)
        self.objects_written = 0
        self.bytes_written = 0

    async def initialize(self) -> None:
        """Create the output directory"""
        self.logger.info(f"Initializing local storage at {self.base_path}")
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._initialized = True

    async def cleanup(self) -> None:
        """Clean up resources"""
        self.logger.info("Cleaning up local storage")
        self._initialized = False

    async def put_json(self, key: str, payload: Any) -> UploadReceipt:
        """
        Write a payload as pretty-printed JSON under base_path/key

        Raises:
            StorageError: When the file cannot be written
        """
        body = json.dumps(payload, indent=2, ensure_ascii=False)
        path = self.base_path / key

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, 'w', encoding='utf-8') as f:
                await f.write(body)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

        size = len(body.encode('utf-8'))
        self.objects_written += 1
        self.bytes_written += size
        self.logger.info(f"Saved object to {path}", extra={'context': {'key': key, 'size': size}})
        return UploadReceipt(bucket=str(self.base_path), key=key, size=size, url=path.resolve().as_uri())

    def get_storage_stats(self) -> Dict[str, Any]:
        """
        Get storage statistics

        Returns:
            Storage statistics
        """
        files = list(self.base_path.rglob('*.json')) if self.base_path.exists() else []
        return {
            'backend': 'local',
            'base_path': str(self.base_path),
            'objects_written': self.objects_written,
            'bytes_written': self.bytes_written,
            'total_objects': len(files)
        }
