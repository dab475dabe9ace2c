"""
S3 Blob Storage Implementation

Uploads JSON objects to an S3 bucket with boto3. boto3 is blocking, so
each upload runs in the default executor.
"""

import asyncio
import json
import logging
from functools import partial
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from hubscraper.core.base import BlobStorageInterface, StorageError, UploadReceipt
from hubscraper.core.config import StorageConfig


class S3BlobStorage(BlobStorageInterface):
    """
    Implementation of blob storage backed by Amazon S3
    """

    def __init__(self, config: StorageConfig, client: Optional[Any] = None):
        super().__init__(config)
        self.logger = logging.getLogger(__name__)
        self.bucket = config.bucket
        self.region = config.region
        self.client = client
        self.uploaded = []

    async def initialize(self) -> None:
        """Create the S3 client"""
        if not self.bucket:
            raise StorageError("S3_BUCKET_NAME is not configured")

        if self.client is None:
            self.client = boto3.client('s3', region_name=self.region)

        self.logger.info(f"Initializing S3 storage for bucket {self.bucket} ({self.region})")
        self._initialized = True

    async def cleanup(self) -> None:
        """Clean up resources"""
        self.logger.info("Cleaning up S3 storage")
        self._initialized = False

    def object_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    async def put_json(self, key: str, payload: Any) -> UploadReceipt:
        """
        Upload a payload as pretty-printed JSON

        Raises:
            StorageError: When the upload is rejected or the client fails
        """
        if not self._initialized:
            await self.initialize()

        body = json.dumps(payload, indent=2, ensure_ascii=False).encode('utf-8')
        upload = partial(
            self.client.put_object,
            Bucket=self.bucket,
            Key=key,
            Body=body,
            ContentType='application/json'
        )

        try:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, upload)
        except (BotoCoreError, ClientError) as e:
            self.logger.error(f"Error uploading to S3: {e}",
                              extra={'context': {'bucket': self.bucket, 'key': key}})
            raise StorageError(f"Failed to upload s3://{self.bucket}/{key}: {e}") from e

        receipt = UploadReceipt(bucket=self.bucket, key=key, size=len(body), url=self.object_url(key))
        self.uploaded.append(receipt)
        self.logger.info(f"Uploaded to S3: s3://{self.bucket}/{key}",
                         extra={'context': {'bucket': self.bucket, 'key': key, 'size': len(body)}})
        return receipt

    def get_storage_stats(self) -> Dict[str, Any]:
        """
        Get storage statistics

        Returns:
            Storage statistics
        """
        return {
            'backend': 's3',
            'bucket': self.bucket,
            'region': self.region,
            'objects_uploaded': len(self.uploaded),
            'bytes_uploaded': sum(receipt.size for receipt in self.uploaded)
        }
