"""
Storage backends for scraped records
"""

from hubscraper.core.base import BlobStorageInterface, ConfigurationError
from hubscraper.core.config import StorageConfig
from hubscraper.storage.local_storage import LocalBlobStorage
from hubscraper.storage.s3_storage import S3BlobStorage
from hubscraper.storage.publisher import PublishReport, RecordPublisher
from hubscraper.storage.keys import normalize_prefix, timestamp_slug


def create_storage(config: StorageConfig) -> BlobStorageInterface:
    """Build the storage backend named by ``config.backend``"""
    if config.backend == 'local':
        return LocalBlobStorage(config)
    if config.backend == 's3':
        return S3BlobStorage(config)
    raise ConfigurationError(f"Unknown storage backend: {config.backend}")


__all__ = [
    'LocalBlobStorage',
    'S3BlobStorage',
    'RecordPublisher',
    'PublishReport',
    'create_storage',
    'normalize_prefix',
    'timestamp_slug'
]
