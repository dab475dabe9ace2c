"""
Base Classes and Data Models for the Hub Scraper

Defines the record schema, processing results, abstract component
interfaces and the exception hierarchy shared by every package.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum


DEFAULT_ORIGIN = "pointfive_cloud_efficiency_hub"


class ProcessingStatus(Enum):
    """Status of processing operations"""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class DocumentationLink:
    """A link collected from the documentation section"""
    url: str
    title: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'title': self.title, 'url': self.url}


@dataclass(frozen=True)
class RecordSource:
    """Where a record was scraped from"""
    url: str
    origin: str = DEFAULT_ORIGIN


@dataclass(frozen=True)
class ExtractedRecord:
    """Normalized record for a single inefficiency page"""
    id: str
    source: RecordSource
    scraped_at: str
    title: Optional[str] = None
    author: Optional[str] = None
    service_category: Optional[str] = None
    cloud_provider: Optional[str] = None
    service_name: Optional[str] = None
    inefficiency_type: Optional[str] = None
    explanation: Optional[str] = None
    billing_model: Optional[str] = None
    detection_signals: Tuple[str, ...] = ()
    remediation_actions: Tuple[str, ...] = ()
    documentation_links: Tuple[DocumentationLink, ...] = ()
    tags: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON wire format (snake_case keys)"""
        return {
            'id': self.id,
            'title': self.title,
            'author': self.author,
            'service_category': self.service_category,
            'cloud_provider': self.cloud_provider,
            'service_name': self.service_name,
            'inefficiency_type': self.inefficiency_type,
            'explanation': self.explanation,
            'billing_model': self.billing_model,
            'detection_signals': list(self.detection_signals),
            'remediation_actions': list(self.remediation_actions),
            'documentation_links': [link.to_dict() for link in self.documentation_links],
            'tags': list(self.tags),
            'source': {
                'url': self.source.url,
                'origin': self.source.origin
            },
            'scraped_at': self.scraped_at
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractedRecord":
        """Rebuild a record from its JSON wire format"""
        source = data.get('source') or {}
        return cls(
            id=data['id'],
            title=data.get('title'),
            author=data.get('author'),
            service_category=data.get('service_category'),
            cloud_provider=data.get('cloud_provider'),
            service_name=data.get('service_name'),
            inefficiency_type=data.get('inefficiency_type'),
            explanation=data.get('explanation'),
            billing_model=data.get('billing_model'),
            detection_signals=tuple(data.get('detection_signals') or ()),
            remediation_actions=tuple(data.get('remediation_actions') or ()),
            documentation_links=tuple(
                DocumentationLink(url=link['url'], title=link.get('title'))
                for link in data.get('documentation_links') or ()
            ),
            tags=tuple(data.get('tags') or ()),
            source=RecordSource(
                url=source.get('url'),
                origin=source.get('origin', DEFAULT_ORIGIN)
            ),
            scraped_at=data['scraped_at']
        )


@dataclass
class ValidationReport:
    """Outcome of record validation"""
    is_valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass
class ProcessingResult:
    """Result of processing a single URL"""
    url: str
    success: bool
    record: Optional[ExtractedRecord] = None
    error_message: Optional[str] = None
    validation_errors: List[str] = field(default_factory=list)
    processing_time: float = 0.0
    status: ProcessingStatus = ProcessingStatus.NOT_STARTED


@dataclass
class ScrapeFailure:
    """A URL that could not be scraped"""
    url: str
    error: str
    index: int

    def to_dict(self) -> Dict[str, Any]:
        return {'url': self.url, 'error': self.error, 'index': self.index}


@dataclass
class BatchResult:
    """Partial results and explicit failures of a batch run"""
    request_id: str
    urls: List[str] = field(default_factory=list)
    items: List[ExtractedRecord] = field(default_factory=list)
    errors: List[ScrapeFailure] = field(default_factory=list)
    warnings: List[Dict[str, Any]] = field(default_factory=list)
    duration: float = 0.0

    @property
    def total(self) -> int:
        return len(self.urls)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'requestId': self.request_id,
            'count': len(self.items),
            'total': self.total,
            'failed': len(self.errors),
            'duration': round(self.duration, 3),
            'urls': list(self.urls),
            'items': [item.to_dict() for item in self.items]
        }
        if self.errors:
            data['errors'] = [error.to_dict() for error in self.errors]
        if self.warnings:
            data['warnings'] = list(self.warnings)
        return data


@dataclass
class UploadReceipt:
    """Confirmation returned by a blob storage sink"""
    bucket: str
    key: str
    size: int
    url: str

    def to_dict(self) -> Dict[str, Any]:
        return {'bucket': self.bucket, 'key': self.key, 'size': self.size, 'url': self.url}


class BaseComponent(ABC):
    """Base class for all scraper components"""

    def __init__(self, config: Any):
        self.config = config
        self._initialized = False

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the component"""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Clean up resources"""
        pass

    def is_initialized(self) -> bool:
        """Check if component is initialized"""
        return self._initialized


class FetcherInterface(BaseComponent):
    """Interface for the fetch and parse collaborator"""

    @abstractmethod
    async def fetch_html(self, url: str) -> str:
        """Fetch raw HTML for a URL"""
        pass

    @abstractmethod
    async def fetch_document(self, url: str) -> Any:
        """Fetch and parse a URL into a document tree"""
        pass


class BlobStorageInterface(BaseComponent):
    """Interface for blob storage sinks"""

    @abstractmethod
    async def put_json(self, key: str, payload: Any) -> UploadReceipt:
        """Store a JSON-serializable payload under a key"""
        pass

    @abstractmethod
    def get_storage_stats(self) -> Dict[str, Any]:
        """Get storage statistics"""
        pass


class ScraperOrchestrator(BaseComponent):
    """Main orchestrator for the scraping process"""

    def __init__(self, config: Any):
        super().__init__(config)
        self.fetcher: Optional[FetcherInterface] = None
        self.storage: Optional[BlobStorageInterface] = None

    @abstractmethod
    async def process_urls(self, urls: List[str]) -> BatchResult:
        """Fetch and extract an ordered list of URLs"""
        pass

    @abstractmethod
    async def process_single_url(self, url: str) -> ExtractedRecord:
        """Fetch and extract a single URL"""
        pass

    def register_component(self, component_type: str, component: BaseComponent) -> None:
        """Register a component with the orchestrator"""
        if component_type == "fetcher":
            self.fetcher = component
        elif component_type == "storage":
            self.storage = component
        else:
            raise ValueError(f"Unknown component type: {component_type}")


class ScraperError(Exception):
    """Base exception for scraper errors"""
    pass


class ConfigurationError(ScraperError):
    """Configuration-related errors"""
    pass


class FetchError(ScraperError):
    """Timeout, HTTP status or transport failure while fetching a page"""

    def __init__(self, message: str, url: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status


class ExtractionError(ScraperError):
    """Unrecoverable extraction failures (unknown strategy, bad input)"""
    pass


class StorageError(ScraperError):
    """Storage-related errors"""
    pass
