"""
Object key helpers shared by every storage backend
"""

from datetime import datetime, timezone
from typing import Optional

DEFAULT_PREFIX = "Recos/"


def normalize_prefix(prefix: Optional[str]) -> str:
    """Key prefix guaranteed to end with '/'; empty or missing falls back to the default"""
    if not prefix:
        return DEFAULT_PREFIX
    return prefix if prefix.endswith('/') else prefix + '/'


def timestamp_slug(moment: Optional[datetime] = None) -> str:
    """ISO timestamp usable inside an object key (':' and '.' replaced by '-')"""
    moment = moment or datetime.now(timezone.utc)
    iso = moment.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')
    return iso.replace(':', '-').replace('.', '-')


def summary_key(prefix: str, file_prefix: str, stamp: str) -> str:
    return f"{normalize_prefix(prefix)}{file_prefix}_hub_summary_{stamp}.json"


def record_key(prefix: str, file_prefix: str, record_id: Optional[str], position: int, stamp: str) -> str:
    """Per-record key; records without an id are named after their 1-based position"""
    name = record_id or f"item-{position}"
    return f"{normalize_prefix(prefix)}{file_prefix}_{name}_{stamp}.json"
