"""In-memory Data Access Object (DAO) implementation for URL records

A dict-backed UrlRecordBaseDAO for local runs and tests. Inserts are atomic
with respect to other threads sharing the same instance, which gives it the
same uniqueness guarantees as the Redis implementation. Records live only as
long as the process.

Example:
    >>> from shortkeys.dao.memory import UrlRecordMemoryDAO
    >>> dao = UrlRecordMemoryDAO()
    >>> dao.insert_unique('https://example.com', 'Xq3_9a').short_key
    'Xq3_9a'
    >>> dao.find_by_canonical_url('https://example.com').short_key
    'Xq3_9a'
"""

import threading
from datetime import datetime, UTC

from beartype import beartype

from shortkeys.models import UrlRecordModel
from shortkeys.dao.base import UrlRecordBaseDAO
from shortkeys.dao.exceptions import ConflictError


class UrlRecordMemoryDAO(UrlRecordBaseDAO):
    """Process-local URL record store."""

    def __init__(self, records: list[UrlRecordModel] | None = None):
        self._by_url: dict[str, UrlRecordModel] = {}
        self._by_key: dict[str, UrlRecordModel] = {}
        self._lock = threading.Lock()

        for record in records or []:
            self._by_url[record.canonical_url] = record
            self._by_key[record.short_key] = record

    def __len__(self) -> int:
        return len(self._by_key)

    @beartype
    def find_by_canonical_url(self, canonical_url: str, **kwargs) -> UrlRecordModel | None:
        return self._by_url.get(canonical_url)

    @beartype
    def find_by_short_key(self, short_key: str, **kwargs) -> UrlRecordModel | None:
        return self._by_key.get(short_key)

    @beartype
    def list_keys_of_length(self, *lengths: int, **kwargs) -> set[str]:
        with self._lock:
            return {key for key in self._by_key if len(key) in lengths}

    @beartype
    def insert_unique(self, canonical_url: str, short_key: str, **kwargs) -> UrlRecordModel:
        with self._lock:
            if canonical_url in self._by_url or short_key in self._by_key:
                raise ConflictError(f"URL record for '{canonical_url}' or short key '{short_key}' already exists.")

            record = UrlRecordModel(canonical_url=canonical_url, short_key=short_key, created_at=datetime.now(UTC))
            self._by_url[canonical_url] = record
            self._by_key[short_key] = record
            return record
