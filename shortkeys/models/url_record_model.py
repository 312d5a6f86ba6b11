from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class UrlRecordModel:
    """Represent a canonical URL and the short key assigned to it.

    Records are created once and never updated. Each canonical URL owns exactly
    one short key and each short key points to exactly one canonical URL.

    Attributes:
        canonical_url (str):
            Normalized, comparison-ready form of the submitted URL.
        short_key (str):
            Unique URL-safe key the short link is built from.
        created_at (Optional[datetime]):
            Moment the record was persisted, if the data store tracks it.

    Example:
        >>> record = UrlRecordModel(
        ...     canonical_url='https://example.com/article/123',
        ...     short_key='Xq3_9a',
        ... )
        >>> record.short_key
        'Xq3_9a'
        >>> record.created_at is None
        True
    """

    canonical_url: str
    short_key: str
    created_at: Optional[datetime] = None
