"""Duplicate and collision coordination for short keys

ShortKeyCoordinator sequences the work behind every shorten request:

    Received -> Normalized -> Existing
                           -> New -> Stage 1 -> [Stage 2] -> [Stage 3] -> Persisted

- Normalized: the raw URL goes through normalize_url(). Normalization errors
  abort the request and are never retried.
- Existing: a record with the same canonical URL short-circuits key generation.
- New: one bulk read of every used 6 and 8 character key feeds the collision
  oracle for all stages, so probing costs no extra round trips.
- Stage 1: deterministic 6 character keys.
- Stage 2: deterministic 8 character keys, only if stage 1 is exhausted.
- Stage 3: random 8 character keys, only if stage 2 is exhausted.
- Persisted: the data store's uniqueness constraints have the final word. If a
  concurrent writer wins the race, the record is re-read once and the winner
  is returned.

No in-process lock is held across these steps.

Example:
    >>> from shortkeys.coordinator import ShortKeyCoordinator
    >>> from shortkeys.dao.memory import UrlRecordMemoryDAO
    >>> coordinator = ShortKeyCoordinator(UrlRecordMemoryDAO())
    >>> record = coordinator.shorten('HTTP://WWW.Example.COM:80/?b=2&a=1')
    >>> record.canonical_url
    'http://example.com?a=1&b=2'
    >>> coordinator.resolve(record.short_key)
    'http://example.com?a=1&b=2'
"""

import logging

from shortkeys.models import UrlRecordModel
from shortkeys.dao.base import UrlRecordBaseDAO
from shortkeys.dao.exceptions import ConflictError, NotFoundError
from shortkeys.constants import SHORT_KEY_LENGTH, LONG_KEY_LENGTH
from shortkeys.utils.normalizer import normalize_url
from shortkeys.utils.shortener import KeyProbe, generate_short_key, fallback_short_key


logger = logging.getLogger(__name__)


class ShortKeyCoordinator:
    """Map raw URLs to short keys and short keys back to canonical URLs.

    Attributes:
        dao (UrlRecordBaseDAO):
            Data store holding URL records.

    Methods:
        shorten(raw_url: str) -> UrlRecordModel:
            Return the record for raw_url's canonical URL, creating it if needed.

        resolve(short_key: str) -> str | None:
            Return the canonical URL behind short_key, or None.

        expand(short_key: str) -> UrlRecordModel:
            Return the record behind short_key, raising NotFoundError if missing.
    """

    def __init__(self, dao: UrlRecordBaseDAO):
        self.dao = dao

    def shorten(self, raw_url: str) -> UrlRecordModel:
        """Return the URL record for a raw URL, creating it on first sight

        Args:
            raw_url (str):
                URL as submitted by the client.

        Returns:
            UrlRecordModel: record holding the canonical URL and its short key.

        Raises:
            NormalizationError:
                If raw_url can't be normalized (see normalize_url()).
            ConflictError:
                If the insert lost a race and re-reading didn't find a record
                for this canonical URL (i.e. the short key was taken by
                another URL in the meantime).
            DataStoreError:
                If the data store is unreachable.
        """
        canonical_url = normalize_url(raw_url)

        existing = self.dao.find_by_canonical_url(canonical_url)
        if existing is not None:
            logger.info('URL already shortened. Reusing its short key.', extra={'shortKey': existing.short_key})
            return existing

        short_key = self._pick_short_key(canonical_url)

        try:
            record = self.dao.insert_unique(canonical_url, short_key)
        except ConflictError as e:
            winner = self.dao.find_by_canonical_url(canonical_url)
            if winner is None:
                logger.warning('Insert conflict could not be resolved by re-reading.', extra={'shortKey': short_key})
                raise ConflictError(f"Couldn't persist a short key for '{canonical_url}' due to a concurrent write.") from e
            logger.info('Lost insert race. Returning the concurrent writer\'s record.', extra={'shortKey': winner.short_key})
            return winner

        logger.info('Persisted new URL record.', extra={'shortKey': record.short_key})
        return record

    def resolve(self, short_key: str) -> str | None:
        """Return the canonical URL behind a short key, or None if it is unknown."""
        record = self.dao.find_by_short_key(short_key)
        return None if record is None else record.canonical_url

    def expand(self, short_key: str) -> UrlRecordModel:
        """Return the URL record behind a short key

        Raises:
            NotFoundError: If no record owns short_key.
        """
        record = self.dao.find_by_short_key(short_key)
        if record is None:
            raise NotFoundError(f"Short key '{short_key}' not found.")
        return record

    def _pick_short_key(self, canonical_url: str) -> str:
        used_keys = self.dao.list_keys_of_length(SHORT_KEY_LENGTH, LONG_KEY_LENGTH)
        is_collision = used_keys.__contains__
        probe = KeyProbe()

        short_key = generate_short_key(canonical_url, is_collision, use_long_key=False, probe=probe)
        if short_key is not None:
            return short_key

        logger.info('Short keys exhausted. Escalating to long keys.', extra={'probes': probe.count})
        short_key = generate_short_key(canonical_url, is_collision, use_long_key=True, probe=probe)
        if short_key is not None:
            return short_key

        logger.warning('Long keys exhausted. Escalating to random keys.', extra={'probes': probe.count})
        return fallback_short_key(is_collision)
