"""Data Access Object (DAO) implementation for URL records in Redis

This module provides a Redis-based implementation of UrlRecordBaseDAO.

Responsibilities:
    - Insert URL records atomically, enforcing uniqueness of both the
      canonical URL and the short key;
    - Look records up by canonical URL or by short key;
    - Maintain per-length sets of short keys for bulk collision snapshots;
    - Translate Redis failures into DAO exceptions.

Classes:
    UrlRecordRedisDAO:
        DAO for storing and retrieving UrlRecordModel in a Redis datastore.

Example:
    >>> from shortkeys.dao.redis import UrlRecordRedisDAO

    >>> dao = UrlRecordRedisDAO(prefix='shortkeys:dev')
    >>> dao.insert_unique('https://example.com/page', 'Xq3_9a')
    UrlRecordModel(canonical_url='https://example.com/page', short_key='Xq3_9a', created_at=...)

    >>> dao.find_by_short_key('Xq3_9a').canonical_url
    'https://example.com/page'

    >>> dao.list_keys_of_length(6, 8)
    {'Xq3_9a'}
"""

import logging
from datetime import datetime, UTC

import redis
from beartype import beartype

from shortkeys.models import UrlRecordModel
from shortkeys.dao.base import UrlRecordBaseDAO
from shortkeys.dao.redis.mixins import RedisClientMixin
from shortkeys.dao.redis.helpers import handle_redis_connection_error
from shortkeys.dao.exceptions import ConflictError


logger = logging.getLogger(__name__)


class UrlRecordRedisDAO(RedisClientMixin, UrlRecordBaseDAO):
    """Redis-based Data Access Object (DAO) for URL records

    This class implements the UrlRecordBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        find_by_canonical_url(canonical_url: str, **kwargs) -> UrlRecordModel | None:
            Resolve the canonical URL index, then load the record it points to.

        find_by_short_key(short_key: str, **kwargs) -> UrlRecordModel | None:
            Load a record hash by short key.

        list_keys_of_length(*lengths: int, **kwargs) -> set[str]:
            SUNION the per-length short key sets.

        insert_unique(canonical_url: str, short_key: str, **kwargs) -> UrlRecordModel:
            WATCH the record key and the URL index bucket, then write the record,
            the URL index field and the length set in one MULTI/EXEC transaction.
            Raises ConflictError if the short key or the URL is already stored,
            or if a watched key changes mid-transaction.

    All methods raise DataStoreError on connectivity issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def find_by_canonical_url(self, canonical_url: str, **kwargs) -> UrlRecordModel | None:
        """Retrieve a URL record by canonical URL

        Args:
            canonical_url (str):
                Canonical URL to look up.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            UrlRecordModel | None:
                The record if found, otherwise None.

        Raises:
            DataStoreError:
                If Redis connectivity issues occur.
        """
        short_key = self.redis.hget(self.keys.canonical_url_key(canonical_url), canonical_url)
        if short_key is None:
            return None

        record = self.find_by_short_key(short_key)
        # Index field without a matching record
        if record is None or record.canonical_url != canonical_url:
            logger.warning(
                'Canonical URL index points to a record of another URL.',
                extra={'canonicalUrl': canonical_url, 'shortKey': short_key},
            )
            return None
        return record

    @handle_redis_connection_error
    @beartype
    def find_by_short_key(self, short_key: str, **kwargs) -> UrlRecordModel | None:
        """Retrieve a URL record by short key

        Args:
            short_key (str):
                Short key to look up.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            UrlRecordModel | None:
                The record if found, otherwise None.

        Raises:
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.find_by_short_key('Xq3_9a')
            UrlRecordModel(canonical_url='https://example.com', short_key='Xq3_9a', ...)
        """
        fields = self.redis.hgetall(self.keys.link_key(short_key))
        if not fields:
            return None

        created_at = fields.get('created_at')
        return UrlRecordModel(
            canonical_url=fields['url'],
            short_key=short_key,
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )

    @handle_redis_connection_error
    @beartype
    def list_keys_of_length(self, *lengths: int, **kwargs) -> set[str]:
        """Retrieve all short keys of the given lengths with a single SUNION

        Args:
            *lengths (int):
                Key lengths to include.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            set[str]: used short keys.

        Raises:
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.list_keys_of_length(6, 8)
            {'Xq3_9a', 'b7Kp-0Qz'}
        """
        if not lengths:
            return set()
        return set(self.redis.sunion([self.keys.key_length_key(length) for length in lengths]))

    @handle_redis_connection_error
    @beartype
    def insert_unique(self, canonical_url: str, short_key: str, **kwargs) -> UrlRecordModel:
        """Insert a new URL record into Redis

        Both the record key and the canonical URL index bucket are WATCHed before
        checking for the record key and for this URL's field in the bucket. The three writes (record hash, URL index,
        length set) are queued in a MULTI block, so either all of them land or
        none do. If another client touches a watched key in between, EXEC
        aborts with a WatchError.

        Args:
            canonical_url (str):
                Canonical URL of the new record.
            short_key (str):
                Short key assigned to the canonical URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            UrlRecordModel: the persisted record.

        Raises:
            ConflictError:
                If the canonical URL or the short key is already stored, or a
                concurrent write raced this one.
            DataStoreError:
                If a Redis connection issue occurs during the transaction.

        Example:
            >>> dao.insert_unique('https://example.com', 'Xq3_9a')
            UrlRecordModel(canonical_url='https://example.com', short_key='Xq3_9a', ...)
        """
        link_key = self.keys.link_key(short_key)
        url_key = self.keys.canonical_url_key(canonical_url)
        length_key = self.keys.key_length_key(len(short_key))
        created_at = datetime.now(UTC)

        try:
            with self.redis.pipeline(transaction=True) as pipe:
                pipe.watch(link_key, url_key)
                if pipe.exists(link_key) or pipe.hexists(url_key, canonical_url):
                    raise ConflictError(f"URL record for '{canonical_url}' or short key '{short_key}' already exists.")

                pipe.multi()
                pipe.hset(link_key, mapping={'url': canonical_url, 'created_at': created_at.isoformat()})
                pipe.hset(url_key, canonical_url, short_key)
                pipe.sadd(length_key, short_key)
                pipe.execute()
        except redis.exceptions.WatchError as e:
            raise ConflictError(f"Concurrent write on URL record for '{canonical_url}' or short key '{short_key}'.") from e

        return UrlRecordModel(canonical_url=canonical_url, short_key=short_key, created_at=created_at)
