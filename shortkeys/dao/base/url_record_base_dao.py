"""Abstract base class for URL record data access objects (DAOs).

This class establishes a consistent contract for all URL record DAO
implementations, regardless of the underlying storage mechanism (e.g., Redis,
in-memory, PostgreSQL).

Responsibilities:
    - Look up URL records by canonical URL or by short key.
    - Provide a bulk snapshot of used short keys for collision checks.
    - Insert new records while enforcing uniqueness of both fields.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shortkeys.dao.redis import UrlRecordRedisDAO

        >>> dao = UrlRecordRedisDAO(...)
        >>> record = dao.insert_unique('https://example.com/blog', 'Xq3_9a')

        >>> dao.find_by_short_key('Xq3_9a').canonical_url
        'https://example.com/blog'

        >>> dao.find_by_canonical_url('https://example.com/blog').short_key
        'Xq3_9a'

        >>> 'Xq3_9a' in dao.list_keys_of_length(6, 8)
        True
"""

from abc import ABC, abstractmethod

from shortkeys.models import UrlRecordModel


class UrlRecordBaseDAO(ABC):
    """Interface for URL record data access objects (DAOs).

    Methods:
        find_by_canonical_url(canonical_url: str, **kwargs) -> UrlRecordModel | None:
            Retrieve the record owning a canonical URL. Returns None if not found.

        find_by_short_key(short_key: str, **kwargs) -> UrlRecordModel | None:
            Retrieve the record owning a short key. Returns None if not found.

        list_keys_of_length(*lengths: int, **kwargs) -> set[str]:
            Return every stored short key whose length is one of `lengths`
            in a single read.

        insert_unique(canonical_url: str, short_key: str, **kwargs) -> UrlRecordModel:
            Atomically insert a new record.
            Raises ConflictError if the canonical URL or the short key exists.

    All methods raise DataStoreError on connection, read or write failure.

    Subclassing:
        Datastore-specific implementations (e.g., UrlRecordRedisDAO) must
        extend this class and implement all abstract methods.

    NOTE:
        - Records are immutable. The DAO does not provide an update path, and
          deletion is an administrative task outside of this interface.
    """

    @abstractmethod
    def find_by_canonical_url(self, canonical_url: str, **kwargs) -> UrlRecordModel | None:
        """Retrieve a URL record by its canonical URL.

        Args:
            canonical_url (str):
                Canonical URL, as produced by normalize_url().

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UrlRecordModel | None: The record if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find_by_short_key(self, short_key: str, **kwargs) -> UrlRecordModel | None:
        """Retrieve a URL record by its short key.

        Args:
            short_key (str):
                The short key of the record to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UrlRecordModel | None: The record if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def list_keys_of_length(self, *lengths: int, **kwargs) -> set[str]:
        """Retrieve all stored short keys of the given lengths in one read.

        Args:
            *lengths (int):
                Key lengths to include, e.g. (6, 8).

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            set[str]: Snapshot of used short keys.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def insert_unique(self, canonical_url: str, short_key: str, **kwargs) -> UrlRecordModel:
        """Atomically insert a new URL record.

        Args:
            canonical_url (str):
                Canonical URL of the new record.

            short_key (str):
                Short key assigned to the canonical URL.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UrlRecordModel: The persisted record.

        Raises:
            ConflictError:
                If the canonical URL or the short key is already stored.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
