"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ConflictError:
        Raised when inserting a URL record whose canonical URL or short key
        already exists in the data store.

    NotFoundError:
        Raised when a URL record is required but missing from the data store.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, time, OOM, etc.).

Example:
    >>> from shortkeys.dao.exceptions import ConflictError
    >>> raise ConflictError("Short key 'Xq3_9a' is already taken.")
    Traceback (most recent call last):
        ...
    shortkeys.dao.exceptions.ConflictError: Short key 'Xq3_9a' is already taken.
"""

from shortkeys.exceptions import ShortKeysError


class DAOError(ShortKeysError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class ConflictError(DAOError):
    """Exception raised when a canonical URL or short key is already stored.

    The data store's uniqueness constraints are the final authority on both
    fields; a ConflictError is evidence that a concurrent writer got there first.
    """

    error_code = 'dao:conflict_error'


class NotFoundError(DAOError):
    """Exception raised when a URL record is not found in the data store."""

    error_code = 'dao:not_found_error'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    error_code = 'dao:data_store_error'
