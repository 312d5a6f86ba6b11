import functools
from collections.abc import Callable

import xxhash


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for storing URL records.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "shortkeys:prod" or "shortkeys:dev".

    Key layout:
        <prefix>:links:<short key>         HASH  {url, created_at}
        <prefix>:urls:<xxh128 of url>      HASH  {canonical url: short key}
        <prefix>:links:length:<n>          SET   short keys of length n
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_key(self, short_key: str) -> str:
        return f'links:{short_key}'

    @prefix_key
    def canonical_url_key(self, canonical_url: str) -> str:
        # Canonical URLs are unbounded in length; bucket them by a fixed-size digest.
        # Each bucket is a hash keyed by the full URL, so digest collisions coexist.
        return f'urls:{xxhash.xxh128_hexdigest(canonical_url)}'

    @prefix_key
    def key_length_key(self, length: int) -> str:
        return f'links:length:{length}'
