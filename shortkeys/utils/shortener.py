"""Short key generation utility

This module derives short, URL-safe keys from canonical URLs using three
escalating strategies:

    Stage 1: 6-character keys digested from the canonical URL (deterministic)
    Stage 2: 8-character keys digested from the canonical URL (deterministic)
    Stage 3: 8-character random keys, then a random prefix + base36 timestamp

Stages 1 and 2 are deterministic: the same canonical URL always yields the same
candidate for a given attempt number, so identical URLs submitted
independently converge on the same key unless it is already taken.

Collision checks are delegated to a caller-supplied `is_collision` callable,
which keeps generation free of any I/O.

Functions:
    derive_short_key(canonical_url, attempt, length) -> str
        Digest a canonical URL (and attempt number) into a short key.

    generate_short_key(canonical_url, is_collision, use_long_key=False, attempt=0, probe=None) -> str | None
        Probe deterministic candidates until a free one is found.
        Returns None once the stage is exhausted.

    random_short_key(length) -> str
        Draw a random short key.

    fallback_short_key(is_collision) -> str
        Stage 3: random keys, then a timestamped key as a last resort.

Example:
    >>> from shortkeys.utils.shortener import generate_short_key
    >>> taken = {'Bc1x_A'}
    >>> key = generate_short_key('https://example.com', taken.__contains__)
    >>> len(key)
    6
"""

import time
import base64
import hashlib
import secrets
from dataclasses import dataclass

from shortkeys.types import CollisionCheck
from shortkeys.constants import (
    SHORT_KEY_LENGTH,
    LONG_KEY_LENGTH,
    MAX_ATTEMPTS,
    MAX_PROBE_DEPTH,
    SHORT_KEY_ALPHABET,
)


BASE36_ALPHABET = '0123456789abcdefghijklmnopqrstuvwxyz'
DIGEST_BYTES = 10


@dataclass
class KeyProbe:
    """Running count of collision probes shared by all stages of one generation."""

    count: int = 0

    @property
    def exhausted(self) -> bool:
        return self.count >= MAX_PROBE_DEPTH


def derive_short_key(canonical_url: str, attempt: int = 0, length: int = SHORT_KEY_LENGTH) -> str:
    """Digest a canonical URL into a URL-safe short key

    The first attempt digests the canonical URL alone; later attempts digest
    '<canonical url>|<attempt>' to move to a different candidate.

    Args:
        canonical_url (str):
            Normalized URL to derive the key from.
        attempt (int):
            Non-negative attempt number. Defaults to 0.
        length (int):
            Key length, at most 13 characters. Defaults to SHORT_KEY_LENGTH.

    Returns:
        str: URL-safe base64 key of the requested length.

    Example:
        >>> derive_short_key('https://example.com') == derive_short_key('https://example.com')
        True
        >>> len(derive_short_key('https://example.com', length=8))
        8
    """
    if attempt < 0:
        raise ValueError(f'Attempt must be a non-negative integer (given value: {attempt}).')

    payload = canonical_url if attempt == 0 else f'{canonical_url}|{attempt}'
    digest = hashlib.md5(payload.encode('utf-8'), usedforsecurity=False).digest()[:DIGEST_BYTES]
    return base64.urlsafe_b64encode(digest).decode('ascii').rstrip('=')[:length]


def generate_short_key(
    canonical_url: str,
    is_collision: CollisionCheck,
    use_long_key: bool = False,
    attempt: int = 0,
    probe: KeyProbe | None = None,
) -> str | None:
    """Find a free deterministic short key for a canonical URL

    Tries up to MAX_ATTEMPTS consecutive attempt numbers starting at `attempt`.
    Every probe is counted on `probe`; once the shared count reaches
    MAX_PROBE_DEPTH the digest path is skipped and a random key of the
    requested length is tried instead.

    Args:
        canonical_url (str):
            Normalized URL to derive the key from.
        is_collision (Callable[[str], bool]):
            Returns True if a candidate key is already taken.
        use_long_key (bool):
            Generate LONG_KEY_LENGTH keys instead of SHORT_KEY_LENGTH keys.
        attempt (int):
            First attempt number to try. Defaults to 0.
        probe (KeyProbe | None):
            Probe counter shared across stages. A fresh one is used if None.

    Returns:
        str | None:
            A key for which is_collision() returned False.
            None if every candidate of this stage collided.

    Example:
        >>> len(generate_short_key('https://example.com', lambda key: False))
        6
        >>> generate_short_key('https://example.com', lambda key: True) is None
        True
    """
    probe = probe if probe is not None else KeyProbe()
    length = LONG_KEY_LENGTH if use_long_key else SHORT_KEY_LENGTH

    for current_attempt in range(attempt, attempt + MAX_ATTEMPTS):
        if probe.exhausted:
            candidate = random_short_key(length)
            return None if is_collision(candidate) else candidate

        candidate = derive_short_key(canonical_url, current_attempt, length)
        probe.count += 1
        if not is_collision(candidate):
            return candidate

    return None


def random_short_key(length: int = LONG_KEY_LENGTH) -> str:
    """Draw a random key from the URL-safe alphabet."""
    return ''.join(secrets.choice(SHORT_KEY_ALPHABET) for _ in range(length))


def fallback_short_key(is_collision: CollisionCheck) -> str:
    """Stage 3: generate a random LONG_KEY_LENGTH key

    Tries MAX_ATTEMPTS random keys. If all of them collide, returns a random
    prefix joined to the base36 Unix timestamp, sized to LONG_KEY_LENGTH.
    That last key is not checked: a residual collision is left to the data
    store's uniqueness constraint.

    Args:
        is_collision (Callable[[str], bool]):
            Returns True if a candidate key is already taken.

    Returns:
        str: LONG_KEY_LENGTH characters long key.
    """
    for _ in range(MAX_ATTEMPTS):
        candidate = random_short_key(LONG_KEY_LENGTH)
        if not is_collision(candidate):
            return candidate

    suffix = to_base36(int(time.time()))
    prefix = random_short_key(max(LONG_KEY_LENGTH - len(suffix) - 1, 1))
    return f'{prefix}_{suffix}'[:LONG_KEY_LENGTH]


def to_base36(number: int) -> str:
    """Encode a non-negative integer in lowercase base36."""
    if number < 0:
        raise ValueError(f'Number must be a non-negative integer (given value: {number}).')

    digits = []
    while True:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
        if number == 0:
            break
    return ''.join(reversed(digits))
