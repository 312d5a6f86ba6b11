"""URL normalization

This module turns raw, user-submitted URLs into their canonical form so that
semantically equivalent URLs compare equal and end up sharing one short key.

Canonical form:
    - scheme is http or https (missing schemes default to http);
    - scheme and host are lowercase;
    - default ports (80 for http, 443 for https) are dropped;
    - a single leading 'www.' label is dropped from the host;
    - query parameters are sorted by key and form-encoded;
    - empty queries, empty fragments and a lone '/' path are dropped.

Userinfo (user:password@), non-root paths and non-empty fragments are kept
exactly as submitted.

Functions:
    normalize_url(raw_url: str) -> str
        Return the canonical form of raw_url or raise a NormalizationError.

Example:
    >>> from shortkeys.utils.normalizer import normalize_url
    >>> normalize_url('HTTP://WWW.Example.COM:80/?b=2&a=1#')
    'http://example.com?a=1&b=2'
    >>> normalize_url('example.com')
    'http://example.com'
"""

import re
import logging
from operator import itemgetter
from urllib.parse import urlsplit, parse_qsl, urlencode, quote

from shortkeys.constants import SUPPORTED_SCHEMES, DEFAULT_PORTS
from shortkeys.exceptions import EmptyUrlError, InvalidUrlError, MissingHostError, UnsupportedSchemeError


logger = logging.getLogger(__name__)

SCHEME_PREFIX = re.compile(r'^([A-Za-z]+)://')
WWW_LABEL = re.compile(r'^www\.(?=.)')
REG_NAME = re.compile(r"^[a-z0-9\-._~%!$&'()*+,;=]+$")
IPV6_LITERAL = re.compile(r'^\[[0-9a-f:.]+\]$')
PORT = re.compile(r'^[0-9]{1,5}$')
BAD_PERCENT_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')
WHITESPACE = re.compile(r'\s')
CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f]')
NON_ASCII = re.compile(r'[^\x00-\x7f]+')


def normalize_url(raw_url: str) -> str:
    """Normalize a raw URL into its canonical, comparison-ready form

    Args:
        raw_url (str):
            URL as submitted by the client. May lack a scheme and may carry
            surrounding whitespace.

    Returns:
        str: canonical URL.

    Raises:
        EmptyUrlError:
            If raw_url is None, empty or whitespace only.
        InvalidUrlError:
            If raw_url can't be parsed (malformed authority, bad port,
            invalid percent-encoding, stray whitespace, etc.).
        MissingHostError:
            If the URL has no host, e.g. 'http://'.
        UnsupportedSchemeError:
            If the scheme is neither http nor https.

    Example:
        >>> normalize_url('https://example.com:443')
        'https://example.com'
        >>> normalize_url('http://blog.www.example.com/')
        'http://blog.www.example.com'
    """
    if raw_url is None or not raw_url.strip():
        raise EmptyUrlError('URL cannot be empty', url=raw_url)

    url = raw_url.strip()

    # Lowercase only the scheme token; the rest of the string is left untouched
    # until it is split into components.
    match = SCHEME_PREFIX.match(url)
    if match:
        url = match.group(1).lower() + url[match.end(1) :]
    else:
        url = f'http://{url}'

    if CONTROL_CHARS.search(url):
        raise InvalidUrlError(f"Invalid URL format: control characters are not allowed (given value: '{raw_url}')", url=raw_url)

    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidUrlError(f"Invalid URL format: {e} (given value: '{raw_url}')", url=raw_url) from e

    userinfo, host, port = _split_authority(parts.netloc, raw_url)
    _check_component(parts.path, 'path', raw_url)
    _check_component(parts.fragment, 'fragment', raw_url)
    if BAD_PERCENT_ESCAPE.search(parts.query):
        raise InvalidUrlError(f"Invalid URL format: bad percent-encoding in query (given value: '{raw_url}')", url=raw_url)

    if not host:
        raise MissingHostError(f"URL must contain a host (given value: '{raw_url}')", url=raw_url)

    scheme = parts.scheme.lower()
    if scheme not in SUPPORTED_SCHEMES:
        raise UnsupportedSchemeError(
            f'Unsupported URL scheme: {scheme}. Currently only HTTP and HTTPS are supported.',
            url=raw_url,
            scheme=scheme,
        )

    host = WWW_LABEL.sub('', host.lower(), count=1)
    if port and int(port) == DEFAULT_PORTS[scheme]:
        port = ''

    netloc = f'{userinfo}{host}:{port}' if port else f'{userinfo}{host}'
    path = '' if parts.path == '/' else parts.path

    canonical_url = f'{scheme}://{netloc}{path}'
    if parts.query:
        # NOTE: sorted() is stable, so duplicate keys keep their submitted order
        pairs = sorted(_parse_query(parts.query), key=itemgetter(0))
        if pairs:
            canonical_url += '?' + urlencode(pairs, encoding='latin-1')
    if parts.fragment:
        canonical_url += f'#{parts.fragment}'

    logger.debug('Normalized URL.', extra={'rawUrl': raw_url, 'canonicalUrl': canonical_url})
    return canonical_url


def _split_authority(netloc: str, raw_url: str) -> tuple[str, str, str]:
    """Split an authority into (userinfo including '@', host, port)

    Host and port are validated; userinfo is returned verbatim.
    """
    if WHITESPACE.search(netloc) or BAD_PERCENT_ESCAPE.search(netloc):
        raise InvalidUrlError(f"Invalid URL format: malformed authority '{netloc}' (given value: '{raw_url}')", url=raw_url)

    userinfo, at, hostport = netloc.rpartition('@')
    userinfo = f'{userinfo}{at}'

    if hostport.startswith('['):
        host, bracket, rest = hostport.partition(']')
        host += bracket
        if rest and not rest.startswith(':'):
            raise InvalidUrlError(f"Invalid URL format: malformed authority '{netloc}' (given value: '{raw_url}')", url=raw_url)
        port = rest[1:]
        if not IPV6_LITERAL.match(host.lower()):
            raise InvalidUrlError(f"Invalid URL format: bad IPv6 host '{host}' (given value: '{raw_url}')", url=raw_url)
    else:
        host, _, port = hostport.partition(':')
        if host and not REG_NAME.match(host.lower()):
            raise InvalidUrlError(f"Invalid URL format: bad host '{host}' (given value: '{raw_url}')", url=raw_url)

    if port and (not PORT.match(port) or int(port) > 65535):
        raise InvalidUrlError(f"Invalid URL format: bad port '{port}' (given value: '{raw_url}')", url=raw_url)

    return userinfo, host, port


def _parse_query(query: str) -> list[tuple[str, str]]:
    """Split a query string into (key, value) pairs without losing any byte

    Literal non-ASCII characters are percent-encoded as UTF-8 first. Escapes are
    then decoded as latin-1, which maps every byte to one character, so that
    urlencode(pairs, encoding='latin-1') restores the submitted bytes.
    """
    query = NON_ASCII.sub(lambda match: quote(match.group(0)), query)
    return parse_qsl(query, keep_blank_values=True, encoding='latin-1')


def _check_component(value: str, name: str, raw_url: str) -> None:
    if WHITESPACE.search(value):
        raise InvalidUrlError(f"Invalid URL format: whitespace in {name} (given value: '{raw_url}')", url=raw_url)
    if BAD_PERCENT_ESCAPE.search(value):
        raise InvalidUrlError(f"Invalid URL format: bad percent-encoding in {name} (given value: '{raw_url}')", url=raw_url)
