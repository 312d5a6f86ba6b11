"""Helper utilities for AWS lambda functions.

Functions:
    base_url(event) -> str
        Extract correct public base URL from API Gateway event
    get_short_url(short_key, event, host_domain=None) -> str
        Get string representation of short URL for a given short key
    extract_short_key(submitted) -> str
        Pull the short key out of a short URL, a path or a bare key
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected handler exceptions into a 500 response

Example:
    Typical usage inside a Lambda handler:

        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> get_short_url('Xq3_9a', event, host_domain='https://sho.rt')
        'https://sho.rt/Xq3_9a'

        >>> extract_short_key('https://sho.rt/Xq3_9a/')
        'Xq3_9a'
"""

import os
import json
import logging
import functools
from typing import Any
from collections.abc import Callable
from urllib.parse import urlsplit

from shortkeys.constants import DEFAULT_HOST_DOMAIN, UNKNOWN_INTERNAL_SERVER_ERROR
from shortkeys.exceptions import MissingEnvironmentVariableError
from shortkeys.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def base_url(event: dict[str, Any]) -> str:
    """Extract public base URL from API Gateway event

    Works with both custom and default AWS API Gateway domains.
    If a custom domain is configured, the stage name is omitted.
    If using the default AWS execute-api domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://sho.rt"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    request_context = event.get('requestContext', {})
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        return f'https://{domain}'
    elif domain:
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return DEFAULT_HOST_DOMAIN


def get_short_url(short_key: str, event: dict[str, Any], host_domain: str | None = None) -> str:
    """Get string representation of shortened URL

    Args:
        short_key (str): short key
        event (dict): API Gateway event object passed to Lambda handler
        host_domain (str | None): configured short link domain, e.g. 'https://sho.rt'.
                                  Takes precedence over the API Gateway domain.

    Returns:
        str: short url string representation
    """
    domain = host_domain or base_url(event)
    return f'{domain.rstrip("/")}/{short_key}'


def extract_short_key(submitted: str) -> str:
    """Extract the short key from a submitted short URL

    The submitted value may be a full short URL, a bare path or the key
    itself. The key is the last non-empty path segment; if there is none,
    the text after the last '/' is returned (the raw input when it has no '/').

    Args:
        submitted (str): short URL, path or key.

    Returns:
        str: short key candidate.

    Example:
        >>> extract_short_key('http://localhost:3000/Xq3_9a')
        'Xq3_9a'
        >>> extract_short_key('/Xq3_9a')
        'Xq3_9a'
        >>> extract_short_key('Xq3_9a')
        'Xq3_9a'
        >>> extract_short_key('https://sho.rt')
        'sho.rt'
    """
    submitted = submitted.strip()
    path = urlsplit(submitted).path if '://' in submitted else submitted.split('?', 1)[0].split('#', 1)[0]
    segments = [segment for segment in path.split('/') if segment]
    return segments[-1] if segments else submitted.rstrip('/').rsplit('/', 1)[-1]


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with HTTP 500 when a lambda handler raises

    When running locally the original exception is re-raised instead, so that
    tracebacks show up in SAM.
    """

    @functools.wraps(handler)
    def wrapper(event: dict[str, Any], context: Any) -> dict[str, Any]:
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in lambda handler. Responding with 500.', extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR})
            return {
                'statusCode': 500,
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'error_code': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
