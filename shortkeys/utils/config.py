"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to access
configuration data stored in **AWS AppConfig**. Each environment (`APP_ENV`) has
a dedicated AppConfig *Environment* within the shared AppConfig *Application*
identified by `APP_NAME`. Configuration data is stored as a JSON document under
a configuration profile (typically `backend-config`).

The configuration JSON follows this structure:

    {
        "build": 12,
        "active_backend": "redis",
        "configs": {
            "encode_url": {
                "redis": { ... }
            },
            "decode_url": {
                "redis": { ... }
            },
            "redirect_url": {
                "redis": { ... }
            }
        }
    }

Each Lambda loads its own section (e.g., `"encode_url"`) from this AppConfig
document.

The public domain short links are built on is not part of the AppConfig
document: it comes from `HOST_DOMAIN` via `host_domain()` and is handed
explicitly to the presentation helpers.

Typical usage inside a Lambda handler:
    >>> from shortkeys.utils.config import load_config
    >>> config = load_config('encode_url')
    >>> print(config['redis']['host'])
    redis-15501.host.docker.internal
"""

import os
import json
import logging
import functools
import urllib.parse
import urllib.request
from collections.abc import Callable

import boto3

from shortkeys.types import AppConfig, LambdaConfiguration
from shortkeys.constants import ENV
from shortkeys.exceptions import AppConfigError, BadConfigurationError
from shortkeys.utils.helpers import require_environment
from shortkeys.utils.runtime import running_locally


logger = logging.getLogger(__name__)

LOCAL_AGENT_HOSTS = frozenset({'localhost', '127.0.0.1', 'host.docker.internal', 'appconfig-agent'})
LOCAL_AGENT_PORTS = frozenset({2772, None})


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return the Redis key namespace as '<app name>:<app env>', or None if APP_NAME is unset."""
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def host_domain() -> str | None:
    """Return the configured public domain for short links (e.g. 'https://sho.rt'), or None."""
    domain = os.environ.get(ENV.App.HOST_DOMAIN, '').strip()
    if not domain:
        logger.debug('HOST_DOMAIN is not set. Falling back to the API Gateway domain.')
        return None
    return domain.rstrip('/')


def _select_function_config(document: AppConfig, function_name: str) -> LambdaConfiguration:
    """Pick the active backend's section for one Lambda out of an AppConfig document."""
    try:
        backend = document['active_backend']
        return {backend: document['configs'][function_name][backend]}
    except (KeyError, TypeError) as e:
        raise AppConfigError(f"AppConfig document has no '{function_name}' configuration for the active backend.") from e


def _validate_agent_url(url: str | None) -> str:
    if not url:
        return ''
    components = urllib.parse.urlparse(url)
    if components.scheme not in {'http', 'https'}:
        raise BadConfigurationError(f'Bad scheme {url}')
    if components.hostname not in LOCAL_AGENT_HOSTS:
        raise BadConfigurationError(f'Bad host {url}')
    if components.port not in LOCAL_AGENT_PORTS:
        raise BadConfigurationError(f'Bad port {url}')
    return url


def _sam_load_local_appconfig(func: Callable) -> Callable:
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM.

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the app configuration JSON from the local
          AppConfig agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        APPCONFIG_AGENT_URL     : Base URL of the local AppConfig Agent (e.g., http://appconfig-agent:2772).
        APPCONFIG_PROFILE_NAME  : Optional profile name (default: "backend-config").
    """

    @functools.wraps(func)
    def wrapper(function_name: str) -> LambdaConfiguration:
        agent_url = _validate_agent_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(function_name)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'functionName': function_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            document = json.load(r)

        data = _select_function_config(document, function_name)
        logger.debug('Loaded AppConfig from local agent.', extra={'functionName': function_name, 'build': document.get('build')})
        return data

    return wrapper


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(function_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig.

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'encode_url', 'redirect_url').

    Environment variables required:
        APPCONFIG_APP_ID       : AppConfig Application ID
        APPCONFIG_ENV_ID       : AppConfig Environment ID
        APPCONFIG_PROFILE_ID   : AppConfig Configuration Profile ID

    Args:
        function_name (str):
            Name of the Lambda (e.g., "encode_url" or "redirect_url").

    Returns:
        dict: {<active backend>: <the lambda's backend config>}

    Raises:
        MissingEnvironmentVariableError:
            If any of the AppConfig environment variables is missing.
        AppConfigError:
            If the document lacks the active backend section for this Lambda.

    Example:
        >>> app_config = load_config('encode_url')
        >>> app_config['redis']['host']
        'redis-15501.host.docker.internal'
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'functionName': function_name})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    try:
        document = json.loads(content.decode('utf-8'))
    except json.JSONDecodeError as e:
        raise AppConfigError('AppConfig returned a document which is not valid JSON.') from e

    data = _select_function_config(document, function_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'functionName': function_name, 'build': document.get('build')})
    return data
