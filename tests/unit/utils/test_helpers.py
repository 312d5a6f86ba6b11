"""Unit tests for helper functions in helpers.py.

Test coverage includes:

1. base_url() correct extraction
   - 1.1. Ensures URLs include the stage (e.g., `/Prod`) when invoked via AWS.
   - 1.2. Ensures URLs do NOT include stage information for clean public links.
   - 1.3. Confirms a proper localhost fallback is returned when no domain is present.

2. get_short_url() retrieves short URL string representation
   - Prefers an explicitly configured host domain.

3. extract_short_key() pulls the key out of short URLs, paths and bare keys

4. require_environment() decorator behavior
   - 4.1. Ensures decorated functions execute when all env vars are present.
   - 4.2. Ensures missing or empty env vars raise MissingEnvironmentVariableError.

5. guarantee_500_response() behavior
"""

import json

import pytest

from shortkeys.exceptions import MissingEnvironmentVariableError
from shortkeys.utils.helpers import (
    base_url,
    get_short_url,
    extract_short_key,
    require_environment,
    guarantee_500_response,
)


# -------------------------------
# 1.1. AWS default domain handling
# -------------------------------


@pytest.mark.parametrize(
    'domain, stage, expected',
    [
        ('abc123.execute-api.us-east-1.amazonaws.com', 'Dev', 'https://abc123.execute-api.us-east-1.amazonaws.com/Dev'),
        ('abc123.execute-api.us-east-1.amazonaws.com', 'Prod', 'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'),
    ],
)
def test_base_url_with_aws_domain(domain, stage, expected):
    """Ensure base_url() appends stage for default AWS execute-api domains."""
    event = {'requestContext': {'domainName': domain, 'stage': stage}}
    assert base_url(event) == expected


# -------------------------------
# 1.2. Custom domain handling
# -------------------------------


@pytest.mark.parametrize(
    'domain, stage, expected',
    [
        ('sho.rt', 'Dev', 'https://sho.rt'),
        ('example.com', 'Prod', 'https://example.com'),
    ],
)
def test_base_url_with_custom_domain(domain, stage, expected):
    """Ensure base_url() excludes stage for custom user-defined domains."""
    event = {'requestContext': {'domainName': domain, 'stage': stage}}
    assert base_url(event) == expected


# -------------------------------
# 1.3. Local fallback behavior
# -------------------------------


@pytest.mark.parametrize(
    'event',
    [
        {},
        {'requestContext': {}},
        {'requestContext': {'domainName': ''}},
        {'requestContext': {'stage': 'Dev'}},
    ],
)
def test_base_url_local_fallback(event):
    """Ensure base_url() falls back to localhost when requestContext has no domain."""
    assert base_url(event) == 'http://localhost:3000'


# -------------------------------
# 2. Get short url string representation
# -------------------------------


@pytest.mark.parametrize(
    'short_key, host_domain, expected',
    [
        ('Xq3_9a', None, 'https://sho.rt/Xq3_9a'),
        ('Xq3_9a', 'https://short.test', 'https://short.test/Xq3_9a'),
        ('b7Kp-0Qz', 'https://short.test/', 'https://short.test/b7Kp-0Qz'),
    ],
)
def test_get_short_url(short_key, host_domain, expected):
    """Ensure get_short_url() prefers the configured host domain."""
    event = {'requestContext': {'domainName': 'sho.rt', 'stage': 'Prod'}}
    assert get_short_url(short_key, event, host_domain=host_domain) == expected


def test_get_short_url_local_fallback():
    assert get_short_url('Xq3_9a', {}) == 'http://localhost:3000/Xq3_9a'


# -------------------------------
# 3. extract_short_key()
# -------------------------------


@pytest.mark.parametrize(
    'submitted, expected',
    [
        ('http://localhost:3000/Xq3_9a', 'Xq3_9a'),
        ('https://sho.rt/Xq3_9a/', 'Xq3_9a'),
        ('https://sho.rt/Xq3_9a?utm=1#top', 'Xq3_9a'),
        ('/Xq3_9a', 'Xq3_9a'),
        ('Xq3_9a', 'Xq3_9a'),
        ('  Xq3_9a  ', 'Xq3_9a'),
        ('Xq3_9a?x=1', 'Xq3_9a'),
        ('https://sho.rt', 'sho.rt'),
        ('https://sho.rt/', 'sho.rt'),
    ],
)
def test_extract_short_key(submitted, expected):
    assert extract_short_key(submitted) == expected


# -------------------------------
# 4.1. require_environment() happy path
# -------------------------------


def test_require_environment_happy_path(monkeypatch):
    """4.1. Decorated function executes when all env vars are present."""
    monkeypatch.setenv('ENV1', 'value1')
    monkeypatch.setenv('ENV2', 'value2')

    @require_environment('ENV1', 'ENV2')
    def sample_function(x: int) -> int:
        return x + 1

    assert sample_function(1) == 2


# -------------------------------
# 4.2. require_environment() missing or empty env vars
# -------------------------------


@pytest.mark.parametrize(
    'env_setup, missing_names',
    [
        ({'ENV1': None, 'ENV2': 'value2'}, ["'ENV1'"]),
        ({'ENV1': '', 'ENV2': 'value2'}, ["'ENV1'"]),
        ({'ENV1': None, 'ENV2': None}, ["'ENV1'", "'ENV2'"]),
        ({'ENV1': '', 'ENV2': ''}, ["'ENV1'", "'ENV2'"]),
    ],
)
def test_require_environment_missing_or_empty(monkeypatch, env_setup, missing_names):
    """4.2. Missing or empty env vars raise a descriptive error."""
    for name, value in env_setup.items():
        if value is None:
            monkeypatch.delenv(name, raising=False)
        else:
            monkeypatch.setenv(name, value)

    @require_environment('ENV1', 'ENV2')
    def sample_function() -> None:
        pass

    expected_message = f'Missing required environment variables: {", ".join(missing_names)}'
    with pytest.raises(MissingEnvironmentVariableError, match=expected_message):
        sample_function()


# -------------------------------
# 5. guarantee_500_response() behavior
# -------------------------------


def test_guarantee_500_response(monkeypatch):
    """5.1. Faulty lambda handler returns 500 response when not running locally."""
    monkeypatch.setattr('shortkeys.utils.helpers.running_locally', lambda: False)

    @guarantee_500_response
    def faulty_lambda_handler(event, context):
        raise RuntimeError('boom')

    response = faulty_lambda_handler({}, None)
    body = json.loads(response['body'])

    assert response['statusCode'] == 500
    assert body['message'] == 'Internal Server Error'
    assert body['error_code'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'


def test_guarantee_500_response_reraises_when_running_locally(monkeypatch):
    """5.2. Faulty lambda handler reraises the original exception when running locally."""
    monkeypatch.setattr('shortkeys.utils.helpers.running_locally', lambda: True)

    @guarantee_500_response
    def faulty_lambda_handler(event, context):
        raise RuntimeError('boom')

    with pytest.raises(RuntimeError, match='boom'):
        faulty_lambda_handler({}, None)


def test_guarantee_500_response_passes_through_responses():
    @guarantee_500_response
    def lambda_handler(event, context):
        return {'statusCode': 200, 'body': '{}'}

    assert lambda_handler({}, None) == {'statusCode': 200, 'body': '{}'}
