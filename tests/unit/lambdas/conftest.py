from typing import cast

import pytest

from shortkeys.types import LambdaEvent, LambdaConfiguration
from shortkeys.dao.memory import UrlRecordMemoryDAO


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    """Run handlers as deployed Lambdas (no local re-raising) without HOST_DOMAIN."""
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.setenv('APP_NAME', 'shortkeys')
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)
    monkeypatch.delenv('HOST_DOMAIN', raising=False)


@pytest.fixture
def config() -> LambdaConfiguration:
    return cast(LambdaConfiguration, {'redis': {'host': 'redis.test', 'port': 6379, 'db': 0}})


@pytest.fixture
def dao() -> UrlRecordMemoryDAO:
    return UrlRecordMemoryDAO()


@pytest.fixture
def make_event():
    def _make_event(body=None, path_parameters=None, method='POST', path='/v1/encode') -> LambdaEvent:
        return cast(
            LambdaEvent,
            {
                'body': body,
                'resource': path,
                'headers': {'User-Agent': 'pytest', 'Content-Type': 'application/json'},
                'httpMethod': method,
                'path': path,
                'pathParameters': path_parameters,
                'requestContext': {'resourcePath': path, 'httpMethod': method, 'domainName': 'sho.rt', 'stage': 'test'},
            },
        )

    return _make_event
