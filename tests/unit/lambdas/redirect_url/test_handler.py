import json
from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from shortkeys.types import LambdaContext, LambdaConfiguration
from shortkeys.lambdas.redirect_url import app
from shortkeys.exceptions import AppConfigError


class TestRedirectUrlHandler:
    @pytest.fixture
    def context(self) -> LambdaContext:
        return cast(LambdaContext, {'function_name': 'redirect_url'})

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, context: LambdaContext, config: LambdaConfiguration, dao, make_event) -> None:
        # Patch Lambda dependencies
        monkeypatch.setattr(app, 'load_config', lambda *a, **kw: config)
        monkeypatch.setattr(app, 'UrlRecordRedisDAO', lambda *a, **kw: dao)

        dao.insert_unique('https://example.com/blog/chuck-norris-is-awesome', 'Xq3_9a')

        self.monkeypatch = monkeypatch
        self.context = context
        self.make_event = make_event

    def redirect(self, path_parameters):
        event = self.make_event(path_parameters=path_parameters, method='GET', path='/{short_key}')
        response = app.lambda_handler(event, self.context)
        return response, json.loads(response['body'])

    def test_lambda_handler(self) -> None:
        response, body = self.redirect({'short_key': 'Xq3_9a'})

        # Assert Lambda successfully redirects user to the canonical URL
        assert response['statusCode'] == 302
        assert body == {}
        assert response['headers']['Location'] == 'https://example.com/blog/chuck-norris-is-awesome'

    @pytest.mark.parametrize('path_parameters', [None, {}, {'invalid': 'path'}, {'short_key': ''}])
    def test_lambda_handler_with_invalid_path_parameters(self, path_parameters) -> None:
        response, body = self.redirect(path_parameters)

        assert response['statusCode'] == 400
        assert body['message'] == "Bad Request (missing 'short_key' in path)"
        assert body['errorCode'] == 'MISSING_SHORT_KEY'

    def test_lambda_handler_with_unknown_short_key(self) -> None:
        response, body = self.redirect({'short_key': 'nope00'})

        assert response['statusCode'] == 404
        assert body['message'] == "short url https://sho.rt/nope00 doesn't exist"
        assert body['errorCode'] == 'SHORT_KEY_NOT_FOUND'

    def test_lambda_handler_with_unknown_short_key_and_host_domain(self) -> None:
        self.monkeypatch.setenv('HOST_DOMAIN', 'https://short.test')

        _, body = self.redirect({'short_key': 'nope00'})

        assert body['message'] == "short url https://short.test/nope00 doesn't exist"

    def test_lambda_handler_config_unavailable(self) -> None:
        self.monkeypatch.setattr(app, 'load_config', MagicMock(side_effect=AppConfigError('bad document')))

        response, body = self.redirect({'short_key': 'Xq3_9a'})

        assert response['statusCode'] == 500
        assert body['message'] == 'Internal Server Error'

    def test_lambda_handler_unexpected_error(self) -> None:
        self.monkeypatch.setattr(app, 'ShortKeyCoordinator', MagicMock(side_effect=RuntimeError('boom')))

        response, body = self.redirect({'short_key': 'Xq3_9a'})

        assert response['statusCode'] == 500
        assert body['error_code'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'
