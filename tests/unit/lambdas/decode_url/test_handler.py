import json
from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from shortkeys.types import LambdaContext, LambdaConfiguration
from shortkeys.lambdas.decode_url import app
from shortkeys.exceptions import AppConfigError


class TestDecodeUrlHandler:
    @pytest.fixture
    def context(self) -> LambdaContext:
        return cast(LambdaContext, {'function_name': 'decode_url'})

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, context: LambdaContext, config: LambdaConfiguration, dao, make_event) -> None:
        # Patch Lambda dependencies
        monkeypatch.setattr(app, 'load_config', lambda *a, **kw: config)
        monkeypatch.setattr(app, 'UrlRecordRedisDAO', lambda *a, **kw: dao)

        dao.insert_unique('https://example.com/blog/chuck-norris-is-awesome', 'Xq3_9a')

        self.monkeypatch = monkeypatch
        self.context = context
        self.make_event = make_event

    def decode(self, body):
        response = app.lambda_handler(self.make_event(body=body, path='/v1/decode'), self.context)
        return response, json.loads(response['body'])

    @pytest.mark.parametrize('submitted', ['https://sho.rt/Xq3_9a', 'http://localhost:3000/Xq3_9a/', '/Xq3_9a', 'Xq3_9a'])
    def test_lambda_handler(self, submitted) -> None:
        response, body = self.decode(json.dumps({'url': submitted}))

        assert response['statusCode'] == 200
        assert body == {'url': 'https://example.com/blog/chuck-norris-is-awesome'}

    def test_lambda_handler_unknown_key(self) -> None:
        response, body = self.decode(json.dumps({'url': 'https://sho.rt/nope00'}))

        assert response['statusCode'] == 404
        assert body['message'] == 'URL not found'
        assert body['errorCode'] == 'URL_NOT_FOUND'

    @pytest.mark.parametrize('request_body', [None, '{}', json.dumps({'url': ''})])
    def test_lambda_handler_missing_url(self, request_body) -> None:
        response, body = self.decode(request_body)

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'MISSING_URL'

    def test_lambda_handler_invalid_json(self) -> None:
        response, body = self.decode('not json')

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'INVALID_JSON'

    def test_lambda_handler_config_unavailable(self) -> None:
        self.monkeypatch.setattr(app, 'load_config', MagicMock(side_effect=AppConfigError('bad document')))

        response, body = self.decode(json.dumps({'url': 'Xq3_9a'}))

        assert response['statusCode'] == 500
        assert body['message'] == 'Internal Server Error'
