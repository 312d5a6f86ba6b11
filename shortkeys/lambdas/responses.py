"""API Gateway (Lambda Proxy) response builders shared by all HTTP lambdas"""

import json

from shortkeys.types import HttpHeaders, LambdaResponse


CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
}


def _response(status_code: int, body: dict, headers: HttpHeaders | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def _error_body(base: str, message: str | None, error_code: str | None) -> dict:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return body


def response_200(**fields) -> LambdaResponse:
    return _response(200, fields)


def response_302(*, location: str) -> LambdaResponse:
    return _response(302, {}, headers={'Location': location})


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _response(400, _error_body('Bad Request', message, error_code))


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    body = {'message': message or 'Not Found'}
    if error_code:
        body['errorCode'] = error_code
    return _response(404, body)


def response_409(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _response(409, _error_body('Conflict', message, error_code))


def response_500(message: str | None = None) -> LambdaResponse:
    return _response(500, _error_body('Internal Server Error', message, None))
