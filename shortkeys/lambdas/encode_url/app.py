import json
import logging

from shortkeys.types import LambdaEvent, LambdaContext, LambdaResponse
from shortkeys.coordinator import ShortKeyCoordinator
from shortkeys.dao.redis import UrlRecordRedisDAO
from shortkeys.dao.exceptions import ConflictError
from shortkeys.exceptions import ConfigurationError, InfrastructureError, NormalizationError
from shortkeys.utils import load_config, get_short_url, app_prefix, host_domain
from shortkeys.utils.helpers import guarantee_500_response
from shortkeys.lambdas.responses import response_200, response_400, response_409, response_500
from shortkeys.lambdas.encode_url.constants import (
    MISSING_URL,
    INVALID_JSON,
    INVALID_URL,
    SHORT_KEY_CONFLICT,
    CONFIG_UNAVAILABLE,
    ENCODE_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to encode (shorten) URLs

    This Lambda handler follows this procedure to encode URLs:
    - Step 1: Extract the raw URL from the request body
    - Step 2: Normalize it and find or create its short key (via ShortKeyCoordinator)
    - Step 3: Respond to the client with the public short URL

    HTTP responses:
        200: Successful encoding
            url: short URL
            short_key: short key of the canonical URL
            canonical_url: normalized form of the submitted URL
        400: Bad client request
            message: invalid JSON, missing 'url' or URL which can't be normalized
            errorCode: event code or normalization error code
        409: Conflict
            message: a concurrent write took the short key and re-reading didn't resolve it
        500: Internal server error
            message: the server experienced an internal error

    Example:
        >>> event = {'body': '{"url": "HTTP://WWW.Example.COM:80/?b=2&a=1"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['canonical_url']
        'http://example.com?a=1&b=2'
    """
    # 0- Get application's config
    try:
        app_config = load_config('encode_url')
    except (ConfigurationError, InfrastructureError):
        logger.exception('Failed to load AppConfig for encode URL function. Responding with 500.', extra={'event': CONFIG_UNAVAILABLE})
        return response_500()
    else:
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}

    # 1- Extract raw URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON)

    raw_url = request_body.get('url') if isinstance(request_body, dict) else None
    if not raw_url or not isinstance(raw_url, str):
        logger.info("Missing 'url' in JSON body. Responding with 400.", extra={'event': MISSING_URL})
        return response_400(message="missing 'url' in JSON body", error_code=MISSING_URL)

    # 2- Normalize and find or create the short key
    coordinator = ShortKeyCoordinator(UrlRecordRedisDAO(**redis_config, prefix=app_prefix()))
    try:
        record = coordinator.shorten(raw_url)
    except NormalizationError as e:
        logger.info('Submitted URL is invalid. Responding with 400.', extra={'event': INVALID_URL, 'reason': e.error_code})
        return response_400(message=str(e), error_code=e.error_code)
    except ConflictError:
        logger.warning('Unresolved short key conflict. Responding with 409.', extra={'event': SHORT_KEY_CONFLICT})
        return response_409(message='short key was taken by a concurrent request, please retry', error_code=SHORT_KEY_CONFLICT)

    # 3- Respond with the public short URL
    short_url = get_short_url(record.short_key, event, host_domain=host_domain())
    logger.info('Encoded URL. Responding with 200.', extra={'event': ENCODE_SUCCESS, 'shortKey': record.short_key})
    return response_200(url=short_url, short_key=record.short_key, canonical_url=record.canonical_url)
