import json
import logging

from shortkeys.types import LambdaEvent, LambdaContext, LambdaResponse
from shortkeys.coordinator import ShortKeyCoordinator
from shortkeys.dao.redis import UrlRecordRedisDAO
from shortkeys.exceptions import ConfigurationError, InfrastructureError
from shortkeys.utils import load_config, app_prefix, extract_short_key
from shortkeys.utils.helpers import guarantee_500_response
from shortkeys.lambdas.responses import response_200, response_400, response_404, response_500
from shortkeys.lambdas.decode_url.constants import (
    MISSING_URL,
    INVALID_JSON,
    URL_NOT_FOUND,
    CONFIG_UNAVAILABLE,
    DECODE_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to decode short URLs

    Accepts a full short URL, a bare path ('/Xq3_9a') or the short key itself.

    HTTP responses:
        200: Successful decoding
            url: canonical URL behind the short key
        400: Bad client request
            message: invalid JSON or missing 'url'
        404: Not found
            message: URL not found
        500: Internal server error
    """
    # 0- Get application's config
    try:
        app_config = load_config('decode_url')
    except (ConfigurationError, InfrastructureError):
        logger.exception('Failed to load AppConfig for decode URL function. Responding with 500.', extra={'event': CONFIG_UNAVAILABLE})
        return response_500()
    else:
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}

    # 1- Extract short URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON)

    submitted = request_body.get('url') if isinstance(request_body, dict) else None
    if not submitted or not isinstance(submitted, str):
        logger.info("Missing 'url' in JSON body. Responding with 400.", extra={'event': MISSING_URL})
        return response_400(message="missing 'url' in JSON body", error_code=MISSING_URL)

    # 2- Resolve short key
    short_key = extract_short_key(submitted)
    coordinator = ShortKeyCoordinator(UrlRecordRedisDAO(**redis_config, prefix=app_prefix()))
    canonical_url = coordinator.resolve(short_key)
    if canonical_url is None:
        logger.info('Short key not found. Responding with 404.', extra={'event': URL_NOT_FOUND, 'shortKey': short_key})
        return response_404(message='URL not found', error_code=URL_NOT_FOUND)

    logger.info('Decoded short key. Responding with 200.', extra={'event': DECODE_SUCCESS, 'shortKey': short_key})
    return response_200(url=canonical_url)
