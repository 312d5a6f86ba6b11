import logging

from shortkeys.types import LambdaEvent, LambdaContext, LambdaResponse
from shortkeys.coordinator import ShortKeyCoordinator
from shortkeys.dao.redis import UrlRecordRedisDAO
from shortkeys.dao.exceptions import NotFoundError
from shortkeys.exceptions import ConfigurationError, InfrastructureError
from shortkeys.utils import load_config, get_short_url, app_prefix, host_domain
from shortkeys.utils.helpers import guarantee_500_response
from shortkeys.lambdas.responses import response_302, response_400, response_404, response_500
from shortkeys.lambdas.redirect_url.constants import (
    MISSING_SHORT_KEY,
    SHORT_KEY_NOT_FOUND,
    CONFIG_UNAVAILABLE,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect short URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract short key from request path
    - Step 2: Get URL record from database
    - Step 3: Redirect client to the canonical URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: canonical URL
        400: Bad client request
            message: missing short key in path parameters
        404: Not found
            message: short key doesn't exist
        500: Internal server error

    Example:
        >>> event = {'pathParameters': {'short_key': 'Xq3_9a'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_url')
    except (ConfigurationError, InfrastructureError):
        logger.exception('Failed to load AppConfig for redirect URL function. Responding with 500.', extra={'event': CONFIG_UNAVAILABLE})
        return response_500()
    else:
        logger.debug('Assuming Redis as the backend database for URL records')
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}

    # 1- Extract short key from request's path
    short_key = (event.get('pathParameters') or {}).get('short_key')
    if not short_key:
        logger.info("Missing 'short_key' in path. Responding with 400.", extra={'event': MISSING_SHORT_KEY})
        return response_400(message="missing 'short_key' in path", error_code=MISSING_SHORT_KEY)

    # 2- Get URL record from database
    coordinator = ShortKeyCoordinator(UrlRecordRedisDAO(**redis_config, prefix=app_prefix()))
    try:
        record = coordinator.expand(short_key)
    except NotFoundError:
        short_url = get_short_url(short_key, event, host_domain=host_domain())
        logger.info('URL record not found in database. Responding with 404.', extra={'event': SHORT_KEY_NOT_FOUND, 'shortKey': short_key})
        return response_404(message=f"short url {short_url} doesn't exist", error_code=SHORT_KEY_NOT_FOUND)

    # 3- Redirect client to canonical URL
    logger.info('Redirecting client to canonical URL. Responding with 302.', extra={'event': REDIRECT_SUCCESS, 'shortKey': short_key})
    return response_302(location=record.canonical_url)
