from shortkeys.utils.config import app_env, app_name, app_prefix, host_domain, load_config
from shortkeys.utils.helpers import base_url, get_short_url, extract_short_key, require_environment, guarantee_500_response
from shortkeys.utils.normalizer import normalize_url
from shortkeys.utils.shortener import KeyProbe, derive_short_key, generate_short_key, random_short_key, fallback_short_key
from shortkeys.utils.logging import initialize_logging


__all__ = [
    'normalize_url',
    'KeyProbe',
    'derive_short_key',
    'generate_short_key',
    'random_short_key',
    'fallback_short_key',
    'app_env',
    'app_name',
    'app_prefix',
    'host_domain',
    'load_config',
    'base_url',
    'get_short_url',
    'extract_short_key',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
