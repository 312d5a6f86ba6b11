import string
from enum import StrEnum


# Short key lengths (stage 1 uses the short length, stages 2 and 3 the long one)
SHORT_KEY_LENGTH = 6
LONG_KEY_LENGTH = 8

# Deterministic probes per generation stage
MAX_ATTEMPTS = 5
# Probes across all stages before falling through to a random key
MAX_PROBE_DEPTH = 10

# URL-safe base64 alphabet: A-Z a-z 0-9 - _
SHORT_KEY_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + '-_'

SUPPORTED_SCHEMES = frozenset({'http', 'https'})
DEFAULT_PORTS = {'http': 80, 'https': 443}

# Fallback base URL for short links when neither HOST_DOMAIN nor API Gateway provide one
DEFAULT_HOST_DOMAIN = 'http://localhost:3000'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        HOST_DOMAIN = 'HOST_DOMAIN'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
