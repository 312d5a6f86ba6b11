# Event codes
MISSING_URL = 'MISSING_URL'
INVALID_JSON = 'INVALID_JSON'
INVALID_URL = 'INVALID_URL'
SHORT_KEY_CONFLICT = 'SHORT_KEY_CONFLICT'
CONFIG_UNAVAILABLE = 'CONFIG_UNAVAILABLE'
ENCODE_SUCCESS = 'ENCODE_SUCCESS'
