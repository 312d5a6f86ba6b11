# Event codes
MISSING_URL = 'MISSING_URL'
INVALID_JSON = 'INVALID_JSON'
URL_NOT_FOUND = 'URL_NOT_FOUND'
CONFIG_UNAVAILABLE = 'CONFIG_UNAVAILABLE'
DECODE_SUCCESS = 'DECODE_SUCCESS'
