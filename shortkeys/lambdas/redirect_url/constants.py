# Event codes
MISSING_SHORT_KEY = 'MISSING_SHORT_KEY'
SHORT_KEY_NOT_FOUND = 'SHORT_KEY_NOT_FOUND'
CONFIG_UNAVAILABLE = 'CONFIG_UNAVAILABLE'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
