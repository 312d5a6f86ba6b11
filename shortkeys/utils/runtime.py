"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if lambda is running in local SAM, False otherwise.
"""

import os

from shortkeys.constants import ENV


def running_locally() -> bool:
    """Check if the lambda is running locally via sam local invoke

    Returns:
        bool: True if running locally, False otherwise.

    Example:
        >>> os.environ['APP_ENV'] = 'local'
        >>> running_locally()
        True
        >>> os.environ['APP_ENV'] = 'dev'
        >>> running_locally()
        False
    """
    env = os.getenv(ENV.App.APP_ENV, '').lower()
    return env == 'local' or os.getenv(ENV.App.AWS_SAM_LOCAL) == 'true'
