class ShortKeysError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shortkeys_error'


class NormalizationError(ShortKeysError):
    """Base exception for URLs which can't be turned into a canonical URL.

    Normalization errors are data problems: they are reported to the caller
    and never retried.
    """

    error_code = 'url:normalization_error'

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class EmptyUrlError(NormalizationError):
    """Raised when the URL is missing, empty or whitespace only."""

    error_code = 'url:empty_url_error'


class InvalidUrlError(NormalizationError):
    """Raised when the URL can't be parsed."""

    error_code = 'url:invalid_url_error'


class MissingHostError(NormalizationError):
    """Raised when the URL has no host component."""

    error_code = 'url:missing_host_error'


class UnsupportedSchemeError(NormalizationError):
    """Raised when the URL scheme is neither http nor https."""

    error_code = 'url:unsupported_scheme_error'

    def __init__(self, message: str, url: str | None = None, scheme: str | None = None):
        super().__init__(message, url=url)
        self.scheme = scheme


class ConfigurationError(ShortKeysError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class InfrastructureError(ShortKeysError):
    """Base exception for all infrastructure (AWS) errors."""

    error_code = 'infra:infrastructure_error'


class AppConfigError(InfrastructureError):
    """Raised when AppConfig responds with erroneous data."""

    error_code = 'infra:appconfig_error'
