class UrlshError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:urlsh_error'


class InvalidURLError(UrlshError):
    """Raised when a target URL is not an absolute http(s) URL."""

    error_code = 'input:invalid_url_error'


class InvalidShortcodeError(UrlshError):
    """Raised when a custom shortcode violates the length or character rules."""

    error_code = 'input:invalid_shortcode_error'


class ConfigurationError(UrlshError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
