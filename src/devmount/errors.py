"""devmount exception hierarchy.

Setup-time problems are fatal and raised to the caller. Per-request
problems (bad URLs, missing files) never leave the resolver.
"""


class DevMountError(Exception):
    """Base for all devmount-specific errors."""


class ConfigurationError(DevMountError):
    """Raised when the middleware configuration is invalid.

    Typically raised by ``setup_output_filesystem()`` when the supplied
    output filesystem does not expose the methods the resolver needs.
    No request could ever succeed with such a setup.
    """


class UrlParseError(DevMountError, ValueError):
    """Raised by the URL parser for input it cannot split."""
