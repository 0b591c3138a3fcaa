"""Exceptions raised by webclient.

Transport and body-read failures are not wrapped: they surface as the
httpx exceptions that caused them.
"""


class WebClientError(Exception):
    """Base class for errors raised by this package."""


class InvalidSiteURLError(WebClientError, ValueError):
    def __init__(self, site_url: str, reason: str):
        self.site_url = site_url
        super().__init__(f"Invalid site URL {site_url!r}: {reason}")


class MalformedCookieFileError(WebClientError):
    def __init__(self, file_path, reason: str):
        self.file_path = str(file_path)
        super().__init__(f"Malformed cookie file {self.file_path}: {reason}")


class CookieScopeError(WebClientError, ValueError):
    """A cookie record names a domain the target site cannot set."""
