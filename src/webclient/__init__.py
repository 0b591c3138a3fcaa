"""webclient - a preconfigured HTTP client with cookies, timeouts and retries.

Wraps httpx.Client with a persistent cookie jar, composed connect/request
timeouts, retry-on-transport-failure and optional verbose request logging.

Components:
- client: WebClient and the fetch/retry loop
- cookies: cookie scoping and cookie file persistence
- transport: timeout composition and transport construction
- schemas: ClientOptions and CookieRecord models
"""

from .client import WebClient, create_web_client
from .errors import CookieScopeError, InvalidSiteURLError, MalformedCookieFileError, WebClientError
from .schemas.cookies import CookieRecord
from .schemas.options import ClientOptions, DEFAULT_OPTIONS

__all__ = [
    "WebClient",
    "create_web_client",
    "ClientOptions",
    "DEFAULT_OPTIONS",
    "CookieRecord",
    "WebClientError",
    "InvalidSiteURLError",
    "MalformedCookieFileError",
    "CookieScopeError",
]
