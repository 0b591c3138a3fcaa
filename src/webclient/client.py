"""Preconfigured HTTP client with a cookie jar, timeouts and retries.

WebClient wraps a single httpx.Client. Every request goes through fetch(),
which retries transport failures up to ClientOptions.max_tries times.
"""

import logging
import time
import httpx
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union
from tenacity import Retrying, RetryCallState, retry_if_exception_type, stop_after_attempt, wait_fixed

from .cookies import cookies_for_url, install_cookies, read_cookie_file, write_cookie_file
from .log import get_logger
from .schemas.cookies import CookieRecord
from .schemas.options import ClientOptions, DEFAULT_OPTIONS
from .transport import build_timeout, build_transport

logger = get_logger("client")

Headers = Union[Mapping[str, Union[str, Sequence[str]]], Sequence[Tuple[str, str]]]
Body = Union[bytes, str, Iterable[bytes]]

def _header_pairs(headers: Optional[Headers]) -> List[Tuple[str, str]]:
    # Flattened to pairs so repeated names are all sent
    if not headers:
        return []
    items = headers.items() if isinstance(headers, Mapping) else headers
    pairs = []
    for name, value in items:
        if isinstance(value, (str, bytes)):
            pairs.append((name, value))
        else:
            pairs.extend((name, v) for v in value)
    return pairs

class WebClient:
    """
    A session-like HTTP client. The cookie jar is shared by every request
    made through the instance and picks up Set-Cookie headers automatically.
    """

    def __init__(self, options: Optional[ClientOptions] = None, transport: Optional[httpx.BaseTransport] = None):
        self.options = options if options is not None else DEFAULT_OPTIONS
        self._client = httpx.Client(
            timeout=build_timeout(self.options),
            transport=transport if transport is not None else build_transport(),
            follow_redirects=True,
        )

    @property
    def cookie_jar(self):
        return self._client.cookies.jar

    def get(self, url: str, headers: Optional[Headers] = None) -> bytes:
        return self.fetch("GET", url, headers)

    def post(self, url: str, headers: Optional[Headers] = None, body: Optional[Body] = None) -> bytes:
        return self.fetch("POST", url, headers, body)

    def custom_request(self, method: str, url: str, headers: Optional[Headers] = None, body: Optional[Body] = None) -> bytes:
        return self.fetch(method, url, headers, body)

    def fetch(self, method: str, url: str, headers: Optional[Headers] = None, body: Optional[Body] = None) -> bytes:
        """
        Sends one logical request and returns the full response body.

        Transport failures (httpx.TransportError) are retried up to
        options.max_tries times, sleeping options.effective_retry_delay between
        attempts; the last error is re-raised once the budget is spent.
        The same request is re-sent on retry, so a body that can only be
        read once will fail with httpx.StreamConsumed. Pass bytes, or use
        max_tries=0 for streaming uploads.
        Errors while reading the body are raised without retrying.
        When options.timeout is set it also bounds the whole attempt that
        succeeded, body included: a body still arriving past that deadline
        raises httpx.ReadTimeout.
        Status codes are returned as-is, never raised.

        Verbose lines are logged at INFO on the "webclient" logger, so they
        only show once logging is configured, e.g. with log.setup_logging().
        """
        request = self._client.build_request(method, url, headers=_header_pairs(headers), content=body)
        self._log("%s %s", request.method, request.url)

        retrying = Retrying(
            stop=stop_after_attempt(self.options.max_tries + 1),
            wait=wait_fixed(self.options.effective_retry_delay),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=self._log_retry,
            retry_error_callback=self._abort,
        )
        started = time.monotonic()

        def send():
            nonlocal started
            started = time.monotonic()
            return self._client.send(request, stream=True)

        response = retrying(send)
        try:
            self._log("%s %s -> %d", request.method, request.url, response.status_code)
            return self._drain(response, started)
        finally:
            response.close()

    def _drain(self, response: httpx.Response, started: float) -> bytes:
        if self.options.timeout <= 0:
            return response.read()

        deadline = started + self.options.timeout
        chunks = []
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            if time.monotonic() > deadline:
                raise httpx.ReadTimeout(
                    f"response body not complete after {self.options.timeout}s", request=response.request
                )
        return b"".join(chunks)

    def cookies(self, site_url: str) -> List[CookieRecord]:
        """Cookies scoped to site_url; host-only cookies are reported for their exact host only."""
        return cookies_for_url(self.cookie_jar, site_url)

    def export_cookies(self, file_path, site_url: str):
        records = cookies_for_url(self.cookie_jar, site_url)
        write_cookie_file(file_path, records)
        self._log("exported %d cookie(s) for %s to %s", len(records), site_url, file_path)

    def import_cookies(self, file_path, site_url: str):
        """
        Loads cookies from file_path into the jar, scoped to site_url.
        Nothing is installed unless every record is valid for the site.
        """
        records = read_cookie_file(file_path)
        install_cookies(self.cookie_jar, records, site_url)
        self._log("imported %d cookie(s) for %s from %s", len(records), site_url, file_path)

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _log(self, msg: str, *args, level: int = logging.INFO):
        if self.options.verbose:
            logger.log(level, msg, *args)

    def _log_retry(self, retry_state: RetryCallState):
        self._log(
            "retry after %.1fs due to call failure (attempt %d/%d): %r",
            retry_state.next_action.sleep,
            retry_state.attempt_number,
            self.options.max_tries + 1,
            retry_state.outcome.exception(),
            level=logging.WARNING,
        )

    def _abort(self, retry_state: RetryCallState):
        self._log("aborting fetch after %d attempt(s)", retry_state.attempt_number, level=logging.WARNING)
        # re-raises the last transport error
        return retry_state.outcome.result()

def create_web_client(options: Optional[ClientOptions] = None, *, transport: Optional[httpx.BaseTransport] = None) -> WebClient:
    return WebClient(options, transport=transport)
