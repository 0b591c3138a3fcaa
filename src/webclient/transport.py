"""Timeout composition and transport construction for WebClient."""

import httpx
from .schemas.options import ClientOptions

def _limit(seconds: float):
    # httpx uses None for "no limit"
    return seconds if seconds > 0 else None

def build_timeout(options: ClientOptions) -> httpx.Timeout:
    """
    Maps ClientOptions onto httpx's per-phase timeouts.
    httpx's connect phase covers both the TCP dial and the TLS handshake,
    so its budget is the sum of whichever of the two are set, capped at the
    request timeout. Connect has no limit only when all three are zero.
    """
    connect = sum(t for t in (options.dial_timeout, options.tls_handshake_timeout) if t > 0)
    if options.timeout > 0:
        connect = min(connect, options.timeout) if connect > 0 else options.timeout

    request = _limit(options.timeout)
    return httpx.Timeout(connect=_limit(connect), read=request, write=request, pool=request)

def build_transport() -> httpx.HTTPTransport:
    # retries=0: the fetch loop owns retrying
    return httpx.HTTPTransport(retries=0)
