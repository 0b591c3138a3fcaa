import httpx
from webclient import ClientOptions, DEFAULT_OPTIONS
from webclient.transport import build_timeout, build_transport

def test_default_timeout_composition():
    """
    WHY: httpx's connect phase includes the TLS handshake, so both budgets apply to it.
    HOW: Build the timeout from default options.
    EXPECTED: connect = dial + TLS handshake (10s); read/write/pool = request timeout (60s).
    """
    timeout = build_timeout(DEFAULT_OPTIONS)
    assert timeout.connect == 10.0
    assert timeout.read == 60.0
    assert timeout.write == 60.0
    assert timeout.pool == 60.0

def test_zero_means_no_limit():
    """
    WHY: A zero duration disables the corresponding limit.
    HOW: Set the request, dial and TLS handshake timeouts to zero.
    EXPECTED: httpx receives None for every phase.
    """
    timeout = build_timeout(ClientOptions(timeout=0, dial_timeout=0, tls_handshake_timeout=0))
    assert timeout.connect is None
    assert timeout.read is None
    assert timeout.write is None
    assert timeout.pool is None

def test_dial_limit_kept_without_handshake_limit():
    """
    WHY: Disabling the TLS handshake limit must not drop the dial limit.
    HOW: dial_timeout=5, tls_handshake_timeout=0.
    EXPECTED: connect is still bounded by the 5s dial limit.
    """
    timeout = build_timeout(ClientOptions(dial_timeout=5, tls_handshake_timeout=0))
    assert timeout.connect == 5
    assert timeout.read == 60.0

def test_connect_falls_back_to_request_timeout():
    """
    WHY: The request timeout is the outer bound callers rely on, connect included.
    HOW: Zero dial and TLS handshake limits with timeout=60.
    EXPECTED: connect is bounded by 60s instead of unlimited.
    """
    timeout = build_timeout(ClientOptions(timeout=60, dial_timeout=0, tls_handshake_timeout=0))
    assert timeout.connect == 60

def test_connect_capped_at_request_timeout():
    """
    WHY: Connecting can never take longer than the whole request is allowed to.
    HOW: dial + TLS handshake (10s) larger than timeout (3s).
    EXPECTED: connect is 3s.
    """
    timeout = build_timeout(ClientOptions(timeout=3))
    assert timeout.connect == 3

def test_connect_limit_without_request_timeout():
    """
    WHY: With no request timeout the connect phase keeps its own limits.
    HOW: timeout=0 with the default dial and TLS handshake limits.
    EXPECTED: connect is 10s, read unlimited.
    """
    timeout = build_timeout(ClientOptions(timeout=0))
    assert timeout.connect == 10.0
    assert timeout.read is None

def test_transport_does_not_retry_on_its_own():
    """
    WHY: Retrying is owned by fetch(); transport-level retries would multiply attempts.
    HOW: Build the default transport.
    EXPECTED: An httpx.HTTPTransport whose connection pool has retries disabled.
    """
    transport = build_transport()
    try:
        assert isinstance(transport, httpx.HTTPTransport)
        assert transport._pool._retries == 0
    finally:
        transport.close()
