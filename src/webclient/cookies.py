"""Cookie jar scoping and cookie file persistence.

Bridges http.cookiejar.Cookie objects (what httpx keeps in its jar) and
CookieRecord, the serialized form written to cookie files.
"""

import ipaddress
import time
import urllib.request
from datetime import datetime, timezone
from http.cookiejar import Cookie, CookieJar, DefaultCookiePolicy
from pathlib import Path
from typing import List
from urllib.parse import urlsplit

from pydantic import ValidationError

from .errors import CookieScopeError, InvalidSiteURLError, MalformedCookieFileError
from .schemas.cookies import CookieFile, CookieRecord

# Host-only cookies must match the request host exactly, as browsers do.
_POLICY = DefaultCookiePolicy(strict_ns_domain=DefaultCookiePolicy.DomainStrictNonDomain)

def site_request(site_url: str) -> urllib.request.Request:
    """
    Resolves a site URL into the request object http.cookiejar scopes cookies against.
    """
    try:
        parts = urlsplit(site_url)
        hostname = parts.hostname
    except ValueError as e:
        raise InvalidSiteURLError(site_url, str(e)) from e

    if parts.scheme not in ("http", "https"):
        raise InvalidSiteURLError(site_url, "scheme must be http or https")
    if not hostname:
        raise InvalidSiteURLError(site_url, "missing host")
    return urllib.request.Request(site_url)

def _effective_host(request: urllib.request.Request) -> str:
    # Same convention as http.cookiejar: dotless hosts get a ".local" suffix
    host = urlsplit(request.full_url).hostname
    if "." not in host:
        host += ".local"
    return host

def _default_path(request: urllib.request.Request) -> str:
    path = urlsplit(request.full_url).path
    i = path.rfind("/")
    if i <= 0:
        return "/"
    return path[:i]

def _is_ip(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True

def _http_only(cookie: Cookie) -> bool:
    return cookie.has_nonstandard_attr("HttpOnly") or cookie.has_nonstandard_attr("httponly")

_MAX_EXPIRES = datetime.max.replace(tzinfo=timezone.utc)

def _expiry(timestamp: int) -> datetime:
    # Max-Age can push the expiry past what datetime represents
    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, ValueError, OSError):
        return _MAX_EXPIRES

def to_record(cookie: Cookie) -> CookieRecord:
    expires = None
    if cookie.expires is not None:
        expires = _expiry(cookie.expires)
    return CookieRecord(
        name=cookie.name,
        value=cookie.value or "",
        domain=cookie.domain if cookie.domain_specified else "",
        path=cookie.path,
        expires=expires,
        secure=cookie.secure,
        http_only=_http_only(cookie),
    )

def to_cookie(record: CookieRecord, request: urllib.request.Request) -> Cookie:
    """
    Builds a jar cookie scoped to the site the request points at.
    Raises CookieScopeError if the record's domain cannot be set from that site.
    """
    host = _effective_host(request)
    if record.domain:
        domain = record.domain.lower()
        bare = domain.lstrip(".")
        if not _is_ip(bare) and not domain.startswith("."):
            domain = "." + domain
        if not (host == bare or host.endswith("." + bare)):
            raise CookieScopeError(f"cookie {record.name!r} domain {record.domain!r} does not match host {host!r}")
        domain_specified = True
    else:
        domain = host
        domain_specified = False

    path = record.path or _default_path(request)
    expires = int(record.expires.timestamp()) if record.expires is not None else None
    rest = {"HttpOnly": None} if record.http_only else {}

    return Cookie(
        version=0,
        name=record.name,
        value=record.value,
        port=None,
        port_specified=False,
        domain=domain,
        domain_specified=domain_specified,
        domain_initial_dot=record.domain.startswith("."),
        path=path,
        path_specified=bool(record.path),
        secure=record.secure,
        expires=expires,
        discard=expires is None,
        comment=None,
        comment_url=None,
        rest=rest,
    )

def cookies_for_url(jar: CookieJar, site_url: str) -> List[CookieRecord]:
    """
    Returns the cookies scoped to site_url: domain, path, secure flag and
    expiry all have to match. Host-only cookies match the exact host only,
    which is stricter than the default http.cookiejar policy httpx sends with.
    """
    request = site_request(site_url)
    is_https = urlsplit(site_url).scheme == "https"
    now = time.time()

    records = []
    for cookie in jar:
        if cookie.is_expired(now):
            continue
        if cookie.secure and not is_https:
            continue
        if not _POLICY.return_ok_domain(cookie, request):
            continue
        if not _POLICY.path_return_ok(cookie.path, request):
            continue
        records.append(to_record(cookie))
    return records

def install_cookies(jar: CookieJar, records: List[CookieRecord], site_url: str):
    """
    Installs records into the jar scoped to site_url.
    All records are converted before any is installed, so a bad record leaves the jar untouched.
    Expired records delete the matching cookie, mirroring how a Set-Cookie with a past date behaves.
    """
    request = site_request(site_url)
    now = time.time()

    cookies = [to_cookie(record, request) for record in records]

    for cookie in cookies:
        if cookie.is_expired(now):
            try:
                jar.clear(cookie.domain, cookie.path, cookie.name)
            except KeyError:
                pass  # nothing stored under that name
            continue
        jar.set_cookie(cookie)

def write_cookie_file(file_path, records: List[CookieRecord]):
    Path(file_path).write_bytes(CookieFile.dump_json(records, indent=2))

def read_cookie_file(file_path) -> List[CookieRecord]:
    """
    Reads and validates a cookie file. OSError propagates for missing or unreadable files.
    """
    data = Path(file_path).read_bytes()
    try:
        return CookieFile.validate_json(data)
    except ValidationError as e:
        raise MalformedCookieFileError(file_path, f"{e.error_count()} invalid field(s)") from e
