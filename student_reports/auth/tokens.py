"""
Extraction of upstream credentials from an inbound request.

Callers may present their tokens in several ways. Each token has an ordered
table of sources; the sources are tried in order and the first non-empty
value wins. Cookies are always preferred over headers, since browser clients
of the students API authenticate with the cookies set at login.

Nothing here validates the tokens. That is the students API's job.
"""

from typing import Callable, List, Optional

from flask import Request

from ..context import get_application_config
from ..domain import Credentials

TokenSource = Callable[[Request], Optional[str]]

BEARER_PREFIX = 'Bearer '


def from_cookie(config_key: str, default: str) -> TokenSource:
    """Read a token from the cookie named by ``config_key``."""
    def _source(request: Request) -> Optional[str]:
        name = get_application_config().get(config_key, default)
        return request.cookies.get(name)
    _source.__name__ = f'cookie:{default}'
    return _source


def from_header(header: str) -> TokenSource:
    """Read a token verbatim from ``header``."""
    def _source(request: Request) -> Optional[str]:
        return request.headers.get(header)
    _source.__name__ = f'header:{header}'
    return _source


def from_bearer_header(request: Request) -> Optional[str]:
    """Read a token from an ``Authorization: Bearer <token>`` header."""
    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith(BEARER_PREFIX):
        return auth_header[len(BEARER_PREFIX):]
    return None


ACCESS_TOKEN_SOURCES: List[TokenSource] = [
    from_cookie('ACCESS_TOKEN_COOKIE', 'accessToken'),
    from_bearer_header,
    from_header('X-Access-Token'),
]

CSRF_TOKEN_SOURCES: List[TokenSource] = [
    from_cookie('CSRF_TOKEN_COOKIE', 'csrfToken'),
    from_header('X-CSRF-Token'),
]


def first_token(request: Request, sources: List[TokenSource]) -> str:
    """Get the first non-empty token from ``sources``, or ``''``."""
    for source in sources:
        token = source(request)
        if token:
            return token
    return ''


def extract_credentials(request: Request) -> Credentials:
    """Get the access and CSRF tokens presented on ``request``."""
    return Credentials(
        access_token=first_token(request, ACCESS_TOKEN_SOURCES),
        csrf_token=first_token(request, CSRF_TOKEN_SOURCES)
    )
