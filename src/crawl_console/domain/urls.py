"""
URL Acceptance

Validation of crawl target URLs. Only absolute http(s) URLs with a host
are accepted; blank input is neutral rather than an error.
"""

import re
from urllib.parse import urlsplit

from crawl_console.models.url_input import UrlCheck

ALLOWED_SCHEMES = ("http", "https")

MSG_VALID = "Valid URL"
MSG_BAD_SCHEME = "URL must start with http:// or https://"
MSG_BAD_FORMAT = "Invalid URL format"
MSG_REQUIRED = "URL is required"

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")


class InvalidUrlError(ValueError):
    """Raised when a URL is submitted that check_url does not accept."""


def check_url(text: str) -> UrlCheck:
    candidate = (text or "").strip()
    if not candidate:
        return UrlCheck(state="idle", message="")

    if not _SCHEME.match(candidate):
        return UrlCheck(state="invalid", message=MSG_BAD_FORMAT)

    try:
        parts = urlsplit(candidate)
        # Accessing .port validates it
        parts.port
    except ValueError:
        return UrlCheck(state="invalid", message=MSG_BAD_FORMAT)

    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        return UrlCheck(state="invalid", message=MSG_BAD_SCHEME)

    if not parts.hostname or any(ch.isspace() for ch in candidate):
        return UrlCheck(state="invalid", message=MSG_BAD_FORMAT)

    return UrlCheck(state="valid", message=MSG_VALID)


def require_valid_url(text: str) -> str:
    """
    Return the stripped URL or raise InvalidUrlError.

    Unlike check_url, blank input is an error here.
    """
    check = check_url(text)
    if check.state == "idle":
        raise InvalidUrlError(MSG_REQUIRED)
    if not check.is_valid:
        raise InvalidUrlError(check.message)
    return text.strip()
