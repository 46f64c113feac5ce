import ipaddress
import re
from urllib.parse import urlparse

# Scheme (http/https) or a bare "www.", a host, a 1-6 character top-level
# label, then an optional path/query/fragment.
URL_PATTERN = re.compile(
    r"(?:https?://|www\.)"
    r"[a-zA-Z0-9-]+(?:\.[a-zA-Z0-9-]+)*"
    r"\.[a-zA-Z0-9]{1,6}"
    r"[-a-zA-Z0-9_.~:/%?&=()@#+]*",
    re.IGNORECASE,
)

HOSTNAME_PATTERN = re.compile(r"[a-z0-9_-]+(?:\.[a-z0-9_-]+)*\.?")


def extract_url(text: str) -> str:
    """Return the first URL found in ``text``, or ``text`` itself if there is none.

    Shared text often wraps the link in a sentence ("Look at this https://...").
    Text without a recognisable URL is kept as-is so the share is never lost.
    """
    match = URL_PATTERN.search(text)
    if match is None:
        return text
    return match.group(0)


def _is_valid_host(host: str) -> bool:
    if HOSTNAME_PATTERN.fullmatch(host):
        return True
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def derive_domain(url: str) -> str:
    """Host of ``url`` without a leading ``www.``; empty if it has none."""
    try:
        host = urlparse(url).hostname
    except ValueError:
        return ""
    if not host or not _is_valid_host(host):
        return ""
    return host.removeprefix("www.")
