"""URL validation and host utilities."""

from urllib.parse import urljoin, urlparse


def is_valid_url(url: str | None) -> bool:
    """Check if a string is an absolute http(s) URL.

    Args:
        url: URL string to validate

    Returns:
        True if valid URL, False otherwise
    """
    if not url:
        return False

    try:
        result = urlparse(url.strip())
        return result.scheme in ("http", "https") and bool(result.hostname)
    except ValueError:
        return False


def normalize_host(url: str | None) -> str | None:
    """Extract the comparable host of a URL.

    Lowercased, without port, trailing dot or a leading ``www.``.

    Args:
        url: Full URL

    Returns:
        Host name or None for absent/malformed/non-http URLs
    """
    if not is_valid_url(url):
        return None

    try:
        host = urlparse(url.strip()).hostname
    except ValueError:
        return None
    if not host:
        return None

    host = host.lower().rstrip(".")
    if host.startswith("www."):
        host = host[4:]
    return host or None


def host_matches(host: str, domains: frozenset[str] | set[str]) -> bool:
    """Check if host is one of the domains or a subdomain of one."""
    return any(host == domain or host.endswith("." + domain) for domain in domains)


def make_absolute_url(url: str | None, base_url: str) -> str | None:
    """Convert a relative URL to absolute.

    Args:
        url: URL (may be relative)
        base_url: Base URL for resolution

    Returns:
        Absolute URL or None
    """
    if not url:
        return None

    url = url.strip()
    if url.startswith(("http://", "https://")):
        return url
    if url.startswith(("mailto:", "tel:", "javascript:", "#")):
        return None

    try:
        return urljoin(base_url, url)
    except ValueError:
        return None


def display_domain(url: str | None) -> str:
    """Short host for log and report lines ("" when not a URL)."""
    return normalize_host(url) or ""
