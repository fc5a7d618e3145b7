"""URL building utilities for URL shortener."""

SHORT_URL_PREFIX = "shorturls"


def build_short_url(
    short_code: str,
    base_url: str,
    path_prefix: str = SHORT_URL_PREFIX,
) -> str:
    """Build complete short URL.

    Args:
        short_code: The short code
        base_url: Base URL (e.g., https://example.com)
        path_prefix: Path prefix (e.g., shorturls)

    Returns:
        Complete short URL
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")

    if prefix:
        return f"{base}/{prefix}/{short_code}"
    return f"{base}/{short_code}"
