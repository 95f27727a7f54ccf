import re

LOG_URL_MARKERS: tuple[str, ...] = (".log", ".txt", ".out", ".crash", "log", "crash", "latest")

_GZIP_LOG_RE = re.compile(r"\.log\.gz($|\?)", re.IGNORECASE)
_HTTP_URL_RE = re.compile(r"^https?://", re.IGNORECASE)


def is_likely_log_url(url: str | None) -> bool:
    """Return True when a link looks like it points at a log file.

    Only gates which right-clicked links are remembered, so false positives
    are acceptable.
    """
    if not url:
        return False
    lowered = url.lower()
    return any(marker in lowered for marker in LOG_URL_MARKERS)


def is_gzip_log(url: str) -> bool:
    """Return True for ``*.log.gz`` URLs, optionally followed by a query string."""
    return _GZIP_LOG_RE.search(url) is not None


def is_http_url(value: str) -> bool:
    return _HTTP_URL_RE.match(value) is not None
