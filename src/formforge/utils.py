"""Utility functions for FormForge application"""

import re
import threading
import time
from pathlib import Path

_WHITESPACE_RUN = re.compile(r"\s+")


def canonicalify(p: Path | str) -> Path:
    return Path(p).expanduser().resolve()


def ensure_path(p: Path | str) -> Path:
    path = canonicalify(p)
    path.mkdir(parents=True, exist_ok=True)
    return path


def slugify(text: str) -> str:
    """Lowercase text and collapse whitespace runs into single hyphens.

    Examples:
        >>> slugify("Job Application Form")
        'job-application-form'
        >>> slugify("General  Inquiry")
        'general-inquiry'
    """
    return _WHITESPACE_RUN.sub("-", text.lower())


def sanitize(sensitive: str | None, keep_chars: int = 2) -> str:
    """Mask sensitive information for logging.

    Args:
        sensitive: The sensitive string to mask (e.g., API key)
        keep_chars: Number of leading and trailing characters to keep

    Returns:
        Masked string with middle characters replaced by asterisks.

    Examples:
        >>> sanitize("sk-abc123def456xyz789")
        'sk***89'
        >>> sanitize(None)
        '***'
    """
    if not sensitive:
        return "***"

    if len(sensitive) <= keep_chars * 2:
        return "***"

    return f"{sensitive[:keep_chars]}***{sensitive[-keep_chars:]}"


def truncate(text: str, limit: int = 200) -> str:
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."


class IdGenerator:
    """Issue ids from a monotonically advancing wall-clock millisecond counter.

    Uniqueness holds within one generator, across threads; ids from different
    sessions may collide.
    """

    def __init__(self, clock=None):
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._last = 0
        self._lock = threading.Lock()

    def next(self, prefix: str) -> str:
        with self._lock:
            value = self._clock()
            if value <= self._last:
                value = self._last + 1
            self._last = value
        return f"{prefix}-{value}"
