"""
Date, string and URL helpers for the browser suite.

For waits use ``qa_suite.web.waits`` instead.
"""

import math
import re
import unicodedata
from datetime import datetime
from typing import Optional
from urllib.parse import urlparse


GE_DOMAINS = ("ge.globo.com", "globoesporte.globo.com")


# =============================================================================
# Dates
# =============================================================================


def format_date(date: datetime) -> str:
    """Format a date the Brazilian way, e.g. ``19/10/2026 14:05``."""
    return date.strftime("%d/%m/%Y %H:%M")


def get_current_date() -> str:
    return format_date(datetime.now())


def is_today(date: datetime, now: Optional[datetime] = None) -> bool:
    today = now or datetime.now()
    return date.date() == today.date()


def days_diff(first: datetime, second: datetime) -> int:
    """Whole days between two dates, rounding partial days up."""
    seconds = abs((second - first).total_seconds())
    return math.ceil(seconds / 86400)


# =============================================================================
# Strings
# =============================================================================


def remove_accents(text: str) -> str:
    normalized = unicodedata.normalize("NFD", text)
    return "".join(c for c in normalized if not unicodedata.combining(c))


def to_slug(text: str) -> str:
    """
    Convert text to a URL-friendly slug.

    Usage:
        to_slug("São Paulo FC")  # "sao-paulo-fc"
    """
    slug = remove_accents(text).lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")


def truncate(text: str, max_length: int) -> str:
    """Shorten text to ``max_length`` on a word boundary and append ``...``."""
    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > 0:
        truncated = truncated[:last_space]
    return truncated + "..."


# =============================================================================
# URLs
# =============================================================================


def is_valid_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme and parsed.netloc)


def get_domain(url: str) -> str:
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def is_ge_domain(url: str) -> bool:
    domain = get_domain(url)
    return any(ge in domain for ge in GE_DOMAINS)
