"""
Default domain workload.

Used when no domains file is given: a bundled list of popular sites,
optionally truncated to the first N entries.
"""

from typing import Optional


DEFAULT_DOMAINS = [
    "google.com",
    "youtube.com",
    "facebook.com",
    "amazon.com",
    "wikipedia.org",
    "twitter.com",
    "instagram.com",
    "linkedin.com",
    "reddit.com",
    "netflix.com",
    "microsoft.com",
    "apple.com",
    "github.com",
    "stackoverflow.com",
    "cloudflare.com",
    "bing.com",
    "yahoo.com",
    "ebay.com",
    "twitch.tv",
    "office.com",
]


def default_domains(count: Optional[int] = None) -> list[str]:
    """
    Return the bundled domain list.

    Args:
        count: Maximum number of domains (all if None)
    """
    if count is not None and count < 1:
        raise ValueError(f"count must be positive, got {count}")
    return list(DEFAULT_DOMAINS[:count] if count else DEFAULT_DOMAINS)
