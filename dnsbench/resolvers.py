"""
Built-in resolver profiles.

Pre-configured plain-DNS addresses for popular public resolvers.
"""

from .models import Server


# Pre-configured resolver profiles
RESOLVERS: dict[str, Server] = {
    "cloudflare": Server(
        name="Cloudflare",
        address="1.1.1.1",
        description="Cloudflare's privacy-focused DNS resolver"
    ),
    "cloudflare-secondary": Server(
        name="Cloudflare Secondary",
        address="1.0.0.1",
        description="Cloudflare's secondary DNS resolver"
    ),
    "google": Server(
        name="Google",
        address="8.8.8.8",
        description="Google Public DNS"
    ),
    "google-secondary": Server(
        name="Google Secondary",
        address="8.8.4.4",
        description="Google Public DNS secondary"
    ),
    "quad9": Server(
        name="Quad9",
        address="9.9.9.9",
        description="Quad9 with malware blocking"
    ),
    "quad9-unsecured": Server(
        name="Quad9 Unsecured",
        address="9.9.9.10",
        description="Quad9 without malware blocking"
    ),
    "controld": Server(
        name="Control D",
        address="76.76.2.0",
        description="Control D free unfiltered DNS"
    ),
    "opendns": Server(
        name="OpenDNS",
        address="208.67.222.222",
        description="Cisco OpenDNS"
    ),
    "adguard": Server(
        name="AdGuard",
        address="94.140.14.14",
        description="AdGuard DNS with ad blocking"
    ),
    "cleanbrowsing": Server(
        name="CleanBrowsing Security",
        address="185.228.168.9",
        description="CleanBrowsing security filter"
    ),
}

# Default resolvers for quick comparison
DEFAULT_RESOLVERS = ["cloudflare", "google", "quad9"]


def get_resolver(name: str) -> Server:
    """Get a resolver by name (case-insensitive)."""
    key = name.lower()
    if key in RESOLVERS:
        return RESOLVERS[key]
    raise ValueError(f"Unknown resolver: {name}. Available: {list(RESOLVERS.keys())}")


def create_custom_resolver(address: str, name: str | None = None) -> Server:
    """Create a custom resolver entry."""
    return Server(
        name=name or f"Custom ({address})",
        address=address,
        description=f"Custom resolver at {address}"
    )


def list_resolvers() -> list[str]:
    """List all available resolver names."""
    return list(RESOLVERS.keys())
