"""
Clients for the Steam Web and Store APIs.

Both are built on a common base that owns the HTTP client and maps
transport failures and error statuses to typed exceptions.
"""

from steam_mac_check.clients.app_details import PlatformProber
from steam_mac_check.clients.base import (
    APIError,
    BaseClient,
    CatalogError,
    RetrievalError,
    ValidationError,
)
from steam_mac_check.clients.owned_games import OwnedGamesFetcher

__all__ = [
    # Base classes and errors
    "APIError",
    "BaseClient",
    "CatalogError",
    "RetrievalError",
    "ValidationError",
    # Clients
    "OwnedGamesFetcher",
    "PlatformProber",
]
