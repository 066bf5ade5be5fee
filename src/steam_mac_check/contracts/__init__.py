"""
Data contracts for Steam API responses.

Pydantic models describing the two Steam endpoints this tool reads,
so responses are validated before anything is classified.
"""

from steam_mac_check.contracts.owned_games import (
    AppId,
    OwnedGame,
    OwnedGamesAPIResponse,
    OwnedGamesResponse,
)
from steam_mac_check.contracts.store import (
    Platform,
    PlatformName,
    StoreAppData,
    StoreAppDetails,
)

__all__ = [
    "AppId",
    "OwnedGame",
    "OwnedGamesAPIResponse",
    "OwnedGamesResponse",
    "Platform",
    "PlatformName",
    "StoreAppData",
    "StoreAppDetails",
]
