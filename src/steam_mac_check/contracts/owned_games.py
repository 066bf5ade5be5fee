"""
Data contracts for the IPlayerService/GetOwnedGames response.
"""

from typing import Annotated

from pydantic import BaseModel, Field

AppId = Annotated[int, Field(gt=0, description="Steam App ID")]


class OwnedGame(BaseModel):
    """A single entry of an account's library."""

    appid: AppId
    name: str = Field(default="", description="Present when include_appinfo is set")
    playtime_forever: int = Field(default=0, ge=0, description="Minutes played")


class OwnedGamesResponse(BaseModel):
    """
    Body of the GetOwnedGames ``response`` object.

    Steam omits both fields for private profiles and unknown
    accounts, so ``game_count`` is None in that case.
    """

    game_count: int | None = Field(default=None, ge=0)
    games: list[OwnedGame] = Field(default_factory=list)

    @property
    def is_visible(self) -> bool:
        """Whether Steam disclosed the library at all."""
        return self.game_count is not None


class OwnedGamesAPIResponse(BaseModel):
    """Wrapper for the GetOwnedGames envelope."""

    response: OwnedGamesResponse
