"""
Steam owned-games client.

Fetches the list of games owned by an account through
IPlayerService/GetOwnedGames. Requires a Steam API key.
"""

import time
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from steam_mac_check.clients.base import (
    BaseClient,
    CatalogError,
    RetrievalError,
    ValidationError,
)
from steam_mac_check.contracts import OwnedGame, OwnedGamesAPIResponse


class OwnedGamesFetcher(BaseClient[OwnedGamesAPIResponse]):
    """
    Client for the GetOwnedGames endpoint.

    A single request returns the whole library; there is no
    pagination and no retry. Any failure is raised as RetrievalError.

    Example:
        >>> async with OwnedGamesFetcher(settings.steam) as fetcher:
        ...     games = await fetcher.fetch()
        ...     print(len(games))
    """

    @property
    def source_name(self) -> str:
        """Return source identifier."""
        return "steam_owned_games_api"

    def _build_url(self) -> str:
        """Build API URL for the owned-games listing."""
        return f"{self._config.base_url}/IPlayerService/GetOwnedGames/v0001/"

    def _parse_response(self, raw_data: Any) -> OwnedGamesAPIResponse:
        """
        Parse and validate GetOwnedGames response.

        Args:
            raw_data: Decoded JSON response from API

        Returns:
            OwnedGamesAPIResponse: Validated envelope

        Raises:
            ValidationError: If response doesn't match expected schema
        """
        try:
            return OwnedGamesAPIResponse.model_validate(raw_data)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Response validation failed: {e}",
                source=self.source_name,
            ) from e

    async def fetch(self, steam_id: str | None = None) -> list[OwnedGame]:
        """
        Fetch every game owned by an account.

        Args:
            steam_id: Account to list (defaults to the configured one)

        Returns:
            list[OwnedGame]: Owned games in the order Steam returns them

        Raises:
            RetrievalError: If the request, decoding, or validation fails,
                or Steam withholds the library
        """
        steam_id = steam_id or self._config.steam_id
        url = self._build_url()
        start_time = time.perf_counter()

        self._logger.info("Fetching owned games", steam_id=steam_id)

        try:
            response = await self._make_request(
                "GET",
                url,
                params={
                    "key": self._config.api_key.get_secret_value(),
                    "steamid": steam_id,
                    "format": "json",
                    "include_appinfo": "True",
                },
            )
            envelope = self._parse_response(self._decode_json(response))
        except CatalogError as e:
            self._logger.error(
                "Owned games fetch failed",
                steam_id=steam_id,
                error=str(e),
                status_code=e.status_code,
            )
            raise RetrievalError(
                f"Could not retrieve owned games for {steam_id}: {e}",
                source=self.source_name,
                endpoint=url,
                status_code=e.status_code,
                original_error=e,
            ) from e

        if not envelope.response.is_visible:
            self._logger.error("Owned games not disclosed", steam_id=steam_id)
            raise RetrievalError(
                f"Steam returned no library for {steam_id}; "
                "the profile may be private or the ID unknown",
                source=self.source_name,
                endpoint=url,
            )

        games = envelope.response.games
        self._logger.info(
            "Owned games fetched",
            steam_id=steam_id,
            game_count=len(games),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return games

    async def fetch_app_ids(self, steam_id: str | None = None) -> list[int]:
        """Fetch only the app IDs of an account's games."""
        return [game.appid for game in await self.fetch(steam_id)]
