"""Integration tests for Steam clients with mocked HTTP responses."""

import json
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any, cast
from unittest.mock import patch

import httpx
import pytest
import respx

from steam_mac_check.clients import OwnedGamesFetcher, PlatformProber, RetrievalError
from steam_mac_check.config import SteamAPIConfig
from steam_mac_check.probing import ProbeStatus

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

OWNED_GAMES_URL = "https://api.steampowered.com/IPlayerService/GetOwnedGames/v0001/"
APPDETAILS_URL = "https://store.steampowered.com/api/appdetails"


def load_fixture(name: str) -> dict[str, Any]:
    """Load a JSON fixture file."""
    with (FIXTURES_DIR / name).open(encoding="utf-8") as f:
        return cast(dict[str, Any], json.load(f))


@pytest.fixture
def steam_config() -> Iterator[SteamAPIConfig]:
    """Steam configuration built from a mocked environment."""
    with patch.dict(
        os.environ,
        {
            "STEAM_API_KEY": "test_api_key_123",
            "STEAM_ID_64": "76561197960287930",
        },
        clear=True,
    ):
        yield SteamAPIConfig()


class TestOwnedGamesFetcher:
    """Integration tests for the owned-games client."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_fetch_success(self, steam_config: SteamAPIConfig) -> None:
        """Test a successful library fetch."""
        route = respx.get(OWNED_GAMES_URL).mock(
            return_value=httpx.Response(200, json=load_fixture("owned_games_response.json"))
        )

        async with OwnedGamesFetcher(steam_config) as fetcher:
            games = await fetcher.fetch()

        assert [g.appid for g in games] == [10, 20, 30]
        assert games[0].name == "Counter-Strike"

        params = route.calls.last.request.url.params
        assert params["key"] == "test_api_key_123"
        assert params["steamid"] == "76561197960287930"
        assert params["format"] == "json"
        assert params["include_appinfo"] == "True"

    @respx.mock
    @pytest.mark.asyncio
    async def test_fetch_app_ids(self, steam_config: SteamAPIConfig) -> None:
        """Test the identifier-only helper."""
        respx.get(OWNED_GAMES_URL).mock(
            return_value=httpx.Response(200, json=load_fixture("owned_games_response.json"))
        )

        async with OwnedGamesFetcher(steam_config) as fetcher:
            app_ids = await fetcher.fetch_app_ids()

        assert app_ids == [10, 20, 30]

    @respx.mock
    @pytest.mark.asyncio
    async def test_fetch_explicit_steam_id(self, steam_config: SteamAPIConfig) -> None:
        """Test listing an account other than the configured one."""
        route = respx.get(OWNED_GAMES_URL).mock(
            return_value=httpx.Response(200, json={"response": {"game_count": 0}})
        )

        async with OwnedGamesFetcher(steam_config) as fetcher:
            games = await fetcher.fetch("123")

        assert games == []
        assert route.calls.last.request.url.params["steamid"] == "123"

    @respx.mock
    @pytest.mark.asyncio
    async def test_fetch_api_error(self, steam_config: SteamAPIConfig) -> None:
        """Test that an error status is fatal."""
        route = respx.get(OWNED_GAMES_URL).mock(return_value=httpx.Response(403))

        async with OwnedGamesFetcher(steam_config) as fetcher:
            with pytest.raises(RetrievalError) as exc_info:
                await fetcher.fetch()

        assert exc_info.value.status_code == 403
        # No retries
        assert route.call_count == 1

    @respx.mock
    @pytest.mark.asyncio
    async def test_fetch_transport_error(self, steam_config: SteamAPIConfig) -> None:
        """Test that a connection failure is fatal."""
        respx.get(OWNED_GAMES_URL).mock(side_effect=httpx.ConnectError("refused"))

        async with OwnedGamesFetcher(steam_config) as fetcher:
            with pytest.raises(RetrievalError):
                await fetcher.fetch()

    @respx.mock
    @pytest.mark.asyncio
    async def test_fetch_malformed_body(self, steam_config: SteamAPIConfig) -> None:
        """Test that a non-JSON body is fatal."""
        respx.get(OWNED_GAMES_URL).mock(
            return_value=httpx.Response(200, text="<html>Internal error</html>")
        )

        async with OwnedGamesFetcher(steam_config) as fetcher:
            with pytest.raises(RetrievalError, match="not valid JSON"):
                await fetcher.fetch()

    @respx.mock
    @pytest.mark.asyncio
    async def test_fetch_private_profile(self, steam_config: SteamAPIConfig) -> None:
        """Test that an undisclosed library is fatal."""
        respx.get(OWNED_GAMES_URL).mock(return_value=httpx.Response(200, json={"response": {}}))

        async with OwnedGamesFetcher(steam_config) as fetcher:
            with pytest.raises(RetrievalError, match="private"):
                await fetcher.fetch()


class TestPlatformProber:
    """Integration tests for the store prober."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_probe_supported(self, steam_config: SteamAPIConfig) -> None:
        """Test a game that runs on the platform."""
        route = respx.get(APPDETAILS_URL).mock(
            return_value=httpx.Response(200, json=load_fixture("appdetails_response.json"))
        )

        async with PlatformProber(steam_config) as prober:
            result = await prober.probe(570)

        assert result.status is ProbeStatus.OK
        assert result.label == "Dota 2"
        assert result.supported is True
        assert route.calls.last.request.url.params["appids"] == "570"

    @respx.mock
    @pytest.mark.asyncio
    async def test_probe_unsupported(self, steam_config: SteamAPIConfig) -> None:
        """Test a game without support for the platform."""
        respx.get(APPDETAILS_URL).mock(
            return_value=httpx.Response(
                200,
                json={
                    "20": {
                        "success": True,
                        "data": {"name": "B", "platforms": {"windows": True, "mac": False}},
                    }
                },
            )
        )

        async with PlatformProber(steam_config) as prober:
            result = await prober.probe(20)

        assert result.status is ProbeStatus.OK
        assert result.label == "B"
        assert result.supported is False

    @respx.mock
    @pytest.mark.asyncio
    async def test_probe_other_platform(self, steam_config: SteamAPIConfig) -> None:
        """Test checking Linux instead of macOS."""
        respx.get(APPDETAILS_URL).mock(
            return_value=httpx.Response(
                200,
                json={
                    "20": {
                        "success": True,
                        "data": {"name": "B", "platforms": {"mac": False, "linux": True}},
                    }
                },
            )
        )

        async with PlatformProber(steam_config, platform="linux") as prober:
            result = await prober.probe(20)

        assert result.supported is True

    @respx.mock
    @pytest.mark.asyncio
    async def test_probe_success_false(self, steam_config: SteamAPIConfig) -> None:
        """Test that success=false is a silent failure."""
        respx.get(APPDETAILS_URL).mock(
            return_value=httpx.Response(200, json={"999999999": {"success": False}})
        )

        async with PlatformProber(steam_config) as prober:
            result = await prober.probe(999999999)

        assert result.is_failed is True
        assert result.label == ""
        assert result.supported is False
        assert result.reason is not None
        assert "success=false" in result.reason

    @respx.mock
    @pytest.mark.asyncio
    async def test_probe_missing_entry(self, steam_config: SteamAPIConfig) -> None:
        """Test that an envelope without our ID is a silent failure."""
        respx.get(APPDETAILS_URL).mock(
            return_value=httpx.Response(200, json=load_fixture("appdetails_response.json"))
        )

        async with PlatformProber(steam_config) as prober:
            result = await prober.probe(10)

        assert result.is_failed is True
        assert result.label == ""

    @respx.mock
    @pytest.mark.asyncio
    async def test_probe_transport_error(self, steam_config: SteamAPIConfig) -> None:
        """Test that a connection failure is a silent failure."""
        respx.get(APPDETAILS_URL).mock(side_effect=httpx.ConnectError("refused"))

        async with PlatformProber(steam_config) as prober:
            result = await prober.probe(30)

        assert result.is_failed is True
        assert result.supported is False

    @respx.mock
    @pytest.mark.asyncio
    async def test_probe_api_error(self, steam_config: SteamAPIConfig) -> None:
        """Test that an error status is a silent failure."""
        respx.get(APPDETAILS_URL).mock(return_value=httpx.Response(429))

        async with PlatformProber(steam_config) as prober:
            result = await prober.probe(30)

        assert result.is_failed is True

    @pytest.mark.parametrize(
        "body",
        [
            "not json",
            "null",
            '["570"]',
            '{"570": {"success": "maybe"}}',
        ],
    )
    @respx.mock
    @pytest.mark.asyncio
    async def test_probe_malformed_body(self, steam_config: SteamAPIConfig, body: str) -> None:
        """Test that unparseable envelopes are silent failures."""
        respx.get(APPDETAILS_URL).mock(return_value=httpx.Response(200, text=body))

        async with PlatformProber(steam_config) as prober:
            result = await prober.probe(570)

        assert result.is_failed is True
        assert result.label == ""
