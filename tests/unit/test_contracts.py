"""Tests for data contracts."""

import pytest

from steam_mac_check.contracts import (
    OwnedGame,
    OwnedGamesAPIResponse,
    Platform,
    StoreAppDetails,
)


class TestOwnedGames:
    """Tests for GetOwnedGames contracts."""

    def test_full_response(self) -> None:
        """Test parsing a populated library."""
        envelope = OwnedGamesAPIResponse.model_validate(
            {
                "response": {
                    "game_count": 2,
                    "games": [
                        {"appid": 570, "name": "Dota 2", "playtime_forever": 10},
                        {"appid": 730},
                    ],
                }
            }
        )

        assert envelope.response.is_visible is True
        assert [g.appid for g in envelope.response.games] == [570, 730]
        assert envelope.response.games[1].name == ""

    def test_empty_library(self) -> None:
        """Test an account with no games."""
        envelope = OwnedGamesAPIResponse.model_validate({"response": {"game_count": 0}})

        assert envelope.response.is_visible is True
        assert envelope.response.games == []

    def test_private_profile(self) -> None:
        """Test that an empty response object is flagged as not visible."""
        envelope = OwnedGamesAPIResponse.model_validate({"response": {}})

        assert envelope.response.is_visible is False

    def test_invalid_app_id(self) -> None:
        """Test that non-positive app IDs are rejected."""
        with pytest.raises(ValueError):
            OwnedGame(appid=0)

    def test_missing_envelope(self) -> None:
        """Test that a body without ``response`` is rejected."""
        with pytest.raises(ValueError):
            OwnedGamesAPIResponse.model_validate({"games": []})


class TestStoreAppDetails:
    """Tests for appdetails contracts."""

    def test_success_entry(self) -> None:
        """Test parsing a successful entry, ignoring unknown fields."""
        details = StoreAppDetails.model_validate(
            {
                "success": True,
                "data": {
                    "name": "Portal 2",
                    "type": "game",
                    "platforms": {"windows": True, "mac": True, "linux": False},
                },
            }
        )

        assert details.data is not None
        assert details.data.name == "Portal 2"
        assert details.data.platforms.supports("mac") is True
        assert details.data.platforms.supports("linux") is False

    def test_failure_entry(self) -> None:
        """Test that data is optional when success is false."""
        details = StoreAppDetails.model_validate({"success": False})

        assert details.success is False
        assert details.data is None

    def test_platform_defaults(self) -> None:
        """Test that missing platform flags default to False."""
        platform = Platform()

        assert not platform.supports("mac")
        assert not platform.supports("windows")
        assert not platform.supports("linux")
