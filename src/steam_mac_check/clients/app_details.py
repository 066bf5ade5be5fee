"""
Steam Store platform prober.

Looks up a single game on the Store /appdetails endpoint and reports
whether it runs on the configured operating system.
"""

from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from steam_mac_check.clients.base import BaseClient, CatalogError, ValidationError
from steam_mac_check.config import SteamAPIConfig
from steam_mac_check.contracts import PlatformName, StoreAppDetails
from steam_mac_check.probing.results import ProbeResult

_ENVELOPE = TypeAdapter(dict[str, StoreAppDetails])


class PlatformProber(BaseClient[dict[str, StoreAppDetails]]):
    """
    Prober for Steam Store app details.

    ``probe`` never raises: every failure (transport, HTTP status,
    malformed body, missing entry, success=false) is reported as a
    failed ProbeResult with an empty label.

    Example:
        >>> async with PlatformProber(settings.steam, platform="mac") as prober:
        ...     result = await prober.probe(570)
        ...     print(result.label, result.supported)
    """

    def __init__(
        self,
        config: SteamAPIConfig,
        *,
        platform: PlatformName = "mac",
        **kwargs: Any,
    ) -> None:
        """
        Initialize the prober.

        Args:
            config: Steam API configuration
            platform: Operating system to check support for
            **kwargs: Arguments passed to BaseClient
        """
        super().__init__(config, **kwargs)
        self._platform = platform

    @property
    def source_name(self) -> str:
        """Return source identifier."""
        return "steam_store_api"

    @property
    def platform(self) -> PlatformName:
        return self._platform

    def _build_url(self) -> str:
        """Build API URL for app details."""
        return f"{self._config.store_url}/appdetails"

    def _parse_response(self, raw_data: Any) -> dict[str, StoreAppDetails]:
        """
        Parse and validate the appdetails envelope.

        Args:
            raw_data: Decoded JSON response, keyed by app ID string

        Returns:
            dict[str, StoreAppDetails]: Validated entries

        Raises:
            ValidationError: If response doesn't match expected schema
        """
        try:
            return _ENVELOPE.validate_python(raw_data)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Response validation failed: {e}",
                source=self.source_name,
            ) from e

    async def probe(self, app_id: int) -> ProbeResult:
        """
        Classify one game by platform support.

        Args:
            app_id: Steam application ID

        Returns:
            ProbeResult: Label and support flag, or a failed result
        """
        try:
            response = await self._make_request(
                "GET",
                self._build_url(),
                params={"appids": app_id},
            )
            envelope = self._parse_response(self._decode_json(response))
        except CatalogError as e:
            self._logger.debug("Probe failed", app_id=app_id, error=str(e))
            return ProbeResult.failed(app_id, str(e))

        entry = envelope.get(str(app_id))
        if entry is None:
            self._logger.debug("Probe response missing app entry", app_id=app_id)
            return ProbeResult.failed(app_id, f"No entry for app_id={app_id}")

        if not entry.success or entry.data is None:
            self._logger.debug("Store returned success=false", app_id=app_id)
            return ProbeResult.failed(
                app_id, f"Steam API returned success=false for app_id={app_id}"
            )

        supported = entry.data.platforms.supports(self._platform)
        self._logger.debug(
            "Probe complete",
            app_id=app_id,
            game_name=entry.data.name,
            platform=self._platform,
            supported=supported,
        )
        return ProbeResult.ok(app_id, entry.data.name, supported)
