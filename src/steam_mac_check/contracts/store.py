"""
Data contracts for Steam Store API responses.

Only the fields needed to classify platform support are modelled;
everything else in the appdetails payload is ignored.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PlatformName = Literal["mac", "linux", "windows"]


class Platform(BaseModel):
    """Platform availability."""

    windows: bool = Field(default=False)
    mac: bool = Field(default=False)
    linux: bool = Field(default=False)

    def supports(self, platform: PlatformName) -> bool:
        """Check availability on a single platform."""
        return bool(getattr(self, platform))


class StoreAppData(BaseModel):
    """Subset of the ``data`` object returned by /appdetails."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", description="Store display name")
    platforms: Platform = Field(default_factory=Platform)


class StoreAppDetails(BaseModel):
    """
    One entry of the /appdetails envelope.

    The API returns {app_id: {success: bool, data: {...}}} and
    drops ``data`` entirely when success is false.
    """

    success: bool
    data: StoreAppData | None = None
