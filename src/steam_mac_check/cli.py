"""
Command-line interface for Steam Mac Check.

Provides the full library scan plus commands to inspect the
configuration, the owned-games list, and a single store lookup.
"""

import asyncio
import json
import sys
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from steam_mac_check.clients import OwnedGamesFetcher, PlatformProber, RetrievalError
from steam_mac_check.config import (
    ConfigurationError,
    OutputConfig,
    ProbeConfig,
    Settings,
    load_settings,
)
from steam_mac_check.logger import get_logger, setup_logging
from steam_mac_check.pipeline import LibraryScanner
from steam_mac_check.probing import ProbeResult

logger = get_logger(__name__, component="cli")


class CLIOutput(BaseModel):
    """Structured output for CLI commands."""

    success: bool
    command: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    data: dict[str, Any] | list[Any] | None = None
    error: str | None = None


def print_json(output: CLIOutput) -> None:
    """Print output as formatted JSON."""
    print(json.dumps(output.model_dump(), indent=2, default=str))


def print_probe_line(result: ProbeResult) -> None:
    """Print the support marker for a successfully probed game."""
    if result.is_failed:
        return
    marker = "✅" if result.supported else "❌"
    print(f"{marker} {result.label}", flush=True)


def get_option(argv: list[str], name: str) -> str | None:
    """Return the value following ``name`` in argv, if present."""
    if name in argv:
        idx = argv.index(name)
        if idx + 1 < len(argv):
            return argv[idx + 1]
        raise ConfigurationError(f"Option {name} requires a value")
    return None


def apply_overrides(settings: Settings, argv: list[str]) -> Settings:
    """
    Apply command-line options on top of loaded settings.

    Raises:
        ConfigurationError: If an option value is invalid
    """
    probe_overrides: dict[str, Any] = {}
    platform = get_option(argv, "--platform")
    if platform is not None:
        probe_overrides["platform"] = platform.lower()
    max_in_flight = get_option(argv, "--max-in-flight")
    if max_in_flight is not None:
        probe_overrides["max_in_flight"] = max_in_flight

    output_dir = get_option(argv, "--output-dir")

    try:
        update: dict[str, Any] = {}
        if probe_overrides:
            update["probe"] = ProbeConfig(
                **{**settings.probe.model_dump(), **probe_overrides}
            )
        if output_dir is not None:
            update["output"] = OutputConfig(dir=output_dir)
    except PydanticValidationError as e:
        fields = [str(err["loc"][-1]) for err in e.errors() if err["loc"]]
        raise ConfigurationError(
            f"Invalid option value: {', '.join(fields)}", fields=fields
        ) from e

    return settings.model_copy(update=update) if update else settings


async def cmd_scan(settings: Settings) -> None:
    """Scan the configured library and write both game lists."""
    print("Steam Mac Check - Library Scan")
    print(f"{'='*50}")
    print(f"  Steam ID: {settings.steam.steam_id}")
    print(f"  Platform: {settings.probe.platform}")
    print(f"  Max in flight: {settings.probe.max_in_flight or 'unbounded'}")
    print(f"{'='*50}\n")

    result = await LibraryScanner(settings).run(on_result=print_probe_line)

    print()
    print("Scan Complete!")
    print(f"{'='*50}")
    print(f"  Run ID: {result.run_id}")
    print(f"  Duration: {result.duration_seconds:.2f}s")
    print(f"  Games: {result.total_games}")
    print(f"  Supported: {result.supported}")
    print(f"  Unsupported: {result.unsupported}")
    if result.dropped:
        print(f"  Skipped (lookup failed or unnamed): {result.dropped}")

    print("\nFiles:")
    for path in result.files_written:
        print(f"    - {path}")


async def cmd_owned(settings: Settings) -> None:
    """List the configured account's owned games."""
    async with OwnedGamesFetcher(settings.steam) as fetcher:
        games = await fetcher.fetch()

    output = CLIOutput(
        success=True,
        command="owned",
        data=[game.model_dump() for game in games],
    )
    print_json(output)


async def cmd_probe(settings: Settings, app_id: int) -> None:
    """Probe a single game for platform support."""
    logger.info("Probing game", app_id=app_id, platform=settings.probe.platform)

    async with PlatformProber(settings.steam, platform=settings.probe.platform) as prober:
        result = await prober.probe(app_id)

    output = CLIOutput(
        success=not result.is_failed,
        command="probe",
        data={
            "app_id": result.app_id,
            "name": result.label,
            "platform": settings.probe.platform,
            "supported": result.supported,
        },
        error=result.reason,
    )
    print_json(output)


async def cmd_test_config(settings: Settings) -> None:
    """Test configuration loading."""
    output = CLIOutput(
        success=True,
        command="test-config",
        data={
            "steam_id": settings.steam.steam_id,
            "steam_base_url": settings.steam.base_url,
            "steam_store_url": settings.steam.store_url,
            "timeout_seconds": settings.steam.timeout_seconds,
            "platform": settings.probe.platform,
            "max_in_flight": settings.probe.max_in_flight,
            "output_dir": str(settings.output.dir),
            "api_key_configured": bool(settings.steam.api_key.get_secret_value()),
        },
    )
    print_json(output)


def print_usage() -> None:
    """Print CLI usage information."""
    usage = """
Steam Mac Check CLI
===================

Usage: steam-mac-check <command> [arguments] [options]

Commands:
  scan                        Sort the library into supported / unsupported lists
  owned                       List owned games
  probe <app_id>              Check platform support for one game
  test-config                 Test configuration loading

Options:
  --platform <name>           mac (default), linux or windows
  --output-dir <dir>          Directory for the two lists (default: .)
  --max-in-flight <n>         Limit concurrent store lookups (default: unbounded)

Configuration (environment or .env):
  STEAM_API_KEY, STEAM_ID_64  Required credentials

Examples:
  steam-mac-check scan --platform linux --output-dir out
"""
    print(usage)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    argv = sys.argv if argv is None else argv

    if len(argv) < 2:
        print_usage()
        sys.exit(1)

    command = argv[1]

    if command in ("help", "--help", "-h"):
        print_usage()
        return

    if command not in ("scan", "owned", "probe", "test-config"):
        print(f"Unknown command: {command}")
        print_usage()
        sys.exit(1)

    try:
        settings = apply_overrides(load_settings(), argv)
        setup_logging(settings.logging)

        if command == "scan":
            asyncio.run(cmd_scan(settings))

        elif command == "owned":
            asyncio.run(cmd_owned(settings))

        elif command == "probe":
            if len(argv) < 3 or not argv[2].isdigit():
                print("Error: app_id required")
                sys.exit(1)
            asyncio.run(cmd_probe(settings, int(argv[2])))

        elif command == "test-config":
            asyncio.run(cmd_test_config(settings))

    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        print("Set STEAM_API_KEY and STEAM_ID_64 in the environment or .env", file=sys.stderr)
        sys.exit(1)
    except RetrievalError as e:
        logger.error("Could not retrieve owned games", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.exception("CLI error", error=str(e))
        output = CLIOutput(
            success=False,
            command=command,
            error=str(e),
        )
        print_json(output)
        sys.exit(1)


if __name__ == "__main__":
    main()
