"""Disk Handlers — disk_usage, go_cache_status, empty_trash, analyze_library (4 methods).

Invariants:
    - empty_trash with dryRun issues no destructive command
    - disk_usage prefers dust and falls back to du when dust is missing or fails
    - analyze_library never fails as a whole: each folder probe is independent

Design Decisions:
    - Sizes are reported as the du human-readable token ("25G"), thresholds use
      size_to_gb() so M/K/T suffixes are compared correctly
"""

import logging
import os

from macmaint.core.errors import ExternalCommandError
from macmaint.core.parse_disk import df_status_line, parse_du_listing, size_to_gb
from macmaint.core.recommendations import go_cache_recommendation
from macmaint.infrastructure.environment import EnvironmentContext
from macmaint.services.handler_helpers import (
    HANDLER_FAULTS, CommandRunner, tool_boundary,
)

logger = logging.getLogger(__name__)

_LIBRARY_FOLDERS = (
    "Caches", "Application Support", "Containers", "Developer",
    "Fonts", "Mail", "Messages",
)

_TOP_CACHES = 10
_DISK_USAGE_ROWS = 20


class DiskHandlers:
    """Read-mostly disk inspection tools."""

    def __init__(self, runner: CommandRunner, env: EnvironmentContext):
        self.runner = runner
        self.env = env

    @tool_boundary()
    async def disk_usage(self, args: dict) -> dict:
        """Depth-limited size breakdown of a path plus the root filesystem line."""
        path = self.env.expand(args["path"])
        depth = str(max(int(args["depth"]), 0))
        entries = None
        try:
            listing = await self.runner.run(
                "dust", "-d", depth, "-n", str(_DISK_USAGE_ROWS), "-c", path,
            )
            tool = "dust"
        except ExternalCommandError:
            raw = await self.runner.run(
                "du", "-h", "-d", depth, path, allow_partial=True,
            )
            entries = parse_du_listing(raw, limit=_DISK_USAGE_ROWS)
            listing = "\n".join(f"{e['size']}\t{e['path']}" for e in entries)
            tool = "du"

        df_output = await self.runner.run("df", "-h", "/")
        result = {
            "path": path,
            "tool": tool,
            "diskUsage": listing,
            "systemStatus": df_status_line(df_output),
        }
        if entries is not None:
            result["entries"] = entries
        return result

    @tool_boundary(note="Go may not be installed")
    async def go_cache_status(self, args: dict) -> dict:
        cache_path = (await self.runner.run("go", "env", "GOCACHE")).strip()
        if not cache_path:
            raise ValueError("go env GOCACHE returned an empty path")
        try:
            cache_size = await self.runner.size_of(cache_path)
            recommendation = go_cache_recommendation(size_to_gb(cache_size))
        except HANDLER_FAULTS as e:
            logger.info(f"Go cache size unavailable: {e}")
            cache_size = "Unable to determine size"
            recommendation = go_cache_recommendation(0)

        return {
            "cachePath": cache_path,
            "cacheSize": cache_size,
            "recommendation": recommendation,
            "commands": {
                "cleanBuildCache": "go clean -cache",
                "cleanTestCache": "go clean -testcache",
                "cleanModuleCache": "go clean -modcache (careful: re-downloads all modules)",
            },
        }

    @tool_boundary()
    async def empty_trash(self, args: dict) -> dict:
        size = await self.runner.size_of(self.env.trash)
        if args["dryRun"]:
            return {"trashSize": size, "note": "Run with dryRun=false to empty"}
        await self.runner.empty_directory(self.env.trash)
        return {"status": "emptied", "previousSize": size}

    async def analyze_library(self, args: dict) -> dict:
        """Sizes of well-known ~/Library folders, biggest caches, known large caches."""
        categories = {}
        for folder in _LIBRARY_FOLDERS:
            try:
                size = await self.runner.size_of(os.path.join(self.env.library, folder))
            except HANDLER_FAULTS:
                size = "N/A"
            categories[folder] = {"size": size}

        analysis: dict = {"categories": categories}

        try:
            raw = await self.runner.run(
                "du", "-h", "-d", "1", self.env.caches, allow_partial=True,
            )
            analysis["topCaches"] = [
                {"size": e["size"], "path": os.path.basename(e["path"].rstrip("/"))}
                for e in parse_du_listing(
                    raw, limit=_TOP_CACHES, exclude=self.env.caches,
                )
            ]
        except HANDLER_FAULTS as e:
            logger.info(f"Cache listing unavailable: {e}")

        known = [
            ("Go Build", self.env.expand("~/Library/Caches/go-build"), "go clean -cache"),
            ("Homebrew", self.env.homebrew_cache, "brew cleanup --prune=all"),
            (
                "Google Chrome", self.env.chrome_cache,
                "rm -rf ~/Library/Caches/Google/Chrome/*",
            ),
            (
                "Xcode DerivedData", self.env.xcode_derived_data,
                "rm -rf ~/Library/Developer/Xcode/DerivedData/*",
            ),
        ]
        analysis["knownLargeCaches"] = []
        for name, path, clean_cmd in known:
            try:
                size = await self.runner.size_of(path)
            except HANDLER_FAULTS:
                continue
            analysis["knownLargeCaches"].append(
                {"name": name, "path": path, "cleanCmd": clean_cmd, "size": size},
            )
        return analysis
