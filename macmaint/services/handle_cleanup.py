"""Cleanup Handlers — cleanup_caches, cleanup_docker, cleanup_recommendations, developer_cleanup.

Invariants:
    - cleanup_caches guards every target on its own: one missing package manager
      yields {"error"} for that target only
    - dryRun never issues prune, purge, clean or rm commands
    - Docker volumes are only pruned when includeVolumes is set
    - cleanup_recommendations probes are independent and best-effort

Design Decisions:
    - Per-target cleaners in an explicit dict keyed by CacheTarget: every mapping
      visible in one place, order follows the CacheTarget catalog
"""

import logging
import os

from macmaint.core.domain_types import CacheTarget, expand_cache_targets
from macmaint.core.parse_disk import (
    head_lines, kb_to_gb, last_lines, percent_value,
)
from macmaint.core import recommendations
from macmaint.infrastructure.environment import EnvironmentContext
from macmaint.services.handler_helpers import (
    HANDLER_FAULTS, CommandRunner, handler_error, tool_boundary,
)

logger = logging.getLogger(__name__)

_NODE_MODULES_FOUND = 20
_NODE_MODULES_ANALYZED = 10


class CleanupHandlers:
    """Cache, Docker and developer-artifact cleanup."""

    def __init__(self, runner: CommandRunner, env: EnvironmentContext):
        self.runner = runner
        self.env = env
        self._cache_cleaners = {
            CacheTarget.GO: self._clean_go,
            CacheTarget.BREW: self._clean_brew,
            CacheTarget.NPM: self._clean_npm,
            CacheTarget.PIP: self._clean_pip,
            CacheTarget.CHROME: self._clean_chrome,
            CacheTarget.SPOTIFY: self._clean_spotify,
        }

    # ─── cleanup_caches ──────────────────────────────────────────

    async def cleanup_caches(self, args: dict) -> dict:
        dry_run = args["dryRun"]
        results = {}
        for target in expand_cache_targets(args["targets"]):
            try:
                results[target.value] = await self._cache_cleaners[target](dry_run)
            except HANDLER_FAULTS as e:
                logger.warning(
                    f"Cache cleanup failed for {target.value}: {e}",
                    extra={"tool_name": "cleanup_caches"},
                )
                results[target.value] = handler_error(e)
        return {"dryRun": dry_run, "results": results}

    async def _clean_go(self, dry_run: bool) -> dict:
        if dry_run:
            cache_path = (await self.runner.run("go", "env", "GOCACHE")).strip()
            return {"wouldClean": await self.runner.size_of(cache_path)}
        await self.runner.run(
            "go", "clean", "-cache", timeout=self.runner.cleanup_timeout,
        )
        return {"status": "cleaned"}

    async def _clean_brew(self, dry_run: bool) -> dict:
        if dry_run:
            output = await self.runner.run(
                "brew", "cleanup", "--dry-run", merge_stderr=True,
                timeout=self.runner.cleanup_timeout,
            )
            return {"wouldClean": last_lines(output, 5)}
        output = await self.runner.run(
            "brew", "cleanup", "--prune=all", merge_stderr=True,
            timeout=self.runner.cleanup_timeout,
        )
        return {"status": last_lines(output, 3)}

    async def _clean_npm(self, dry_run: bool) -> dict:
        if dry_run:
            output = await self.runner.run("npm", "cache", "ls")
            return {"cachedItems": len(output.splitlines())}
        await self.runner.run(
            "npm", "cache", "clean", "--force", timeout=self.runner.cleanup_timeout,
        )
        return {"status": "cleaned"}

    async def _clean_pip(self, dry_run: bool) -> dict:
        if dry_run:
            output = await self.runner.run("pip", "cache", "info")
            sizes = [
                line.strip() for line in output.splitlines()
                if "size" in line.lower()
            ]
            return {"info": "; ".join(sizes)}
        await self.runner.run(
            "pip", "cache", "purge", timeout=self.runner.cleanup_timeout,
        )
        return {"status": "cleaned"}

    async def _clean_folder(self, path: str, dry_run: bool) -> dict:
        if dry_run:
            return {"size": await self.runner.size_of(path)}
        await self.runner.empty_directory(path)
        return {"status": "cleaned"}

    async def _clean_chrome(self, dry_run: bool) -> dict:
        return await self._clean_folder(self.env.chrome_cache, dry_run)

    async def _clean_spotify(self, dry_run: bool) -> dict:
        return await self._clean_folder(self.env.spotify_cache, dry_run)

    # ─── cleanup_docker ──────────────────────────────────────────

    @tool_boundary(note="Docker may not be running")
    async def cleanup_docker(self, args: dict) -> dict:
        df_before = await self.runner.run("docker", "system", "df")
        if args["dryRun"]:
            return {
                "currentUsage": df_before,
                "note": "Run with dryRun=false to clean",
            }

        prune_output = await self.runner.run(
            "docker", "system", "prune", "-af", timeout=self.runner.cleanup_timeout,
        )
        volume_output = ""
        if args["includeVolumes"]:
            volume_output = await self.runner.run(
                "docker", "volume", "prune", "-f",
                timeout=self.runner.cleanup_timeout,
            )
        df_after = await self.runner.run("docker", "system", "df")
        return {
            "before": df_before,
            "after": df_after,
            "pruneResult": prune_output,
            "volumeResult": volume_output or "skipped",
        }

    # ─── cleanup_recommendations ─────────────────────────────────

    async def cleanup_recommendations(self, args: dict) -> dict:
        found = []
        probes = (
            self._recommend_disk,
            self._recommend_go_cache,
            self._recommend_trash,
            self._recommend_docker,
            self._recommend_homebrew,
        )
        for probe in probes:
            try:
                item = await probe()
            except HANDLER_FAULTS as e:
                logger.info(f"Recommendation probe {probe.__name__} skipped: {e}")
                continue
            if item:
                found.append(item)
        if not found:
            found = [{"message": "No immediate cleanup needed"}]
        return {"recommendations": found}

    async def _recommend_disk(self) -> dict | None:
        status = await self.runner.root_filesystem()
        return recommendations.disk_recommendation(percent_value(status["percentUsed"]))

    async def _recommend_go_cache(self) -> dict | None:
        cache_path = (await self.runner.run("go", "env", "GOCACHE")).strip()
        return recommendations.go_cache_cleanup(
            kb_to_gb(await self.runner.size_kb(cache_path)),
        )

    async def _recommend_trash(self) -> dict | None:
        return recommendations.trash_cleanup(
            kb_to_gb(await self.runner.size_kb(self.env.trash)),
        )

    async def _recommend_docker(self) -> dict | None:
        output = await self.runner.run(
            "docker", "system", "df", "--format", "{{.Size}}",
        )
        first = head_lines(output, 1)
        return recommendations.docker_cleanup(first[0]) if first else None

    async def _recommend_homebrew(self) -> dict | None:
        return recommendations.homebrew_cleanup(
            kb_to_gb(await self.runner.size_kb(self.env.homebrew_cache)),
        )

    # ─── developer_cleanup ───────────────────────────────────────

    async def developer_cleanup(self, args: dict) -> dict:
        dry_run = args["dryRun"]
        results = {}
        if args["cleanNodeModules"]:
            results["nodeModules"] = await self._node_modules(dry_run)
        if args["cleanXcode"]:
            results.update(await self._xcode(dry_run))
        if args["cleanPyenvOldVersions"]:
            results["pyenvVersions"] = await self._pyenv_versions()
        return results

    @tool_boundary()
    async def _node_modules(self, dry_run: bool) -> dict:
        """Discovery and size/age report; node_modules are never deleted automatically."""
        output = await self.runner.run(
            "find", str(self.env.home), "-name", "node_modules", "-type", "d", "-prune",
            timeout=self.runner.cleanup_timeout, allow_partial=True,
        )
        dirs = head_lines(output, _NODE_MODULES_FOUND)
        analyzed = []
        for path in dirs[:_NODE_MODULES_ANALYZED]:
            try:
                size = await self.runner.size_of(path)
                modified = await self.runner.run(
                    "stat", "-f", "%Sm", "-t", "%Y-%m-%d", path,
                )
            except HANDLER_FAULTS:
                continue
            analyzed.append(
                {"path": path, "size": size, "lastModified": modified.strip()},
            )
        return {"found": len(dirs), "analyzed": analyzed, "dryRun": dry_run}

    async def _xcode(self, dry_run: bool) -> dict:
        results = {}
        derived = self.env.xcode_derived_data
        try:
            size = await self.runner.size_of(derived)
            if not dry_run:
                await self.runner.empty_directory(derived)
            results["xcodeDerivedData"] = {
                "size": size, "status": "would clean" if dry_run else "cleaned",
            }
        except HANDLER_FAULTS:
            results["xcodeDerivedData"] = {
                "status": "skipped", "note": "Xcode not installed or empty",
            }

        try:
            results["xcodeArchives"] = {
                "size": await self.runner.size_of(self.env.xcode_archives),
                "note": "Review before deleting - contains app builds",
            }
        except HANDLER_FAULTS:
            pass
        return results

    async def _pyenv_versions(self) -> dict:
        try:
            current = (await self.runner.run("pyenv", "version-name")).strip()
            listing = await self.runner.run("ls", self.env.pyenv_versions)
        except HANDLER_FAULTS:
            return {"status": "skipped", "note": "pyenv not installed"}

        versions = []
        for version in listing.split():
            try:
                size = await self.runner.size_of(
                    os.path.join(self.env.pyenv_versions, version),
                )
            except HANDLER_FAULTS:
                continue
            versions.append(
                {"version": version, "size": size, "isCurrent": version == current},
            )
        return {
            "current": current,
            "versions": versions,
            "note": "Run 'pyenv uninstall VERSION' to remove",
        }
