"""Workflow Handler — full_cleanup_workflow, the only tool that sequences other actions.

Invariants:
    - Step order is fixed: Empty Trash, Go Build Cache, Homebrew Cache, Chrome Cache,
      Spotify Cache, npm Cache, pip Cache, then Docker when includeDocker
    - Every step is guarded on its own; a failure becomes a "skipped" record and the
      workflow continues
    - dryRun yields the same records in the same order with "would clean" and issues
      no destructive command (size probes still run)
    - totalRecovered is None, never zero, when it cannot be measured

Design Decisions:
    - Steps are (name, skip note, coroutine) rows walked in order, so ordering is
      data and a test can read it off STEP_NAMES
    - Recovered space is the difference in available bytes on /, which other disk
      activity also moves: always reported with recoveredNote
"""

import logging

from macmaint.core.domain_types import StepStatus
from macmaint.core.parse_disk import last_lines, size_to_gb
from macmaint.infrastructure.environment import EnvironmentContext
from macmaint.services.handler_helpers import HANDLER_FAULTS, CommandRunner

logger = logging.getLogger(__name__)

STEP_NAMES = (
    "Empty Trash",
    "Go Build Cache",
    "Homebrew Cache",
    "Chrome Cache",
    "Spotify Cache",
    "npm Cache",
    "pip Cache",
)
DOCKER_STEP = "Docker"

_DRY_RUN_AFTER = {"note": "Dry run - no changes made"}


def _status(dry_run: bool) -> str:
    return (StepStatus.WOULD_CLEAN if dry_run else StepStatus.CLEANED).value


def _brew_summary(output: str) -> str:
    """Last 'freed' / 'Removing' line of brew cleanup."""
    relevant = [
        line for line in output.splitlines()
        if "freed" in line or "Removing" in line
    ]
    return last_lines("\n".join(relevant), 1)


class WorkflowHandlers:
    """full_cleanup_workflow: before/after capture around the ordered cleanup steps."""

    def __init__(self, runner: CommandRunner, env: EnvironmentContext):
        self.runner = runner
        self.env = env

    async def full_cleanup_workflow(self, args: dict) -> dict:
        dry_run = args["dryRun"]
        include_docker = args["includeDocker"]
        include_volumes = include_docker and args["includeDockerVolumes"]

        before = await self._capture_disk()

        steps = [
            (STEP_NAMES[0], "Trash empty or inaccessible", self._trash),
            (STEP_NAMES[1], "Go not installed or cache empty", self._go_cache),
            (STEP_NAMES[2], "Homebrew not installed or cache empty", self._homebrew),
            (STEP_NAMES[3], "Chrome cache not found", self._chrome),
            (STEP_NAMES[4], "Spotify cache not found", self._spotify),
            (STEP_NAMES[5], "npm not installed", self._npm),
            (STEP_NAMES[6], "pip not installed", self._pip),
        ]
        records = []
        for name, skip_note, step in steps:
            records.append(await self._run_step(name, skip_note, step(dry_run)))
        if include_docker:
            records.append(await self._run_step(
                DOCKER_STEP, "Docker not running",
                self._docker(dry_run, include_volumes),
            ))

        if dry_run:
            after = dict(_DRY_RUN_AFTER)
            recovered, note = None, "Dry run - nothing was removed"
        else:
            after = await self._capture_disk()
            recovered, note = self._recovered(before, after)

        workflow = {
            "dryRun": dry_run,
            "before": before,
            "steps": records,
            "after": after,
            "totalRecovered": recovered,
        }
        if note:
            workflow["recoveredNote"] = note
        return workflow

    async def _run_step(self, name: str, skip_note: str, step) -> dict:
        try:
            record = await step
        except HANDLER_FAULTS as e:
            logger.warning(
                f"Workflow step '{name}' skipped: {e}",
                extra={"tool_name": "full_cleanup_workflow", "step": name},
            )
            return {
                "name": name,
                "status": StepStatus.SKIPPED.value,
                "note": skip_note,
                "error": str(e),
            }
        return {"name": name, **record}

    async def _capture_disk(self) -> dict:
        try:
            status = await self.runner.root_filesystem()
        except HANDLER_FAULTS as e:
            logger.warning(f"Disk capture failed: {e}")
            return {"error": str(e)}
        return {
            "used": status["used"],
            "available": status["available"],
            "percentUsed": status["percentUsed"],
        }

    @staticmethod
    def _recovered(before: dict, after: dict) -> tuple[str | None, str]:
        if "error" in before or "error" in after:
            return None, "Disk capture failed; recovered space unknown"
        try:
            delta = size_to_gb(after["available"]) - size_to_gb(before["available"])
        except ValueError:
            return None, "Could not parse available space; recovered space unknown"
        return (
            f"{delta:.1f}G",
            "Best-effort: change in free space on /, includes unrelated disk activity",
        )

    # ─── Steps ───────────────────────────────────────────────────

    async def _clear_folder(self, path: str, dry_run: bool) -> dict:
        size = await self.runner.size_of(path)
        if not dry_run:
            await self.runner.empty_directory(path)
        return {"size": size, "status": _status(dry_run)}

    async def _trash(self, dry_run: bool) -> dict:
        return await self._clear_folder(self.env.trash, dry_run)

    async def _go_cache(self, dry_run: bool) -> dict:
        cache_path = (await self.runner.run("go", "env", "GOCACHE")).strip()
        size = await self.runner.size_of(cache_path)
        if not dry_run:
            await self.runner.run(
                "go", "clean", "-cache", timeout=self.runner.cleanup_timeout,
            )
        return {"size": size, "status": _status(dry_run)}

    async def _homebrew(self, dry_run: bool) -> dict:
        size = await self.runner.size_of(self.env.homebrew_cache)
        if dry_run:
            return {"size": size, "status": _status(dry_run)}
        output = await self.runner.run(
            "brew", "cleanup", "--prune=all", merge_stderr=True,
            timeout=self.runner.cleanup_timeout,
        )
        return {"size": size, "status": _status(dry_run), "detail": _brew_summary(output)}

    async def _chrome(self, dry_run: bool) -> dict:
        return await self._clear_folder(self.env.chrome_cache, dry_run)

    async def _spotify(self, dry_run: bool) -> dict:
        return await self._clear_folder(self.env.spotify_cache, dry_run)

    async def _npm(self, dry_run: bool) -> dict:
        cache_dir = (await self.runner.run("npm", "config", "get", "cache")).strip()
        size = await self.runner.size_of(cache_dir)
        if not dry_run:
            await self.runner.run(
                "npm", "cache", "clean", "--force",
                timeout=self.runner.cleanup_timeout,
            )
        return {"size": size, "status": _status(dry_run)}

    async def _pip(self, dry_run: bool) -> dict:
        cache_dir = (await self.runner.run("pip", "cache", "dir")).strip()
        size = await self.runner.size_of(cache_dir)
        if not dry_run:
            await self.runner.run(
                "pip", "cache", "purge", timeout=self.runner.cleanup_timeout,
            )
        return {"size": size, "status": _status(dry_run)}

    async def _docker(self, dry_run: bool, include_volumes: bool) -> dict:
        usage = await self.runner.run(
            "docker", "system", "df", "--format", "{{.TotalCount}} {{.Size}}",
        )
        if not dry_run:
            await self.runner.run(
                "docker", "system", "prune", "-af",
                timeout=self.runner.cleanup_timeout,
            )
            if include_volumes:
                await self.runner.run(
                    "docker", "volume", "prune", "-f",
                    timeout=self.runner.cleanup_timeout,
                )
        return {
            "detail": usage.strip(),
            "status": _status(dry_run),
            "volumesCleaned": include_volumes,
        }
