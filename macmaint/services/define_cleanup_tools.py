"""Define Cleanup Tools — descriptors for disk analysis and cache cleanup.

Invariants:
    - Every parameter a cleanup handler reads is declared here with its type and default
    - cleanup_caches.targets is an enum-array: values outside the catalog are rejected
      before any handler runs
    - developer_cleanup defaults dryRun to true; every other dryRun defaults to false

Design Decisions:
    - Descriptors in dedicated files: explicit, no auto-discovery
    - memory_status sits with the cleanup tools to keep the published catalog order
"""

from macmaint.core.domain_types import CacheTarget
from macmaint.core.parameter_schema import (
    BooleanParam, EnumArrayParam, NumberParam, StringParam, ToolDescriptor,
)

_DRY_RUN = BooleanParam(
    "Preview what would be cleaned without actually deleting", default=False,
)

TOOLS_CLEANUP = [
    ToolDescriptor(
        name="disk_usage",
        description=(
            "Analyze disk usage and categorize the largest consumers. Returns a "
            "breakdown of disk usage by category with recommendations."
        ),
        parameters={
            "path": StringParam(
                "Path to analyze (default: home directory)", default="~",
            ),
            "depth": NumberParam(
                "Directory depth to analyze (default: 1)", default=1,
            ),
        },
    ),
    ToolDescriptor(
        name="go_cache_status",
        description=(
            "Check Go build cache size and location. Provides recommendations "
            "for cache management."
        ),
    ),
    ToolDescriptor(
        name="cleanup_caches",
        description="Clean various system and development caches to free disk space.",
        parameters={
            "targets": EnumArrayParam(
                "Which caches to clean (default: all)",
                default=(CacheTarget.ALL.value,),
                choices=tuple(t.value for t in CacheTarget),
            ),
            "dryRun": _DRY_RUN,
        },
    ),
    ToolDescriptor(
        name="cleanup_docker",
        description=(
            "Prune unused Docker resources (images, containers, volumes, build cache)."
        ),
        parameters={
            "includeVolumes": BooleanParam(
                "Also prune unused volumes (may cause data loss)", default=False,
            ),
            "dryRun": BooleanParam("Preview what would be cleaned", default=False),
        },
    ),
    ToolDescriptor(
        name="memory_status",
        description=(
            "Show current memory pressure, swap usage, and top memory-consuming processes."
        ),
    ),
    ToolDescriptor(
        name="cleanup_recommendations",
        description=(
            "Analyze system and provide personalized cleanup recommendations "
            "based on current disk usage."
        ),
    ),
    ToolDescriptor(
        name="empty_trash",
        description="Empty the system trash to reclaim disk space.",
        parameters={
            "dryRun": BooleanParam("Show trash size without emptying", default=False),
        },
    ),
    ToolDescriptor(
        name="full_cleanup_workflow",
        description=(
            "Run a comprehensive disk cleanup workflow. Analyzes disk usage, cleans "
            "all safe caches (Go, Homebrew, npm, pip, browser caches), empties trash, "
            "and optionally prunes Docker. Returns before/after disk usage comparison."
        ),
        parameters={
            "includeDocker": BooleanParam(
                "Include Docker cleanup (prune images/containers)", default=False,
            ),
            "includeDockerVolumes": BooleanParam(
                "Also prune Docker volumes (potential data loss)", default=False,
            ),
            "dryRun": _DRY_RUN,
        },
    ),
    ToolDescriptor(
        name="analyze_library",
        description=(
            "Deep analysis of ~/Library folder which often contains large caches "
            "and app data. Identifies major space consumers."
        ),
    ),
    ToolDescriptor(
        name="developer_cleanup",
        description=(
            "Clean developer-specific artifacts: node_modules in inactive projects, "
            "old Python versions, Xcode derived data, etc."
        ),
        parameters={
            "cleanNodeModules": BooleanParam(
                "Find and optionally clean node_modules in projects not modified recently",
                default=False,
            ),
            "cleanXcode": BooleanParam(
                "Clean Xcode derived data and archives", default=False,
            ),
            "cleanPyenvOldVersions": BooleanParam(
                "List old Python versions for review", default=False,
            ),
            "dryRun": BooleanParam("Preview what would be cleaned", default=True),
        },
    ),
]
