"""Domain Types — enums that replace bare strings across the codebase.

Invariants:
    - All valid states encoded as Enums — no raw string matching in handlers
    - Enum values are the exact strings seen on the wire

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum


class ParamType(str, Enum):
    """Tag of a declared tool parameter."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM_ARRAY = "array"


class CacheTarget(str, Enum):
    """Targets accepted by cleanup_caches. ALL expands to every other member."""
    GO = "go"
    BREW = "brew"
    NPM = "npm"
    PIP = "pip"
    CHROME = "chrome"
    SPOTIFY = "spotify"
    ALL = "all"


class ProcessSortKey(str, Enum):
    """Orderings accepted by process_list."""
    CPU = "cpu"
    MEMORY = "memory"
    NAME = "name"


class StepStatus(str, Enum):
    """Outcome of one full_cleanup_workflow step."""
    CLEANED = "cleaned"
    WOULD_CLEAN = "would clean"
    SKIPPED = "skipped"


class Priority(str, Enum):
    """Urgency of a cleanup recommendation."""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


def expand_cache_targets(targets: list[str]) -> list[CacheTarget]:
    """Resolve requested targets to concrete ones, in catalog order."""
    requested = {CacheTarget(t) for t in targets}
    concrete = [t for t in CacheTarget if t is not CacheTarget.ALL]
    if CacheTarget.ALL in requested:
        return concrete
    return [t for t in concrete if t in requested]
