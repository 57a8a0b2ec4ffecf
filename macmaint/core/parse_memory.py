"""Memory Parsers — vm_stat page counts to GB figures.

Invariants:
    - Page counts are multiplied by the configured page size (16KB on Apple Silicon)
    - Missing counters render as "N/A", never as 0
"""

import re

_VM_STAT_LINE = re.compile(r"^(.+?):\s+(\d+)")

# vm_stat label -> response key
_VM_FIELDS = {
    "Pages free": "freeGB",
    "Pages active": "activeGB",
    "Pages inactive": "inactiveGB",
    "Pages wired down": "wiredGB",
    "Pages occupied by compressor": "compressedGB",
}


def parse_vm_stat(output: str, page_size: int = 16384) -> dict[str, float]:
    """Every `label: count` line -> {label: gigabytes}."""
    stats = {}
    for line in output.splitlines():
        match = _VM_STAT_LINE.match(line)
        if match:
            stats[match.group(1).strip()] = (
                int(match.group(2)) * page_size / (1024 ** 3)
            )
    return stats


def summarize_vm_stats(stats: dict[str, float]) -> dict[str, str]:
    return {
        key: f"{stats[label]:.2f}" if label in stats else "N/A"
        for label, key in _VM_FIELDS.items()
    }
