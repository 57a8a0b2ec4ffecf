"""Recommendations — threshold rules over extracted numbers.

Invariants:
    - Every rule is a pure function of one numeric value
    - Boundaries are strict: a value exactly at a threshold takes the lower tier

Design Decisions:
    - Thresholds kept as module constants next to the rules that read them
"""

from macmaint.core.domain_types import Priority

GO_CACHE_CRITICAL_GB = 20
GO_CACHE_WARNING_GB = 10

DISK_HIGH_PERCENT = 90
DISK_MEDIUM_PERCENT = 80

TRASH_LOW_GB = 1
HOMEBREW_LOW_GB = 1

BATTERY_DEGRADED_PERCENT = 80
BATTERY_WEAR_PERCENT = 90


def go_cache_recommendation(size_gb: float) -> str:
    if size_gb > GO_CACHE_CRITICAL_GB:
        return "CRITICAL: Cache is very large. Run 'go clean -cache' to reclaim space."
    if size_gb > GO_CACHE_WARNING_GB:
        return "WARNING: Cache is getting large. Consider cleaning with 'go clean -cache'."
    return "Cache size is reasonable."


def disk_recommendation(used_percent: int) -> dict | None:
    if used_percent > DISK_HIGH_PERCENT:
        return {
            "priority": Priority.HIGH.value,
            "message": f"Disk {used_percent}% full - immediate cleanup needed",
        }
    if used_percent > DISK_MEDIUM_PERCENT:
        return {
            "priority": Priority.MEDIUM.value,
            "message": f"Disk {used_percent}% full - consider cleanup",
        }
    return None


def go_cache_cleanup(size_gb: float) -> dict | None:
    if size_gb > GO_CACHE_WARNING_GB:
        return {
            "priority": Priority.HIGH.value,
            "target": "go-cache",
            "sizeGB": f"{size_gb:.1f}",
            "command": "go clean -cache",
        }
    return None


def trash_cleanup(size_gb: float) -> dict | None:
    if size_gb > TRASH_LOW_GB:
        return {
            "priority": Priority.LOW.value,
            "target": "trash",
            "sizeGB": f"{size_gb:.1f}",
            "command": "rm -rf ~/.Trash/*",
        }
    return None


def docker_cleanup(size: str) -> dict | None:
    """Docker usage is only worth flagging once it is reported in gigabytes."""
    if "GB" in size:
        return {
            "priority": Priority.MEDIUM.value,
            "target": "docker",
            "size": size.strip(),
            "command": "docker system prune -a",
        }
    return None


def homebrew_cleanup(size_gb: float) -> dict | None:
    if size_gb > HOMEBREW_LOW_GB:
        return {
            "priority": Priority.LOW.value,
            "target": "homebrew-cache",
            "sizeGB": f"{size_gb:.1f}",
            "command": "brew cleanup --prune=all",
        }
    return None


def battery_health_note(max_capacity_percent: int | None) -> str:
    if max_capacity_percent is None:
        return "Battery capacity unknown."
    if max_capacity_percent < BATTERY_DEGRADED_PERCENT:
        return "Battery capacity significantly degraded. Consider replacement."
    if max_capacity_percent < BATTERY_WEAR_PERCENT:
        return "Battery showing some wear."
    return "Battery health good."


def thermal_recommendation(throttling: bool) -> str:
    if throttling:
        return (
            "System is thermal throttling. Consider improving ventilation "
            "or reducing workload."
        )
    return "Thermal status normal."
