"""Power Parsers — system_profiler SPPowerDataType, pmset battery and thermal output."""

import re

_CYCLE_RE = re.compile(r"Cycle Count:\s*(\d+)")
_CONDITION_RE = re.compile(r"Condition:\s*(.+)")
_MAX_CAPACITY_RE = re.compile(r"Maximum Capacity:\s*(\d+)%")
_CHARGE_RE = re.compile(r"(\d+)%")
_SPEED_LIMIT_RE = re.compile(r"CPU_Speed_Limit\s*=\s*(\d+)")


def parse_battery_profile(output: str) -> dict:
    """Extract health fields; anything missing becomes "N/A"."""
    cycle = _CYCLE_RE.search(output)
    condition = _CONDITION_RE.search(output)
    capacity = _MAX_CAPACITY_RE.search(output)
    return {
        "cycleCount": int(cycle.group(1)) if cycle else "N/A",
        "condition": condition.group(1).strip() if condition else "N/A",
        "maxCapacity": f"{capacity.group(1)}%" if capacity else "N/A",
        "maxCapacityPercent": int(capacity.group(1)) if capacity else None,
        "isCharging": "Charging: Yes" in output,
        "isFullyCharged": "Fully Charged: Yes" in output,
        "powerSource": "AC Power" if "Connected: Yes" in output else "Battery",
    }


def parse_charge_level(pmset_output: str) -> str:
    match = _CHARGE_RE.search(pmset_output)
    return f"{match.group(1)}%" if match else "N/A"


def cpu_speed_limit(therm_output: str) -> int | None:
    match = _SPEED_LIMIT_RE.search(therm_output)
    return int(match.group(1)) if match else None


def is_throttling(therm_output: str) -> bool:
    """Throttled iff pmset reports a CPU_Speed_Limit below 100."""
    limit = cpu_speed_limit(therm_output)
    return limit is not None and limit < 100
