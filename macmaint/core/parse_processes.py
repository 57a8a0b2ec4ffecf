"""Process Parsers — `ps aux`, `pgrep`, load averages and `top` CPU summary.

Invariants:
    - ps rows keep the first 10 columns fixed; COMMAND is everything after (may contain spaces)
    - Malformed rows are skipped, not fatal
    - Filtering is case-insensitive substring match on the whole row
"""

import re

from macmaint.core.domain_types import ProcessSortKey

_PS_FIXED_COLUMNS = 10

# ps flag per ordering (BSD ps: -r sorts by CPU, -m by memory)
PS_SORT_FLAGS = {
    ProcessSortKey.CPU: ["-r"],
    ProcessSortKey.MEMORY: ["-m"],
    ProcessSortKey.NAME: [],
}

_CPU_USAGE_RE = re.compile(
    r"CPU usage:\s*([\d.]+)%\s*user,\s*([\d.]+)%\s*sys,\s*([\d.]+)%\s*idle",
)


def parse_ps_row(line: str) -> dict | None:
    parts = line.split(None, _PS_FIXED_COLUMNS)
    if len(parts) <= _PS_FIXED_COLUMNS:
        return None
    try:
        return {
            "user": parts[0],
            "pid": int(parts[1]),
            "cpu": float(parts[2]),
            "mem": float(parts[3]),
            "command": parts[_PS_FIXED_COLUMNS].strip(),
        }
    except ValueError:
        return None


def parse_ps_aux(
    output: str, limit: int | None = None, name_filter: str | None = None,
) -> tuple[str, list[dict]]:
    """Split `ps aux` output into its header and parsed rows."""
    lines = [line for line in output.splitlines() if line.strip()]
    if not lines:
        raise ValueError("ps produced no output")
    header, rows = lines[0], lines[1:]
    if name_filter:
        needle = name_filter.lower()
        rows = [row for row in rows if needle in row.lower()]
    if limit is not None:
        rows = rows[:max(limit, 0)]
    processes = [p for p in (parse_ps_row(row) for row in rows) if p]
    return header, processes


def sort_by_name(processes: list[dict]) -> list[dict]:
    return sorted(processes, key=lambda p: p["command"].lower())


def first_pid(pgrep_output: str) -> int | None:
    for line in pgrep_output.splitlines():
        token = line.strip()
        if token.isdigit():
            return int(token)
    return None


def parse_loadavg(output: str) -> dict:
    """`sysctl -n vm.loadavg` ('{ 1.52 1.71 1.80 }') -> three floats."""
    numbers = re.findall(r"\d+(?:\.\d+)?", output)
    if len(numbers) < 3:
        raise ValueError(f"Unrecognized load average: '{output.strip()}'")
    one, five, fifteen = (float(n) for n in numbers[:3])
    return {"oneMinute": one, "fiveMinutes": five, "fifteenMinutes": fifteen}


def find_cpu_usage_line(top_output: str) -> str:
    for line in top_output.splitlines():
        if "CPU usage" in line:
            return line.strip()
    raise ValueError("top output has no 'CPU usage' line")


def parse_cpu_usage(line: str) -> dict | None:
    match = _CPU_USAGE_RE.search(line)
    if not match:
        return None
    user, system, idle = (float(g) for g in match.groups())
    return {"user": user, "sys": system, "idle": idle}


def parse_optional_int(output: str) -> int | None:
    token = output.strip()
    return int(token) if token.isdigit() else None
