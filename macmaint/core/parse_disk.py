"""Disk Parsers — pure functions over df / du / dust output.

Invariants:
    - No function here runs a command; input is captured text
    - Unparseable input raises ValueError (callers turn it into an in-band error)
    - Human-readable sizes accept K/M/G/T/P with optional "i" and "B" suffixes

Design Decisions:
    - Sorting and truncation of du listings happen here instead of `sort -hr | head`
      so the same code path works with any executor
"""

import re

_SIZE_RE = re.compile(r"^\s*([\d.,]+)\s*([BKMGTP]?)(?:i?B?)\s*$", re.IGNORECASE)

_UNIT_TO_GB = {
    "": 1 / 1024 ** 3,
    "B": 1 / 1024 ** 3,
    "K": 1 / 1024 ** 2,
    "M": 1 / 1024,
    "G": 1.0,
    "T": 1024.0,
    "P": 1024.0 ** 2,
}


def size_to_gb(size: str) -> float:
    """'25G' -> 25.0, '512M' -> 0.5, '1.5Ti' -> 1536.0."""
    match = _SIZE_RE.match(size or "")
    if not match:
        raise ValueError(f"Unrecognized size: '{size}'")
    number = float(match.group(1).replace(",", "."))
    return number * _UNIT_TO_GB[match.group(2).upper()]


def kb_to_gb(kilobytes: int) -> float:
    return kilobytes / 1024 / 1024


def first_field(output: str) -> str:
    """First token of the first non-empty line — the size column of `du -sh`."""
    for line in output.splitlines():
        parts = line.split()
        if parts:
            return parts[0]
    raise ValueError("Command produced no output")


def parse_du_kilobytes(output: str) -> int:
    """`du -sk PATH` -> size in KB."""
    token = first_field(output)
    try:
        return int(token)
    except ValueError as e:
        raise ValueError(f"Unrecognized du output: '{token}'") from e


def parse_df_line(output: str) -> dict:
    """Last line of `df -h /` -> filesystem, size, used, available, percentUsed."""
    lines = [line for line in output.splitlines() if line.strip()]
    if not lines:
        raise ValueError("df produced no output")
    parts = lines[-1].split()
    if len(parts) < 5 or not parts[4].endswith("%"):
        raise ValueError(f"Unrecognized df line: '{lines[-1]}'")
    return {
        "filesystem": parts[0],
        "total": parts[1],
        "used": parts[2],
        "available": parts[3],
        "percentUsed": parts[4],
    }


def df_status_line(output: str) -> str:
    """`df -h / | tail -1` equivalent."""
    lines = [line for line in output.splitlines() if line.strip()]
    if not lines:
        raise ValueError("df produced no output")
    return lines[-1].strip()


def percent_value(percent: str) -> int:
    """'87%' -> 87."""
    return int(percent.strip().rstrip("%"))


def parse_du_listing(
    output: str, limit: int = 20, exclude: str | None = None,
) -> list[dict]:
    """`du -h -d N PATH` lines -> [{size, path}] largest first, top `limit`.

    `exclude` drops the line for the queried directory itself.
    """
    entries = []
    for line in output.splitlines():
        parts = line.split(None, 1)
        if len(parts) != 2:
            continue
        size, path = parts[0], parts[1].strip()
        if exclude is not None and path.rstrip("/") == exclude.rstrip("/"):
            continue
        try:
            gb = size_to_gb(size)
        except ValueError:
            continue
        entries.append((gb, {"size": size, "path": path}))
    entries.sort(key=lambda e: e[0], reverse=True)
    return [entry for _, entry in entries[:limit]]


def last_lines(output: str, count: int) -> str:
    """`tail -N` equivalent over non-empty lines."""
    lines = [line for line in output.splitlines() if line.strip()]
    return "\n".join(lines[-count:]) if count > 0 else ""


def head_lines(output: str, count: int) -> list[str]:
    """`head -N` equivalent over non-empty lines."""
    return [line for line in output.splitlines() if line.strip()][:count]
