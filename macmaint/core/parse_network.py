"""Network & System Parsers — ifconfig, airport, scutil, netstat, sw_vers, launchctl.

Invariants:
    - Each function mirrors one grep/head pipeline of the equivalent shell command
    - Output order follows input order
"""

import re

_INTERFACE_LINE = re.compile(r"^[a-z]|inet ")
_WIFI_LINE = re.compile(r"SSID|BSSID|channel|RSSI")
_DISABLED_ENTRY = re.compile(r'"([^"]+)"\s*=>\s*(disabled|true)')


def interface_lines(ifconfig_output: str, limit: int = 20) -> str:
    lines = [
        line for line in ifconfig_output.splitlines()
        if _INTERFACE_LINE.search(line)
    ]
    return "\n".join(lines[:limit])


def wifi_lines(airport_output: str) -> str:
    return "\n".join(
        line.strip() for line in airport_output.splitlines()
        if _WIFI_LINE.search(line)
    )


def dns_servers(scutil_output: str, limit: int = 5) -> str:
    lines = [
        line.strip() for line in scutil_output.splitlines()
        if "nameserver" in line
    ]
    return "\n".join(lines[:limit])


def count_established(netstat_output: str) -> int:
    return sum(1 for line in netstat_output.splitlines() if "ESTABLISHED" in line)


def join_sw_vers(output: str) -> str:
    """sw_vers lines joined with ', ' (ProductName: macOS, ProductVersion: 14.4, ...)."""
    return ", ".join(
        " ".join(line.split()) for line in output.splitlines() if line.strip()
    )


def memsize_label(output: str) -> str:
    """`sysctl -n hw.memsize` bytes -> '16 GB'."""
    return f"{int(output.strip()) / 1024 ** 3:.0f} GB"


def plist_listing(ls_output: str, directory: str) -> list[dict]:
    """`ls -la DIR` -> launch agent entries ending in .plist."""
    agents = []
    for line in ls_output.splitlines():
        parts = line.split(None, 8)
        if len(parts) == 9 and parts[8].endswith(".plist"):
            agents.append({"path": f"{directory.rstrip('/')}/{parts[8]}", "type": "user"})
    return agents


def plist_names(ls_output: str, directory: str, limit: int = 10) -> list[str]:
    """`ls DIR` -> full paths of .plist files, first `limit`."""
    names = [
        line.strip() for line in ls_output.splitlines()
        if line.strip().endswith(".plist")
    ]
    return [f"{directory.rstrip('/')}/{name}" for name in names[:limit]]


def disabled_services(print_disabled_output: str) -> list[str]:
    """`launchctl print-disabled gui/UID` -> labels currently disabled."""
    return [
        label for label, _ in _DISABLED_ENTRY.findall(print_disabled_output)
    ]
