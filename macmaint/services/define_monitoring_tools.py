"""Define Monitoring Tools — descriptors for CPU, power, process and network inspection.

Invariants:
    - kill_process declares pid and name without defaults: absence is meaningful
    - process_list.sortBy is a string enum (cpu | memory | name)
"""

from macmaint.core.domain_types import ProcessSortKey
from macmaint.core.parameter_schema import (
    BooleanParam, NumberParam, StringParam, ToolDescriptor,
)

TOOLS_MONITORING = [
    ToolDescriptor(
        name="cpu_usage",
        description=(
            "Get real-time CPU utilization including per-core usage, load averages, "
            "and top CPU-consuming processes."
        ),
        parameters={
            "topN": NumberParam(
                "Number of top processes to show (default: 10)", default=10,
            ),
        },
    ),
    ToolDescriptor(
        name="thermal_status",
        description=(
            "Check thermal throttling status and CPU temperature on Apple Silicon Macs."
        ),
    ),
    ToolDescriptor(
        name="battery_health",
        description=(
            "Get battery health information including cycle count, capacity, "
            "and charging status."
        ),
    ),
    ToolDescriptor(
        name="system_info",
        description=(
            "Get comprehensive system information including macOS version, "
            "hardware specs, and uptime."
        ),
    ),
    ToolDescriptor(
        name="process_list",
        description="List running processes sorted by resource usage (CPU, memory, or name).",
        parameters={
            "sortBy": StringParam(
                "Sort processes by this metric",
                default=ProcessSortKey.CPU.value,
                enum=tuple(k.value for k in ProcessSortKey),
            ),
            "limit": NumberParam("Max processes to return", default=20),
            "filter": StringParam("Filter processes by name (case-insensitive)"),
        },
    ),
    ToolDescriptor(
        name="kill_process",
        description="Terminate a process by PID or name. Use with caution.",
        parameters={
            "pid": NumberParam("Process ID to kill"),
            "name": StringParam("Process name to kill (kills first match)"),
            "force": BooleanParam("Use SIGKILL instead of SIGTERM", default=False),
        },
    ),
    ToolDescriptor(
        name="startup_items",
        description="List and manage login items and launch agents that run at startup.",
        parameters={
            "showDisabled": BooleanParam("Include disabled items", default=False),
        },
    ),
    ToolDescriptor(
        name="network_status",
        description=(
            "Get network interface status, current connections, and bandwidth usage."
        ),
    ),
]
