"""Performance Handlers — memory_status, cpu_usage, thermal_status, battery_health.

Invariants:
    - Read-only: no command issued here changes machine state
    - Optional probes (memory_pressure, osx-cpu-temp, core split) degrade to a
      placeholder instead of failing the tool
"""

import logging

from macmaint.core.parse_memory import parse_vm_stat, summarize_vm_stats
from macmaint.core.parse_power import (
    is_throttling, parse_battery_profile, parse_charge_level,
)
from macmaint.core.parse_processes import (
    find_cpu_usage_line, parse_cpu_usage, parse_loadavg, parse_optional_int,
)
from macmaint.core.recommendations import battery_health_note, thermal_recommendation
from macmaint.services.handler_helpers import (
    HANDLER_FAULTS, CommandRunner, tool_boundary,
)

logger = logging.getLogger(__name__)

_TOP_MEMORY_ROWS = 10
_NO_TEMPERATURE = "Temperature monitoring requires additional tools (e.g., osx-cpu-temp)"


def _head_text(output: str, rows: int) -> str:
    return "\n".join(output.strip().splitlines()[:rows])


class PerformanceHandlers:
    """Memory, CPU, thermal and battery inspection."""

    def __init__(self, runner: CommandRunner, page_size: int = 16384):
        self.runner = runner
        self.page_size = page_size

    async def _optional(self, command: str, *args: str, fallback: str) -> str:
        try:
            return (await self.runner.run(command, *args)).strip()
        except HANDLER_FAULTS as e:
            logger.debug(f"{command} unavailable: {e}")
            return fallback

    @tool_boundary()
    async def memory_status(self, args: dict) -> dict:
        vm_stat = await self.runner.run("vm_stat")
        pressure = await self._optional(
            "memory_pressure", fallback="memory_pressure command not available",
        )
        processes = await self.runner.run("ps", "aux", "-m")
        return {
            "memoryPressure": pressure,
            "topProcesses": _head_text(processes, _TOP_MEMORY_ROWS),
            "vmStats": summarize_vm_stats(parse_vm_stat(vm_stat, self.page_size)),
        }

    @tool_boundary()
    async def cpu_usage(self, args: dict) -> dict:
        top_n = max(int(args["topN"]), 0)
        load_avg = (await self.runner.run("sysctl", "-n", "vm.loadavg")).strip()
        cpu_line = find_cpu_usage_line(
            await self.runner.run("top", "-l", "1", "-n", "0"),
        )
        processes = await self.runner.run("ps", "aux", "-r")
        total_cores = int((await self.runner.run("sysctl", "-n", "hw.ncpu")).strip())
        perf = await self._optional(
            "sysctl", "-n", "hw.perflevel0.physicalcpu", fallback="",
        )
        efficiency = await self._optional(
            "sysctl", "-n", "hw.perflevel1.physicalcpu", fallback="",
        )
        return {
            "loadAverages": load_avg,
            "loadAverage": parse_loadavg(load_avg),
            "cpuUsage": cpu_line,
            "cpuPercent": parse_cpu_usage(cpu_line),
            "totalCores": total_cores,
            "performanceCores": parse_optional_int(perf),
            "efficiencyCores": parse_optional_int(efficiency),
            "topProcesses": _head_text(processes, top_n + 1),
        }

    @tool_boundary()
    async def thermal_status(self, args: dict) -> dict:
        thermal = await self._optional(
            "pmset", "-g", "therm", fallback="Thermal info not available",
        )
        temperature = await self._optional("osx-cpu-temp", fallback=_NO_TEMPERATURE)
        throttling = is_throttling(thermal)
        return {
            "thermalState": thermal,
            "temperature": temperature,
            "isThrottling": throttling,
            "recommendation": thermal_recommendation(throttling),
        }

    @tool_boundary()
    async def battery_health(self, args: dict) -> dict:
        profile = parse_battery_profile(
            await self.runner.run("system_profiler", "SPPowerDataType"),
        )
        charge = parse_charge_level(await self.runner.run("pmset", "-g", "batt"))
        capacity = profile.pop("maxCapacityPercent")
        return {
            "chargeLevel": charge,
            **profile,
            "healthNote": battery_health_note(capacity),
        }
