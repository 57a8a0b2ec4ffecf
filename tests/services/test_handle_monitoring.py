"""Monitoring Handlers — performance, system and process tools against scripted output."""

import pytest

from macmaint.services.handle_performance import PerformanceHandlers
from macmaint.services.handle_processes import ProcessHandlers
from macmaint.services.handle_system import AIRPORT, SystemHandlers
from tests.services.fake_executor import (
    DF_ROOT, PMSET_BATT, PS_AUX, SYSTEM_PROFILER_POWER, TOP_CPU, VM_STAT,
)


@pytest.fixture
def performance(runner) -> PerformanceHandlers:
    return PerformanceHandlers(runner)


@pytest.fixture
def system(runner, env) -> SystemHandlers:
    return SystemHandlers(runner, env, external_ip_url="ifconfig.me")


@pytest.fixture
def processes(runner) -> ProcessHandlers:
    return ProcessHandlers(runner)


# -- performance ----------------------------------------------------------------

@pytest.mark.asyncio
async def test_memory_status(performance, executor):
    executor.script("vm_stat", stdout=VM_STAT)
    executor.script("ps", "aux", "-m", stdout=PS_AUX)
    result = await performance.memory_status({})
    assert result["vmStats"]["activeGB"] == "4.00"
    assert result["memoryPressure"] == "memory_pressure command not available"
    assert result["topProcesses"].startswith("USER")


@pytest.mark.asyncio
async def test_cpu_usage(performance, executor):
    executor.script("sysctl", "-n", "vm.loadavg", stdout="{ 2.31 2.05 1.98 }\n")
    executor.script("top", stdout=TOP_CPU)
    executor.script("ps", "aux", "-r", stdout=PS_AUX)
    executor.script("sysctl", "-n", "hw.ncpu", stdout="10\n")
    executor.script("sysctl", "-n", "hw.perflevel0.physicalcpu", stdout="8\n")
    result = await performance.cpu_usage({"topN": 2})
    assert result["loadAverage"]["oneMinute"] == 2.31
    assert result["cpuUsage"] == "CPU usage: 7.69% user, 11.53% sys, 80.76% idle"
    assert result["cpuPercent"]["idle"] == 80.76
    assert result["totalCores"] == 10
    assert result["performanceCores"] == 8
    assert result["efficiencyCores"] is None
    assert len(result["topProcesses"].splitlines()) == 3


@pytest.mark.asyncio
async def test_thermal_throttling(performance, executor):
    executor.script("pmset", "-g", "therm", stdout="CPU_Speed_Limit = 70\n")
    result = await performance.thermal_status({})
    assert result["isThrottling"] is True
    assert "osx-cpu-temp" in result["temperature"]
    assert result["recommendation"].startswith("System is thermal throttling")


@pytest.mark.asyncio
async def test_thermal_normal_at_full_speed(performance, executor):
    executor.script("pmset", "-g", "therm", stdout="CPU_Speed_Limit = 100\n")
    executor.script("osx-cpu-temp", stdout="52.1°C\n")
    result = await performance.thermal_status({})
    assert result["isThrottling"] is False
    assert result["temperature"] == "52.1°C"


@pytest.mark.asyncio
@pytest.mark.parametrize("capacity, note", [
    (75, "Battery capacity significantly degraded. Consider replacement."),
    (95, "Battery health good."),
])
async def test_battery_health(performance, executor, capacity, note):
    executor.script(
        "system_profiler", "SPPowerDataType",
        stdout=SYSTEM_PROFILER_POWER.format(capacity=capacity),
    )
    executor.script("pmset", "-g", "batt", stdout=PMSET_BATT)
    result = await performance.battery_health({})
    assert result["healthNote"] == note
    assert result["maxCapacity"] == f"{capacity}%"
    assert result["chargeLevel"] == "64%"
    assert "maxCapacityPercent" not in result


# -- system ---------------------------------------------------------------------

@pytest.mark.asyncio
async def test_system_info(system, executor):
    executor.script("sw_vers", stdout="ProductName:\tmacOS\nProductVersion:\t14.4\n")
    executor.script("sysctl", "-n", "hw.model", stdout="Mac15,3\n")
    executor.script("sysctl", "-n", "hw.memsize", stdout="17179869184\n")
    executor.script("uptime", stdout=" 9:41  up 3 days\n")
    executor.script("df", "-h", "/", stdout=DF_ROOT)
    executor.script("hostname", stdout="studio.local\n")
    result = await system.system_info({})
    assert result["chip"] == "Apple Silicon"
    assert result["memoryGB"] == "16 GB"
    assert result["disk"]["percentUsed"] == "94%"
    assert result["currentUser"] == "tester"
    assert result["macOS"] == "ProductName: macOS, ProductVersion: 14.4"


@pytest.mark.asyncio
async def test_startup_items_with_disabled(system, executor):
    executor.script(
        "ls", "-la", "/Users/tester/Library/LaunchAgents",
        stdout="-rw-r--r--  1 tester  staff  612 Mar  1 09:00 com.example.sync.plist\n",
    )
    executor.script("launchctl", "list", stdout="PID\tStatus\tLabel\n-\t0\tcom.example.sync\n")
    executor.script("ls", "/Library/LaunchAgents", stdout="com.vendor.updater.plist\n")
    executor.script(
        "launchctl", "print-disabled", "gui/501",
        stdout='\t"com.example.off" => disabled\n',
    )
    result = await system.startup_items({"showDisabled": True})
    assert result["launchAgents"] == [{
        "path": "/Users/tester/Library/LaunchAgents/com.example.sync.plist",
        "type": "user",
    }]
    assert result["systemAgents"] == ["/Library/LaunchAgents/com.vendor.updater.plist"]
    assert result["disabledAgents"] == ["com.example.off"]
    assert result["loginItems"] == []


@pytest.mark.asyncio
async def test_startup_items_hides_disabled_by_default(system, executor):
    executor.script("launchctl", "list", stdout="PID\tStatus\tLabel\n")
    result = await system.startup_items({"showDisabled": False})
    assert result["launchAgents"] == []
    assert "disabledAgents" not in result
    assert not executor.ran("launchctl", "print-disabled")


@pytest.mark.asyncio
async def test_network_status_placeholders(system, executor):
    executor.script("ifconfig", stdout="en0: flags=8863<UP>\n\tinet 10.0.0.5 netmask 0xffffff00\n")
    executor.script("scutil", "--dns", stdout="  nameserver[0] : 10.0.0.1\n")
    executor.script("netstat", "-an", stdout="tcp4 0 0 a b ESTABLISHED\n")
    result = await system.network_status({})
    assert result["wifi"] == "Not connected to WiFi"
    assert result["externalIp"] == "Unable to determine"
    assert result["activeConnections"] == 1
    assert executor.ran(AIRPORT, "-I")
    assert executor.ran("curl", "-s", "--max-time", "2", "ifconfig.me")


# -- processes ------------------------------------------------------------------

@pytest.mark.asyncio
async def test_process_list_by_memory_with_filter(processes, executor):
    executor.script("ps", "aux", "-m", stdout=PS_AUX)
    result = await processes.process_list({"sortBy": "memory", "limit": 20, "filter": "slack"})
    assert result["sortedBy"] == "memory"
    assert [p["pid"] for p in result["processes"]] == [812]


@pytest.mark.asyncio
async def test_process_list_by_name(processes, executor):
    executor.script("ps", "aux", stdout=PS_AUX)
    result = await processes.process_list({"sortBy": "name", "limit": 2})
    assert executor.calls == [("ps", "aux")]
    assert [p["pid"] for p in result["processes"]] == [455, 812]


@pytest.mark.asyncio
async def test_kill_without_target_issues_no_command(processes, executor):
    result = await processes.kill_process({"force": False})
    assert result == {"success": False, "error": "Must provide either pid or name"}
    assert executor.calls == []


@pytest.mark.asyncio
async def test_kill_by_pid(processes, executor):
    executor.script("kill")
    result = await processes.kill_process({"pid": 812, "force": True})
    assert result == {"success": True, "killed": {"pid": 812}, "signal": "SIGKILL"}
    assert executor.calls == [("kill", "-9", "812")]


@pytest.mark.asyncio
async def test_kill_by_name_uses_first_match(processes, executor):
    executor.script("pgrep", "-f", "Slack", stdout="812\n813\n")
    executor.script("kill")
    result = await processes.kill_process({"name": "Slack", "force": False})
    assert result == {
        "success": True, "killed": {"pid": 812, "name": "Slack"}, "signal": "SIGTERM",
    }
    assert executor.ran("kill", "-15", "812")


@pytest.mark.asyncio
async def test_kill_by_name_no_match(processes, executor):
    executor.fail("pgrep", exit_code=1, stderr="")
    result = await processes.kill_process({"name": "phantomd", "force": False})
    assert result == {"success": False, "error": "No process found matching: phantomd"}
    assert not executor.ran("kill")


@pytest.mark.asyncio
async def test_kill_failure_reported_in_band(processes, executor):
    executor.fail("kill", stderr="kill: 99999: No such process")
    result = await processes.kill_process({"pid": 99999, "force": False})
    assert result["success"] is False
    assert "No such process" in result["error"]


@pytest.mark.asyncio
@pytest.mark.parametrize("pid", [0, -1])
async def test_kill_rejects_non_positive_pid(processes, executor, pid):
    executor.script("kill")
    result = await processes.kill_process({"pid": pid, "force": False})
    assert result["success"] is False
    assert executor.calls == []


@pytest.mark.asyncio
async def test_kill_pid_zero_falls_back_to_name(processes, executor):
    executor.script("pgrep", "-f", "Slack", stdout="812\n")
    executor.script("kill")
    result = await processes.kill_process({"pid": 0, "name": "Slack", "force": False})
    assert result["killed"] == {"pid": 812, "name": "Slack"}
    assert executor.ran("kill", "-15", "812")


@pytest.mark.asyncio
async def test_kill_rejects_fractional_pid(processes, executor):
    executor.script("kill")
    result = await processes.kill_process({"pid": 812.7, "force": False})
    assert result == {"success": False, "error": "Invalid pid: 812.7"}
    assert executor.calls == []
