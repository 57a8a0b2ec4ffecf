"""Tool Dispatch — tests for lookup, default-filling, validation and routing.

Tests cover:
    - Unknown tool raises UnknownToolError without running anything
    - Enum violations raise InvalidArgumentError before the handler runs
    - Defaults reach the handler; results are returned unchanged
    - Non-finite numbers rejected; kill_process pid 0 sends no signal
    - Registered-but-unbound tools raise UnboundToolError
"""

import pytest

from macmaint.core.errors import InvalidArgumentError, UnboundToolError, UnknownToolError
from tests.services.fake_executor import DF_ROOT


@pytest.mark.asyncio
async def test_unknown_tool_raises(dispatch, executor):
    with pytest.raises(UnknownToolError) as exc:
        await dispatch.execute("nonexistent_tool", {})
    assert exc.value.code == "UNKNOWN_TOOL"
    assert exc.value.context.tool_name == "nonexistent_tool"
    assert executor.calls == []


@pytest.mark.asyncio
async def test_enum_violation_rejected_before_handler(dispatch, executor):
    with pytest.raises(InvalidArgumentError) as exc:
        await dispatch.execute("cleanup_caches", {"targets": ["bogus"]})
    assert exc.value.field == "targets"
    assert exc.value.context.tool_name == "cleanup_caches"
    assert executor.calls == []


@pytest.mark.asyncio
async def test_sort_enum_violation_rejected(dispatch, executor):
    with pytest.raises(InvalidArgumentError):
        await dispatch.execute("process_list", {"sortBy": "pid"})
    assert executor.calls == []


@pytest.mark.asyncio
async def test_defaults_reach_handler(dispatch, executor):
    executor.script("du", "-sh", "/Users/tester/.Trash", stdout="1.5G\t/Users/tester/.Trash\n")
    executor.script("find")
    result = await dispatch.execute("empty_trash", None)
    assert result == {"status": "emptied", "previousSize": "1.5G"}
    assert executor.ran("find", "/Users/tester/.Trash", "-mindepth", "1")


@pytest.mark.asyncio
async def test_explicit_defaults_equal_omitted(dispatch, executor):
    executor.script("du", "-sh", stdout="1.5G\t/Users/tester/.Trash\n")
    executor.script("find")
    omitted = await dispatch.execute("empty_trash", {})
    explicit = await dispatch.execute("empty_trash", {"dryRun": False})
    assert omitted == explicit == {"status": "emptied", "previousSize": "1.5G"}


@pytest.mark.asyncio
async def test_non_finite_number_rejected_before_handler(dispatch, executor):
    with pytest.raises(InvalidArgumentError) as exc:
        await dispatch.execute("disk_usage", {"depth": float("inf")})
    assert exc.value.field == "depth"
    assert executor.calls == []


@pytest.mark.asyncio
async def test_kill_pid_zero_sends_no_signal(dispatch, executor):
    executor.script("kill")
    result = await dispatch.execute("kill_process", {"pid": 0})
    assert result == {"success": False, "error": "Must provide either pid or name"}
    assert executor.calls == []


@pytest.mark.asyncio
async def test_handler_errors_stay_in_band(dispatch, executor):
    result = await dispatch.execute("go_cache_status", {})
    assert "error" in result
    assert result["note"] == "Go may not be installed"


@pytest.mark.asyncio
async def test_dispatch_routes_disk_usage(dispatch, executor):
    executor.fail("dust", exit_code=127)
    executor.script("du", "-h", "-d", "1", stdout="2.0G\t/Users/tester/go\n2.5G\t/Users/tester\n")
    executor.script("df", "-h", "/", stdout=DF_ROOT)
    result = await dispatch.execute("disk_usage", {})
    assert result["tool"] == "du"
    assert result["path"] == "/Users/tester"
    assert executor.ran("du", "-h", "-d", "1", "/Users/tester")


@pytest.mark.asyncio
async def test_unbound_tool_raises(dispatch):
    del dispatch._handlers["network_status"]
    with pytest.raises(UnboundToolError):
        await dispatch.execute("network_status", {})
