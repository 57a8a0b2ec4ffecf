"""Tools Registry tests — catalog order, uniqueness and registry/dispatch consistency.

Tests cover:
    - ALL_TOOLS has 18 entries in the published order
    - Every registered name has a handler and vice versa
    - Every descriptor renders a valid wire shape
"""

from macmaint.services.tools_registry import ALL_TOOLS, list_tools, lookup, wire_catalog

EXPECTED_ORDER = [
    "disk_usage", "go_cache_status", "cleanup_caches", "cleanup_docker",
    "memory_status", "cleanup_recommendations", "empty_trash",
    "full_cleanup_workflow", "analyze_library", "developer_cleanup",
    "cpu_usage", "thermal_status", "battery_health", "system_info",
    "process_list", "kill_process", "startup_items", "network_status",
]


def test_registry_order_is_stable():
    assert [t.name for t in list_tools()] == EXPECTED_ORDER
    assert [t.name for t in list_tools()] == [t.name for t in list_tools()]


def test_registry_names_unique():
    names = [t.name for t in ALL_TOOLS]
    assert len(names) == len(set(names)) == 18


def test_registry_matches_handler_table(dispatch):
    assert {t.name for t in ALL_TOOLS} == dispatch.handler_names


def test_lookup():
    assert lookup("empty_trash").name == "empty_trash"
    assert lookup("mac_empty_trash") is None


def test_wire_catalog_shape():
    for entry in wire_catalog():
        assert set(entry) == {"name", "description", "inputSchema"}
        assert entry["inputSchema"]["type"] == "object"
        for prop in entry["inputSchema"]["properties"].values():
            assert prop["type"] in {"string", "number", "boolean", "array"}
            assert prop["description"]


def test_developer_cleanup_defaults_to_dry_run():
    props = lookup("developer_cleanup").to_wire()["inputSchema"]["properties"]
    assert props["dryRun"]["default"] is True


def test_cleanup_caches_targets_enum():
    props = lookup("cleanup_caches").to_wire()["inputSchema"]["properties"]
    assert props["targets"]["items"]["enum"] == [
        "go", "brew", "npm", "pip", "chrome", "spotify", "all",
    ]
    assert props["targets"]["default"] == ["all"]


def test_kill_process_identity_params_have_no_default():
    props = lookup("kill_process").to_wire()["inputSchema"]["properties"]
    assert "default" not in props["pid"]
    assert "default" not in props["name"]
