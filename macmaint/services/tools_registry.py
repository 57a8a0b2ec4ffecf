"""Tools Registry — ordered, immutable catalog of every tool.

Invariants:
    - list_tools() order is stable and is the discovery response verbatim
    - Tool names are unique (checked at import)
    - No dynamic registration: content is fixed when this module is imported

Design Decisions:
    - Explicit imports from each define_*_tools.py: no auto-discovery
"""

from macmaint.core.parameter_schema import ToolDescriptor
from macmaint.services.define_cleanup_tools import TOOLS_CLEANUP
from macmaint.services.define_monitoring_tools import TOOLS_MONITORING

ALL_TOOLS: tuple[ToolDescriptor, ...] = (
    *TOOLS_CLEANUP,        # 10 tools
    *TOOLS_MONITORING,     # 8 tools
)
# Total: 18

_BY_NAME: dict[str, ToolDescriptor] = {t.name: t for t in ALL_TOOLS}

if len(_BY_NAME) != len(ALL_TOOLS):
    raise RuntimeError("Duplicate tool names in registry")


def list_tools() -> list[ToolDescriptor]:
    return list(ALL_TOOLS)


def lookup(name: str) -> ToolDescriptor | None:
    return _BY_NAME.get(name)


def wire_catalog() -> list[dict]:
    """Registry rendered for the 'list tools' protocol operation."""
    return [tool.to_wire() for tool in ALL_TOOLS]
