"""Services Layer — tool registry, tool handlers and tool dispatch.

Invariants:
    - Handlers split by concern (max ~4 methods each)
    - Tool dispatch uses explicit dict mapping (no auto-discovery)

Design Decisions:
    - One handler file per concern for locality
"""
