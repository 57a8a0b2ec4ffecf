"""Core Layer — pure domain logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Parsers are pure functions of captured command output

Design Decisions:
    - Functional core separated from the imperative shell that runs commands
"""
