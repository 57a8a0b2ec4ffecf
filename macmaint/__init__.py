"""macmaint — workstation maintenance tools behind a tool-calling surface.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
