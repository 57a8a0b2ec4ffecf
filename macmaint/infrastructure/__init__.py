"""Infrastructure Layer — process execution, environment context, logging setup.

Invariants:
    - Only this layer starts child processes or reads process-wide environment
    - Services receive these capabilities by injection, never import globals
"""
