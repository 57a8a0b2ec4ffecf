"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate the envelope only; tool arguments are validated by the
      tool's own parameter schema during dispatch
"""
