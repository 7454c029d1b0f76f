"""Pydantic Schemas — response contracts for API endpoints.

Invariants:
    - Schemas describe what leaves the API; form input is validated by core/validate_invoice.py
    - Money leaves the API both as integer cents and as a formatted string

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
