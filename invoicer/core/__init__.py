"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (today's date is always a parameter)

Design Decisions:
    - Functional core separated from imperative shell: validator and session gate
      are testable without a database or an HTTP client
"""
