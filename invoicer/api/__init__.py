"""API Layer — FastAPI routes, session gate, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every non-exempt request passes the session gate before reaching a route

Design Decisions:
    - Thin routes delegate to services (InvoiceActions, authenticate)
"""
