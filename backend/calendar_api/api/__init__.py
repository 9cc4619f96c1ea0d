"""API Layer: FastAPI routes, error handlers and CORS middleware.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Thin routes delegate to CalendarStore
"""
