"""Core Layer: calendar domain types, errors and the in-memory store.

Invariants:
    - No module in core/ imports from api/, schemas/ or infrastructure/
    - No IO beyond logging
"""
