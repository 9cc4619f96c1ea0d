"""Calendar API Package: in-memory calendar task backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
