"""Core Layer — domain types, errors, and pure input normalization.

Invariants:
    - No module in core/ imports from api/, infrastructure/, models/ or db/
    - All functions are pure and deterministic
"""
