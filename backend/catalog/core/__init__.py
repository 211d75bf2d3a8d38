"""Core Layer — pure pricing and validation logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the catalog service
      orchestrates store calls around these functions
"""
