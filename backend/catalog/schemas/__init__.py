"""Pydantic Schemas — request/response shapes for API endpoints.

Invariants:
    - Schemas coerce types at the system boundary; business rules live in core/

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
