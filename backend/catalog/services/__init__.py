"""Services Layer — catalog orchestration and the SQLAlchemy product store.

Invariants:
    - Services depend on core/ protocols, never on FastAPI
    - The store is the only module here that touches SQLAlchemy

Design Decisions:
    - Store injected into CatalogService: tests swap in an in-memory fake
"""
