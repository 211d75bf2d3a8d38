"""ORM Models — SQLAlchemy declarative models for catalog entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per entity; all models imported here so Base.metadata is complete
      before create_all or alembic autogenerate runs
"""

from catalog.models.product import Product  # noqa: F401
