"""Infrastructure Layer — database session management and logging setup.

Invariants:
    - Infrastructure never imports pricing or validation logic from core/
      (errors.py is the only shared module)
"""
