"""Infrastructure Layer — storage adapters and cross-cutting concerns.

Invariants:
    - Infrastructure implements core protocols; it never decides identity or locale rules
    - All SQLAlchemy failures mapped to StorageError (core/errors.py)

Design Decisions:
    - ORM rows converted to plain wire documents here, so core only sees dicts
"""
