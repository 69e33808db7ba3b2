"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the only entity

Design Decisions:
    - One file per entity for locality (ADR: ExMA max 3-4 files to understand a feature)
    - Models imported here so Base.metadata is populated before create_all / autogenerate
"""

from cruder.models.user import User  # noqa: F401
