"""Database Declarations — SQLAlchemy declarative Base.

Invariants:
    - Engine and sessions are owned by infrastructure/database.py, not here
"""
