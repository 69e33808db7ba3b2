"""Infrastructure Layer — database access, logging setup, storage error mapping.

Invariants:
    - Storage driver details (SQLSTATE codes, constraint names) never leave this package

Design Decisions:
    - Repository implementations live beside the session manager they depend on
"""
