"""Service Layer — orchestration between core rules and repositories."""
