"""Infrastructure Layer — database, weather provider client, and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external calls wrapped with timeout/error mapping

Design Decisions:
    - Thin wrappers over raw clients that raise tagged errors (ADR: ExMA single responsibility)
"""
