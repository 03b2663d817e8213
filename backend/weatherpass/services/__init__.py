"""Services Layer — request handlers for registration, login, and weather lookup.

Invariants:
    - Handlers are stateless and never call one another
    - Handlers depend on core Protocols, never on SQLAlchemy or httpx directly

Design Decisions:
    - One handler file per concern for locality (ADR: ExMA no god objects)
"""
