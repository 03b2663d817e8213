"""API Layer — FastAPI routes, dependencies, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every handled failure leaves as {"message": ..., "error": ...}

Design Decisions:
    - Thin routes delegate to services (ADR: ExMA impureim sandwich)
"""
