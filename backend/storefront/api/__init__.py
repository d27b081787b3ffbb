"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - /api/* endpoints return structured JSON; page routes return HTML

Design Decisions:
    - Thin routes delegate to services (ADR: ExMA impureim sandwich)
"""
