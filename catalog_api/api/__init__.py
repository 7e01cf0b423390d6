"""API Layer — FastAPI routes, dependencies, envelope helpers and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every response body is the envelope {success, message, data?, error?, meta?}

Design Decisions:
    - Thin routes delegate persistence to services
"""
