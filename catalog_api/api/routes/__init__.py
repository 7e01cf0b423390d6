"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes validate, run cross-entity checks, call one service, and respond

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
