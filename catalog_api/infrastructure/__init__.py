"""Infrastructure Layer — database session management and observability.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Raw driver/ORM exceptions never leave this layer untranslated
"""
