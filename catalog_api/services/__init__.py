"""Service Layer — translate validated inputs into ORM statements.

Invariants:
    - Services receive an AsyncSession at construction; they never create one
    - Lookups return None when absent; mutations raise DatabaseError on failure
    - Services never build HTTP responses

Design Decisions:
    - One class per entity: the route's dependency builds it per request
"""
