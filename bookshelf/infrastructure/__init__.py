"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/
    - Storage failures are translated into core/errors.py types before leaving this layer
"""
