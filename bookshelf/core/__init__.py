"""Core Layer — pure validation, domain errors, and boundary protocols.

Invariants:
    - No IO, no database, no FastAPI imports
"""
