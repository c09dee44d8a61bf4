"""Pydantic Schemas — typed request/response records for API endpoints.

Invariants:
    - Schemas describe already-validated data (validation lives in core/validate_book.py)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
