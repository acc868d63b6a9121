"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary; content rules stay in core/

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
