"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - Wire format is camelCase (userId, createdAt, taskCount); Python attributes snake_case

Design Decisions:
    - Separate from core records: schemas are API contracts, records are storage shape
"""
