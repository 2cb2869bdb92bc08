"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies, response shapes)
    - Response schemas never expose password_hash or jwt_token

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
