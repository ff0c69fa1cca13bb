"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Every response is wrapped in the {message, data} envelope

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - camelCase on the wire for weeklist payloads (isActive, isCompleted, createdBy)
"""
