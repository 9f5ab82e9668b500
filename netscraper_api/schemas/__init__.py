"""Pydantic Schemas — request/response transfer objects for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies, responses)
    - JSON keys are camelCase on the wire

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
