"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (user input, API responses)
    - Wire names are from / to / message / since; Python attributes use sender / recipient / body

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
