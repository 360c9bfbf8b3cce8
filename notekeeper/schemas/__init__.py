"""Pydantic request/response schemas: the API contract, kept separate from the ORM models."""
