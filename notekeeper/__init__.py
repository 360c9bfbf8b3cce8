"""
Notekeeper Backend - Application Package
=========================================

What: Personal note-taking API: password authentication, stateless session
      tokens, and ownership-scoped note CRUD.
Who:  Imported by uvicorn (`notekeeper.main:app`), Alembic and pytest.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, bearer token extraction
    ├─────────────────────────────────────┤
    │   Services (Authenticator, Notes)   │  ← Credential checks, ownership rules
    ├─────────────────────────────────────┤
    │      Stores (Users, Notes)          │  ← Filtered queries and atomic mutations
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Services receive their stores and configuration through their
    constructors, so tests can build them against an in-memory database.
"""

__version__ = "1.0.0"
