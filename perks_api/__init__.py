"""
Perks API — Application Package Initializer
============================================

What: Marks the `perks_api` directory as a Python package.
Who:  Imported by uvicorn (`perks_api.main:app`), Alembic and pytest.

Architecture Note:
    The service is a thin layered CRUD backend:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (PerkService, Validator) │  ← Guards, validation, store calls
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch the session directly; services never build responses.
"""

__version__ = "1.0.0"
