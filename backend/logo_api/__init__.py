"""
Logo Designer Backend — Application Package Initializer
=========================================================

What: Marks the `logo_api` directory as a Python package.
Why:  Enables module imports like `from logo_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The mobile read path is split into layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, envelopes
    ├─────────────────────────────────────┤
    │  Document Assembler (Services)      │  ← joins rows into one document
    │  Legacy Translator · Localizer      │  ← pure transforms
    ├─────────────────────────────────────┤
    │   Layer row variants & Schemas      │  ← typed rows, API contracts
    ├─────────────────────────────────────┤
    │   Models & Database (Persistence)   │  ← SQLAlchemy ORM, async sessions
    └─────────────────────────────────────┘

    Everything below the routes is read-only: the write paths (CRUD, auth,
    billing) live elsewhere and only share the tables.
"""

__version__ = "1.0.0"
