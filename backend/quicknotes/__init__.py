"""
QuickNotes Backend — Application Package
==========================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, error mapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        NoteStore (Persistence)      │  ← Async SQLAlchemy, pooled
    └─────────────────────────────────────┘

The `client` module is the HTTP consumer of this API: a typed client plus
the local note-board state it keeps in sync.
"""

__version__ = "1.0.0"
