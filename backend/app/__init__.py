"""
Daybook Backend — Application Package Initializer
===================================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │     Routes + Identity Verifier      │  ← HTTP concerns, auth
    ├─────────────────────────────────────┤
    │    Services + Validation            │  ← ownership, field rules
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
