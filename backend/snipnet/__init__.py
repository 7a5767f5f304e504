"""
Snipnet Backend — Application Package
=======================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     SnippetController (Rules)       │  ← validation, ownership, ids
    ├─────────────────────────────────────┤
    │   Schemas (Pydantic) & Model (ORM)  │
    ├─────────────────────────────────────┤
    │   SnippetStore (SQL or in-memory)   │  ← persistence
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
