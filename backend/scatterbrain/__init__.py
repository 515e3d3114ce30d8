"""
ScatterBrain Backend - Application Package Initializer
======================================================

What: Marks the `scatterbrain` directory as a Python package.
Who:  Imported by uvicorn (`scatterbrain.main:app`), pytest, and the
      `scatterbrain` console script.

Architecture Note:
    The backend is a thin layered CRUD service for thoughts and labels:

    ┌─────────────────────────────────────┐
    │         Routes (HTTP Handlers)      │  ← decode, dispatch, map status
    ├─────────────────────────────────────┤
    │     ThoughtProcessor (Facade)       │  ← schema init, composition
    ├─────────────────────────────────────┤
    │   Thought / Label / Thought-Label   │  ← all SQL lives here
    │            Storage                  │
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data)           │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (Async SQLAlchemy)       │  ← engine, sessions, clock
    └─────────────────────────────────────┘

    Routes never issue SQL; storage never knows about HTTP status codes.
"""

__version__ = "1.0.0"
