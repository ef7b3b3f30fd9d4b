"""
Movie Store — Application Package Initializer
==============================================

What: Marks the `moviestore` directory as a Python package.
Why:  Enables module imports like `from moviestore.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service follows a thin layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← id generation, decoding, not-found policy
    ├─────────────────────────────────────┤
    │            Schemas (Data)           │  ← Pydantic Movie / Director
    ├─────────────────────────────────────┤
    │        Store (In-Memory State)      │  ← ordered collection behind one lock
    └─────────────────────────────────────┘

    Routes handle HTTP details (status codes, headers) and delegate to the
    service; the service can be tested without HTTP; the store owns the only
    mutable state in the process.
"""

__version__ = "1.0.0"
