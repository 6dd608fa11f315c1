"""
ITR API: Application Package Initializer
========================================

What: Marks the `itr_api` directory as a Python package.
Who:  Imported by uvicorn (`itr_api.main:app`), the `python -m itr_api`
      entrypoint and pytest.

Architecture Note:
    The service is a thin layered CRUD API over one table:

    ┌─────────────────────────────────────┐
    │       Routes (Request Handlers)     │  ← decode input, map errors to HTTP
    ├─────────────────────────────────────┤
    │      Services (Record Store)        │  ← one SQL statement per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic DTOs
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async engine, session per request
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
