"""
Field Manager Backend: Application Package
==========================================

What: Marks the `fieldmanager` directory as a Python package.
Who:  Imported by uvicorn, Alembic and pytest.

Architecture Note:
    The backend is split into layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Resource Handlers)    │  ← lookup, validate, mutate, persist
    ├─────────────────────────────────────┤
    │      Persistence Gateway            │  ← queries, explicit joins, save
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Domain: Users own Fields, Fields host DeviceControllers
    (irrigation units, sensors).
"""

__version__ = "1.0.0"
