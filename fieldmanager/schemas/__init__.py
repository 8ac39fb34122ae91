"""
Pydantic request/response schemas, one module per resource.

Schemas are separate from the SQLAlchemy models: the API exposes exactly
the shaped fields ({id, name, phoneNumber, email} etc.) and never the
storage rows themselves.
"""
