# ==============================================================================
# DATABASE PACKAGE INITIALIZATION
# ==============================================================================
# Storage abstraction layer with two interchangeable backends
# ==============================================================================

"""
Database Module
===============

Provides a unified storage layer supporting:
- Supabase (hosted Postgres through PostgREST)
- SQLite (embedded, file-backed or in-memory)

Key Components:
- Adapters: Backend-specific implementations of one contract
- Factory: Explicit adapter selection and lifecycle
- Tables: Persisted layout
- Repositories: Entity-typed data access
"""

from scaffold_db.database.adapters.base_adapter import BaseDatabaseAdapter
from scaffold_db.database.factory import DatabaseFactory

__all__ = [
    "DatabaseFactory",
    "BaseDatabaseAdapter",
]
