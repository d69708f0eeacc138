# ==============================================================================
# DATABASE ADAPTERS PACKAGE
# ==============================================================================

"""
Database Adapters
=================

Provides unified interface implementations for different databases:
- BaseDatabaseAdapter: Abstract interface definition
- SupabaseAdapter: Hosted Postgres through the Supabase query builder
- SQLiteAdapter: SQLite using SQLAlchemy async + aiosqlite
"""

from scaffold_db.database.adapters.base_adapter import BaseDatabaseAdapter, Record
from scaffold_db.database.adapters.query_protocols import TableClient
from scaffold_db.database.adapters.sqlite_adapter import SQLiteAdapter
from scaffold_db.database.adapters.supabase_adapter import SupabaseAdapter

__all__ = [
    "BaseDatabaseAdapter",
    "Record",
    "TableClient",
    "SQLiteAdapter",
    "SupabaseAdapter",
]
