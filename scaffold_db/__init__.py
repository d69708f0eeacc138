# ==============================================================================
# SCAFFOLD_DB PACKAGE INITIALIZATION
# ==============================================================================
# Dual-backend storage layer: Supabase (PostgREST) and SQLite
# Architecture: Adapter Pattern, Repository Pattern, Factory Pattern
# ==============================================================================

"""
Dual-Backend Storage Layer
==========================

Data access core for a web backend holding users, payments,
subscriptions and webhook events.

Features:
---------
- One adapter contract, two interchangeable backends (Supabase, SQLite)
- Soft delete with live-record filtering on every read
- Page-number pagination with total counts
- camelCase application keys, snake_case storage columns
- Uniform storage exception family

Usage:
------
    from scaffold_db.database import DatabaseFactory
    from scaffold_db.database.repositories import UserRepository

    adapter = await DatabaseFactory.initialize("sqlite")
    users = UserRepository(adapter)
    user = await users.find_by_email("a@x.com")
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
