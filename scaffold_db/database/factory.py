# ==============================================================================
# DATABASE FACTORY - Adapter Instantiation & Lifecycle Management
# ==============================================================================
# Factory Pattern for creating and managing database adapters
# Singleton caching per provider for efficient resource utilization
# ==============================================================================

from __future__ import annotations

import logging
from typing import Dict, Optional, Union

from scaffold_db.core.exceptions import DatabaseError
from scaffold_db.core.settings import DatabaseProvider, settings
from scaffold_db.database.adapters.base_adapter import BaseDatabaseAdapter
from scaffold_db.database.adapters.sqlite_adapter import SQLiteAdapter
from scaffold_db.database.adapters.supabase_adapter import SupabaseAdapter

logger = logging.getLogger(__name__)

ProviderInput = Union[DatabaseProvider, str, None]


class DatabaseFactory:
    """
    Factory class for creating and managing database adapters.

    The set of backends is closed: ``DatabaseProvider.SUPABASE`` and
    ``DatabaseProvider.SQLITE``. The provider is an explicit argument;
    ``settings.DATABASE_PROVIDER`` is read only when none is given.

    Class Attributes:
        _instances: Cache of adapter instances per provider

    Example:
        >>> # Initialize at application startup
        >>> await DatabaseFactory.initialize(DatabaseProvider.SQLITE)
        >>>
        >>> # Hand the adapter to repositories
        >>> users = UserRepository(DatabaseFactory.get_adapter())
        >>>
        >>> # Shutdown at application exit
        >>> await DatabaseFactory.shutdown()
    """

    _instances: Dict[DatabaseProvider, BaseDatabaseAdapter] = {}

    @staticmethod
    def resolve_provider(provider: ProviderInput = None) -> DatabaseProvider:
        """
        Normalize a provider argument.

        Raises:
            ValueError: If the provider is not supported
        """
        if provider is None:
            return settings.DATABASE_PROVIDER
        try:
            return DatabaseProvider(provider)
        except ValueError as e:
            raise ValueError(f"Unsupported database provider: {provider}") from e

    @classmethod
    def create_adapter(
        cls,
        provider: ProviderInput = None,
        **kwargs,
    ) -> BaseDatabaseAdapter:
        """
        Create and return appropriate database adapter.

        Returns cached instance if available, otherwise creates new.

        Args:
            provider: Backend (defaults to settings.DATABASE_PROVIDER)
            **kwargs: Additional adapter configuration
                - database_path: SQLite file path
                - client: Pre-built Supabase client
                - url / key: Supabase project URL and API key

        Returns:
            Database adapter instance

        Raises:
            ValueError: If provider is not supported
        """
        provider = cls.resolve_provider(provider)

        if provider in cls._instances:
            return cls._instances[provider]

        adapter: BaseDatabaseAdapter

        if provider == DatabaseProvider.SQLITE:
            adapter = SQLiteAdapter(database_path=kwargs.get("database_path"))
            logger.info("Created SQLite adapter")

        elif provider == DatabaseProvider.SUPABASE:
            adapter = SupabaseAdapter(
                client=kwargs.get("client"),
                url=kwargs.get("url"),
                key=kwargs.get("key"),
            )
            logger.info("Created Supabase adapter")

        else:
            raise ValueError(f"Unsupported database provider: {provider}")

        cls._instances[provider] = adapter
        return adapter

    @classmethod
    async def initialize(
        cls,
        provider: ProviderInput = None,
        **kwargs,
    ) -> BaseDatabaseAdapter:
        """
        Initialize database connection.

        Creates adapter and establishes database connection.
        Should be called at application startup.

        Returns:
            Initialized database adapter

        Raises:
            DatabaseError: If connection fails
        """
        provider = cls.resolve_provider(provider)
        adapter = cls.create_adapter(provider, **kwargs)

        try:
            await adapter.connect()
        except DatabaseError:
            cls._instances.pop(provider, None)
            logger.error(f"Database initialization failed: {provider.value}")
            raise

        logger.info(f"Database initialized: {provider.value}")
        return adapter

    @classmethod
    async def shutdown(cls) -> None:
        """
        Close all database connections.

        Releases all resources and clears adapter cache.
        """
        for provider, adapter in cls._instances.items():
            try:
                await adapter.disconnect()
                logger.info(f"Disconnected: {provider.value}")
            except DatabaseError as e:
                logger.error(f"Error disconnecting {provider.value}: {e.message}")

        cls._instances.clear()
        logger.info("All database connections closed")

    @classmethod
    def get_adapter(cls, provider: ProviderInput = None) -> BaseDatabaseAdapter:
        """
        Get existing adapter instance.

        Raises:
            RuntimeError: If adapter not initialized
        """
        provider = cls.resolve_provider(provider)

        if provider not in cls._instances:
            raise RuntimeError(
                f"Database adapter for {provider.value} not initialized. "
                f"Call DatabaseFactory.initialize() first."
            )

        return cls._instances[provider]

    @classmethod
    def is_initialized(cls, provider: ProviderInput = None) -> bool:
        """True if an adapter for the provider exists in the cache."""
        return cls.resolve_provider(provider) in cls._instances

    @classmethod
    async def health_check(cls, provider: ProviderInput = None) -> bool:
        """
        Check database health.

        Returns:
            True if the adapter exists and its backend answers
        """
        if not cls.is_initialized(provider):
            return False
        return await cls.get_adapter(provider).health_check()

    @classmethod
    def reset(cls) -> None:
        """
        Reset factory state.

        Clears adapter cache without disconnecting.
        Primarily for testing purposes.
        """
        cls._instances.clear()
