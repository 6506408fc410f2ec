"""
Database factory for creating SQL Anywhere connections
"""

from typing import Any, Dict, List

from ..config import DatabaseSettings
from .connection import Connection, SQLAlchemyConnection


class DatabaseFactory:
    """Factory class to create the database connector"""

    ALIASES = ('sqlanywhere', 'sqlany', 'sqla')

    @staticmethod
    def create_connector(db_type: str, config: Dict[str, Any]) -> Connection:
        """Create database connection based on type"""
        if db_type.lower() in DatabaseFactory.ALIASES:
            missing = [key for key in DatabaseFactory.get_required_config(db_type) if not config.get(key)]
            if missing:
                raise ValueError(f"Missing configuration for {db_type}: {', '.join(missing)}")
            return SQLAlchemyConnection.connect(DatabaseSettings.from_dict(config))
        raise ValueError(f"Unsupported database type: {db_type}")

    @staticmethod
    def get_supported_types() -> List[str]:
        """Get list of supported database types"""
        return ['sqlanywhere']

    @staticmethod
    def get_required_config(db_type: str) -> List[str]:
        """Get required configuration keys for database type"""
        if db_type.lower() in DatabaseFactory.ALIASES:
            return ['host', 'user', 'password', 'database']
        return []
