"""
SQL Anywhere connections and schema entity models
"""

from .models import (
    ColumnDefinition,
    DatabaseSchema,
    ForeignKeyDefinition,
    IndexDefinition,
    NativeType,
    ReferentialAction,
    TableInfo,
)
from .connection import Connection, SQLAlchemyConnection
from .factory import DatabaseFactory

__all__ = [
    'ColumnDefinition',
    'DatabaseSchema',
    'ForeignKeyDefinition',
    'IndexDefinition',
    'NativeType',
    'ReferentialAction',
    'TableInfo',
    'Connection',
    'SQLAlchemyConnection',
    'DatabaseFactory'
]
