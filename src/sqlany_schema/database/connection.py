"""
Data-access connections used by the catalog reader and DDL synthesizer
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from ..config import DatabaseSettings, setup_logger

Row = Dict[str, Any]

DEFAULT_OWNER = 'DBA'


class Connection(ABC):
    """Abstract base class for SQL Anywhere data access"""

    default_owner = DEFAULT_OWNER

    @abstractmethod
    def query(self, sql: str, tag: str, params: Optional[Mapping[str, Any]] = None) -> List[Row]:
        """Run a query and return its rows as column-name mappings"""
        pass

    @abstractmethod
    def execute(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> None:
        """Run a statement that produces no meaningful result set"""
        pass

    def quote(self, value: Any) -> str:
        """Render a Python value as a SQL literal"""
        if value is None:
            return 'NULL'
        if isinstance(value, bool):
            return '1' if value else '0'
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, str):
            return "'" + value.replace("'", "''") + "'"
        if isinstance(value, datetime):
            return f"'{value.isoformat(sep=' ')}'"
        if isinstance(value, (date, time)):
            return f"'{value.isoformat()}'"
        raise TypeError(f"Cannot quote value of type {type(value).__name__}")

    def quote_column_name(self, name: str) -> str:
        """Quote a single identifier"""
        return '"' + str(name).replace('"', '""') + '"'

    def quote_table_name(self, name: str) -> str:
        """Quote a possibly owner-qualified table name"""
        if '.' not in name:
            return self.quote_column_name(self._unquote(name))
        owner, bare = self.split_owner_qualified_name(name)
        return f"{self.quote_column_name(owner)}.{self.quote_column_name(bare)}"

    def split_owner_qualified_name(self, name: str) -> Tuple[str, str]:
        """Split 'owner.name' into (owner, name); bare names get the default owner"""
        parts = name.split('.')
        if len(parts) == 1:
            return self.default_owner, self._unquote(parts[0])
        if len(parts) != 2 or not all(part.strip('"') for part in parts):
            raise ValueError(f"Invalid owner-qualified name: {name}")
        return self._unquote(parts[0]), self._unquote(parts[1])

    @staticmethod
    def _unquote(identifier: str) -> str:
        identifier = identifier.strip()
        if len(identifier) >= 2 and identifier[0] == identifier[-1] == '"':
            return identifier[1:-1].replace('""', '"')
        return identifier


class SQLAlchemyConnection(Connection):
    """Connection backed by a SQLAlchemy engine"""

    def __init__(self, engine: Engine, default_owner: Optional[str] = None):
        self.engine = engine
        if default_owner:
            self.default_owner = default_owner
        self.logger = setup_logger("SQLAnywhereConnection")

    @classmethod
    def connect(cls, settings: DatabaseSettings) -> 'SQLAlchemyConnection':
        """Connect to SQL Anywhere"""
        try:
            engine = create_engine(settings.url)
            # Fail here rather than on the first catalog query
            with engine.connect():
                pass
        except Exception as e:
            raise ConnectionError(f"SQL Anywhere connection failed: {e}") from e
        return cls(engine, default_owner=settings.user)

    def query(self, sql: str, tag: str, params: Optional[Mapping[str, Any]] = None) -> List[Row]:
        self.logger.debug(f"[{tag}] {sql.strip()} {dict(params or {})}")
        with self.engine.connect() as conn:
            result = conn.execute(text(sql), dict(params or {}))
            return [dict(row) for row in result.mappings()]

    def execute(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> None:
        self.logger.debug(f"[EXECUTE] {sql}")
        with self.engine.begin() as conn:
            if params:
                conn.execute(text(sql), dict(params))
            else:
                # Quoted literals may contain ':' which text() would read as a bind
                conn.exec_driver_sql(sql)

    def close(self):
        self.engine.dispose()
