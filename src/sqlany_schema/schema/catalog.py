"""
Catalog reader for SQL Anywhere system tables
"""

from typing import Any, List, Optional

from ..config import setup_logger
from ..database.connection import Connection, Row
from ..database.models import (
    ColumnDefinition,
    DatabaseSchema,
    ForeignKeyDefinition,
    IndexDefinition,
    NativeType,
    SIZED_TYPES,
    TableInfo,
)
from ..errors import fetch
from .defaults import classify_default
from .foreign_keys import ForeignKeyResolver

# Objects owned by these users belong to the engine itself
SYSTEM_OWNERS_SQL = "SELECT SYS.SYSUSER.user_id FROM SYS.SYSUSER WHERE SYS.SYSUSER.user_name IN ('SYS', 'rs_systabgroup')"
OWNER_ID_SQL = "SELECT user_id FROM SYS.SYSUSER WHERE SYS.SYSUSER.user_name = :owner"

TABLES_SQL = f"""
    SELECT
        (SELECT user_name FROM SYS.SYSUSER WHERE SYS.SYSUSER.user_id = SYS.SYSTABLE.creator)
        + '.' + SYS.SYSTABLE.table_name table_name
    FROM SYS.SYSTABLE
    WHERE
        SYS.SYSTABLE.table_type = 'BASE' AND
        SYS.SYSTABLE.creator NOT IN ({SYSTEM_OWNERS_SQL}) AND
        SYS.SYSTABLE.server_type = 'SA'
    ORDER BY table_name
"""

VIEWS_SQL = f"""
    SELECT
        (SELECT user_name FROM SYS.SYSUSER WHERE SYS.SYSUSER.user_id = SYS.SYSTAB.creator)
        + '.' + SYS.SYSTAB.table_name table_name
    FROM SYS.SYSTAB
    WHERE
        SYS.SYSTAB.table_type_str = 'VIEW' AND
        SYS.SYSTAB.creator NOT IN ({SYSTEM_OWNERS_SQL}) AND
        SYS.SYSTAB.server_type = 1
    ORDER BY table_name
"""

COLUMNS_SQL = f"""
    SELECT
        SYS.SYSTABCOL.column_name name,
        SYS.SYSTABCOL."default" "default",
        SYS.SYSDOMAIN.domain_name domain,
        SYS.SYSTABCOL.nulls nulls,
        SYS.SYSTABCOL.width width,
        SYS.SYSTABCOL.scale scale
    FROM SYS.SYSTABCOL
    INNER JOIN SYS.SYSTAB ON SYS.SYSTAB.table_id = SYS.SYSTABCOL.table_id
    INNER JOIN SYS.SYSDOMAIN ON SYS.SYSDOMAIN.domain_id = SYS.SYSTABCOL.domain_id
    WHERE
        SYS.SYSTAB.table_name = :name AND
        SYS.SYSTAB.creator = ({OWNER_ID_SQL})
    ORDER BY SYS.SYSTABCOL.column_id
"""

# index_category 1 and 2 are primary and foreign keys, 3 is a user index
INDEXES_SQL = f"""
    SELECT DISTINCT SYS.SYSIDX.index_name index_name, SYS.SYSIDX."unique" "unique"
    FROM SYS.SYSTABLE
    INNER JOIN SYS.SYSIDXCOL ON SYS.SYSTABLE.table_id = SYS.SYSIDXCOL.table_id
    INNER JOIN SYS.SYSIDX ON SYS.SYSTABLE.table_id = SYS.SYSIDX.table_id
                         AND SYS.SYSIDXCOL.index_id = SYS.SYSIDX.index_id
    WHERE
        SYS.SYSTABLE.table_name = :name AND
        SYS.SYSIDX.index_category > 2 AND
        SYS.SYSTABLE.creator = ({OWNER_ID_SQL})
    ORDER BY index_name
"""

INDEX_COLUMNS_SQL = f"""
    SELECT SYS.SYSCOLUMN.column_name column_name
    FROM SYS.SYSIDX
    INNER JOIN SYS.SYSTABLE ON SYS.SYSTABLE.table_id = SYS.SYSIDX.table_id
    INNER JOIN SYS.SYSIDXCOL ON SYS.SYSIDXCOL.table_id = SYS.SYSIDX.table_id
                            AND SYS.SYSIDXCOL.index_id = SYS.SYSIDX.index_id
    INNER JOIN SYS.SYSCOLUMN ON SYS.SYSCOLUMN.table_id = SYS.SYSIDXCOL.table_id
                            AND SYS.SYSCOLUMN.column_id = SYS.SYSIDXCOL.column_id
    WHERE
        SYS.SYSIDX.index_name = :index_name AND
        SYS.SYSTABLE.table_name = :name AND
        SYS.SYSTABLE.creator = ({OWNER_ID_SQL})
    ORDER BY SYS.SYSIDXCOL.sequence
"""

PRIMARY_KEY_SQL = """
    SELECT cname
    FROM SYS.SYSCOLUMNS
    WHERE tname = :name
      AND creator = :owner
      AND in_primary_key = 'Y'
"""

PRIMARY_KEYS_SQL = f"""
    SELECT list(c.column_name ORDER BY ixc.sequence) pk_columns
    FROM SYS.SYSIDX ix, SYS.SYSTABLE t, SYS.SYSIDXCOL ixc, SYS.SYSCOLUMN c
    WHERE ix.table_id = t.table_id
      AND ixc.table_id = t.table_id
      AND ixc.index_id = ix.index_id
      AND ixc.table_id = c.table_id
      AND ixc.column_id = c.column_id
      AND ix.index_category = 1
      AND t.table_name = :name
      AND t.creator = ({OWNER_ID_SQL})
    GROUP BY ix.index_name, ix.index_id, ix.index_category
    ORDER BY ix.index_id
"""

PRECISION_DOMAINS = frozenset(['numeric', 'decimal'])
INTEGER_LIMITS = {
    'bit': 1,
    'tinyint': 1,
    'smallint': 2,
    'unsigned smallint': 2,
    'integer': 4,
    'unsigned int': 4,
    'bigint': 8,
    'unsigned bigint': 8,
}


def native_type_from_domain(domain: str, width: Any = None, scale: Any = None) -> NativeType:
    """Build a NativeType from SYSDOMAIN/SYSTABCOL values"""
    name = domain.lower()
    if name in SIZED_TYPES:
        return NativeType(name, limit=_int_or_none(width))
    if name in PRECISION_DOMAINS:
        return NativeType(name, precision=_int_or_none(width), scale=_int_or_none(scale))
    return NativeType(name, limit=INTEGER_LIMITS.get(name))


def _int_or_none(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def _is_nullable(value: Any) -> bool:
    if isinstance(value, str):
        return value.upper() == 'Y'
    return value == 1


class CatalogReader:
    """Reconstruct schema entities from the SQL Anywhere catalog"""

    def __init__(self, connection: Connection, foreign_key_resolver: Optional[ForeignKeyResolver] = None):
        self.connection = connection
        self.foreign_key_resolver = foreign_key_resolver or ForeignKeyResolver(connection)
        self.logger = setup_logger("CatalogReader")

    def tables(self) -> List[str]:
        """Owner-qualified names of user base tables"""
        return [fetch(row, 'table_name') for row in self.connection.query(TABLES_SQL, 'SCHEMA')]

    def views(self) -> List[str]:
        """Owner-qualified names of user views"""
        return [fetch(row, 'table_name') for row in self.connection.query(VIEWS_SQL, 'SCHEMA')]

    def columns(self, table_name: str) -> List[ColumnDefinition]:
        owner, name = self.connection.split_owner_qualified_name(table_name)
        rows = self.connection.query(COLUMNS_SQL, 'SCHEMA', {'name': name, 'owner': owner})
        return [self.new_column_from_field(table_name, row) for row in rows]

    def column_names(self, table_name: str) -> List[str]:
        return [column.name for column in self.columns(table_name)]

    def new_column_from_field(self, table_name: str, field: Row) -> ColumnDefinition:
        """Decode one catalog column row"""
        default = classify_default(fetch(field, 'default'))
        return ColumnDefinition(
            name=fetch(field, 'name'),
            native_type=native_type_from_domain(
                fetch(field, 'domain'), fetch(field, 'width'), fetch(field, 'scale')
            ),
            nullable=_is_nullable(fetch(field, 'nulls')),
            table_name=table_name,
            default=default.literal,
            default_function=default.function,
        )

    def indexes(self, table_name: str) -> List[IndexDefinition]:
        """User-defined indexes; key-backing indexes are excluded"""
        owner, name = self.connection.split_owner_qualified_name(table_name)
        params = {'name': name, 'owner': owner}

        indexes = []
        for row in self.connection.query(INDEXES_SQL, name, params):
            index_name = fetch(row, 'index_name')
            column_rows = self.connection.query(
                INDEX_COLUMNS_SQL, name, dict(params, index_name=index_name)
            )
            indexes.append(IndexDefinition(
                table=table_name,
                name=index_name,
                unique=fetch(row, 'unique') == 1,
                columns=tuple(fetch(col, 'column_name') for col in column_rows),
            ))
        return indexes

    def primary_key(self, table_name: str) -> Optional[str]:
        """First primary key column, or None"""
        owner, name = self.connection.split_owner_qualified_name(table_name)
        rows = self.connection.query(PRIMARY_KEY_SQL, 'SCHEMA', {'name': name, 'owner': owner})
        if rows:
            return fetch(rows[0], 'cname')
        return None

    def primary_keys(self, table_name: str) -> Optional[List[str]]:
        """Primary key columns in index order, or None when the table has none"""
        owner, name = self.connection.split_owner_qualified_name(table_name)
        rows = self.connection.query(PRIMARY_KEYS_SQL, 'SCHEMA', {'name': name, 'owner': owner})
        if not rows:
            return None
        pk_columns = fetch(rows[0], 'pk_columns')
        if not pk_columns:
            return None
        return pk_columns.split(',')

    def foreign_keys(self, table_name: str) -> List[ForeignKeyDefinition]:
        return self.foreign_key_resolver.foreign_keys(table_name)

    def snapshot(self) -> DatabaseSchema:
        """Read every user table and view into one schema object"""
        tables = {}
        relationships = []
        for table_name in self.tables():
            foreign_keys = self.foreign_keys(table_name)
            tables[table_name] = TableInfo(
                name=table_name,
                columns=self.columns(table_name),
                primary_keys=self.primary_keys(table_name),
                foreign_keys=foreign_keys,
                indexes=self.indexes(table_name),
            )
            relationships.extend(foreign_keys)

        views = self.views()
        self.logger.info(f"Read {len(tables)} tables and {len(views)} views from the catalog")
        return DatabaseSchema(tables=tables, views=views, relationships=relationships)
