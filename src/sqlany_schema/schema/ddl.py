"""
DDL statement synthesis for SQL Anywhere migrations

Each operation executes its statements in order through the connection and
returns them. Multi-statement operations are not atomic: a failure part way
leaves whatever the earlier statements did in place.
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

from ..config import setup_logger
from ..database.connection import Connection
from ..errors import fetch
from .catalog import CatalogReader, OWNER_ID_SQL
from .indexes import Columns, NullIndexBookkeeper, index_name
from .type_mapper import TypeMapperChain, default_type_mapper

# Appended to a column while a case-only rename is half done
CASE_RENAME_SUFFIX = '__case_rename'

COLUMN_INDEXES_SQL = f"""
    SELECT DISTINCT SYS.SYSIDX.index_name index_name
    FROM SYS.SYSTAB
    INNER JOIN SYS.SYSTABCOL ON SYS.SYSTABCOL.table_id = SYS.SYSTAB.table_id
    INNER JOIN SYS.SYSIDXCOL ON SYS.SYSIDXCOL.table_id = SYS.SYSTABCOL.table_id
                            AND SYS.SYSIDXCOL.column_id = SYS.SYSTABCOL.column_id
    INNER JOIN SYS.SYSIDX ON SYS.SYSIDX.table_id = SYS.SYSIDXCOL.table_id
                         AND SYS.SYSIDX.index_id = SYS.SYSIDXCOL.index_id
    WHERE
        SYS.SYSTABCOL.column_name = :column AND
        SYS.SYSTAB.table_name = :name AND
        SYS.SYSTAB.creator = ({OWNER_ID_SQL})
    ORDER BY index_name
"""

ORDER_DIRECTION = re.compile(r'\s+(?:ASC|DESC)\b', re.IGNORECASE)
NULLS_ORDERING = re.compile(r'\s+NULLS\s+(?:FIRST|LAST)\b', re.IGNORECASE)


@dataclass(frozen=True)
class CaseOnlyRename:
    """Rename that changes only letter case.

    SQL Anywhere ignores such a rename, so it runs in two phases through an
    intermediate name. If the second phase never runs the column is left
    under ``intermediate``; ``DDLSynthesizer.recover_case_renames`` finishes it.
    """
    table: str
    column: str
    new_name: str

    @property
    def intermediate(self) -> str:
        return f"{self.new_name}{CASE_RENAME_SUFFIX}"

    @staticmethod
    def applies(column: str, new_name: str) -> bool:
        return column != new_name and column.lower() == new_name.lower()

    def phases(self) -> Tuple[Tuple[str, str], Tuple[str, str]]:
        return (self.column, self.intermediate), (self.intermediate, self.new_name)


class DDLSynthesizer:
    """Build and run schema-change statements"""

    def __init__(self, connection: Connection, type_mapper: Optional[TypeMapperChain] = None,
                 catalog: Optional[CatalogReader] = None, index_bookkeeper=None):
        self.connection = connection
        self.type_mapper = type_mapper or default_type_mapper()
        self.catalog = catalog or CatalogReader(connection)
        self.index_bookkeeper = index_bookkeeper or NullIndexBookkeeper()
        self.logger = setup_logger("DDLSynthesizer")

    def _run(self, *statements: str) -> List[str]:
        for sql in statements:
            self.logger.info(sql)
            self.connection.execute(sql)
        return list(statements)

    def _table(self, table_name: str) -> str:
        return self.connection.quote_table_name(table_name)

    def _column(self, column_name: str) -> str:
        return self.connection.quote_column_name(column_name)

    def rename_table(self, table_name: str, new_name: str) -> List[str]:
        executed = self._run(f"ALTER TABLE {self._table(table_name)} RENAME {self._table(new_name)}")
        executed.extend(self.index_bookkeeper.rename_table_indexes(table_name, new_name))
        return executed

    def change_column_default(self, table_name: str, column_name: str, default: Any) -> List[str]:
        return self._run(
            f"ALTER TABLE {self._table(table_name)} ALTER {self._column(column_name)} "
            f"DEFAULT {self.connection.quote(default)}"
        )

    def change_column_null(self, table_name: str, column_name: str, null: bool,
                           default: Any = None) -> List[str]:
        """Change nullability, backfilling NULLs first when tightening with a default"""
        table, column = self._table(table_name), self._column(column_name)
        statements = []
        if not null and default is not None:
            statements.append(
                f"UPDATE {table} SET {column}={self.connection.quote(default)} WHERE {column} IS NULL"
            )
        statements.append(f"ALTER TABLE {table} ALTER {column} {'NULL' if null else 'NOT NULL'}")
        return self._run(*statements)

    def change_column(self, table_name: str, column_name: str, type_name: str, **options) -> List[str]:
        sql = (
            f"ALTER TABLE {self._table(table_name)} ALTER {self._column(column_name)} "
            + self.type_mapper.map_type(
                type_name,
                limit=options.get('limit'),
                precision=options.get('precision'),
                scale=options.get('scale'),
            )
        )
        if 'default' in options:
            sql += f" DEFAULT {self.connection.quote(options['default'])}"
        if options.get('null') is False:
            sql += ' NOT NULL'
        elif options.get('null'):
            sql += ' NULL'
        return self._run(sql)

    def rename_column(self, table_name: str, column_name: str, new_column_name: str) -> List[str]:
        if CaseOnlyRename.applies(column_name, new_column_name):
            rename = CaseOnlyRename(table_name, column_name, new_column_name)
            executed = []
            for old, new in rename.phases():
                executed.extend(self._run(self._rename_column_sql(table_name, old, new)))
        else:
            executed = self._run(self._rename_column_sql(table_name, column_name, new_column_name))
        executed.extend(self.index_bookkeeper.rename_column_indexes(table_name, column_name, new_column_name))
        return executed

    def _rename_column_sql(self, table_name: str, column_name: str, new_column_name: str) -> str:
        return (
            f"ALTER TABLE {self._table(table_name)} "
            f"RENAME {self._column(column_name)} TO {self._column(new_column_name)}"
        )

    def recover_case_renames(self, table_name: str) -> List[str]:
        """Finish case-only renames that stopped after their first phase"""
        executed = []
        for column in self.catalog.column_names(table_name):
            if column.endswith(CASE_RENAME_SUFFIX):
                target = column[:-len(CASE_RENAME_SUFFIX)]
                self.logger.warning(f"Completing interrupted rename of {table_name}.{target}")
                executed.extend(self._run(self._rename_column_sql(table_name, column, target)))
        return executed

    def remove_column(self, table_name: str, *column_names: Union[str, Sequence[str]]) -> List[str]:
        """Drop columns, dropping the indexes on each column first"""
        columns = list(_flatten(column_names))
        if not columns:
            raise ValueError("missing column name(s) for remove_column")

        owner, name = self.connection.split_owner_qualified_name(table_name)
        dropped = set()
        executed = []
        for column in columns:
            rows = self.connection.query(
                COLUMN_INDEXES_SQL, 'SCHEMA', {'column': column, 'name': name, 'owner': owner}
            )
            for row in rows:
                index = fetch(row, 'index_name')
                if index in dropped:
                    continue
                dropped.add(index)
                executed.extend(self._run(self._drop_index_sql(table_name, index)))
            executed.extend(self._run(f"ALTER TABLE {self._table(table_name)} DROP {self._column(column)}"))
        return executed

    def remove_index(self, table_name: str, column: Optional[Columns] = None,
                     name: Optional[str] = None) -> List[str]:
        return self._run(self._drop_index_sql(table_name, index_name(table_name, column=column, name=name)))

    def _drop_index_sql(self, table_name: str, index: str) -> str:
        return f"DROP INDEX {self._table(table_name)}.{self._column(index)}"

    @staticmethod
    def columns_for_distinct(columns: Union[str, Sequence[str]], orders: Iterable[str]) -> str:
        """Select list for DISTINCT queries.

        SQL Anywhere requires ORDER BY expressions to appear in the select
        list of a DISTINCT query, so each order expression is added with its
        direction and NULLS placement removed.
        """
        select = [columns] if isinstance(columns, str) else list(columns)
        order_columns = []
        for order in orders:
            if not order or not str(order).strip():
                continue
            expression = NULLS_ORDERING.sub('', ORDER_DIRECTION.sub('', str(order))).strip()
            if expression:
                order_columns.append(expression)
        aliased = [f"{column} AS alias_{i}" for i, column in enumerate(order_columns)]
        return ', '.join(select + aliased)


def _flatten(values) -> Iterable[str]:
    for value in values:
        if isinstance(value, (list, tuple)):
            yield from _flatten(value)
        else:
            yield value
