"""
Index naming and rename bookkeeping
"""

from typing import List, Optional, Sequence, Union

from ..config import setup_logger
from ..database.connection import Connection

Columns = Union[str, Sequence[str]]


def _bare_table_name(table_name: str) -> str:
    return table_name.split('.')[-1].strip('"')


def index_name(table_name: str, column: Optional[Columns] = None, name: Optional[str] = None) -> str:
    """Explicit index name, or the generated index_<table>_on_<columns> name"""
    if name:
        return name
    if not column:
        raise ValueError("You must specify the index name or its columns")
    columns = [column] if isinstance(column, str) else list(column)
    return f"index_{_bare_table_name(table_name)}_on_{'_and_'.join(columns)}"


class NullIndexBookkeeper:
    """Leaves index names untouched"""

    def rename_table_indexes(self, table_name: str, new_name: str) -> List[str]:
        return []

    def rename_column_indexes(self, table_name: str, column_name: str, new_column_name: str) -> List[str]:
        return []


class IndexBookkeeper(NullIndexBookkeeper):
    """Keep generated index names in step with table and column renames.

    Only indexes still carrying the name that ``index_name`` would have
    produced before the rename are touched; explicitly named indexes keep
    their names.
    """

    def __init__(self, connection: Connection, catalog):
        self.connection = connection
        self.catalog = catalog
        self.logger = setup_logger("IndexBookkeeper")

    def rename_table_indexes(self, table_name, new_name):
        # A rename keeps the owner, so a bare new name belongs to the old owner
        if '.' not in new_name:
            owner, _ = self.connection.split_owner_qualified_name(table_name)
            new_name = f"{owner}.{new_name}"
        statements = []
        for index in self.catalog.indexes(new_name):
            old_generated = index_name(table_name, column=index.columns)
            if index.name == old_generated:
                statements.append(self._rename_index(new_name, index.name, index_name(new_name, column=index.columns)))
        return statements

    def rename_column_indexes(self, table_name, column_name, new_column_name):
        statements = []
        for index in self.catalog.indexes(table_name):
            if new_column_name not in index.columns:
                continue
            old_columns = [column_name if c == new_column_name else c for c in index.columns]
            if index.name == index_name(table_name, column=old_columns):
                statements.append(self._rename_index(table_name, index.name, index_name(table_name, column=index.columns)))
        return statements

    def _rename_index(self, table_name: str, old_index: str, new_index: str) -> str:
        sql = (
            f"ALTER INDEX {self.connection.quote_column_name(old_index)} "
            f"ON {self.connection.quote_table_name(table_name)} "
            f"RENAME TO {self.connection.quote_column_name(new_index)}"
        )
        self.logger.info(sql)
        self.connection.execute(sql)
        return sql
