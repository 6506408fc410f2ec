"""
Foreign key introspection

SQL Anywhere keeps referential actions on system triggers rather than on the
foreign key itself, so update/delete actions are joined in from SYSTRIGGER.
Only single-column foreign keys are returned; compound keys are filtered out
by the query and never partially represented.
"""

from typing import List

from ..database.connection import Connection, Row
from ..database.models import ForeignKeyDefinition, ReferentialAction
from ..errors import CatalogRowError, fetch

FOREIGN_KEYS_SQL = """
    SELECT
        '"' + user_name(systab_p.creator) + '"."' + systab_p.table_name + '"' to_table,
        systabcol_p.column_name primary_key,
        systabcol_f.column_name "column",
        sysidx.index_name name,
        isnull(systrigger_c.referential_action, 'R') on_update,
        isnull(systrigger_d.referential_action, 'R') on_delete
    FROM
        sys.sysfkey
            JOIN sys.sysidxcol sysidxcol_f ON sysidxcol_f.table_id = sysfkey.foreign_table_id
                                          AND sysidxcol_f.index_id = sysfkey.foreign_index_id
            JOIN sys.sysidxcol sysidxcol_p ON sysidxcol_p.table_id = sysfkey.primary_table_id
                                          AND sysidxcol_p.index_id = sysfkey.primary_index_id
            JOIN sys.systable systab_f ON systab_f.table_id = sysidxcol_f.table_id
            JOIN sys.systable systab_p ON systab_p.table_id = sysidxcol_p.table_id
            JOIN sys.systabcol systabcol_f ON systabcol_f.table_id = sysidxcol_f.table_id
                                          AND systabcol_f.column_id = sysidxcol_f.column_id
            JOIN sys.systabcol systabcol_p ON systabcol_p.table_id = sysidxcol_p.table_id
                                          AND systabcol_p.column_id = sysidxcol_p.column_id
            JOIN sys.sysidx ON sysidx.table_id = sysfkey.foreign_table_id
                           AND sysidx.index_id = sysfkey.foreign_index_id
            LEFT OUTER JOIN sys.systrigger systrigger_c ON systrigger_c.table_id = sysfkey.primary_table_id
                                                      AND systrigger_c.foreign_table_id = sysfkey.foreign_table_id
                                                      AND systrigger_c.foreign_key_id = sysfkey.foreign_index_id
                                                      AND systrigger_c.event = 'C'
            LEFT OUTER JOIN sys.systrigger systrigger_d ON systrigger_d.table_id = sysfkey.primary_table_id
                                                      AND systrigger_d.foreign_table_id = sysfkey.foreign_table_id
                                                      AND systrigger_d.foreign_key_id = sysfkey.foreign_index_id
                                                      AND systrigger_d.event = 'D'
    WHERE
            sysidxcol_f.primary_column_id = sysidxcol_p.column_id
        AND systab_f.table_name = :name
        AND systab_f.creator = (SELECT user_id FROM sys.sysuser WHERE sys.sysuser.user_name = :owner)
        AND (SELECT count(*) FROM sys.sysidxcol
             WHERE sys.sysidxcol.table_id = sysfkey.foreign_table_id
               AND sys.sysidxcol.index_id = sysfkey.foreign_index_id) = 1
    ORDER BY sysidx.index_name
"""


def extract_foreign_key_action(specifier: str) -> ReferentialAction:
    """Translate a SYSTRIGGER referential_action letter"""
    try:
        return ReferentialAction.from_specifier(specifier)
    except KeyError:
        raise CatalogRowError(f"Unknown referential action {specifier!r}", key='referential_action') from None


class ForeignKeyResolver:
    """Read single-column foreign keys of a table"""

    def __init__(self, connection: Connection):
        self.connection = connection

    def foreign_keys(self, table_name: str) -> List[ForeignKeyDefinition]:
        owner, name = self.connection.split_owner_qualified_name(table_name)
        rows = self.connection.query(FOREIGN_KEYS_SQL, 'SCHEMA', {'name': name, 'owner': owner})
        return [self._decode(table_name, row) for row in rows]

    @staticmethod
    def _decode(table_name: str, row: Row) -> ForeignKeyDefinition:
        return ForeignKeyDefinition(
            from_table=table_name,
            to_table=fetch(row, 'to_table'),
            column=fetch(row, 'column'),
            name=fetch(row, 'name'),
            primary_key=fetch(row, 'primary_key'),
            on_update=extract_foreign_key_action(fetch(row, 'on_update')),
            on_delete=extract_foreign_key_action(fetch(row, 'on_delete')),
        )
