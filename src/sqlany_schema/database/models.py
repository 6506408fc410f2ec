"""
Data models for SQL Anywhere schema representation
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class NativeType:
    """Native column type as stored in the catalog"""
    name: str
    limit: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None

    @property
    def sql_type(self) -> str:
        """Render the descriptor as a DDL type, e.g. varchar(255)"""
        if self.precision is not None:
            if self.scale is not None:
                return f"{self.name}({self.precision},{self.scale})"
            return f"{self.name}({self.precision})"
        if self.limit is not None and self.name in SIZED_TYPES:
            return f"{self.name}({self.limit})"
        return self.name


# Native types whose width is the declared length
SIZED_TYPES = frozenset(['char', 'varchar', 'nchar', 'nvarchar', 'binary', 'varbinary'])


@dataclass(frozen=True)
class ColumnDefinition:
    """A table column decoded from the catalog"""
    name: str
    native_type: NativeType
    nullable: bool
    table_name: str
    default: Optional[str] = None
    default_function: Optional[str] = None

    def __post_init__(self):
        if self.default is not None and self.default_function is not None:
            raise ValueError(
                f"Column {self.name} cannot have both a literal and a function default"
            )


@dataclass(frozen=True)
class IndexDefinition:
    """A user-defined index and its member columns in declared order"""
    table: str
    name: str
    unique: bool
    columns: Tuple[str, ...]

    def __post_init__(self):
        if not self.columns:
            raise ValueError(f"Index {self.name} on {self.table} has no columns")


class ReferentialAction(Enum):
    """Action applied to dependent rows on update/delete of the referenced row"""
    CASCADE = 'cascade'
    DEFAULT = 'default'
    NULLIFY = 'nullify'
    RESTRICT = 'restrict'

    @classmethod
    def from_specifier(cls, specifier: str) -> 'ReferentialAction':
        """Map a SYSTRIGGER.referential_action letter to an action"""
        return _ACTION_SPECIFIERS[specifier]


_ACTION_SPECIFIERS = {
    'C': ReferentialAction.CASCADE,
    'D': ReferentialAction.DEFAULT,
    'N': ReferentialAction.NULLIFY,
    'R': ReferentialAction.RESTRICT,
}


@dataclass(frozen=True)
class ForeignKeyDefinition:
    """A single-column foreign key constraint"""
    from_table: str
    to_table: str
    column: str
    name: str
    primary_key: str
    on_update: ReferentialAction = ReferentialAction.RESTRICT
    on_delete: ReferentialAction = ReferentialAction.RESTRICT


@dataclass
class TableInfo:
    """Everything the catalog knows about one table"""
    name: str
    columns: List[ColumnDefinition]
    primary_keys: Optional[List[str]]
    foreign_keys: List[ForeignKeyDefinition]
    indexes: List[IndexDefinition]


@dataclass
class DatabaseSchema:
    """Complete schema snapshot read from the catalog"""
    tables: Dict[str, TableInfo]
    views: List[str]
    relationships: List[ForeignKeyDefinition] = field(default_factory=list)
