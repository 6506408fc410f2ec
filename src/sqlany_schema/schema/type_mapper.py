"""
Mapping of abstract column types to SQL Anywhere DDL type tokens
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Union

NativeSpec = Union[str, Dict[str, object]]

# Generic type table. TINYINT stands in for boolean because the native BIT
# type cannot hold NULL.
NATIVE_DATABASE_TYPES: Dict[str, NativeSpec] = {
    'primary_key': 'INTEGER PRIMARY KEY DEFAULT AUTOINCREMENT NOT NULL',
    'string': {'name': 'varchar', 'limit': 255},
    'text': {'name': 'long varchar'},
    'integer': {'name': 'integer', 'limit': 4},
    'float': {'name': 'float'},
    'decimal': {'name': 'decimal'},
    'datetime': {'name': 'datetime'},
    'timestamp': {'name': 'datetime'},
    'time': {'name': 'time'},
    'date': {'name': 'date'},
    'binary': {'name': 'binary'},
    'boolean': {'name': 'tinyint', 'limit': 1},
}


class TypeMapper(ABC):
    """Single mapping rule; returns None for types it does not handle"""

    @abstractmethod
    def map_type(self, type_name: str, limit: Optional[int] = None,
                 precision: Optional[int] = None, scale: Optional[int] = None) -> Optional[str]:
        pass


class SQLAnywhereTypeMapper(TypeMapper):
    """Dialect rules: SQL Anywhere has no INTEGER(size), so sizes pick the type"""

    def map_type(self, type_name, limit=None, precision=None, scale=None):
        type_name = str(type_name)
        if type_name == 'integer':
            return self._integer(limit)
        if type_name == 'string' and limit is not None:
            return f"varchar ({limit})"
        if type_name == 'boolean':
            return 'tinyint'
        if type_name == 'binary':
            return f"binary ({limit})" if limit is not None else 'long binary'
        return None

    @staticmethod
    def _integer(limit: Optional[int]) -> str:
        if limit == 1:
            return 'tinyint'
        if limit == 2:
            return 'smallint'
        if limit in (5, 6, 7, 8):
            return 'bigint'
        return 'integer'


class GenericTypeMapper(TypeMapper):
    """Table-driven mapping; unknown types pass through as native tokens"""

    def __init__(self, native_types: Optional[Dict[str, NativeSpec]] = None):
        self.native_types = native_types if native_types is not None else NATIVE_DATABASE_TYPES

    def map_type(self, type_name, limit=None, precision=None, scale=None):
        type_name = str(type_name)
        native = self.native_types.get(type_name)
        if native is None:
            return type_name
        if isinstance(native, str):
            return native

        sql = str(native['name'])
        if type_name == 'decimal':
            if precision is not None:
                if scale is not None:
                    return f"{sql}({precision},{scale})"
                return f"{sql}({precision})"
            if scale is not None:
                raise ValueError("Error adding decimal column: precision cannot be empty if scale is specified")
            return sql

        limit = limit if limit is not None else native.get('limit')
        if limit is not None:
            return f"{sql}({limit})"
        return sql


class TypeMapperChain:
    """Try each mapper in order and return the first token produced"""

    def __init__(self, mappers: Iterable[TypeMapper]):
        self.mappers: List[TypeMapper] = list(mappers)

    def map_type(self, type_name: str, limit: Optional[int] = None,
                 precision: Optional[int] = None, scale: Optional[int] = None) -> str:
        for mapper in self.mappers:
            token = mapper.map_type(type_name, limit=limit, precision=precision, scale=scale)
            if token is not None:
                return token
        raise ValueError(f"No type mapping for {type_name!r}")


def default_type_mapper() -> TypeMapperChain:
    """SQL Anywhere rules first, generic table second"""
    return TypeMapperChain([SQLAnywhereTypeMapper(), GenericTypeMapper()])
