"""
Type mapping, catalog introspection and DDL synthesis for SQL Anywhere
"""

from .type_mapper import (
    GenericTypeMapper,
    SQLAnywhereTypeMapper,
    TypeMapper,
    TypeMapperChain,
    default_type_mapper,
)
from .defaults import DefaultValue, classify_default
from .foreign_keys import ForeignKeyResolver
from .catalog import CatalogReader
from .indexes import IndexBookkeeper, NullIndexBookkeeper, index_name
from .ddl import CaseOnlyRename, DDLSynthesizer

__all__ = [
    'GenericTypeMapper',
    'SQLAnywhereTypeMapper',
    'TypeMapper',
    'TypeMapperChain',
    'default_type_mapper',
    'DefaultValue',
    'classify_default',
    'ForeignKeyResolver',
    'CatalogReader',
    'IndexBookkeeper',
    'NullIndexBookkeeper',
    'index_name',
    'CaseOnlyRename',
    'DDLSynthesizer'
]
