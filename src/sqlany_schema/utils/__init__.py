"""
Utility functions and helper classes
"""

from .schema_analyzer import SchemaAnalyzer

__all__ = [
    'SchemaAnalyzer'
]
