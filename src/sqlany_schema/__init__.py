"""
SQL Anywhere schema translation layer
"""

__version__ = '0.1.0'
