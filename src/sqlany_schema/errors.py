"""
Exceptions raised while decoding catalog results
"""

from typing import Optional


class CatalogRowError(LookupError):
    """A catalog row lacks an expected column or holds an unknown code"""

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)


def fetch(row, key: str):
    """Read one expected column from a catalog row, failing fast if absent"""
    try:
        return row[key]
    except KeyError:
        raise CatalogRowError(
            f"Catalog row is missing column {key!r} (has {sorted(row)})", key=key
        ) from None
