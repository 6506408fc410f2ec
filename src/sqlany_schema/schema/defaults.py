"""
Classification of raw catalog default text
"""

import re
from typing import NamedTuple, Optional

NUMERIC_LITERAL = re.compile(r'^[-+]?[0-9]*\.?[0-9]+([eE][-+]?[0-9]+)?$')
STRING_LITERAL = re.compile(r"^'.*'$", re.DOTALL)


class DefaultValue(NamedTuple):
    literal: Optional[str]
    function: Optional[str]


def classify_default(raw: Optional[str]) -> DefaultValue:
    """Split a column default into a literal or an engine function expression.

    Numbers and single-quoted strings are literals and pass through
    unchanged. Anything else is assumed to call a builtin such as
    ``current timestamp`` and is returned upper-cased as the function.
    """
    if raw is None:
        return DefaultValue(None, None)
    if NUMERIC_LITERAL.match(raw) or STRING_LITERAL.match(raw):
        return DefaultValue(raw, None)
    return DefaultValue(None, raw.upper())
