"""Identifier validation for table and column names.

Values are always bound as parameters, but table and column names are
spliced into statement text. Every name goes through ``validate_identifier``
first unless validation is switched off in the store settings.
"""

import re

from .exceptions import ArgumentError

IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


def validate_identifier(name: str, kind: str = "identifier") -> str:
    """Validate a table or column name against the allow-list.

    Args:
        name: Identifier to validate
        kind: What the identifier names, used in the error message

    Returns:
        The identifier unchanged

    Raises:
        ArgumentError: If the name contains characters outside [A-Za-z0-9_]
            or starts with a digit
    """
    if not isinstance(name, str) or not IDENTIFIER_PATTERN.match(name):
        raise ArgumentError(f"Invalid {kind} name: {name!r}", kind)
    return name
