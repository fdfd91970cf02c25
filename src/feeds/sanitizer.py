"""Make feed text safe to store."""

import re

# Printable ASCII plus tab, newline and carriage return
_NOT_STORABLE = re.compile(r"[^\x20-\x7E\t\n\r]")


def sanitize(value: str) -> str:
    """
    Escape single quotes, turn '+' into spaces and drop every non-printable / non-ASCII character.
    ----
    The order matters: quotes are doubled first, then '+' is replaced, then the character filter runs.
    """
    escaped = value.replace("'", "''")
    spaced = escaped.replace("+", " ")
    return _NOT_STORABLE.sub("", spaced)
