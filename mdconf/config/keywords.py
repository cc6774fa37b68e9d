"""Directive keywords.

The order of DIRECTIVES decides which keyword wins when a word is a
prefix of more than one (``mai`` is MAILADDR, never MAILFROM).
"""

from typing import Optional, Tuple

DEVICES = "devices"
ARRAY = "array"
MAILADDR = "mailaddr"
MAILFROM = "mailfrom"
PROGRAM = "program"
CREATE = "create"
HOMEHOST = "homehost"
AUTO = "auto"

DIRECTIVES: Tuple[str, ...] = (
    DEVICES,
    ARRAY,
    MAILADDR,
    MAILFROM,
    PROGRAM,
    CREATE,
    HOMEHOST,
    AUTO,
)

MIN_KEYWORD_LEN = 3


def keyword_match(word: str) -> Optional[str]:
    """Resolve a possibly abbreviated directive keyword.

    Args:
        word: First word of a config line, any case

    Returns:
        The canonical directive name, or None if unknown or shorter
        than three characters
    """
    if len(word) < MIN_KEYWORD_LEN:
        return None

    zs = word.lower()
    for kw in DIRECTIVES:
        if kw.startswith(zs):
            return kw

    return None
