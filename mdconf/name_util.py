"""Device name utilities for mdconf.

Handles md device name canonicalization and path-aware glob matching.
"""

import fnmatch
import re
from typing import Optional

# comma-separated pattern segments this long or longer are never honored
MAX_PATTERN = 1024

DIGITS = "0123456789"

RE_MD_NUM = re.compile(r"^/dev/md(_d)?[0-9]+$")


def canonicalize_device_name(name: str) -> str:
    """Reduce an md device name to the part that identifies it.

    Strips a leading ``/dev/md/`` or ``/dev/``, then a leading ``md``
    when it is directly followed by a digit.

    Args:
        name: Device name as written in config or found at runtime

    Returns:
        Canonical name, e.g. "/dev/md3" -> "3", "/dev/md/home" -> "home"
    """
    if name.startswith("/dev/md/"):
        name = name[8:]
    elif name.startswith("/dev/"):
        name = name[5:]

    if name.startswith("md") and len(name) > 2 and name[2] in DIGITS:
        name = name[2:]

    return name


def name_matches(name: str, match: str) -> bool:
    """Check whether two md device names refer to the same array.

    Args:
        name: Runtime or candidate name
        match: Name from the config file

    Returns:
        True if both canonicalize to the same string
    """
    return canonicalize_device_name(name) == canonicalize_device_name(match)


def path_glob_match(pattern: str, path: str) -> bool:
    """Shell-glob match where no wildcard can cross a ``/``.

    Args:
        pattern: Glob pattern (``*``, ``?``, ``[...]``)
        path: Path to test

    Returns:
        True if every slash-separated component matches
    """
    psegs = pattern.split("/")
    nsegs = path.split("/")
    if len(psegs) != len(nsegs):
        return False

    return all(fnmatch.fnmatchcase(n, p) for p, n in zip(psegs, nsegs))


def pattern_list_matches(patterns: Optional[str], name: str) -> bool:
    """Check a name against a comma-separated list of path globs.

    Args:
        patterns: e.g. "/dev/sd[ab]1,/dev/hd*"; None or empty never matches
        name: Device path to test

    Returns:
        True if any segment matches
    """
    if not patterns:
        return False

    for ptn in patterns.split(","):
        if len(ptn.encode("utf-8", "surrogateescape")) >= MAX_PATTERN:
            continue

        if path_glob_match(ptn, name):
            return True

    return False


def is_valid_md_devname(word: str) -> bool:
    """Check whether a word may name an md device on an ARRAY line.

    Accepted: ``<ignore>``, ``/dev/md/*``, ``/dev/mdNN``, ``/dev/md_dNN``,
    or anything not starting with ``/`` or ``<``.
    """
    if word.lower() == "<ignore>":
        return True

    if word.startswith("/dev/md/"):
        return True

    if not word.startswith("/") and not word.startswith("<"):
        return True

    return bool(RE_MD_NUM.match(word))
