"""Auto-assembly policy from the AUTO line.

Words are tried in order and the first one that applies decides:

- ``yes`` / ``no``: allow / refuse anything
- ``homehost``: allow arrays that belong to this host
- ``+fmt`` / ``-fmt``: allow / refuse that metadata format; ``all`` is
  any format

Thus ``+ddf -0.90 homehost -all`` auto-assembles any ddf array, no 0.90
array, and anything else only if it belongs to this host. A format that
no word applies to is allowed.
"""

from typing import Callable, List, Optional

from ..util import LV_DBG, noop


def format_tag_matches(want: str, tag: str) -> bool:
    """Check whether an AUTO word's format names a metadata format.

    Besides ``all`` and exact (case-insensitive) matches, ``0`` matches
    ``0.90`` and ``1`` or ``1.anything`` matches ``1.x``.

    Args:
        want: Format from the AUTO word, without its +/- prefix
        tag: Metadata format being considered

    Returns:
        True if the word applies to this format
    """
    if want.lower() == "all" or want.lower() == tag.lower():
        return True

    if len(tag) < 2 or tag[1] != ".":
        return False

    if len(want) == 1 and want[0] == tag[0]:
        return True

    return tag[2:3] == "x" and want[:2] == tag[:2]


class AutoPolicy(object):
    """Evaluate AUTO words against a metadata format."""

    def __init__(
        self,
        rules: Optional[List[str]],
        log_func: Callable[[str, int], None] = noop,
    ) -> None:
        """Initialize policy.

        Args:
            rules: Words of the AUTO line, or None if there was none
            log_func: Function for logging messages (msg, level)
        """
        self.rules = rules
        self.log = log_func

    def permits(self, tag: str, is_homehost: bool) -> bool:
        """Decide whether arrays with this metadata may be auto-assembled.

        Args:
            tag: Metadata format tag ("0.90", "1.x", "ddf", "imsm", ...)
            is_homehost: The array is associated with this host

        Returns:
            True if auto-assembly is allowed
        """
        if self.rules is None:
            return True

        for w in self.rules:
            lw = w.lower()
            if lw == "yes":
                return True
            if lw == "no":
                return False
            if lw == "homehost":
                if is_homehost:
                    return True
                continue

            if w.startswith("+"):
                rv = True
            elif w.startswith("-"):
                rv = False
            else:
                continue

            if format_tag_matches(w[1:], tag):
                self.log("auto-assembly of %s decided by %s" % (tag, w), LV_DBG)
                return rv

        return True
