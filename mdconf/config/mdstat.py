"""Reader for /proc/mdstat.

The file uses the same word and indentation rules as the config file,
so it goes through the same Scanner:

    md127 : inactive sdb[1](S) sda[0](S)
          5288 blocks super external:imsm
"""

import re
from typing import IO, List, Optional

from .scanner import Scanner

MDSTAT = "/proc/mdstat"

RE_MEMBER = re.compile(r"^([^\[]+)\[([0-9]+)\](\(.\))?$")


class MdstatEnt(object):
    """One array from /proc/mdstat."""

    def __init__(self, dev: str) -> None:
        self.dev = dev
        self.active = False
        self.read_only = False
        self.level: Optional[str] = None
        self.metadata_version: Optional[str] = None
        self.members: List[str] = []

    def is_container(self) -> bool:
        """an externally managed container, not a member array inside one"""
        zs = self.metadata_version or ""
        if not zs.startswith("external:"):
            return False
        return not is_subarray(zs[9:])

    def __repr__(self) -> str:
        return "MdstatEnt(%r, %r, %r)" % (self.dev, self.level, self.metadata_version)


def is_subarray(vers: str) -> bool:
    return vers[:1] in ("/", "-")


def parse_mdstat(f: IO[str]) -> List[MdstatEnt]:
    ret = []
    for ln in Scanner(f):
        if not ln.keyword.startswith("md") or ln.args[:1] != [":"]:
            continue

        ent = MdstatEnt(ln.keyword)
        words = ln.args[1:]
        if words:
            ent.active = words.pop(0) == "active"

        while words and words[0].startswith("("):
            if words.pop(0) in ("(read-only)", "(auto-read-only)"):
                ent.read_only = True

        for n, w in enumerate(words):
            m = RE_MEMBER.match(w)
            if m:
                ent.members.append(m.group(1))
            elif w == "super" and n + 1 < len(words):
                ent.metadata_version = words[n + 1]
            elif n == 0 and ent.active:
                ent.level = w

        ret.append(ent)

    return ret


def read_mdstat(path: str = MDSTAT) -> List[MdstatEnt]:
    """Parse an mdstat file; raises OSError if it cannot be opened."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return parse_mdstat(f)
