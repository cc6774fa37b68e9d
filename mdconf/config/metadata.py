"""Metadata format registry.

Decoding superblocks happens elsewhere; this registry only answers which
format a ``metadata=`` description refers to, and how that format orders
the bytes of its uuid.
"""

import sys
from typing import Any, Dict, Iterable, List, Optional, Tuple

# 0.90 superblocks keep uuid words as host-order u32s; 1.x stores 16 raw bytes
NATIVE_SWAP = sys.byteorder == "little"


class MetadataFormat(object):
    """One on-disk metadata format.

    Args:
        name: Tag used by AUTO lines ("0.90", "1.x", "ddf", "imsm")
        descs: Map of accepted description -> concrete version
        swapuuid: uuid words are stored byte-swapped on disk
    """

    def __init__(
        self,
        name: str,
        descs: Dict[str, Optional[str]],
        swapuuid: bool = False,
        version: Optional[str] = None,
    ) -> None:
        self.name = name
        self.descs = descs
        self.swapuuid = swapuuid
        self.version = version

    def match_metadata_desc(self, desc: str) -> Optional["MetadataFormat"]:
        """Return this format bound to the described version, or None."""
        if desc not in self.descs:
            return None
        return MetadataFormat(self.name, self.descs, self.swapuuid, self.descs[desc])

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, MetadataFormat):
            return NotImplemented
        return self.name == other.name and self.version == other.version

    def __repr__(self) -> str:
        if self.version:
            return "<metadata %s (%s)>" % (self.name, self.version)
        return "<metadata %s>" % (self.name,)


SUPER0 = MetadataFormat(
    "0.90",
    {"0": "0.90", "0.90": "0.90", "default": "0.90", "": "0.90"},
    NATIVE_SWAP,
)

SUPER1 = MetadataFormat(
    "1.x",
    {
        "1": None,
        "1.0": "1.0",
        "1.00": "1.0",
        "1.1": "1.1",
        "1.01": "1.1",
        "1.2": "1.2",
        "1.02": "1.2",
        "default": None,
    },
    False,
)

DDF = MetadataFormat("ddf", {"ddf": "ddf", "default": "ddf"})

IMSM = MetadataFormat("imsm", {"imsm": "imsm", "default": "imsm"})


class MetadataRegistry(object):
    """Ordered list of formats; the first one that accepts a description wins."""

    def __init__(self, formats: Optional[Iterable[MetadataFormat]] = None) -> None:
        self.formats: List[MetadataFormat] = list(formats or ())

    def match(self, desc: str) -> Optional[MetadataFormat]:
        for fmt in self.formats:
            st = fmt.match_metadata_desc(desc)
            if st:
                return st
        return None

    def names(self) -> Tuple[str, ...]:
        return tuple(x.name for x in self.formats)


DEFAULT_REGISTRY = MetadataRegistry([SUPER0, SUPER1, DDF, IMSM])
