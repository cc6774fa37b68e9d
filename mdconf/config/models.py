"""Records built from config lines.

- ConfigLine: one logical directive line (keyword + words)
- AutoCreate: parsed auto= value
- ArrayIdentity: one ARRAY line
- CreateDefaults: accumulated CREATE lines
"""

from typing import Any, Iterator, List, Optional

from ..uuid_util import fmt_uuid


class ConfigLine(object):
    """A directive keyword and its argument words, in file order."""

    __slots__ = ("keyword", "args")

    def __init__(self, keyword: str, args: Optional[List[str]] = None) -> None:
        self.keyword = keyword
        self.args: List[str] = list(args) if args else []

    def __iter__(self) -> Iterator[str]:
        return iter(self.args)

    def __len__(self) -> int:
        return len(self.args)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ConfigLine):
            return NotImplemented
        return self.keyword == other.keyword and self.args == other.args

    def __repr__(self) -> str:
        return "ConfigLine(%r, %r)" % (self.keyword, self.args)

    def __str__(self) -> str:
        return " ".join([self.keyword] + self.args)


class AutoCreate(object):
    """How to create device special files for an array.

    mode is one of no, yes, md, mdp, part; partitions is the optional
    trailing count (md-4, part8, ...).
    """

    MODES = ("no", "yes", "md", "mdp", "part")

    def __init__(self, mode: str = "yes", partitions: Optional[int] = None) -> None:
        self.mode = mode
        self.partitions = partitions

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AutoCreate):
            return NotImplemented
        return self.mode == other.mode and self.partitions == other.partitions

    def __repr__(self) -> str:
        return "AutoCreate(%r, %r)" % (self.mode, self.partitions)

    def __str__(self) -> str:
        if self.partitions is None:
            return self.mode
        return "%s%d" % (self.mode, self.partitions)


class ArrayIdentity(object):
    """Everything an ARRAY line says about one array.

    Unset fields are None. An identity is only kept when has_identity()
    is true.
    """

    def __init__(self) -> None:
        self.devname: Optional[str] = None
        self.uuid: Optional[bytes] = None
        self.name: Optional[str] = None
        self.super_minor: Optional[int] = None
        self.devices: Optional[str] = None
        self.spare_group: Optional[str] = None
        self.bitmap_file: Optional[str] = None
        self.level: Optional[int] = None
        self.raid_disks: Optional[int] = None
        self.spare_disks = 0
        self.metadata: Optional[Any] = None
        self.autof: Optional[AutoCreate] = None
        self.container: Optional[str] = None
        self.member: Optional[str] = None

    def has_identity(self) -> bool:
        """uuid, name, super-minor or container+member"""
        return (
            self.uuid is not None
            or bool(self.name)
            or self.super_minor is not None
            or (self.container is not None and self.member is not None)
        )

    def has_match_criteria(self) -> bool:
        """at least one field the identity matcher can check"""
        return (
            self.uuid is not None
            or bool(self.name)
            or self.devices is not None
            or self.super_minor is not None
        )

    def describe(self) -> str:
        if self.devname:
            return self.devname
        if self.name:
            return "name=" + self.name
        if self.uuid is not None:
            return "uuid=" + fmt_uuid(self.uuid)
        return "(unnamed)"

    def __repr__(self) -> str:
        ret = ["ArrayIdentity(%r" % (self.devname,)]
        if self.uuid is not None:
            ret.append("uuid=" + fmt_uuid(self.uuid))
        for k in ("name", "super_minor", "devices", "container", "member"):
            zv = getattr(self, k)
            if zv is not None:
                ret.append("%s=%r" % (k, zv))
        return ", ".join(ret) + ")"


class CreateDefaults(object):
    """Defaults for device files and new arrays, from CREATE lines."""

    def __init__(self) -> None:
        self.uid: Optional[int] = None
        self.gid: Optional[int] = None
        self.mode = 0o600
        self.autof = AutoCreate("yes")
        self.symlinks = True
        self.metadata: Optional[Any] = None

    def __repr__(self) -> str:
        return "CreateDefaults(uid=%r, gid=%r, mode=%s, auto=%s, symlinks=%r, metadata=%r)" % (
            self.uid,
            self.gid,
            oct(self.mode),
            self.autof,
            self.symlinks,
            self.metadata,
        )
