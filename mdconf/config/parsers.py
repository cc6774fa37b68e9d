"""Record builders for config directives.

One parser per directive:
- DEVICE lines (DeviceParser)
- ARRAY lines (ArrayParser)
- CREATE lines (CreateParser)
- MAILADDR, MAILFROM, PROGRAM lines (MailParser, MailFromParser, ProgramParser)
- HOMEHOST lines (HomehostParser)
- AUTO lines (AutoParser)

A bad or repeated option is reported and skipped; the rest of the line
still applies.
"""

import grp
import pwd
import re
from typing import TYPE_CHECKING, Callable, Dict, Optional

from ..name_util import is_valid_md_devname
from ..uuid_util import parse_uuid
from ..util import LV_DBG, LV_ERR, LV_WARN, MalformedOption
from .metadata import DEFAULT_REGISTRY, MetadataRegistry
from .models import ArrayIdentity, AutoCreate, ConfigLine

if TYPE_CHECKING:
    from .store import ConfigStore

# raid personalities accepted by level=
LEVELS: Dict[str, int] = {
    "linear": -1,
    "raid0": 0,
    "0": 0,
    "stripe": 0,
    "raid1": 1,
    "1": 1,
    "mirror": 1,
    "raid4": 4,
    "4": 4,
    "raid5": 5,
    "5": 5,
    "multipath": -4,
    "mp": -4,
    "raid6": 6,
    "6": 6,
    "raid10": 10,
    "10": 10,
    "faulty": -5,
    "container": -100,
}

MAX_NAME = 32

RE_INT = re.compile(r"^[+-]?[0-9]+$")
RE_UINT = re.compile(r"^[0-9]+$")
RE_OCTAL = re.compile(r"^[0-7]+$")

# default partition count for the long auto= forms (md4, part-8, ...)
AUTO_PARTITIONS = 4


def parse_auto(val: Optional[str], what: str, config: bool) -> AutoCreate:
    """Parse an auto= value.

    Accepts no, yes, md, mdp, part (or p), optionally followed by a
    hyphen and a partition count. In CREATE lines mdp means part.

    Args:
        val: Text after "auto=", may be empty
        what: Option name for the error message
        config: Value comes from a CREATE line

    Returns:
        Parsed AutoCreate

    Raises:
        MalformedOption: If the value is not recognised
    """
    if not val:
        return AutoCreate("yes")

    lval = val.lower()
    if lval == "no":
        return AutoCreate("no")
    if lval == "yes":
        return AutoCreate("yes")
    if lval == "md":
        return AutoCreate("md")

    # there might be digits, and maybe a hyphen, at the end
    base = lval.rstrip("0123456789")
    num = AUTO_PARTITIONS
    if len(base) < len(lval):
        num = max(int(lval[len(base) :]), 1)
    if base.endswith("-"):
        base = base[:-1]

    if base == "md":
        return AutoCreate("md", num)
    if base == "yes":
        return AutoCreate("yes", num)
    if base == "mdp":
        return AutoCreate("part" if config else "mdp", num)
    if base == "p" or base.startswith("part"):
        return AutoCreate("part", num)

    t = '%s arg of "%s" unrecognised: use no,yes,md,mdp,part optionally followed by a number'
    raise MalformedOption(val, t % (what, val))


def parse_int(word: str, val: str, what: str) -> int:
    if not RE_INT.match(val):
        raise MalformedOption(word, "invalid %s number: %s" % (what, word))
    return int(val, 10)


class LineParser(object):
    """Base for directive parsers."""

    def __init__(self, log_func: Callable[[str, int], None]):
        """Initialize parser with logging function."""
        self.log = log_func

    def parse(self, store: "ConfigStore", line: ConfigLine) -> None:
        raise NotImplementedError()


class DeviceParser(LineParser):
    """DEVICE lines: paths, globs, ``partitions`` and ``containers``."""

    def parse(self, store: "ConfigStore", line: ConfigLine) -> None:
        for w in line:
            if w.startswith("/") or w.lower() in ("partitions", "containers"):
                store.devices.append(w)
            else:
                self.log("unrecognised word on DEVICE line: %s" % (w,), LV_WARN)


class ArrayParser(LineParser):
    """ARRAY lines: one md device and the attributes that identify it."""

    def __init__(
        self,
        log_func: Callable[[str, int], None],
        registry: Optional[MetadataRegistry] = None,
    ):
        """Initialize parser.

        Args:
            log_func: Function for logging messages (msg, level)
            registry: Metadata formats for metadata=
        """
        self.log = log_func
        self.registry = registry or DEFAULT_REGISTRY

    def parse(self, store: "ConfigStore", line: ConfigLine) -> None:
        ident = self.build(line)
        if ident is None:
            return

        store.identities.append(ident)

    def build(self, line: ConfigLine) -> Optional[ArrayIdentity]:
        """Build an ArrayIdentity, or None if the line identifies nothing."""
        mis = ArrayIdentity()

        for w in line:
            if w.startswith("/") or "=" not in w:
                self._devname(mis, w)
                continue

            key, val = w.split("=", 1)
            key = key.lower()
            try:
                self._option(mis, w, key, val)
            except MalformedOption as ex:
                self.log(str(ex), LV_WARN)

        if not mis.has_identity():
            t = "ARRAY line %shas no identity information"
            self.log(t % (mis.devname + " " if mis.devname else "",), LV_ERR)
            return None

        return mis

    def _devname(self, mis: ArrayIdentity, w: str) -> None:
        if not is_valid_md_devname(w):
            self.log("%s is an invalid name for an md device - ignored" % (w,), LV_WARN)
        elif mis.devname:
            t = "only give one device per ARRAY line: %s and %s"
            self.log(t % (mis.devname, w), LV_WARN)
        else:
            mis.devname = w

    def _once(self, cur: object, what: str, w: str) -> None:
        if cur is not None:
            raise MalformedOption(w, "only specify %s once, %s ignored" % (what, w))

    def _option(self, mis: ArrayIdentity, w: str, key: str, val: str) -> None:
        if key == "uuid":
            self._once(mis.uuid, "uuid", w)
            uuid = parse_uuid(val)
            if uuid is None:
                raise MalformedOption(w, "bad uuid: %s" % (w,))
            mis.uuid = uuid

        elif key == "super-minor":
            self._once(mis.super_minor, "super-minor", w)
            minor = parse_int(w, val, "super-minor")
            if minor < 0:
                raise MalformedOption(w, "invalid super-minor number: %s" % (w,))
            mis.super_minor = minor

        elif key == "name":
            self._once(mis.name, "name", w)
            if len(val) > MAX_NAME:
                raise MalformedOption(w, "name too long, ignoring %s" % (w,))
            mis.name = val

        elif key == "bitmap":
            self._once(mis.bitmap_file, "bitmap file", w)
            mis.bitmap_file = val

        elif key == "devices":
            self._once(mis.devices, "devices", w)
            mis.devices = val

        elif key == "spare-group":
            self._once(mis.spare_group, "spare-group", w)
            mis.spare_group = val

        elif key == "level":
            self._once(mis.level, "level", w)
            level = LEVELS.get(val.lower())
            if level is None:
                raise MalformedOption(w, "unknown raid level: %s" % (w,))
            mis.level = level

        elif key in ("disks", "num-devices"):
            mis.raid_disks = parse_int(w, val, key)

        elif key == "spares":
            mis.spare_disks = parse_int(w, val, key)

        elif key == "metadata":
            self._once(mis.metadata, "metadata", w)
            st = self.registry.match(val)
            if not st:
                raise MalformedOption(w, "metadata format %s unknown, ignored" % (val,))
            mis.metadata = st

        elif key == "auto":
            self._once(mis.autof, "auto", w)
            mis.autof = parse_auto(val, "auto type", False)

        elif key == "member":
            self._once(mis.member, "member", w)
            mis.member = val

        elif key == "container":
            self._once(mis.container, "container", w)
            mis.container = val

        else:
            raise MalformedOption(w, "unrecognised word on ARRAY line: %s" % (w,))


class CreateParser(LineParser):
    """CREATE lines: ownership, mode and defaults for new arrays."""

    def __init__(
        self,
        log_func: Callable[[str, int], None],
        registry: Optional[MetadataRegistry] = None,
        getpwnam: Callable[[str], int] = lambda x: pwd.getpwnam(x).pw_uid,
        getgrnam: Callable[[str], int] = lambda x: grp.getgrnam(x).gr_gid,
    ):
        """Initialize parser.

        Args:
            log_func: Function for logging messages (msg, level)
            registry: Metadata formats for metadata=
            getpwnam: user name -> uid, raises KeyError if unknown
            getgrnam: group name -> gid, raises KeyError if unknown
        """
        self.log = log_func
        self.registry = registry or DEFAULT_REGISTRY
        self.getpwnam = getpwnam
        self.getgrnam = getgrnam

    def parse(self, store: "ConfigStore", line: ConfigLine) -> None:
        for w in line:
            key, _, val = w.partition("=")
            try:
                self._option(store, w, key.lower(), val)
            except MalformedOption as ex:
                self.log(str(ex), LV_WARN)

    def _resolve(self, val: str, what: str, lookup: Callable[[str], int]) -> int:
        if not val:
            raise MalformedOption(val, "missing %s name" % (what,))
        if RE_UINT.match(val):
            return int(val, 10)

        try:
            return lookup(val)
        except KeyError:
            raise MalformedOption(val, "CREATE %s %s not found" % (what, val))

    def _option(self, store: "ConfigStore", w: str, key: str, val: str) -> None:
        ci = store.create
        if "=" not in w:
            key = ""

        if key == "auto":
            ci.autof = parse_auto(val, "auto=", True)

        elif key == "owner":
            ci.uid = self._resolve(val, "user", self.getpwnam)

        elif key == "group":
            ci.gid = self._resolve(val, "group", self.getgrnam)

        elif key == "mode":
            if not val:
                raise MalformedOption(w, "missing CREATE mode")
            if not RE_OCTAL.match(val):
                raise MalformedOption(w, "unrecognised CREATE mode %s" % (val,))
            ci.mode = int(val, 8)

        elif key == "metadata":
            if ci.metadata:
                t = "CREATE metadata already set to %s, %s ignored"
                raise MalformedOption(w, t % (ci.metadata.name, val))
            st = self.registry.match(val)
            if not st:
                raise MalformedOption(w, "metadata format %s unknown, ignoring" % (val,))
            ci.metadata = st

        elif key == "symlinks" and val.lower() in ("yes", "no"):
            ci.symlinks = val.lower() == "yes"

        else:
            raise MalformedOption(w, "unrecognised word on CREATE line: %s" % (w,))


class MailParser(LineParser):
    """MAILADDR: a single alert address."""

    def parse(self, store: "ConfigStore", line: ConfigLine) -> None:
        for w in line:
            if store.mailaddr is None:
                store.mailaddr = w
            else:
                t = "excess address on MAIL line: %s - ignored"
                self.log(t % (w,), LV_WARN)


class MailFromParser(LineParser):
    """MAILFROM: sender for alert mail; all words are kept."""

    def parse(self, store: "ConfigStore", line: ConfigLine) -> None:
        for w in line:
            if store.mailfrom is None:
                store.mailfrom = w
            else:
                store.mailfrom += " " + w


class ProgramParser(LineParser):
    """PROGRAM: the alert program."""

    def parse(self, store: "ConfigStore", line: ConfigLine) -> None:
        for w in line:
            if store.program is None:
                store.program = w
            else:
                t = "excess program on PROGRAM line: %s - ignored"
                self.log(t % (w,), LV_WARN)


class HomehostParser(LineParser):
    """HOMEHOST: this host's name, or <ignore>."""

    def parse(self, store: "ConfigStore", line: ConfigLine) -> None:
        for w in line:
            if w.lower() == "<ignore>":
                store.require_homehost = False
            elif store.homehost is None:
                store.homehost = w
            else:
                t = "excess host name on HOMEHOST line: %s - ignored"
                self.log(t % (w,), LV_WARN)


class AutoParser(LineParser):
    """AUTO: the auto-assembly policy; only the first line counts."""

    def parse(self, store: "ConfigStore", line: ConfigLine) -> None:
        if store.auto_options is not None:
            t = "AUTO line may only be given once. Subsequent lines ignored"
            self.log(t, LV_WARN)
            return

        store.auto_options = list(line.args)
        self.log("auto policy: %s" % (" ".join(store.auto_options),), LV_DBG)
