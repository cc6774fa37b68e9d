"""Match arrays found at runtime against ARRAY lines."""

from typing import Callable, List, Optional, Union

from ..name_util import pattern_list_matches
from ..uuid_util import same_uuid
from ..util import LV_DBG, LV_WARN, noop
from .models import ArrayIdentity


class Ambiguous(object):
    """More than one ARRAY line matches; the caller has to decide."""

    def __init__(self, candidates: List[ArrayIdentity]) -> None:
        self.candidates = candidates

    def __repr__(self) -> str:
        return "Ambiguous(%s)" % (", ".join(x.describe() for x in self.candidates),)


MatchResult = Union[ArrayIdentity, Ambiguous, None]


class IdentityMatcher(object):
    """Find the single ARRAY line describing a discovered array."""

    def __init__(
        self,
        identities: List[ArrayIdentity],
        log_func: Callable[[str, int], None] = noop,
    ) -> None:
        self.identities = identities
        self.log = log_func

    def mismatch(
        self,
        ident: ArrayIdentity,
        uuid: Optional[bytes],
        name: Optional[str],
        super_minor: Optional[int],
        device_path: Optional[str],
        swapuuid: bool,
    ) -> Optional[str]:
        """Return why an identity does not fit, or None if it does."""
        if ident.uuid is not None and (
            uuid is None or not same_uuid(ident.uuid, uuid, swapuuid)
        ):
            return "UUID differs"

        if ident.name and (name is None or ident.name.lower() != name.lower()):
            return "Name differs"

        if (
            ident.devices is not None
            and device_path is not None
            and not pattern_list_matches(ident.devices, device_path)
        ):
            return "Not a listed device"

        if ident.super_minor is not None and ident.super_minor != super_minor:
            return "Different super-minor"

        if not ident.has_match_criteria():
            return "No identifying information"

        return None

    def match(
        self,
        uuid: Optional[bytes],
        name: Optional[str],
        super_minor: Optional[int],
        device_path: Optional[str] = None,
        swapuuid: bool = False,
    ) -> MatchResult:
        """Match a discovered array.

        Args:
            uuid: Array uuid as the raw 16 superblock bytes; config uuids
                are kept in written order
            name: Array name from the superblock
            super_minor: Preferred minor number from the superblock
            device_path: Component device the array was found on; when
                None, devices= lists are not checked
            swapuuid: The format's swapuuid flag, set when those bytes
                are host-order words

        Returns:
            The matching ArrayIdentity, None if nothing matches, or
            Ambiguous if several lines match
        """
        found: List[ArrayIdentity] = []
        for ident in self.identities:
            why = self.mismatch(ident, uuid, name, super_minor, device_path, swapuuid)
            if why:
                self.log("%s: %s" % (ident.describe(), why), LV_DBG)
                continue

            found.append(ident)

        if len(found) > 1:
            t = "we match both %s - cannot decide which to use"
            self.log(t % (" and ".join(x.describe() for x in found),), LV_WARN)
            return Ambiguous(found)

        return found[0] if found else None
