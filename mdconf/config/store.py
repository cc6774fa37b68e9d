"""Parsed configuration and the questions it answers."""

from typing import Callable, List, Optional, Tuple

from ..name_util import name_matches, path_glob_match
from ..util import noop
from .matcher import IdentityMatcher, MatchResult
from .models import ArrayIdentity, CreateDefaults
from .policy import AutoPolicy


class ConfigStore(object):
    """Everything read from one config file.

    Filled in by the record builders while loading; only read afterwards.
    """

    def __init__(
        self,
        source: Optional[str] = None,
        log_func: Callable[[str, int], None] = noop,
    ) -> None:
        """Initialize an empty store.

        Args:
            source: Path the configuration was read from, if any
            log_func: Function for logging messages (msg, level)
        """
        self.source = source
        self.log = log_func

        self.devices: List[str] = []
        self.identities: List[ArrayIdentity] = []
        self.create = CreateDefaults()
        self.mailaddr: Optional[str] = None
        self.mailfrom: Optional[str] = None
        self.program: Optional[str] = None
        self.homehost: Optional[str] = None
        self.require_homehost = True
        self.auto_options: Optional[List[str]] = None

    def __repr__(self) -> str:
        return "<ConfigStore %s: %d devices, %d arrays>" % (
            self.source or "(none)",
            len(self.devices),
            len(self.identities),
        )

    @property
    def device_patterns(self) -> Tuple[str, ...]:
        return tuple(self.devices)

    def get_create_defaults(self) -> CreateDefaults:
        return self.create

    def get_mail_address(self) -> Optional[str]:
        return self.mailaddr

    def get_mail_from(self) -> Optional[str]:
        return self.mailfrom

    def get_alert_program(self) -> Optional[str]:
        return self.program

    def get_homehost(self) -> Tuple[Optional[str], bool]:
        """Return (homehost, require_homehost)."""
        return self.homehost, self.require_homehost

    def find_identity_for(self, device_name: Optional[str]) -> Optional[ArrayIdentity]:
        """First ARRAY line naming this md device.

        Args:
            device_name: e.g. "/dev/md0", "md0", "/dev/md/home"; None
                returns the first ARRAY line

        Returns:
            The identity, or None
        """
        for ident in self.identities:
            if device_name is None:
                return ident
            if ident.devname and name_matches(device_name, ident.devname):
                return ident
        return None

    def match_discovered_array(
        self,
        uuid: Optional[bytes],
        name: Optional[str],
        super_minor: Optional[int],
        device_path: Optional[str] = None,
        swapuuid: bool = False,
    ) -> MatchResult:
        """See IdentityMatcher.match"""
        matcher = IdentityMatcher(self.identities, self.log)
        return matcher.match(uuid, name, super_minor, device_path, swapuuid)

    def is_device_allowed(self, device_name: str) -> bool:
        """Check a device against the DEVICE lines.

        Anything is allowed when there are no DEVICE lines, or when one
        of them says ``partitions``.
        """
        if not self.devices:
            return True

        for ptn in self.devices:
            if ptn.lower() == "partitions":
                return True
            if path_glob_match(ptn, device_name):
                return True

        return False

    def is_format_auto_allowed(self, tag: str, is_homehost: bool) -> bool:
        return AutoPolicy(self.auto_options, self.log).permits(tag, is_homehost)

    def is_name_available(self, name: str) -> bool:
        """Check that no ARRAY line already claims this name.

        A line claims a name through its md device, its name= or its
        super-minor=.
        """
        for ident in self.identities:
            if ident.devname and name_matches(name, ident.devname):
                return False
            if ident.name and name_matches(name, ident.name):
                return False
            if ident.super_minor is not None and name_matches(
                name, str(ident.super_minor)
            ):
                return False

        return True
