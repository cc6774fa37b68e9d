"""Device discovery.

Expands the DEVICE lines of a loaded configuration into device paths.
Unlike the rest of the configuration this is not cached; every call looks
at the system again.
"""

import glob
import os
from typing import Callable, List

from ..util import LV_DBG, LV_WARN, noop
from .mdstat import MDSTAT, read_mdstat
from .store import ConfigStore

PARTITIONS = "/proc/partitions"


class DeviceLister(object):
    """List candidate component devices for a configuration."""

    def __init__(
        self,
        log_func: Callable[[str, int], None] = noop,
        partitions_path: str = PARTITIONS,
        mdstat_path: str = MDSTAT,
        devdir: str = "/dev",
        globber: Callable[[str], List[str]] = glob.glob,
    ) -> None:
        """Initialize lister.

        Args:
            log_func: Function for logging messages (msg, level)
            partitions_path: Block device list, /proc/partitions format
            mdstat_path: Array status, /proc/mdstat format
            devdir: Where device nodes live
            globber: Expands a glob pattern into existing paths
        """
        self.log = log_func
        self.partitions_path = partitions_path
        self.mdstat_path = mdstat_path
        self.devdir = devdir
        self.globber = globber

    def load_partitions(self) -> List[str]:
        """All block devices the kernel knows about."""
        try:
            with open(self.partitions_path, "r", encoding="utf-8", errors="replace") as f:
                lines = f.read().split("\n")
        except OSError as ex:
            self.log("cannot open %s: %r" % (self.partitions_path, ex), LV_WARN)
            return []

        ret = []
        for ln in lines:
            # "major minor  #blocks  name"; the header does not start with a space
            if not ln.startswith(" "):
                continue

            zs = ln.split()
            if len(zs) < 4 or not zs[0].isdigit() or not zs[1].isdigit():
                continue

            ret.append(os.path.join(self.devdir, zs[3]))

        return ret

    def load_containers(self) -> List[str]:
        """Externally managed containers (imsm, ddf) from mdstat."""
        try:
            ents = read_mdstat(self.mdstat_path)
        except OSError as ex:
            self.log("cannot read %s: %r" % (self.mdstat_path, ex), LV_DBG)
            return []

        return [os.path.join(self.devdir, x.dev) for x in ents if x.is_container()]

    def get_devs(self, store: ConfigStore) -> List[str]:
        """Devices the DEVICE lines refer to, in line order.

        Without any DEVICE line this is every partition and container.
        """
        if not store.devices:
            return self.load_partitions() + self.load_containers()

        ret: List[str] = []
        for ptn in store.devices:
            lptn = ptn.lower()
            if lptn == "partitions":
                ret.extend(self.load_partitions())
            elif lptn == "containers":
                ret.extend(self.load_containers())
            else:
                ret.extend(sorted(self.globber(ptn)))

        return ret
