"""mdconf: interpreter for the md array configuration language (mdadm.conf)."""


import os
import sys

VERSION = (0, 4, 1)
S_VERSION = ".".join(map(str, VERSION))

CONFFILE = "/etc/mdadm.conf"
CONFFILE2 = "/etc/mdadm/mdadm.conf"  # debian

ENV_CONFFILE = "MDADM_CONF"

WINDOWS = sys.platform.startswith("win")
VT100 = not WINDOWS and os.environ.get("TERM", "") != "dumb"
