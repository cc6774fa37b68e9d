"""Load-once configuration loader.

Coordinates reading the config file:
- locate the file (explicit path, $MDADM_CONF, default locations)
- split it into lines (Scanner)
- hand each line to the parser for its keyword (parsers)

The first load() does the work; later calls return the same ConfigStore.
"""

import io
import os
import threading
from typing import Callable, Dict, Optional

from ..__init__ import CONFFILE, CONFFILE2, ENV_CONFFILE
from ..util import LV_DBG, LV_WARN, LogBridge, read_utf8
from . import keywords as kw
from .metadata import MetadataRegistry
from .models import ConfigLine
from .parsers import (
    ArrayParser,
    AutoParser,
    CreateParser,
    DeviceParser,
    HomehostParser,
    LineParser,
    MailFromParser,
    MailParser,
    ProgramParser,
)
from .scanner import Scanner
from .store import ConfigStore

# special values for the config path
CONF_NONE = "none"
CONF_PARTITIONS = "partitions"


class ConfigLoader(object):
    """Parse a config file at most once and keep the result."""

    def __init__(
        self,
        path: Optional[str] = None,
        log_func: Optional[Callable[[str, int], None]] = None,
        registry: Optional[MetadataRegistry] = None,
        strict: bool = False,
    ):
        """Initialize loader.

        Args:
            path: Config file, "none" for no configuration, or
                "partitions" to scan every partition; None picks
                $MDADM_CONF or the default locations
            log_func: Function for logging messages (msg, level)
            registry: Metadata formats for metadata= options
            strict: Refuse files that are not valid UTF-8 (raises NotUTF8)
        """
        self.path = path
        self.log = log_func or LogBridge("mdconf.config")
        self.registry = registry
        self.strict = strict
        self.mutex = threading.Lock()
        self.store: Optional[ConfigStore] = None

        self.parsers: Dict[str, LineParser] = {
            kw.DEVICES: DeviceParser(self.log),
            kw.ARRAY: ArrayParser(self.log, registry),
            kw.MAILADDR: MailParser(self.log),
            kw.MAILFROM: MailFromParser(self.log),
            kw.PROGRAM: ProgramParser(self.log),
            kw.CREATE: CreateParser(self.log, registry),
            kw.HOMEHOST: HomehostParser(self.log),
            kw.AUTO: AutoParser(self.log),
        }

    @property
    def loaded(self) -> bool:
        return self.store is not None

    def load(self) -> ConfigStore:
        """Return the configuration, reading it on the first call."""
        with self.mutex:
            if self.store is None:
                self.store = self._load()
            return self.store

    def reset(self) -> None:
        """Forget the loaded configuration; the next load() reads again."""
        with self.mutex:
            self.store = None

    def resolve_path(self) -> Optional[str]:
        """Pick the file to read.

        Returns:
            A path, one of the special values, or None if no default
            location exists
        """
        path = self.path or os.environ.get(ENV_CONFFILE)
        if path:
            return path

        for zs in (CONFFILE, CONFFILE2):
            if os.path.exists(zs):
                return zs

        return None

    def _load(self) -> ConfigStore:
        path = self.resolve_path()

        if path == CONF_NONE:
            return ConfigStore(None, self.log)

        if path == CONF_PARTITIONS:
            store = ConfigStore(None, self.log)
            self.dispatch(store, ConfigLine("DEV", [CONF_PARTITIONS]))
            return store

        if not path:
            t = "no configuration available; tried %s and %s"
            self.log(t % (CONFFILE, CONFFILE2), LV_DBG)
            return ConfigStore(None, self.log)

        try:
            txt = read_utf8(self.log, path, self.strict)
        except OSError as ex:
            self.log("no configuration available: %s: %s" % (path, ex), LV_WARN)
            return ConfigStore(None, self.log)

        return self.load_text(txt, path)

    def load_text(self, txt: str, source: Optional[str] = None) -> ConfigStore:
        """Parse configuration text into a new store (no caching)."""
        store = ConfigStore(source, self.log)
        for line in Scanner(io.StringIO(txt)):
            self.dispatch(store, line)

        self.log("loaded %r" % (store,), LV_DBG)
        return store

    def dispatch(self, store: ConfigStore, line: ConfigLine) -> None:
        directive = kw.keyword_match(line.keyword)
        if directive is None:
            self.log("Unknown keyword %s" % (line.keyword,), LV_WARN)
            return

        self.parsers[directive].parse(store, line)


_default_mutex = threading.Lock()
_default_loader: Optional[ConfigLoader] = None


def load_config(
    path: Optional[str] = None,
    log_func: Optional[Callable[[str, int], None]] = None,
    registry: Optional[MetadataRegistry] = None,
) -> ConfigStore:
    """Load the process-wide configuration.

    Only the first call reads anything (and its arguments are the ones
    that count) until reset_config() is called.
    """
    global _default_loader

    with _default_mutex:
        if _default_loader is None:
            _default_loader = ConfigLoader(path, log_func, registry)
        ldr = _default_loader

    return ldr.load()


def get_config() -> ConfigStore:
    """The process-wide configuration, loaded from the default location if needed."""
    return load_config()


def reset_config() -> None:
    """Drop the process-wide configuration."""
    global _default_loader

    with _default_mutex:
        _default_loader = None
