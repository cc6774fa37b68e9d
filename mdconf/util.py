import logging
import sys
from typing import Optional, Protocol, Union

from .__init__ import VT100


class NamedLogger(Protocol):
    def __call__(self, msg: str, c: Union[int, str] = 0) -> None:
        return None


# log levels as used by every log_func in this package;
# the numbers double as ansi color codes for the terminal printer
LV_INFO = 0
LV_ERR = 1
LV_WARN = 3
LV_DBG = 6


def noop(*a, **ka):
    pass


def lv2logging(c: Union[int, str]) -> int:
    if c == LV_ERR:
        return logging.ERROR
    if c == LV_WARN:
        return logging.WARNING
    if c == LV_DBG:
        return logging.DEBUG
    return logging.INFO


class LogBridge(object):
    """forwards (msg, level) diagnostics into a stdlib logger"""

    def __init__(self, name: str) -> None:
        self.logger = logging.getLogger(name)

    def __repr__(self) -> str:
        return "<%s %s>" % (self.__class__.__name__, self.logger.name)

    def __call__(self, msg: str, c: Union[int, str] = 0) -> None:
        self.logger.log(lv2logging(c), "%s", msg)


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        msg = super(ColorFormatter, self).format(record)
        if not VT100:
            return msg

        lv = record.levelno
        if lv >= logging.ERROR:
            c = LV_ERR
        elif lv >= logging.WARNING:
            c = LV_WARN
        elif lv < logging.INFO:
            c = LV_DBG
        else:
            return msg

        return "\033[3%dm%s\033[0m" % (c, msg)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    if verbose:
        lv = logging.DEBUG
    elif quiet:
        lv = logging.ERROR
    else:
        lv = logging.INFO

    hnd = logging.StreamHandler(sys.stderr)
    hnd.setFormatter(ColorFormatter("mdconf: %(message)s"))
    root = logging.getLogger("mdconf")
    root.handlers[:] = [hnd]
    root.setLevel(lv)
    root.propagate = False


class ConfigError(Exception):
    pass


class MalformedOption(ConfigError):
    """one option on one line could not be used; the line goes on"""

    def __init__(self, word: str, msg: str) -> None:
        super(MalformedOption, self).__init__(msg)
        self.word = word

    def __repr__(self) -> str:
        return "MalformedOption({!r}, {!r})".format(self.word, str(self))


class NotUTF8(ConfigError):
    pass


def read_utf8(log: Optional[NamedLogger], ap: str, strict: bool) -> str:
    with open(ap, "rb") as f:
        buf = f.read()

    if buf.startswith(b"\xef\xbb\xbf"):
        buf = buf[3:]

    try:
        return buf.decode("utf-8", "strict")
    except UnicodeDecodeError as ex:
        eo = ex.start
        eb = buf[eo : eo + 1]

    if not strict:
        t = "%s is not UTF-8 (byte %r at offset %d); decoding with replacement characters"
        t = t % (ap, eb, eo)
        if log:
            log(t, LV_WARN)
        return buf.decode("utf-8", "replace")

    t = "%s is not UTF-8 (byte %r at offset %d) and cannot be loaded"
    t = t % (ap, eb, eo)
    if log:
        log(t, LV_ERR)
    raise NotUTF8(t)
