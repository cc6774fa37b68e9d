"""Word and line reader for the config language.

A logical line starts with an unindented keyword and continues over any
following indented lines. Blank lines and # comments are skipped. Words
are separated by spaces or tabs; single or double quotes protect spaces
but never span a newline.
"""

import io
from typing import IO, Iterator, List, Optional

from .models import ConfigLine

SPACES = " \t"
QUOTES = "'\""

# some kernels (2.6.14 - 2.6.24) print "active(auto-read-only)" in
# /proc/mdstat; split it into "active" and "(auto-read-only)"
ACTIVE_WORD = "active"
ARO_BROKEN = "auto-read-only)"
ARO_FIXED = "(auto-read-only)"


def _splits_active_paren(word: List[str], c: str) -> bool:
    return c == "(" and "".join(word[-len(ACTIVE_WORD) :]) == ACTIVE_WORD


def _fix_auto_read_only(word: str) -> str:
    return ARO_FIXED if word == ARO_BROKEN else word


class Scanner(object):
    """Reads words and logical lines from a text stream."""

    def __init__(self, stream: IO[str]) -> None:
        self.f = stream
        self.held = ""

    def _getc(self) -> str:
        if self.held:
            c = self.held
            self.held = ""
            return c
        return self.f.read(1)

    def _ungetc(self, c: str) -> None:
        self.held = c

    def next_word(self, allow_keyword: bool) -> Optional[str]:
        """Read the next word.

        Args:
            allow_keyword: Accept a word at the start of a line; if false,
                such a word is left unread and the line ends

        Returns:
            The word with quotes removed ("" for an empty quoted word),
            or None if this line (or the input) has no more words
        """
        word: List[str] = []
        found = False

        while not found:
            c = self._getc()
            if c == "#":
                while c and c != "\n":
                    c = self._getc()
            if not c:
                break
            if c == "\n":
                continue

            if c not in SPACES and not allow_keyword:
                self._ungetc(c)
                break

            while c and c in SPACES:
                c = self._getc()

            if c and c != "\n" and c != "#":
                quote = ""
                while c and c != "\n" and (quote or c not in SPACES):
                    found = True
                    if quote and c == quote:
                        quote = ""
                    elif not quote and c in QUOTES:
                        quote = c
                    else:
                        word.append(c)

                    c = self._getc()
                    if _splits_active_paren(word, c):
                        c = " "

            if c:
                self._ungetc(c)

        if not found:
            return None

        return _fix_auto_read_only("".join(word))

    def next_line(self) -> Optional[ConfigLine]:
        """Read one logical line; None at end of input."""
        kw = self.next_word(True)
        if kw is None:
            return None

        args = []
        while True:
            w = self.next_word(False)
            if w is None:
                break
            args.append(w)

        return ConfigLine(kw, args)

    def __iter__(self) -> Iterator[ConfigLine]:
        while True:
            ln = self.next_line()
            if ln is None:
                return
            yield ln


def split_words(txt: str) -> List[str]:
    """All words of a string, as the scanner sees them (keyword rules ignored)."""
    sc = Scanner(io.StringIO(txt))
    ret = []
    while True:
        w = sc.next_word(True)
        if w is None:
            return ret
        ret.append(w)
