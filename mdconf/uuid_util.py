"""Array uuid helpers for mdconf.

Config files write uuids as 32 hex digits, optionally separated by
``:``, ``.``, ``-`` or spaces. Internally a uuid is 16 bytes, made of
four 32-bit words in the order they were written.
"""

from typing import Optional

UUID_SEPARATORS = ":.- "


def parse_uuid(txt: str) -> Optional[bytes]:
    """Parse a config-file uuid.

    Args:
        txt: e.g. "a1b2c3d4:00112233:44556677:8899aabb"

    Returns:
        16 bytes, or None if the text is not exactly 32 hex digits
    """
    digits = []
    for ch in txt:
        if ch in UUID_SEPARATORS:
            continue
        if ch not in "0123456789abcdefABCDEF":
            return None
        digits.append(ch)

    if len(digits) != 32:
        return None

    return bytes.fromhex("".join(digits))


def fmt_uuid(uuid: bytes, sep: str = ":") -> str:
    zs = uuid.hex()
    return sep.join(zs[n : n + 8] for n in range(0, 32, 8))


def swap_words(uuid: bytes) -> bytes:
    """byte-swap each of the four 32-bit words"""
    return b"".join(uuid[n : n + 4][::-1] for n in range(0, 16, 4))


def same_uuid(a: bytes, b: bytes, swapuuid: bool = False) -> bool:
    """Compare a config uuid with one read from a superblock.

    Args:
        a: uuid from the config file
        b: uuid from the device, as the 16 bytes found in the superblock
        swapuuid: b holds host-order 32-bit words (0.90 on little-endian
            hosts) and each word is reversed before comparing

    Returns:
        True if they name the same array
    """
    if swapuuid:
        b = swap_words(b)
    return a == b
