#!/usr/bin/env python3
# Copyright (c) 2020 The HWI developers
# Distributed under the MIT software license, see the accompanying
# file COPYING or http://www.opensource.org/licenses/mit-license.php.

"""
Derivation Path Utilities
*************************

Parsing and encoding of BIP 32 / BIP 44 derivation paths such as ``44'/4343'/0'/0'/0'``.
"""

from .errors import InvalidPathFormatError

import struct
from typing import (
    List,
    Sequence,
)


HARDENED_FLAG = 1 << 31

#: The device refuses paths deeper than this
MAX_PATH_LENGTH = 10

#: BIP 44 coin type registered for Symbol
SYMBOL_COIN_TYPE = 4343

def H_(x: int) -> int:
    """
    Shortcut function that "hardens" a number in a BIP44 path.
    """
    return x | HARDENED_FLAG

def is_hardened(i: int) -> bool:
    """
    Returns whether an index is hardened
    """
    return i & HARDENED_FLAG != 0


def parse_path(nstr: str) -> List[int]:
    """
    Convert a derivation path string to list of uint32 integers with hardened flags.
    Several conventions are supported to set the hardened flag: 1', 1h, 1H

    e.g.: "44'/4343'/0'/0'/0'" -> [0x8000002c, 0x800010f7, 0x80000000, 0x80000000, 0x80000000]

    :param nstr: path string
    :return: list of integers
    :raises: InvalidPathFormatError: if the string is not a derivation path
    """
    if not nstr:
        raise InvalidPathFormatError("Empty derivation path")

    n = nstr.split("/")

    # m/a/b/c => a/b/c
    if n[0] in ("m", "M"):
        n = n[1:]

    if not n or len(n) > MAX_PATH_LENGTH:
        raise InvalidPathFormatError(f"Derivation path must have between 1 and {MAX_PATH_LENGTH} components: {nstr}")

    def str_to_harden(x: str) -> int:
        hardened = x.endswith(("h", "H", "'"))
        if hardened:
            x = x[:-1]
        if not (x.isascii() and x.isdigit()):
            raise InvalidPathFormatError(f"Invalid derivation path component '{x}' in {nstr}")
        i = int(x)
        if i >= HARDENED_FLAG:
            raise InvalidPathFormatError(f"Derivation path component {i} is out of range in {nstr}")
        return H_(i) if hardened else i

    return [str_to_harden(x) for x in n]


def serialize_path(path: Sequence[int]) -> bytes:
    """
    Serialize a parsed path the way the device expects it:
    one byte with the number of components, then each component as a big endian uint32.

    :param path: The parsed path
    :return: The serialized path
    """
    return struct.pack(">B" + "I" * len(path), len(path), *path)


def path_to_string(path: Sequence[int], hardened_char: str = "'") -> str:
    """
    Return the string form of a parsed path, without the leading ``m/``
    """
    parts = []
    for i in path:
        s = str(i & ~HARDENED_FLAG)
        if is_hardened(i):
            s += hardened_char
        parts.append(s)
    return "/".join(parts)


def get_symbol_account_path(account: int = 0) -> str:
    """
    The default derivation path of a Symbol account, as used by the Symbol wallets.

    :param account: The account index
    """
    return f"44'/{SYMBOL_COIN_TYPE}'/{account}'/0'/0'"
