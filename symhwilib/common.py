"""
Common Classes and Utilities
****************************
"""

import hashlib

from enum import Enum

from typing import Union


class NetworkType(Enum):
    """
    The Symbol network to use
    """
    MAIN_NET = 0x68 #: Symbol public network
    TEST_NET = 0x98 #: Symbol public test network

    def __str__(self) -> str:
        return str(self.name).lower()

    def __repr__(self) -> str:
        return str(self)

    @staticmethod
    def argparse(s: str) -> Union['NetworkType', str]:
        try:
            return NetworkType[s.upper()]
        except KeyError:
            return s


def sha3_256(s: bytes) -> bytes:
    """
    Perform a single SHA3-256 hash.

    :param s: Bytes to hash
    :return: The hash
    """
    return hashlib.sha3_256(s).digest()


def hex_to_bytes(s: Union[str, bytes], name: str = "value") -> bytes:
    """
    Decode a hex string, passing bytes through untouched.

    :param s: The hex string (or bytes)
    :param name: What the value is, used in the error message
    :return: The decoded bytes
    :raises: ValueError: if the string is not valid hex
    """
    if isinstance(s, (bytes, bytearray)):
        return bytes(s)
    try:
        return bytes.fromhex(s)
    except ValueError:
        raise ValueError(f"{name} is not a valid hex string")
