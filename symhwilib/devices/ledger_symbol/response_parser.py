"""
Decoding of the Symbol app's responses.

Responses carry no type tag: the layout depends on the command that was sent.
"""

import semver

from ...errors import MalformedResponseError
from ...transaction import SIGNATURE_SIZE


def _require(response: bytes, size: int, what: str) -> None:
    if len(response) < size:
        raise MalformedResponseError(f"Response too short for {what}: expected at least {size} bytes, got {len(response)}")


def parse_app_version(response: bytes) -> semver.VersionInfo:
    """
    Read the app version from the response to GET_APP_CONFIGURATION.

    Byte 0 holds flags, bytes 1 to 3 the major, minor and patch numbers.
    """
    _require(response, 4, "app version")
    return semver.VersionInfo(response[1], response[2], response[3])


def parse_public_key(response: bytes) -> str:
    """
    Read the public key from the response to GET_ACCOUNT: a length byte followed by the key.

    :return: The public key as hex
    """
    _require(response, 1, "public key length")
    length = response[0]
    _require(response, 1 + length, "public key")
    return response[1:1 + length].hex()


def parse_signature(response: bytes) -> str:
    """
    Read the signature from the response to the last SIGN_TX chunk.

    :return: The 64 byte signature as hex
    """
    _require(response, SIGNATURE_SIZE, "signature")
    return response[:SIGNATURE_SIZE].hex()
