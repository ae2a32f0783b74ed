"""
Symbol Transactions
*******************

The pieces of the Symbol transaction format needed to sign with a hardware wallet:
the layout of the entity header, the template used to splice a device signature into a serialized transaction,
the transaction hash, and the signed results handed back to callers.

Transactions themselves are built and serialized elsewhere.
Anything with a ``serialize()`` method returning the binary payload (as bytes or hex) can be signed,
as can :class:`RawTransaction` which wraps an already serialized payload.
"""

from dataclasses import dataclass
import struct
from typing import (
    Callable,
    Optional,
    Union,
)

from typing_extensions import Protocol

from .common import (
    hex_to_bytes,
    sha3_256,
)
from .errors import (
    HWWError,
    InvalidTransactionError,
)


# Entity header layout:
#   size (4) | reserved (4) | signature (64) | signer public key (32) | reserved (4) | version (1) | network (1) | type (2) | ...
SIZE_PREFIX_SIZE = 8
SIGNATURE_SIZE = 64
PUBLIC_KEY_SIZE = 32
SIGNATURE_OFFSET = SIZE_PREFIX_SIZE
PUBLIC_KEY_OFFSET = SIGNATURE_OFFSET + SIGNATURE_SIZE
BODY_OFFSET = PUBLIC_KEY_OFFSET + PUBLIC_KEY_SIZE
#: Signing data starts after the verifiable entity header
HEADER_SIZE = BODY_OFFSET + 4
NETWORK_OFFSET = HEADER_SIZE + 1
TYPE_OFFSET = HEADER_SIZE + 2
#: Shortest payload that holds the whole header, transaction type included
MIN_TRANSACTION_SIZE = TYPE_OFFSET + 2

GENERATION_HASH_SIZE = 32
TRANSACTION_HASH_SIZE = 32

# Only the aggregate header (up to and including the transactions hash) is hashed for aggregates
AGGREGATE_HASHED_BODY_SIZE = 52
AGGREGATE_COMPLETE = 0x4141
AGGREGATE_BONDED = 0x4241


class SerializableTransaction(Protocol):
    def serialize(self) -> Union[str, bytes]:
        ...


TransactionLike = Union[SerializableTransaction, bytes]

#: (signed payload, generation hash) -> transaction hash
TransactionHasher = Callable[[bytes, bytes], bytes]


@dataclass(frozen=True)
class TransactionInfo:
    """The on-chain information about an announced transaction that cosigners need."""
    hash: str


@dataclass
class RawTransaction:
    """
    A transaction that has already been serialized.

    ``transaction_info`` is only needed when the transaction is an aggregate being cosigned.
    """
    payload: bytes
    transaction_info: Optional[TransactionInfo] = None

    @classmethod
    def from_hex(cls, payload: str, transaction_hash: Optional[str] = None) -> 'RawTransaction':
        info = TransactionInfo(transaction_hash) if transaction_hash is not None else None
        try:
            return cls(hex_to_bytes(payload, "transaction"), info)
        except ValueError as e:
            raise InvalidTransactionError(str(e))

    def serialize(self) -> bytes:
        return self.payload


def serialize_transaction(transaction: TransactionLike) -> bytes:
    """
    Get the binary payload of a transaction, checking that it is long enough to hold the entity header.

    :param transaction: Raw bytes or an object with a ``serialize()`` method
    :return: The serialized transaction
    :raises: InvalidTransactionError: if the payload is not a serialized transaction
    """
    if isinstance(transaction, (bytes, bytearray)):
        payload = bytes(transaction)
    else:
        try:
            payload = hex_to_bytes(transaction.serialize(), "transaction")
        except ValueError as e:
            raise InvalidTransactionError(str(e))
    if len(payload) < MIN_TRANSACTION_SIZE:
        raise InvalidTransactionError(f"Serialized transaction is {len(payload)} bytes, shorter than its {MIN_TRANSACTION_SIZE} byte header")
    return payload


def get_signing_data(payload: bytes) -> bytes:
    """
    The part of a serialized transaction covered by the signature, i.e. everything after the header.
    """
    return payload[HEADER_SIZE:]


def get_transaction_type(payload: bytes) -> int:
    return struct.unpack_from("<H", payload, TYPE_OFFSET)[0]


def get_network_type(payload: bytes) -> int:
    return payload[NETWORK_OFFSET]


class SignedPayloadTemplate(object):
    """
    A serialized transaction with its signature and signer slots left open.

    The slots are filled in with the signature produced by the device and the signer public key
    to get the payload that is announced to the network.
    """

    def __init__(self, payload: bytes) -> None:
        """
        :param payload: The serialized (unsigned) transaction
        """
        if len(payload) < MIN_TRANSACTION_SIZE:
            raise InvalidTransactionError("Serialized transaction is shorter than its header")
        self.size_prefix: bytes = payload[:SIGNATURE_OFFSET]
        self.body: bytes = payload[BODY_OFFSET:]

    def fill(self, signature: bytes, signer_public_key: bytes) -> bytes:
        """
        Build the signed payload.

        :param signature: The 64 byte signature
        :param signer_public_key: The 32 byte public key of the signer
        :return: The signed payload, the same length as the original
        """
        if len(signature) != SIGNATURE_SIZE:
            raise InvalidTransactionError(f"Signature must be {SIGNATURE_SIZE} bytes, got {len(signature)}")
        if len(signer_public_key) != PUBLIC_KEY_SIZE:
            raise InvalidTransactionError(f"Signer public key must be {PUBLIC_KEY_SIZE} bytes, got {len(signer_public_key)}")
        return self.size_prefix + signature + signer_public_key + self.body


def transaction_hash(payload: bytes, generation_hash: bytes) -> bytes:
    """
    Compute the hash of a signed transaction.

    The hash covers the signature, the signer, the network generation hash and the signing data.
    For aggregate transactions only the aggregate header is included in the signing data
    so that adding cosignatures does not change the hash.

    :param payload: The signed payload
    :param generation_hash: The generation hash of the network
    :return: The 32 byte transaction hash
    """
    data = get_signing_data(payload)
    if get_transaction_type(payload) in (AGGREGATE_COMPLETE, AGGREGATE_BONDED):
        data = data[:AGGREGATE_HASHED_BODY_SIZE]
    return sha3_256(payload[SIGNATURE_OFFSET:BODY_OFFSET] + generation_hash + data)


@dataclass(frozen=True)
class SignedTransaction:
    """
    A transaction signed by the device, ready to be announced.
    """
    payload: str
    hash: str
    signer_public_key: str
    type: int
    network_type: int

    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class CosignatureSignedTransaction:
    """
    A cosignature of an aggregate transaction, ready to be announced.
    """
    parent_hash: str
    signature: str
    signer_public_key: str

    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class SigningFailure:
    """
    The outcome of a signing call whose exchange with the device failed.

    Returned in place of a signed result, never alongside one.
    """
    error: HWWError

    def is_success(self) -> bool:
        return False

    def raise_error(self) -> None:
        raise self.error


SignTransactionResult = Union[SignedTransaction, SigningFailure]
SignCosignatureResult = Union[CosignatureSignedTransaction, SigningFailure]
