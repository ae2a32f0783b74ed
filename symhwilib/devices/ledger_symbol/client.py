import logging
from typing import Optional, Union

import semver

from ...common import NetworkType, hex_to_bytes
from ...errors import (
    BadArgumentError,
    InvalidTransactionError,
    TransportFailureError,
    UnsupportedAppVersionError,
)
from ...key import parse_path
from ...transaction import (
    GENERATION_HASH_SIZE,
    PUBLIC_KEY_SIZE,
    TRANSACTION_HASH_SIZE,
    CosignatureSignedTransaction,
    SignCosignatureResult,
    SignedPayloadTemplate,
    SignedTransaction,
    SigningFailure,
    SignTransactionResult,
    TransactionHasher,
    TransactionLike,
    get_network_type,
    get_signing_data,
    get_transaction_type,
    serialize_transaction,
    transaction_hash,
)
from .chunk_session import ChunkSession
from .client_base import ApduTransport
from .command_builder import SymbolCommandBuilder
from .response_parser import (
    parse_app_version,
    parse_public_key,
    parse_signature,
)

#: Oldest Symbol app this client can talk to
MIN_SUPPORTED_VERSION = semver.VersionInfo(0, 0, 4)

logger = logging.getLogger(__name__)


def _decode_fixed_hex(value: Union[str, bytes], size: int, name: str) -> bytes:
    try:
        b = hex_to_bytes(value, name)
    except ValueError as e:
        raise BadArgumentError(str(e))
    if len(b) != size:
        raise BadArgumentError(f"{name} must be {size} bytes, got {len(b)}")
    return b


class SymbolClient:
    """
    Client for the Symbol app on a Ledger device.

    Calls must not overlap: the device handles one exchange at a time and keeps state
    between the chunks of a transaction, so callers sharing a transport have to serialize their calls.

    :param transport: The transport to the device
    :param hasher: Computes transaction hashes from a signed payload and a generation hash
    """

    def __init__(self, transport: ApduTransport, hasher: TransactionHasher = transaction_hash) -> None:
        self.transport = transport
        self.hasher = hasher
        self.builder = SymbolCommandBuilder()

    def _exchange(self, apdu: dict) -> bytes:
        return self.transport.send(apdu["cla"], apdu["ins"], apdu["p1"], apdu["p2"], apdu["data"])

    def get_app_version(self) -> semver.VersionInfo:
        """
        Get the version of the Symbol app running on the device.

        :return: The major, minor and patch version
        """
        return parse_app_version(self._exchange(self.builder.get_app_version()))

    def is_app_supported(self) -> bool:
        """
        Whether the Symbol app on the device is at least :data:`MIN_SUPPORTED_VERSION`.

        Never raises: a device that cannot be queried is reported as unsupported.
        """
        try:
            version = self.get_app_version()
        except Exception as e:
            logger.warning("Could not get the Symbol app version: %s", e)
            return False
        return version >= MIN_SUPPORTED_VERSION

    def require_app_supported(self) -> None:
        """
        :raises: UnsupportedAppVersionError: if the Symbol app is older than :data:`MIN_SUPPORTED_VERSION`
        """
        version = self.get_app_version()
        if version < MIN_SUPPORTED_VERSION:
            raise UnsupportedAppVersionError(f"Symbol app version {version} is not supported, please update it to at least {MIN_SUPPORTED_VERSION}")

    def get_account(self, path: str, network_type: Union[NetworkType, int], display: bool = False) -> str:
        """
        Get the public key of the account at the given derivation path.

        :param path: The derivation path, e.g. ``44'/4343'/0'/0'/0'``
        :param network_type: The network the account is used on
        :param display: Whether the device should show the address and ask for confirmation
        :return: The public key as hex
        """
        if isinstance(network_type, NetworkType):
            network_type = network_type.value
        apdu = self.builder.get_account(parse_path(path), network_type, display)
        return parse_public_key(self._exchange(apdu))

    def _sign(self, path: str, payload: bytes) -> bytes:
        session = ChunkSession(self.transport, self.builder, parse_path(path), payload)
        logger.debug("Signing %d bytes in %d chunks", len(payload), len(session.frames))
        return session.run()

    def sign_transaction(
        self,
        path: str,
        transaction: TransactionLike,
        network_generation_hash: Union[str, bytes],
        signer_public_key: Union[str, bytes],
    ) -> SignTransactionResult:
        """
        Sign a transaction with the account at the given derivation path.

        The device signs the network generation hash followed by the transaction data.
        Its signature and the signer public key are then spliced into the serialized transaction.

        :param path: The derivation path of the signing account
        :param transaction: The transaction to sign
        :param network_generation_hash: The generation hash of the network, as hex
        :param signer_public_key: The public key of the signing account, as hex
        :return: The signed transaction, or a :class:`~symhwilib.transaction.SigningFailure` if the device exchange failed
        """
        generation_hash = _decode_fixed_hex(network_generation_hash, GENERATION_HASH_SIZE, "Network generation hash")
        public_key = _decode_fixed_hex(signer_public_key, PUBLIC_KEY_SIZE, "Signer public key")
        raw_payload = serialize_transaction(transaction)

        try:
            response = self._sign(path, generation_hash + get_signing_data(raw_payload))
        except TransportFailureError as e:
            logger.error("Signing the transaction failed: %s", e)
            return SigningFailure(e)

        signature = bytes.fromhex(parse_signature(response))
        payload = SignedPayloadTemplate(raw_payload).fill(signature, public_key)
        return SignedTransaction(
            payload=payload.hex().upper(),
            hash=self.hasher(payload, generation_hash).hex().upper(),
            signer_public_key=public_key.hex().upper(),
            type=get_transaction_type(payload),
            network_type=get_network_type(payload),
        )

    def sign_cosignature_transaction(
        self,
        path: str,
        aggregate_transaction: TransactionLike,
        signer_public_key: Union[str, bytes],
        transaction_hash: Optional[Union[str, bytes]] = None,
    ) -> SignCosignatureResult:
        """
        Cosign an announced aggregate transaction with the account at the given derivation path.

        The device signs the hash of the aggregate followed by the transaction data.

        :param path: The derivation path of the cosigning account
        :param aggregate_transaction: The aggregate transaction to cosign
        :param signer_public_key: The public key of the cosigning account, as hex
        :param transaction_hash: The hash of the aggregate; taken from ``aggregate_transaction.transaction_info`` if not given
        :return: The cosignature, or a :class:`~symhwilib.transaction.SigningFailure` if the device exchange failed
        """
        if transaction_hash is None:
            info = getattr(aggregate_transaction, "transaction_info", None)
            if info is None:
                raise InvalidTransactionError("Aggregate transaction has no hash, it must be announced before it can be cosigned")
            transaction_hash = info.hash
        parent_hash = _decode_fixed_hex(transaction_hash, TRANSACTION_HASH_SIZE, "Aggregate transaction hash")
        public_key = _decode_fixed_hex(signer_public_key, PUBLIC_KEY_SIZE, "Signer public key")
        raw_payload = serialize_transaction(aggregate_transaction)

        try:
            response = self._sign(path, parent_hash + get_signing_data(raw_payload))
        except TransportFailureError as e:
            logger.error("Cosigning the aggregate transaction failed: %s", e)
            return SigningFailure(e)

        return CosignatureSignedTransaction(
            parent_hash=parent_hash.hex().upper(),
            signature=parse_signature(response).upper(),
            signer_public_key=public_key.hex().upper(),
        )
