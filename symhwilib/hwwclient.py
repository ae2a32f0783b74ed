"""
Hardware Wallet Client Interface
********************************

The :class:`HardwareWalletClient` is the class which the specific device implementations subclass.
"""

from typing import (
    Optional,
)

from .common import NetworkType
from .key import get_symbol_account_path
from .transaction import (
    CosignatureSignedTransaction,
    SignedTransaction,
    TransactionLike,
)


class HardwareWalletClient(object):
    """Create a client for a device that has already been opened.

    This abstract class defines the methods
    that hardware wallet subclasses should implement.
    """

    def __init__(self, path: str, network: NetworkType = NetworkType.MAIN_NET) -> None:
        """
        :param path: Path to the device as returned by :func:`~symhwilib.commands.enumerate`
        :param network: The Symbol network the accounts are used on
        """
        self.path = path
        self.network = network

    def get_app_version(self) -> str:
        """
        Get the version of the Symbol app running on the device.

        :return: The version as ``major.minor.patch``
        """
        raise NotImplementedError("The HardwareWalletClient base class "
                                  "does not implement this method")

    def is_app_supported(self) -> bool:
        """
        Whether the Symbol app on the device is recent enough to be used.
        """
        raise NotImplementedError("The HardwareWalletClient base class "
                                  "does not implement this method")

    def get_public_key_at_path(self, path: str, display: bool = False) -> str:
        """
        Get the public key of the account at the derivation path.

        :param path: The derivation path
        :param display: Whether to show the address on the device for confirmation
        :return: The public key as hex
        """
        raise NotImplementedError("The HardwareWalletClient base class "
                                  "does not implement this method")

    def get_account_public_key(self, account: int = 0, display: bool = False) -> str:
        """
        Get the public key of an account at the default Symbol derivation path.

        :param account: The account index
        :param display: Whether to show the address on the device for confirmation
        :return: The public key as hex
        """
        return self.get_public_key_at_path(get_symbol_account_path(account), display)

    def sign_tx(
        self,
        path: str,
        transaction: TransactionLike,
        generation_hash: str,
        signer_public_key: Optional[str] = None,
    ) -> SignedTransaction:
        """
        Sign a transaction.

        :param path: The derivation path of the signing account
        :param transaction: The transaction to sign
        :param generation_hash: The generation hash of the network
        :param signer_public_key: The public key of the signing account. Fetched from the device if not given.
        :return: The signed transaction
        """
        raise NotImplementedError("The HardwareWalletClient base class "
                                  "does not implement this method")

    def sign_cosignature(
        self,
        path: str,
        transaction: TransactionLike,
        signer_public_key: Optional[str] = None,
    ) -> CosignatureSignedTransaction:
        """
        Cosign an announced aggregate transaction.

        :param path: The derivation path of the cosigning account
        :param transaction: The aggregate transaction, with its transaction info
        :param signer_public_key: The public key of the cosigning account. Fetched from the device if not given.
        :return: The cosignature
        """
        raise NotImplementedError("The HardwareWalletClient base class "
                                  "does not implement this method")

    def close(self) -> None:
        """
        Close the device.
        """
        raise NotImplementedError("The HardwareWalletClient base class "
                                  "does not implement this method")
