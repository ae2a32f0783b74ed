#! /usr/bin/env python3

"""
Commands
********

The functions in this module are the primary way to interact with hardware wallets.
Each function that takes a ``client`` uses a :class:`~symhwilib.hwwclient.HardwareWalletClient`.
The functions then call public members of that client to retrieve the data needed.

Clients can be constructed using :func:`~find_device` or :func:`~get_client`.

The :func:`~enumerate` function returns information about what devices are available to be connected to.
These information can then be used with :func:`~find_device` or :func:`~get_client` to get a :class:`~symhwilib.hwwclient.HardwareWalletClient`.
"""

import importlib
import logging

from .errors import (
    UnknownDeviceError,
)
from .devices import __all__ as all_devs
from .common import NetworkType
from .hwwclient import HardwareWalletClient
from .transaction import RawTransaction

from typing import (
    Any,
    Dict,
    List,
    Optional,
    Union,
)


# Get the client for the device
def get_client(device_type: str, device_path: str, network: NetworkType = NetworkType.MAIN_NET) -> Optional[HardwareWalletClient]:
    """
    Returns a HardwareWalletClient for the given device type at the device path

    :param device_type: The type of device
    :param device_path: The path specifying where the device can be accessed as returned by :func:`~enumerate`
    :param network: The Symbol network this client will be using
    :return: A :class:`~symhwilib.hwwclient.HardwareWalletClient` to interact with the device
    :raises: UnknownDeviceError: if the device type is not known
    """

    device_type = device_type.split('_')[0]
    class_name = device_type.capitalize()
    module = device_type.lower()

    try:
        imported_dev = importlib.import_module('.devices.' + module, __package__)
        client_constructor = getattr(imported_dev, class_name + 'Client')
    except (ImportError, AttributeError):
        raise UnknownDeviceError('Unknown device type specified')

    return client_constructor(device_path, network)

# Get a list of all available hardware wallets
def enumerate(allow_emulators: bool = False) -> List[Dict[str, Any]]:
    """
    Enumerate all of the devices that symhwi can potentially access.

    :param allow_emulators: Whether to look for emulators too
    :return: A list of devices for which clients can be created for.
    """

    result: List[Dict[str, Any]] = []

    for module in all_devs:
        try:
            imported_dev = importlib.import_module('.devices.' + module, __package__)
            result.extend(imported_dev.enumerate(allow_emulators)) # type: ignore
        except ImportError as e:
            # Warn for ImportErrors, but largely ignore them to allow users not install
            # all device dependencies if only one or some devices are wanted.
            logging.warning(f"{e}, required for {module}. Ignore if you do not want this device.")
    return result

# Device type required
def find_device(
    device_type: Optional[str] = None,
    network: NetworkType = NetworkType.MAIN_NET,
    allow_emulators: bool = False,
) -> Optional[HardwareWalletClient]:
    """
    Find a device from the device type and get a client to access it.
    This is used as an alternative to :func:`~get_client` if the device path is not known.
    The first device found that does not report an error is used.

    :param device_type: The type of device. The client returned will be for this type of device.
        If not provided, any device type may be returned.
    :param network: The Symbol network the client will be using
    :param allow_emulators: Whether to consider emulators too
    :return: A client to interact with the found device, or None
    """

    devices = enumerate(allow_emulators)
    for d in devices:
        if device_type is not None and d['type'] != device_type and d['model'] != device_type:
            continue
        if 'error' in d:
            continue
        return get_client(d['type'], d['path'], network)
    return None

def getversion(client: HardwareWalletClient) -> Dict[str, Union[str, bool]]:
    """
    Get the version of the Symbol app on the device.

    :param client: The client to interact with
    :return: A dictionary containing the key ``version``, and ``supported``, whether this version can be used.
    """
    version = client.get_app_version()
    return {"version": version, "supported": client.is_app_supported()} # type: ignore

def getaccount(client: HardwareWalletClient, path: Optional[str] = None, account: int = 0, display: bool = False) -> Dict[str, str]:
    """
    Get the public key of an account.

    :param client: The client to interact with
    :param path: The derivation path of the account. The default Symbol path for ``account`` is used if not given.
    :param account: The account index, used when ``path`` is not given
    :param display: Whether to show the address on the device for confirmation
    :return: A dictionary containing the key ``public_key``
    """
    if path is None:
        return {"public_key": client.get_account_public_key(account, display)}
    return {"public_key": client.get_public_key_at_path(path, display)}

def signtx(
    client: HardwareWalletClient,
    path: str,
    transaction: str,
    generation_hash: str,
    signer_public_key: Optional[str] = None,
) -> Dict[str, Union[int, str]]:
    """
    Sign a serialized transaction.

    :param client: The client to interact with
    :param path: The derivation path of the signing account
    :param transaction: The serialized transaction, as hex
    :param generation_hash: The generation hash of the network
    :param signer_public_key: The public key of the signing account; queried from the device if not given
    :return: A dictionary containing the keys ``payload``, ``hash``, ``signer_public_key``, ``type`` and ``network_type``
    """
    signed = client.sign_tx(path, RawTransaction.from_hex(transaction), generation_hash, signer_public_key)
    return {
        "payload": signed.payload,
        "hash": signed.hash,
        "signer_public_key": signed.signer_public_key,
        "type": signed.type,
        "network_type": signed.network_type,
    }

def cosigntx(
    client: HardwareWalletClient,
    path: str,
    transaction: str,
    transaction_hash: str,
    signer_public_key: Optional[str] = None,
) -> Dict[str, str]:
    """
    Cosign an announced aggregate transaction.

    :param client: The client to interact with
    :param path: The derivation path of the cosigning account
    :param transaction: The serialized aggregate transaction, as hex
    :param transaction_hash: The hash of the aggregate transaction
    :param signer_public_key: The public key of the cosigning account; queried from the device if not given
    :return: A dictionary containing the keys ``parent_hash``, ``signature`` and ``signer_public_key``
    """
    cosignature = client.sign_cosignature(path, RawTransaction.from_hex(transaction, transaction_hash), signer_public_key)
    return {
        "parent_hash": cosignature.parent_hash,
        "signature": cosignature.signature,
        "signer_public_key": cosignature.signer_public_key,
    }
