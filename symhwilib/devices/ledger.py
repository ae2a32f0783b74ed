"""
Ledger Devices
**************
"""

from functools import wraps
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Optional,
)

from ..hwwclient import HardwareWalletClient
from ..errors import (
    BadArgumentError,
    DeviceConnectionError,
    common_err_msgs,
    handle_errors,
)
from ..common import NetworkType
from .ledger_symbol import (
    MIN_SUPPORTED_VERSION,
    SymbolClient,
    TransportClient,
)
from .ledger_symbol.ledgercomm.interfaces.hid_device import LEDGER_VENDOR_ID, is_ledger_interface
from ..transaction import (
    CosignatureSignedTransaction,
    SignedTransaction,
    SigningFailure,
    TransactionLike,
)

import hid
import logging

SIMULATOR_PATH = 'tcp:127.0.0.1:9999'

LEDGER_MODEL_IDS = {
    0x10: "ledger_nano_s",
    0x40: "ledger_nano_x",
    0x50: "ledger_nano_s_plus",
    0x60: "ledger_stax",
    0x70: "ledger_flex"
}
LEDGER_LEGACY_PRODUCT_IDS = {
    0x0001: "ledger_nano_s",
    0x0004: "ledger_nano_x"
}


def ledger_exception(f: Callable[..., Any]) -> Any:
    @wraps(f)
    def func(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except ValueError as e:
            raise BadArgumentError(str(e))
    return func


def open_transport(path: str, debug: bool = False) -> TransportClient:
    """
    Open the transport for a device path: ``tcp:<host>:<port>`` for the emulator, an HID path otherwise.
    """
    if path.startswith('tcp'):
        split_path = path.split(':')
        if len(split_path) != 3 or not split_path[2].isdigit():
            raise BadArgumentError(f"Emulator path must look like tcp:<host>:<port>, got {path}")
        return TransportClient(interface="tcp", server=split_path[1], port=int(split_path[2]), debug=debug)
    return TransportClient(interface="hid", hid_path=path.encode(), debug=debug)


# This class extends the HardwareWalletClient for the Symbol app on Ledger devices
class LedgerClient(HardwareWalletClient):

    def __init__(self, path: str, network: NetworkType = NetworkType.MAIN_NET, transport_client: Optional[TransportClient] = None) -> None:
        super(LedgerClient, self).__init__(path, network)

        is_debug = logging.getLogger().getEffectiveLevel() == logging.DEBUG

        self.transport_client = transport_client if transport_client is not None else open_transport(path, is_debug)
        self.client = SymbolClient(self.transport_client)

    @ledger_exception
    def get_app_version(self) -> str:
        return str(self.client.get_app_version())

    def is_app_supported(self) -> bool:
        return self.client.is_app_supported()

    @ledger_exception
    def get_public_key_at_path(self, path: str, display: bool = False) -> str:
        return self.client.get_account(path, self.network, display)

    @ledger_exception
    def sign_tx(
        self,
        path: str,
        transaction: TransactionLike,
        generation_hash: str,
        signer_public_key: Optional[str] = None,
    ) -> SignedTransaction:
        self.client.require_app_supported()
        if signer_public_key is None:
            signer_public_key = self.get_public_key_at_path(path)
        result = self.client.sign_transaction(path, transaction, generation_hash, signer_public_key)
        if isinstance(result, SigningFailure):
            result.raise_error()
        assert isinstance(result, SignedTransaction)
        return result

    @ledger_exception
    def sign_cosignature(
        self,
        path: str,
        transaction: TransactionLike,
        signer_public_key: Optional[str] = None,
    ) -> CosignatureSignedTransaction:
        self.client.require_app_supported()
        if signer_public_key is None:
            signer_public_key = self.get_public_key_at_path(path)
        result = self.client.sign_cosignature_transaction(path, transaction, signer_public_key)
        if isinstance(result, SigningFailure):
            result.raise_error()
        assert isinstance(result, CosignatureSignedTransaction)
        return result

    def close(self) -> None:
        self.transport_client.stop()


def enumerate(allow_emulators: bool = False) -> List[Dict[str, Any]]:
    results = []
    devices = []
    devices.extend(hid.enumerate(LEDGER_VENDOR_ID, 0))
    if allow_emulators:
        devices.append({'path': SIMULATOR_PATH.encode(), 'interface_number': 0, 'product_id': 0x1000})

    for d in devices:
        if not is_ledger_interface(d):
            continue
        d_data: Dict[str, Any] = {}

        path = d['path'].decode()
        d_data['type'] = 'ledger'
        model = d['product_id'] >> 8
        if model in LEDGER_MODEL_IDS.keys():
            d_data['model'] = LEDGER_MODEL_IDS[model]
        elif d['product_id'] in LEDGER_LEGACY_PRODUCT_IDS.keys():
            d_data['model'] = LEDGER_LEGACY_PRODUCT_IDS[d['product_id']]
        else:
            continue
        d_data['path'] = path

        if path == SIMULATOR_PATH:
            d_data['model'] += '_simulator'

        client = None
        with handle_errors(common_err_msgs["enumerate"], d_data):
            try:
                client = LedgerClient(path)
                d_data['app_version'] = client.get_app_version()
                d_data['app_supported'] = client.is_app_supported()
                d_data['min_app_version'] = str(MIN_SUPPORTED_VERSION)
            except DeviceConnectionError:
                # Ignore simulator if there's an exception, means it isn't there
                if path == SIMULATOR_PATH:
                    continue
                raise
            finally:
                if client:
                    client.close()

        results.append(d_data)
    return results
