#! /usr/bin/env python3

import unittest
from unittest import mock

from fake_device import (
    GENERATION_HASH,
    PATH,
    PUBLIC_KEY,
    SIGNATURE,
    FakeSymbolDevice,
    make_transaction,
)

from symhwilib._cli import process_commands
from symhwilib.common import NetworkType
from symhwilib.devices.ledger import LedgerClient
from symhwilib.errors import (
    ACTION_CANCELED,
    BAD_ARGUMENT,
    DEVICE_CONN_ERROR,
    INVALID_PATH,
    INVALID_TX,
    UNKNOWN_DEVICE_TYPE,
    UNSUPPORTED_APP,
    ActionCanceledError,
)
from symhwilib.transaction import AGGREGATE_BONDED

DEV_ARGS = ['-d', 'tcp:127.0.0.1:9999', '--network', 'test_net']

class TestCLI(unittest.TestCase):
    def setUp(self):
        self.device = FakeSymbolDevice()
        patcher = mock.patch("symhwilib._cli.get_client", side_effect=self.get_client)
        self.get_client_mock = patcher.start()
        self.addCleanup(patcher.stop)

    def get_client(self, device_type, device_path, network):
        return LedgerClient(device_path, network, transport_client=self.device)

    def test_getversion(self):
        self.assertEqual(process_commands(DEV_ARGS + ['getversion']), {'version': '0.0.4', 'supported': True})
        self.get_client_mock.assert_called_once_with('ledger', 'tcp:127.0.0.1:9999', NetworkType.TEST_NET)
        self.assertTrue(self.device.stopped)

    def test_getaccount(self):
        self.assertEqual(process_commands(DEV_ARGS + ['getaccount']), {'public_key': PUBLIC_KEY.hex()})
        self.assertEqual(process_commands(DEV_ARGS + ['getaccount', '--path', PATH, '--display']), {'public_key': PUBLIC_KEY.hex()})
        self.assertEqual(self.device.sent[-1]['p1'], 0x01)

    def test_getaccount_bad_path(self):
        result = process_commands(DEV_ARGS + ['getaccount', '--path', "44'/4343'/x"])
        self.assertEqual(result['code'], INVALID_PATH)

    def test_signtx(self):
        tx = make_transaction(400)
        result = process_commands(DEV_ARGS + ['signtx', PATH, tx.hex(), GENERATION_HASH.hex()])
        self.assertEqual(set(result.keys()), {'payload', 'hash', 'signer_public_key', 'type', 'network_type'})
        self.assertEqual(result['payload'][16:144], SIGNATURE.hex().upper())
        self.assertEqual(result['signer_public_key'], PUBLIC_KEY.hex().upper())
        self.assertEqual(result['type'], 0x4154)
        self.assertEqual(result['network_type'], 0x98)

    def test_signtx_invalid(self):
        result = process_commands(DEV_ARGS + ['signtx', PATH, 'nothex', GENERATION_HASH.hex()])
        self.assertEqual(result['code'], INVALID_TX)
        result = process_commands(DEV_ARGS + ['signtx', PATH, '00' * 50, GENERATION_HASH.hex()])
        self.assertEqual(result['code'], INVALID_TX)
        result = process_commands(DEV_ARGS + ['signtx', PATH, make_transaction(200).hex(), 'abcd'])
        self.assertEqual(result['code'], BAD_ARGUMENT)

    def test_signtx_rejected(self):
        self.device.fail_on = (3, ActionCanceledError("Denied by the user"))
        result = process_commands(DEV_ARGS + ['signtx', PATH, make_transaction(200).hex(), GENERATION_HASH.hex()])
        self.assertEqual(result, {'error': 'Denied by the user', 'code': ACTION_CANCELED})

    def test_signtx_old_app(self):
        self.device.version = (0, 0, 1)
        result = process_commands(DEV_ARGS + ['signtx', PATH, make_transaction(200).hex(), GENERATION_HASH.hex()])
        self.assertEqual(result['code'], UNSUPPORTED_APP)

    def test_cosigntx(self):
        tx = make_transaction(200, tx_type=AGGREGATE_BONDED)
        result = process_commands(DEV_ARGS + ['cosigntx', PATH, tx.hex(), 'ab' * 32, '--signer-public-key', PUBLIC_KEY.hex()])
        self.assertEqual(result, {
            'parent_hash': 'AB' * 32,
            'signature': SIGNATURE.hex().upper(),
            'signer_public_key': PUBLIC_KEY.hex().upper(),
        })

    def test_missing_arguments(self):
        with self.assertRaises(SystemExit):
            process_commands(DEV_ARGS + ['signtx', PATH])
        with self.assertRaises(SystemExit):
            process_commands(DEV_ARGS)

class TestCLIDevices(unittest.TestCase):
    @mock.patch("symhwilib._cli.enumerate")
    def test_enumerate(self, enumerate):
        enumerate.return_value = [{'type': 'ledger', 'path': 'tcp:127.0.0.1:9999'}]
        self.assertEqual(process_commands(['--emulators', 'enumerate']), enumerate.return_value)
        enumerate.assert_called_once_with(allow_emulators=True)

    @mock.patch("symhwilib._cli.find_device")
    def test_no_device(self, find_device):
        find_device.return_value = None
        result = process_commands(['getversion'])
        self.assertEqual(result['code'], DEVICE_CONN_ERROR)
        find_device.assert_called_once_with(None, NetworkType.MAIN_NET, False)

    def test_unknown_device_type(self):
        result = process_commands(['-t', 'nosuchwallet', '-d', '/dev/null', 'getversion'])
        self.assertEqual(result['code'], UNKNOWN_DEVICE_TYPE)

    @mock.patch("symhwilib.devices.ledger_symbol.client_base.Transport")
    def test_cannot_connect(self, transport):
        transport.side_effect = ConnectionRefusedError("Connection refused")
        result = process_commands(['-d', 'tcp:127.0.0.1:1', 'getversion'])
        self.assertEqual(result, {'error': 'Unable to open the device: Connection refused', 'code': DEVICE_CONN_ERROR})
        self.assertEqual(transport.call_args[0], ('tcp', '127.0.0.1', 1))


if __name__ == "__main__":
    unittest.main()
