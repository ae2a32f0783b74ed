#! /usr/bin/env python3

import unittest
from unittest import mock

from symhwilib.devices.ledger_symbol.ledgercomm import Transport, TransportType
from symhwilib.devices.ledger_symbol.ledgercomm.interfaces.hid_device import (
    HID,
    HID_REPORT_SIZE,
    is_ledger_interface,
    wrap_apdu,
)

def hid_report(seq_idx, payload):
    return (b"\x01\x01\x05" + seq_idx.to_bytes(2, "big") + payload).ljust(HID_REPORT_SIZE, b"\x00")

class TestTransport(unittest.TestCase):
    def test_apdu_header(self):
        self.assertEqual(Transport.apdu_header(0xE0, 0x04, 0x80, 0x80, 255), b"\xe0\x04\x80\x80\xff")
        self.assertEqual(Transport.apdu_header(0xE0, 0x06), b"\xe0\x06\x00\x00\x00")

    def test_unknown_interface(self):
        with self.assertRaises(ValueError):
            Transport("usb")

@mock.patch("symhwilib.devices.ledger_symbol.ledgercomm.interfaces.tcp_client.socket.socket")
class TestTCPClient(unittest.TestCase):
    def test_exchange(self, socket):
        sock = socket.return_value
        sock.recv.side_effect = [b"\x00\x00\x00\x04", b"\x00\x00", b"\x00\x04", b"\x90\x00"]

        transport = Transport("tcp", "127.0.0.1", 9999)
        self.assertEqual(transport.interface, TransportType.TCP)
        sock.connect.assert_called_once_with(("127.0.0.1", 9999))

        sw, rdata = transport.exchange(0xE0, 0x06, 0, 0, b"\x00")
        self.assertEqual(sw, 0x9000)
        self.assertEqual(rdata, b"\x00\x00\x00\x04")
        sock.sendall.assert_called_once_with(b"\x00\x00\x00\x06" + b"\xe0\x06\x00\x00\x01\x00")

    def test_too_much_data(self, socket):
        transport = Transport("tcp", "127.0.0.1", 9999)
        with self.assertRaises(ValueError):
            transport.exchange(0xE0, 0x04, 0, 0x80, bytes(256))
        socket.return_value.sendall.assert_not_called()

    def test_connection_closed(self, socket):
        socket.return_value.recv.side_effect = [b"\x00\x00", b""]
        transport = Transport("tcp", "127.0.0.1", 9999)
        with self.assertRaises(ConnectionError):
            transport.exchange(0xE0, 0x06, 0, 0, b"\x00")

    def test_connect_refused(self, socket):
        socket.return_value.connect.side_effect = ConnectionRefusedError("Connection refused")
        for _ in range(3):
            with self.assertRaises(ConnectionRefusedError):
                Transport("tcp", "127.0.0.1", 9999)
        self.assertEqual(socket.call_count, 3)
        self.assertEqual(socket.return_value.close.call_count, 3)

    def test_close(self, socket):
        transport = Transport("tcp", "127.0.0.1", 9999)
        transport.close()
        transport.close()
        socket.return_value.close.assert_called_once_with()

class TestHID(unittest.TestCase):
    def test_wrap_short(self):
        apdu = b"\xe0\x06\x00\x00\x01\x00"
        self.assertEqual(wrap_apdu(apdu), [hid_report(0, b"\x00\x06" + apdu)])

    def test_wrap_long(self):
        apdu = bytes(range(100))
        reports = wrap_apdu(apdu)
        self.assertEqual(len(reports), 2)
        self.assertTrue(all(len(r) == HID_REPORT_SIZE for r in reports))
        self.assertEqual(reports[0][3:5], b"\x00\x00")
        self.assertEqual(reports[1][3:5], b"\x00\x01")
        self.assertEqual((reports[0][5:] + reports[1][5:])[:102], b"\x00\x64" + apdu)

    def test_ledger_interface(self):
        self.assertTrue(is_ledger_interface({"interface_number": 0}))
        self.assertTrue(is_ledger_interface({"interface_number": -1, "usage_page": 0xffa0}))
        self.assertFalse(is_ledger_interface({"interface_number": 1, "usage_page": 0}))

    @mock.patch("symhwilib.devices.ledger_symbol.ledgercomm.interfaces.hid_device.hid.device")
    def test_exchange(self, device):
        dev = device.return_value
        response = b"\x20" + bytes(range(32)) + b"\x90\x00"
        framed = len(response).to_bytes(2, "big") + response
        dev.read.side_effect = [list(hid_report(0, framed[:59])), list(hid_report(1, framed[59:]))]

        hid_dev = HID(hid_path=b"1-1:1.0")
        hid_dev.open()
        dev.open_path.assert_called_once_with(b"1-1:1.0")

        apdu = b"\xe0\x02\x00\x80" + bytes(22)
        sw, rdata = hid_dev.exchange(apdu)
        self.assertEqual(sw, 0x9000)
        self.assertEqual(rdata, response[:-2])
        dev.write.assert_called_once_with(b"\x00" + wrap_apdu(apdu)[0])

    @mock.patch("symhwilib.devices.ledger_symbol.ledgercomm.interfaces.hid_device.hid.device")
    def test_unexpected_report(self, device):
        device.return_value.read.return_value = list(hid_report(1, b"\x00\x02\x90\x00"))
        hid_dev = HID(hid_path=b"1-1:1.0")
        hid_dev.open()
        with self.assertRaises(OSError):
            hid_dev.exchange(b"\xe0\x06\x00\x00\x01\x00")

    @mock.patch("symhwilib.devices.ledger_symbol.ledgercomm.interfaces.hid_device.hid.enumerate")
    def test_no_device(self, hid_enumerate):
        hid_enumerate.return_value = []
        with mock.patch("symhwilib.devices.ledger_symbol.ledgercomm.interfaces.hid_device.hid.device"):
            with self.assertRaises(OSError):
                HID().open()


if __name__ == "__main__":
    unittest.main()
