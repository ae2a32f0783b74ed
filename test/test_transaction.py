#! /usr/bin/env python3

import hashlib
import unittest

from fake_device import (
    GENERATION_HASH,
    PUBLIC_KEY,
    SIGNATURE,
    TRANSFER,
    make_transaction,
)

from symhwilib.errors import ActionCanceledError, InvalidTransactionError
from symhwilib.transaction import (
    AGGREGATE_BONDED,
    AGGREGATE_COMPLETE,
    MIN_TRANSACTION_SIZE,
    RawTransaction,
    SignedPayloadTemplate,
    SigningFailure,
    TransactionInfo,
    get_network_type,
    get_signing_data,
    get_transaction_type,
    serialize_transaction,
    transaction_hash,
)

class HexTransaction(object):
    def __init__(self, payload):
        self.payload = payload

    def serialize(self):
        return self.payload.hex()

class TestSerialize(unittest.TestCase):
    def test_raw_bytes(self):
        tx = make_transaction(150)
        self.assertEqual(serialize_transaction(tx), tx)
        self.assertEqual(serialize_transaction(bytearray(tx)), tx)

    def test_serializable(self):
        tx = make_transaction(150)
        self.assertEqual(serialize_transaction(HexTransaction(tx)), tx)
        self.assertEqual(serialize_transaction(RawTransaction(tx)), tx)
        self.assertEqual(serialize_transaction(RawTransaction.from_hex(tx.hex().upper())), tx)

    def test_too_short(self):
        self.assertEqual(MIN_TRANSACTION_SIZE, 112)
        for size in [0, 107, 108, 110, 111]:
            with self.subTest(size=size):
                with self.assertRaises(InvalidTransactionError):
                    serialize_transaction(bytes(size))
        self.assertEqual(len(serialize_transaction(bytes(MIN_TRANSACTION_SIZE))), MIN_TRANSACTION_SIZE)

    def test_bad_hex(self):
        with self.assertRaises(InvalidTransactionError):
            RawTransaction.from_hex("not hex")
        bad = HexTransaction(b"")
        bad.serialize = lambda: "0g"  # type: ignore
        with self.assertRaises(InvalidTransactionError):
            serialize_transaction(bad)

    def test_transaction_info(self):
        self.assertIsNone(RawTransaction.from_hex("00").transaction_info)
        self.assertEqual(RawTransaction.from_hex("00", "AB" * 32).transaction_info, TransactionInfo("AB" * 32))

    def test_header_fields(self):
        tx = make_transaction(200, tx_type=AGGREGATE_COMPLETE, network=0x68)
        self.assertEqual(get_transaction_type(tx), 0x4141)
        self.assertEqual(get_network_type(tx), 0x68)
        self.assertEqual(get_signing_data(tx), tx[108:])

class TestSignedPayloadTemplate(unittest.TestCase):
    def test_fill(self):
        tx = make_transaction(200)
        signed = SignedPayloadTemplate(tx).fill(SIGNATURE, PUBLIC_KEY)
        self.assertEqual(len(signed), len(tx))
        self.assertEqual(signed[:8], tx[:8])
        self.assertEqual(signed[8:72], SIGNATURE)
        self.assertEqual(signed[72:104], PUBLIC_KEY)
        self.assertEqual(signed[104:], tx[104:])

    def test_wrong_sizes(self):
        template = SignedPayloadTemplate(make_transaction(200))
        with self.assertRaises(InvalidTransactionError):
            template.fill(SIGNATURE[:63], PUBLIC_KEY)
        with self.assertRaises(InvalidTransactionError):
            template.fill(SIGNATURE, PUBLIC_KEY + b"\x00")

    def test_short_payload(self):
        with self.assertRaises(InvalidTransactionError):
            SignedPayloadTemplate(bytes(100))
        with self.assertRaises(InvalidTransactionError):
            SignedPayloadTemplate(bytes(MIN_TRANSACTION_SIZE - 1))
        self.assertEqual(SignedPayloadTemplate(bytes(MIN_TRANSACTION_SIZE)).body, bytes(8))

class TestTransactionHash(unittest.TestCase):
    def test_hash(self):
        tx = SignedPayloadTemplate(make_transaction(200)).fill(SIGNATURE, PUBLIC_KEY)
        expected = hashlib.sha3_256(tx[8:104] + GENERATION_HASH + tx[108:]).digest()
        self.assertEqual(transaction_hash(tx, GENERATION_HASH), expected)

    def test_aggregate_hash(self):
        for tx_type in [AGGREGATE_COMPLETE, AGGREGATE_BONDED]:
            with self.subTest(tx_type=tx_type):
                tx = SignedPayloadTemplate(make_transaction(400, tx_type=tx_type)).fill(SIGNATURE, PUBLIC_KEY)
                expected = hashlib.sha3_256(tx[8:104] + GENERATION_HASH + tx[108:160]).digest()
                self.assertEqual(transaction_hash(tx, GENERATION_HASH), expected)

                # Cosignatures appended after the aggregate header leave the hash alone
                self.assertEqual(transaction_hash(tx + bytes(104), GENERATION_HASH), expected)

    def test_body_changes_hash(self):
        tx = make_transaction(400, tx_type=TRANSFER)
        self.assertNotEqual(transaction_hash(tx, GENERATION_HASH), transaction_hash(tx + b"\x00", GENERATION_HASH))
        self.assertNotEqual(transaction_hash(tx, GENERATION_HASH), transaction_hash(tx, bytes(32)))

class TestResults(unittest.TestCase):
    def test_failure(self):
        error = ActionCanceledError("Denied by the user")
        failure = SigningFailure(error)
        self.assertFalse(failure.is_success())
        with self.assertRaises(ActionCanceledError):
            failure.raise_error()


if __name__ == "__main__":
    unittest.main()
