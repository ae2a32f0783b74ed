"""APDU transport to Ledger devices over HID or to the Speculos emulator over TCP."""

from .transport import Transport, TransportType

__all__ = ["Transport", "TransportType"]
