"""ledgercomm.interfaces.hid_device module."""

from typing import Any, Dict, List, Optional, Tuple

import hid

from .comm import Comm
from ..log import LOG

LEDGER_VENDOR_ID = 0x2C97

# Every HID report is 64 bytes: channel (2), tag (1), sequence index (2), payload
HID_REPORT_SIZE = 64
HID_CHANNEL = b"\x01\x01"
HID_TAG_APDU = 0x05
HID_HEADER_SIZE = 5


def is_ledger_interface(hid_device: Dict[str, Any]) -> bool:
    """Whether an entry of ``hid.enumerate`` is the APDU interface of a Ledger."""
    # MacOS does not report interface numbers, only the usage page
    return (hid_device.get("interface_number") == 0
            or hid_device.get("usage_page") == 0xffa0)


def wrap_apdu(apdu: bytes) -> List[bytes]:
    """Split an APDU into HID reports.

    The APDU is prefixed with its length on 2 bytes, then cut into pieces
    that each fit in one report after the report header. The last report
    is padded with zeros.
    """
    data = len(apdu).to_bytes(2, byteorder="big") + apdu
    room = HID_REPORT_SIZE - HID_HEADER_SIZE
    reports = []
    for seq_idx, offset in enumerate(range(0, len(data), room)):
        header = HID_CHANNEL + bytes([HID_TAG_APDU]) + seq_idx.to_bytes(2, byteorder="big")
        reports.append((header + data[offset:offset + room]).ljust(HID_REPORT_SIZE, b"\x00"))
    return reports


class HID(Comm):
    """HID class.

    Used to communicate with a Ledger Nano through USB.

    Parameters
    ----------
    hid_path : Optional[bytes]
        Path of the HID device. The first Ledger found is used when not given.
    vendor_id : int
        Vendor ID of the device. Default to Ledger Vendor ID 0x2C97.

    """

    def __init__(self, hid_path: Optional[bytes] = None, vendor_id: int = LEDGER_VENDOR_ID) -> None:
        self.device = hid.device()
        self.path: Optional[bytes] = hid_path
        self.vendor_id: int = vendor_id
        self.__opened: bool = False

    def open(self) -> None:
        if not self.__opened:
            if self.path is None:
                devices = HID.enumerate_devices(self.vendor_id)
                if not devices:
                    raise OSError(f"Can't find Ledger device with vendor_id {hex(self.vendor_id)}")
                self.path = devices[0]
            self.device.open_path(self.path)
            self.device.set_nonblocking(True)
            self.__opened = True

    @staticmethod
    def enumerate_devices(vendor_id: int = LEDGER_VENDOR_ID) -> List[bytes]:
        """Paths of the HID interfaces of the connected Ledger devices."""
        return [d["path"] for d in hid.enumerate(vendor_id, 0) if is_ledger_interface(d)]

    def _read_report(self, seq_idx: int) -> bytes:
        report = bytes(self.device.read(HID_REPORT_SIZE + 1, timeout_ms=0 if seq_idx == 0 else 1000))
        if (report[:2] != HID_CHANNEL or report[2] != HID_TAG_APDU
                or int.from_bytes(report[3:5], byteorder="big") != seq_idx):
            raise OSError("Unexpected HID report from the device")
        return report[HID_HEADER_SIZE:]

    def exchange(self, apdu: bytes) -> Tuple[int, bytes]:
        """Send `apdu` to the device and read back its answer.

        Blocking IO.

        Returns
        -------
        Tuple[int, bytes]
            A pair (sw, rdata) containing the status word and response data.

        """
        if not apdu:
            raise ValueError("Can't send empty data!")

        LOG.debug("=> %s", apdu.hex())
        for report in wrap_apdu(apdu):
            self.device.write(b"\x00" + report)

        self.device.set_nonblocking(False)
        try:
            data = self._read_report(0)
            data_len = int.from_bytes(data[:2], byteorder="big")
            data = data[2:]
            seq_idx = 1
            while len(data) < data_len:
                data += self._read_report(seq_idx)
                seq_idx += 1
        finally:
            self.device.set_nonblocking(True)

        sw: int = int.from_bytes(data[data_len - 2:data_len], byteorder="big")
        rdata: bytes = data[:data_len - 2]

        LOG.debug("<= %s %04x", rdata.hex(), sw)

        return sw, rdata

    def close(self) -> None:
        if self.__opened:
            self.device.close()
            self.__opened = False
