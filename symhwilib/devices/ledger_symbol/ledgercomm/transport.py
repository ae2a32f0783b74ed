"""ledgercomm.transport module."""

import enum
import logging
import struct
from typing import Union, Tuple, Optional

from .interfaces.comm import Comm
from .log import LOG


class TransportType(enum.Enum):
    """Type of interface available."""

    HID = 1
    TCP = 2


class Transport:
    """Transport class to exchange APDUs.

    Talks to a Ledger Nano through HID, or to the Speculos emulator through a
    TCP socket.

    Parameters
    ----------
    interface : str
        Either "hid" or "tcp" for the underlying communication interface.
    server : str
        IP adress of the TCP server if interface is "tcp".
    port : int
        Port of the TCP server if interface is "tcp".
    hid_path : Optional[bytes]
        Path of the HID device if interface is "hid".
    debug : bool
        Whether you want debug logs or not.

    Attributes
    ----------
    interface : TransportType
        Either TransportType.HID or TransportType.TCP.
    com : Comm
        Communication interface to send/receive APDUs.

    """

    def __init__(self,
                 interface: str = "tcp",
                 server: str = "127.0.0.1",
                 port: int = 9999,
                 hid_path: Optional[bytes] = None,
                 debug: bool = False) -> None:
        if debug:
            LOG.setLevel(logging.DEBUG)

        try:
            self.interface: TransportType = TransportType[interface.upper()]
        except KeyError as exc:
            raise ValueError(f"Unknown interface '{interface}'!") from exc

        self.com: Comm
        if self.interface == TransportType.TCP:
            from .interfaces.tcp_client import TCPClient
            self.com = TCPClient(server=server, port=port)
        else:
            from .interfaces.hid_device import HID
            self.com = HID(hid_path=hid_path)

        self.com.open()

    @staticmethod
    def apdu_header(cla: int,
                    ins: Union[int, enum.IntEnum],
                    p1: int = 0,
                    p2: int = 0,
                    lc: int = 0) -> bytes:
        """Pack the APDU header as bytes.

        Parameters
        ----------
        cla : int
            Instruction class: CLA (1 byte)
        ins : Union[int, IntEnum]
            Instruction code: INS (1 byte)
        p1 : int
            Instruction parameter: P1 (1 byte).
        p2 : int
            Instruction parameter: P2 (1 byte).
        lc : int
            Number of bytes in the payload: Lc (1 byte).

        Returns
        -------
        bytes
            APDU header packed with parameters.

        """
        return struct.pack("BBBBB", cla, int(ins), p1, p2, lc)

    def exchange(self,
                 cla: int,
                 ins: Union[int, enum.IntEnum],
                 p1: int = 0,
                 p2: int = 0,
                 cdata: bytes = b"") -> Tuple[int, bytes]:
        """Send a structured APDU and wait for the answer from `self.com`.

        Returns
        -------
        Tuple[int, bytes]
            A pair (sw, rdata) for the status word (2 bytes represented
            as int) and the reponse data (bytes of variable lenght).

        """
        if len(cdata) > 0xFF:
            raise ValueError(f"APDU data is {len(cdata)} bytes, at most 255 fit in one command")

        header: bytes = Transport.apdu_header(cla, ins, p1, p2, len(cdata))

        return self.com.exchange(header + cdata)

    def close(self) -> None:
        self.com.close()
