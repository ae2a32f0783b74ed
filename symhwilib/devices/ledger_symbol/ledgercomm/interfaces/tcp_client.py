"""ledgercomm.interfaces.tcp_client module."""

import socket
from typing import Tuple

from .comm import Comm
from ..log import LOG


class TCPClient(Comm):
    """TCPClient class.

    Talks to the APDU server of the Speculos emulator. Every APDU is sent
    prefixed with its length on 4 bytes (big endian); the reply is the length
    of the response data on 4 bytes, the data, then the 2 byte status word.

    Parameters
    ----------
    server : str
        IP address of the TCP server.
    port : int
        Port of the TCP server.

    """

    def __init__(self, server: str, port: int) -> None:
        self.server: str = server
        self.port: int = port
        self.socket: socket.socket
        self.__opened: bool = False

    def open(self) -> None:
        if not self.__opened:
            self.socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            try:
                self.socket.connect((self.server, self.port))
            except OSError:
                self.socket.close()
                raise
            self.__opened = True

    def _recv_exactly(self, size: int) -> bytes:
        buf = b""
        while len(buf) < size:
            chunk = self.socket.recv(size - len(buf))
            if not chunk:
                raise ConnectionError("Connection closed by the emulator")
            buf += chunk
        return buf

    def exchange(self, apdu: bytes) -> Tuple[int, bytes]:
        """Send `apdu` and wait for the emulator's answer.

        Blocking IO.

        Parameters
        ----------
        apdu : bytes
            The whole APDU, header included.

        Returns
        -------
        Tuple[int, bytes]
            A pair (sw, rdata) containing the status word and response data.

        """
        if not apdu:
            raise ValueError("Can't send empty data!")

        LOG.debug("=> %s", apdu.hex())
        self.socket.sendall(len(apdu).to_bytes(4, byteorder="big") + apdu)

        length: int = int.from_bytes(self._recv_exactly(4), byteorder="big")
        rdata: bytes = self._recv_exactly(length)
        sw: int = int.from_bytes(self._recv_exactly(2), byteorder="big")

        LOG.debug("<= %s %04x", rdata.hex(), sw)

        return sw, rdata

    def close(self) -> None:
        if self.__opened:
            self.socket.close()
            self.__opened = False
