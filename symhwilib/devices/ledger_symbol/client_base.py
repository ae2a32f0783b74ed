from typing import Optional

from typing_extensions import Protocol

from .ledgercomm import Transport
from .exception import exception_from_status
from ...errors import DeviceConnectionError


class ApduTransport(Protocol):
    """
    What the Symbol client needs from a transport: one synchronous exchange per command.

    The returned buffer is the response data followed by the status word.
    A failing exchange raises a TransportFailureError; nothing is retried.
    """

    def send(self, cla: int, ins: int, p1: int, p2: int, data: bytes) -> bytes:
        ...


class TransportClient:
    def __init__(self, interface: str = "tcp", server: str = "127.0.0.1", port: int = 9999, hid_path: Optional[bytes] = None, debug: bool = False):
        try:
            if interface == "hid":
                self.transport = Transport("hid", hid_path=hid_path, debug=debug)
            else:
                self.transport = Transport(interface, server, port, debug=debug)
        except OSError as e:
            raise DeviceConnectionError(f"Unable to open the device: {e}")

    def send(self, cla: int, ins: int, p1: int, p2: int, data: bytes) -> bytes:
        try:
            sw, response = self.transport.exchange(cla, ins, p1, p2, data)
        except OSError as e:
            raise DeviceConnectionError(f"Lost connection to the device: {e}")

        if sw != 0x9000:
            raise exception_from_status(sw, ins)

        return response + sw.to_bytes(2, byteorder="big")

    def stop(self) -> None:
        self.transport.close()
