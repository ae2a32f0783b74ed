"""
Streaming of a payload to the device over successive SIGN_TX commands.

The device keeps state between the commands of one payload, so a session is
single use: once it has finished, or once any exchange failed, it cannot be
run again and the whole signing call has to be started over.
"""

import enum
import logging
from typing import List, Optional, Sequence

from .client_base import ApduTransport
from .command_builder import SymbolCommandBuilder

#: String form of an intermediate response that only carries the OK status word
CONTINUE_SENDING = "0x9000"

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    IDLE = 0
    TRANSMITTING = 1
    DONE = 2
    FAILED = 3


def is_continue_response(response: bytes) -> bool:
    return "0x" + response.hex() == CONTINUE_SENDING


class ChunkSession:
    """
    One upload of a signing payload to the device.

    :param transport: Where the commands are sent
    :param builder: Builds the SIGN_TX commands
    :param path: The parsed derivation path of the signing key
    :param payload: The bytes to have signed
    """

    def __init__(self, transport: ApduTransport, builder: SymbolCommandBuilder, path: Sequence[int], payload: bytes) -> None:
        self.transport = transport
        self.frames: List[dict] = builder.sign_transaction_chunks(path, payload)
        self.next_frame: int = 0
        self.state = SessionState.IDLE

    @property
    def failed(self) -> bool:
        return self.state == SessionState.FAILED

    def run(self) -> bytes:
        """
        Send the frames in order and return the device's answer to the payload.

        Intermediate answers that only acknowledge a chunk are dropped.
        Any other answer ends the upload and is returned.
        When all frames have been sent the last answer is returned, whatever it is.

        :return: The response to the last frame sent
        :raises: TransportFailureError: if an exchange fails; nothing is retried
        """
        if self.state != SessionState.IDLE:
            raise RuntimeError(f"Chunk session cannot be run again, it is {self.state.name.lower()}")
        self.state = SessionState.TRANSMITTING

        response: Optional[bytes] = None
        try:
            while self.next_frame < len(self.frames):
                apdu = self.frames[self.next_frame]
                self.next_frame += 1
                logger.debug("Sending chunk %d/%d p1=%02x (%d bytes)", self.next_frame, len(self.frames), apdu["p1"], len(apdu["data"]))
                response = self.transport.send(apdu["cla"], apdu["ins"], apdu["p1"], apdu["p2"], apdu["data"])
                if not is_continue_response(response):
                    break
        except Exception:
            self.state = SessionState.FAILED
            raise

        self.state = SessionState.DONE
        assert response is not None
        return response
