from typing import Optional

from ....errors import TransportFailureError
from .errors import STATUS_ERRORS, STATUS_MESSAGES


class DeviceException(TransportFailureError):
    """The device answered an APDU with a status word other than 0x9000."""

    def __init__(self, error_code: int, ins: Optional[int] = None, message: str = "") -> None:
        self.error_code = error_code
        self.ins = ins
        if not message:
            message = STATUS_MESSAGES.get(error_code, "Unknown error")
        TransportFailureError.__init__(self, f"{message} (status 0x{error_code:04x})")


def exception_from_status(sw: int, ins: Optional[int] = None) -> TransportFailureError:
    """The error to raise for a failing status word."""
    error_type = STATUS_ERRORS.get(sw)
    if error_type is not None:
        return error_type(f"{STATUS_MESSAGES[sw]} (status 0x{sw:04x})")
    return DeviceException(sw, ins)
