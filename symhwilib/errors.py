"""
Errors and Error Codes
**********************

symhwi has several possible Exceptions with corresponding error codes.

:class:`~symhwilib.hwwclient.HardwareWalletClient` functions and :mod:`~symhwilib.commands` functions will generally raise an exception that is a subclass of :class:`HWWError`.
The symhwi command line tool will convert these exceptions into a dictionary containing the error message and error code.
These look like ``{"error": "<msg>", "code": <code>}``.
"""

from typing import Any, Dict, Iterator, Optional
from contextlib import contextmanager

# Error codes
MISSING_ARGUMENTS = -2 #: Arguments are missing
DEVICE_CONN_ERROR = -3 #: Error connecting to the device
UNKNOWN_DEVICE_TYPE = -4 #: Device type is unknown
INVALID_TX = -5 #: Transaction is invalid
INVALID_PATH = -6 #: Derivation path could not be parsed
BAD_ARGUMENT = -7 #: Bad, malformed, or conflicting argument was provided
MALFORMED_RESPONSE = -8 #: Device response is too short for the fields being decoded
UNSUPPORTED_APP = -9 #: Symbol app on the device is older than the minimum supported version
TRANSPORT_ERROR = -10 #: An APDU exchange with the device failed
DEVICE_LOCKED = -11 #: Device is locked
UNKNOWN_ERROR = -13 #: An unknown error occurred
ACTION_CANCELED = -14 #: Action was canceled by the user
HELP_TEXT = -17 #: Help text was requested by the user

# Exceptions
class HWWError(Exception):
    """
    Generic exception type produced by symhwi
    Subclassed by specific Errors to have Exceptions that have specific error codes.

    Contains a message and error code.
    """
    def __init__(self, msg: str, code: int) -> None:
        """
        Create an exception with the message and error code

        :param msg: The error message
        :param code: The error code
        """
        Exception.__init__(self)
        self.code = code
        self.msg = msg

    def get_code(self) -> int:
        """
        Get the error code for this Error

        :return: The error code
        """
        return self.code

    def get_msg(self) -> str:
        """
        Get the error message for this Error

        :return: The error message
        """
        return self.msg

    def __str__(self) -> str:
        return self.msg

class InvalidPathFormatError(HWWError):
    """
    :class:`HWWError` for :data:`INVALID_PATH`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HWWError.__init__(self, msg, INVALID_PATH)

class BadArgumentError(HWWError):
    """
    :class:`HWWError` for :data:`BAD_ARGUMENT`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HWWError.__init__(self, msg, BAD_ARGUMENT)

class InvalidTransactionError(HWWError):
    """
    :class:`HWWError` for :data:`INVALID_TX`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HWWError.__init__(self, msg, INVALID_TX)

class MalformedResponseError(HWWError):
    """
    :class:`HWWError` for :data:`MALFORMED_RESPONSE`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HWWError.__init__(self, msg, MALFORMED_RESPONSE)

class UnsupportedAppVersionError(HWWError):
    """
    :class:`HWWError` for :data:`UNSUPPORTED_APP`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HWWError.__init__(self, msg, UNSUPPORTED_APP)

class UnknownDeviceError(HWWError):
    """
    :class:`HWWError` for :data:`UNKNOWN_DEVICE_TYPE`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        HWWError.__init__(self, msg, UNKNOWN_DEVICE_TYPE)

class TransportFailureError(HWWError):
    """
    :class:`HWWError` for :data:`TRANSPORT_ERROR`

    Raised when a send to the device is rejected or the channel is unavailable.
    The subclasses narrow down why.
    """
    def __init__(self, msg: str, code: int = TRANSPORT_ERROR):
        """
        :param msg: The error message
        :param code: The error code, :data:`TRANSPORT_ERROR` unless a subclass says otherwise
        """
        HWWError.__init__(self, msg, code)

class DeviceConnectionError(TransportFailureError):
    """
    :class:`TransportFailureError` for :data:`DEVICE_CONN_ERROR`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        TransportFailureError.__init__(self, msg, DEVICE_CONN_ERROR)

class ActionCanceledError(TransportFailureError):
    """
    :class:`TransportFailureError` for :data:`ACTION_CANCELED`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        TransportFailureError.__init__(self, msg, ACTION_CANCELED)

class DeviceLockedError(TransportFailureError):
    """
    :class:`TransportFailureError` for :data:`DEVICE_LOCKED`
    """
    def __init__(self, msg: str):
        """
        :param msg: The error message
        """
        TransportFailureError.__init__(self, msg, DEVICE_LOCKED)

@contextmanager
def handle_errors(
    msg: Optional[str] = None,
    result: Optional[Dict[str, Any]] = None,
    code: int = UNKNOWN_ERROR,
    debug: bool = False,
) -> Iterator[None]:
    """
    Context manager to catch all Exceptions and HWWErrors to return them as dictionaries containing the error message and code.

    :param msg: Error message prefix. Attached to the beginning of each error message
    :param result: The dictionary to put the resulting error in
    :param code: The default error code to use for Exceptions
    :param debug: Whether to also print out the traceback for debugging purposes
    """
    if result is None:
        result = {}

    if msg is None:
        msg = ""
    else:
        msg = msg + " "

    try:
        yield

    except HWWError as e:
        result['error'] = msg + e.get_msg()
        result['code'] = e.get_code()
    except Exception as e:
        result['error'] = msg + str(e)
        result['code'] = code
        if debug:
            import traceback
            traceback.print_exc()


common_err_msgs = {
    "enumerate": "Could not open client or get app information:"
}
