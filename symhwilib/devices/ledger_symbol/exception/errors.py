"""Status words returned by the Symbol app and the errors they map to."""

import enum
from typing import Dict, Type

from ....errors import (
    ActionCanceledError,
    DeviceLockedError,
    TransportFailureError,
)


class StatusWord(enum.IntEnum):
    OK = 0x9000
    WRONG_DATA_LENGTH = 0x6700
    SECURITY_STATUS_NOT_SATISFIED = 0x6982
    CONDITIONS_OF_USE_NOT_SATISFIED = 0x6985
    INCORRECT_DATA = 0x6A80
    WRONG_P1_P2 = 0x6B00
    INS_NOT_SUPPORTED = 0x6D00
    CLA_NOT_SUPPORTED = 0x6E00
    TECHNICAL_PROBLEM = 0x6F00
    APP_NOT_OPEN = 0x6E01


STATUS_MESSAGES: Dict[int, str] = {
    StatusWord.WRONG_DATA_LENGTH: "Wrong data length",
    StatusWord.SECURITY_STATUS_NOT_SATISFIED: "Device is locked",
    StatusWord.CONDITIONS_OF_USE_NOT_SATISFIED: "Denied by the user",
    StatusWord.INCORRECT_DATA: "Incorrect data",
    StatusWord.WRONG_P1_P2: "Wrong P1/P2",
    StatusWord.INS_NOT_SUPPORTED: "Instruction not supported, is the Symbol app open?",
    StatusWord.CLA_NOT_SUPPORTED: "Class not supported, is the Symbol app open?",
    StatusWord.TECHNICAL_PROBLEM: "Technical problem on the device",
    StatusWord.APP_NOT_OPEN: "Symbol app is not open",
}

# Status words with a dedicated error type; everything else is a plain DeviceException
STATUS_ERRORS: Dict[int, Type[TransportFailureError]] = {
    StatusWord.CONDITIONS_OF_USE_NOT_SATISFIED: ActionCanceledError,
    StatusWord.SECURITY_STATUS_NOT_SATISFIED: DeviceLockedError,
}
