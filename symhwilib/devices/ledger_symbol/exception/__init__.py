from .device_exception import DeviceException, exception_from_status
from .errors import StatusWord

__all__ = [
    "DeviceException",
    "StatusWord",
    "exception_from_status",
]
