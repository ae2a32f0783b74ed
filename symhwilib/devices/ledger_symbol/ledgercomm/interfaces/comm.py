"""ledgercomm.interfaces.comm module."""

from abc import ABCMeta, abstractmethod
from typing import Tuple


class Comm(metaclass=ABCMeta):
    """Abstract class for a communication interface carrying whole APDUs."""

    @abstractmethod
    def open(self) -> None:
        """Open the interface."""
        raise NotImplementedError

    @abstractmethod
    def exchange(self, apdu: bytes) -> Tuple[int, bytes]:
        """Send one APDU and block until the status word and response data come back."""
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Close the interface."""
        raise NotImplementedError
