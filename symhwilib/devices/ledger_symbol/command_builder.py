import enum
from typing import List, Iterator, Tuple, Sequence

from ...key import serialize_path

#: Largest data field of a single APDU
MAX_CHUNK_SIZE: int = 255


class SymbolInsType(enum.IntEnum):
    GET_ACCOUNT = 0x02
    SIGN_TX = 0x04
    GET_APP_CONFIGURATION = 0x06


class ChunkState(enum.IntEnum):
    """P1 of a SIGN_TX command, telling the device where the chunk sits in the payload."""
    FIRST_FINAL = 0x00
    FIRST_MORE = 0x80
    NEXT_FINAL = 0x01
    NEXT_MORE = 0x81

    @classmethod
    def of(cls, first: bool, more: bool) -> 'ChunkState':
        if first:
            return cls.FIRST_MORE if more else cls.FIRST_FINAL
        return cls.NEXT_MORE if more else cls.NEXT_FINAL


def chunkify(payload: bytes, path: Sequence[int], max_chunk_size: int = MAX_CHUNK_SIZE) -> Iterator[Tuple[ChunkState, bytes, bytes]]:
    """Cut a payload into the pieces carried by successive SIGN_TX commands.

    The first command also carries the serialized derivation path, which
    takes room from its chunk. An empty payload still gives one command.

    Yields
    ------
    Tuple[ChunkState, bytes, bytes]
        The chunk state, the header carried before the chunk (the serialized
        path for the first command, empty afterwards) and the chunk itself.
    """
    path_header: bytes = serialize_path(path)
    offset: int = 0
    first: bool = True

    while first or offset < len(payload):
        header = path_header if first else b""
        room = max_chunk_size - len(header)
        chunk = payload[offset:offset + room]
        offset += len(chunk)
        yield ChunkState.of(first, offset < len(payload)), header, chunk
        first = False


class SymbolCommandBuilder:
    """APDU command builder for the Symbol application."""

    CLA: int = 0xE0

    # P2 flags; only Ed25519 is supported and the chain code is never requested
    CURVE_MASK_ED25519: int = 0x80
    CURVE_MASK_SECP256K1: int = 0x40
    CHAIN_CODE: int = 0x01

    def __init__(self, request_chain_code: bool = False) -> None:
        self.p2: int = self.CURVE_MASK_ED25519 | (self.CHAIN_CODE if request_chain_code else 0x00)

    def serialize(
        self,
        cla: int,
        ins: int,
        p1: int = 0,
        p2: int = 0,
        cdata: bytes = b"",
    ) -> dict:
        """Serialize the whole APDU command (header + data).

        Parameters
        ----------
        cla : int
            Instruction class: CLA (1 byte)
        ins : int
            Instruction code: INS (1 byte)
        p1 : int
            Instruction parameter 1: P1 (1 byte).
        p2 : int
            Instruction parameter 2: P2 (1 byte).
        cdata : bytes
            Bytes of command data.

        Returns
        -------
        dict
            Dictionary representing the APDU message.

        """
        if len(cdata) > MAX_CHUNK_SIZE:
            raise ValueError(f"APDU data is {len(cdata)} bytes, at most {MAX_CHUNK_SIZE} fit in one command")

        return {"cla": cla, "ins": int(ins), "p1": int(p1), "p2": p2, "data": cdata}

    def get_app_version(self) -> dict:
        return self.serialize(
            cla=self.CLA,
            ins=SymbolInsType.GET_APP_CONFIGURATION,
            cdata=b"\x00",
        )

    def get_account(self, path: Sequence[int], network_type: int, display: bool = False) -> dict:
        cdata: bytes = b"".join([
            serialize_path(path),                       # 1 + 4 * len(path) bytes
            network_type.to_bytes(1, byteorder="big"),  # 1 byte
        ])

        return self.serialize(
            cla=self.CLA,
            ins=SymbolInsType.GET_ACCOUNT,
            p1=0x01 if display else 0x00,
            p2=self.p2,
            cdata=cdata,
        )

    def sign_transaction_chunks(self, path: Sequence[int], payload: bytes) -> List[dict]:
        """The SIGN_TX commands streaming `payload` to the device, in sending order."""
        return [
            self.serialize(
                cla=self.CLA,
                ins=SymbolInsType.SIGN_TX,
                p1=state,
                p2=self.p2,
                cdata=header + chunk,
            )
            for state, header, chunk in chunkify(payload, path)
        ]
