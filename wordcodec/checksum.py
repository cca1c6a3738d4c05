"""Fixed-width integrity codes appended to a buffer before encoding."""

import abc
import binascii
import zlib
from typing import Dict, List, Type

from .errors import ChecksumError

# ECMA-182 polynomial, bit-reversed
CRC64_ECMA_POLY_REVERSED = 0xC96C5795D7870F42
_MASK64 = (1 << 64) - 1


class ChecksumProvider(abc.ABC):
    """Appends a code of ``width`` bytes and verifies/strips it again."""

    name: str = ""
    width: int = 0

    @abc.abstractmethod
    def compute(self, data: bytes) -> int:
        """Return the integrity code of ``data`` as an unsigned integer."""

    def append_code(self, data: bytes) -> bytes:
        if self.width == 0:
            return bytes(data)
        code = self.compute(data).to_bytes(self.width, byteorder="big", signed=False)
        return bytes(data) + code

    def verify_and_strip(self, data: bytes) -> bytes:
        if len(data) < self.width:
            raise ChecksumError(
                f"input too short ({len(data)} bytes), no {self.name} code present"
            )
        if self.width == 0:
            return bytes(data)
        payload, code = data[: -self.width], data[-self.width :]
        expected = self.compute(payload)
        if int.from_bytes(code, byteorder="big", signed=False) != expected:
            raise ChecksumError(f"{self.name} checksum does not match")
        return bytes(payload)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class NoChecksum(ChecksumProvider):
    """Identity provider. Cannot resolve ambiguous lengths on decode."""

    name = "none"
    width = 0

    def compute(self, data: bytes) -> int:
        return 0


class CRC16(ChecksumProvider):
    # CRC-16/CCITT-FALSE; a non-zero start value makes leading zero bytes count
    name = "crc16"
    width = 2

    def compute(self, data: bytes) -> int:
        return binascii.crc_hqx(data, 0xFFFF)


class CRC32(ChecksumProvider):
    name = "crc32"
    width = 4

    def compute(self, data: bytes) -> int:
        return zlib.crc32(data) & 0xFFFFFFFF


def _crc64_table(poly: int) -> List[int]:
    table = []
    for i in range(256):
        crc = i
        for _ in range(8):
            if crc & 1:
                crc = (crc >> 1) ^ poly
            else:
                crc >>= 1
        table.append(crc)
    return table


class CRC64(ChecksumProvider):
    # CRC-64/XZ: reflected ECMA-182, all-ones init and xorout
    name = "crc64"
    width = 8
    _table = _crc64_table(CRC64_ECMA_POLY_REVERSED)

    def compute(self, data: bytes) -> int:
        crc = _MASK64
        table = self._table
        for byte in data:
            crc = table[(crc ^ byte) & 0xFF] ^ (crc >> 8)
        return crc ^ _MASK64


_PROVIDERS: Dict[str, Type[ChecksumProvider]] = {
    cls.name: cls for cls in (NoChecksum, CRC16, CRC32, CRC64)
}

CHECKSUMS = sorted(_PROVIDERS)
DEFAULT_CHECKSUM = CRC32.name


def get_checksum(name: str) -> ChecksumProvider:
    try:
        cls = _PROVIDERS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown checksum {name!r}; expected one of: {', '.join(CHECKSUMS)}"
        ) from None
    return cls()


__all__ = [
    "ChecksumProvider",
    "NoChecksum",
    "CRC16",
    "CRC32",
    "CRC64",
    "CHECKSUMS",
    "DEFAULT_CHECKSUM",
    "get_checksum",
]
