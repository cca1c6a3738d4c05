import dataclasses
import logging
import types
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from .bank import load_bank
from .checksum import CRC32, ChecksumProvider
from .errors import (
    ChecksumError,
    ChecksumMismatch,
    DuplicateWord,
    InvalidBankSize,
    UnrecognizedWord,
)

logger = logging.getLogger(__name__)

BANK_SIZE = 2048
BITS_PER_WORD = 11


def wordlen_from_bytes(num_bytes: int) -> int:
    """Number of words needed to carry ``num_bytes`` bytes (ceil(8n / 11))."""
    return (8 * num_bytes + BITS_PER_WORD - 1) // BITS_PER_WORD


def bytelen_from_words(num_words: int) -> Tuple[int, bool]:
    """Byte length carried by ``num_words`` words.

    Returns ``(length, maybe_shorter)``. When ``maybe_shorter`` is true, a
    buffer one byte shorter encodes to the same number of words, so the
    message could be either length.
    """
    length = BITS_PER_WORD * num_words // 8
    maybe_shorter = wordlen_from_bytes(length - 1) == num_words
    return length, maybe_shorter


def bytes_to_base_digits(data: bytes, base: int, count: int) -> List[int]:
    """Split ``data`` into exactly ``count`` digits, least significant first."""
    if base < 2:
        raise ValueError("base must be >= 2")
    n = int.from_bytes(data, byteorder="big", signed=False)
    digits: List[int] = []
    for _ in range(count):
        n, rem = divmod(n, base)
        digits.append(rem)
    if n:
        raise ValueError(f"{len(data)} bytes do not fit in {count} base-{base} digits")
    return digits


def base_digits_to_bytes(digits: Sequence[int], base: int, length_bytes: int) -> bytes:
    """Inverse of :func:`bytes_to_base_digits`, left-padded to ``length_bytes``."""
    if base < 2:
        raise ValueError("base must be >= 2")
    n = 0
    for d in reversed(digits):
        if d < 0 or d >= base:
            raise ValueError(f"digit {d} out of range for base {base}")
        n = n * base + d
    if n.bit_length() > 8 * max(length_bytes, 0):
        raise ValueError(
            f"value needs {(n.bit_length() + 7) // 8} bytes, only {length_bytes} available"
        )
    return n.to_bytes(max(length_bytes, 0), byteorder="big", signed=False)


def _build_index(words: Iterable[str]) -> Mapping[str, int]:
    index = {}
    for position, word in enumerate(words):
        if word in index:
            raise DuplicateWord(word, index[word], position)
        index[word] = position
    return types.MappingProxyType(index)


@dataclasses.dataclass(frozen=True, eq=False)
class WordCodec:
    """Converts byte strings to words from a 2048-word bank and back.

    The reverse index is built once here and exposed read-only, so a single
    instance can be shared between threads.
    """

    words: Tuple[str, ...] = dataclasses.field(repr=False)
    checksum: ChecksumProvider = dataclasses.field(default_factory=CRC32)
    index: Mapping[str, int] = dataclasses.field(init=False, repr=False)

    def __post_init__(self) -> None:
        words = tuple(self.words)
        if len(words) != BANK_SIZE:
            raise InvalidBankSize(len(words), BANK_SIZE)
        object.__setattr__(self, "words", words)
        object.__setattr__(self, "index", _build_index(words))
        logger.debug(
            "Built word codec (checksum=%s, first word=%r)",
            self.checksum.name,
            words[0],
        )

    def __contains__(self, word: object) -> bool:
        return word in self.index

    def lookup(self, word: str, position: int = -1) -> int:
        """Digit value of ``word``; ``position`` is only used in the error."""
        try:
            return self.index[word]
        except KeyError:
            raise UnrecognizedWord(word, position) from None

    def encode(self, data: bytes) -> List[str]:
        augmented = self.checksum.append_code(data)
        num_words = wordlen_from_bytes(len(augmented))
        digits = bytes_to_base_digits(augmented, BANK_SIZE, num_words)
        words = [self.words[d] for d in digits]
        for word, digit in zip(words, digits):
            if self.index.get(word) != digit:
                raise RuntimeError(f"word bank and index disagree on {word!r}")
        return words

    def decode(self, words: Sequence[str]) -> bytes:
        digits = [self.lookup(word, position) for position, word in enumerate(words)]

        out_len, flexible = bytelen_from_words(len(digits))
        try:
            to_check = base_digits_to_bytes(digits, BANK_SIZE, out_len)
        except ValueError as exc:
            raise ChecksumMismatch(ChecksumError(str(exc))) from exc

        try:
            return self.checksum.verify_and_strip(to_check)
        except ChecksumError as exc:
            if not flexible:
                raise ChecksumMismatch(exc) from exc
            first_error = exc

        logger.debug(
            "%d words failed as %d bytes, retrying as %d",
            len(digits),
            out_len,
            out_len - 1,
        )
        try:
            return self.checksum.verify_and_strip(to_check[1:])
        except ChecksumError as exc:
            raise ChecksumMismatch(exc) from first_error

    def encode_to_phrase(self, data: bytes, separator: str = " ") -> str:
        return separator.join(self.encode(data))

    def decode_phrase(self, text: str, separator: Optional[str] = None) -> bytes:
        tokens = [tok for tok in text.split(separator) if tok.strip()]
        if separator is not None:
            tokens = [tok.strip() for tok in tokens]
        return self.decode(tokens)


def new_codec(
    words: Sequence[str], checksum: Optional[ChecksumProvider] = None
) -> WordCodec:
    if checksum is None:
        checksum = CRC32()
    return WordCodec(words, checksum)


def load_codec(bank: str, checksum: Optional[ChecksumProvider] = None) -> WordCodec:
    return new_codec(load_bank(bank), checksum)


__all__ = [
    "BANK_SIZE",
    "WordCodec",
    "new_codec",
    "load_codec",
    "wordlen_from_bytes",
    "bytelen_from_words",
    "bytes_to_base_digits",
    "base_digits_to_bytes",
]
