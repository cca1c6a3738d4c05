"""Error types raised by the word codec.

Every error derives from :class:`ValueError` so callers that only care about
"bad input" can keep catching that.
"""


class WordCodecError(ValueError):
    """Base class for all codec failures."""


class InvalidBankSize(WordCodecError):
    def __init__(self, size: int, expected: int) -> None:
        super().__init__(f"Bank must have {expected} words, found {size}")
        self.size = size
        self.expected = expected


class DuplicateWord(WordCodecError):
    def __init__(self, word: str, first: int, second: int) -> None:
        super().__init__(
            f"Duplicate word in list: {word!r} (positions {first} and {second})"
        )
        self.word = word
        self.first = first
        self.second = second


class UnrecognizedWord(WordCodecError):
    def __init__(self, word: str, position: int = -1) -> None:
        if position >= 0:
            message = f"Unrecognized word: {word!r} at position {position}"
        else:
            message = f"Unrecognized word: {word!r}"
        super().__init__(message)
        self.word = word
        self.position = position


class ChecksumError(WordCodecError):
    """Raised by a checksum provider when a buffer fails verification."""


class ChecksumMismatch(WordCodecError):
    def __init__(self, cause: ChecksumError) -> None:
        super().__init__(f"Checksum mismatch: {cause}")
        self.cause = cause


__all__ = [
    "WordCodecError",
    "InvalidBankSize",
    "DuplicateWord",
    "UnrecognizedWord",
    "ChecksumError",
    "ChecksumMismatch",
]
