"""Reversible, checksummed encoding of bytes as words from a 2048-word bank."""

from .bank import available_banks, load_bank, load_bank_file
from .checksum import (
    CHECKSUMS,
    CRC16,
    CRC32,
    CRC64,
    ChecksumProvider,
    NoChecksum,
    get_checksum,
)
from .codec import (
    BANK_SIZE,
    WordCodec,
    bytelen_from_words,
    load_codec,
    new_codec,
    wordlen_from_bytes,
)
from .config import CodecConfig, build_codec, load_codec_config, save_codec_config
from .errors import (
    ChecksumError,
    ChecksumMismatch,
    DuplicateWord,
    InvalidBankSize,
    UnrecognizedWord,
    WordCodecError,
)

__all__ = [
    "BANK_SIZE",
    "CHECKSUMS",
    "CRC16",
    "CRC32",
    "CRC64",
    "ChecksumError",
    "ChecksumMismatch",
    "ChecksumProvider",
    "CodecConfig",
    "DuplicateWord",
    "InvalidBankSize",
    "NoChecksum",
    "UnrecognizedWord",
    "WordCodec",
    "WordCodecError",
    "available_banks",
    "build_codec",
    "bytelen_from_words",
    "get_checksum",
    "load_bank",
    "load_bank_file",
    "load_codec",
    "load_codec_config",
    "new_codec",
    "save_codec_config",
    "wordlen_from_bytes",
]

__version__ = "0.1.0"
