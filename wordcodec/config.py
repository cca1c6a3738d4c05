import dataclasses
import json
import os
from typing import Optional, Union

from .bank import DEFAULT_BANK, load_bank, load_bank_file
from .checksum import CHECKSUMS, DEFAULT_CHECKSUM, get_checksum
from .codec import WordCodec, new_codec

PathLike = Union[str, "os.PathLike[str]"]


@dataclasses.dataclass
class CodecConfig:
    bank: str = DEFAULT_BANK
    bank_file: Optional[str] = None
    checksum: str = DEFAULT_CHECKSUM
    separator: str = " "
    version: str = "v1"

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "bank": self.bank,
            "bank_file": self.bank_file,
            "checksum": self.checksum,
            "separator": self.separator,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CodecConfig":
        version = data.get("version", "v1")
        if version != "v1":
            raise ValueError(f"Unsupported codec config version: {version}")
        checksum = str(data.get("checksum", DEFAULT_CHECKSUM)).lower()
        if checksum not in CHECKSUMS:
            raise ValueError(
                f"Unknown checksum {checksum!r}; expected one of: {', '.join(CHECKSUMS)}"
            )
        separator = data.get("separator", " ")
        if not separator:
            raise ValueError("separator must not be empty")
        return cls(
            bank=data.get("bank", DEFAULT_BANK),
            bank_file=data.get("bank_file"),
            checksum=checksum,
            separator=separator,
            version=version,
        )


def save_codec_config(config: CodecConfig, path: PathLike) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
        f.write("\n")


def load_codec_config(path: PathLike) -> CodecConfig:
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    return CodecConfig.from_dict(raw)


def build_codec(config: CodecConfig) -> WordCodec:
    """Build a codec from ``config``; a bank file takes precedence over a bank name."""
    if config.bank_file is not None:
        words = load_bank_file(config.bank_file)
    else:
        words = load_bank(config.bank)
    return new_codec(words, get_checksum(config.checksum))


__all__ = [
    "CodecConfig",
    "save_codec_config",
    "load_codec_config",
    "build_codec",
]
