"""CLI shim for running the codec directly from the repository checkout."""

from wordcodec.cli import main
from wordcodec import (
    CodecConfig,
    WordCodec,
    build_codec,
    load_codec,
    new_codec,
)

__all__ = [
    "CodecConfig",
    "WordCodec",
    "build_codec",
    "load_codec",
    "main",
    "new_codec",
]


if __name__ == "__main__":
    main()
