"""Word bank sources: the BIP-39 wordlists shipped with ``mnemonic`` or plain files."""

import logging
import os
from typing import List, Union

from mnemonic import Mnemonic

logger = logging.getLogger(__name__)

DEFAULT_BANK = "english"


def available_banks() -> List[str]:
    return sorted(Mnemonic.list_languages())


def load_bank(name: str) -> List[str]:
    """Return the words of the built-in bank ``name``, in digit order."""
    if name not in available_banks():
        raise ValueError(
            f"Unknown word bank {name!r}; expected one of: {', '.join(available_banks())}"
        )
    words = list(Mnemonic(name).wordlist)
    logger.debug("Loaded %d words from bank %r", len(words), name)
    return words


def load_bank_file(path: Union[str, "os.PathLike[str]"]) -> List[str]:
    """Read one word per line. Blank lines at either end are ignored."""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    words = [line.strip() for line in text.strip().splitlines()]
    logger.debug("Loaded %d words from %s", len(words), path)
    return words


__all__ = ["DEFAULT_BANK", "available_banks", "load_bank", "load_bank_file"]
