import dataclasses
import os
from concurrent.futures import ThreadPoolExecutor

import pytest

import wordcodec
from wordcodec import (
    CRC16,
    CRC32,
    CRC64,
    ChecksumMismatch,
    DuplicateWord,
    InvalidBankSize,
    NoChecksum,
    UnrecognizedWord,
    WordCodec,
)
from wordcodec.codec import base_digits_to_bytes, bytes_to_base_digits

BANK = [f"word{i:04d}" for i in range(2048)]


@pytest.fixture
def codec() -> WordCodec:
    return wordcodec.new_codec(BANK)


@pytest.mark.parametrize("size", [0, 1, 2047, 2049, 4096])
def test_bank_must_have_2048_words(size: int) -> None:
    words = [f"w{i}" for i in range(size)]
    with pytest.raises(InvalidBankSize, match=f"found {size}") as info:
        wordcodec.new_codec(words)
    assert info.value.size == size
    assert info.value.expected == 2048


def test_bank_of_2048_words_is_accepted() -> None:
    codec = wordcodec.new_codec(BANK)
    assert len(codec.words) == 2048
    assert len(codec.index) == 2048
    assert isinstance(codec.checksum, CRC32)


def test_duplicate_word_is_rejected() -> None:
    words = list(BANK)
    words[5] = words[3]
    with pytest.raises(DuplicateWord, match="word0003") as info:
        wordcodec.new_codec(words)
    assert info.value.word == "word0003"
    assert (info.value.first, info.value.second) == (3, 5)


def test_codec_is_immutable(codec: WordCodec) -> None:
    with pytest.raises(TypeError):
        codec.index["extra"] = 1  # type: ignore[index]
    with pytest.raises(dataclasses.FrozenInstanceError):
        codec.words = ()  # type: ignore[misc]


def test_lookup(codec: WordCodec) -> None:
    assert codec.lookup("word0000") == 0
    assert codec.lookup("word2047") == 2047
    assert "word1234" in codec
    assert "nope" not in codec
    with pytest.raises(UnrecognizedWord, match="nope") as info:
        codec.lookup("nope")
    assert info.value.position == -1
    with pytest.raises(UnrecognizedWord, match="at position 7") as info:
        codec.lookup("nope", 7)
    assert info.value.position == 7


@pytest.mark.parametrize("n", [0, 1, 2, 3, 4, 10, 11, 16, 20, 32, 33, 64])
def test_wordlen_from_bytes(n: int) -> None:
    assert wordcodec.wordlen_from_bytes(n) == -(-8 * n // 11)


def test_bytelen_from_words_flags_ambiguity() -> None:
    for w in range(0, 200):
        length, flexible = wordcodec.bytelen_from_words(w)
        assert length == 11 * w // 8
        assert flexible == (wordcodec.wordlen_from_bytes(length - 1) == w)


def test_bytelen_recovers_every_encoded_length() -> None:
    for n in range(0, 300):
        w = wordcodec.wordlen_from_bytes(n)
        length, flexible = wordcodec.bytelen_from_words(w)
        assert n == length or (flexible and n == length - 1)


def test_first_word_is_least_significant() -> None:
    codec = wordcodec.new_codec(BANK, NoChecksum())
    assert codec.encode(b"\x00\x01") == ["word0001", "word0000"]
    assert codec.encode(b"\x08\x00") == ["word0000", "word0001"]


@pytest.mark.parametrize(
    "payload",
    [
        b"",
        b"\x00",
        b"\x00\x00\x00",
        b"\x00\x00\x01\x02",
        b"\xff" * 7,
        b"hello world",
        bytes(range(256)),
    ],
)
def test_round_trip(codec: WordCodec, payload: bytes) -> None:
    words = codec.encode(payload)
    assert all(word in codec for word in words)
    assert codec.decode(words) == payload


@pytest.mark.parametrize("length", range(0, 40))
def test_round_trip_random_lengths(codec: WordCodec, length: int) -> None:
    payload = os.urandom(length)
    assert codec.decode(codec.encode(payload)) == payload


@pytest.mark.parametrize("provider", [CRC16(), CRC32(), CRC64()])
@pytest.mark.parametrize("length", [0, 1, 3, 5, 16, 24, 33])
def test_round_trip_with_each_checksum(provider, length: int) -> None:
    codec = wordcodec.new_codec(BANK, provider)
    payload = b"\x00" + os.urandom(length)
    words = codec.encode(payload)
    assert len(words) == wordcodec.wordlen_from_bytes(len(payload) + provider.width)
    assert codec.decode(words) == payload


def test_sixteen_zero_bytes_use_fifteen_words(codec: WordCodec) -> None:
    payload = bytes(16)
    words = codec.encode(payload)
    assert len(words) == 15
    assert codec.decode(words) == payload


def test_empty_payload_still_carries_checksum(codec: WordCodec) -> None:
    words = codec.encode(b"")
    assert len(words) == wordcodec.wordlen_from_bytes(4)
    assert codec.decode(words) == b""


def test_empty_word_sequence_fails(codec: WordCodec) -> None:
    with pytest.raises(ChecksumMismatch, match="too short"):
        codec.decode([])


def test_shorter_length_hypothesis_is_tried(codec: WordCodec) -> None:
    # 3 bytes + 4 byte CRC encode to 6 words, which read back as 8 bytes
    payload = b"abc"
    words = codec.encode(payload)
    assert len(words) == 6
    assert wordcodec.bytelen_from_words(6) == (8, True)
    assert codec.decode(words) == payload


def _shorter_lengths(width: int):
    """Payload lengths whose augmented buffer is one byte under the decoded length."""
    lengths = []
    for n in range(0, 64):
        augmented = n + width
        length, flexible = wordcodec.bytelen_from_words(
            wordcodec.wordlen_from_bytes(augmented)
        )
        if flexible and length == augmented + 1:
            lengths.append(n)
    return lengths


@pytest.mark.parametrize("provider", [CRC16(), CRC32(), CRC64()])
def test_shorter_length_hypothesis_for_each_checksum(provider) -> None:
    codec = wordcodec.new_codec(BANK, provider)
    lengths = _shorter_lengths(provider.width)
    assert lengths
    for n in lengths:
        for payload in (bytes(n), bytes(range(1, n + 1)), b"x" * n):
            assert codec.decode(codec.encode(payload)) == payload


@pytest.mark.parametrize("provider", [CRC16(), CRC32(), CRC64()])
@pytest.mark.parametrize("payload", [b"\x01", b"xxxxx", bytes(range(1, 17))])
def test_no_spurious_leading_zero(provider, payload: bytes) -> None:
    codec = wordcodec.new_codec(BANK, provider)
    assert codec.decode(codec.encode(payload)) == payload


def test_without_checksum_ambiguous_length_keeps_padding() -> None:
    codec = wordcodec.new_codec(BANK, NoChecksum())
    assert codec.decode(codec.encode(b"abcd")) == b"abcd"
    assert codec.decode(codec.encode(b"abc")) == b"\x00abc"


@pytest.mark.parametrize("position", [0, 3, -1])
def test_unrecognized_word_is_named(codec: WordCodec, position: int) -> None:
    words = codec.encode(b"secret phrase")
    words[position] = "bogus"
    with pytest.raises(UnrecognizedWord, match="bogus") as info:
        codec.decode(words)
    assert info.value.word == "bogus"
    assert info.value.position == position % len(words)


def test_substituted_word_is_detected(codec: WordCodec) -> None:
    payload = bytes(range(1, 17))
    words = codec.encode(payload)
    for position in range(len(words)):
        tampered = list(words)
        digit = codec.lookup(tampered[position])
        tampered[position] = codec.words[(digit + 1) % 2048]
        with pytest.raises(ChecksumMismatch) as info:
            codec.decode(tampered)
        assert isinstance(info.value.cause, wordcodec.ChecksumError)


def test_value_too_large_for_word_count_is_rejected() -> None:
    codec = wordcodec.new_codec(BANK, NoChecksum())
    with pytest.raises(ChecksumMismatch, match="only 1 available"):
        codec.decode(["word2047"])


def test_phrase_helpers(codec: WordCodec) -> None:
    phrase = codec.encode_to_phrase(b"\x00\x10payload")
    assert codec.decode_phrase(f"  {phrase}\n") == b"\x00\x10payload"

    dashed = codec.encode_to_phrase(b"xyz", separator="-")
    assert " " not in dashed
    assert codec.decode_phrase(dashed + "\n", separator="-") == b"xyz"


def test_shared_codec_across_threads(codec: WordCodec) -> None:
    payloads = [os.urandom(n % 48) for n in range(64)]

    def round_trip(payload: bytes) -> bytes:
        return codec.decode(codec.encode(payload))

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(round_trip, payloads))
    assert results == payloads


def test_base_digit_helpers_keep_leading_zeros() -> None:
    payload = b"\x00\x00\x42\x99"
    digits = bytes_to_base_digits(payload, 2048, 3)
    assert base_digits_to_bytes(digits, 2048, 4) == payload


def test_base_digits_to_bytes_invalid_digit() -> None:
    with pytest.raises(ValueError, match="out of range"):
        base_digits_to_bytes([0, 2048], 2048, 4)


def test_bytes_to_base_digits_too_few_digits() -> None:
    with pytest.raises(ValueError, match="do not fit"):
        bytes_to_base_digits(b"\xff\xff", 2048, 1)
