"""Tests for the built-in algorithm families and the registry."""

from __future__ import annotations

import hashlib
import hmac
import io
import logging
import zlib
from pathlib import Path

import blake3
import pytest

import digestgen.core as core
from digestgen import GenerationError, buffer_size, code_generator, generate_hash, register
from digestgen.algorithms import BUILTINS
from digestgen.registry import registered, unregister
from tests.implementation.codegen import IdentityHashGen

MESSAGE = b"The quick brown fox jumps over the lazy dog"


@pytest.fixture
def large_file(tmp_path: Path) -> Path:
    path = tmp_path / "large.bin"
    path.write_bytes(MESSAGE * 500)
    return path


# ============================================================================
# Known vectors
# ============================================================================


@pytest.mark.parametrize(
    "function, expected",
    [
        ("md5", "900150983cd24fb0d6963f7d28e17f72"),
        ("sha1", "a9993e364706816aba3e25717850c26c9cd0d89d"),
        ("sha256", "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
        ("sha3_256", "3a985da74fe225b2045c172d6bd390bd855f086e3e9d525b46bfe24511431532"),
        ("crc32", "352441c2"),
        ("adler32", "024d0127"),
    ],
)
def test_known_digests(function: str, expected: str) -> None:
    assert getattr(core, function)("abc") == expected


@pytest.mark.parametrize(
    "function, reference",
    [
        ("sha224", hashlib.sha224),
        ("sha384", hashlib.sha384),
        ("sha512", hashlib.sha512),
        ("sha3_224", hashlib.sha3_224),
        ("sha3_384", hashlib.sha3_384),
        ("sha3_512", hashlib.sha3_512),
        ("blake2b", hashlib.blake2b),
        ("blake2s", hashlib.blake2s),
    ],
)
def test_digests_match_hashlib(function: str, reference) -> None:
    assert getattr(core, function)(MESSAGE) == reference(MESSAGE).hexdigest()
    assert getattr(core, f"{function}_bytes")(MESSAGE) == reference(MESSAGE).digest()


def test_blake3() -> None:
    assert core.blake3(MESSAGE) == blake3.blake3(MESSAGE).hexdigest()
    assert core.blake3_bytes(io.BytesIO(MESSAGE)) == blake3.blake3(MESSAGE).digest()


def test_rfc2104_hmac() -> None:
    """HMAC test case 2 of RFC 2104 and RFC 4231."""
    message = "what do ya want for nothing?"

    assert core.md5_hmac(message, "Jefe") == "750c783e6ab0b503eaa86e310a5db738"
    assert core.sha256_hmac(message, b"Jefe") == (
        "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"
    )


@pytest.mark.parametrize("algorithm", ["sha1", "sha512", "sha3_256"])
def test_hmac_matches_stdlib(algorithm: str) -> None:
    expected = hmac.new(b"secret", MESSAGE, algorithm).digest()

    assert getattr(core, f"{algorithm}_hmac_bytes")(MESSAGE, b"secret") == expected


# ============================================================================
# Native values, files and streams
# ============================================================================


def test_checksum_native_value_is_int() -> None:
    assert core.crc32_raw("abc") == zlib.crc32(b"abc")
    assert core.adler32_raw(b"abc") == zlib.adler32(b"abc")
    assert core.crc32_bytes("abc") == bytes.fromhex("352441c2")


def test_file_variants_with_small_buffer(large_file: Path) -> None:
    """Files spanning many reads hash the same as their content."""
    content = large_file.read_bytes()

    with buffer_size(7):
        assert core.sha256_file(large_file) == hashlib.sha256(content).hexdigest()
        assert core.crc32_file_raw(str(large_file)) == zlib.crc32(content)
        assert core.blake3_file_bytes(large_file) == blake3.blake3(content).digest()
        assert core.sha1_hmac_file(large_file, b"k") == hmac.new(b"k", content, "sha1").hexdigest()


def test_text_streams_hash_like_their_text() -> None:
    assert core.sha256(io.StringIO("abc")) == core.sha256("abc")
    assert core.crc32_raw(io.StringIO("abc")) == zlib.crc32(b"abc")
    assert core.blake3_bytes(io.StringIO("abc")) == blake3.blake3(b"abc").digest()
    assert core.md5_hmac(io.StringIO("abc"), "key") == core.md5_hmac("abc", "key")


def test_hmac_key_from_file(tmp_path: Path) -> None:
    key_path = tmp_path / "key.bin"
    key_path.write_bytes(b"\x00key\xff")

    assert core.sha256_hmac(MESSAGE, key_path) == core.sha256_hmac(MESSAGE, b"\x00key\xff")
    assert core.sha256_hmac_raw(MESSAGE, io.BytesIO(b"\x00key\xff")) == core.sha256_hmac_raw(
        MESSAGE, b"\x00key\xff"
    )


def test_absent_input() -> None:
    assert core.md5(None) is None
    assert core.crc32_file(None) is None
    assert core.sha256_hmac_raw(None, b"k") is None


# ============================================================================
# Exported families
# ============================================================================


def test_every_builtin_is_exported() -> None:
    assert set(core.FAMILIES) == set(BUILTINS)
    assert "sha3_512_hmac_file_raw" in core.__all__


def test_hash_only_algorithms_have_no_hmac() -> None:
    for algorithm in ["blake2b", "blake2s", "blake3", "crc32", "adler32"]:
        assert len(core.FAMILIES[algorithm]) == 6
        assert f"{algorithm}_hmac" not in core.__all__
    assert len(core.FAMILIES["md5"]) == 12


# ============================================================================
# Registry
# ============================================================================


def test_unknown_algorithm_is_reported(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="digestgen.registry"):
        assert code_generator("whirlpool") is None
        assert generate_hash("whirlpool") is None

    assert "No such code generator: whirlpool" in caplog.text


def test_register_and_generate() -> None:
    register("identity-test", IdentityHashGen("Identity"))
    try:
        family = generate_hash("identity-test", "ident")
        assert family is not None
        assert family.algorithm == "Identity"
        assert family["ident"]("abc") == "616263"
        assert generate_hash("identity-test").names[0] == "identity_test"
    finally:
        unregister("identity-test")


def test_duplicate_registration() -> None:
    with pytest.raises(GenerationError, match="already registered"):
        register("md5", IdentityHashGen())

    register("identity-dup", IdentityHashGen())
    try:
        descriptor = register("identity-dup", IdentityHashGen("Other"), replace=True)
        assert code_generator("identity-dup") is descriptor
        assert descriptor.name == "Other"
    finally:
        unregister("identity-dup")


def test_registered_names_are_sorted() -> None:
    names = registered()

    assert names == sorted(names)
    assert set(BUILTINS) <= set(names)
    unregister("never-registered")
    assert registered() == names
