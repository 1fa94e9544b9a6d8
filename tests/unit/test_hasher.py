"""
Unit tests for the pairwise Merkle hashers.
"""

import hashlib

import pytest

from zkmerkle.config.settings import MerkleConfig
from zkmerkle.exceptions import ConfigurationError, UnsupportedHashAlgorithmError
from zkmerkle.merkle.hasher import (
    DEFAULT_HASHER,
    CryptographyHasher,
    Hasher,
    Sha256Hasher,
    create_hasher,
)


class TestSha256Hasher:
    """Test the default hashlib hasher."""

    def test_hash_is_sha256_of_concatenation(self):
        hasher = Sha256Hasher()

        assert hasher.hash(b"left", b"right") == hashlib.sha256(b"leftright").digest()

    def test_digest_is_32_bytes(self):
        assert len(Sha256Hasher().hash(b"a", b"b")) == 32
        assert Sha256Hasher.digest_size == 32

    def test_order_sensitive(self):
        hasher = Sha256Hasher()

        assert hasher.hash(b"a", b"b") != hasher.hash(b"b", b"a")

    def test_empty_inputs_are_valid(self):
        hasher = Sha256Hasher()

        assert hasher.hash(b"", b"") == hashlib.sha256(b"").digest()

    def test_deterministic(self):
        assert Sha256Hasher().hash(b"x", b"y") == Sha256Hasher().hash(b"x", b"y")

    def test_default_hasher_is_sha256(self):
        assert isinstance(DEFAULT_HASHER, Sha256Hasher)
        assert DEFAULT_HASHER.name == "sha256"


class TestCryptographyHasher:
    """Test the cryptography library backend."""

    @pytest.mark.parametrize(
        "algorithm, reference",
        [
            ("sha256", lambda data: hashlib.sha256(data).digest()),
            ("sha3_256", lambda data: hashlib.sha3_256(data).digest()),
            ("blake2s", lambda data: hashlib.blake2s(data).digest()),
        ],
    )
    def test_matches_hashlib(self, algorithm, reference):
        hasher = CryptographyHasher(algorithm)

        assert hasher.name == algorithm
        assert hasher.digest_size == 32
        assert hasher.hash(b"left", b"right") == reference(b"leftright")

    def test_sha256_backends_agree(self):
        assert CryptographyHasher("sha256").hash(b"a", b"b") == Sha256Hasher().hash(b"a", b"b")

    def test_unsupported_algorithm(self):
        with pytest.raises(UnsupportedHashAlgorithmError, match="Unsupported hash algorithm 'md5'"):
            CryptographyHasher("md5")


class TestHasherInterface:
    """Test the Hasher capability itself."""

    def test_cannot_instantiate_abstract_hasher(self):
        with pytest.raises(TypeError):
            Hasher()

    def test_custom_hasher(self):
        class XorHasher(Hasher):
            name = "xor"

            def hash(self, left, right):
                return bytes(a ^ b for a, b in zip(left, right))

        assert XorHasher().hash(b"\x01", b"\x03") == b"\x02"
        assert repr(XorHasher()) == "XorHasher(name='xor')"


class TestCreateHasher:
    """Test the configuration-driven factory."""

    def test_none_returns_default(self):
        assert create_hasher(None) is DEFAULT_HASHER

    def test_default_config(self):
        hasher = create_hasher(MerkleConfig())

        assert isinstance(hasher, Sha256Hasher)

    def test_cryptography_backend(self):
        hasher = create_hasher(MerkleConfig(hash_backend="cryptography", hash_algorithm="sha3_256"))

        assert isinstance(hasher, CryptographyHasher)
        assert hasher.name == "sha3_256"

    def test_hashlib_backend_rejects_other_algorithms(self):
        with pytest.raises(UnsupportedHashAlgorithmError):
            create_hasher(MerkleConfig(hash_backend="hashlib", hash_algorithm="blake2s"))

    def test_invalid_backend(self):
        with pytest.raises(UnsupportedHashAlgorithmError, match="Invalid hash_backend"):
            create_hasher(MerkleConfig(hash_backend="hsm"))

    def test_error_is_configuration_error(self):
        assert issubclass(UnsupportedHashAlgorithmError, ConfigurationError)
