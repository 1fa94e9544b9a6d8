"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zkmerkle, a product of Garudex Labs

Pairwise hash primitives for Merkle tree construction.

The tree never calls a hash function directly. It is handed a Hasher, which
binds two byte strings into one fixed-size digest:

    digest = H(left || right)

Backends:
- Sha256Hasher: Default implementation using hashlib SHA-256
- CryptographyHasher: SHA-256, SHA3-256 or BLAKE2s via the cryptography library

The backend is configured via the merkle.hash_backend and
merkle.hash_algorithm settings.
"""

import hashlib
from abc import ABC, abstractmethod

from cryptography.hazmat.primitives import hashes

from zkmerkle.exceptions import UnsupportedHashAlgorithmError
from zkmerkle.logging_config import get_logger

logger = get_logger(__name__)


class Hasher(ABC):
    """
    Abstract base class for the pairwise Merkle hash.

    Implementations must be deterministic, order-sensitive and free of side
    effects. Every byte string, including the empty one, is a valid input.
    Instances are shared across threads, so they must not keep per-call state.
    """

    name: str = ""
    digest_size: int = 32

    @abstractmethod
    def hash(self, left: bytes, right: bytes) -> bytes:
        """
        Hash the concatenation of two byte strings.

        Args:
            left: Left input
            right: Right input

        Returns:
            Digest of left || right (digest_size bytes)
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class Sha256Hasher(Hasher):
    """
    Default SHA-256 hasher backed by hashlib.

    Example:
        >>> Sha256Hasher().hash(b"a", b"b") == hashlib.sha256(b"ab").digest()
        True
    """

    name = "sha256"
    digest_size = 32

    def hash(self, left: bytes, right: bytes) -> bytes:
        hasher = hashlib.sha256()
        hasher.update(left)
        hasher.update(right)
        return hasher.digest()


class CryptographyHasher(Hasher):
    """
    Hasher backed by the cryptography library's hash primitives.

    Supported algorithms all produce 32-byte digests so that digests stay
    interchangeable at every interface boundary.
    """

    ALGORITHMS = {
        "sha256": hashes.SHA256,
        "sha3_256": hashes.SHA3_256,
        "blake2s": lambda: hashes.BLAKE2s(32),
    }

    def __init__(self, algorithm: str = "sha256"):
        """
        Args:
            algorithm: One of "sha256", "sha3_256", "blake2s"

        Raises:
            UnsupportedHashAlgorithmError: If the algorithm is unknown
        """
        if algorithm not in self.ALGORITHMS:
            raise UnsupportedHashAlgorithmError(
                f"Unsupported hash algorithm '{algorithm}' for cryptography backend. "
                f"Supported: {sorted(self.ALGORITHMS)}"
            )
        self.name = algorithm
        self._algorithm_factory = self.ALGORITHMS[algorithm]
        self.digest_size = self._algorithm_factory().digest_size

    def hash(self, left: bytes, right: bytes) -> bytes:
        context = hashes.Hash(self._algorithm_factory())
        context.update(left)
        context.update(right)
        return context.finalize()


DEFAULT_HASHER: Hasher = Sha256Hasher()


def create_hasher(config=None) -> Hasher:
    """
    Factory function to create the hasher selected by configuration.

    Args:
        config: Merkle configuration with hash_backend and hash_algorithm
            settings. If None, returns the default SHA-256 hasher.

    Returns:
        Hasher implementation (Sha256Hasher or CryptographyHasher)

    Raises:
        UnsupportedHashAlgorithmError: If the backend or algorithm is invalid
    """
    if config is None:
        return DEFAULT_HASHER

    hash_backend = getattr(config, 'hash_backend', 'hashlib')
    hash_algorithm = getattr(config, 'hash_algorithm', 'sha256')

    if hash_backend == "hashlib":
        if hash_algorithm != "sha256":
            raise UnsupportedHashAlgorithmError(
                f"hashlib backend only supports sha256, got '{hash_algorithm}'"
            )
        hasher: Hasher = Sha256Hasher()

    elif hash_backend == "cryptography":
        hasher = CryptographyHasher(hash_algorithm)

    else:
        raise UnsupportedHashAlgorithmError(f"Invalid hash_backend: {hash_backend}")

    logger.debug("hasher_created", hash_backend=hash_backend, hash_algorithm=hasher.name)
    return hasher
