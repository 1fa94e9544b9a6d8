"""
Exception hierarchy for zkmerkle.

All custom exceptions inherit from ZkMerkleError base class.
"""


class ZkMerkleError(Exception):
    """Base exception for all zkmerkle errors."""
    pass


# Merkle Tree Errors
class MerkleTreeError(ZkMerkleError):
    """Base exception for Merkle tree construction and proof errors."""
    pass


class EmptyInputError(MerkleTreeError, ValueError):
    """Raised when a Merkle tree is built from an empty sequence of values."""
    pass


class IndexOutOfRangeError(MerkleTreeError, IndexError):
    """Raised when a proof is requested for a leaf index outside the tree."""
    pass


# Serialization Errors
class SerializationError(ZkMerkleError, ValueError):
    """Raised when a value has no canonical byte encoding."""
    pass


class ProofFormatError(ZkMerkleError):
    """Raised when a serialized proof is malformed."""
    pass


# Configuration Errors
class ConfigurationError(ZkMerkleError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass


class UnsupportedHashAlgorithmError(ConfigurationError):
    """Raised when a hash backend or algorithm is not supported."""
    pass
