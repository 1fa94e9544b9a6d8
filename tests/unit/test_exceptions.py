"""
Unit tests for exception hierarchy.
"""

from zkmerkle.exceptions import (
    ConfigurationError,
    EmptyInputError,
    IndexOutOfRangeError,
    InvalidConfigurationError,
    MerkleTreeError,
    ProofFormatError,
    SerializationError,
    UnsupportedHashAlgorithmError,
    ZkMerkleError,
)


class TestExceptionHierarchy:
    """Test that exception hierarchy is correctly defined."""

    def test_base_exception(self):
        error = ZkMerkleError("test error")
        assert isinstance(error, Exception)
        assert str(error) == "test error"

    def test_tree_errors(self):
        assert issubclass(MerkleTreeError, ZkMerkleError)
        assert issubclass(EmptyInputError, MerkleTreeError)
        assert issubclass(IndexOutOfRangeError, MerkleTreeError)

    def test_tree_errors_match_builtin_categories(self):
        assert issubclass(EmptyInputError, ValueError)
        assert issubclass(IndexOutOfRangeError, IndexError)
        assert issubclass(SerializationError, ValueError)

    def test_serialization_and_proof_format_errors(self):
        assert issubclass(SerializationError, ZkMerkleError)
        assert issubclass(ProofFormatError, ZkMerkleError)

    def test_configuration_errors(self):
        assert issubclass(ConfigurationError, ZkMerkleError)
        assert issubclass(InvalidConfigurationError, ConfigurationError)
        assert issubclass(UnsupportedHashAlgorithmError, ConfigurationError)
