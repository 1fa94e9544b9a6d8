"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zkmerkle, a product of Garudex Labs

zkmerkle - Merkle tree commitments for zero-knowledge circuits

zkmerkle builds binary hash trees over ordered values, exposes the root
commitment and produces inclusion proofs that verify without the tree.
"""

from zkmerkle._version import __version__
from zkmerkle.exceptions import (
    EmptyInputError,
    IndexOutOfRangeError,
    SerializationError,
    ZkMerkleError,
)
from zkmerkle.merkle import (
    Hasher,
    MerkleProof,
    MerkleTree,
    ScalarField,
    Sha256Hasher,
    build,
    prove,
    tree_height,
    verify,
)

__all__ = [
    "__version__",
    "EmptyInputError",
    "Hasher",
    "IndexOutOfRangeError",
    "MerkleProof",
    "MerkleTree",
    "ScalarField",
    "SerializationError",
    "Sha256Hasher",
    "ZkMerkleError",
    "build",
    "prove",
    "tree_height",
    "verify",
]
