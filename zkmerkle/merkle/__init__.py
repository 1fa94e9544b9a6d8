"""
Merkle tree commitments for zkmerkle.

This package provides Merkle tree construction, proof generation and
stateless proof verification over canonically serialized values.
"""

from zkmerkle.merkle.hasher import (
    DEFAULT_HASHER,
    CryptographyHasher,
    Hasher,
    Sha256Hasher,
    create_hasher,
)
from zkmerkle.merkle.field import BLS12_381_SCALAR_MODULUS, ScalarField
from zkmerkle.merkle.serialization import (
    CanonicalSerializable,
    decode_value,
    serialize_value,
)
from zkmerkle.merkle.tree import (
    MerkleProof,
    MerkleTree,
    MerkleTreeBuilder,
    build,
    prove,
    tree_height,
    verify,
)

__all__ = [
    "BLS12_381_SCALAR_MODULUS",
    "CanonicalSerializable",
    "CryptographyHasher",
    "DEFAULT_HASHER",
    "Hasher",
    "MerkleProof",
    "MerkleTree",
    "MerkleTreeBuilder",
    "ScalarField",
    "Sha256Hasher",
    "build",
    "create_hasher",
    "decode_value",
    "prove",
    "serialize_value",
    "tree_height",
    "verify",
]
