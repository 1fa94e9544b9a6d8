"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zkmerkle, a product of Garudex Labs

Merkle tree commitments over ordered sequences of values.

This module implements a static binary Merkle tree. It supports:
- Tree construction from values (each value is canonically serialized into a leaf)
- Merkle proof generation for any leaf
- Stateless Merkle proof verification from (root, index, value, proof)
- Parallel level hashing for large trees
- Builder pattern for convenient tree construction

Commitment rules:
1. Leaf: serialize_value(value), kept as raw bytes (leaves are not hashed)
2. Parent: hasher.hash(left, right)
3. Odd level: the last node is paired with itself, parent = hash(x, x)
4. Single leaf: root = leaf bytes, no hashing
5. Empty input: EmptyInputError
"""

import concurrent.futures
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from zkmerkle.exceptions import (
    EmptyInputError,
    IndexOutOfRangeError,
    ProofFormatError,
)
from zkmerkle.logging_config import (
    get_logger,
    log_merkle_proof_generation,
    log_merkle_root_computation,
    log_merkle_verification,
)
from zkmerkle.merkle.hasher import DEFAULT_HASHER, Hasher, create_hasher
from zkmerkle.merkle.serialization import serialize_value

logger = get_logger(__name__)


@dataclass(frozen=True)
class MerkleProof:
    """
    Authentication path for one leaf of a Merkle tree.

    The proof carries no index and no root. The verifier is given both
    out-of-band.

    Attributes:
        siblings: Sibling digests, ordered from the leaf level up to (but not
            including) the root
    """
    siblings: Tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "siblings", tuple(self.siblings))

    def __len__(self) -> int:
        return len(self.siblings)

    def __iter__(self):
        return iter(self.siblings)

    def to_dict(self) -> Dict[str, List[str]]:
        """Encode the proof as a JSON-friendly dict of hex strings."""
        return {"siblings": [sibling.hex() for sibling in self.siblings]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MerkleProof":
        """
        Decode a proof produced by to_dict().

        Raises:
            ProofFormatError: If the dict is malformed
        """
        if not isinstance(data, dict) or "siblings" not in data:
            raise ProofFormatError("Proof must be an object with a 'siblings' list")

        raw_siblings = data["siblings"]
        if not isinstance(raw_siblings, list):
            raise ProofFormatError("Proof 'siblings' must be a list of hex strings")

        siblings = []
        for position, raw in enumerate(raw_siblings):
            if not isinstance(raw, str):
                raise ProofFormatError(f"Sibling {position} is not a hex string")
            try:
                siblings.append(bytes.fromhex(raw))
            except ValueError as e:
                raise ProofFormatError(f"Sibling {position} is not valid hex: {e}") from e

        return cls(siblings=tuple(siblings))


def tree_height(leaf_count: int) -> int:
    """
    Number of hashing levels above the leaves, i.e. the length of every proof.

    Equals ceil(log2(leaf_count)) for leaf_count > 1, and 0 for a single leaf.

    Raises:
        ValueError: If leaf_count is negative
    """
    if leaf_count < 0:
        raise ValueError(f"leaf_count must be non-negative, got {leaf_count}")
    if leaf_count <= 1:
        return 0
    return (leaf_count - 1).bit_length()


def _paired_node(level: Sequence[bytes], index: int) -> bytes:
    """
    Return the node paired with level[index] when building the parent level.

    The partner of an even index is index + 1 and of an odd index is
    index - 1. The last node of an odd-sized level has no partner and is
    paired with itself. Construction and proof generation both go through
    this function so their boundary handling cannot diverge.
    """
    partner = index + 1 if index % 2 == 0 else index - 1
    if partner < len(level):
        return level[partner]
    return level[index]


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class MerkleTree:
    """
    Binary Merkle tree over canonically serialized values.

    The tree is built bottom-up from the leaf bytes. Each internal node is
    hasher.hash(left, right) of its two children; if a level has an odd
    number of nodes, the last node is hashed with itself. The tree is
    immutable once constructed and safe to share across threads.

    Example:
        >>> values = [b"data1", b"data2", b"data3"]
        >>> tree = MerkleTree(values)
        >>> root = tree.get_root()
        >>> proof = tree.generate_proof(0)
        >>> MerkleTree.verify_proof(root, 0, values[0], proof)
        True
    """

    # Threshold for parallel processing (levels with at least this many nodes)
    PARALLEL_THRESHOLD = 100

    MAX_WORKERS = 4

    def __init__(
        self,
        values: Iterable[Any],
        hasher: Optional[Hasher] = None,
        use_parallel: bool = True,
        parallel_threshold: Optional[int] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Build Merkle tree from values.

        Args:
            values: Ordered values; each is serialized with serialize_value()
            hasher: Pairwise hash to use (default: SHA-256)
            use_parallel: Enable thread pool hashing for large levels
            parallel_threshold: Level size at which hashing goes parallel
            max_workers: Thread pool size

        Raises:
            EmptyInputError: If values is empty
            SerializationError: If a value has no canonical encoding
            TypeError: If values is a single str or bytes-like object
        """
        if isinstance(values, (str, bytes, bytearray, memoryview)):
            raise TypeError(
                f"values must be a sequence of values, not a single {type(values).__name__}; "
                f"wrap it in a list to commit to one value"
            )

        values = list(values)
        if not values:
            raise EmptyInputError("Cannot build Merkle tree from empty values list")

        start_time = time.perf_counter()

        self._hasher = hasher if hasher is not None else DEFAULT_HASHER
        self._parallel_threshold = parallel_threshold or self.PARALLEL_THRESHOLD
        self._max_workers = max_workers or self.MAX_WORKERS
        self.use_parallel = use_parallel and len(values) >= self._parallel_threshold

        self._leaves: Tuple[bytes, ...] = tuple(serialize_value(value) for value in values)

        # Levels bottom to top: levels[0] is the leaves, levels[-1] is (root,)
        self._levels: Tuple[Tuple[bytes, ...], ...] = self._build_levels()

        duration_ms = (time.perf_counter() - start_time) * 1000
        log_merkle_root_computation(
            logger,
            leaf_count=self.leaf_count,
            merkle_root=self.root.hex(),
            duration_ms=round(duration_ms, 3),
            hasher=self._hasher.name,
            parallel=self.use_parallel,
        )

    @classmethod
    def from_config(cls, values: Iterable[Any], merkle_config) -> "MerkleTree":
        """
        Build a tree using the hasher and thread pool settings of a MerkleConfig.
        """
        return cls(
            values,
            hasher=create_hasher(merkle_config),
            parallel_threshold=merkle_config.parallel_threshold,
            max_workers=merkle_config.max_workers,
        )

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def leaves(self) -> Tuple[bytes, ...]:
        return self._leaves

    @property
    def levels(self) -> Tuple[Tuple[bytes, ...], ...]:
        return self._levels

    @property
    def leaf_count(self) -> int:
        return len(self._leaves)

    @property
    def height(self) -> int:
        return len(self._levels) - 1

    @property
    def root(self) -> bytes:
        return self._levels[-1][0]

    def get_root(self) -> bytes:
        """
        Get the Merkle root.

        Returns:
            Root digest (the raw leaf bytes for a single-leaf tree)
        """
        return self.root

    def _hash_pair(self, pair: Tuple[bytes, bytes]) -> bytes:
        return self._hasher.hash(pair[0], pair[1])

    def _pairs(self, level: Sequence[bytes]) -> List[Tuple[bytes, bytes]]:
        return [(level[i], _paired_node(level, i)) for i in range(0, len(level), 2)]

    def _build_levels(self) -> Tuple[Tuple[bytes, ...], ...]:
        """
        Build the tree bottom-up by hashing pairs until one node remains.

        Levels with at least parallel_threshold nodes are hashed on a thread
        pool when use_parallel is set. The output is identical either way.
        """
        levels = [self._leaves]
        current_level: Sequence[bytes] = self._leaves

        executor = None
        if self.use_parallel:
            executor = concurrent.futures.ThreadPoolExecutor(max_workers=self._max_workers)

        try:
            while len(current_level) > 1:
                pairs = self._pairs(current_level)

                if executor is not None and len(current_level) >= self._parallel_threshold:
                    next_level = tuple(executor.map(self._hash_pair, pairs))
                else:
                    next_level = tuple(self._hash_pair(pair) for pair in pairs)

                levels.append(next_level)
                current_level = next_level
        finally:
            if executor is not None:
                executor.shutdown(wait=True)

        return tuple(levels)

    def generate_proof(self, leaf_index: int) -> MerkleProof:
        """
        Generate the Merkle proof for the leaf at the given index.

        The proof holds one sibling per level below the root. When the node
        on the path is the unpaired last node of an odd-sized level, its
        sibling is the node itself, mirroring construction. Proof length
        therefore always equals the tree height.

        Args:
            leaf_index: Index of the leaf (0-based)

        Returns:
            MerkleProof containing sibling digests, bottom to top

        Raises:
            IndexOutOfRangeError: If leaf_index is not in [0, leaf_count)
        """
        if not _is_index(leaf_index) or not 0 <= leaf_index < self.leaf_count:
            raise IndexOutOfRangeError(
                f"Leaf index {leaf_index!r} out of range [0, {self.leaf_count})"
            )

        siblings = []
        current_index = leaf_index

        for level in self._levels[:-1]:
            siblings.append(_paired_node(level, current_index))
            current_index //= 2

        proof = MerkleProof(siblings=tuple(siblings))
        log_merkle_proof_generation(logger, leaf_index=leaf_index, proof_length=len(proof))
        return proof

    @staticmethod
    def verify_proof(
        root: bytes,
        leaf_index: int,
        value: Any,
        proof: Union[MerkleProof, Sequence[bytes]],
        hasher: Optional[Hasher] = None,
    ) -> bool:
        """
        Verify a Merkle proof without access to the tree.

        Serializes the value exactly as construction does, then folds in each
        sibling: hash(current, sibling) when the index is even and
        hash(sibling, current) when odd, halving the index at each step.

        Never raises. Malformed input of any kind yields False.

        Args:
            root: Claimed Merkle root
            leaf_index: Claimed leaf index
            value: Original (unserialized) value
            proof: MerkleProof or sequence of sibling digests
            hasher: Pairwise hash the tree was built with (default: SHA-256)

        Returns:
            True if the proof reconstructs the claimed root, False otherwise
        """
        start_time = time.perf_counter()
        failure_reason = _replay_proof(
            root, leaf_index, value, proof, hasher if hasher is not None else DEFAULT_HASHER
        )
        duration_ms = (time.perf_counter() - start_time) * 1000

        log_merkle_verification(
            logger,
            leaf_index=leaf_index if _is_index(leaf_index) else repr(leaf_index),
            success=failure_reason is None,
            duration_ms=round(duration_ms, 3),
            failure_reason=failure_reason,
        )
        return failure_reason is None


def _replay_proof(
    root: Any,
    leaf_index: Any,
    value: Any,
    proof: Any,
    hasher: Hasher,
) -> Optional[str]:
    """Recompute the root from a proof. Returns a failure reason, or None on success."""
    if not isinstance(root, (bytes, bytearray)):
        return "root is not a byte string"

    if not _is_index(leaf_index) or leaf_index < 0:
        return "leaf index is not a non-negative integer"

    raw_siblings = proof.siblings if isinstance(proof, MerkleProof) else proof
    if isinstance(raw_siblings, (bytes, bytearray, str)):
        return "proof is not a sequence of digests"
    try:
        siblings = tuple(raw_siblings)
    except TypeError:
        return "proof is not a sequence of digests"

    for sibling in siblings:
        if not isinstance(sibling, (bytes, bytearray)):
            return "proof contains a non-bytes sibling"

    # A real leaf index always fits in len(proof) bits
    if leaf_index >> len(siblings):
        return "leaf index exceeds proof height"

    # Value encoders and hashers are caller code, any failure means "not verified"
    try:
        current_hash = serialize_value(value)
    except Exception as e:
        return f"value cannot be serialized: {e!r}"

    current_index = leaf_index
    try:
        for sibling in siblings:
            if current_index % 2 == 0:
                current_hash = hasher.hash(current_hash, bytes(sibling))
            else:
                current_hash = hasher.hash(bytes(sibling), current_hash)
            current_index //= 2
    except Exception as e:
        return f"hasher failed: {e!r}"

    if current_hash != bytes(root):
        return "computed root does not match claimed root"
    return None


class MerkleTreeBuilder:
    """
    Builder class for constructing Merkle trees from value batches.

    Example:
        >>> builder = MerkleTreeBuilder()
        >>> builder.build_tree(values)
        >>> root = builder.get_root()
        >>> proof = builder.get_proof(value_index)
    """

    def __init__(self, hasher: Optional[Hasher] = None):
        self._hasher = hasher
        self._tree: Optional[MerkleTree] = None

    @property
    def tree(self) -> Optional[MerkleTree]:
        return self._tree

    def build_tree(self, values: Iterable[Any]) -> 'MerkleTreeBuilder':
        """
        Build Merkle tree from a batch of values.

        Returns:
            Self for method chaining

        Raises:
            EmptyInputError: If values is empty
        """
        self._tree = MerkleTree(values, hasher=self._hasher)

        logger.debug(f"Built Merkle tree with {self._tree.leaf_count} values")

        return self

    def get_root(self) -> bytes:
        """
        Raises:
            RuntimeError: If tree has not been built yet
        """
        if self._tree is None:
            raise RuntimeError("Tree has not been built yet. Call build_tree() first.")

        return self._tree.get_root()

    def get_proof(self, value_index: int) -> MerkleProof:
        """
        Raises:
            RuntimeError: If tree has not been built yet
            IndexOutOfRangeError: If value_index is out of range
        """
        if self._tree is None:
            raise RuntimeError("Tree has not been built yet. Call build_tree() first.")

        return self._tree.generate_proof(value_index)


def build(values: Iterable[Any], hasher: Optional[Hasher] = None) -> MerkleTree:
    """Build a MerkleTree over values. Raises EmptyInputError for empty input."""
    return MerkleTree(values, hasher=hasher)


def prove(tree: MerkleTree, index: int) -> MerkleProof:
    """Generate the proof for tree's leaf at index. Raises IndexOutOfRangeError."""
    return tree.generate_proof(index)


def verify(
    root: bytes,
    index: int,
    value: Any,
    proof: Union[MerkleProof, Sequence[bytes]],
    hasher: Optional[Hasher] = None,
) -> bool:
    """Verify that value sits at index under root. Never raises."""
    return MerkleTree.verify_proof(root, index, value, proof, hasher=hasher)
