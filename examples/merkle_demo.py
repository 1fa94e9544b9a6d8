"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zkmerkle, a product of Garudex Labs

Merkle Tree Demo for zkmerkle.

This example commits to a handful of BLS12-381 scalar field elements, proves
that one of them is part of the commitment, and shows that the same proof
does not vouch for a different value.
"""

import random

from zkmerkle import MerkleTree, ScalarField
from zkmerkle.logging_config import setup_logging


def main():
    """Run the Merkle tree demo."""
    setup_logging(level="WARNING", json_format=False)

    # Fixed seed so the printed root is reproducible
    rng = random.Random(42)

    values = [ScalarField.random(rng) for _ in range(4)]

    print("=" * 60)
    print("Merkle Tree Demo for zkmerkle")
    print("=" * 60)

    # Step 1: Construct the Merkle tree
    tree = MerkleTree(values)
    print("\n✓ Merkle tree constructed successfully")

    # Step 2: The root is the commitment to all four values
    root = tree.get_root()
    print(f"  Merkle root: {root.hex()}")

    # Step 3: Proof for the second value
    index = 1
    proof = tree.generate_proof(index)
    print(f"\n✓ Proof generated for index {index}:")
    for sibling in proof:
        print(f"    {sibling.hex()}")

    # Step 4: Verify with nothing but the root, the index and the value
    is_valid = MerkleTree.verify_proof(root, index, values[index], proof)
    print(f"\nIs the proof valid? {is_valid}")

    # Step 5: A value that was never committed
    invalid_value = ScalarField.random(rng)
    is_invalid = MerkleTree.verify_proof(root, index, invalid_value, proof)
    print(f"Is the proof valid for an invalid value? {is_invalid}")

    print("\n" + "=" * 60)
    print("Demo completed!")
    print("=" * 60)


if __name__ == "__main__":
    main()
