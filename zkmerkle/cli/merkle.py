"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zkmerkle, a product of Garudex Labs

CLI commands for Merkle tree operations.

Provides commands for:
- Computing the Merkle root of a values file
- Generating an inclusion proof for one value
- Verifying a proof against a root
- Inspecting the levels of a tree
- Running the scalar field demo

Values files are JSON arrays. With --encoding utf8 (default) each entry is a
string committed as its UTF-8 bytes, with hex each entry is a hex string of
raw bytes, and with field each entry is a BLS12-381 scalar (integer or
decimal/0x string).
"""

import json
import random
import sys
from pathlib import Path
from typing import Any, List

import click
from rich.console import Console
from rich.table import Table

from zkmerkle.cli.context import CLIContext, pass_context
from zkmerkle.config.settings import get_default_config
from zkmerkle.exceptions import ZkMerkleError
from zkmerkle.logging_config import get_logger
from zkmerkle.merkle.field import ScalarField
from zkmerkle.merkle.hasher import create_hasher
from zkmerkle.merkle.serialization import VALUE_ENCODINGS, decode_value
from zkmerkle.merkle.tree import MerkleProof, MerkleTree

logger = get_logger(__name__)


encoding_option = click.option(
    "--encoding",
    "-e",
    type=click.Choice(VALUE_ENCODINGS),
    default="utf8",
    show_default=True,
    help="How values are turned into leaves",
)


def load_values(values_file: Path, encoding: str) -> List[Any]:
    """
    Read a JSON array of values and decode each entry.

    Raises:
        ZkMerkleError: If an entry cannot be decoded
        click.ClickException: If the file is not a JSON array
    """
    try:
        raw_values = json.loads(Path(values_file).read_text())
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Cannot read values file {values_file}: {e}")

    if not isinstance(raw_values, list):
        raise click.ClickException(f"Values file {values_file} must contain a JSON array")

    return [decode_value(raw, encoding) for raw in raw_values]


def _merkle_config(ctx: CLIContext):
    config = ctx.config if ctx.config is not None else get_default_config()
    return config.merkle


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.command("root")
@click.argument("values_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@encoding_option
@pass_context
def root(ctx: CLIContext, values_file: Path, encoding: str):
    """
    Print the hex Merkle root of VALUES_FILE.

    Examples:

        zkmerkle root values.json

        zkmerkle root --encoding field scalars.json
    """
    try:
        values = load_values(values_file, encoding)
        tree = MerkleTree.from_config(values, _merkle_config(ctx))
    except ZkMerkleError as e:
        _fail(str(e))

    logger.info("merkle_root_computed", leaf_count=tree.leaf_count, values_file=str(values_file))
    if ctx.verbose:
        click.echo(f"Leaves: {tree.leaf_count}  Height: {tree.height}", err=True)
    click.echo(tree.get_root().hex())


@click.command("prove")
@click.argument("values_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("index", type=int)
@encoding_option
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the proof JSON to this file instead of stdout",
)
@pass_context
def prove(ctx: CLIContext, values_file: Path, index: int, encoding: str, output):
    """
    Generate the inclusion proof for the value at INDEX of VALUES_FILE.

    The proof is written as JSON: {"index": ..., "root": ..., "siblings": [...]}.

    Examples:

        zkmerkle prove values.json 2 -o proof.json
    """
    try:
        values = load_values(values_file, encoding)
        tree = MerkleTree.from_config(values, _merkle_config(ctx))
        proof = tree.generate_proof(index)
    except ZkMerkleError as e:
        _fail(str(e))

    document = {"index": index, "root": tree.get_root().hex()}
    document.update(proof.to_dict())
    text = json.dumps(document, indent=2)

    if output is None:
        click.echo(text)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n")
    click.echo(f"✓ Proof for index {index} written to {output}")
    logger.info("proof_written", leaf_index=index, path=str(output))


@click.command("verify")
@click.option("--root", "root_hex", required=True, help="Claimed Merkle root (hex)")
@click.option("--index", "-i", required=True, type=int, help="Claimed leaf index")
@click.option("--value", required=True, help="Value to check, in the chosen encoding")
@click.option(
    "--proof",
    "-p",
    "proof_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Proof JSON file produced by 'zkmerkle prove'",
)
@encoding_option
@pass_context
def verify(ctx: CLIContext, root_hex: str, index: int, value: str, proof_file: Path, encoding: str):
    """
    Verify that VALUE sits at INDEX under ROOT.

    Exits 0 and prints "valid" when the proof holds, exits 1 and prints
    "invalid" otherwise.

    Examples:

        zkmerkle verify --root 3a7f... --index 2 --value carol --proof proof.json
    """
    try:
        claimed_root = bytes.fromhex(root_hex[2:] if root_hex.lower().startswith("0x") else root_hex)
    except ValueError as e:
        _fail(f"Invalid root hex: {e}")

    try:
        document = json.loads(proof_file.read_text())
    except (OSError, ValueError) as e:
        _fail(f"Cannot read proof file {proof_file}: {e}")

    try:
        proof = MerkleProof.from_dict(document)
        decoded_value = decode_value(value, encoding)
        hasher = create_hasher(_merkle_config(ctx))
    except ZkMerkleError as e:
        _fail(str(e))

    if MerkleTree.verify_proof(claimed_root, index, decoded_value, proof, hasher=hasher):
        logger.info("proof_accepted", leaf_index=index, proof_file=str(proof_file))
        click.echo("valid")
        return

    logger.info("proof_rejected", leaf_index=index, proof_file=str(proof_file))
    click.echo("invalid")
    sys.exit(1)


@click.command("inspect")
@click.argument("values_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@encoding_option
@pass_context
def inspect_tree(ctx: CLIContext, values_file: Path, encoding: str):
    """
    Show every level of the tree built from VALUES_FILE.
    """
    try:
        values = load_values(values_file, encoding)
        tree = MerkleTree.from_config(values, _merkle_config(ctx))
    except ZkMerkleError as e:
        _fail(str(e))

    table = Table(show_header=True, header_style="bold cyan", title="Merkle tree levels")
    table.add_column("Level", justify="right")
    table.add_column("Nodes", justify="right")
    table.add_column("Digests", style="dim")

    for number, level in enumerate(tree.levels):
        digests = ", ".join(node.hex()[:16] + "..." for node in level[:4])
        if len(level) > 4:
            digests += f" (+{len(level) - 4} more)"
        table.add_row(str(number), str(len(level)), digests)

    console = Console()
    console.print(table)
    console.print(f"Hasher: {tree.hasher.name}  Height: {tree.height}")
    console.print(f"Root: {tree.get_root().hex()}", soft_wrap=True)


@click.command("demo")
@click.option("--count", "-n", type=click.IntRange(min=1), default=4, show_default=True,
              help="Number of random scalar field values")
@click.option("--index", "-i", type=int, default=1, show_default=True,
              help="Index of the value to prove")
@click.option("--seed", type=int, default=None, help="Seed for reproducible values")
@pass_context
def demo(ctx: CLIContext, count: int, index: int, seed):
    """
    Commit to random BLS12-381 scalars, then prove and verify one of them.
    """
    rng = random.Random(seed) if seed is not None else None
    values = [ScalarField.random(rng) for _ in range(count)]

    tree = MerkleTree.from_config(values, _merkle_config(ctx))
    click.echo(f"Merkle tree constructed over {count} values")
    click.echo(f"Merkle root: {tree.get_root().hex()}")

    try:
        proof = tree.generate_proof(index)
    except ZkMerkleError as e:
        _fail(str(e))

    click.echo(f"Proof for index {index}:")
    for sibling in proof:
        click.echo(f"  {sibling.hex()}")

    hasher = tree.hasher
    is_valid = MerkleTree.verify_proof(tree.get_root(), index, values[index], proof, hasher=hasher)
    click.echo(f"Proof valid for the committed value: {is_valid}")

    invalid_value = ScalarField.random(rng)
    is_invalid = MerkleTree.verify_proof(tree.get_root(), index, invalid_value, proof, hasher=hasher)
    click.echo(f"Proof valid for a random value: {is_invalid}")

    if not is_valid or is_invalid:
        sys.exit(1)
