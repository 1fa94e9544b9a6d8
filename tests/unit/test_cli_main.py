"""
Unit tests for the zkmerkle CLI.

Each invocation points --config at a missing file so the default
configuration is used regardless of the caller's home directory.
"""

import json

import pytest
from click.testing import CliRunner

from zkmerkle.cli.main import cli
from zkmerkle.merkle.field import ScalarField
from zkmerkle.merkle.tree import MerkleTree


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def invoke(runner, missing_config_path):
    def _invoke(*args):
        return runner.invoke(cli, ["--config", str(missing_config_path), *args])
    return _invoke


class TestCLIMain:
    """Test CLI entry point and global options."""

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "Merkle tree commitments" in result.output
        assert "--config" in result.output
        assert "--log-level" in result.output
        for command in ("root", "prove", "verify", "inspect", "demo"):
            assert command in result.output

    def test_cli_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_invalid_config_file(self, runner, temp_dir):
        config_path = temp_dir / "config.yaml"
        config_path.write_text("merkle:\n  max_workers: 0\n")

        result = runner.invoke(cli, ["--config", str(config_path), "demo"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestRootCommand:
    """Test 'zkmerkle root'."""

    def test_prints_hex_root(self, invoke, make_values_file):
        values_path = make_values_file(["alice", "bob", "carol"])

        result = invoke("root", str(values_path))

        assert result.exit_code == 0
        assert result.output.strip() == MerkleTree(["alice", "bob", "carol"]).get_root().hex()

    def test_field_encoding(self, invoke, make_values_file):
        values_path = make_values_file([1, "2", "0x03"])

        result = invoke("root", "--encoding", "field", str(values_path))

        expected = MerkleTree([ScalarField(1), ScalarField(2), ScalarField(3)]).get_root().hex()
        assert result.exit_code == 0
        assert result.output.strip() == expected

    def test_configured_hasher_changes_root(self, runner, temp_dir, make_values_file):
        values_path = make_values_file(["alice", "bob"])
        config_path = temp_dir / "config.yaml"
        config_path.write_text("merkle:\n  hash_backend: cryptography\n  hash_algorithm: blake2s\n")

        default_result = runner.invoke(cli, ["--config", str(temp_dir / "absent.yaml"), "root", str(values_path)])
        blake_result = runner.invoke(cli, ["--config", str(config_path), "root", str(values_path)])

        assert default_result.exit_code == 0
        assert blake_result.exit_code == 0
        assert default_result.output.strip() != blake_result.output.strip()

    def test_info_log_level_reports_root_computation(self, invoke, make_values_file):
        values_path = make_values_file(["alice", "bob"])

        result = invoke("--log-level", "INFO", "root", str(values_path))

        assert result.exit_code == 0
        assert "merkle_root_computed" in result.output

    def test_empty_values_file(self, invoke, make_values_file):
        values_path = make_values_file([])

        result = invoke("root", str(values_path))

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "empty" in result.output

    def test_values_file_must_be_array(self, invoke, make_values_file):
        values_path = make_values_file({"values": ["a"]})

        result = invoke("root", str(values_path))

        assert result.exit_code != 0
        assert "JSON array" in result.output

    def test_undecodable_value(self, invoke, make_values_file):
        values_path = make_values_file(["not-hex"])

        result = invoke("root", "--encoding", "hex", str(values_path))

        assert result.exit_code == 1
        assert "Error:" in result.output


class TestProveAndVerifyCommands:
    """Test 'zkmerkle prove' and 'zkmerkle verify' together."""

    VALUES = ["alice", "bob", "carol", "dave", "erin"]

    def _prove(self, invoke, make_values_file, temp_dir, index):
        values_path = make_values_file(self.VALUES)
        proof_path = temp_dir / "proofs" / f"proof-{index}.json"

        result = invoke("prove", str(values_path), str(index), "--output", str(proof_path))

        assert result.exit_code == 0
        assert f"Proof for index {index} written to" in result.output
        return proof_path, json.loads(proof_path.read_text())

    def test_proof_document(self, invoke, make_values_file, temp_dir):
        _, document = self._prove(invoke, make_values_file, temp_dir, 2)

        tree = MerkleTree(self.VALUES)
        assert document["index"] == 2
        assert document["root"] == tree.get_root().hex()
        assert document["siblings"] == [s.hex() for s in tree.generate_proof(2).siblings]
        assert len(document["siblings"]) == 3

    def test_verify_valid(self, invoke, make_values_file, temp_dir):
        proof_path, document = self._prove(invoke, make_values_file, temp_dir, 4)

        result = invoke(
            "verify", "--root", document["root"], "--index", "4",
            "--value", "erin", "--proof", str(proof_path),
        )

        assert result.exit_code == 0
        assert result.output.splitlines()[-1] == "valid"

    def test_verify_root_prefix_is_case_insensitive(self, invoke, make_values_file, temp_dir):
        proof_path, document = self._prove(invoke, make_values_file, temp_dir, 3)

        result = invoke(
            "verify", "--root", "0X" + document["root"].upper(), "--index", "3",
            "--value", "dave", "--proof", str(proof_path),
        )

        assert result.exit_code == 0
        assert result.output.splitlines()[-1] == "valid"

    def test_verify_wrong_value(self, invoke, make_values_file, temp_dir):
        proof_path, document = self._prove(invoke, make_values_file, temp_dir, 1)

        result = invoke(
            "verify", "--root", document["root"], "--index", "1",
            "--value", "mallory", "--proof", str(proof_path),
        )

        assert result.exit_code == 1
        assert "invalid" in result.output

    def test_verify_wrong_index(self, invoke, make_values_file, temp_dir):
        proof_path, document = self._prove(invoke, make_values_file, temp_dir, 1)

        result = invoke(
            "verify", "--root", document["root"], "--index", "0",
            "--value", "bob", "--proof", str(proof_path),
        )

        assert result.exit_code == 1
        assert "invalid" in result.output

    def test_verify_bad_root_hex(self, invoke, make_values_file, temp_dir):
        proof_path, _ = self._prove(invoke, make_values_file, temp_dir, 1)

        result = invoke(
            "verify", "--root", "zz", "--index", "1",
            "--value", "bob", "--proof", str(proof_path),
        )

        assert result.exit_code == 1
        assert "Invalid root hex" in result.output

    def test_verify_malformed_proof_file(self, invoke, temp_dir):
        proof_path = temp_dir / "proof.json"
        proof_path.write_text(json.dumps({"siblings": "not-a-list"}))

        result = invoke(
            "verify", "--root", "00" * 32, "--index", "0",
            "--value", "alice", "--proof", str(proof_path),
        )

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_prove_index_out_of_range(self, invoke, make_values_file):
        values_path = make_values_file(self.VALUES)

        result = invoke("prove", str(values_path), "5")

        assert result.exit_code == 1
        assert "out of range" in result.output


class TestInspectCommand:
    """Test 'zkmerkle inspect'."""

    def test_shows_levels_and_root(self, invoke, make_values_file):
        values_path = make_values_file(["alice", "bob", "carol"])

        result = invoke("inspect", str(values_path))

        assert result.exit_code == 0
        assert "Merkle tree levels" in result.output
        assert "Height: 2" in result.output
        assert MerkleTree(["alice", "bob", "carol"]).get_root().hex() in result.output


class TestDemoCommand:
    """Test 'zkmerkle demo'."""

    def test_demo_default(self, invoke):
        result = invoke("demo")

        assert result.exit_code == 0
        assert "Merkle tree constructed over 4 values" in result.output
        assert "Proof valid for the committed value: True" in result.output
        assert "Proof valid for a random value: False" in result.output

    def test_demo_seed_is_reproducible(self, invoke):
        first = invoke("demo", "--seed", "7", "--count", "6", "--index", "5")
        second = invoke("demo", "--seed", "7", "--count", "6", "--index", "5")

        assert first.exit_code == 0
        assert first.output == second.output

    def test_demo_index_out_of_range(self, invoke):
        result = invoke("demo", "--count", "2", "--index", "2")

        assert result.exit_code == 1
        assert "out of range" in result.output
