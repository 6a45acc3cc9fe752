"""
CLI Tests

Tests for the auditpath command line:
1. build prints the reference root
2. prove writes a proof file that verify accepts
3. verification failure (exit 2) vs lookup/input errors (exit 1)
4. config --init / --show
"""
import json
import logging

import pytest

from auditpath_cli.main import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    main,
)

from fixtures.common import VECTOR_LEAVES_HEX, VECTOR_ROOT_3_HEX, flip_byte


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every CLI test in an empty directory so no config file is picked up."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    yield tmp_path
    # setup_logging binds a handler to the captured stderr of this test
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


def _prove_to_file(tmp_path, target_hex, leaves_hex):
    out = tmp_path / "proof.json"
    code = main(["prove", target_hex, *leaves_hex, "--out", str(out)])
    assert code == EXIT_SUCCESS
    return out


class TestBuildCommand:

    def test_build_prints_root(self, capsys):
        code = main(["build", *VECTOR_LEAVES_HEX[:3]])

        assert code == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert f"root: {VECTOR_ROOT_3_HEX}" in out
        assert "width: 4" in out

    def test_build_json_with_nodes(self, capsys):
        code = main(["build", *VECTOR_LEAVES_HEX[:3], "--json", "--nodes"])

        assert code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["root"] == VECTOR_ROOT_3_HEX
        assert len(data["nodes"]) == 7
        assert data["nodes"][3] is None

    def test_build_from_file(self, tmp_path, capsys):
        leaf_file = tmp_path / "leaves.txt"
        leaf_file.write_text("# reference leaves\n" + "\n".join(VECTOR_LEAVES_HEX[:3]) + "\n\n")

        code = main(["build", "--file", str(leaf_file)])

        assert code == EXIT_SUCCESS
        assert VECTOR_ROOT_3_HEX in capsys.readouterr().out

    def test_build_without_leaves_fails(self, capsys):
        code = main(["build"])

        assert code == EXIT_RUNTIME_ERROR
        assert "EMPTY_INPUT" in capsys.readouterr().err

    def test_build_with_bad_hex_fails(self, capsys):
        code = main(["build", "abc"])

        assert code == EXIT_RUNTIME_ERROR
        assert "INVALID_ENCODING" in capsys.readouterr().err

    def test_build_with_absent_leaf(self, capsys):
        code = main(["build", VECTOR_LEAVES_HEX[0], "null", "--json", "--nodes"])

        assert code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["nodes"][1] is None


class TestProveAndVerify:

    def test_prove_prints_proof(self, capsys):
        code = main(["prove", VECTOR_LEAVES_HEX[4], *VECTOR_LEAVES_HEX])

        assert code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["positions"] == [5, 11, 12, 14]
        assert data["leaf"] == VECTOR_LEAVES_HEX[4]

    def test_prove_then_verify(self, tmp_path, capsys):
        proof_path = _prove_to_file(tmp_path, VECTOR_LEAVES_HEX[4], VECTOR_LEAVES_HEX)

        code = main(["verify", str(proof_path)])

        assert code == EXIT_SUCCESS
        assert "result: VALID" in capsys.readouterr().out

    def test_verify_against_trusted_root(self, tmp_path, capsys):
        proof_path = _prove_to_file(tmp_path, VECTOR_LEAVES_HEX[1], VECTOR_LEAVES_HEX[:3])

        assert main(["verify", str(proof_path), "--root", VECTOR_ROOT_3_HEX]) == EXIT_SUCCESS
        assert main(["verify", str(proof_path), "--root", "11" * 32]) == EXIT_VERIFICATION_FAILED

    def test_verify_tampered_leaf_fails(self, tmp_path, capsys):
        proof_path = _prove_to_file(tmp_path, VECTOR_LEAVES_HEX[2], VECTOR_LEAVES_HEX)
        tampered = flip_byte(bytes.fromhex(VECTOR_LEAVES_HEX[2])).hex()
        capsys.readouterr()

        code = main(["verify", str(proof_path), "--leaf", tampered, "--json"])

        assert code == EXIT_VERIFICATION_FAILED
        data = json.loads(capsys.readouterr().out)
        assert data["proof_ok"] is False

    def test_verify_leaf_option_for_proof_without_leaf(self, tmp_path, capsys):
        proof_path = _prove_to_file(tmp_path, VECTOR_LEAVES_HEX[3], VECTOR_LEAVES_HEX)
        doc = json.loads(proof_path.read_text())
        del doc["leaf"]
        proof_path.write_text(json.dumps(doc))
        capsys.readouterr()

        assert main(["verify", str(proof_path)]) == EXIT_RUNTIME_ERROR
        assert "does not record one" in capsys.readouterr().err
        assert main(["verify", str(proof_path), "--leaf", VECTOR_LEAVES_HEX[3]]) == EXIT_SUCCESS

    def test_verify_takes_proof_path_first(self, tmp_path):
        proof_path = _prove_to_file(tmp_path, VECTOR_LEAVES_HEX[0], VECTOR_LEAVES_HEX)

        with pytest.raises(SystemExit):
            main(["verify", VECTOR_LEAVES_HEX[0], str(proof_path)])

    def test_verify_trace(self, tmp_path, capsys):
        proof_path = _prove_to_file(tmp_path, VECTOR_LEAVES_HEX[4], VECTOR_LEAVES_HEX)
        capsys.readouterr()

        code = main(["verify", str(proof_path), "--trace", "--json"])

        assert code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert [t["position"] for t in data["trace"]] == [5, 11, 12]
        assert data["trace"][-1]["accumulator"] == data["root"]

    def test_prove_unknown_leaf_is_runtime_error(self, capsys):
        code = main(["prove", "22" * 32, *VECTOR_LEAVES_HEX])

        assert code == EXIT_RUNTIME_ERROR
        assert "LEAF_NOT_FOUND" in capsys.readouterr().err

    def test_verify_malformed_proof(self, tmp_path, capsys):
        proof_path = tmp_path / "broken.json"
        proof_path.write_text(json.dumps({
            "positions": [],
            "siblings": [],
            "leaf": VECTOR_LEAVES_HEX[0],
        }))

        code = main(["verify", str(proof_path)])

        assert code == EXIT_RUNTIME_ERROR
        assert "MALFORMED_PROOF" in capsys.readouterr().err

    def test_verify_missing_file(self, tmp_path, capsys):
        code = main(["verify", str(tmp_path / "missing.json")])

        assert code == EXIT_RUNTIME_ERROR
        assert "not found" in capsys.readouterr().err


class TestConfigCommand:

    def test_init_creates_file(self, tmp_path, capsys):
        code = main(["config", "--init"])

        assert code == EXIT_SUCCESS
        data = json.loads((tmp_path / "auditpath.json").read_text())
        assert data["hashing"]["max_workers"] == 1

    def test_init_refuses_to_overwrite(self, tmp_path):
        (tmp_path / "auditpath.json").write_text("{}")

        assert main(["config", "--init"]) == EXIT_RUNTIME_ERROR

    def test_show_reads_config_file(self, tmp_path, capsys):
        (tmp_path / "auditpath.json").write_text(json.dumps({
            "output_format": "json",
            "hashing": {"max_workers": 2},
        }))

        code = main(["config", "--show"])

        assert code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["output_format"] == "json"
        assert data["hashing"]["max_workers"] == 2

    def test_json_output_format_from_config(self, tmp_path, capsys):
        (tmp_path / "auditpath.json").write_text(json.dumps({"output_format": "json"}))

        assert main(["build", *VECTOR_LEAVES_HEX[:3]]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["root"] == VECTOR_ROOT_3_HEX


class TestNoCommand:

    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR
