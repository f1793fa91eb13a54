"""Tests for the crypto_explore and crypto_eval command-line interfaces."""

import json

from click.testing import CliRunner

from crypto_eval import __version__ as eval_version
from crypto_eval.cli import main as eval_main
from crypto_explore import __version__ as explore_version
from crypto_explore.cli import main as explore_main


class TestExploreAes:
    """Tests for the 'aes' subcommand."""

    def test_default_run(self, capsys) -> None:
        assert explore_main(["aes"]) == 0
        out = capsys.readouterr().out
        assert "Verification: [OK] PASS" in out
        assert "Steps: 39" in out
        assert "Step counts" in out
        assert "MixColumns: 9" in out

    def test_fips_vector(self, capsys) -> None:
        rc = explore_main([
            "aes",
            "--key", "2b7e151628aed2a6abf7158809cf4f3c",
            "--pt-hex", "3243f6a8885a308d313198a2e0370734",
        ])
        assert rc == 0
        assert "Ciphertext: 3925841d02dc09fbdc118597196a0b32" in capsys.readouterr().out

    def test_show_keys(self, capsys) -> None:
        assert explore_main(["aes", "--show-keys"]) == 0
        out = capsys.readouterr().out
        assert "RoundKey[0]:" in out
        assert "RoundKey[10]:" in out

    def test_verbose(self, capsys) -> None:
        assert explore_main(["aes", "--text", "Hello World!", "--verbose"]) == 0
        out = capsys.readouterr().out
        assert "SubBytes" in out
        assert "Final AddRoundKey" in out

    def test_trace_file(self, tmp_path, capsys) -> None:
        path = tmp_path / "aes.jsonl"
        assert explore_main(["aes", "--trace", str(path)]) == 0
        lines = path.read_text().splitlines()
        assert len(lines) == 39
        assert json.loads(lines[0])["operation"] == "SubBytes"

    def test_bad_key(self, capsys) -> None:
        assert explore_main(["aes", "--key", "1234"]) == 1
        assert "Error: Invalid key" in capsys.readouterr().out

    def test_non_hex_key(self, capsys) -> None:
        assert explore_main(["aes", "--key", "g" * 32]) == 1
        assert "non-hex" in capsys.readouterr().out

    def test_bad_plaintext(self, capsys) -> None:
        assert explore_main(["aes", "--pt-hex", "00ff"]) == 1
        assert "Error: Plaintext must be 32 hex chars" in capsys.readouterr().out


class TestExploreSha256:
    """Tests for the 'sha256' subcommand."""

    def test_default_message(self, capsys) -> None:
        assert explore_main(["sha256"]) == 0
        out = capsys.readouterr().out
        assert "a591a6d40bf420404a011733cfb7b190d62c65bf0bcda32b57b277d9ad9f146e" in out
        assert "Steps: 66" in out
        assert "Verification: [OK] PASS" in out

    def test_two_blocks(self, capsys) -> None:
        assert explore_main(["sha256", "--message", "x" * 60]) == 0
        out = capsys.readouterr().out
        assert "2 block(s)" in out
        assert "Steps: 130" in out
        assert "scheduling: 1" in out
        assert "compress: 128" in out

    def test_verbose(self, capsys) -> None:
        assert explore_main(["sha256", "--message", "abc", "--verbose"]) == 0
        assert "REGS:" in capsys.readouterr().out


class TestExploreAvalanche:
    def test_compare(self, capsys) -> None:
        assert explore_main(["avalanche", "Hello World", "Hello World!"]) == 0
        out = capsys.readouterr().out
        assert "Hamming distance:" in out
        assert "/256" in out

    def test_no_command(self, capsys) -> None:
        assert explore_main([]) == 1


class TestEvalCli:
    """Tests for the click-based crypto-eval CLI."""

    def test_validate(self) -> None:
        runner = CliRunner()
        result = runner.invoke(eval_main, ["validate", "--n", "3", "--seed", "5"])
        assert result.exit_code == 0
        assert "VALIDATION PASSED" in result.output

    def test_validate_verbose(self) -> None:
        runner = CliRunner()
        result = runner.invoke(eval_main, ["validate", "--n", "1", "--seed", "5", "-v"])
        assert result.exit_code == 0
        assert "Primitive" in result.output

    def test_avalanche(self, tmp_path) -> None:
        runner = CliRunner()
        result = runner.invoke(
            eval_main,
            ["avalanche", "--trials", "10", "--seed", "1", "--out", str(tmp_path)],
        )
        assert result.exit_code == 0
        assert "Mean distance:" in result.output
        assert (tmp_path / "avalanche_trials.csv").exists()
        assert (tmp_path / "avalanche.json").exists()
        assert (tmp_path / "avalanche.md").exists()

    def test_avalanche_bad_config(self) -> None:
        runner = CliRunner()
        result = runner.invoke(eval_main, ["avalanche", "--trials", "0"])
        assert result.exit_code == 1

    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(eval_main, ["--version"])
        assert result.exit_code == 0
        assert eval_version in result.output
        assert eval_version == explore_version
