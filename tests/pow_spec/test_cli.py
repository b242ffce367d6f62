"""Tests for the command line interface.

Runs `main` in-process against chain and parameter files written to a
temporary directory.
"""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from pow_spec.__main__ import (
    EXIT_ERROR,
    EXIT_INVALID,
    main,
    parse_compact,
    parse_display_hash,
)
from pow_spec.subspecs.params import TESTNET_PARAMS
from pow_spec.types import Uint32
from tests.pow_spec.helpers import GENESIS_TIME

LWMA_PARAMS_YAML = """\
NAME: cli-test
POW_LIMIT: "0x00000fffffffffffffffffffffffffffffffffffffffffffffffffffffffffff"
POW_TARGET_SPACING: 60
POW_TARGET_TIMESPAN: 60000
LWMA_ACTIVATION_HEIGHT: 46
"""


def write_chain(path: Path, count: int, bits: int = 0x1E0FFFFF, base_height: int = 0) -> Path:
    """Write a chain YAML file with `count` one-minute blocks."""
    lines = ["BLOCKS:"]
    for offset in range(count):
        height = base_height + offset
        lines.append(
            f"- {{height: {height}, timestamp: {GENESIS_TIME + 60 * height}, bits: 0x{bits:08x}}}"
        )
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def params_file(tmp_path: Path) -> Path:
    """A parameter file with LWMA from height 46."""
    path = tmp_path / "params.yaml"
    path.write_text(LWMA_PARAMS_YAML, encoding="utf-8")
    return path


class TestParseCompact:
    """Tests for the --bits argument parser."""

    def test_hex_and_decimal(self) -> None:
        assert parse_compact("0x1d00ffff") == Uint32(0x1D00FFFF)
        assert parse_compact("486604799") == Uint32(0x1D00FFFF)

    @pytest.mark.parametrize("value", ["", "0xzz", "-1", "0x100000000"])
    def test_rejects_invalid(self, value: str) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            parse_compact(value)


class TestParseDisplayHash:
    """Tests for the --hash argument parser."""

    def test_reverses_byte_order(self) -> None:
        """Display order is the reverse of internal order."""
        display = "00" * 31 + "01"

        assert parse_display_hash(display) == b"\x01" + b"\x00" * 31
        assert parse_display_hash("0x" + display) == b"\x01" + b"\x00" * 31

    @pytest.mark.parametrize("value", ["00" * 31, "00" * 33, "zz" * 32])
    def test_rejects_invalid(self, value: str) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            parse_display_hash(value)


class TestNextTarget:
    """Tests for the next-target subcommand."""

    def test_inherits_bits_within_interval(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Mid-interval on mainnet the tip's bits carry over."""
        chain = write_chain(tmp_path / "chain.yaml", 5)

        code = main(
            [
                "next-target",
                "--network",
                "mainnet",
                "--chain",
                str(chain),
                "--timestamp",
                str(GENESIS_TIME + 300),
            ]
        )

        assert code == 0
        assert capsys.readouterr().out == "height=5 algorithm=classic bits=0x1e0fffff\n"

    def test_testnet_stall(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A stalled candidate on testnet gets the pow limit."""
        chain = write_chain(tmp_path / "chain.yaml", 5, bits=0x1D0FFFFF)

        code = main(
            [
                "next-target",
                "--network",
                "testnet",
                "--chain",
                str(chain),
                "--timestamp",
                str(GENESIS_TIME + 240 + 121),
            ]
        )

        expected = int(TESTNET_PARAMS.pow_limit_compact)
        assert code == 0
        assert capsys.readouterr().out == f"height=5 algorithm=classic bits=0x{expected:08x}\n"

    def test_params_file_selects_lwma(
        self, tmp_path: Path, params_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A parameter file overrides the network preset."""
        chain = write_chain(tmp_path / "chain.yaml", 46, bits=0x1D0FFFFF)

        code = main(
            [
                "next-target",
                "--params",
                str(params_file),
                "--chain",
                str(chain),
                "--timestamp",
                str(GENESIS_TIME + 46 * 60),
            ]
        )

        assert code == 0
        assert capsys.readouterr().out.startswith("height=46 algorithm=lwma bits=0x")

    def test_missing_chain_file(self, tmp_path: Path) -> None:
        code = main(
            ["next-target", "--chain", str(tmp_path / "missing.yaml"), "--timestamp", "0"]
        )

        assert code == EXIT_ERROR

    def test_chain_with_gap(self, tmp_path: Path) -> None:
        """Non-consecutive heights are rejected on load."""
        path = tmp_path / "chain.yaml"
        path.write_text(
            "BLOCKS:\n"
            "- {height: 0, timestamp: 1700000000, bits: 0x1e0fffff}\n"
            "- {height: 2, timestamp: 1700000120, bits: 0x1e0fffff}\n",
            encoding="utf-8",
        )

        code = main(["next-target", "--chain", str(path), "--timestamp", "0"])

        assert code == EXIT_ERROR

    def test_empty_chain(self, tmp_path: Path) -> None:
        """A chain file without blocks has no tip."""
        path = tmp_path / "chain.yaml"
        path.write_text("BLOCKS: []\n", encoding="utf-8")

        code = main(["next-target", "--chain", str(path), "--timestamp", "0"])

        assert code == EXIT_ERROR

    def test_short_segment_is_consensus_error(
        self, tmp_path: Path, params_file: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A segment too short for the LWMA window reports the missing ancestor."""
        chain = write_chain(tmp_path / "chain.yaml", 5, base_height=100)

        code = main(
            [
                "--no-color",
                "next-target",
                "--params",
                str(params_file),
                "--chain",
                str(chain),
                "--timestamp",
                str(GENESIS_TIME + 105 * 60),
            ]
        )

        assert code == EXIT_ERROR
        assert "Missing ancestor at height 60" in caplog.text

    def test_invalid_params_file(self, tmp_path: Path) -> None:
        """Parameter validation failures are input errors."""
        params = tmp_path / "params.yaml"
        params.write_text(LWMA_PARAMS_YAML.replace("60000", "60001"), encoding="utf-8")
        chain = write_chain(tmp_path / "chain.yaml", 5)

        code = main(
            ["next-target", "--params", str(params), "--chain", str(chain), "--timestamp", "0"]
        )

        assert code == EXIT_ERROR


class TestCheckPow:
    """Tests for the check-pow subcommand."""

    def test_valid(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["check-pow", "--network", "mainnet", "--hash", "00" * 32, "--bits", "0x1e0fffff"])

        assert code == 0
        assert capsys.readouterr().out == "valid\n"

    def test_invalid(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["check-pow", "--network", "mainnet", "--hash", "ff" * 32, "--bits", "0x1e0fffff"])

        assert code == EXIT_INVALID
        assert capsys.readouterr().out == "invalid\n"

    def test_display_order(self) -> None:
        """Leading zeros in display order mean a small hash."""
        small = "00" * 4 + "ff" * 28
        large = "ff" * 28 + "00" * 4

        assert main(["check-pow", "--network", "mainnet", "--hash", small, "--bits", "0x1e0fffff"]) == 0
        assert (
            main(["check-pow", "--network", "mainnet", "--hash", large, "--bits", "0x1e0fffff"])
            == EXIT_INVALID
        )

    def test_negative_bits(self) -> None:
        """A negative compact target is never met."""
        code = main(["check-pow", "--network", "mainnet", "--hash", "00" * 32, "--bits", "0x04923456"])

        assert code == EXIT_INVALID

    def test_bad_bits_argument(self) -> None:
        """Malformed arguments are rejected by the parser."""
        with pytest.raises(SystemExit) as exc_info:
            main(["check-pow", "--hash", "00" * 32, "--bits", "nope"])

        assert exc_info.value.code == 2
