"""
Proof-of-work difficulty CLI entry point.

Compute the target for the next block of a chain, or check a block hash
against a compact target.

Usage::

    python -m pow_spec next-target --chain chain.yaml --timestamp 1700003000
    python -m pow_spec next-target --chain chain.yaml --timestamp 1700003000 --network testnet
    python -m pow_spec next-target --chain chain.yaml --timestamp 1700003000 --params params.yaml
    python -m pow_spec check-pow --hash 00000000000a4d0a... --bits 0x1e0fffff

Options:
    --network      Preset network parameters (default: $POW_NETWORK or mainnet)
    --params       Path to a consensus parameters YAML file (overrides --network)
    -v, --verbose  Enable debug logging
    --no-color     Disable colored logging output
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from pow_spec.config import POW_NETWORK, SUPPORTED_NETWORKS
from pow_spec.subspecs.chain import BlockIndex
from pow_spec.subspecs.params import ConsensusParams, get_params
from pow_spec.subspecs.pow import check_proof_of_work, get_next_work_required
from pow_spec.types import ConsensusError, Uint32, Uint64

logger = logging.getLogger(__name__)

EXIT_INVALID = 1
"""Exit status for a hash that fails the proof-of-work check."""

EXIT_ERROR = 2
"""Exit status for unusable input: bad parameters, chain files or arguments."""


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging for the CLI with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def parse_compact(value: str) -> Uint32:
    """Parse compact bits given as hex (with 0x prefix) or decimal."""
    try:
        return Uint32(int(value, 0))
    except (ValueError, OverflowError) as e:
        raise argparse.ArgumentTypeError(f"invalid compact bits: {value!r}") from e


def parse_display_hash(value: str) -> bytes:
    """
    Parse a block hash in display order into internal byte order.

    Explorers and RPC show hashes byte-reversed, most significant byte first.
    """
    try:
        raw = bytes.fromhex(value.removeprefix("0x"))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid hex hash: {value!r}") from e
    if len(raw) != 32:
        raise argparse.ArgumentTypeError(f"hash must be 32 bytes, got {len(raw)}")
    return raw[::-1]


def load_params(network: str, params_path: Path | None) -> ConsensusParams:
    """Resolve consensus parameters from a YAML file or a preset name."""
    if params_path is not None:
        logger.info("Loading consensus parameters from %s", params_path)
        return ConsensusParams.from_yaml_file(params_path)
    return get_params(network)


def run_next_target(args: argparse.Namespace) -> int:
    """Print the compact target for the block after the chain tip."""
    params = load_params(args.network, args.params)
    chain = BlockIndex.from_yaml_file(args.chain)
    tip = chain.tip
    logger.info(
        "Loaded %d blocks (heights %d..%d) for %s",
        len(chain),
        chain.base_height,
        int(tip.height),
        params.name,
    )

    bits = get_next_work_required(tip, Uint64(args.timestamp), params, chain)
    algorithm = params.retarget_algorithm(int(tip.height) + 1)
    print(f"height={int(tip.height) + 1} algorithm={algorithm.value} bits=0x{int(bits):08x}")
    return 0


def run_check_pow(args: argparse.Namespace) -> int:
    """Print whether a block hash meets its compact target."""
    params = load_params(args.network, args.params)
    valid = check_proof_of_work(args.hash, args.bits, params)
    print("valid" if valid else "invalid")
    return 0 if valid else EXIT_INVALID


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="pow_spec",
        description="Proof-of-work difficulty rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    # Parameter selection shared by every subcommand.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--network",
        choices=SUPPORTED_NETWORKS,
        default=POW_NETWORK,
        help=f"Preset network parameters (default: {POW_NETWORK})",
    )
    common.add_argument(
        "--params",
        type=Path,
        default=None,
        help="Path to a consensus parameters YAML file (overrides --network)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    next_target = subparsers.add_parser(
        "next-target",
        parents=[common],
        help="Compute the compact target for the next block",
    )
    next_target.add_argument(
        "--chain",
        required=True,
        type=Path,
        help="Path to a chain YAML file with a BLOCKS list ending at the tip",
    )
    next_target.add_argument(
        "--timestamp",
        required=True,
        type=int,
        help="Header time of the candidate block",
    )
    next_target.set_defaults(handler=run_next_target)

    check_pow = subparsers.add_parser(
        "check-pow",
        parents=[common],
        help="Check a block hash against a compact target",
    )
    check_pow.add_argument(
        "--hash",
        required=True,
        type=parse_display_hash,
        help="Block hash in display (big-endian) hex",
    )
    check_pow.add_argument(
        "--bits",
        required=True,
        type=parse_compact,
        help="Compact target, e.g. 0x1e0fffff",
    )
    check_pow.set_defaults(handler=run_check_pow)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    try:
        return args.handler(args)
    except (OSError, yaml.YAMLError, ValidationError, ValueError, OverflowError, LookupError) as e:
        logger.error("Invalid input: %s", e)
        return EXIT_ERROR
    except ConsensusError as e:
        logger.error("Chain inconsistent with consensus rules: %s", e.message)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
