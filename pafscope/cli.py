"""Command-line arguments for the alignment viewer."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional, Sequence

_COLOR_SCHEMES_HELP = (
    "Path to alignment color schemes file. "
    "File should be a tab-delimited text file, with the first 9 columns of each "
    "line corresponding (exactly) to an alignment in the PAF. "
    "The last column is a comma-separated list of values in the format "
    "`<op>:<color>:<color>`, where `<op>` is one of `{M, =, X, I, D}`, and "
    "`<color>` is a hex-formatted RGB color (e.g. `#FF1100`). "
    "The first color is the background color, the second the foreground color, "
    "of the corresponding CIGAR operation."
)


def _package_version() -> str:
    try:
        return version("pafscope")
    except PackageNotFoundError:
        return "unknown"


@dataclass(frozen=True)
class Cli:
    """Parsed command-line options."""

    paf: Path
    fasta: Optional[Path] = None
    bed: Optional[Path] = None
    impg: Optional[Path] = None
    color_schemes: Optional[Path] = None
    target_seqs: Optional[list[str]] = None
    query_seqs: Optional[list[str]] = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pafscope",
        description="Interactive viewer for pairwise alignments in PAF format.",
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"%(prog)s {_package_version()}"
    )
    parser.add_argument("paf", type=Path, help="Path to input PAF")
    parser.add_argument("--seq", dest="fasta", type=Path, help="Path to input FASTA file")
    parser.add_argument("--bed", type=Path, help="Path to BED annotation file")
    parser.add_argument("--impg", type=Path, help="Path to impg index file")
    parser.add_argument(
        "--color-schemes", dest="color_schemes", type=Path, help=_COLOR_SCHEMES_HELP
    )
    parser.add_argument(
        "--target-seqs",
        dest="target_seqs",
        action="append",
        help="Optional list of sequences to include as targets (X axis)",
    )
    parser.add_argument(
        "--query-seqs",
        dest="query_seqs",
        action="append",
        help="Optional list of sequences to include as queries (Y axis)",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> Cli:
    """Parse arguments (from sys.argv when ``argv`` is None); exits on error."""
    namespace = build_parser().parse_args(argv)
    return Cli(
        paf=namespace.paf,
        fasta=namespace.fasta,
        bed=namespace.bed,
        impg=namespace.impg,
        color_schemes=namespace.color_schemes,
        target_seqs=namespace.target_seqs,
        query_seqs=namespace.query_seqs,
    )