from pathlib import Path

import pytest

from pafscope.cli import Cli, build_parser, parse_args


def test_only_paf_given():
    cli = parse_args(["alignments.paf"])
    assert cli == Cli(paf=Path("alignments.paf"))
    assert cli.fasta is None
    assert cli.target_seqs is None


def test_seq_option_sets_fasta():
    cli = parse_args(["a.paf", "--seq", "genomes.fa"])
    assert cli.fasta == Path("genomes.fa")


def test_all_path_options():
    cli = parse_args(
        [
            "a.paf",
            "--bed",
            "annot.bed",
            "--impg",
            "index.impg",
            "--color-schemes",
            "colors.tsv",
        ]
    )
    assert cli.bed == Path("annot.bed")
    assert cli.impg == Path("index.impg")
    assert cli.color_schemes == Path("colors.tsv")


def test_sequence_lists_accumulate():
    cli = parse_args(
        ["a.paf", "--target-seqs", "chr1", "--target-seqs", "chr2", "--query-seqs", "chrX"]
    )
    assert cli.target_seqs == ["chr1", "chr2"]
    assert cli.query_seqs == ["chrX"]


def test_missing_paf_is_an_error():
    with pytest.raises(SystemExit) as excinfo:
        parse_args([])
    assert excinfo.value.code == 2


def test_unknown_option_is_an_error():
    with pytest.raises(SystemExit) as excinfo:
        parse_args(["a.paf", "--nope"])
    assert excinfo.value.code == 2


def test_version_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as excinfo:
        parse_args(["--version"])
    assert excinfo.value.code == 0
    assert "pafscope" in capsys.readouterr().out


def test_parser_help_mentions_options():
    text = build_parser().format_help()
    for option in ("--seq", "--bed", "--impg", "--color-schemes", "--target-seqs", "--query-seqs"):
        assert option in text