# pafscope

Building blocks for viewing pairwise sequence alignments stored in PAF
files: a compact CIGAR representation with range queries over the target,
a binned approximation of an alignment's height, BED annotation loading,
annotation shapes with their drawing state, stable per-name colours,
persisted viewer settings and the viewer's command-line options.

## Installation

Install the package with your usual Python package installer. The only
runtime dependency is `platformdirs`; the `test` extra adds `pytest`.

## CIGAR strings and indexes (`pafscope.cigar`)

`Cigar.parse_str` packs a CIGAR string into 32-bit operations. Only `M`,
`=`, `X`, `I` and `D` are kept; pieces ending in `S`, `H` or `N`, and pieces
whose count does not parse, are skipped.

```python
from pafscope.cigar import Cigar, CigarIndex, CigarOp, Strand

cigar = Cigar.parse_str("50=10I5X7D20M")
target_len, query_len = cigar.target_and_query_len()   # 82, 85

index = CigarIndex.from_cigar(cigar, target_len, query_len, Strand.FORWARD)

for item in index.iter_target_range(30, 55):
    print(item.op, item.op_count, item.target_range, item.query_range)
```

`iter_target_range(start, end)` yields one `CigarIterItem` per operation
that overlaps the half-open target range, clipped to it, together with the
matching query range. Ranges are `(start, end)` tuples relative to the start
of the CIGAR.

Other pieces:

- `CigarIndex.from_cigar_string` parses and indexes in one step;
  `whole_cigar()` yields every `(CigarOp, count)` pair;
  `op_target_range(i)` / `op_query_range(i)` give one operation's ranges,
  or `None` for an index out of range.
- `Cigar.get(i)` returns `(CigarOp, count)` or `None`; a `Cigar` can be
  iterated and measured with `len()`.
- `CigarOp.from_char` / `to_char`, `pack` / `unpack`,
  `parse_str_into_list`, `apply_to_offsets`, `consumes_target`,
  `consumes_query`, `is_match`, `is_mismatch`, `is_match_or_mismatch`.
- `Strand.parse("+")` / `Strand.parse("-")` read a PAF strand column and
  raise `ValueError` on anything else; `Strand.is_rev()`.

## Binned alignment heights (`pafscope.binning`)

`bin_cigar_index(index, bin_count)` averages a `CigarIndex`'s per-operation
query offsets over `bin_count` equal-width target bins;
`BinnedCigarIndex.lookup(x)` interpolates linearly between bins, returns the
last bin past the end, and returns `0.0` when there are no bins.

```python
from pafscope.binning import bin_cigar_index

bins = bin_cigar_index(index, 16)
height = bins.lookup(40.0)
```

## Annotations (`pafscope.annotations`)

BED rows are tab separated. Rows with fewer than four columns are skipped.
The first four columns are sequence name, start, end and label; a ninth
column of the form `r,g,b` sets the colour. Other columns are ignored.
Records without a colour get one derived from the label with
`string_hash_color`; every colour is then halved with
`Color32.linear_multiply(0.5)`. An unknown sequence name or an unparseable
interval raises `BedParseError` (a `ValueError`).

`sequence_names` maps sequence names to ids of your choosing.
`world_ranges` is a callable taking `(seq_id, (start, end))` and returning
the record's world `(x_range, y_range)`, either of which may be `None`.

```python
from pafscope.annotations import AnnotationStore
from pafscope.draw import AnnotationPainter

sequence_names = {"chr1": 0, "chr2": 1}
offsets = {0: 0, 1: 1_000_000}

def world_ranges(seq_id, seq_range):
    start, end = seq_range
    world = (float(offsets[seq_id] + start), float(offsets[seq_id] + end))
    return world, world

store = AnnotationStore()
painter = AnnotationPainter()
list_id = store.load_bed_file("genes.bed", sequence_names, painter, world_ranges)

for source_id, name in store.source_names():
    print(source_id, name)

shape = store.target_shape_for(list_id, 0)
painter.set_enable_shape(shape, False)
```

Each record gets two shapes in the painter, one for the target axis and one
for the query axis, each an `AnnotationDrawCollection` of an
`AnnotationWorldRegion` and an `AnnotationLabel`. `AnnotationStore` also has
`query_shape_for`, `list_by_id`, `list_by_name` (by the path string given to
`load_bed_file`) and `is_empty`. `parse_bed_lines(lines, sequence_names)`
parses BED lines already in memory into `Record`s, and
`RecordList.prepare_annotation_shapes` adds shapes for a list of records.

## Shapes and colours (`pafscope.draw`)

`Color32` is an 8-bit sRGBA colour with `from_rgb`, `from_linear_rgb`,
`linear_multiply` and `gamma_multiply`. `AnnotationPainter` holds shapes by
id: `add_shape`, `add_collection`, `get_shape`, `set_shape_color`,
`is_shape_enabled`, `set_enable_shape` and `enabled_shapes()`, which yields
the enabled `(id, shape)` pairs in insertion order. `AnnotationWorldRegion`
gives its `fill_color(config)` and `stroke_color(config)` for an
`AnnotationDrawConfig` (opacity 0.7 and borders on by default).

## Name colours (`pafscope.colors`)

`hashed_rgb(name)` gives three bytes from a hash of the name;
`string_hash_color_f32` (and its alias `string_hash_color_alt`) scale them
to sum to one; `string_hash_color` brightens and quantises them to 8 bits
per channel, returned as floats in `0.0..=1.0`.

## Settings (`pafscope.config`)

`AppConfig` holds the alignment line width (8.0), the grid line width (1.0)
and an `AnnotationDrawConfig`. `save_app_config(config, directory)` writes
`config.json` into the directory, creating the directory itself (not its
parents) if needed, and returns the file's path; `load_app_config(directory)`
reads it back and raises `FileNotFoundError` if it is missing or
`ValueError` if it is malformed. Without a directory both use `app_dir()`,
the current user's configuration directory.

```python
from pafscope.config import AppConfig, load_app_config, save_app_config

save_app_config(AppConfig(), "settings")
restored = load_app_config("settings")
```

## Command-line options (`pafscope.cli`)

`parse_args(argv)` returns a `Cli` with the PAF path and the optional
`--seq` (stored as `fasta`), `--bed`, `--impg`, `--color-schemes`,
`--target-seqs` and `--query-seqs`. The two sequence options may be given
more than once, one name each time. `-V`/`--version` prints the version.
`build_parser()` returns the underlying `argparse` parser.

## What this package does not do

There is no viewer: nothing opens a window, draws shapes or places labels on
screen, and no command is installed. The package does not read PAF or FASTA
files, does not load impg indexes and does not parse colour scheme files;
the corresponding options are only parsed.