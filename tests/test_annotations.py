import pytest

from pafscope.annotations import (
    AnnotationStore,
    BedParseError,
    Record,
    RecordList,
    parse_bed_lines,
)
from pafscope.colors import string_hash_color
from pafscope.draw import (
    AnnotationDrawCollection,
    AnnotationLabel,
    AnnotationPainter,
    AnnotationWorldRegion,
    Color32,
)

SEQ_NAMES = {"chrA": 0, "chrB": 1}
OFFSETS = {0: 0, 1: 1000}


def world_ranges(seq_id, seq_range):
    off = OFFSETS[seq_id]
    rng = (float(off + seq_range[0]), float(off + seq_range[1]))
    return rng, rng


def test_parse_basic_record_with_color():
    records = parse_bed_lines(
        ["chrB\t10\t20\tgeneX\t0\t+\t10\t20\t255,0,0\n"], SEQ_NAMES
    )
    assert len(records) == 1
    rec = records[0]
    assert rec.seq_id == 1
    assert rec.seq_range == (10, 20)
    assert rec.label == "geneX"
    assert rec.color == Color32.from_rgb(255, 0, 0).linear_multiply(0.5)


def test_parse_fallback_color_is_hash_based_and_deterministic():
    records = parse_bed_lines(["chrA\t1\t2\tlab", "chrA\t5\t9\tlab"], SEQ_NAMES)
    assert records[0].color == records[1].color
    expected = Color32.from_linear_rgb(*string_hash_color("lab")).linear_multiply(0.5)
    assert records[0].color == expected


def test_parse_invalid_color_falls_back():
    bad = parse_bed_lines(["chrA\t1\t2\tlab\t0\t+\t1\t2\t300,0,0"], SEQ_NAMES)
    plain = parse_bed_lines(["chrA\t1\t2\tlab"], SEQ_NAMES)
    assert bad[0].color == plain[0].color


def test_parse_skips_short_and_empty_lines():
    records = parse_bed_lines(["", "chrA\t1\t2", "chrA\t3\t4\tok"], SEQ_NAMES)
    assert [r.label for r in records] == ["ok"]


def test_parse_unknown_sequence_raises():
    with pytest.raises(BedParseError, match="chrZ"):
        parse_bed_lines(["chrZ\t1\t2\tx"], SEQ_NAMES)


def test_parse_bad_interval_raises():
    with pytest.raises(BedParseError):
        parse_bed_lines(["chrA\tone\t2\tx"], SEQ_NAMES)
    with pytest.raises(BedParseError):
        parse_bed_lines(["chrA\t-1\t2\tx"], SEQ_NAMES)


def test_prepare_shapes_target_and_query():
    painter = AnnotationPainter()
    red = Color32.from_rgb(255, 0, 0)
    rl = RecordList([Record(seq_id=1, seq_range=(5, 15), color=red, label="g")])
    shapes = rl.prepare_annotation_shapes(world_ranges, painter)
    assert len(shapes) == 1
    target = painter.get_shape(shapes[0].target)
    query = painter.get_shape(shapes[0].query)
    assert isinstance(target, AnnotationDrawCollection)
    region, label = list(target)
    assert isinstance(region, AnnotationWorldRegion)
    assert region.world_x_range == (1005.0, 1015.0)
    assert region.world_y_range is None
    assert region.color == red
    assert isinstance(label, AnnotationLabel) and label.text == "g"
    qregion, _ = list(query)
    assert qregion.world_x_range is None
    assert qregion.world_y_range == (1005.0, 1015.0)


def test_store_load_bed_file(tmp_path):
    bed = tmp_path / "a.bed"
    bed.write_text("chrA\t0\t10\tfirst\nchrB\t5\t8\tsecond\n")
    store = AnnotationStore()
    assert store.is_empty()
    painter = AnnotationPainter()
    list_id = store.load_bed_file(bed, SEQ_NAMES, painter, world_ranges)
    assert list_id == 0
    assert not store.is_empty()
    assert list(store.source_names()) == [(0, str(bed))]
    lst = store.list_by_name(str(bed))
    assert lst is store.list_by_id(0)
    assert [r.label for r in lst] == ["first", "second"]
    assert len(painter) == 4
    tid = store.target_shape_for(0, 1)
    qid = store.query_shape_for(0, 1)
    assert tid != qid
    region = list(painter.get_shape(tid))[0]
    assert region.world_x_range == (1005.0, 1008.0)
    assert store.target_shape_for(0, 2) is None
    assert store.query_shape_for(3, 0) is None
    assert store.list_by_id(1) is None
    assert store.list_by_name("missing") is None


def test_store_reload_same_path_renames(tmp_path):
    bed = tmp_path / "a.bed"
    bed.write_text("chrA\t0\t10\tx\n")
    store = AnnotationStore()
    painter = AnnotationPainter()
    store.load_bed_file(bed, SEQ_NAMES, painter, world_ranges)
    second = store.load_bed_file(bed, SEQ_NAMES, painter, world_ranges)
    assert second == 1
    assert list(store.source_names()) == [(1, str(bed))]
    assert store.list_by_name(str(bed)) is store.list_by_id(1)


def test_store_load_missing_file_raises(tmp_path):
    store = AnnotationStore()
    with pytest.raises(FileNotFoundError):
        store.load_bed_file(tmp_path / "nope.bed", SEQ_NAMES, AnnotationPainter(), world_ranges)
    assert store.is_empty()


def test_store_load_bad_file_leaves_store_empty(tmp_path):
    bed = tmp_path / "b.bed"
    bed.write_text("chrQ\t0\t10\tx\n")
    store = AnnotationStore()
    with pytest.raises(BedParseError):
        store.load_bed_file(bed, SEQ_NAMES, AnnotationPainter(), world_ranges)
    assert store.is_empty()
    assert list(store.source_names()) == []