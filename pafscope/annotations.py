"""BED annotation records and the store that keeps them with their drawn shapes."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Hashable, Iterable, Iterator, Mapping, Optional, Union

from pafscope.colors import string_hash_color
from pafscope.draw import (
    AnnotationLabel,
    AnnotationPainter,
    AnnotationWorldRegion,
    AnnotShapeId,
    Color32,
    WorldRange,
)

SeqId = Hashable
SeqRange = tuple[int, int]
RecordListId = int
RecordEntryId = int
AnnotationId = tuple[RecordListId, RecordEntryId]

WorldRangesFn = Callable[[SeqId, SeqRange], tuple[Optional[WorldRange], Optional[WorldRange]]]
"""Maps a sequence and a range on it to its world (x, y) ranges, either of which may be absent."""

_U64_MAX = 0xFFFFFFFFFFFFFFFF
_U8_MAX = 0xFF


class BedParseError(ValueError):
    """A BED row that cannot be turned into an annotation record."""


def _parse_uint(text: str, limit: int) -> Optional[int]:
    digits = text[1:] if text.startswith("+") else text
    if not digits or any(c not in "0123456789" for c in digits):
        return None
    value = int(digits)
    return value if value <= limit else None


def _parse_range(fields: list[str], start_ix: int, end_ix: int) -> Optional[SeqRange]:
    if end_ix >= len(fields):
        return None
    start = _parse_uint(fields[start_ix], _U64_MAX)
    end = _parse_uint(fields[end_ix], _U64_MAX)
    if start is None or end is None:
        return None
    return start, end


def _parse_rgb(text: str) -> Optional[Color32]:
    channels = text.split(",")
    if len(channels) < 3:
        return None
    values = [_parse_uint(channel, _U8_MAX) for channel in channels[:3]]
    if any(value is None for value in values):
        return None
    r, g, b = values
    return Color32.from_rgb(r, g, b)


@dataclass
class Record:
    """One annotated interval on a sequence."""

    seq_id: SeqId
    seq_range: SeqRange
    color: Color32
    label: str


@dataclass(frozen=True)
class _AnnotationShapes:
    target: AnnotShapeId
    query: AnnotShapeId


def parse_bed_lines(lines: Iterable[str], sequence_names: Mapping[str, SeqId]) -> list[Record]:
    """Parse BED rows into records; rows with fewer than four columns are skipped."""
    records = []
    for line in lines:
        fields = line.strip().split("\t")
        if len(fields) < 4:
            continue

        seq_name = fields[0]
        if seq_name not in sequence_names:
            raise BedParseError(f"Could not find sequence `{seq_name}`")
        seq_id = sequence_names[seq_name]

        seq_range = _parse_range(fields, 1, 2)
        if seq_range is None:
            raise BedParseError(
                f"Could not parse `{fields[1]!r}`, `{fields[2]!r}` as interval"
            )

        label = fields[3]

        color = _parse_rgb(fields[8]) if len(fields) > 8 else None
        if color is None:
            color = Color32.from_linear_rgb(*string_hash_color(label))
        color = color.linear_multiply(0.5)

        records.append(Record(seq_id=seq_id, seq_range=seq_range, color=color, label=label))
    return records


@dataclass
class RecordList:
    """The records loaded from one annotation source."""

    records: list[Record] = field(default_factory=list)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def prepare_annotation_shapes(
        self, world_ranges: WorldRangesFn, painter: AnnotationPainter
    ) -> list[_AnnotationShapes]:
        """Add a target and a query shape (region plus label) per record to the painter."""
        shapes = []
        for record in self.records:
            world_x, world_y = world_ranges(record.seq_id, record.seq_range)
            target = painter.add_collection(
                [
                    AnnotationWorldRegion(world_x, None, record.color),
                    AnnotationLabel(text=record.label),
                ]
            )
            query = painter.add_collection(
                [
                    AnnotationWorldRegion(None, world_y, record.color),
                    AnnotationLabel(text=record.label),
                ]
            )
            shapes.append(_AnnotationShapes(target=target, query=query))
        return shapes


class AnnotationStore:
    """Annotation lists by id and by source name, with their painter shapes."""

    def __init__(self) -> None:
        self._id_by_name: dict[str, RecordListId] = {}
        self._name_by_id: dict[RecordListId, str] = {}
        self._lists: list[RecordList] = []
        self._shapes: list[list[_AnnotationShapes]] = []

    def _shapes_for(self, list_id: int, record_id: int) -> Optional[_AnnotationShapes]:
        if not 0 <= list_id < len(self._shapes):
            return None
        shapes = self._shapes[list_id]
        if not 0 <= record_id < len(shapes):
            return None
        return shapes[record_id]

    def target_shape_for(self, list_id: int, record_id: int) -> Optional[AnnotShapeId]:
        shapes = self._shapes_for(list_id, record_id)
        return shapes.target if shapes else None

    def query_shape_for(self, list_id: int, record_id: int) -> Optional[AnnotShapeId]:
        shapes = self._shapes_for(list_id, record_id)
        return shapes.query if shapes else None

    def source_names(self) -> Iterator[tuple[RecordListId, str]]:
        """Yield (list id, source name) for every list that still has a name."""
        for list_id in range(len(self._lists)):
            name = self._name_by_id.get(list_id)
            if name is not None:
                yield list_id, name

    def list_by_id(self, list_id: int) -> Optional[RecordList]:
        if not 0 <= list_id < len(self._lists):
            return None
        return self._lists[list_id]

    def list_by_name(self, name: str) -> Optional[RecordList]:
        list_id = self._id_by_name.get(name)
        return None if list_id is None else self.list_by_id(list_id)

    def _insert_source(self, name: str, list_id: RecordListId) -> None:
        old_id = self._id_by_name.pop(name, None)
        if old_id is not None:
            self._name_by_id.pop(old_id, None)
        old_name = self._name_by_id.pop(list_id, None)
        if old_name is not None:
            self._id_by_name.pop(old_name, None)
        self._id_by_name[name] = list_id
        self._name_by_id[list_id] = name

    def load_bed_file(
        self,
        bed_path: Union[str, Path],
        sequence_names: Mapping[str, SeqId],
        painter: AnnotationPainter,
        world_ranges: WorldRangesFn,
    ) -> RecordListId:
        """Load a BED file as a new list, add its shapes to the painter, return the list id."""
        with open(bed_path, encoding="utf-8") as bed_file:
            records = parse_bed_lines(bed_file, sequence_names)

        list_id = len(self._lists)
        self._insert_source(str(bed_path), list_id)

        record_list = RecordList(records)
        shapes = record_list.prepare_annotation_shapes(world_ranges, painter)
        self._lists.append(record_list)
        self._shapes.append(shapes)
        return list_id

    def is_empty(self) -> bool:
        return not self._lists