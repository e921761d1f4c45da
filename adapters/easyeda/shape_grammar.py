"""
Tolerant parser for EasyEDA "shape strings".

One shape string describes one primitive: ``PAD~RECT~4000~3000~...``. Fields
are separated by ``~``; schematic pins are additionally split into groups by
``^^``. The grammar has changed between EasyEDA releases and payloads are not
always complete, so a malformed line is dropped on its own and a field that
does not parse falls back to ``0`` instead of aborting the whole decode.

Field positions live in per-tag schema tables below. When the source format
moves a field, edit the table, not the parsing code.

Reference: https://github.com/dillonHe/EasyEDA-Documents/blob/master/Open-File-Format/
"""

import json
import logging
import math
import re
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from constants import DEFAULT_PIN_LENGTH
from models.easyeda import (
    FootprintArc,
    FootprintCircle,
    FootprintPad,
    FootprintText,
    FootprintTrack,
    IgnoredShape,
    Model3DRef,
    ShapeTag,
    SymbolPin,
    SymbolRectangle,
)

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "~"
PIN_GROUP_SEPARATOR = "^^"
_TRAILING_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)$")

ShapeRecord = Union[
    SymbolPin,
    SymbolRectangle,
    FootprintPad,
    FootprintTrack,
    FootprintText,
    FootprintCircle,
    FootprintArc,
    Model3DRef,
]


# --- Field parsers ---


def parse_float(value: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def parse_int(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def parse_text(value: str) -> str:
    return value if value is not None else ""


def parse_points(value: str) -> List[Tuple[float, float]]:
    """Parse ``"x1 y1 x2 y2 ..."``; an unpaired trailing value is dropped."""
    coords = value.split(" ")
    return [
        (parse_float(coords[i]), parse_float(coords[i + 1]))
        for i in range(0, len(coords) - 1, 2)
    ]


def parse_pin_length(path: str) -> float:
    """The pin length is the last number of the pin's SVG path (``M 360 290 h -10``)."""
    tokens = path.split()
    match = _TRAILING_NUMBER.search(tokens[-1]) if tokens else None
    if match is None:
        return DEFAULT_PIN_LENGTH
    return abs(float(match.group()))


# --- Schema tables ---


class FieldSpec(NamedTuple):
    index: int
    name: str
    parse: Callable[[str], Any]


PIN_SETTINGS_SCHEMA = (
    FieldSpec(2, "type_code", parse_text),
    FieldSpec(3, "number", parse_text),
    FieldSpec(4, "x", parse_float),
    FieldSpec(5, "y", parse_float),
    FieldSpec(6, "rotation", parse_int),
)
# Field 0 is the SVG path, field 1 its colour. The length is read from the
# path; field 1 never holds it in real payloads.
PIN_PATH_SCHEMA = (FieldSpec(0, "length", parse_pin_length),)
PIN_NAME_SCHEMA = (FieldSpec(4, "name", parse_text),)

# (group index, schema, minimum number of ~ fields)
PIN_GROUPS = (
    (0, PIN_SETTINGS_SCHEMA, 8),
    (2, PIN_PATH_SCHEMA, 2),
    (3, PIN_NAME_SCHEMA, 6),
)
PIN_MIN_GROUPS = 4

RECTANGLE_SCHEMA = (
    FieldSpec(1, "x", parse_float),
    FieldSpec(2, "y", parse_float),
    FieldSpec(5, "width", parse_float),
    FieldSpec(6, "height", parse_float),
)

PAD_SCHEMA = (
    FieldSpec(1, "shape_code", parse_text),
    FieldSpec(2, "center_x", parse_float),
    FieldSpec(3, "center_y", parse_float),
    FieldSpec(4, "width", parse_float),
    FieldSpec(5, "height", parse_float),
    FieldSpec(6, "layer_id", parse_int),
    FieldSpec(8, "number", parse_text),
    FieldSpec(9, "hole_radius", parse_float),
    FieldSpec(11, "rotation", parse_float),
)
PAD_HOLE_LENGTH_INDEX = 13
PAD_LEGACY_HOLE_LENGTH_INDEX = 12

TRACK_SCHEMA = (
    FieldSpec(1, "stroke_width", parse_float),
    FieldSpec(2, "layer_id", parse_int),
    FieldSpec(4, "points", parse_points),
)

TEXT_SCHEMA = (
    FieldSpec(1, "type_code", parse_text),
    FieldSpec(2, "center_x", parse_float),
    FieldSpec(3, "center_y", parse_float),
    FieldSpec(5, "rotation", parse_float),
    FieldSpec(7, "layer_id", parse_int),
    FieldSpec(10, "text", parse_text),
)

# CIRCLE~cx~cy~r~stroke~layer and ARC~stroke~layer~~path, as EasyEDA writes
# them. A layer-first reading (layer, width, cx, cy, r) mis-places every
# circle on real payloads; keep this order.
CIRCLE_SCHEMA = (
    FieldSpec(1, "center_x", parse_float),
    FieldSpec(2, "center_y", parse_float),
    FieldSpec(3, "radius", parse_float),
    FieldSpec(4, "stroke_width", parse_float),
    FieldSpec(5, "layer_id", parse_int),
)

ARC_SCHEMA = (
    FieldSpec(1, "stroke_width", parse_float),
    FieldSpec(2, "layer_id", parse_int),
    FieldSpec(4, "path", parse_text),
)

# tag -> (record type, schema, minimum number of ~ fields)
RECORD_SCHEMAS = {
    ShapeTag.RECTANGLE: (SymbolRectangle, RECTANGLE_SCHEMA, 7),
    ShapeTag.PAD: (FootprintPad, PAD_SCHEMA, 12),
    ShapeTag.TRACK: (FootprintTrack, TRACK_SCHEMA, 5),
    ShapeTag.TEXT: (FootprintText, TEXT_SCHEMA, 11),
    ShapeTag.CIRCLE: (FootprintCircle, CIRCLE_SCHEMA, 6),
    ShapeTag.ARC: (FootprintArc, ARC_SCHEMA, 5),
}


def _read_fields(fields: Sequence[str], schema: Sequence[FieldSpec]) -> Dict[str, Any]:
    return {spec.name: spec.parse(fields[spec.index]) for spec in schema}


# --- Record parsers ---


def _parse_pin(line: str) -> Optional[SymbolPin]:
    groups = line.split(PIN_GROUP_SEPARATOR)
    if len(groups) < PIN_MIN_GROUPS:
        logger.debug(f"Dropping pin with {len(groups)} groups: {line!r}")
        return None

    values: Dict[str, Any] = {}
    for group_index, schema, min_fields in PIN_GROUPS:
        fields = groups[group_index].split(FIELD_SEPARATOR)
        if len(fields) < min_fields:
            logger.debug(
                f"Dropping pin, group {group_index} has {len(fields)} fields: {line!r}"
            )
            return None
        values.update(_read_fields(fields, schema))
    return SymbolPin(**values)


def _pad_hole_length(fields: Sequence[str]) -> float:
    # Current payloads carry the slot length in field 13; field 12 is the
    # shape id. Some old payloads put the length in field 12, so it is only
    # accepted there if it reads as a positive number.
    hole_length = 0.0
    if len(fields) > PAD_HOLE_LENGTH_INDEX:
        hole_length = parse_float(fields[PAD_HOLE_LENGTH_INDEX])
    if hole_length == 0.0 and len(fields) > PAD_LEGACY_HOLE_LENGTH_INDEX:
        legacy = parse_float(fields[PAD_LEGACY_HOLE_LENGTH_INDEX])
        if legacy > 0:
            hole_length = legacy
    return hole_length


def _parse_model_reference(line: str) -> Optional[Model3DRef]:
    _, _, blob = line.partition(FIELD_SEPARATOR)
    try:
        svg_node = json.loads(blob)
    except json.JSONDecodeError as e:
        logger.warning(f"Unreadable SVGNODE payload: {e}")
        return None
    attrs = svg_node.get("attrs") if isinstance(svg_node, dict) else None
    if not isinstance(attrs, dict) or not attrs.get("uuid"):
        logger.debug("SVGNODE without a model uuid, skipping.")
        return None
    uuid = str(attrs["uuid"])
    return Model3DRef(name=str(attrs.get("title") or uuid), uuid=uuid)


def iter_shape_lines(shapes: Iterable[Any]) -> Iterator[str]:
    """Yield the shape strings of a payload, skipping entries of any other type."""
    for index, shape in enumerate(shapes):
        if not isinstance(shape, str):
            logger.debug(f"Skipping non-text shape entry #{index}: {type(shape).__name__}")
            continue
        yield shape


def parse_shape(line: str) -> Union[ShapeRecord, IgnoredShape, None]:
    """
    Decode one shape string.

    Returns:
        The typed record, an ``IgnoredShape`` for tags this parser does not
        handle, or ``None`` when a known record is too short to use.
    """
    if not line:
        return None

    raw_tag = line.split(FIELD_SEPARATOR, 1)[0]
    tag = ShapeTag.parse(raw_tag)

    if tag == ShapeTag.PIN:
        return _parse_pin(line)
    if tag == ShapeTag.MODEL_3D:
        return _parse_model_reference(line)
    if tag not in RECORD_SCHEMAS:
        return IgnoredShape(tag=raw_tag)

    record_type, schema, min_fields = RECORD_SCHEMAS[tag]
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) < min_fields:
        logger.debug(f"Dropping {raw_tag} with {len(fields)} fields: {line!r}")
        return None

    values = _read_fields(fields, schema)
    if tag == ShapeTag.PAD:
        values["hole_length"] = _pad_hole_length(fields)
    return record_type(**values)
