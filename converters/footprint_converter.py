import logging
from typing import List, Optional

from constants import (
    CIRCLE_MAX_RADIUS_MM,
    GRAPHIC_MAX_DISTANCE_MM,
    PIN1_MARKER_CLEARANCE_MM,
    PIN1_MARKER_RADIUS_MM,
    PIN1_MARKER_STROKE_MM,
)
from converters.geometry import mean_center, outward_sign, to_mm
from converters.layer_mapping import is_graphic_layer, map_layer, map_pad_shape
from models.easyeda import (
    DecodedFootprint,
    FootprintCircle,
    FootprintPad,
    FootprintText,
    FootprintTrack,
    TextTypeCode,
)
from models.footprint import Drill, DrillShape, Footprint, Model3D, Pad, PadType, Text, TextKind
from models.graphics import Circle, GraphicElement, Line, Point
from models.layer import KicadLayer

logger = logging.getLogger(__name__)

REFERENCE_PLACEHOLDER = "REF**"
# EasyEDA layer ids whose circles are real silkscreen/copper drawings
CIRCLE_LAYER_IDS = frozenset({1, 2, 3, 4})


class _FootprintFrame:
    """Source frame of one footprint: bbox origin removed, mm. No y flip."""

    def __init__(self, bbox_x: float, bbox_y: float):
        self.bbox_x = bbox_x
        self.bbox_y = bbox_y

    def point(self, x: float, y: float) -> Point:
        return Point(x=to_mm(x - self.bbox_x), y=to_mm(y - self.bbox_y))

    def pad(self, index: int, pad: FootprintPad) -> Pad:
        is_smd = pad.hole_radius == 0 and pad.hole_length == 0
        drill = None
        if not is_smd:
            if pad.hole_length > 0:
                drill = Drill(
                    shape=DrillShape.OVAL,
                    width=to_mm(pad.hole_radius * 2),
                    height=to_mm(pad.hole_length),
                )
            else:
                drill = Drill(width=to_mm(pad.hole_radius * 2))

        return Pad(
            number=pad.number if pad.number.strip() else str(index + 1),
            pad_type=PadType.SMD if is_smd else PadType.THROUGH_HOLE,
            shape=map_pad_shape(pad.shape_code),
            position=self.point(pad.center_x, pad.center_y),
            width=to_mm(pad.width),
            height=to_mm(pad.height),
            layers=map_layer(pad.layer_id, is_smd),
            rotation=-pad.rotation,
            drill=drill,
        )

    def text(self, text: FootprintText, footprint_name: str) -> Text:
        position = self.point(text.center_x, text.center_y)
        if text.role == TextTypeCode.PREFIX:
            kind, content, layer = TextKind.VALUE, footprint_name, KicadLayer.FRONT_FABRICATION
        elif text.role == TextTypeCode.NAME:
            kind, content, layer = TextKind.REFERENCE, REFERENCE_PLACEHOLDER, KicadLayer.FRONT_SILKSCREEN
        else:
            kind, content, layer = TextKind.USER, text.text, map_layer(text.layer_id, True)[0]
        return Text(kind=kind, text=content, position=position, rotation=-text.rotation, layer=layer)

    def track_lines(self, track: FootprintTrack) -> List[Line]:
        layer = map_layer(track.layer_id, True)[0]
        if not is_graphic_layer(layer):
            return []
        points = [self.point(x, y) for x, y in track.points]
        return [
            Line(layer=layer, width=to_mm(track.stroke_width), start=start, end=end)
            for start, end in zip(points, points[1:])
        ]

    def circle(self, circle: FootprintCircle) -> Optional[Circle]:
        if circle.layer_id not in CIRCLE_LAYER_IDS:
            return None
        return Circle(
            layer=map_layer(circle.layer_id, True)[0],
            width=to_mm(circle.stroke_width),
            center=self.point(circle.center_x, circle.center_y),
            radius=to_mm(circle.radius),
        )


# --- Centering ---


def footprint_center(footprint: Footprint) -> Point:
    """Mean of the pad centers, else of the text positions, else the origin."""
    if footprint.pads:
        return mean_center(pad.position for pad in footprint.pads)
    return mean_center(text.position for text in footprint.texts)


def _shift_graphic(graphic: GraphicElement, dx: float, dy: float) -> GraphicElement:
    if isinstance(graphic, Line):
        return graphic.model_copy(
            update={"start": graphic.start.shifted(dx, dy), "end": graphic.end.shifted(dx, dy)}
        )
    return graphic.model_copy(update={"center": graphic.center.shifted(dx, dy)})


def center_footprint(footprint: Footprint) -> Footprint:
    """Move every element so that the footprint center lands on the origin.

    Running it on an already centered footprint leaves it unchanged.
    """
    center = footprint_center(footprint)
    if center.x == 0 and center.y == 0:
        return footprint
    dx, dy = -center.x, -center.y
    return footprint.model_copy(
        update={
            "pads": [
                pad.model_copy(update={"position": pad.position.shifted(dx, dy)})
                for pad in footprint.pads
            ],
            "texts": [
                text.model_copy(update={"position": text.position.shifted(dx, dy)})
                for text in footprint.texts
            ],
            "graphics": [_shift_graphic(graphic, dx, dy) for graphic in footprint.graphics],
        }
    )


# --- Graphic filters ---


def is_plausible_graphic(graphic: GraphicElement) -> bool:
    """Reject frame/border artifacts and courtyard circles of a centered footprint."""
    if isinstance(graphic, Line):
        return (
            graphic.start.distance_to_origin() <= GRAPHIC_MAX_DISTANCE_MM
            and graphic.end.distance_to_origin() <= GRAPHIC_MAX_DISTANCE_MM
        )
    return (
        graphic.center.distance_to_origin() <= GRAPHIC_MAX_DISTANCE_MM
        and graphic.radius <= CIRCLE_MAX_RADIUS_MM
    )


def pin1_marker(footprint: Footprint) -> Optional[Circle]:
    """Small silkscreen dot next to pad 1 (or A1), on the side away from the center."""
    pad = footprint.find_pad("1", "A1")
    if pad is None:
        return None
    dx = outward_sign(pad.position.x) * (pad.width / 2 + PIN1_MARKER_CLEARANCE_MM)
    dy = outward_sign(pad.position.y) * (pad.height / 2 + PIN1_MARKER_CLEARANCE_MM)
    return Circle(
        layer=KicadLayer.FRONT_SILKSCREEN,
        width=PIN1_MARKER_STROKE_MM,
        center=pad.position.shifted(dx, dy),
        radius=PIN1_MARKER_RADIUS_MM,
    )


def convert_footprint(decoded: DecodedFootprint, model: Optional[Model3D] = None) -> Footprint:
    """
    Convert a decoded EasyEDA footprint to a centered KiCad footprint.

    Args:
        decoded: Output of ``EasyEDAFootprintParser.parse_easyeda_json``.
        model: Converted 3D model to reference from the footprint, if any.
    """
    name = decoded.info.name
    frame = _FootprintFrame(decoded.bbox_x, decoded.bbox_y)

    graphics: List[GraphicElement] = []
    for track in decoded.tracks:
        graphics.extend(frame.track_lines(track))
    for circle in decoded.circles:
        converted = frame.circle(circle)
        if converted is not None:
            graphics.append(converted)
    if decoded.arcs:
        logger.info(f"Skipping {len(decoded.arcs)} arcs in footprint '{name}'")

    footprint = center_footprint(
        Footprint(
            name=name,
            pads=[frame.pad(index, pad) for index, pad in enumerate(decoded.pads)],
            texts=[frame.text(text, name) for text in decoded.texts],
            graphics=graphics,
            model_3d=model,
        )
    )

    kept = [graphic for graphic in footprint.graphics if is_plausible_graphic(graphic)]
    if len(kept) != len(footprint.graphics):
        logger.debug(
            f"Dropped {len(footprint.graphics) - len(kept)} out-of-range graphics from '{name}'"
        )
    marker = pin1_marker(footprint)
    if marker is not None:
        kept.append(marker)
    else:
        logger.debug(f"No pad 1 in '{name}', pin-1 marker skipped")

    return footprint.model_copy(update={"graphics": kept})
