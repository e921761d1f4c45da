import logging
from typing import List, Optional

from converters.geometry import bbox_center, to_mm
from converters.layer_mapping import map_pin_type
from models.easyeda import DecodedSymbol, SymbolPin, SymbolRectangle
from models.graphics import Point
from models.symbol import Pin, Rectangle, Symbol

logger = logging.getLogger(__name__)


class _SymbolFrame:
    """Source frame of one symbol: bbox origin removed, y axis flipped, mm."""

    def __init__(self, bbox_x: float, bbox_y: float):
        self.bbox_x = bbox_x
        self.bbox_y = bbox_y

    def point(self, x: float, y: float) -> Point:
        return Point(x=to_mm(x - self.bbox_x), y=to_mm(-(y - self.bbox_y)))

    def pin(self, pin: SymbolPin) -> Pin:
        return Pin(
            name=pin.name,
            number=pin.number,
            electrical_type=map_pin_type(pin.type_code),
            length=to_mm(pin.length),
            position=self.point(pin.x, pin.y),
            # EasyEDA pins point from the body outward; KiCad from the tip inward
            rotation=(pin.rotation + 180) % 360,
        )

    def rectangle(self, rect: SymbolRectangle) -> Rectangle:
        start = self.point(rect.x, rect.y)
        return Rectangle(start=start, end=start.shifted(to_mm(rect.width), -to_mm(rect.height)))


def symbol_center(symbol: Symbol) -> Point:
    points: List[Point] = [pin.position for pin in symbol.pins]
    for rect in symbol.rectangles:
        points.extend((rect.start, rect.end))
    return bbox_center(points)


def center_symbol(symbol: Symbol) -> Symbol:
    """Move the symbol so that its bounding box is centered on the origin.

    Running it on an already centered symbol leaves it unchanged.
    """
    center = symbol_center(symbol)
    if center.x == 0 and center.y == 0:
        return symbol
    dx, dy = -center.x, -center.y
    return symbol.model_copy(
        update={
            "pins": [
                pin.model_copy(update={"position": pin.position.shifted(dx, dy)})
                for pin in symbol.pins
            ],
            "rectangles": [
                Rectangle(start=rect.start.shifted(dx, dy), end=rect.end.shifted(dx, dy))
                for rect in symbol.rectangles
            ],
        }
    )


def convert_symbol(decoded: DecodedSymbol, footprint_ref: Optional[str] = None) -> Symbol:
    """
    Convert a decoded EasyEDA symbol to a centered KiCad symbol.

    Args:
        decoded: Output of ``EasyEDASymbolParser.parse_easyeda_symbol``.
        footprint_ref: Value of the Footprint property, e.g. ``"webparts:SOT-23"``.
            Defaults to the package name found in the payload.
    """
    info = decoded.info
    frame = _SymbolFrame(decoded.bbox_x, decoded.bbox_y)

    symbol = Symbol(
        name=info.name,
        reference=info.prefix,
        footprint=footprint_ref or info.package or "",
        datasheet=info.datasheet or "",
        lcsc_part=info.lcsc_id,
        is_extended=info.is_extended,
        pins=[frame.pin(pin) for pin in decoded.pins],
        rectangles=[frame.rectangle(rect) for rect in decoded.rectangles],
    )
    logger.debug(f"Symbol '{symbol.name}' center before centering: {symbol_center(symbol)!r}")
    return center_symbol(symbol)
